"""
Custom Exception Classes

This module defines custom exceptions for the collectibles resolver. None of
them escape the public resolver functions; they mark failure points that the
adapter and probe boundaries convert into placeholders, exclusions or logs.
"""

from typing import Optional


class CollectiblesBaseException(Exception):
    """Base exception for the collectibles package."""

    pass


class RecordIdentityError(CollectiblesBaseException):
    """Raised when a raw record lacks the fields needed to identify it."""

    def __init__(self, source_kind: str, missing_field: str, message: Optional[str] = None):
        self.source_kind = source_kind
        self.missing_field = missing_field
        details = f"{source_kind} record is missing required identity field '{missing_field}'"
        if message:
            super().__init__(f"{message} - Details: {details}")
        else:
            super().__init__(details)


class ProbeError(CollectiblesBaseException):
    """Raised for a failed content probe (transport error, timeout or bad status)."""

    def __init__(
        self,
        url: str,
        reason: str,
        status_code: Optional[int] = None,
        original_error: Optional[Exception] = None,
    ):
        self.url = url
        self.reason = reason
        self.status_code = status_code
        self.original_error = original_error
        super().__init__(f"Probe of {url} failed: {reason}")


class MetadataFetchError(CollectiblesBaseException):
    """Raised when an off-chain JSON metadata document cannot be fetched or parsed."""

    def __init__(self, uri: str, original_error: Optional[Exception] = None):
        self.uri = uri
        self.original_error = original_error
        super().__init__(f"Could not fetch metadata at {uri}: {original_error}")


class BlocklistConfigError(CollectiblesBaseException):
    """Raised for a blocklist configuration document of the wrong shape."""

    pass


class UnsupportedSourceError(CollectiblesBaseException):
    """Raised when no adapter is registered for a source kind."""

    pass
