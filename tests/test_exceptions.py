"""
Test suite for custom exception classes.
"""

import pytest

from collectibles.exceptions import (
    BlocklistConfigError,
    CollectiblesBaseException,
    MetadataFetchError,
    ProbeError,
    RecordIdentityError,
    UnsupportedSourceError,
)


class TestCollectiblesBaseException:
    """Test the base exception class."""

    def test_inheritance(self):
        exc = CollectiblesBaseException("test message")
        assert isinstance(exc, Exception)
        assert str(exc) == "test message"

    @pytest.mark.parametrize("exc_class", [
        RecordIdentityError,
        ProbeError,
        MetadataFetchError,
        BlocklistConfigError,
        UnsupportedSourceError,
    ])
    def test_hierarchy(self, exc_class):
        assert issubclass(exc_class, CollectiblesBaseException)


class TestRecordIdentityError:
    """Test RecordIdentityError handling."""

    def test_basic_creation(self):
        exc = RecordIdentityError("ethereum", "identifier")

        assert exc.source_kind == "ethereum"
        assert exc.missing_field == "identifier"
        assert "ethereum" in str(exc)
        assert "identifier" in str(exc)

    def test_custom_message(self):
        exc = RecordIdentityError("metaplex", "symbol/name/image", "Cannot build id")
        assert str(exc).startswith("Cannot build id")
        assert "symbol/name/image" in str(exc)


class TestProbeError:
    """Test ProbeError handling."""

    def test_basic_creation(self):
        original = TimeoutError("slow")
        exc = ProbeError("https://cdn.example.com/a", "timeout", status_code=None, original_error=original)

        assert exc.url == "https://cdn.example.com/a"
        assert exc.reason == "timeout"
        assert exc.status_code is None
        assert exc.original_error is original
        assert "https://cdn.example.com/a" in str(exc)

    def test_status_code(self):
        exc = ProbeError("https://cdn.example.com/a", "HTTP 404", status_code=404)
        assert exc.status_code == 404
        assert "HTTP 404" in str(exc)


class TestMetadataFetchError:
    """Test MetadataFetchError handling."""

    def test_basic_creation(self):
        original = ValueError("bad json")
        exc = MetadataFetchError("https://arweave.net/meta.json", original)

        assert exc.uri == "https://arweave.net/meta.json"
        assert exc.original_error is original
        assert "bad json" in str(exc)
