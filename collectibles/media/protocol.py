"""
Protocol Resolver

Rewrites distributed-storage URIs (ipfs://, ar://) into URLs fetchable through
a public HTTP gateway. Pure string manipulation, no I/O.
"""

from typing import Optional

from collectibles.config import settings

IPFS_PROTOCOL_PREFIX = "ipfs://"
ARWEAVE_PROTOCOL_PREFIX = "ar://"
_REDUNDANT_IPFS_SEGMENT = "ipfs/"


class ProtocolResolver:
    """Gateway rewriting for IPFS and Arweave URIs."""

    def __init__(self, ipfs_gateway_url: Optional[str] = None, arweave_gateway_url: Optional[str] = None):
        """
        Initialize the resolver.

        Args:
            ipfs_gateway_url: Gateway base for ipfs:// URIs, e.g. https://ipfs.io/ipfs
            arweave_gateway_url: Gateway base for ar:// URIs, e.g. https://arweave.net
        """
        self.ipfs_gateway_url = (ipfs_gateway_url or settings.gateway.ipfs_url).rstrip("/")
        self.arweave_gateway_url = (arweave_gateway_url or settings.gateway.arweave_url).rstrip("/")

    @staticmethod
    def is_ipfs_url(url: Optional[str]) -> bool:
        return bool(url) and url.startswith(IPFS_PROTOCOL_PREFIX)

    @staticmethod
    def is_arweave_url(url: Optional[str]) -> bool:
        return bool(url) and url.startswith(ARWEAVE_PROTOCOL_PREFIX)

    def is_distributed_storage_url(self, url: Optional[str]) -> bool:
        """Check if a URL uses a scheme this resolver rewrites."""
        return self.is_ipfs_url(url) or self.is_arweave_url(url)

    def resolve(self, url: Optional[str]) -> Optional[str]:
        """
        Rewrite a distributed-storage URI into a gateway URL.

        Args:
            url: Any URL; None passes through

        Returns:
            The gateway URL, or the input unchanged when it uses neither scheme
        """
        if self.is_ipfs_url(url):
            path = url[len(IPFS_PROTOCOL_PREFIX):]
            if path.startswith(_REDUNDANT_IPFS_SEGMENT):
                path = path[len(_REDUNDANT_IPFS_SEGMENT):]
            return f"{self.ipfs_gateway_url}/{path}"
        if self.is_arweave_url(url):
            return f"{self.arweave_gateway_url}/{url[len(ARWEAVE_PROTOCOL_PREFIX):]}"
        return url
