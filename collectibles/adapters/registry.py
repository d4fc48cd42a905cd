"""
Adapter registry keyed by source kind.
"""
import logging
from typing import Dict, List, Optional

import httpx

from collectibles.assembler import CollectibleAssembler
from collectibles.config import AppConfig, settings
from collectibles.exceptions import UnsupportedSourceError
from collectibles.media.prober import ContentProber
from collectibles.media.protocol import ProtocolResolver
from collectibles.records import SourceKind

from .base import SourceAdapter
from .ethereum import EthereumAdapter
from .helius import HeliusAdapter
from .metaplex import MetaplexAdapter
from .star_atlas import StarAtlasAdapter

logger = logging.getLogger(__name__)


class AdapterRegistry:
    """
    Registry mapping each SourceKind to the adapter that resolves it.
    """

    def __init__(self):
        self._adapters: Dict[SourceKind, SourceAdapter] = {}

    def register_adapter(self, adapter: SourceAdapter) -> None:
        """
        Register an adapter for its source kind.

        Args:
            adapter: Adapter instance; replaces any adapter already registered for the kind
        """
        kind = adapter.source_kind
        if kind in self._adapters:
            logger.warning(f"Adapter for '{kind.value}' is already registered. Overwriting.")

        self._adapters[kind] = adapter
        logger.debug(f"Adapter '{type(adapter).__name__}' registered for '{kind.value}'.")

    def get_adapter(self, kind: SourceKind) -> SourceAdapter:
        """
        Retrieve the adapter for a source kind.

        Args:
            kind: Source kind, or its string value

        Returns:
            The registered adapter

        Raises:
            UnsupportedSourceError: If the kind is unknown or has no adapter
        """
        try:
            kind = SourceKind(kind)
        except ValueError as e:
            raise UnsupportedSourceError(f"Unknown source kind: {kind!r}") from e

        adapter = self._adapters.get(kind)
        if adapter is None:
            raise UnsupportedSourceError(f"No adapter registered for '{kind.value}'")
        return adapter

    def get_source_kinds(self) -> List[SourceKind]:
        return list(self._adapters.keys())


def create_default_registry(
    config: Optional[AppConfig] = None,
    client: Optional[httpx.AsyncClient] = None,
) -> AdapterRegistry:
    """
    Build a registry with all four adapters sharing one prober, resolver and assembler.

    Args:
        config: Configuration to build from; defaults to the global settings
        client: Optional shared HTTP client for probes and metadata fetches

    Returns:
        Populated AdapterRegistry
    """
    config = config or settings
    prober = ContentProber(
        client=client,
        timeout_ms=config.probe.timeout_ms,
        range_header=config.probe.range_header,
    )
    resolver = ProtocolResolver(
        ipfs_gateway_url=config.gateway.ipfs_url,
        arweave_gateway_url=config.gateway.arweave_url,
    )
    assembler = CollectibleAssembler(
        protocol_resolver=resolver,
        placeholder_url=config.media.placeholder_image_url,
    )
    shared = dict(prober=prober, protocol_resolver=resolver, assembler=assembler)

    registry = AdapterRegistry()
    registry.register_adapter(EthereumAdapter(**shared))
    registry.register_adapter(MetaplexAdapter(**shared))
    registry.register_adapter(
        HeliusAdapter(fetch_json_uri=config.helius.fetch_json_uri, client=client, **shared)
    )
    registry.register_adapter(StarAtlasAdapter(**shared))
    return registry
