"""Source adapters: one per raw NFT schema."""

from .base import SourceAdapter
from .ethereum import EthereumAdapter
from .helius import HeliusAdapter
from .metaplex import MetaplexAdapter
from .registry import AdapterRegistry, create_default_registry
from .star_atlas import StarAtlasAdapter

__all__ = [
    "AdapterRegistry",
    "EthereumAdapter",
    "HeliusAdapter",
    "MetaplexAdapter",
    "SourceAdapter",
    "StarAtlasAdapter",
    "create_default_registry",
]
