"""Core data structures and classification constants."""

from .extensions import DEFAULT_MEDIA_EXTENSIONS, MediaExtensions
from .types import (
    Chain,
    Collectible,
    CollectibleEntity,
    HeliusCollection,
    MediaDescriptor,
    MediaType,
)

__all__ = [
    "DEFAULT_MEDIA_EXTENSIONS",
    "MediaExtensions",
    "Chain",
    "Collectible",
    "CollectibleEntity",
    "HeliusCollection",
    "MediaDescriptor",
    "MediaType",
]
