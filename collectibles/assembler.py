"""
Collectible Assembler

Merges a resolved MediaDescriptor with an adapter's entity fields into the
canonical Collectible record.
"""

import logging
from dataclasses import fields
from typing import Optional

from collectibles.config import settings
from collectibles.core.types import Collectible, CollectibleEntity, MediaDescriptor, MediaType
from collectibles.media.protocol import ProtocolResolver

logger = logging.getLogger(__name__)

_MEDIA_URL_FIELDS = {
    MediaType.IMAGE: "image_url",
    MediaType.GIF: "gif_url",
    MediaType.ANIMATED_WEBP: "gif_url",
    MediaType.VIDEO: "video_url",
    MediaType.THREE_D: "three_d_url",
}


class CollectibleAssembler:
    """Builds canonical records; never mutates its inputs."""

    def __init__(
        self,
        protocol_resolver: Optional[ProtocolResolver] = None,
        placeholder_url: Optional[str] = None,
    ):
        self.protocol_resolver = protocol_resolver or ProtocolResolver()
        self.placeholder_url = placeholder_url or settings.media.placeholder_image_url

    def placeholder(self) -> MediaDescriptor:
        """Descriptor used whenever no real media can be resolved."""
        return MediaDescriptor(
            media_type=MediaType.IMAGE,
            primary_url=self.placeholder_url,
            frame_url=self.placeholder_url,
        )

    def assemble(self, descriptor: MediaDescriptor, entity: CollectibleEntity) -> Collectible:
        """
        Merge media and entity fields.

        Args:
            descriptor: Resolved media
            entity: Identity, display, ownership and chain-specific fields

        Returns:
            A new Collectible with exactly one media URL field populated
        """
        resolve = self.protocol_resolver.resolve
        entity_values = {f.name: getattr(entity, f.name) for f in fields(CollectibleEntity)}

        has_audio = descriptor.audio_url is not None
        if has_audio:
            entity_values["animation_url"] = descriptor.audio_url
        entity_values["animation_url"] = resolve(entity_values["animation_url"])

        collectible = Collectible(
            media_type=descriptor.media_type,
            frame_url=resolve(descriptor.frame_url),
            has_audio=has_audio,
            **entity_values,
        )
        setattr(collectible, _MEDIA_URL_FIELDS[descriptor.media_type], resolve(descriptor.primary_url))
        return collectible
