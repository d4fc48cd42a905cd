"""
Star Atlas adapter.

Star Atlas assets are either 3D objects with an image poster or plain images;
no gif or video assets are modeled. Nothing here touches the network.
"""

import logging
from typing import Any, Optional

from collectibles.core.types import Chain, CollectibleEntity, MediaDescriptor, MediaType
from collectibles.exceptions import RecordIdentityError
from collectibles.media.strategy import StrategyChain
from collectibles.records import SourceKind, StarAtlasRecord, join_identifier

from .base import SourceAdapter

logger = logging.getLogger(__name__)


class StarAtlasAdapter(SourceAdapter):
    """Resolves Star Atlas galaxy assets."""

    source_kind = SourceKind.STAR_ATLAS

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.chain = StrategyChain("star_atlas", [
            ("three_d_with_frame", self._three_d_with_frame),
            ("image", self._image),
        ])

    def build_entity(self, record: StarAtlasRecord, wallet: str, chain_metadata: Optional[Any]) -> CollectibleEntity:
        if not record.id:
            raise RecordIdentityError(self.source_kind.value, "_id")

        return CollectibleEntity(
            id=join_identifier(record.id, record.symbol, record.name, record.image),
            token_id=record.id,
            chain=Chain.SOL,
            wallet=wallet,
            name=record.name,
            description=record.description,
            is_owned=True,
            date_created=record.created_at,
            solana_chain_metadata=chain_metadata,
        )

    async def resolve_media(self, record: StarAtlasRecord) -> MediaDescriptor:
        descriptor = await self.chain.run(record)
        if descriptor is None:
            logger.warning(f"StarAtlasAdapter: No image on {record.id}, using placeholder")
            return self.placeholder()
        return descriptor

    def _is_three_d(self, url: Optional[str]) -> bool:
        return self.extensions.is_three_d(url)

    async def _three_d_with_frame(self, record: StarAtlasRecord) -> Optional[MediaDescriptor]:
        candidates = [url for url in (record.image, record.media.thumbnail_url) if url]
        three_d_url = next((url for url in candidates if self._is_three_d(url)), None)
        frame_url = next((url for url in candidates if not self._is_three_d(url)), None)
        if not three_d_url or not frame_url:
            return None
        return MediaDescriptor(MediaType.THREE_D, three_d_url, frame_url=frame_url)

    async def _image(self, record: StarAtlasRecord) -> Optional[MediaDescriptor]:
        if not record.image:
            return None
        return MediaDescriptor(
            MediaType.IMAGE,
            record.image,
            frame_url=record.media.thumbnail_url or record.image,
        )
