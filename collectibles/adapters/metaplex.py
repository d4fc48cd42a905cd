"""
Metaplex metadata adapter.

Media is discovered from properties.files, properties.category, image and
animation_url. The same chain is reused by the Helius adapter once it has
rebuilt Metaplex metadata from an indexed asset.
"""

import logging
from typing import Any, List, Optional, Union

from collectibles.core.extensions import ends_with_any
from collectibles.core.types import Chain, CollectibleEntity, MediaDescriptor, MediaType
from collectibles.exceptions import RecordIdentityError
from collectibles.media.prober import ProbeMode
from collectibles.media.strategy import StrategyChain
from collectibles.records import MetaplexFile, MetaplexRecord, SourceKind, file_url, join_identifier

from .base import SourceAdapter

logger = logging.getLogger(__name__)

# https://github.com/metaplex-foundation/metaplex/blob/397ceff70b3524aa0543540584c7200c79b198a0/js/packages/web/src/components/ArtContent/index.tsx#L107
VIDEO_STREAMING_HOST = "https://watch.videodelivery.net/"


def _typed_file(files: List[Union[str, MetaplexFile]], predicate) -> Optional[MetaplexFile]:
    for file in files:
        if isinstance(file, MetaplexFile) and file.type and predicate(file.type):
            return file
    return None


def _url_file(files: List[Union[str, MetaplexFile]], predicate) -> Optional[str]:
    for file in files:
        if isinstance(file, str) and predicate(file):
            return file
    return None


def fallback_file_url(files: List[Union[str, MetaplexFile]]) -> Optional[str]:
    """
    Guess the media file when nothing is tagged.

    With a single file, that file is the media. Otherwise the first file is
    assumed to be a thumbnail and the second one is the media.
    """
    if not files:
        return None
    if len(files) == 1:
        return file_url(files[0])
    return file_url(files[1])


class MetaplexAdapter(SourceAdapter):
    """Resolves Metaplex off-chain metadata."""

    source_kind = SourceKind.METAPLEX

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.chain = StrategyChain("metaplex", [
            ("gif", self._gif),
            ("three_d_with_frame", self._three_d_with_frame),
            ("video", self._video),
            ("image", self._image),
            ("computed_media", self._computed_media),
        ])

    def build_entity(self, record: MetaplexRecord, wallet: str, chain_metadata: Optional[Any]) -> CollectibleEntity:
        identifier = join_identifier(record.symbol, record.name, record.image)
        if not identifier:
            raise RecordIdentityError(self.source_kind.value, "symbol/name/image")

        is_creator = any(creator.address == wallet for creator in record.properties.creators)
        return CollectibleEntity(
            id=identifier,
            token_id=identifier,
            chain=Chain.SOL,
            wallet=wallet,
            name=record.name,
            description=record.description,
            is_owned=not is_creator,
            external_link=record.external_url,
            solana_chain_metadata=chain_metadata,
        )

    async def resolve_media(self, record: MetaplexRecord) -> Optional[MediaDescriptor]:
        return await self.resolve_metaplex_media(record)

    async def resolve_metaplex_media(self, record: MetaplexRecord) -> Optional[MediaDescriptor]:
        """Run the Metaplex strategy chain; None means the record has no usable media."""
        return await self.chain.run(record)

    def _is_three_d(self, url: Optional[str]) -> bool:
        return ends_with_any(url, self.extensions.three_d)

    async def _gif(self, record: MetaplexRecord) -> Optional[MediaDescriptor]:
        files = record.files
        gif_file = _typed_file(files, lambda mime: mime == "image/gif")
        if gif_file and gif_file.url:
            # frame url for the gif is computed later by the display layer
            return MediaDescriptor(MediaType.GIF, gif_file.url)

        if self.extensions.is_gif(record.image):
            return MediaDescriptor(MediaType.GIF, record.image)

        gif_url = _url_file(files, self.extensions.is_gif)
        if gif_url:
            return MediaDescriptor(MediaType.GIF, gif_url)
        return None

    async def _three_d_with_frame(self, record: MetaplexRecord) -> Optional[MediaDescriptor]:
        """
        A 3D object is a record whose category is vr, whose animation url or a
        string file ends in glb, or which has a glb-typed file. The poster is
        the image field, or an image-typed file when the image is itself 3D.
        """
        files = record.files
        object_file = _typed_file(files, lambda mime: "glb" in mime)
        object_url = _url_file(files, self._is_three_d)
        is_three_d = (
            record.properties.category == "vr"
            or self._is_three_d(record.animation_url)
            or object_file is not None
            or object_url is not None
        )
        if not is_three_d:
            return None

        if record.image and not self._is_three_d(record.image):
            frame_url = record.image
        else:
            image_file = _typed_file(files, lambda mime: "image" in mime)
            frame_url = image_file.url if image_file else None
        if not frame_url:
            return None

        if self._is_three_d(record.animation_url):
            three_d_url = record.animation_url
        elif object_file and object_file.url:
            three_d_url = object_file.url
        elif object_url:
            three_d_url = object_url
        else:
            return None

        result = await self.probe_required(frame_url)
        if result.is_gif:
            return MediaDescriptor(MediaType.GIF, frame_url)
        if result.is_video:
            return None
        return MediaDescriptor(MediaType.THREE_D, three_d_url, frame_url=frame_url)

    async def _video(self, record: MetaplexRecord) -> Optional[MediaDescriptor]:
        """
        A video is a record whose category is video, whose animation url is
        not 3D, which has a video-typed file or which links a streaming host.
        The poster, if any, is the image field.
        """
        files = record.files
        animation_is_video = bool(record.animation_url) and not self._is_three_d(record.animation_url)
        video_file = _typed_file(files, lambda mime: "video" in mime and not mime.endswith("glb"))
        video_url = _url_file(files, lambda url: url.startswith(VIDEO_STREAMING_HOST))
        is_video = (
            record.properties.category == "video"
            or animation_is_video
            or video_file is not None
            or video_url is not None
        )
        if not is_video:
            return None

        if animation_is_video:
            url = record.animation_url
        elif video_file and video_file.url:
            url = video_file.url
        elif video_url:
            url = video_url
        else:
            url = fallback_file_url(files)
        if not url:
            return None

        frame_url = await self.validated_frame(record.image)
        return MediaDescriptor(MediaType.VIDEO, url, frame_url=frame_url)

    async def _image(self, record: MetaplexRecord) -> Optional[MediaDescriptor]:
        files = record.files
        image_file = _typed_file(files, lambda mime: "image" in mime)
        if not (record.properties.category == "image" or record.image or image_file):
            return None

        if record.image:
            url = record.image
        elif image_file and image_file.url:
            url = image_file.url
        else:
            url = fallback_file_url(files)
        if not url:
            return None
        return MediaDescriptor(MediaType.IMAGE, url, frame_url=url)

    async def _computed_media(self, record: MetaplexRecord) -> Optional[MediaDescriptor]:
        """
        Nothing declares the media kind, so sniff the content type of the
        first file. Records without files, or whose first file is not media,
        are excluded.
        """
        if not record.files:
            return None
        url = file_url(record.files[0])
        if not url:
            return None

        result = await self.probe(url, ProbeMode.HEAD)
        if not result.ok:
            logger.warning(f"MetaplexAdapter: Could not fetch content type of {url}, using placeholder")
            return self.placeholder()

        media_type = result.media_type()
        if media_type in (MediaType.ANIMATED_WEBP, MediaType.GIF, MediaType.VIDEO):
            return MediaDescriptor(media_type, url)
        if result.is_image:
            return MediaDescriptor(MediaType.IMAGE, url, frame_url=url)

        logger.info(f"MetaplexAdapter: First file {url} is not media ({result.content_type})")
        return None
