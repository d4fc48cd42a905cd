"""
Ethereum marketplace adapter.

A lot of the work here is deciding whether an asset is a gif, a 3D object, a
video or an image, because the marketplace image fields are not guaranteed to
hold images:

- gif: the gif url is the media, the display layer computes its frame later
- 3D: the 3D url is the media and a plain image field is the frame, unless
  probing shows that image is really a gif, in which case it is a gif
- video: the video url is the media; a plain image field is the frame only if
  probing confirms it is neither a video nor a gif, otherwise the display
  layer pauses the video on its first frame
- ipfs:// or ar:// media: probe the gateway url and classify by content type
- anything else: ranged probe of the first image field and classify likewise
"""

import logging
from typing import Any, List, Optional

from collectibles.core.extensions import first_matching, first_present
from collectibles.core.types import Chain, CollectibleEntity, MediaDescriptor, MediaType
from collectibles.exceptions import RecordIdentityError
from collectibles.media.prober import ProbeMode
from collectibles.media.strategy import StrategyChain
from collectibles.records import OpenSeaAsset, SourceKind

from .base import SourceAdapter

logger = logging.getLogger(__name__)


def get_asset_identifier(asset: OpenSeaAsset) -> str:
    return f"{asset.identifier}:::{asset.contract or ''}"


class EthereumAdapter(SourceAdapter):
    """Resolves marketplace assets. Always yields a collectible for an identifiable asset."""

    source_kind = SourceKind.ETHEREUM

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.chain = StrategyChain("ethereum", [
            ("gif", self._gif),
            ("three_d_with_frame", self._three_d_with_frame),
            ("video", self._video),
            ("ipfs_probe", self._ipfs_probe),
            ("arweave_probe", self._arweave_probe),
            ("image_probe", self._image_probe),
        ])

    def build_entity(self, asset: OpenSeaAsset, wallet: str, chain_metadata: Optional[Any]) -> CollectibleEntity:
        if not asset.identifier:
            raise RecordIdentityError(self.source_kind.value, "identifier")

        contract_name = asset.asset_contract.name if asset.asset_contract else None
        collection_metadata = asset.collection_metadata
        return CollectibleEntity(
            id=get_asset_identifier(asset),
            token_id=asset.identifier,
            chain=Chain.ETH,
            wallet=asset.wallet or wallet,
            name=asset.name or contract_name or "",
            description=asset.description,
            is_owned=True,
            external_link=asset.external_url,
            perma_link=asset.opensea_url,
            animation_url=asset.animation_url,
            asset_contract_address=asset.contract,
            standard=asset.token_standard.upper() if asset.token_standard else None,
            collection_slug=asset.collection_slug,
            collection_name=collection_metadata.name if collection_metadata else None,
            collection_image_url=collection_metadata.image_url if collection_metadata else None,
        )

    async def resolve_media(self, asset: OpenSeaAsset) -> MediaDescriptor:
        descriptor = await self.chain.run(asset)
        if descriptor is None:
            logger.warning(f"EthereumAdapter: No media fields on {get_asset_identifier(asset)}, using placeholder")
            return self.placeholder()
        return descriptor

    def _all_urls(self, asset: OpenSeaAsset) -> List[Optional[str]]:
        return asset.animation_urls + asset.image_urls

    def _plain_image(self, asset: OpenSeaAsset) -> Optional[str]:
        return first_matching(asset.image_urls, self.extensions.is_plain_image)

    async def _gif(self, asset: OpenSeaAsset) -> Optional[MediaDescriptor]:
        gif_url = first_matching(asset.image_urls, self.extensions.is_gif)
        if not gif_url:
            return None
        # frame url for the gif is computed later by the display layer
        return MediaDescriptor(MediaType.GIF, self.protocol_resolver.resolve(gif_url))

    async def _three_d_with_frame(self, asset: OpenSeaAsset) -> Optional[MediaDescriptor]:
        three_d_url = first_matching(self._all_urls(asset), self.extensions.is_three_d)
        frame_url = self._plain_image(asset)
        if not three_d_url or not frame_url:
            return None

        # Image fields may not end in a known extension; not ending in a
        # non-image extension does not make them images. They may be gifs.
        result = await self.probe_required(frame_url)
        if result.is_gif:
            return MediaDescriptor(MediaType.GIF, frame_url)
        if result.is_video:
            return None
        return MediaDescriptor(MediaType.THREE_D, three_d_url, frame_url=frame_url)

    async def _video(self, asset: OpenSeaAsset) -> Optional[MediaDescriptor]:
        video_url = first_matching(self._all_urls(asset), self.extensions.is_video)
        if not video_url:
            return None
        frame_url = await self.validated_frame(self._plain_image(asset))
        return MediaDescriptor(MediaType.VIDEO, video_url, frame_url=frame_url)

    async def _ipfs_probe(self, asset: OpenSeaAsset) -> Optional[MediaDescriptor]:
        return await self._protocol_probe(asset, self.protocol_resolver.is_ipfs_url)

    async def _arweave_probe(self, asset: OpenSeaAsset) -> Optional[MediaDescriptor]:
        return await self._protocol_probe(asset, self.protocol_resolver.is_arweave_url)

    async def _protocol_probe(self, asset: OpenSeaAsset, matches) -> Optional[MediaDescriptor]:
        storage_url = first_matching(asset.image_urls + asset.animation_urls, matches)
        if not storage_url:
            return None

        gateway_url = self.protocol_resolver.resolve(storage_url)
        result = await self.prober.probe(gateway_url, ProbeMode.HEAD)
        if not result.ok:
            logger.warning(
                f"EthereumAdapter: Could not fetch url metadata at {storage_url} for asset contract "
                f"address {asset.contract} and asset token id {asset.identifier}"
            )
        image_url = self.protocol_resolver.resolve(first_present(asset.image_urls))
        return self.descriptor_from_probe(result, gateway_url, image_url=image_url)

    async def _image_probe(self, asset: OpenSeaAsset) -> Optional[MediaDescriptor]:
        url = first_present(asset.image_urls)
        if not url:
            return None
        result = await self.prober.probe(url, ProbeMode.RANGE)
        return self.descriptor_from_probe(result, url, detect_audio=False)
