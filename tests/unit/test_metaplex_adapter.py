"""
Tests for the Metaplex metadata adapter.
"""

import pytest

from collectibles.adapters import MetaplexAdapter
from collectibles.adapters.metaplex import fallback_file_url
from collectibles.core.types import Chain, MediaType
from collectibles.records import MetaplexFile
from tests.factories import MetaplexMetadataFactory
from tests.test_utils import PLACEHOLDER_URL

AR = "https://arweave.net"
WALLET = "OwnerWallet111"


@pytest.fixture
def adapter(adapter_kwargs) -> MetaplexAdapter:
    return MetaplexAdapter(**adapter_kwargs)


def metadata(image=None, category=None, files=None, animation_url=None, **overrides):
    """Metaplex metadata with only the given media fields."""
    return MetaplexMetadataFactory(
        image=image,
        animation_url=animation_url,
        properties__category=category,
        properties__files=files or [],
        **overrides,
    )


@pytest.mark.unit
class TestMetaplexAdapterEntity:
    """Test identity and ownership."""

    @pytest.mark.asyncio
    async def test_entity_fields(self, adapter, gateway):
        record = MetaplexMetadataFactory(name="Sol #1", symbol="SOLA", image=f"{AR}/1.png")

        collectible = await adapter.resolve(record, wallet=WALLET, chain_metadata={"mint": "Mint111"})

        assert collectible.id == f"SOLA:::Sol #1:::{AR}/1.png"
        assert collectible.token_id == collectible.id
        assert collectible.chain == Chain.SOL
        assert collectible.wallet == WALLET
        assert collectible.is_owned is True
        assert collectible.external_link == "https://example.com"
        assert collectible.solana_chain_metadata == {"mint": "Mint111"}
        assert collectible.to_dict()["solanaChainMetadata"] == {"mint": "Mint111"}

    @pytest.mark.asyncio
    async def test_creator_wallet_is_not_owner(self, adapter):
        collectible = await adapter.resolve(MetaplexMetadataFactory(), wallet="CreatorWallet111")
        assert collectible.is_owned is False

    @pytest.mark.asyncio
    @pytest.mark.error_handling
    async def test_unidentifiable_record_excluded(self, adapter, gateway):
        record = metadata(name=None, symbol=None, files=[f"{AR}/file.png"])
        assert await adapter.resolve(record, wallet=WALLET) is None
        assert gateway.requests == []

    @pytest.mark.asyncio
    @pytest.mark.error_handling
    async def test_malformed_record_excluded(self, adapter):
        assert await adapter.resolve({"name": "x", "properties": {"files": "nope"}}) is None


@pytest.mark.unit
class TestMetaplexAdapterMedia:
    """Test the Metaplex strategy chain."""

    @pytest.mark.asyncio
    async def test_gif_typed_file(self, adapter, gateway):
        record = metadata(
            image=f"{AR}/still.png",
            files=[{"uri": f"{AR}/still.png", "type": "image/png"}, {"uri": f"{AR}/anim", "type": "image/gif"}],
        )

        collectible = await adapter.resolve(record, wallet=WALLET)

        assert collectible.media_type == MediaType.GIF
        assert collectible.gif_url == f"{AR}/anim"
        assert collectible.frame_url is None
        assert gateway.requests == []

    @pytest.mark.asyncio
    async def test_legacy_gif_file_field(self, adapter):
        record = metadata(image=f"{AR}/still.png", files=[{"file": f"{AR}/legacy", "type": "image/gif"}])
        collectible = await adapter.resolve(record, wallet=WALLET)
        assert collectible.gif_url == f"{AR}/legacy"

    @pytest.mark.asyncio
    async def test_gif_image_extension(self, adapter):
        collectible = await adapter.resolve(metadata(image=f"{AR}/anim.gif"), wallet=WALLET)
        assert collectible.media_type == MediaType.GIF
        assert collectible.gif_url == f"{AR}/anim.gif"

    @pytest.mark.asyncio
    async def test_three_d_vr_category(self, adapter, gateway):
        gateway.add(f"{AR}/poster.png", content_type="image/png")
        record = metadata(
            image=f"{AR}/poster.png",
            category="vr",
            files=[{"uri": f"{AR}/model", "type": "model/glb"}],
        )

        collectible = await adapter.resolve(record, wallet=WALLET)

        assert collectible.media_type == MediaType.THREE_D
        assert collectible.three_d_url == f"{AR}/model"
        assert collectible.frame_url == f"{AR}/poster.png"

    @pytest.mark.asyncio
    async def test_three_d_frame_from_image_file(self, adapter, gateway):
        gateway.add(f"{AR}/thumb.png", content_type="image/png")
        record = metadata(
            image=f"{AR}/model.glb",
            animation_url=f"{AR}/scene.glb",
            files=[{"uri": f"{AR}/thumb.png", "type": "image/png"}],
        )

        collectible = await adapter.resolve(record, wallet=WALLET)

        assert collectible.media_type == MediaType.THREE_D
        assert collectible.three_d_url == f"{AR}/scene.glb"
        assert collectible.frame_url == f"{AR}/thumb.png"

    @pytest.mark.asyncio
    async def test_three_d_gif_frame_reclassified(self, adapter, gateway):
        gateway.add(f"{AR}/poster", content_type="image/gif")
        record = metadata(image=f"{AR}/poster", files=[f"{AR}/model.glb"])

        collectible = await adapter.resolve(record, wallet=WALLET)

        assert collectible.media_type == MediaType.GIF
        assert collectible.gif_url == f"{AR}/poster"

    @pytest.mark.asyncio
    async def test_three_d_video_frame_falls_through_to_video(self, adapter, gateway):
        gateway.add(f"{AR}/poster", content_type="video/mp4")
        record = metadata(
            image=f"{AR}/poster",
            files=[
                {"uri": f"{AR}/model", "type": "model/glb"},
                {"uri": f"{AR}/clip.mp4", "type": "video/mp4"},
            ],
        )

        collectible = await adapter.resolve(record, wallet=WALLET)

        assert collectible.media_type == MediaType.VIDEO
        assert collectible.video_url == f"{AR}/clip.mp4"
        assert collectible.three_d_url is None
        assert collectible.frame_url is None

    @pytest.mark.asyncio
    async def test_three_d_without_frame_falls_through(self, adapter, gateway):
        gateway.add(f"{AR}/model.glb", content_type="model/gltf-binary")
        record = metadata(animation_url=f"{AR}/model.glb", symbol="SYM")

        collectible = await adapter.resolve(record, wallet=WALLET)

        # no frame, not a video (3D animation url) and no image: nothing applies
        assert collectible is None

    @pytest.mark.asyncio
    async def test_video_animation_url_with_frame(self, adapter, gateway):
        gateway.add(f"{AR}/poster.png", content_type="image/png")
        record = metadata(image=f"{AR}/poster.png", animation_url=f"{AR}/clip.mp4")

        collectible = await adapter.resolve(record, wallet=WALLET)

        assert collectible.media_type == MediaType.VIDEO
        assert collectible.video_url == f"{AR}/clip.mp4"
        assert collectible.frame_url == f"{AR}/poster.png"

    @pytest.mark.asyncio
    async def test_video_frame_that_is_gif_cleared(self, adapter, gateway):
        gateway.add(f"{AR}/poster", content_type="image/gif")
        record = metadata(image=f"{AR}/poster", files=[{"uri": f"{AR}/clip", "type": "video/mp4"}])

        collectible = await adapter.resolve(record, wallet=WALLET)

        assert collectible.media_type == MediaType.VIDEO
        assert collectible.video_url == f"{AR}/clip"
        assert collectible.frame_url is None

    @pytest.mark.asyncio
    async def test_video_streaming_host(self, adapter, gateway):
        record = metadata(symbol="SYM", files=["https://watch.videodelivery.net/abc123"])

        collectible = await adapter.resolve(record, wallet=WALLET)

        assert collectible.media_type == MediaType.VIDEO
        assert collectible.video_url == "https://watch.videodelivery.net/abc123"
        assert collectible.frame_url is None
        assert gateway.requests == []

    @pytest.mark.asyncio
    async def test_video_category_uses_second_file(self, adapter):
        record = metadata(symbol="SYM", category="video", files=[f"{AR}/thumb", f"{AR}/movie"])
        collectible = await adapter.resolve(record, wallet=WALLET)
        assert collectible.video_url == f"{AR}/movie"

    @pytest.mark.asyncio
    async def test_image_field(self, adapter, gateway):
        collectible = await adapter.resolve(metadata(image=f"{AR}/art.png"), wallet=WALLET)

        assert collectible.media_type == MediaType.IMAGE
        assert collectible.image_url == f"{AR}/art.png"
        assert collectible.frame_url == f"{AR}/art.png"
        assert gateway.requests == []

    @pytest.mark.asyncio
    async def test_image_typed_file(self, adapter):
        record = metadata(symbol="SYM", files=[f"{AR}/a", {"uri": f"{AR}/b", "type": "image/jpeg"}])
        collectible = await adapter.resolve(record, wallet=WALLET)
        assert collectible.image_url == f"{AR}/b"

    @pytest.mark.asyncio
    async def test_image_category_single_file(self, adapter):
        record = metadata(symbol="SYM", category="image", files=["ipfs://QmOnly"])
        collectible = await adapter.resolve(record, wallet=WALLET)
        assert collectible.image_url == "https://ipfs.io/ipfs/QmOnly"
        assert collectible.frame_url == "https://ipfs.io/ipfs/QmOnly"

    @pytest.mark.asyncio
    async def test_computed_media_probes_first_file(self, adapter, gateway):
        gateway.add("https://ipfs.io/ipfs/QmFirst", content_type="video/mp4")
        record = metadata(symbol="SYM", files=["ipfs://QmFirst", "ipfs://QmSecond"])

        collectible = await adapter.resolve(record, wallet=WALLET)

        assert collectible.media_type == MediaType.VIDEO
        assert collectible.video_url == "https://ipfs.io/ipfs/QmFirst"
        assert gateway.requested("HEAD") == ["https://ipfs.io/ipfs/QmFirst"]

    @pytest.mark.asyncio
    async def test_computed_media_image(self, adapter, gateway):
        gateway.add(f"{AR}/first", content_type="image/png")
        collectible = await adapter.resolve(metadata(symbol="SYM", files=[{"uri": f"{AR}/first"}]), wallet=WALLET)
        assert collectible.media_type == MediaType.IMAGE
        assert collectible.frame_url == f"{AR}/first"

    @pytest.mark.asyncio
    async def test_computed_media_non_media_excluded(self, adapter, gateway):
        gateway.add(f"{AR}/first", content_type="application/json")
        assert await adapter.resolve(metadata(symbol="SYM", files=[f"{AR}/first"]), wallet=WALLET) is None

    @pytest.mark.asyncio
    async def test_no_media_excluded(self, adapter, gateway):
        assert await adapter.resolve(metadata(symbol="SYM"), wallet=WALLET) is None
        assert gateway.requests == []

    @pytest.mark.asyncio
    @pytest.mark.error_handling
    async def test_computed_media_probe_failure_uses_placeholder(self, adapter):
        collectible = await adapter.resolve(metadata(symbol="SYM", files=[f"{AR}/gone"]), wallet=WALLET)
        assert collectible.image_url == PLACEHOLDER_URL
        assert collectible.frame_url == PLACEHOLDER_URL


@pytest.mark.unit
class TestFallbackFileUrl:
    """Test the untagged media file guess."""

    def test_single_file(self):
        assert fallback_file_url(["a"]) == "a"

    def test_second_of_many(self):
        assert fallback_file_url([MetaplexFile(uri="a"), MetaplexFile(uri="b"), "c"]) == "b"

    def test_no_files(self):
        assert fallback_file_url([]) is None


@pytest.mark.unit
class TestMetaplexNullFields:
    """JSON nulls in optional containers read as empty."""

    @pytest.mark.asyncio
    async def test_null_properties(self, adapter):
        record = {"name": "A", "symbol": "S", "image": f"{AR}/a.png", "properties": None}

        collectible = await adapter.resolve(record, wallet=WALLET)

        assert collectible.media_type == MediaType.IMAGE
        assert collectible.image_url == f"{AR}/a.png"

    @pytest.mark.asyncio
    async def test_null_files_and_creators(self, adapter):
        record = metadata(image=f"{AR}/a.png", properties__creators=None)
        record["properties"]["files"] = None

        collectible = await adapter.resolve(record, wallet=WALLET)

        assert collectible.media_type == MediaType.IMAGE
        assert collectible.is_owned is True

    @pytest.mark.asyncio
    async def test_null_file_entries_skipped(self, adapter):
        record = metadata(files=[None, {"uri": f"{AR}/anim", "type": "image/gif"}])

        collectible = await adapter.resolve(record, wallet=WALLET)

        assert collectible.media_type == MediaType.GIF
        assert collectible.gif_url == f"{AR}/anim"
