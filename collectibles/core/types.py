#!/usr/bin/env python3
"""
Collectible Data Structures

Defines the resolved media descriptor and the canonical collectible record
handed to the display layer.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class MediaType(str, Enum):
    """Kinds of media a collectible can be displayed as."""
    IMAGE = "IMAGE"
    VIDEO = "VIDEO"
    GIF = "GIF"
    THREE_D = "THREE_D"
    ANIMATED_WEBP = "ANIMATED_WEBP"


class Chain(str, Enum):
    """Chains a collectible can come from."""
    ETH = "eth"
    SOL = "sol"


@dataclass(frozen=True)
class MediaDescriptor:
    """
    Resolved media for one NFT.

    Attributes:
        media_type: The kind of media
        primary_url: URL of the media itself
        frame_url: Static poster image, never a video or animated asset
        audio_url: Audio asset detected behind a distributed-storage URL
    """
    media_type: MediaType
    primary_url: str
    frame_url: Optional[str] = None
    audio_url: Optional[str] = None


@dataclass(frozen=True)
class HeliusCollection:
    """Collection grouping surfaced from a Helius indexed asset."""
    address: str
    name: Optional[str] = None
    image_url: Optional[str] = None
    external_link: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "address": self.address,
            "name": self.name,
            "imageUrl": self.image_url,
            "externalLink": self.external_link,
        }


@dataclass
class CollectibleEntity:
    """
    Entity-level fields of a collectible, everything except its media.

    Adapters build one of these from their raw record; the assembler merges it
    with a MediaDescriptor.
    """
    id: str
    token_id: str
    chain: Chain
    wallet: str = ""
    name: Optional[str] = None
    description: Optional[str] = None
    is_owned: bool = True
    date_created: Optional[str] = None
    date_last_transferred: Optional[str] = None
    external_link: Optional[str] = None
    perma_link: Optional[str] = None
    animation_url: Optional[str] = None

    # ethereum nfts
    asset_contract_address: Optional[str] = None
    standard: Optional[str] = None
    collection_slug: Optional[str] = None
    collection_name: Optional[str] = None
    collection_image_url: Optional[str] = None

    # solana nfts
    solana_chain_metadata: Optional[Any] = None
    helius_collection: Optional[HeliusCollection] = None


@dataclass
class Collectible:
    """
    Canonical collectible record.

    Exactly one of image_url, video_url, gif_url and three_d_url is populated,
    the one matching media_type (animated webp uses gif_url).
    """
    id: str
    token_id: str
    media_type: MediaType
    chain: Chain
    wallet: str = ""
    name: Optional[str] = None
    description: Optional[str] = None
    frame_url: Optional[str] = None
    image_url: Optional[str] = None
    gif_url: Optional[str] = None
    video_url: Optional[str] = None
    three_d_url: Optional[str] = None
    animation_url: Optional[str] = None
    has_audio: bool = False
    is_owned: bool = True
    date_created: Optional[str] = None
    date_last_transferred: Optional[str] = None
    external_link: Optional[str] = None
    perma_link: Optional[str] = None

    # ethereum nfts
    asset_contract_address: Optional[str] = None
    standard: Optional[str] = None
    collection_slug: Optional[str] = None
    collection_name: Optional[str] = None
    collection_image_url: Optional[str] = None

    # solana nfts
    solana_chain_metadata: Optional[Any] = None
    helius_collection: Optional[HeliusCollection] = None

    @property
    def media_url(self) -> Optional[str]:
        """The populated media URL field."""
        return self.image_url or self.gif_url or self.video_url or self.three_d_url

    def to_dict(self) -> Dict[str, Any]:
        """Render the record with the display layer's camelCase keys."""
        data = {
            "id": self.id,
            "tokenId": self.token_id,
            "name": self.name,
            "description": self.description,
            "mediaType": self.media_type.value,
            "frameUrl": self.frame_url,
            "imageUrl": self.image_url,
            "gifUrl": self.gif_url,
            "videoUrl": self.video_url,
            "threeDUrl": self.three_d_url,
            "animationUrl": self.animation_url,
            "hasAudio": self.has_audio,
            "isOwned": self.is_owned,
            "dateCreated": self.date_created,
            "dateLastTransferred": self.date_last_transferred,
            "externalLink": self.external_link,
            "permaLink": self.perma_link,
            "chain": self.chain.value,
            "wallet": self.wallet,
        }
        if self.chain is Chain.ETH:
            data.update({
                "assetContractAddress": self.asset_contract_address,
                "standard": self.standard,
                "collectionSlug": self.collection_slug,
                "collectionName": self.collection_name,
                "collectionImageUrl": self.collection_image_url,
            })
        else:
            data["solanaChainMetadata"] = self.solana_chain_metadata
            data["heliusCollection"] = (
                self.helius_collection.to_dict() if self.helius_collection else None
            )
        return data
