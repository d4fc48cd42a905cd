"""
Ethereum marketplace (OpenSea-style) asset and transfer event schemas.
"""

from typing import Any, ClassVar, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .base import RawRecord, SourceKind


class CollectionMetadata(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: Optional[str] = None
    image_url: Optional[str] = None


class AssetContract(BaseModel):
    model_config = ConfigDict(extra="ignore", frozen=True)

    name: Optional[str] = None


class OpenSeaAsset(RawRecord):
    """An NFT as returned by the marketplace indexer, extended with collection metadata and wallet."""

    source_kind: ClassVar[SourceKind] = SourceKind.ETHEREUM

    identifier: str
    contract: Optional[str] = None
    token_standard: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    image_url: Optional[str] = None
    image_original_url: Optional[str] = None
    image_preview_url: Optional[str] = None
    image_thumbnail_url: Optional[str] = None
    animation_url: Optional[str] = None
    animation_original_url: Optional[str] = None
    external_url: Optional[str] = None
    opensea_url: Optional[str] = None
    collection: Optional[Union[str, Dict[str, Any]]] = None
    collection_metadata: Optional[CollectionMetadata] = Field(default=None, alias="collectionMetadata")
    asset_contract: Optional[AssetContract] = None
    wallet: str = ""

    @field_validator("wallet", mode="before")
    def null_wallet_as_empty(cls, v):
        return "" if v is None else v

    @property
    def image_urls(self) -> List[Optional[str]]:
        """The five image-like URL fields, in priority order."""
        return [
            self.image,
            self.image_url,
            self.image_original_url,
            self.image_preview_url,
            self.image_thumbnail_url,
        ]

    @property
    def animation_urls(self) -> List[Optional[str]]:
        return [self.animation_url, self.animation_original_url]

    @property
    def collection_slug(self) -> Optional[str]:
        if isinstance(self.collection, dict):
            return self.collection.get("name")
        return self.collection


class OpenSeaTransferEvent(BaseModel):
    """A transfer event carrying the transferred NFT."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    nft: Dict[str, Any]
    event_timestamp: int
    from_address: Optional[str] = None
    to_address: Optional[str] = None
