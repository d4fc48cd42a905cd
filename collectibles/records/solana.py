"""
Solana NFT schemas: Metaplex off-chain metadata, Helius indexed assets and
Star Atlas assets.
"""

from typing import ClassVar, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .base import RawRecord, SourceKind


def _list_or_empty(value):
    """Treat a JSON null list as empty and drop null entries."""
    if value is None:
        return []
    if isinstance(value, list):
        return [item for item in value if item is not None]
    return value


def _section_or_empty(value):
    return {} if value is None else value


class _Nested(BaseModel):
    model_config = ConfigDict(populate_by_name=True, extra="ignore", frozen=True)


class MetaplexFile(_Nested):
    """A typed entry of properties.files. Legacy metadata uses `file` instead of `uri`."""

    uri: Optional[str] = None
    type: Optional[str] = None
    file: Optional[str] = None

    @property
    def url(self) -> Optional[str]:
        return self.uri or self.file


class MetaplexCreator(_Nested):
    address: Optional[str] = None
    share: Optional[int] = None
    verified: Optional[bool] = None


class MetaplexProperties(_Nested):
    files: List[Union[str, MetaplexFile]] = Field(default_factory=list)
    category: Optional[str] = None
    creators: List[MetaplexCreator] = Field(default_factory=list)

    @field_validator("files", "creators", mode="before")
    def null_as_empty_list(cls, v):
        return _list_or_empty(v)


class MetaplexRecord(RawRecord):
    """Off-chain JSON metadata following the Metaplex token metadata standard."""

    source_kind: ClassVar[SourceKind] = SourceKind.METAPLEX

    name: Optional[str] = None
    symbol: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    animation_url: Optional[str] = None
    external_url: Optional[str] = None
    properties: MetaplexProperties = Field(default_factory=MetaplexProperties)

    @field_validator("properties", mode="before")
    def null_as_empty_properties(cls, v):
        return _section_or_empty(v)

    @property
    def files(self) -> List[Union[str, MetaplexFile]]:
        return self.properties.files


def file_url(file: Union[str, MetaplexFile]) -> Optional[str]:
    """URL of a properties.files entry, bare string or typed object."""
    if isinstance(file, MetaplexFile):
        return file.url
    return file


class HeliusMetadata(_Nested):
    name: Optional[str] = None
    symbol: Optional[str] = None
    description: Optional[str] = None


class HeliusLinks(_Nested):
    image: Optional[str] = None
    external_url: Optional[str] = None
    animation_url: Optional[str] = None


class HeliusFile(_Nested):
    uri: Optional[str] = None
    mime: Optional[str] = None


class HeliusContent(_Nested):
    json_uri: Optional[str] = None
    metadata: HeliusMetadata = Field(default_factory=HeliusMetadata)
    links: HeliusLinks = Field(default_factory=HeliusLinks)
    files: List[HeliusFile] = Field(default_factory=list)

    @field_validator("metadata", "links", mode="before")
    def null_as_empty_section(cls, v):
        return _section_or_empty(v)

    @field_validator("files", mode="before")
    def null_as_empty_files(cls, v):
        return _list_or_empty(v)


class HeliusCollectionMetadata(_Nested):
    name: Optional[str] = None
    symbol: Optional[str] = None
    image: Optional[str] = None
    external_url: Optional[str] = None


class HeliusGroup(_Nested):
    group_key: str
    group_value: Optional[str] = None
    collection_metadata: Optional[HeliusCollectionMetadata] = None


class HeliusOwnership(_Nested):
    owner: Optional[str] = None


class HeliusRecord(RawRecord):
    """An asset as returned by the Helius DAS indexer."""

    source_kind: ClassVar[SourceKind] = SourceKind.HELIUS

    id: str
    content: HeliusContent = Field(default_factory=HeliusContent)
    grouping: List[HeliusGroup] = Field(default_factory=list)
    ownership: HeliusOwnership = Field(default_factory=HeliusOwnership)
    creators: List[MetaplexCreator] = Field(default_factory=list)

    @field_validator("content", "ownership", mode="before")
    def null_as_empty_section(cls, v):
        return _section_or_empty(v)

    @field_validator("grouping", "creators", mode="before")
    def null_as_empty_list(cls, v):
        return _list_or_empty(v)

    @property
    def collection_group(self) -> Optional[HeliusGroup]:
        for group in self.grouping:
            if group.group_key == "collection":
                return group
        return None

    def to_metaplex(self) -> MetaplexRecord:
        """Build the equivalent Metaplex metadata from the indexed content fields."""
        metadata = self.content.metadata
        links = self.content.links
        return MetaplexRecord(
            name=metadata.name,
            symbol=metadata.symbol,
            description=metadata.description,
            image=links.image,
            animation_url=links.animation_url,
            external_url=links.external_url,
            properties=MetaplexProperties(
                files=[MetaplexFile(uri=file.uri, type=file.mime) for file in self.content.files],
                creators=self.creators,
            ),
        )


class StarAtlasMedia(_Nested):
    thumbnail_url: Optional[str] = Field(default=None, alias="thumbnailUrl")


class StarAtlasRecord(RawRecord):
    """An asset from the Star Atlas galaxy API."""

    source_kind: ClassVar[SourceKind] = SourceKind.STAR_ATLAS

    id: str = Field(alias="_id")
    symbol: Optional[str] = None
    name: Optional[str] = None
    description: Optional[str] = None
    image: Optional[str] = None
    media: StarAtlasMedia = Field(default_factory=StarAtlasMedia)
    created_at: Optional[str] = Field(default=None, alias="createdAt")

    @field_validator("media", mode="before")
    def null_as_empty_media(cls, v):
        return _section_or_empty(v)
