"""
Raw NFT record schemas.

RawNFTRecord is a tagged union: every variant carries a class-level
`source_kind`, and parsing dispatches on an explicit SourceKind rather than on
which fields happen to be present.
"""

from typing import Any, Dict, Mapping, Type, Union

from .base import RawRecord, SourceKind, join_identifier
from .ethereum import OpenSeaAsset, OpenSeaTransferEvent
from .solana import (
    HeliusRecord,
    MetaplexFile,
    MetaplexRecord,
    StarAtlasRecord,
    file_url,
)

RawNFTRecord = Union[OpenSeaAsset, MetaplexRecord, HeliusRecord, StarAtlasRecord]

RECORD_MODELS: Dict[SourceKind, Type[RawRecord]] = {
    SourceKind.ETHEREUM: OpenSeaAsset,
    SourceKind.METAPLEX: MetaplexRecord,
    SourceKind.HELIUS: HeliusRecord,
    SourceKind.STAR_ATLAS: StarAtlasRecord,
}


def parse_record(kind: SourceKind, data: Union[RawRecord, Mapping[str, Any]]) -> RawRecord:
    """
    Validate raw data against the schema for a source kind.

    Args:
        kind: Explicit source tag
        data: Raw mapping, or an already parsed record of the same kind

    Returns:
        The parsed record

    Raises:
        pydantic.ValidationError: If the data does not fit the schema
        TypeError: If a parsed record of a different kind is passed
    """
    model = RECORD_MODELS[SourceKind(kind)]
    if isinstance(data, RawRecord):
        if not isinstance(data, model):
            raise TypeError(f"Expected {model.__name__} for {kind}, got {type(data).__name__}")
        return data
    return model.model_validate(data)


__all__ = [
    "HeliusRecord",
    "MetaplexFile",
    "MetaplexRecord",
    "OpenSeaAsset",
    "OpenSeaTransferEvent",
    "RECORD_MODELS",
    "RawNFTRecord",
    "RawRecord",
    "SourceKind",
    "StarAtlasRecord",
    "file_url",
    "join_identifier",
    "parse_record",
]
