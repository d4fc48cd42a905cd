"""
Base definitions for raw NFT record schemas.
"""

from enum import Enum
from typing import ClassVar, Optional

from pydantic import BaseModel, ConfigDict


class SourceKind(str, Enum):
    """Explicit tag naming the schema (and adapter) of a raw record."""
    ETHEREUM = "ethereum"
    METAPLEX = "metaplex"
    HELIUS = "helius"
    STAR_ATLAS = "star_atlas"


class RawRecord(BaseModel):
    """Base for raw schemas. Unknown fields are ignored; the models are read-only."""

    model_config = ConfigDict(
        populate_by_name=True, extra="ignore", frozen=True, coerce_numbers_to_str=True
    )

    source_kind: ClassVar[SourceKind]


def join_identifier(*parts: Optional[str]) -> str:
    """Join the non-empty parts of a composite identifier."""
    return ":::".join(part for part in parts if part)
