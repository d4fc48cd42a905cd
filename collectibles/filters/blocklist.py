"""
Blocklist Filter

Pure predicate that excludes suspected spam/scam records from the indexed
Solana path before any resolution work is spent on them.
"""

import logging
from dataclasses import dataclass
from typing import Any, FrozenSet, Iterable, List, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from collectibles.exceptions import BlocklistConfigError
from collectibles.records.solana import HeliusRecord

logger = logging.getLogger(__name__)

BUILTIN_BLOCKED_DOMAINS: FrozenSet[str] = frozenset({
    ".pro",
    ".site",
    ".click",
    ".fun",
    "sol-drift.com",
    "myrovoucher.com",
    "magiceden.club",
    "tensor.markets",
    "mnde.network",
    "4000w.io",
    "juppi.io",
    "jupdao.com",
    "jupgem.com",
    "juptreasure.com",
    "slerfdrop.com",
    "airdrop.drift.exchange",
})

BUILTIN_BLOCKED_NAME_FRAGMENTS: FrozenSet[str] = frozenset({
    "$1000",
    "00jup",
    "airdrop",
    "voucher",
}) | BUILTIN_BLOCKED_DOMAINS


@dataclass(frozen=True)
class BuiltinBlocklist:
    """Fixed supplementary rules unioned with every caller-supplied blocklist."""
    blocked_domains: FrozenSet[str] = BUILTIN_BLOCKED_DOMAINS
    blocked_name_fragments: FrozenSet[str] = BUILTIN_BLOCKED_NAME_FRAGMENTS


DEFAULT_BUILTIN_BLOCKLIST = BuiltinBlocklist()


class Blocklist(BaseModel):
    """Caller-supplied blocklist."""

    model_config = ConfigDict(frozen=True)

    url_blocklist: FrozenSet[str] = frozenset()
    nft_blocklist: FrozenSet[str] = frozenset()
    name_contains: FrozenSet[str] = frozenset()
    symbol_contains: FrozenSet[str] = frozenset()

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "Blocklist":
        """
        Build a blocklist from the hosted configuration document.

        Args:
            config: {"blocklist": [...], "nftBlocklist": [...],
                     "stringFilters": {"nameContains": [...], "symbolContains": [...]}}

        Returns:
            Blocklist instance

        Raises:
            BlocklistConfigError: If the document has the wrong shape
        """
        try:
            document = _BlocklistDocument.model_validate(config)
        except ValidationError as e:
            raise BlocklistConfigError(f"Invalid blocklist configuration: {e}") from e
        return cls(
            url_blocklist=frozenset(document.blocklist),
            nft_blocklist=frozenset(document.nft_blocklist),
            name_contains=frozenset(document.string_filters.name_contains),
            symbol_contains=frozenset(document.string_filters.symbol_contains),
        )


class _StringFilters(BaseModel):
    name_contains: List[str] = Field(default_factory=list, alias="nameContains")
    symbol_contains: List[str] = Field(default_factory=list, alias="symbolContains")


class _BlocklistDocument(BaseModel):
    blocklist: List[str] = Field(default_factory=list)
    nft_blocklist: List[str] = Field(default_factory=list, alias="nftBlocklist")
    string_filters: _StringFilters = Field(default_factory=_StringFilters, alias="stringFilters")


def _contains_any(value: Optional[str], fragments: Iterable[str]) -> bool:
    if not value:
        return False
    lowered = value.lower()
    return any(fragment.lower() in lowered for fragment in fragments)


class BlocklistFilter:
    """Evaluates Helius records against a caller blocklist plus the builtin rules."""

    def __init__(self, blocklist: Blocklist, builtin: BuiltinBlocklist = DEFAULT_BUILTIN_BLOCKLIST):
        self.blocklist = blocklist
        self.builtin = builtin
        self._blocked_urls = blocklist.url_blocklist | builtin.blocked_domains
        self._blocked_names = blocklist.name_contains | builtin.blocked_name_fragments

    def is_valid(self, record: HeliusRecord) -> bool:
        """
        Check a record against the rules, stopping at the first match.

        Order: external link, nft id, name, collection name, symbol.

        Args:
            record: Parsed Helius record

        Returns:
            False if any rule matches, True otherwise
        """
        metadata = record.content.metadata
        external_url = record.content.links.external_url

        if _contains_any(external_url, self._blocked_urls):
            logger.debug(f"BlocklistFilter: {record.id} blocked by external url {external_url}")
            return False

        if record.id in self.blocklist.nft_blocklist:
            logger.debug(f"BlocklistFilter: {record.id} blocked by nft id")
            return False

        if _contains_any(metadata.name, self._blocked_names):
            logger.debug(f"BlocklistFilter: {record.id} blocked by name {metadata.name!r}")
            return False

        for group in record.grouping:
            collection_name = group.collection_metadata.name if group.collection_metadata else None
            if _contains_any(collection_name, self._blocked_names):
                logger.debug(f"BlocklistFilter: {record.id} blocked by collection name {collection_name!r}")
                return False

        if _contains_any(metadata.symbol, self.blocklist.symbol_contains):
            logger.debug(f"BlocklistFilter: {record.id} blocked by symbol {metadata.symbol!r}")
            return False

        return True
