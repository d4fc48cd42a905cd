"""
Public resolver API.

Entry points used by the display layer. None of these functions raise: a
record that cannot be resolved comes back as None (or is dropped from a
batch), and media that cannot be resolved comes back as the placeholder.
"""

import asyncio
import logging
from datetime import datetime, timezone
from email.utils import format_datetime
from typing import Any, Iterable, List, Mapping, Optional, Union

from pydantic import ValidationError

from collectibles.adapters import AdapterRegistry, create_default_registry
from collectibles.core.types import Collectible
from collectibles.exceptions import BlocklistConfigError, CollectiblesBaseException
from collectibles.filters import Blocklist, BlocklistFilter
from collectibles.records import OpenSeaTransferEvent, SourceKind, parse_record

logger = logging.getLogger(__name__)

NULL_ADDRESS = "0x0000000000000000000000000000000000000000"

Record = Union[Any, Mapping[str, Any]]
BlocklistLike = Union[Blocklist, Mapping[str, Any]]

_registry: Optional[AdapterRegistry] = None


def get_registry() -> AdapterRegistry:
    """Get the global adapter registry, building it from settings on first use."""
    global _registry
    if _registry is None:
        _registry = create_default_registry()
    return _registry


def set_registry(registry: Optional[AdapterRegistry]) -> None:
    """Replace the global adapter registry; None rebuilds it from settings on next use."""
    global _registry
    _registry = registry


async def resolve_ethereum(
    record: Record,
    registry: Optional[AdapterRegistry] = None,
) -> Optional[Collectible]:
    """
    Resolve a marketplace asset.

    Args:
        record: Raw asset mapping or parsed OpenSeaAsset
        registry: Adapter registry override

    Returns:
        The collectible, or None if the asset cannot be identified
    """
    return await _resolve(SourceKind.ETHEREUM, record, "", None, registry)


async def resolve_solana(
    record: Record,
    wallet: str,
    source_kind: Union[SourceKind, str],
    chain_metadata: Optional[Any] = None,
    registry: Optional[AdapterRegistry] = None,
) -> Optional[Collectible]:
    """
    Resolve a Solana record of the given schema.

    Args:
        record: Raw mapping or parsed record
        wallet: The queried wallet
        source_kind: metaplex, helius or star_atlas
        chain_metadata: Opaque on-chain metadata attached to the result
        registry: Adapter registry override

    Returns:
        The collectible, or None if the record is malformed or has no usable media
    """
    return await _resolve(source_kind, record, wallet, chain_metadata, registry)


async def _resolve(
    source_kind: Union[SourceKind, str],
    record: Record,
    wallet: str,
    chain_metadata: Optional[Any],
    registry: Optional[AdapterRegistry],
) -> Optional[Collectible]:
    try:
        adapter = (registry or get_registry()).get_adapter(source_kind)
        return await adapter.resolve(record, wallet=wallet, chain_metadata=chain_metadata)
    except CollectiblesBaseException as e:
        logger.error(f"Resolver: {e}")
        return None
    except Exception as e:
        logger.error(f"Resolver: Unexpected error resolving {source_kind} record: {e}", exc_info=True)
        return None


def _blocklist_filter(blocklist: BlocklistLike) -> BlocklistFilter:
    if isinstance(blocklist, Blocklist):
        return BlocklistFilter(blocklist)
    try:
        return BlocklistFilter(Blocklist.from_config(blocklist))
    except BlocklistConfigError as e:
        logger.error(f"Resolver: {e}; applying builtin rules only")
        return BlocklistFilter(Blocklist())


def _passes(record: Record, blocklist_filter: BlocklistFilter) -> bool:
    try:
        parsed = parse_record(SourceKind.HELIUS, record)
    except (ValidationError, TypeError) as e:
        logger.warning(f"Resolver: Malformed helius record fails the blocklist: {e}")
        return False
    return blocklist_filter.is_valid(parsed)


async def is_valid_against_blocklist(record: Record, blocklist: BlocklistLike) -> bool:
    """
    Check an indexed (Helius) record against a blocklist and the builtin rules.

    Args:
        record: Raw Helius mapping or parsed HeliusRecord
        blocklist: Blocklist, or the hosted configuration document

    Returns:
        False if the record is blocked or malformed, True otherwise
    """
    return _passes(record, _blocklist_filter(blocklist))


def _format_http_date(epoch_seconds: int) -> str:
    return format_datetime(datetime.fromtimestamp(epoch_seconds, tz=timezone.utc), usegmt=True)


async def transfer_event_to_collectible(
    event: Union[OpenSeaTransferEvent, Mapping[str, Any]],
    is_owned: bool = True,
    registry: Optional[AdapterRegistry] = None,
) -> Optional[Collectible]:
    """
    Resolve the NFT carried by a transfer event.

    Args:
        event: Raw transfer event or parsed OpenSeaTransferEvent
        is_owned: Ownership to record on the result
        registry: Adapter registry override

    Returns:
        The collectible stamped with the transfer date, or None
    """
    try:
        if not isinstance(event, OpenSeaTransferEvent):
            event = OpenSeaTransferEvent.model_validate(event)
        date_last_transferred = _format_http_date(event.event_timestamp)
    except (ValidationError, ValueError, OverflowError, OSError) as e:
        logger.warning(f"Resolver: Dropping malformed transfer event: {e}")
        return None

    collectible = await resolve_ethereum(event.nft, registry=registry)
    if collectible is None:
        return None
    collectible.is_owned = is_owned
    collectible.date_last_transferred = date_last_transferred
    return collectible


def is_not_from_null_address(event: Union[OpenSeaTransferEvent, Mapping[str, Any]]) -> bool:
    """Whether a transfer event did not originate from the null (mint) address."""
    if isinstance(event, OpenSeaTransferEvent):
        from_address = event.from_address
    else:
        from_address = event.get("from_address")
    return from_address != NULL_ADDRESS


async def resolve_ethereum_records(
    records: Iterable[Record],
    registry: Optional[AdapterRegistry] = None,
) -> List[Collectible]:
    """Resolve many marketplace assets concurrently, dropping the unresolvable ones."""
    results = await asyncio.gather(*(resolve_ethereum(record, registry=registry) for record in records))
    return [collectible for collectible in results if collectible is not None]


async def resolve_solana_records(
    records: Iterable[Record],
    wallet: str,
    source_kind: Union[SourceKind, str],
    chain_metadata: Optional[Any] = None,
    blocklist: Optional[BlocklistLike] = None,
    registry: Optional[AdapterRegistry] = None,
) -> List[Collectible]:
    """
    Resolve many Solana records concurrently.

    Args:
        records: Raw mappings or parsed records, all of source_kind
        wallet: The queried wallet
        source_kind: metaplex, helius or star_atlas
        chain_metadata: Opaque on-chain metadata attached to every result
        blocklist: Applied to Helius records before resolution
        registry: Adapter registry override

    Returns:
        The resolved collectibles, in input order, without the dropped records
    """
    records = list(records)
    if blocklist is not None and source_kind == SourceKind.HELIUS:
        blocklist_filter = _blocklist_filter(blocklist)
        kept = [record for record in records if _passes(record, blocklist_filter)]
        if len(kept) < len(records):
            logger.info(f"Resolver: Blocklist dropped {len(records) - len(kept)} of {len(records)} helius records")
        records = kept

    results = await asyncio.gather(*(
        resolve_solana(record, wallet, source_kind, chain_metadata=chain_metadata, registry=registry)
        for record in records
    ))
    return [collectible for collectible in results if collectible is not None]
