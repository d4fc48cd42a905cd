"""
Command line entry point for the collectibles resolver.

Reads raw NFT records from JSON files, resolves them and prints the canonical
collectibles as a JSON list:

    python -m collectibles --source helius --wallet <address> assets.json
"""

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, List, Optional, Sequence

import httpx

from collectibles.adapters import create_default_registry
from collectibles.config import create_settings
from collectibles.records import SourceKind
from collectibles.resolver import resolve_ethereum_records, resolve_solana_records
from collectibles.utils.logging_config import init_logging

logger = logging.getLogger(__name__)


def parse_arguments(argv: Optional[Sequence[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Resolve NFT metadata records into displayable collectibles",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m collectibles --source ethereum assets.json
  python -m collectibles --source helius --wallet <address> --blocklist blocklist.json assets.json
  python -m collectibles --source metaplex --timeout-ms 2000 metadata.json
        """
    )

    parser.add_argument(
        "files",
        nargs="+",
        type=Path,
        help="JSON files holding one record or a list of records"
    )

    parser.add_argument(
        "--source",
        required=True,
        choices=[kind.value for kind in SourceKind],
        help="Schema of the records"
    )

    parser.add_argument(
        "--wallet",
        default="",
        help="Queried wallet address (used for ownership)"
    )

    parser.add_argument(
        "--blocklist",
        type=Path,
        help="Blocklist configuration JSON, applied to helius records"
    )

    parser.add_argument(
        "--timeout-ms",
        type=int,
        help="Override the per-probe timeout from configuration"
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Override log level from configuration"
    )

    return parser.parse_args(argv)


def load_records(paths: Sequence[Path]) -> List[Any]:
    """
    Load records from JSON files.

    Raises:
        OSError: If a file cannot be read
        ValueError: If a file is not valid JSON
    """
    records: List[Any] = []
    for path in paths:
        document = json.loads(path.read_text(encoding="utf-8"))
        if isinstance(document, list):
            records.extend(document)
        else:
            records.append(document)
    logger.debug(f"Loaded {len(records)} records from {len(paths)} file(s)")
    return records


async def main(argv: Optional[Sequence[str]] = None) -> int:
    """Main application entry point."""
    args = parse_arguments(argv)
    init_logging(args.log_level)

    config = create_settings()
    if args.timeout_ms is not None:
        config.probe.timeout_ms = args.timeout_ms

    try:
        records = load_records(args.files)
        blocklist = json.loads(args.blocklist.read_text(encoding="utf-8")) if args.blocklist else None
    except (OSError, ValueError) as e:
        logger.error(f"Could not read input: {e}")
        return 1

    source_kind = SourceKind(args.source)
    async with httpx.AsyncClient(
        headers={"User-Agent": config.probe.user_agent},
        follow_redirects=True,
    ) as client:
        registry = create_default_registry(config, client=client)
        if source_kind is SourceKind.ETHEREUM:
            if args.wallet:
                records = [
                    {**record, "wallet": record.get("wallet") or args.wallet} if isinstance(record, dict) else record
                    for record in records
                ]
            collectibles = await resolve_ethereum_records(records, registry=registry)
        else:
            collectibles = await resolve_solana_records(
                records,
                args.wallet,
                source_kind,
                blocklist=blocklist,
                registry=registry,
            )

    logger.info(f"Resolved {len(collectibles)} of {len(records)} records")
    json.dump([collectible.to_dict() for collectible in collectibles], sys.stdout, indent=2, default=str)
    sys.stdout.write("\n")
    return 0


def run() -> None:
    """Console script entry point."""
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()
