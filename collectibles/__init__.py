"""
Collectibles - NFT metadata normalization for display.

This package turns chain-specific NFT metadata into one canonical record:
- Ethereum marketplace assets and Metaplex, Helius and Star Atlas records on Solana
- Media resolution (image, gif, video, 3D, animated webp) through ordered heuristics
- Bounded content probing of distributed-storage and gateway URLs
- Spam/scam blocklist filtering for indexed Solana records
"""

__version__ = "0.1.0"
__author__ = "Collectibles Team"

from collectibles.resolver import (
    is_not_from_null_address,
    is_valid_against_blocklist,
    resolve_ethereum,
    resolve_ethereum_records,
    resolve_solana,
    resolve_solana_records,
    transfer_event_to_collectible,
)

__all__ = [
    "is_not_from_null_address",
    "is_valid_against_blocklist",
    "resolve_ethereum",
    "resolve_ethereum_records",
    "resolve_solana",
    "resolve_solana_records",
    "transfer_event_to_collectible",
]
