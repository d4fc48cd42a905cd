"""Record filters applied before resolution."""

from .blocklist import (
    DEFAULT_BUILTIN_BLOCKLIST,
    Blocklist,
    BlocklistFilter,
    BuiltinBlocklist,
)

__all__ = [
    "DEFAULT_BUILTIN_BLOCKLIST",
    "Blocklist",
    "BlocklistFilter",
    "BuiltinBlocklist",
]
