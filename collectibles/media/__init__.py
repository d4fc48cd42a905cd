"""Media resolution primitives: gateway rewriting, content probing and strategy chains."""

from .prober import ContentProber, ProbeMode, ProbeResult, is_webp_animated
from .protocol import ProtocolResolver
from .strategy import StrategyChain

__all__ = [
    "ContentProber",
    "ProbeMode",
    "ProbeResult",
    "ProtocolResolver",
    "StrategyChain",
    "is_webp_animated",
]
