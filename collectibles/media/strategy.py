"""
Strategy chain for media resolution.

A chain is an ordered list of named async strategies. Each strategy inspects a
record and returns a MediaDescriptor, or None when it does not apply. The chain
runs them strictly in order and stops at the first descriptor.
"""

import logging
from typing import Any, Awaitable, Callable, List, Optional, Sequence, Tuple

from collectibles.core.types import MediaDescriptor

logger = logging.getLogger(__name__)

Strategy = Callable[[Any], Awaitable[Optional[MediaDescriptor]]]


class StrategyChain:
    """Ordered, short-circuiting evaluation of media strategies."""

    def __init__(self, name: str, strategies: Sequence[Tuple[str, Strategy]]):
        """
        Args:
            name: Chain name used in logs
            strategies: (strategy name, strategy) pairs in evaluation order
        """
        self.name = name
        self._strategies: List[Tuple[str, Strategy]] = list(strategies)

    @property
    def strategy_names(self) -> List[str]:
        return [name for name, _ in self._strategies]

    async def run(self, record: Any) -> Optional[MediaDescriptor]:
        """
        Evaluate the strategies in order.

        Args:
            record: The record every strategy receives

        Returns:
            The first descriptor produced, or None if no strategy applies
        """
        for strategy_name, strategy in self._strategies:
            descriptor = await strategy(record)
            if descriptor is not None:
                logger.debug(
                    f"StrategyChain[{self.name}]: '{strategy_name}' resolved "
                    f"{descriptor.media_type.value} {descriptor.primary_url}"
                )
                return descriptor
        logger.debug(f"StrategyChain[{self.name}]: no strategy applied")
        return None
