"""
Tests for ordered strategy evaluation.
"""

import pytest
from unittest.mock import AsyncMock

from collectibles.core.types import MediaDescriptor, MediaType
from collectibles.media.strategy import StrategyChain


@pytest.mark.unit
class TestStrategyChain:
    """Test first-applicable-wins evaluation."""

    @pytest.mark.asyncio
    async def test_first_applicable_strategy_wins(self):
        gif = MediaDescriptor(MediaType.GIF, "https://example.com/a.gif")
        first = AsyncMock(return_value=None)
        second = AsyncMock(return_value=gif)
        third = AsyncMock(return_value=MediaDescriptor(MediaType.IMAGE, "https://example.com/a.png"))
        chain = StrategyChain("test", [("first", first), ("second", second), ("third", third)])

        result = await chain.run({"record": 1})

        assert result == gif
        first.assert_awaited_once_with({"record": 1})
        second.assert_awaited_once_with({"record": 1})
        third.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_no_applicable_strategy(self):
        chain = StrategyChain("test", [("only", AsyncMock(return_value=None))])
        assert await chain.run({}) is None

    @pytest.mark.asyncio
    @pytest.mark.error_handling
    async def test_strategy_errors_propagate(self):
        chain = StrategyChain("test", [("broken", AsyncMock(side_effect=RuntimeError("boom")))])
        with pytest.raises(RuntimeError):
            await chain.run({})

    def test_strategy_names_in_order(self):
        chain = StrategyChain("test", [("a", AsyncMock()), ("b", AsyncMock())])
        assert chain.strategy_names == ["a", "b"]
