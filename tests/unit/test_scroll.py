"""
Unit tests for the scroll tools.

This module contains unit tests for:
- autoscroll (content-equality loop)
- scroll_to_bottom (offset-equality loop)
- smooth_scroll_to_bottom
- Cancellation of both loops
"""

from unittest.mock import AsyncMock, MagicMock

import pytest
from pydantic import ValidationError

from page_plus.cancellation import CancellationToken
from page_plus.errors import ElementNotFoundError, ScrollCancelled
from page_plus.tools import scroll
from page_plus.tools.scroll import (
    ScrollState,
    autoscroll,
    scroll_to_bottom,
    smooth_scroll_to_bottom,
)

from tests.fakes import FeedPage, OffsetPage

LAST_ROW = "table > tbody > tr:last-child"


class TestScrollState:
    def test_initial_state(self):
        state = ScrollState()
        assert state.last_observed is None
        assert state.iteration_count == 0

    def test_advance_records_value_and_counts(self):
        state = ScrollState(last_observed=-1)
        state.advance(100)
        state.advance(200)
        assert state.last_observed == 200
        assert state.iteration_count == 2


class TestAutoscroll:
    """Test the content-equality autoscroll loop."""

    @pytest.mark.asyncio
    async def test_stops_on_first_repeat(self, fast_config):
        """Content changing on ticks 1..3 stops at tick 4 with 3 scrolls."""
        page = FeedPage(["row 10", "row 20", "row 30", "row 30"])

        result = await autoscroll(page, LAST_ROW)

        assert result.scroll_count == 3
        assert result.last_content == "row 30"
        assert result.reached_end is True
        assert page.ticks == 4

    @pytest.mark.asyncio
    async def test_first_tick_never_stops(self, fast_config):
        """A page with no new content still gets one scroll."""
        page = FeedPage(["only row"])

        result = await autoscroll(page, LAST_ROW)

        assert result.scroll_count == 1
        assert page.ticks == 2

    @pytest.mark.asyncio
    async def test_empty_text_is_a_real_baseline(self, fast_config):
        page = FeedPage([""])

        result = await autoscroll(page, LAST_ROW)

        assert result.last_content == ""
        assert result.scroll_count == 1

    @pytest.mark.asyncio
    async def test_tick_steps_run_in_order(self, fast_config):
        page = FeedPage(["a", "b", "b"])

        await autoscroll(page, LAST_ROW)

        assert page.events == [
            "read", "scroll_into_view", "nudge",
            "read", "scroll_into_view", "nudge",
            "read",
        ]

    @pytest.mark.asyncio
    async def test_default_nudge_scrolls_back_ten_pixels(self, fast_config):
        page = FeedPage(["a", "b", "b"])

        await autoscroll(page, LAST_ROW)

        assert page.nudges == [-10, -10]

    @pytest.mark.asyncio
    async def test_nudge_and_settle_are_parameters(self):
        page = FeedPage(["a", "a"])

        result = await autoscroll(page, LAST_ROW, 0, settle_ms=0, nudge_px=25)

        assert page.nudges == [-25]
        assert result.scroll_count == 1

    @pytest.mark.asyncio
    async def test_missing_element_names_selector(self, fast_config):
        page = FeedPage([None])

        with pytest.raises(ElementNotFoundError, match="tr:last-child") as exc_info:
            await autoscroll(page, LAST_ROW)

        assert exc_info.value.selector == LAST_ROW

    @pytest.mark.asyncio
    async def test_element_disappearing_mid_run_raises(self, fast_config):
        page = FeedPage(["a", "b", None])

        with pytest.raises(ElementNotFoundError):
            await autoscroll(page, LAST_ROW)

    @pytest.mark.asyncio
    async def test_max_scrolls_stops_endless_feed(self, fast_config):
        page = FeedPage([f"row {i}" for i in range(50)])

        result = await autoscroll(page, LAST_ROW, max_scrolls=4)

        assert result.scroll_count == 4
        assert result.reached_end is False
        assert result.last_content == "row 3"

    @pytest.mark.asyncio
    async def test_rejects_invalid_options(self):
        page = FeedPage(["a"])

        with pytest.raises(ValidationError):
            await autoscroll(page, "", 0)
        with pytest.raises(ValidationError):
            await autoscroll(page, LAST_ROW, -5)

    @pytest.mark.asyncio
    async def test_cancelled_before_start(self, fast_config):
        page = FeedPage(["a", "b"])
        token = CancellationToken()
        token.cancel()

        with pytest.raises(ScrollCancelled):
            await autoscroll(page, LAST_ROW, cancel_token=token)

        assert page.events == []

    @pytest.mark.asyncio
    async def test_cancelled_during_settle(self, fast_config):
        page = FeedPage([f"row {i}" for i in range(50)])
        token = CancellationToken()
        page.on_scroll_into_view = token.cancel

        with pytest.raises(ScrollCancelled):
            await autoscroll(page, LAST_ROW, cancel_token=token)

        # the nudge after the settle delay never ran
        assert page.events == ["read", "scroll_into_view"]


class TestScrollToBottom:
    """Test the offset-equality scroll loop."""

    @pytest.mark.asyncio
    async def test_stops_on_repeated_offset(self, fast_config):
        """Page at 0 moving to 100, 200, 200 stops after two moves."""
        page = OffsetPage([0, 100, 200, 200])

        result = await scroll_to_bottom(page)

        assert result.scroll_top == 200
        assert result.scroll_count == 2
        assert result.reached_end is True
        assert page.scrolls == 3

    @pytest.mark.asyncio
    async def test_first_tick_registers_progress(self, fast_config):
        """An unscrollable page still counts the first reading at offset 0."""
        page = OffsetPage([0])

        result = await scroll_to_bottom(page)

        assert result.scroll_top == 0
        assert result.scroll_count == 1
        assert page.scrolls == 2

    @pytest.mark.asyncio
    async def test_fractional_offsets(self, fast_config):
        page = OffsetPage([0, 719.5, 1439.0, 1500.25])

        result = await scroll_to_bottom(page)

        assert result.scroll_top == 1500.25
        assert result.scroll_count == 3

    @pytest.mark.asyncio
    async def test_max_scrolls(self, fast_config):
        page = OffsetPage(list(range(0, 10000, 100)))

        result = await scroll_to_bottom(page, max_scrolls=5)

        assert result.scroll_count == 5
        assert result.scroll_top == 500
        assert result.reached_end is False

    @pytest.mark.asyncio
    async def test_explicit_interval(self):
        page = OffsetPage([0, 50, 50])

        result = await scroll_to_bottom(page, 0)

        assert result.scroll_count == 1

    @pytest.mark.asyncio
    async def test_cancellation(self, fast_config):
        page = OffsetPage(list(range(0, 10000, 100)))
        token = CancellationToken()
        token.cancel()

        with pytest.raises(ScrollCancelled, match="cancelled"):
            await scroll_to_bottom(page, cancel_token=token)

        assert page.scrolls == 0


class TestSmoothScrollToBottom:
    @pytest.mark.asyncio
    async def test_issues_single_scroll(self):
        page = MagicMock()
        page.evaluate = AsyncMock(return_value=4200)

        target = await smooth_scroll_to_bottom(page)

        assert target == 4200
        page.evaluate.assert_awaited_once_with(scroll._SMOOTH_SCROLL_JS)
