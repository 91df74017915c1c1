"""
Scroll Tools

Scrolling strategies for pages that load content as the user scrolls:
- autoscroll: scroll to the last repeating item until its text stops changing
- scroll_to_bottom: scroll by one viewport until the scroll offset stops changing
- smooth_scroll_to_bottom: one native smooth scroll to the bottom

Both polling loops are explicit loops with an awaited delay before every tick,
so a tick never starts while the previous one is still settling. They stop
exactly once, on the first stagnant observation, and can be cancelled with a
CancellationToken or by cancelling the awaiting task.
"""

import asyncio
import logging
from dataclasses import dataclass
from typing import Any, Optional, Union

from playwright.async_api import Frame, Page

from ..cancellation import CancellationToken
from ..config import get_config
from ..errors import ElementNotFoundError
from .base import tool
from .models import (
    AutoscrollOptions,
    AutoscrollResult,
    ScrollToBottomOptions,
    ScrollToBottomResult,
)

logger = logging.getLogger(__name__)

# Sentinel that no real scroll offset can equal
UNSET_OFFSET = -1

_TEXT_CONTENT_JS = """sel => {
    const el = document.querySelector(sel);
    return el ? el.textContent : null;
}"""

_SCROLL_INTO_VIEW_JS = """sel => {
    const el = document.querySelector(sel);
    if (!el) return false;
    el.scrollIntoView();
    return true;
}"""

# Scroll back a little to fire scroll-triggered loaders, then re-read the item
_NUDGE_JS = """([sel, dy]) => {
    window.scrollBy(0, dy);
    const el = document.querySelector(sel);
    return el ? el.textContent : null;
}"""

_SCROLL_PAGE_JS = """() => {
    window.scrollBy(0, window.innerHeight);
    return document.documentElement.scrollTop;
}"""

_SMOOTH_SCROLL_JS = """() => {
    window.scrollTo({ top: document.documentElement.scrollHeight, behavior: 'smooth' });
    return document.documentElement.scrollHeight;
}"""


@dataclass
class ScrollState:
    """Per-invocation polling state. Never shared between calls."""

    last_observed: Any = None
    iteration_count: int = 0

    def advance(self, value: Any) -> None:
        self.last_observed = value
        self.iteration_count += 1


async def _read_text_content(page: Union[Page, Frame], selector: str) -> str:
    content = await page.evaluate(_TEXT_CONTENT_JS, selector)
    if content is None:
        raise ElementNotFoundError(selector)
    return content


@tool(
    name="autoscroll",
    description="Scroll a dynamically loading page to its last repeating item until the item's text stops changing, meaning no new content was loaded.",
    parameters={
        "type": "object",
        "properties": {
            "selector": {
                "type": "string",
                "description": "CSS selector of the last repeating item, e.g. table > tbody > tr:last-child",
            },
            "interval_ms": {
                "type": "integer",
                "description": "Delay between consecutive scrolls (default: 3400)",
                "minimum": 0,
            },
            "settle_ms": {
                "type": "integer",
                "description": "Wait after scrolling the item into view (default: 700)",
                "minimum": 0,
            },
            "nudge_px": {
                "type": "integer",
                "description": "Pixels to scroll back up after settling (default: 10)",
            },
            "max_scrolls": {
                "type": "integer",
                "description": "Stop after this many scrolls even if content keeps loading",
                "minimum": 1,
            },
        },
        "required": ["selector"],
    },
)
async def autoscroll(
    page: Union[Page, Frame],
    selector: str,
    interval_ms: Optional[int] = None,
    *,
    settle_ms: Optional[int] = None,
    nudge_px: Optional[int] = None,
    max_scrolls: Optional[int] = None,
    cancel_token: Optional[CancellationToken] = None,
) -> AutoscrollResult:
    """
    Autoscroll a page whose content loads as the user scrolls down.

    Every tick reads the text of the element matched by selector. When it
    equals the text recorded on the previous tick there is no new content
    and the loop stops. Otherwise the element is scrolled into view, the page
    settles, the viewport is nudged back up by nudge_px to trigger loaders,
    and the element's text becomes the new baseline.

    Args:
        page: Playwright Page or Frame instance
        selector: CSS selector of the last repetitive item
        interval_ms: Delay before every tick
        settle_ms: Wait between scrollIntoView and the nudge
        nudge_px: Pixels to scroll back up
        max_scrolls: Optional hard stop on the number of scrolls
        cancel_token: Optional token to stop the loop early

    Returns:
        AutoscrollResult with the last item text and the number of scrolls

    Raises:
        ElementNotFoundError: selector matched nothing on some tick
        ScrollCancelled: cancel_token was cancelled
    """
    config = get_config()
    options = AutoscrollOptions(
        selector=selector,
        interval_ms=config.autoscroll_interval_ms if interval_ms is None else interval_ms,
        settle_ms=config.autoscroll_settle_ms if settle_ms is None else settle_ms,
        nudge_px=config.autoscroll_nudge_px if nudge_px is None else nudge_px,
        max_scrolls=max_scrolls,
    )
    token = cancel_token or CancellationToken()
    state = ScrollState()

    while True:
        await asyncio.sleep(options.interval_ms / 1000)
        token.raise_if_cancelled()

        content = await _read_text_content(page, options.selector)
        if state.last_observed is not None and content == state.last_observed:
            logger.info(
                f"[Autoscroll] {options.selector} stable after {state.iteration_count} scrolls"
            )
            return AutoscrollResult(
                last_content=content,
                scroll_count=state.iteration_count,
            )

        if not await page.evaluate(_SCROLL_INTO_VIEW_JS, options.selector):
            raise ElementNotFoundError(options.selector)

        await asyncio.sleep(options.settle_ms / 1000)
        token.raise_if_cancelled()

        baseline = await page.evaluate(_NUDGE_JS, [options.selector, -options.nudge_px])
        if baseline is None:
            raise ElementNotFoundError(options.selector)
        state.advance(baseline)
        logger.debug(f"[Autoscroll] scroll {state.iteration_count} on {options.selector}")

        if options.max_scrolls is not None and state.iteration_count >= options.max_scrolls:
            logger.info(f"[Autoscroll] stopped at max_scrolls={options.max_scrolls}")
            return AutoscrollResult(
                last_content=state.last_observed,
                scroll_count=state.iteration_count,
                reached_end=False,
            )


@tool(
    name="scroll_to_bottom",
    description="Scroll the page down one viewport height at a time until the scroll offset stops changing.",
    parameters={
        "type": "object",
        "properties": {
            "interval_ms": {
                "type": "integer",
                "description": "Delay between consecutive scrolls (default: 100)",
                "minimum": 0,
            },
            "max_scrolls": {
                "type": "integer",
                "description": "Stop after this many scrolls even if the page keeps moving",
                "minimum": 1,
            },
        },
    },
)
async def scroll_to_bottom(
    page: Union[Page, Frame],
    interval_ms: Optional[int] = None,
    *,
    max_scrolls: Optional[int] = None,
    cancel_token: Optional[CancellationToken] = None,
) -> ScrollToBottomResult:
    """
    Scroll the page to the bottom.

    The page scrolls by window.innerHeight every interval_ms until
    document.documentElement.scrollTop reads the same value twice in a row.

    Args:
        page: Playwright Page or Frame instance
        interval_ms: Delay before every tick
        max_scrolls: Optional hard stop on the number of scrolls
        cancel_token: Optional token to stop the loop early

    Returns:
        ScrollToBottomResult with the final offset and the number of moves
    """
    options = ScrollToBottomOptions(
        interval_ms=(
            get_config().scroll_to_bottom_interval_ms
            if interval_ms is None
            else interval_ms
        ),
        max_scrolls=max_scrolls,
    )
    token = cancel_token or CancellationToken()
    state = ScrollState(last_observed=UNSET_OFFSET)

    while True:
        await asyncio.sleep(options.interval_ms / 1000)
        token.raise_if_cancelled()

        scroll_top = await page.evaluate(_SCROLL_PAGE_JS)
        logger.debug(
            f"[ScrollToBottom] tick {state.iteration_count}: "
            f"{scroll_top} (previous {state.last_observed})"
        )

        if scroll_top == state.last_observed:
            logger.info(
                f"[ScrollToBottom] bottom at {scroll_top} after {state.iteration_count} scrolls"
            )
            return ScrollToBottomResult(
                scroll_top=scroll_top,
                scroll_count=state.iteration_count,
            )

        state.advance(scroll_top)

        if options.max_scrolls is not None and state.iteration_count >= options.max_scrolls:
            logger.info(f"[ScrollToBottom] stopped at max_scrolls={options.max_scrolls}")
            return ScrollToBottomResult(
                scroll_top=scroll_top,
                scroll_count=state.iteration_count,
                reached_end=False,
            )


@tool(
    name="smooth_scroll_to_bottom",
    description="Issue one smooth scroll to the bottom of the page. Returns once the scroll starts, not when the animation ends.",
    parameters={
        "type": "object",
        "properties": {},
    },
)
async def smooth_scroll_to_bottom(page: Union[Page, Frame]) -> float:
    """
    Smooth-scroll to the absolute bottom of the page.

    The browser animates the scroll; this returns as soon as the command is
    issued, so the animation may still be running.

    Returns:
        The scroll height targeted
    """
    target = await page.evaluate(_SMOOTH_SCROLL_JS)
    logger.debug(f"[SmoothScroll] scrolling to {target}")
    return target
