"""
Element Tools

Lookup of elements by their text under an XPath prefix, and helpers on
element handles:
- click_element_with_text: native click
- click_element_with_text_bubbling: synthetic bubbling click event, for
  listeners attached to an ancestor that a native click does not reach
- element_to_html: outer HTML of a handle
"""

import logging
from typing import Optional, Union

from playwright.async_api import (
    ElementHandle,
    Frame,
    Page,
    TimeoutError as PlaywrightTimeoutError,
)

from ..config import get_config
from ..errors import SelectorTimeoutError
from .base import tool, wait_for_element
from .models import TextQuery

logger = logging.getLogger(__name__)

_DISPATCH_CLICK_JS = """el => {
    const clickEvent = new Event('click', { bubbles: true, cancelable: true });
    el.dispatchEvent(clickEvent);
}"""

_TEXT_QUERY_PARAMETERS = {
    "type": "object",
    "properties": {
        "xpath": {
            "type": "string",
            "description": 'XPath prefix of the candidate elements, e.g. //ul[@id="allBsnsList"]/li/a',
        },
        "text": {
            "type": "string",
            "description": "Text the element must contain",
        },
        "exact": {
            "type": "boolean",
            "description": "Require text() to equal the text instead of containing it",
            "default": False,
        },
        "timeout_ms": {
            "type": "integer",
            "description": "Maximum wait for the element in milliseconds",
        },
    },
    "required": ["xpath", "text"],
}


async def _find_by_text(
    page: Union[Page, Frame],
    query: TextQuery,
    timeout_ms: int,
) -> ElementHandle:
    expression = query.expression()
    logger.debug(f"[Click] waiting for {expression}")
    return await wait_for_element(
        page, f"xpath={expression}", timeout_ms, description=expression
    )


@tool(
    name="click_element_with_text",
    description="Click the element under an XPath prefix whose text equals or contains the given text.",
    parameters=_TEXT_QUERY_PARAMETERS,
)
async def click_element_with_text(
    page: Union[Page, Frame],
    xpath: str,
    text: str,
    exact: bool = False,
    timeout_ms: Optional[int] = None,
) -> str:
    """
    Click the element defined by the XPath which contains text.

    Args:
        page: Playwright Page or Frame instance
        xpath: Part of the XPath, e.g. //ul[@id="allBsnsList"]/li/a
        text: Text contained in the element
        exact: If True, text() must equal text
        timeout_ms: Maximum wait for the element

    Returns:
        The XPath expression that was clicked

    Raises:
        SelectorTimeoutError: no element matched, or the match could not be
            clicked, within timeout_ms
    """
    query = TextQuery(xpath=xpath, text=text, exact=exact)
    timeout_ms = get_config().click_timeout_ms if timeout_ms is None else timeout_ms

    handle = await _find_by_text(page, query, timeout_ms)
    try:
        await handle.click(timeout=timeout_ms)
    except PlaywrightTimeoutError as e:
        # attached but never visible or enabled
        raise SelectorTimeoutError(query.expression(), timeout_ms) from e
    return query.expression()


@tool(
    name="click_element_with_text_bubbling",
    description="Like click_element_with_text, but dispatches a bubbling click event instead of a native click.",
    parameters=_TEXT_QUERY_PARAMETERS,
)
async def click_element_with_text_bubbling(
    page: Union[Page, Frame],
    xpath: str,
    text: str,
    exact: bool = False,
    timeout_ms: Optional[int] = None,
) -> str:
    """
    Dispatch a bubbling, cancelable click event on the element with text.

    Returns:
        The XPath expression that was clicked
    """
    query = TextQuery(xpath=xpath, text=text, exact=exact)
    timeout_ms = (
        get_config().click_bubbling_timeout_ms if timeout_ms is None else timeout_ms
    )

    handle = await _find_by_text(page, query, timeout_ms)
    await handle.evaluate(_DISPATCH_CLICK_JS)
    return query.expression()


@tool(
    name="element_to_html",
    description="Return the outer HTML of an element handle.",
    parameters={
        "type": "object",
        "properties": {},
    },
)
async def element_to_html(element: ElementHandle) -> str:
    """Return the element's outerHTML."""
    return await element.evaluate("el => el.outerHTML")
