"""
Wait Tools

Waits on page state:
- wait_for_text_on_page: the visible page text contains a string
- wait_for_url_contains: a network response URL contains a string

Playwright timeouts are re-raised as WaitTimeoutError subclasses that name
the URL and the text that never showed up.
"""

import logging
from typing import Optional, Union

from playwright.async_api import Frame, Page, Response, TimeoutError as PlaywrightTimeout

from ..config import get_config
from ..errors import TextNotFoundError, WaitTimeoutError
from .base import page_of, tool

logger = logging.getLogger(__name__)

_BODY_CONTAINS_JS = """text => {
    const body = document.querySelector('body');
    return !!body && body.innerText.includes(text);
}"""


@tool(
    name="wait_for_text_on_page",
    description="Wait until the visible text of the page contains the given text.",
    parameters={
        "type": "object",
        "properties": {
            "text": {
                "type": "string",
                "description": "Text to wait for (substring match)",
            },
            "timeout_ms": {
                "type": "integer",
                "description": "Maximum wait time in milliseconds (default: 60000)",
            },
        },
        "required": ["text"],
    },
)
async def wait_for_text_on_page(
    page: Union[Page, Frame],
    text: str,
    timeout_ms: Optional[int] = None,
) -> bool:
    """
    Wait until the text is contained in the page body's innerText.

    Args:
        page: Playwright Page or Frame instance
        text: Text expected somewhere on the page
        timeout_ms: Maximum wait time in ms

    Returns:
        True once the text is present

    Raises:
        TextNotFoundError: text did not appear within timeout_ms
    """
    timeout_ms = get_config().text_timeout_ms if timeout_ms is None else timeout_ms
    try:
        await page.wait_for_function(_BODY_CONTAINS_JS, arg=text, timeout=timeout_ms)
    except PlaywrightTimeout as e:
        raise TextNotFoundError(page.url, text, timeout_ms) from e
    return True


@tool(
    name="wait_for_url_contains",
    description="Wait for a network response whose URL contains the given text.",
    parameters={
        "type": "object",
        "properties": {
            "text": {
                "type": "string",
                "description": "Text contained in the response URL",
            },
            "timeout_ms": {
                "type": "integer",
                "description": "Maximum wait time in milliseconds (default: 30000)",
            },
        },
        "required": ["text"],
    },
)
async def wait_for_url_contains(
    page: Union[Page, Frame],
    text: str,
    timeout_ms: Optional[int] = None,
) -> str:
    """
    Wait for a response whose URL contains text.

    Only responses received after the call are observed.

    Returns:
        URL of the matching response

    Raises:
        WaitTimeoutError: no matching response within timeout_ms
    """
    timeout_ms = get_config().response_timeout_ms if timeout_ms is None else timeout_ms

    def matches(response: Response) -> bool:
        return text in response.url

    try:
        response = await page_of(page).wait_for_event(
            "response", predicate=matches, timeout=timeout_ms
        )
    except PlaywrightTimeout as e:
        raise WaitTimeoutError(
            f'No response with URL containing "{text}" after {timeout_ms}ms',
            timeout_ms=timeout_ms,
        ) from e

    logger.debug(f"[Wait] response {response.url}")
    return response.url
