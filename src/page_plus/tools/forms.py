"""
Form Tools

Interaction with form controls:
- select_option_by_text / select_option_by_value for <select> tags
- input_clear, input_type and input_set_value for inputs

Parameters are validated with the models in .models before they cross into
page.evaluate().
"""

import asyncio
import logging
from typing import Optional, Union

from playwright.async_api import Frame, Page, TimeoutError as PlaywrightTimeoutError

from ..config import get_config
from ..errors import ElementNotFoundError, OptionNotFoundError, SelectorTimeoutError
from .base import page_of, tool, wait_for_element
from .models import InputValue, OptionQuery

logger = logging.getLogger(__name__)

_SELECT_BY_TEXT_JS = """({ selector, text }) => {
    const select = document.querySelector(selector);
    if (!select) return 'no-element';
    const option = [...select.querySelectorAll('option')].find(o => o.text === text);
    if (!option) return 'no-option';
    option.selected = true;
    select.dispatchEvent(new Event('change'));
    return 'selected';
}"""

_CLEAR_JS = """selector => {
    const el = document.querySelector(selector);
    if (!el) return false;
    el.value = '';
    return true;
}"""

_SET_VALUE_JS = """({ selector, value }) => {
    const controls = [...document.querySelectorAll(selector)];
    if (controls.length === 0) return 'no-element';
    const first = controls[0];
    const type = (first.type || '').toLowerCase();
    if (type === 'radio' || type === 'checkbox') {
        const match = controls.find(c => c.value === value);
        if (!match) return 'no-option';
        match.checked = true;
        match.dispatchEvent(new Event('change', { bubbles: true }));
        return 'checked';
    }
    first.value = value;
    first.dispatchEvent(new Event('input', { bubbles: true }));
    first.dispatchEvent(new Event('change', { bubbles: true }));
    return 'set';
}"""


async def _click_if_possible(
    page: Union[Page, Frame], selector: str, timeout_ms: int
) -> None:
    """
    Click selector, tolerating elements that cannot take a native click.

    Native SELECTs hidden behind custom dropdown widgets never become
    visible, yet their options can still be picked from script.
    """
    try:
        await page.click(selector, timeout=timeout_ms)
    except PlaywrightTimeoutError:
        logger.debug(f"[Select] {selector} is not clickable, continuing without the click")


@tool(
    name="select_option_by_text",
    description="Open a <select>, choose the option whose visible text equals the given text and fire its change event.",
    parameters={
        "type": "object",
        "properties": {
            "selector": {
                "type": "string",
                "description": "CSS selector of the SELECT tag",
            },
            "text": {
                "type": "string",
                "description": "Exact visible text of the OPTION tag",
            },
            "settle_ms": {
                "type": "integer",
                "description": "Pause between steps (default: 1300)",
                "minimum": 0,
            },
        },
        "required": ["selector", "text"],
    },
)
async def select_option_by_text(
    page: Union[Page, Frame],
    selector: str,
    text: str,
    settle_ms: Optional[int] = None,
    timeout_ms: Optional[int] = None,
) -> None:
    """
    Click the SELECT tag and then choose the OPTION with the text.

    Args:
        page: Playwright Page or Frame instance
        selector: CSS selector of the SELECT tag
        text: Exact visible text of the OPTION
        settle_ms: Pause after opening, after selecting and after closing
        timeout_ms: Maximum wait for the SELECT to appear, and for each click

    Raises:
        SelectorTimeoutError: the SELECT never appeared
        OptionNotFoundError: no OPTION has exactly that text
    """
    config = get_config()
    query = OptionQuery(selector=selector, text=text)
    pause = (config.select_settle_ms if settle_ms is None else settle_ms) / 1000
    timeout_ms = config.select_wait_timeout_ms if timeout_ms is None else timeout_ms

    await wait_for_element(page, query.selector, timeout_ms)
    await _click_if_possible(page, query.selector, timeout_ms)

    # wait for the options to open
    await asyncio.sleep(pause)

    status = await page.evaluate(_SELECT_BY_TEXT_JS, query.model_dump())
    if status == "no-element":
        raise ElementNotFoundError(query.selector)
    if status == "no-option":
        raise OptionNotFoundError(query.selector, query.text)
    logger.debug(f"[Select] {query.selector} -> {query.text!r}")

    await asyncio.sleep(pause)
    await _click_if_possible(page, "body", timeout_ms)
    await asyncio.sleep(pause)


@tool(
    name="select_option_by_value",
    description="Select the option of a <select> by its value attribute.",
    parameters={
        "type": "object",
        "properties": {
            "selector": {
                "type": "string",
                "description": "CSS selector of the SELECT tag",
            },
            "value": {
                "type": "string",
                "description": "Value attribute of the OPTION tag",
            },
        },
        "required": ["selector", "value"],
    },
)
async def select_option_by_value(
    page: Union[Page, Frame],
    selector: str,
    value: str,
    timeout_ms: Optional[int] = None,
) -> list[str]:
    """
    Select the option by the value.

    Returns:
        Values of the options that ended up selected
    """
    timeout_ms = get_config().element_timeout_ms if timeout_ms is None else timeout_ms
    try:
        return await page.select_option(selector, value=value, timeout=timeout_ms)
    except PlaywrightTimeoutError as e:
        raise SelectorTimeoutError(selector, timeout_ms) from e


@tool(
    name="input_clear",
    description="Clear an input field. Useful before typing a new value.",
    parameters={
        "type": "object",
        "properties": {
            "selector": {
                "type": "string",
                "description": "CSS selector of the INPUT field",
            },
        },
        "required": ["selector"],
    },
)
async def input_clear(page: Union[Page, Frame], selector: str) -> None:
    """Set the input's value to an empty string."""
    if not await page.evaluate(_CLEAR_JS, selector):
        raise ElementNotFoundError(selector)


@tool(
    name="input_type",
    description="Fill an input field by clicking it and typing with the keyboard.",
    parameters={
        "type": "object",
        "properties": {
            "selector": {
                "type": "string",
                "description": "CSS selector of the INPUT field",
            },
            "value": {
                "type": "string",
                "description": "Text to type",
            },
        },
        "required": ["selector", "value"],
    },
)
async def input_type(
    page: Union[Page, Frame],
    selector: str,
    value: str,
    timeout_ms: Optional[int] = None,
) -> None:
    """
    Fill the input field by typing into it.

    Keystrokes go to the focused element, so the field is clicked first.

    Args:
        page: Playwright Page or Frame instance
        selector: CSS selector of the INPUT field
        value: Text to type
        timeout_ms: Maximum wait for the field to appear and take the click

    Raises:
        SelectorTimeoutError: the field never appeared or never became clickable
    """
    params = InputValue(selector=selector, value=value)
    timeout_ms = get_config().element_timeout_ms if timeout_ms is None else timeout_ms

    await wait_for_element(page, params.selector, timeout_ms)
    try:
        await page.click(params.selector, timeout=timeout_ms)
    except PlaywrightTimeoutError as e:
        raise SelectorTimeoutError(params.selector, timeout_ms) from e
    await page_of(page).keyboard.type(params.value)


@tool(
    name="input_set_value",
    description="Set a form control's value directly. For radio and checkbox groups, checks the control whose value matches.",
    parameters={
        "type": "object",
        "properties": {
            "selector": {
                "type": "string",
                "description": "CSS selector of the control (or of the whole radio/checkbox group)",
            },
            "value": {
                "type": "string",
                "description": "Value to set, or value attribute of the radio/checkbox to check",
            },
        },
        "required": ["selector", "value"],
    },
)
async def input_set_value(
    page: Union[Page, Frame],
    selector: str,
    value: str,
) -> str:
    """
    Set the value of a form control without simulating keystrokes.

    Text-like controls get .value assigned followed by input and change
    events. When the first match is a radio or checkbox, every match is
    treated as one group and the control whose value attribute equals
    value is checked.

    Returns:
        "set" for text-like controls, "checked" for radio/checkbox groups

    Raises:
        ElementNotFoundError: selector matched nothing
        OptionNotFoundError: no radio/checkbox in the group has that value
    """
    params = InputValue(selector=selector, value=value)
    status = await page.evaluate(_SET_VALUE_JS, params.model_dump())

    if status == "no-element":
        raise ElementNotFoundError(params.selector)
    if status == "no-option":
        raise OptionNotFoundError(params.selector, params.value)
    return status
