"""
page_plus

Convenience operations for Playwright pages and frames: autoscrolling,
form controls, clicking by text, waiting on page state, screenshots and
cookie/storage persistence.

Every operation takes the Page (or Frame) as its first argument:

    >>> from page_plus import autoscroll, cookie_save
    >>> result = await autoscroll(page, "table > tbody > tr:last-child")
    >>> await cookie_save(page, "state/cookies.json")
"""

from .cancellation import CancellationToken
from .config import PagePlusConfig, configure_logging, get_config, get_logger, set_config
from .errors import (
    ElementNotFoundError,
    OptionNotFoundError,
    PagePlusError,
    PersistenceError,
    ScrollCancelled,
    SelectorTimeoutError,
    TextNotFoundError,
    WaitTimeoutError,
)
from .tools import (
    AutoscrollResult,
    ScrollToBottomResult,
    StorageType,
    ToolResult,
    autoscroll,
    click_element_with_text,
    click_element_with_text_bubbling,
    cookie_load,
    cookie_save,
    element_to_html,
    get_tool_schemas,
    input_clear,
    input_set_value,
    input_type,
    invoke_tool,
    save_screenshot,
    scroll_to_bottom,
    select_option_by_text,
    select_option_by_value,
    smooth_scroll_to_bottom,
    storage_load,
    storage_save,
    wait_for_text_on_page,
    wait_for_url_contains,
)

__version__ = "0.1.0"

__all__ = [
    "CancellationToken",
    "PagePlusConfig",
    "configure_logging",
    "get_config",
    "get_logger",
    "set_config",
    "ElementNotFoundError",
    "OptionNotFoundError",
    "PagePlusError",
    "PersistenceError",
    "ScrollCancelled",
    "SelectorTimeoutError",
    "TextNotFoundError",
    "WaitTimeoutError",
    "AutoscrollResult",
    "ScrollToBottomResult",
    "StorageType",
    "ToolResult",
    "autoscroll",
    "click_element_with_text",
    "click_element_with_text_bubbling",
    "cookie_load",
    "cookie_save",
    "element_to_html",
    "get_tool_schemas",
    "input_clear",
    "input_set_value",
    "input_type",
    "invoke_tool",
    "save_screenshot",
    "scroll_to_bottom",
    "select_option_by_text",
    "select_option_by_value",
    "smooth_scroll_to_bottom",
    "storage_load",
    "storage_save",
    "wait_for_text_on_page",
    "wait_for_url_contains",
]
