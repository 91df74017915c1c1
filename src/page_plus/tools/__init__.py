"""
Page Tools

Collection of operations layered on a Playwright Page or Frame:
- Scroll (autoscroll, scroll to bottom, smooth scroll)
- Forms (select options, clear/type/set inputs)
- Elements (click by text, outer HTML)
- Wait (text on page, response URL)
- Screenshot
- Storage (cookies, localStorage, sessionStorage)
"""

from .scroll import (
    autoscroll,
    scroll_to_bottom,
    smooth_scroll_to_bottom,
    ScrollState,
)
from .forms import (
    select_option_by_text,
    select_option_by_value,
    input_clear,
    input_type,
    input_set_value,
)
from .elements import (
    click_element_with_text,
    click_element_with_text_bubbling,
    element_to_html,
)
from .wait import (
    wait_for_text_on_page,
    wait_for_url_contains,
)
from .screenshot import (
    save_screenshot,
    screenshot_path,
)
from .storage import (
    cookie_save,
    cookie_load,
    storage_save,
    storage_load,
)
from .models import (
    StorageType,
    OptionQuery,
    TextQuery,
    InputValue,
    AutoscrollOptions,
    AutoscrollResult,
    ScrollToBottomOptions,
    ScrollToBottomResult,
    xpath_literal,
)
from .base import (
    ToolResult,
    tool,
    get_tool,
    get_all_tools,
    get_tool_schemas,
    invoke_tool,
    page_of,
)

__all__ = [
    # Scroll
    "autoscroll",
    "scroll_to_bottom",
    "smooth_scroll_to_bottom",
    "ScrollState",
    # Forms
    "select_option_by_text",
    "select_option_by_value",
    "input_clear",
    "input_type",
    "input_set_value",
    # Elements
    "click_element_with_text",
    "click_element_with_text_bubbling",
    "element_to_html",
    # Wait
    "wait_for_text_on_page",
    "wait_for_url_contains",
    # Screenshot
    "save_screenshot",
    "screenshot_path",
    # Storage
    "cookie_save",
    "cookie_load",
    "storage_save",
    "storage_load",
    # Models
    "StorageType",
    "OptionQuery",
    "TextQuery",
    "InputValue",
    "AutoscrollOptions",
    "AutoscrollResult",
    "ScrollToBottomOptions",
    "ScrollToBottomResult",
    "xpath_literal",
    # Base
    "ToolResult",
    "tool",
    "get_tool",
    "get_all_tools",
    "get_tool_schemas",
    "invoke_tool",
    "page_of",
]
