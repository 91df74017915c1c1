"""
Data models for page operations.

This module defines Pydantic models validated at the call boundary before
anything crosses into page.evaluate():
- StorageType: Which Web Storage namespace to read or write
- OptionQuery: A <select> selector plus the visible option text to pick
- TextQuery: An XPath prefix plus the text its element must hold
- InputValue: A form control selector plus the value to set
- AutoscrollOptions / ScrollToBottomOptions: Scroll loop tuning
- AutoscrollResult / ScrollToBottomResult: Scroll loop summaries
"""

from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class StorageType(str, Enum):
    """Web Storage namespace. The value is the window property name."""

    LOCAL = "localStorage"
    SESSION = "sessionStorage"


def xpath_literal(text: str) -> str:
    """
    Quote text as an XPath 1.0 string literal.

    XPath has no escape sequences, so text holding both quote kinds is
    assembled with concat().

    >>> xpath_literal('Sign in')
    '"Sign in"'
    >>> xpath_literal('Say "hi"')
    '\\'Say "hi"\\''
    """
    if '"' not in text:
        return f'"{text}"'
    if "'" not in text:
        return f"'{text}'"
    parts = text.split('"')
    return "concat(" + ", '\"', ".join(f'"{part}"' for part in parts) + ")"


class OptionQuery(BaseModel):
    """Select an <option> by its visible text inside a <select>."""

    model_config = ConfigDict(frozen=True)

    selector: str = Field(min_length=1, description="CSS selector of the SELECT tag")
    text: str = Field(description="Visible text of the OPTION tag")


class TextQuery(BaseModel):
    """Element under an XPath prefix whose text equals or contains a string.

    Validation Rules:
    - xpath must be non-empty, e.g. //ul[@id="allBsnsList"]/li/a
    - exact=False matches text() containing the string
    """

    model_config = ConfigDict(frozen=True)

    xpath: str = Field(min_length=1)
    text: str
    exact: bool = False

    def expression(self) -> str:
        """Build the full XPath expression with the text predicate."""
        literal = xpath_literal(self.text)
        if self.exact:
            return f"{self.xpath}[text()={literal}]"
        return f"{self.xpath}[contains(text(), {literal})]"


class InputValue(BaseModel):
    """Value to put into a form control (text input, radio or checkbox group)."""

    model_config = ConfigDict(frozen=True)

    selector: str = Field(min_length=1)
    value: str


class AutoscrollOptions(BaseModel):
    """Tuning for the content-equality autoscroll loop.

    settle_ms and nudge_px were tuned empirically for lazy-loading feeds.
    """

    selector: str = Field(min_length=1, description="CSS selector of the last repeating item")
    interval_ms: int = Field(ge=0, description="Delay before every tick")
    settle_ms: int = Field(ge=0, description="Wait after scrolling the item into view")
    nudge_px: int = Field(description="Pixels to scroll back up to fire scroll listeners")
    max_scrolls: Optional[int] = Field(default=None, ge=1)


class ScrollToBottomOptions(BaseModel):
    """Tuning for the offset-equality scroll-to-bottom loop."""

    interval_ms: int = Field(ge=0, description="Delay before every tick")
    max_scrolls: Optional[int] = Field(default=None, ge=1)


class AutoscrollResult(BaseModel):
    """Summary of a finished autoscroll."""

    last_content: Optional[str] = None
    """Text content of the last item when the loop stopped."""

    scroll_count: int = Field(ge=0, default=0)
    """Number of scroll steps made."""

    reached_end: bool = True
    """False when the loop stopped on max_scrolls rather than stagnation."""


class ScrollToBottomResult(BaseModel):
    """Summary of a finished scroll to bottom."""

    scroll_top: float = -1
    """Vertical scroll offset when the loop stopped."""

    scroll_count: int = Field(ge=0, default=0)
    """Number of ticks that moved the page."""

    reached_end: bool = True
    """False when the loop stopped on max_scrolls rather than stagnation."""
