"""
Exceptions

Common exception classes raised by page_plus operations.

All errors derive from PagePlusError so callers can catch the whole family.
Messages always name the selector, XPath expression, URL or text involved.
"""

from pathlib import Path
from typing import Optional, Union


class PagePlusError(Exception):
    """Base exception for the entire library."""


class ElementNotFoundError(PagePlusError):
    """A selector or XPath expression matched no element."""

    def __init__(self, selector: str, message: Optional[str] = None):
        self.selector = selector
        super().__init__(message or f"No element matches {selector}")


class WaitTimeoutError(PagePlusError):
    """A bounded wait exceeded its allotted time."""

    def __init__(self, message: str, timeout_ms: Optional[int] = None):
        self.timeout_ms = timeout_ms
        super().__init__(message)


class SelectorTimeoutError(WaitTimeoutError, ElementNotFoundError):
    """An element never appeared, or never took a click, within the timeout."""

    def __init__(self, selector: str, timeout_ms: int):
        self.selector = selector
        self.timeout_ms = timeout_ms
        PagePlusError.__init__(
            self, f"No element matches {selector} after {timeout_ms}ms"
        )


class TextNotFoundError(WaitTimeoutError):
    """The page never contained the expected text."""

    def __init__(self, url: str, text: str, timeout_ms: int):
        self.url = url
        self.text = text
        super().__init__(
            f'Page {url} does not contain "{text}" text!', timeout_ms=timeout_ms
        )


class OptionNotFoundError(PagePlusError):
    """No option (or radio/checkbox value) matched the requested one."""

    def __init__(self, selector: str, option: str):
        self.selector = selector
        self.option = option
        super().__init__(f'No option "{option}" in {selector}')


class PersistenceError(PagePlusError):
    """Reading or writing a cookie, storage or screenshot file failed."""

    def __init__(self, path: Union[str, Path], reason: str):
        self.path = Path(path)
        super().__init__(f"{reason}: {path}")


class ScrollCancelled(PagePlusError):
    """Raised when a scroll loop is cancelled via CancellationToken."""
