"""
Base Tool Infrastructure

Provides the foundation for page operations:
- Tool decorator for registration
- ToolResult for standardized responses from invoke_tool
- Tool registry for discovery
- Page resolution for operations that need page-level capabilities
- wait_for_element, which turns Playwright timeouts into SelectorTimeoutError

Registered operations keep their normal behavior when awaited directly and
raise PagePlusError subclasses on failure. invoke_tool() is the name-based
entry point that folds those failures into a ToolResult.
"""

import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional, Union

from playwright.async_api import (
    ElementHandle,
    Error as PlaywrightError,
    Frame,
    Page,
    TimeoutError as PlaywrightTimeoutError,
)
from pydantic import ValidationError

from ..errors import ElementNotFoundError, PagePlusError, SelectorTimeoutError

logger = logging.getLogger(__name__)


@dataclass
class ToolResult:
    """
    Standardized result from invoke_tool.

    Attributes:
        success: Whether the operation completed
        data: Operation return value
        error: Error message if failed
        metadata: Additional context (error type, tool name)
    """

    success: bool
    data: Any = None
    error: Optional[str] = None
    metadata: dict[str, Any] = field(default_factory=dict)

    def __str__(self) -> str:
        if self.success:
            return f"Success: {self.data}"
        return f"Error: {self.error}"


# Tool registry for all registered operations
_TOOL_REGISTRY: dict[str, dict[str, Any]] = {}


def page_of(target: Union[Page, Frame]) -> Page:
    """
    Return the Page that owns a Page or Frame handle.

    Keyboard, cookies, screenshots and network events live on the page,
    so frame-scoped calls resolve to it.
    """
    if isinstance(target, Frame):
        return target.page
    return target


async def wait_for_element(
    target: Union[Page, Frame],
    selector: str,
    timeout_ms: int,
    description: Optional[str] = None,
) -> ElementHandle:
    """
    Wait until selector is attached and return its handle.

    Args:
        target: Playwright Page or Frame instance
        selector: Playwright selector (CSS, or "xpath=..." for XPath)
        timeout_ms: Maximum wait time in ms
        description: Name used in error messages (defaults to selector)

    Raises:
        SelectorTimeoutError: nothing matched within timeout_ms
        ElementNotFoundError: the wait returned no handle
    """
    description = description or selector
    try:
        handle = await target.wait_for_selector(
            selector, state="attached", timeout=timeout_ms
        )
    except PlaywrightTimeoutError as e:
        raise SelectorTimeoutError(description, timeout_ms) from e

    if handle is None:
        raise ElementNotFoundError(description)
    return handle


def tool(
    name: str,
    description: str,
    parameters: Optional[dict[str, Any]] = None,
):
    """
    Decorator to register a coroutine function as a page operation.

    The function is returned unchanged apart from the attached metadata.

    Args:
        name: Tool identifier (e.g., "autoscroll")
        description: Human-readable description of what the tool does
        parameters: JSON Schema for tool parameters (page excluded)

    Example:
        >>> @tool(
        ...     name="input_clear",
        ...     description="Clear an input field",
        ...     parameters={
        ...         "type": "object",
        ...         "properties": {"selector": {"type": "string"}},
        ...         "required": ["selector"],
        ...     },
        ... )
        ... async def input_clear(page, selector: str) -> None:
        ...     ...
    """

    def decorator(func: Callable) -> Callable:
        func.tool_name = name
        func.tool_description = description
        func.tool_parameters = parameters

        if name in _TOOL_REGISTRY and _TOOL_REGISTRY[name]["function"] is not func:
            logger.debug(f"Replacing registered tool '{name}'")

        _TOOL_REGISTRY[name] = {
            "name": name,
            "description": description,
            "parameters": parameters or {},
            "function": func,
        }
        return func

    return decorator


def get_tool(name: str) -> Optional[dict[str, Any]]:
    """Get a tool by name from the registry."""
    return _TOOL_REGISTRY.get(name)


def get_all_tools() -> dict[str, dict[str, Any]]:
    """Get all registered tools."""
    return _TOOL_REGISTRY.copy()


def get_tool_schemas() -> list[dict[str, Any]]:
    """
    Get tool schemas in a format suitable for LLM function calling.

    Returns list of tool definitions with name, description, and parameters.
    """
    return [
        {
            "name": info["name"],
            "description": info["description"],
            "input_schema": info["parameters"],
        }
        for info in _TOOL_REGISTRY.values()
    ]


async def invoke_tool(name: str, target: Any, **kwargs: Any) -> ToolResult:
    """
    Invoke a registered operation by name.

    Args:
        name: Registered tool name
        target: Page, Frame or ElementHandle passed as the first argument
        **kwargs: Operation parameters

    Returns:
        ToolResult with the operation's return value, or the error message
        when it raised PagePlusError, a pydantic ValidationError or a
        Playwright error
    """
    info = _TOOL_REGISTRY.get(name)
    if info is None:
        return ToolResult(
            success=False,
            error=f"Unknown tool: {name}",
            metadata={"tool": name},
        )

    try:
        data = await info["function"](target, **kwargs)
    except (PagePlusError, ValidationError, PlaywrightError, ValueError) as e:
        logger.info(f"[Tool] {name} failed: {e}")
        return ToolResult(
            success=False,
            error=str(e),
            metadata={"tool": name, "error_type": type(e).__name__},
        )

    if hasattr(data, "model_dump"):
        data = data.model_dump()
    return ToolResult(success=True, data=data, metadata={"tool": name})
