"""
Configuration and Logging Setup

Provides centralized configuration and logging for page_plus.
Reads LOG_LEVEL and PAGE_PLUS_* timing overrides from environment variables
(a local .env file is honoured via python-dotenv).

Usage:
    from page_plus.config import configure_logging, get_config, get_logger

    # Configure at application startup
    configure_logging()

    # Get logger in any module
    logger = get_logger(__name__)

    # Timing defaults used when an operation parameter is left as None
    config = get_config()
"""

import logging
import os
import sys
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

# Default configuration
DEFAULT_LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
LOG_FORMAT_SIMPLE = "%(levelname)s: %(message)s"

# Valid log levels
VALID_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        print(
            f"Warning: Invalid {name} '{raw}'. Expected an integer. Using {default}.",
            file=sys.stderr,
        )
        return default


@dataclass
class PagePlusConfig:
    """
    Timing defaults for page operations.

    All durations are in milliseconds. Operations take these values when the
    matching parameter is left as None.
    """

    # Content-equality autoscroll
    autoscroll_interval_ms: int = 3400
    autoscroll_settle_ms: int = 700
    autoscroll_nudge_px: int = 10

    # Offset-equality scroll to bottom
    scroll_to_bottom_interval_ms: int = 100

    # Delay between the steps of select_option_by_text
    select_settle_ms: int = 1300
    select_wait_timeout_ms: int = 5000

    # Waits for inputs and selects before interacting with them
    element_timeout_ms: int = 30000

    # Click-by-text lookups
    click_timeout_ms: int = 13000
    click_bubbling_timeout_ms: int = 5000

    # Page state waits
    text_timeout_ms: int = 60000
    response_timeout_ms: int = 30000

    # Screenshot JPEG quality (0-100)
    screenshot_quality: int = 70

    @classmethod
    def from_env(cls) -> "PagePlusConfig":
        """
        Create PagePlusConfig from environment variables.

        Environment variables:
            PAGE_PLUS_AUTOSCROLL_INTERVAL_MS: int (default: 3400)
            PAGE_PLUS_AUTOSCROLL_SETTLE_MS: int (default: 700)
            PAGE_PLUS_AUTOSCROLL_NUDGE_PX: int (default: 10)
            PAGE_PLUS_SCROLL_TO_BOTTOM_INTERVAL_MS: int (default: 100)
            PAGE_PLUS_SELECT_SETTLE_MS: int (default: 1300)
            PAGE_PLUS_SELECT_WAIT_TIMEOUT_MS: int (default: 5000)
            PAGE_PLUS_ELEMENT_TIMEOUT_MS: int (default: 30000)
            PAGE_PLUS_CLICK_TIMEOUT_MS: int (default: 13000)
            PAGE_PLUS_CLICK_BUBBLING_TIMEOUT_MS: int (default: 5000)
            PAGE_PLUS_TEXT_TIMEOUT_MS: int (default: 60000)
            PAGE_PLUS_RESPONSE_TIMEOUT_MS: int (default: 30000)
            PAGE_PLUS_SCREENSHOT_QUALITY: int (default: 70)
        """
        load_dotenv()
        defaults = cls()
        return cls(
            autoscroll_interval_ms=_env_int(
                "PAGE_PLUS_AUTOSCROLL_INTERVAL_MS", defaults.autoscroll_interval_ms
            ),
            autoscroll_settle_ms=_env_int(
                "PAGE_PLUS_AUTOSCROLL_SETTLE_MS", defaults.autoscroll_settle_ms
            ),
            autoscroll_nudge_px=_env_int(
                "PAGE_PLUS_AUTOSCROLL_NUDGE_PX", defaults.autoscroll_nudge_px
            ),
            scroll_to_bottom_interval_ms=_env_int(
                "PAGE_PLUS_SCROLL_TO_BOTTOM_INTERVAL_MS",
                defaults.scroll_to_bottom_interval_ms,
            ),
            select_settle_ms=_env_int(
                "PAGE_PLUS_SELECT_SETTLE_MS", defaults.select_settle_ms
            ),
            select_wait_timeout_ms=_env_int(
                "PAGE_PLUS_SELECT_WAIT_TIMEOUT_MS", defaults.select_wait_timeout_ms
            ),
            element_timeout_ms=_env_int(
                "PAGE_PLUS_ELEMENT_TIMEOUT_MS", defaults.element_timeout_ms
            ),
            click_timeout_ms=_env_int(
                "PAGE_PLUS_CLICK_TIMEOUT_MS", defaults.click_timeout_ms
            ),
            click_bubbling_timeout_ms=_env_int(
                "PAGE_PLUS_CLICK_BUBBLING_TIMEOUT_MS",
                defaults.click_bubbling_timeout_ms,
            ),
            text_timeout_ms=_env_int(
                "PAGE_PLUS_TEXT_TIMEOUT_MS", defaults.text_timeout_ms
            ),
            response_timeout_ms=_env_int(
                "PAGE_PLUS_RESPONSE_TIMEOUT_MS", defaults.response_timeout_ms
            ),
            screenshot_quality=_env_int(
                "PAGE_PLUS_SCREENSHOT_QUALITY", defaults.screenshot_quality
            ),
        )


_config: Optional[PagePlusConfig] = None


def get_config() -> PagePlusConfig:
    """Get the process-wide timing defaults (loaded from env on first use)."""
    global _config
    if _config is None:
        _config = PagePlusConfig.from_env()
    return _config


def set_config(config: Optional[PagePlusConfig]) -> None:
    """
    Replace the process-wide timing defaults.

    Args:
        config: New defaults, or None to reload from the environment on next use
    """
    global _config
    _config = config


def get_log_level() -> int:
    """
    Get the log level from LOG_LEVEL environment variable.

    Returns:
        Logging level constant (e.g., logging.INFO)

    Supported values:
        DEBUG, INFO, WARNING, ERROR, CRITICAL
    """
    level_str = os.getenv("LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()

    if level_str not in VALID_LEVELS:
        # Warn about invalid level and use default
        print(
            f"Warning: Invalid LOG_LEVEL '{level_str}'. "
            f"Valid values: {', '.join(VALID_LEVELS.keys())}. "
            f"Using {DEFAULT_LOG_LEVEL}.",
            file=sys.stderr,
        )
        return VALID_LEVELS[DEFAULT_LOG_LEVEL]

    return VALID_LEVELS[level_str]


def configure_logging(
    level: Optional[int] = None,
    verbose: bool = False,
    rich: bool = False,
) -> None:
    """
    Configure logging for page_plus.

    Should be called once at application startup.

    Args:
        level: Override log level (default: from LOG_LEVEL env var)
        verbose: Use detailed format with timestamps (default: simple format)
        rich: Render records with rich's RichHandler instead of plain stderr

    Environment Variables:
        LOG_LEVEL: Set to DEBUG, INFO, WARNING, ERROR, or CRITICAL

    Example:
        from page_plus.config import configure_logging
        configure_logging()  # Uses LOG_LEVEL env var

        # For development
        configure_logging(level=logging.DEBUG, verbose=True, rich=True)
    """
    load_dotenv()

    if level is None:
        level = get_log_level()

    if rich:
        from rich.logging import RichHandler

        logging.basicConfig(
            level=level,
            format="%(message)s",
            datefmt="[%X]",
            handlers=[RichHandler(show_time=verbose, show_path=verbose)],
            force=True,
        )
    else:
        log_format = LOG_FORMAT if verbose else LOG_FORMAT_SIMPLE
        logging.basicConfig(
            level=level,
            format=log_format,
            stream=sys.stderr,
            force=True,  # Override any existing configuration
        )

    logging.getLogger("page_plus").setLevel(level)

    # Quiet noisy third-party loggers in non-debug mode
    if level > logging.DEBUG:
        logging.getLogger("playwright").setLevel(logging.WARNING)
        logging.getLogger("asyncio").setLevel(logging.WARNING)


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger for a module.

    Args:
        name: Logger name (typically __name__)

    Returns:
        Configured logger instance
    """
    return logging.getLogger(name)
