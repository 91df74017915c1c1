"""
Screenshot Tools

Full-page JPEG screenshots saved into a directory. The directory is created
when missing and the file name always ends in .jpg.
"""

import logging
from pathlib import Path
from typing import Optional, Union

from playwright.async_api import Frame, Page

from ..config import get_config
from ..errors import PersistenceError
from .base import page_of, tool

logger = logging.getLogger(__name__)

SCREENSHOT_EXTENSION = ".jpg"


def screenshot_path(dir_path: Union[str, Path], file_name: str) -> Path:
    """
    Resolve the output path of a screenshot.

    >>> screenshot_path("shots", "home").name
    'home.jpg'
    >>> screenshot_path("shots", "home.jpg").name
    'home.jpg'
    """
    if not file_name.endswith(SCREENSHOT_EXTENSION):
        file_name = file_name + SCREENSHOT_EXTENSION
    return Path(dir_path) / file_name


@tool(
    name="save_screenshot",
    description="Save a full-page JPEG screenshot into a directory, creating the directory if needed.",
    parameters={
        "type": "object",
        "properties": {
            "dir_path": {
                "type": "string",
                "description": "Directory where the screenshot is saved",
            },
            "file_name": {
                "type": "string",
                "description": "File name, with or without the .jpg extension",
            },
        },
        "required": ["dir_path", "file_name"],
    },
)
async def save_screenshot(
    page: Union[Page, Frame],
    dir_path: Union[str, Path],
    file_name: str,
    quality: Optional[int] = None,
) -> Path:
    """
    Create the screenshot image and save it into the folder.

    Args:
        page: Playwright Page or Frame instance
        dir_path: Directory for the screenshot, e.g. tmp/screenshots/checkout
        file_name: "myScreenshot.jpg" or just "myScreenshot"
        quality: JPEG quality (default: 70)

    Returns:
        Path of the written file

    Raises:
        PersistenceError: the directory could not be created
    """
    path = screenshot_path(dir_path, file_name)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise PersistenceError(path.parent, f"Cannot create screenshot directory ({e})") from e

    await page_of(page).screenshot(
        path=str(path),
        type="jpeg",
        quality=get_config().screenshot_quality if quality is None else quality,
        full_page=True,
    )
    logger.info(f"[Screenshot] saved {path}")
    return path
