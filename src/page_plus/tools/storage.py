"""
Storage Tools

Persistence of browser state to JSON files (2-space indent):
- cookie_save / cookie_load: the browser context's cookie jar
- storage_save / storage_load: localStorage or sessionStorage of the page

Saving overwrites the file with a full snapshot. Loading adds each saved
entry to the live browser state and is a no-op when the file does not exist.
"""

import json
import logging
from pathlib import Path
from typing import Any, Optional, Union

from playwright.async_api import Frame, Page

from ..errors import PersistenceError
from .base import page_of, tool
from .models import StorageType

logger = logging.getLogger(__name__)

_STORAGE_DUMP_JS = """storageName => {
    const storage = window[storageName];
    const out = {};
    for (let i = 0; i < storage.length; i += 1) {
        const key = storage.key(i);
        if (key === null) continue;
        const value = storage.getItem(key);
        out[key] = value === null ? '' : value;
    }
    return out;
}"""

_STORAGE_LOAD_JS = """([storageName, entries]) => {
    const storage = window[storageName];
    for (const [key, value] of Object.entries(entries)) {
        storage.setItem(key, value);
    }
    return Object.keys(entries).length;
}"""

_STORAGE_TYPE_PARAMETER = {
    "type": "string",
    "enum": [t.value for t in StorageType],
    "description": "Storage to use (default: localStorage)",
    "default": StorageType.LOCAL.value,
}


def _write_json(path: Union[str, Path], data: Any) -> Path:
    path = Path(path)
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2, ensure_ascii=False), encoding="utf-8")
    except OSError as e:
        raise PersistenceError(path, f"Cannot write file ({e})") from e
    return path


def _read_json(path: Union[str, Path]) -> Optional[Any]:
    """Read a JSON file, or return None when it does not exist."""
    path = Path(path)
    if not path.exists():
        logger.debug(f"[Storage] {path} does not exist, nothing to load")
        return None
    try:
        return json.loads(path.read_text(encoding="utf-8"))
    except OSError as e:
        raise PersistenceError(path, f"Cannot read file ({e})") from e
    except UnicodeDecodeError as e:
        raise PersistenceError(path, f"Not UTF-8 text ({e.reason})") from e
    except json.JSONDecodeError as e:
        raise PersistenceError(path, f"Invalid JSON ({e.msg})") from e


@tool(
    name="cookie_save",
    description="Save the browser's cookies to a JSON file.",
    parameters={
        "type": "object",
        "properties": {
            "path": {
                "type": "string",
                "description": "Cookie file path, e.g. dir/cookies.json",
            },
        },
        "required": ["path"],
    },
)
async def cookie_save(page: Union[Page, Frame], path: Union[str, Path]) -> list[dict]:
    """
    Save cookie data from the browser to a file.

    Returns:
        The cookies written
    """
    cookies = await page_of(page).context.cookies()
    written = _write_json(path, cookies)
    logger.info(f"[Cookies] saved {len(cookies)} cookies to {written}")
    return cookies


@tool(
    name="cookie_load",
    description="Load cookies from a JSON file into the browser. Does nothing if the file is missing.",
    parameters={
        "type": "object",
        "properties": {
            "path": {
                "type": "string",
                "description": "Cookie file path, e.g. dir/cookies.json",
            },
        },
        "required": ["path"],
    },
)
async def cookie_load(page: Union[Page, Frame], path: Union[str, Path]) -> int:
    """
    Get cookie data from the file and set the browser's cookies.

    Returns:
        Number of cookies added (0 when the file is missing or empty)

    Raises:
        PersistenceError: the file is unreadable or not a JSON list
    """
    cookies = _read_json(path)
    if cookies is None:
        return 0
    if not isinstance(cookies, list):
        raise PersistenceError(path, "Cookie file must hold a JSON list")

    if cookies:
        await page_of(page).context.add_cookies(cookies)
    logger.info(f"[Cookies] loaded {len(cookies)} cookies from {path}")
    return len(cookies)


@tool(
    name="storage_save",
    description="Save localStorage or sessionStorage of the page to a JSON file.",
    parameters={
        "type": "object",
        "properties": {
            "path": {
                "type": "string",
                "description": "Storage file path",
            },
            "storage_type": _STORAGE_TYPE_PARAMETER,
        },
        "required": ["path"],
    },
)
async def storage_save(
    page: Union[Page, Frame],
    path: Union[str, Path],
    storage_type: Union[StorageType, str] = StorageType.LOCAL,
) -> dict[str, str]:
    """
    Save a key -> value snapshot of the page's Web Storage.

    Args:
        page: Playwright Page or Frame instance (its origin's storage is used)
        path: File to overwrite
        storage_type: StorageType.LOCAL or StorageType.SESSION

    Returns:
        The mapping written
    """
    storage_type = StorageType(storage_type)
    entries = await page.evaluate(_STORAGE_DUMP_JS, storage_type.value)
    written = _write_json(path, entries)
    logger.info(f"[Storage] saved {len(entries)} {storage_type.value} keys to {written}")
    return entries


@tool(
    name="storage_load",
    description="Load localStorage or sessionStorage entries from a JSON file into the page. Does nothing if the file is missing.",
    parameters={
        "type": "object",
        "properties": {
            "path": {
                "type": "string",
                "description": "Storage file path",
            },
            "storage_type": _STORAGE_TYPE_PARAMETER,
        },
        "required": ["path"],
    },
)
async def storage_load(
    page: Union[Page, Frame],
    path: Union[str, Path],
    storage_type: Union[StorageType, str] = StorageType.LOCAL,
) -> dict[str, str]:
    """
    Set every key of a saved storage file on the page.

    Keys already in storage but not in the file are kept.

    Returns:
        The mapping loaded (empty when the file is missing)

    Raises:
        PersistenceError: the file is unreadable or not a JSON object of strings
    """
    storage_type = StorageType(storage_type)
    entries = _read_json(path)
    if entries is None:
        return {}
    if not isinstance(entries, dict) or not all(
        isinstance(value, str) for value in entries.values()
    ):
        raise PersistenceError(path, "Storage file must hold a JSON object of strings")

    if entries:
        await page.evaluate(_STORAGE_LOAD_JS, [storage_type.value, entries])
    logger.info(f"[Storage] loaded {len(entries)} {storage_type.value} keys from {path}")
    return entries
