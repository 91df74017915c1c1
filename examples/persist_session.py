#!/usr/bin/env python
"""
Persist Session Example

Restores cookies and localStorage saved by a previous run, lets you browse
(log in, accept banners, ...), then saves them again for the next run.

Usage:
    python examples/persist_session.py https://example.com

Requirements:
    - page_plus installed: pip install -e .
    - Chromium for Playwright: playwright install chromium
"""

import asyncio
import sys
from pathlib import Path

from playwright.async_api import async_playwright
from rich.console import Console

from page_plus import (
    StorageType,
    configure_logging,
    cookie_load,
    cookie_save,
    storage_load,
    storage_save,
)

STATE_DIR = Path(".page-plus-state")


async def main(url: str):
    """Load saved state, wait for the user, save state."""
    configure_logging()
    console = Console()

    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=False)
        page = await browser.new_page()

        # cookies can be set before navigation, storage needs the origin loaded
        restored = await cookie_load(page, STATE_DIR / "cookies.json")
        await page.goto(url)
        entries = await storage_load(page, STATE_DIR / "local.json", StorageType.LOCAL)
        console.print(f"Restored {restored} cookies and {len(entries)} storage keys")

        await asyncio.to_thread(input, "Browse, then press Enter to save the session...")

        cookies = await cookie_save(page, STATE_DIR / "cookies.json")
        saved = await storage_save(page, STATE_DIR / "local.json", StorageType.LOCAL)
        console.print(
            f"[green]Saved {len(cookies)} cookies and {len(saved)} storage keys "
            f"to {STATE_DIR}[/green]"
        )

        await browser.close()


if __name__ == "__main__":
    if len(sys.argv) != 2:
        print(__doc__)
        sys.exit(1)
    asyncio.run(main(sys.argv[1]))
