#!/usr/bin/env python
"""
Infinite Feed Example

Scrolls a page that loads more items as you scroll, until no new items
appear, then saves a full-page screenshot.

Usage:
    python examples/infinite_feed.py URL "CSS selector of the last item"

Requirements:
    - page_plus installed: pip install -e .
    - Chromium for Playwright: playwright install chromium
"""

import asyncio
import sys

from playwright.async_api import async_playwright
from rich.console import Console

from page_plus import autoscroll, configure_logging, save_screenshot


async def main(url: str, last_item: str):
    """Autoscroll the feed and screenshot the result."""
    configure_logging(rich=True)
    console = Console()

    async with async_playwright() as p:
        browser = await p.chromium.launch(headless=False)
        page = await browser.new_page()
        await page.goto(url)

        with console.status("Scrolling until no new content loads..."):
            result = await autoscroll(page, last_item, max_scrolls=50)

        console.print(f"[green]Scrolled {result.scroll_count} times[/green]")
        console.print(f"Last item: {result.last_content!r}")

        path = await save_screenshot(page, "screenshots", "feed")
        console.print(f"Screenshot saved to {path}")

        await browser.close()


if __name__ == "__main__":
    if len(sys.argv) != 3:
        print(__doc__)
        sys.exit(1)
    asyncio.run(main(sys.argv[1], sys.argv[2]))
