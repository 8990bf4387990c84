"""Lazily started Playwright browser shared by the page tools."""

from __future__ import annotations

import asyncio
import logging
import subprocess
import sys
from typing import Optional, Sequence

from playwright.async_api import (
    Browser,
    Error as PlaywrightError,
    Page,
    Playwright,
    async_playwright,
)

from .config import DEFAULT_PAGE_TIMEOUT

logger = logging.getLogger("scraper_builder")

DEFAULT_LAUNCH_ARGS = ("--no-sandbox",)


def install_chromium() -> None:
    """Download the Chromium build Playwright expects."""
    logger.warning("Chromium not found. Installing...")
    subprocess.run(
        [sys.executable, "-m", "playwright", "install", "chromium"],
        check=True,
    )
    logger.warning("Chromium installed successfully.")


class BrowserSession:
    """Owns at most one browser and one page.

    Nothing is started until :meth:`get_page` is first awaited. The owner is
    responsible for calling :meth:`close` on shutdown.
    """

    def __init__(
        self,
        headed: bool = False,
        page_timeout: float = DEFAULT_PAGE_TIMEOUT,
        launch_args: Sequence[str] = DEFAULT_LAUNCH_ARGS,
    ) -> None:
        self.headed = headed
        self.page_timeout = page_timeout
        self.launch_args = list(launch_args)
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._page: Optional[Page] = None

    def has_active_page(self) -> bool:
        return self._page is not None

    async def get_page(self) -> Page:
        if self._browser is None:
            self._browser = await self._launch_browser()
        if self._page is None:
            page = await self._browser.new_page()
            page.set_default_timeout(self.page_timeout * 1000)
            self._page = page
        return self._page

    async def _launch_browser(self) -> Browser:
        if self._playwright is None:
            self._playwright = await async_playwright().start()
        chromium = self._playwright.chromium
        try:
            return await chromium.launch(headless=not self.headed, args=self.launch_args)
        except PlaywrightError as exc:
            logger.debug("Chromium launch failed: %s", exc)
            await asyncio.to_thread(install_chromium)
            return await chromium.launch(headless=not self.headed, args=self.launch_args)

    async def close(self) -> None:
        """Release the page, the browser and Playwright itself."""
        page, self._page = self._page, None
        browser, self._browser = self._browser, None
        playwright, self._playwright = self._playwright, None

        if page is not None:
            try:
                await page.close()
            except PlaywrightError as exc:
                logger.warning("Failed to close page: %s", exc)
        if browser is not None:
            try:
                await browser.close()
            except PlaywrightError as exc:
                logger.warning("Failed to close browser: %s", exc)
        if playwright is not None:
            try:
                await playwright.stop()
            except PlaywrightError as exc:
                logger.warning("Failed to stop Playwright: %s", exc)
