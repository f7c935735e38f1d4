"""
Browser session

Owns the Playwright driver, browser, context and page for one server. Each
server builds its own session and hands it to the tool layer.
"""

import logging
from typing import Any, Dict, Optional

from playwright.async_api import (
    Browser, BrowserContext, Error as PlaywrightError, Page, Playwright, async_playwright,
)

from .config import BrowserConfig


class BrowserSession:
    """Lazily started Playwright browser with a single working page"""

    def __init__(self, config: Optional[BrowserConfig] = None):
        self.config = config or BrowserConfig()
        self.logger = logging.getLogger("BrowserSession")

        self._pw: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._context: Optional[BrowserContext] = None
        self._page: Optional[Page] = None

    async def ensure_started(self) -> None:
        if self._pw is None:
            self._pw = await async_playwright().start()
        if self._browser is None:
            launcher = getattr(self._pw, self.config.browser_type)
            self.logger.info(
                f"Launching {self.config.browser_type} (headless={self.config.headless})"
            )
            self._browser = await launcher.launch(headless=self.config.headless)
        if self._context is None:
            self._context = await self._browser.new_context(viewport={
                "width": self.config.viewport_width,
                "height": self.config.viewport_height,
            })
        if self._page is None or self._page.is_closed():
            self._page = await self._context.new_page()

    async def get_page(self) -> Page:
        await self.ensure_started()
        return self._page

    async def navigate(self, url: str, wait_until: Optional[str] = None,
                       timeout: Optional[int] = None) -> Dict[str, Any]:
        page = await self.get_page()
        response = await page.goto(
            url,
            wait_until=wait_until or self.config.wait_until,
            timeout=self.config.navigation_timeout if timeout is None else timeout,
        )
        return {
            "url": page.url,
            "title": await page.title(),
            "http_status": response.status if response else None,
        }

    async def reset(self, driver_lost: bool = False) -> None:
        """Drop browser objects after a page or connection loss; the next call relaunches.

        A browser that is still connected is closed first so it does not
        outlive the session. With driver_lost the Playwright driver is
        dropped as well.
        """
        self.logger.warning(f"Resetting browser session state (driver_lost={driver_lost})")
        browser = self._browser
        self._browser = None
        self._context = None
        self._page = None

        if browser is not None and browser.is_connected():
            try:
                await browser.close()
            except PlaywrightError as e:
                self.logger.warning(f"Failed to close browser during reset: {e}")

        if driver_lost and self._pw is not None:
            pw = self._pw
            self._pw = None
            try:
                await pw.stop()
            except PlaywrightError as e:
                self.logger.warning(f"Failed to stop Playwright driver during reset: {e}")

    async def close(self) -> None:
        if self._browser is not None and self._browser.is_connected():
            await self._browser.close()
        self._browser = None
        self._context = None
        self._page = None
        if self._pw is not None:
            await self._pw.stop()
            self._pw = None
        self.logger.info("Browser session closed")
