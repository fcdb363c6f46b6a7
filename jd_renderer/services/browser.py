"""
Shared headless Chromium for rendering and image loading.

The browser process is launched lazily and reused; every caller gets its own
context and page, which are closed when the caller is done, on success or error.
"""

import asyncio
from contextlib import asynccontextmanager

from playwright.async_api import Browser, Page, Playwright, async_playwright

from jd_renderer.core.config import settings
from jd_renderer.log.logging import logger


class BrowserSession:
    """Lazily started Playwright Chromium with per-call isolated pages."""

    def __init__(
        self,
        headless: bool | None = None,
        viewport_width: int | None = None,
        viewport_height: int | None = None,
        device_scale_factor: float | None = None,
    ):
        self.headless = settings.browser_headless if headless is None else headless
        self.viewport_width = viewport_width or settings.render_viewport_width
        self.viewport_height = viewport_height or settings.render_viewport_height
        self.device_scale_factor = device_scale_factor or settings.render_scale
        self._playwright: Playwright | None = None
        self._browser: Browser | None = None
        self._lock = asyncio.Lock()

    @property
    def is_running(self) -> bool:
        return self._browser is not None and self._browser.is_connected()

    async def start(self) -> None:
        """Launch Chromium unless it is already running."""
        async with self._lock:
            if self.is_running:
                return
            self._playwright = await async_playwright().start()
            self._browser = await self._playwright.chromium.launch(headless=self.headless)
            logger.info("Headless browser started", event_type="browser_started")

    async def stop(self) -> None:
        async with self._lock:
            if self._browser is not None:
                await self._browser.close()
                self._browser = None
            if self._playwright is not None:
                await self._playwright.stop()
                self._playwright = None
                logger.info("Headless browser stopped", event_type="browser_stopped")

    @asynccontextmanager
    async def page(self):
        """Yield a fresh page sized to one A4 page width."""
        await self.start()
        context = await self._browser.new_context(
            viewport={"width": self.viewport_width, "height": self.viewport_height},
            device_scale_factor=self.device_scale_factor,
        )
        try:
            page: Page = await context.new_page()
            yield page
        finally:
            await context.close()
