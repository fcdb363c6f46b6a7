"""
Render stabilization before raster capture.

Capturing too early yields pages with headings but no body text on slow
machines, so the page is walked through font loading, forced layout, paint
frames and a settling delay first. None of the steps may raise.
"""

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any, Protocol

from jd_renderer.core.config import settings
from jd_renderer.log.logging import logger

WAIT_FOR_FONTS_JS = """
async () => {
    if (document.fonts && document.fonts.ready) {
        await document.fonts.ready;
    }
}
"""

FORCE_REFLOW_JS = """
() => new Promise((resolve) => {
    const height = document.body ? document.body.offsetHeight : 0;
    requestAnimationFrame(() => resolve(height));
})
"""

WAIT_FOR_PAINT_JS = """
() => new Promise((resolve) => {
    requestAnimationFrame(() => requestAnimationFrame(() => resolve(true)));
})
"""

RENDER_DIAGNOSTICS_JS = """
() => {
    const selector = 'p, li, span, h1, h2, h3, h4, td, div';
    const textElements = Array.from(document.querySelectorAll(selector))
        .filter((el) => el.childNodes.length && el.innerText && el.innerText.trim().length > 0);
    const root = document.scrollingElement || document.documentElement;
    return { textElements: textElements.length, scrollHeight: root ? root.scrollHeight : 0 };
}
"""


class RenderStabilizer(Protocol):
    async def stabilize(self, page: Any) -> None: ...


class NoopStabilizer:
    """Returns immediately; for tests and for callers that already waited."""

    async def stabilize(self, page: Any) -> None:
        return None


class PageStabilizer:
    """Waits until a Playwright page is safe to screenshot."""

    def __init__(
        self,
        reflow_passes: int | None = None,
        settle_delay: float | None = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        self.reflow_passes = settings.reflow_passes if reflow_passes is None else reflow_passes
        self.settle_delay = settings.settle_delay if settle_delay is None else settle_delay
        self._sleep = sleep

    async def _run_step(self, page: Any, step: str, script: str) -> Any:
        try:
            return await page.evaluate(script)
        except Exception as e:
            logger.warning(
                "Render stabilization step {step} skipped: {error}",
                step=step,
                error=str(e),
                event_type="render_stabilize_step_failed",
            )
            return None

    async def stabilize(self, page: Any) -> None:
        await self._run_step(page, "fonts", WAIT_FOR_FONTS_JS)

        for _ in range(self.reflow_passes):
            await self._run_step(page, "reflow", FORCE_REFLOW_JS)

        await self._run_step(page, "paint", WAIT_FOR_PAINT_JS)

        if self.settle_delay > 0:
            await self._sleep(self.settle_delay)

        diagnostics = await self._run_step(page, "diagnostics", RENDER_DIAGNOSTICS_JS)
        if not isinstance(diagnostics, dict):
            return
        if diagnostics.get("textElements", 0) == 0:
            logger.warning(
                "No text rendered before capture",
                scroll_height=diagnostics.get("scrollHeight"),
                event_type="render_no_text",
            )
        else:
            logger.debug(
                "Render stabilized",
                text_elements=diagnostics.get("textElements"),
                scroll_height=diagnostics.get("scrollHeight"),
                event_type="render_stabilized",
            )
