"""
Raster capture and PDF pagination.

PageRasterizer renders markup in an isolated browser page and returns one
tall PNG. Paginator slices that image into A4-height bands and assembles a
compressed multi-page PDF from JPEG-encoded bands.
"""

import io
from dataclasses import dataclass

from PIL import Image
from reportlab.lib.pagesizes import A4
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from jd_renderer.core.config import settings
from jd_renderer.log.logging import logger
from jd_renderer.services.stabilizer import NoopStabilizer, RenderStabilizer

A4_WIDTH_MM = 210
A4_HEIGHT_MM = 297
WHITE = (255, 255, 255)


class RasterizationError(Exception):
    """The document could not be rendered to an image or assembled into a PDF."""
    pass


@dataclass(frozen=True)
class Band:
    """A page-height horizontal strip of the captured image."""

    index: int
    top: int
    height: int  # full page height in pixels
    content_height: int  # rows of the capture inside this band

    @property
    def bottom(self) -> int:
        return self.top + self.content_height


def page_height_for_width(width_px: int) -> int:
    """Pixel height of one A4 page for a capture of the given width."""
    return round(width_px * A4_HEIGHT_MM / A4_WIDTH_MM)


def plan_bands(image_height: int, page_height: int) -> list[Band]:
    """
    Split an image of ``image_height`` rows into consecutive page bands.

    Bands never overlap or skip rows; only the last band may be short.
    """
    if page_height <= 0:
        raise ValueError("page_height must be positive")
    bands = []
    top = 0
    while top < image_height:
        content_height = min(page_height, image_height - top)
        bands.append(Band(index=len(bands), top=top, height=page_height, content_height=content_height))
        top += page_height
    return bands


def flatten_to_rgb(image: Image.Image) -> Image.Image:
    """Composite any transparency onto white and drop the alpha channel."""
    if image.mode in ("RGBA", "LA") or (image.mode == "P" and "transparency" in image.info):
        rgba = image.convert("RGBA")
        background = Image.new("RGB", rgba.size, WHITE)
        background.paste(rgba, mask=rgba.getchannel("A"))
        return background
    return image.convert("RGB")


def encode_jpeg(image: Image.Image, quality: int) -> bytes:
    buffer = io.BytesIO()
    image.save(buffer, format="JPEG", quality=quality, optimize=True)
    return buffer.getvalue()


class Paginator:
    """Turns one tall capture into a multi-page A4 PDF."""

    def __init__(self, jpeg_quality: int | None = None):
        self.jpeg_quality = jpeg_quality or settings.jpeg_quality

    def paginate(self, png_bytes: bytes) -> tuple[bytes, int]:
        """
        Slice the capture into pages and assemble the PDF.

        Args:
            png_bytes: The full-page capture.

        Returns:
            tuple[bytes, int]: PDF bytes and page count.

        Raises:
            RasterizationError: If the capture is empty or unreadable.
        """
        try:
            with Image.open(io.BytesIO(png_bytes)) as captured:
                captured.load()
                image = flatten_to_rgb(captured)
        except (OSError, ValueError) as e:
            raise RasterizationError(f"Unreadable capture: {e}") from e

        width_px, height_px = image.size
        if width_px == 0 or height_px == 0:
            raise RasterizationError("Empty capture")

        page_height_px = page_height_for_width(width_px)
        bands = plan_bands(height_px, page_height_px)
        page_width_pt, page_height_pt = A4

        buffer = io.BytesIO()
        # fixed creation date and document ID: equal captures give equal bytes
        pdf = canvas.Canvas(buffer, pagesize=A4, pageCompression=1, invariant=1)
        for band in bands:
            tile = image.crop((0, band.top, width_px, band.bottom))
            drawn_height = page_height_pt * band.content_height / band.height
            pdf.drawImage(
                ImageReader(io.BytesIO(encode_jpeg(tile, self.jpeg_quality))),
                0,
                page_height_pt - drawn_height,
                width=page_width_pt,
                height=drawn_height,
            )
            pdf.showPage()
        pdf.save()

        logger.debug(
            "Paginated capture",
            width=width_px,
            height=height_px,
            pages=len(bands),
            event_type="pdf_paginated",
        )
        return buffer.getvalue(), len(bands)


class PageRasterizer:
    """Renders markup off-screen and captures it as a single PNG."""

    def __init__(self, browser, stabilizer: RenderStabilizer | None = None):
        self.browser = browser
        self.stabilizer = stabilizer or NoopStabilizer()

    async def capture(self, markup: str) -> bytes:
        """
        Render the markup and take a full-page screenshot.

        Raises:
            RasterizationError: If the page cannot be rendered or captured.
        """
        try:
            async with self.browser.page() as page:
                await page.set_content(markup, wait_until="load")
                await self.stabilizer.stabilize(page)
                return await page.screenshot(full_page=True, type="png", omit_background=False)
        except Exception as e:
            raise RasterizationError(f"Capture failed: {e}") from e
