"""
Logo resolution: turn a remote image URL into a self-contained data URL.

Strategies are tried in order and the first one that yields a data URL wins.
Every failure is logged and swallowed; when nothing works the resolver
returns None and the template renders a placeholder box instead.
"""

import asyncio
import base64
import io
from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence

import httpx
from PIL import Image, UnidentifiedImageError
from pydantic import BaseModel, ValidationError, field_validator

from jd_renderer.log.logging import logger

DATA_URL_PREFIX = "data:"

# Runs inside the browser page; rejects on load errors and tainted canvases.
LOAD_IMAGE_AS_DATA_URL_JS = """
(src) => new Promise((resolve, reject) => {
    const img = new Image();
    img.crossOrigin = 'anonymous';
    img.onload = () => {
        try {
            const canvas = document.createElement('canvas');
            canvas.width = img.naturalWidth || img.width;
            canvas.height = img.naturalHeight || img.height;
            const ctx = canvas.getContext('2d');
            if (!ctx) {
                throw new Error('Could not get canvas context');
            }
            ctx.drawImage(img, 0, 0);
            resolve(canvas.toDataURL('image/png'));
        } catch (error) {
            reject(error);
        }
    };
    img.onerror = () => reject(new Error('Could not load image: ' + src));
    img.src = src;
})
"""


class ImageStrategyError(Exception):
    """A single resolution strategy failed; the next one should be tried."""
    pass


def is_data_url(value: str | None) -> bool:
    return bool(value) and value.startswith(DATA_URL_PREFIX)


def to_data_url(content: bytes, media_type: str) -> str:
    encoded = base64.b64encode(content).decode("ascii")
    return f"{DATA_URL_PREFIX}{media_type};base64,{encoded}"


def sniff_media_type(content: bytes) -> str | None:
    """Identify an image payload with Pillow; None when it is not an image."""
    try:
        with Image.open(io.BytesIO(content)) as image:
            image_format = image.format
    except (UnidentifiedImageError, OSError, ValueError):
        return None
    return Image.MIME.get(image_format) if image_format else None


def image_data_url(content: bytes, content_type: str | None) -> str:
    """
    Convert an image body into a data URL.

    The media type comes from an ``image/*`` content type, else Pillow sniffs it.

    Raises:
        ImageStrategyError: If the body is empty or not an image.
    """
    if not content:
        raise ImageStrategyError("Empty image body")

    content_type = (content_type or "").split(";")[0].strip().lower()
    media_type = content_type if content_type.startswith("image/") else sniff_media_type(content)
    if not media_type:
        raise ImageStrategyError(f"Response is not an image (content-type: {content_type or 'missing'})")
    return to_data_url(content, media_type)


def image_data_url_from_response(response: httpx.Response) -> str:
    """Convert a successful, fully read image response into a data URL."""
    return image_data_url(response.content, response.headers.get("content-type"))


class ProxyImagePayload(BaseModel):
    """Body returned by the image proxy endpoint."""

    data_url: str

    @field_validator("data_url")
    @classmethod
    def _must_be_data_url(cls, value: str) -> str:
        if not is_data_url(value):
            raise ValueError("data_url is not an inline image")
        return value


class ImageStrategy(ABC):
    """One way of obtaining inline image data for a URL."""

    name: str = "strategy"

    @abstractmethod
    async def fetch(self, url: str) -> str | None:
        """Return a data URL, None when nothing was obtained, or raise on failure."""


class ProxyImageStrategy(ImageStrategy):
    """Ask the platform's same-origin proxy to fetch the image server-side."""

    name = "server_proxy"

    def __init__(self, client: httpx.AsyncClient, proxy_url: str, token: str | None = None):
        self.client = client
        self.proxy_url = proxy_url
        self.token = token

    def _get_headers(self) -> dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def fetch(self, url: str) -> str | None:
        response = await self.client.get(self.proxy_url, params={"url": url}, headers=self._get_headers())
        if not response.is_success:
            raise ImageStrategyError(
                f"Proxy request failed: {response.status_code} - {response.text[:200]}"
            )
        try:
            payload = ProxyImagePayload.model_validate(response.json())
        except (ValueError, ValidationError) as e:
            raise ImageStrategyError(f"Malformed proxy payload: {e}") from e
        return payload.data_url


class DirectFetchStrategy(ImageStrategy):
    """
    Fetch the image directly; on failure retry once without credentials.

    The retry uses a fresh client so no cookies or auth headers from the
    shared client are sent to the third-party host.
    """

    name = "direct_fetch"

    def __init__(
        self,
        client: httpx.AsyncClient,
        anonymous_client_factory: Callable[[], httpx.AsyncClient] | None = None,
    ):
        self.client = client
        self.anonymous_client_factory = anonymous_client_factory or (
            lambda: httpx.AsyncClient(follow_redirects=True)
        )

    async def fetch(self, url: str) -> str | None:
        try:
            response = await self.client.get(url, follow_redirects=True)
            response.raise_for_status()
        except httpx.HTTPError as e:
            logger.debug(
                "Direct fetch failed, retrying without credentials: {error}",
                error=str(e),
                event_type="logo_direct_fetch_retry",
            )
            async with self.anonymous_client_factory() as anonymous:
                response = await anonymous.get(url)
                response.raise_for_status()
        return image_data_url_from_response(response)


class ImageElementStrategy(ImageStrategy):
    """
    Load the image through an <img> element in a headless page and re-encode it via canvas.

    Last resort: cross-origin images without CORS headers taint the canvas.
    """

    name = "image_element"

    def __init__(self, browser):
        self.browser = browser

    async def fetch(self, url: str) -> str | None:
        async with self.browser.page() as page:
            return await page.evaluate(LOAD_IMAGE_AS_DATA_URL_JS, url)


class ImageResolver:
    """Runs the strategies in order and returns the first data URL obtained."""

    def __init__(self, strategies: Sequence[ImageStrategy], timeout: float | None = None):
        self.strategies = list(strategies)
        self.timeout = timeout

    async def _attempt(self, strategy: ImageStrategy, url: str) -> str | None:
        if self.timeout:
            return await asyncio.wait_for(strategy.fetch(url), timeout=self.timeout)
        return await strategy.fetch(url)

    async def resolve(self, logo_url: str | None) -> str | None:
        """
        Resolve a logo URL to inline image data.

        Args:
            logo_url: Remote URL, data URL, or None.

        Returns:
            str | None: A data URL, or None when every strategy failed.
        """
        if not logo_url:
            return None
        if is_data_url(logo_url):
            return logo_url

        for strategy in self.strategies:
            try:
                result = await self._attempt(strategy, logo_url)
            except Exception as e:
                logger.warning(
                    "Logo strategy {strategy} failed: {error}",
                    strategy=strategy.name,
                    error=str(e) or type(e).__name__,
                    url=logo_url,
                    event_type="logo_strategy_failed",
                )
                continue

            if is_data_url(result):
                logger.info(
                    "Logo resolved via {strategy}",
                    strategy=strategy.name,
                    size=len(result),
                    event_type="logo_resolved",
                )
                return result

            logger.warning(
                "Logo strategy {strategy} returned no image",
                strategy=strategy.name,
                url=logo_url,
                event_type="logo_strategy_empty",
            )

        logger.warning(
            "All logo strategies failed, rendering placeholder",
            url=logo_url,
            event_type="logo_unresolved",
        )
        return None
