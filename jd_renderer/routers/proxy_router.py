"""
Same-origin image proxy.

Fetches a remote image server-side and returns it inline as a data URL, so
that logos hosted without CORS headers can still be embedded in documents.
Only hosts that resolve to public addresses are fetched, redirects included,
and the body is read in a stream bounded by ``image_max_bytes``.
"""

import asyncio
import ipaddress
import socket

import httpx
from fastapi import APIRouter, Depends, Query, Request
from pydantic import BaseModel

from jd_renderer.core.config import settings
from jd_renderer.core.exceptions import ImageProxyError, InvalidImageUrlError
from jd_renderer.log.logging import logger
from jd_renderer.services.image_resolver import ImageStrategyError, image_data_url

router = APIRouter(prefix="/api/v1/corporates", tags=["image-proxy"])

ALLOWED_SCHEMES = ("http", "https")
MAX_REDIRECTS = 5
PUBLIC_ONLY_REASON = "Only publicly routable hosts are allowed"


class ProxyImageResponse(BaseModel):
    data_url: str


def get_http_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.http_client


def is_public_address(address: str) -> bool:
    ip = ipaddress.ip_address(address)
    if ip.version == 6 and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped
    return ip.is_global and not (
        ip.is_private
        or ip.is_loopback
        or ip.is_link_local
        or ip.is_reserved
        or ip.is_multicast
        or ip.is_unspecified
    )


async def resolve_host_addresses(host: str) -> list[str]:
    """Every address a host name resolves to; IP literals resolve to themselves."""
    try:
        return [str(ipaddress.ip_address(host))]
    except ValueError:
        pass
    infos = await asyncio.get_running_loop().getaddrinfo(host, None, type=socket.SOCK_STREAM)
    return sorted({info[4][0] for info in infos})


async def check_public_url(url: httpx.URL) -> None:
    """
    Reject URLs the proxy must not fetch.

    Raises:
        InvalidImageUrlError: If the scheme is not http(s) or the host is not public.
        ImageProxyError: If the host cannot be resolved.
    """
    if url.scheme not in ALLOWED_SCHEMES or not url.host:
        raise InvalidImageUrlError(str(url))
    try:
        addresses = await resolve_host_addresses(url.host)
    except OSError as e:
        raise ImageProxyError(f"could not resolve {url.host}") from e
    if not addresses or not all(is_public_address(address) for address in addresses):
        logger.warning(
            "Image proxy refused non-public host {host}",
            host=url.host,
            addresses=addresses,
            event_type="image_proxy_blocked",
        )
        raise InvalidImageUrlError(str(url), reason=PUBLIC_ONLY_REASON)


async def read_limited(response: httpx.Response, max_bytes: int) -> bytes:
    """Read a streamed body, aborting as soon as it exceeds ``max_bytes``."""
    declared = response.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > max_bytes:
        raise ImageProxyError(f"image larger than {max_bytes} bytes")

    chunks = []
    received = 0
    async for chunk in response.aiter_bytes():
        received += len(chunk)
        if received > max_bytes:
            raise ImageProxyError(f"image larger than {max_bytes} bytes")
        chunks.append(chunk)
    return b"".join(chunks)


async def fetch_image(client: httpx.AsyncClient, url: httpx.URL) -> tuple[bytes, str | None]:
    """
    Fetch an image, following redirects by hand so every hop is checked.

    Returns:
        tuple[bytes, str | None]: The body and its content type.
    """
    for _ in range(MAX_REDIRECTS + 1):
        await check_public_url(url)
        async with client.stream(
            "GET", url, follow_redirects=False, timeout=settings.image_strategy_timeout
        ) as response:
            if response.is_redirect:
                url = response.url.join(response.headers["location"])
                continue
            if not response.is_success:
                raise ImageProxyError(f"upstream returned {response.status_code}")
            content = await read_limited(response, settings.image_max_bytes)
            return content, response.headers.get("content-type")
    raise ImageProxyError(f"more than {MAX_REDIRECTS} redirects")


@router.get(
    "/proxy-image",
    summary="Proxy a remote image",
    description="Fetch an image by URL and return it as a base64 data URL.",
    response_model=ProxyImageResponse,
    responses={
        422: {"description": "URL is not http(s) or its host is not public"},
        502: {"description": "Upstream fetch failed, the body is too large or not an image"},
    },
)
async def proxy_image(
    url: str = Query(..., description="Absolute http(s) URL of the image"),
    client: httpx.AsyncClient = Depends(get_http_client),
):
    """
    Fetch a remote image and inline it.

    Args:
        url: Image URL.
        client: Shared HTTP client.

    Returns:
        ProxyImageResponse with the image as a data URL.
    """
    try:
        target = httpx.URL(url)
    except httpx.InvalidURL:
        raise InvalidImageUrlError(url)

    try:
        content, content_type = await fetch_image(client, target)
    except httpx.HTTPError as e:
        logger.warning(
            "Image proxy fetch failed: {error}",
            error=str(e),
            url=url,
            event_type="image_proxy_failed",
        )
        raise ImageProxyError(f"could not fetch {url}")

    try:
        data_url = image_data_url(content, content_type)
    except ImageStrategyError as e:
        raise ImageProxyError(str(e))

    logger.debug("Image proxied", url=url, size=len(content), event_type="image_proxied")
    return ProxyImageResponse(data_url=data_url)
