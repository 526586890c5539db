"""HTTP download of the remote listing page."""

from __future__ import annotations

import logging

import httpx

from trusted_peers.config import HTTP_TIMEOUT_SECS
from trusted_peers.exceptions import FetchError

logger = logging.getLogger(__name__)

URL_SCHEMES = ("http", "https")


def is_url(source: str) -> bool:
    """
    Check whether a listing source is an absolute HTTP(S) URL.

    Anything else, including absolute filesystem paths, is a local file.
    """
    try:
        url = httpx.URL(source)
    except httpx.InvalidURL:
        return False
    return url.scheme in URL_SCHEMES and bool(url.host)


async def fetch_page(
    url: str,
    *,
    timeout: float = HTTP_TIMEOUT_SECS,
    client: httpx.AsyncClient | None = None,
) -> str:
    """
    Download a page and return its decoded body.

    Args:
        url: Absolute URL of the listing page.
        timeout: Request timeout in seconds. Ignored when `client` is given.
        client: Optional pre-configured client. The caller keeps ownership.

    Raises:
        FetchError: On transport failure or a non-2xx response.
    """
    logger.debug(f"GET {url}")

    try:
        if client is not None:
            response = await client.get(url, follow_redirects=True)
        else:
            async with httpx.AsyncClient(timeout=timeout, follow_redirects=True) as own_client:
                response = await own_client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise FetchError(
            url,
            status=exc.response.status_code,
            detail=exc.response.reason_phrase or None,
        ) from exc
    except httpx.RequestError as exc:
        raise FetchError(url, detail=str(exc) or type(exc).__name__) from exc

    logger.debug(f"Downloaded {len(response.content)} bytes from {url}")
    return response.text
