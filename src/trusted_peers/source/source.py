"""
Peer listing source.

A source is either the URL of a page embedding the listing, or the path of
a local file holding the listing itself. Both are HTML-unescaped before
being handed to the parser.
"""

from __future__ import annotations

import html
import logging
from pathlib import Path

import httpx

from trusted_peers.config import HTTP_TIMEOUT_SECS
from trusted_peers.exceptions import EmptySourceError, ReadError

from .extract import extract_peer_block
from .fetch import fetch_page, is_url

logger = logging.getLogger(__name__)


def read_listing_file(path: Path | str) -> str:
    """
    Read a local listing file.

    Raises:
        ReadError: If the file cannot be opened or decoded.
    """
    try:
        return Path(path).read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ReadError(path, str(exc)) from exc


async def obtain_peer_text(
    source: str,
    *,
    timeout: float = HTTP_TIMEOUT_SECS,
    client: httpx.AsyncClient | None = None,
) -> str:
    """
    Resolve a listing source to unescaped listing text.

    Args:
        source: URL of a listing page, or a local file path.
        timeout: HTTP timeout used when `source` is a URL.
        client: Optional HTTP client, used when `source` is a URL.

    Raises:
        FetchError: If the page cannot be downloaded.
        ReadError: If the local file cannot be read.
        EmptySourceError: If no listing text was found.
    """
    if is_url(source):
        page = await fetch_page(source, timeout=timeout, client=client)
        text = extract_peer_block(page)
        if not text:
            logger.debug("No peer listing found in textarea.form-control at %s", source)
    else:
        text = read_listing_file(source)

    if not text.strip():
        raise EmptySourceError(source)

    return html.unescape(text)
