"""Where peer listings come from: remote pages or local files."""

from .extract import extract_peer_block
from .fetch import fetch_page, is_url
from .source import obtain_peer_text, read_listing_file

__all__ = [
    "extract_peer_block",
    "fetch_page",
    "is_url",
    "obtain_peer_text",
    "read_listing_file",
]
