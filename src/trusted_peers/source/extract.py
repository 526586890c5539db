"""
Listing extraction from HTML pages.

Peer listing pages publish the YAML inside a form control:

    <textarea class="form-control" rows="20">- address: /ip4/...
      id: ...</textarea>

The extractor returns the raw inner text of the first such element. Entity
references are kept exactly as written so that the caller can unescape the
whole block in one pass.
"""

from __future__ import annotations

from html.parser import HTMLParser
from typing import Final

PEER_BLOCK_TAG: Final = "textarea"

PEER_BLOCK_CLASS: Final = "form-control"


class _PeerBlockParser(HTMLParser):
    """Collects the inner text of the first `textarea.form-control`."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=False)
        self.chunks: list[str] = []
        self.found = False
        self._inside = False

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if self.found or tag != PEER_BLOCK_TAG:
            return
        classes = " ".join(value or "" for name, value in attrs if name == "class").split()
        if PEER_BLOCK_CLASS in classes:
            self._inside = True
            self.found = True

    def handle_endtag(self, tag: str) -> None:
        if self._inside and tag == PEER_BLOCK_TAG:
            self._inside = False

    def handle_data(self, data: str) -> None:
        if self._inside:
            self.chunks.append(data)

    def handle_entityref(self, name: str) -> None:
        if self._inside:
            self.chunks.append(f"&{name};")

    def handle_charref(self, name: str) -> None:
        if self._inside:
            self.chunks.append(f"&#{name};")


def extract_peer_block(html: str) -> str:
    """
    Pull the peer listing text out of an HTML document.

    Returns:
        Inner text of the first `textarea` with class `form-control`, or an
        empty string if the page has none.
    """
    parser = _PeerBlockParser()
    parser.feed(html)
    parser.close()
    return "".join(parser.chunks)
