"""
Peer listing parser.

Listings are YAML documents holding a sequence of peer records under a
single `peers` key:

    peers:
    - address: /ip4/203.0.113.5/tcp/3000
      id: 0b2a8c...

Scraped pages usually publish only the sequence itself, without the
enclosing key. Both shapes parse to the same result.
"""

from __future__ import annotations

import logging
from typing import Any, Final

import yaml
from pydantic import ValidationError, field_validator

from trusted_peers.exceptions import ParseError
from trusted_peers.types import StrictBaseModel

from .peer import Peer

logger = logging.getLogger(__name__)

LISTING_KEY: Final = "peers"
"""Key that holds the peer sequence in a wrapped listing."""

LISTING_NAME: Final = "peer listing"


class PeerListing(StrictBaseModel):
    """A parsed listing: the candidate peers, in source order."""

    peers: list[Peer]

    @field_validator("peers", mode="before")
    @classmethod
    def empty_when_null(cls, v: Any) -> Any:
        """A bare `peers:` key with no entries is an empty listing."""
        return [] if v in (None, "") else v


def _wrap(document: Any) -> Any:
    """Put a bare sequence under the listing key."""
    if document in (None, ""):
        return {LISTING_KEY: []}
    if isinstance(document, list):
        return {LISTING_KEY: document}
    return document


def parse_peers(text: str) -> list[Peer]:
    """
    Parse listing text into peer records.

    Args:
        text: YAML listing, either bare or wrapped under `peers`.

    Returns:
        The peers in the order they appear in the text.

    Raises:
        ParseError: If the text is not valid YAML or does not describe
            a sequence of peer records.
    """
    try:
        # BaseLoader keeps every scalar as written, so ids like 0123 stay opaque.
        document = yaml.load(text, Loader=yaml.BaseLoader)
    except yaml.YAMLError as exc:
        raise ParseError(LISTING_NAME, str(exc)) from exc

    document = _wrap(document)
    if not isinstance(document, dict):
        raise ParseError(
            LISTING_NAME,
            f"expected a sequence of peers, got {type(document).__name__}",
        )
    if LISTING_KEY not in document:
        raise ParseError(LISTING_NAME, f"missing '{LISTING_KEY}' key")

    try:
        listing = PeerListing.model_validate({LISTING_KEY: document[LISTING_KEY]})
    except ValidationError as exc:
        raise ParseError(LISTING_NAME, str(exc)) from exc

    logger.debug("Parsed %d peers from listing", len(listing.peers))
    return listing.peers
