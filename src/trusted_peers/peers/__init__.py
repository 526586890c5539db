"""Peer records and the listing parser."""

from .listing import LISTING_KEY, PeerListing, parse_peers
from .peer import Peer

__all__ = [
    "LISTING_KEY",
    "Peer",
    "PeerListing",
    "parse_peers",
]
