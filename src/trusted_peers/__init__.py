"""Refresh a node's trusted peers from a public listing, keeping only reachable ones."""

from .config import CheckPeersConfig
from .exceptions import (
    CheckPeersError,
    ConfigShapeError,
    EmptySourceError,
    FetchError,
    InvalidAddressError,
    NoReachablePeersError,
    ParseError,
    ReadError,
    WriteError,
)
from .pipeline import check_peers

__all__ = [
    "CheckPeersConfig",
    "check_peers",
    # Exceptions
    "CheckPeersError",
    "ConfigShapeError",
    "EmptySourceError",
    "FetchError",
    "InvalidAddressError",
    "NoReachablePeersError",
    "ParseError",
    "ReadError",
    "WriteError",
]
