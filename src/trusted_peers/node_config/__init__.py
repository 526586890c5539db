"""Reading and rewriting the node configuration file."""

from .document import (
    P2P_KEY,
    TRUSTED_PEERS_KEY,
    NodeConfigDocument,
    update_trusted_peers,
    write_atomic,
)

__all__ = [
    "P2P_KEY",
    "TRUSTED_PEERS_KEY",
    "NodeConfigDocument",
    "update_trusted_peers",
    "write_atomic",
]
