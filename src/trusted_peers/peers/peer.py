"""
Peer records.

A peer is a multiaddress-like location plus an opaque identifier:

    address: /ip4/203.0.113.5/tcp/3000
    id: 0b2a8c...

Splitting the address on "/" gives ["", "ip4", "203.0.113.5", "tcp", "3000"].
The host is always segment 2 and the port is always the last segment.
"""

from __future__ import annotations

from typing import Final

from trusted_peers.exceptions import InvalidAddressError
from trusted_peers.types import FrozenModel

MIN_ADDRESS_SEGMENTS: Final = 4
"""Segments needed before a port can be read from an address."""

HOST_SEGMENT: Final = 2
"""Index of the host in a split address."""

MAX_PORT: Final = 65535


class Peer(FrozenModel):
    """A candidate or trusted peer as it appears in listings and node configs."""

    address: str
    """Slash-delimited network location, e.g. `/ip4/127.0.0.1/tcp/3000`."""

    id: str = ""
    """Opaque peer identifier. Carried through unchanged, never inspected."""

    @property
    def segments(self) -> list[str]:
        """The address split on "/"."""
        return self.address.split("/")

    @property
    def host(self) -> str:
        """Host component of the address."""
        return self.endpoint()[0]

    @property
    def port(self) -> int:
        """Port component of the address."""
        return self.endpoint()[1]

    def endpoint(self) -> tuple[str, int]:
        """
        Extract the (host, port) pair to dial.

        Raises:
            InvalidAddressError: If the address has too few segments or the
                last segment is not a valid port number.
        """
        segments = self.segments
        if len(segments) < MIN_ADDRESS_SEGMENTS:
            raise InvalidAddressError(
                self.address,
                f"expected at least {MIN_ADDRESS_SEGMENTS} segments, got {len(segments)}",
            )

        host = segments[HOST_SEGMENT]
        if not host:
            raise InvalidAddressError(self.address, "empty host")

        raw_port = segments[-1]
        if not (raw_port.isascii() and raw_port.isdigit()):
            raise InvalidAddressError(self.address, f"port {raw_port!r} is not a number")
        port = int(raw_port)
        if port > MAX_PORT:
            raise InvalidAddressError(self.address, f"port {port} is out of range")

        return host, port

    def to_record(self) -> dict[str, str]:
        """Two-field mapping written to the node configuration."""
        return {"address": self.address, "id": self.id}
