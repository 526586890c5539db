"""
TCP reachability probe.

A peer counts as reachable when a plain TCP connection to its address
completes within the timeout. Nothing is sent over the connection: it is
closed as soon as it is established.

Probe failures never abort a run. Each one is logged and reported as
"unreachable".
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Sequence
from dataclasses import dataclass

from trusted_peers.config import MAX_CONCURRENT_PROBES, PROBE_TIMEOUT_SECS
from trusted_peers.exceptions import InvalidAddressError
from trusted_peers.peers import Peer

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ProbeResult:
    """Outcome of probing one peer."""

    peer: Peer
    """The probed peer."""

    reachable: bool
    """Whether the TCP connection was established."""

    error: str | None = None
    """Why the probe failed, when it did."""


async def _connect(host: str, port: int, timeout: float) -> None:
    """Open and immediately close a TCP connection."""
    _reader, writer = await asyncio.wait_for(asyncio.open_connection(host, port), timeout)
    writer.close()
    try:
        await writer.wait_closed()
    except OSError:
        # The connection was established; a reset on close does not change that.
        pass


async def probe_peer(peer: Peer, timeout: float = PROBE_TIMEOUT_SECS) -> ProbeResult:
    """
    Probe a single peer.

    Args:
        peer: Peer whose address is dialed.
        timeout: Seconds to wait for the connection.

    Returns:
        The probe outcome. Never raises for network or address errors.
    """
    try:
        host, port = peer.endpoint()
    except InvalidAddressError as exc:
        logger.info(f"[ERR] {exc.message}")
        return ProbeResult(peer=peer, reachable=False, error=exc.detail)

    try:
        await _connect(host, port, timeout)
    except TimeoutError:
        reason = f"dial tcp {host}:{port}: i/o timeout after {timeout}s"
        logger.info(f"[ERR] {reason}")
        return ProbeResult(peer=peer, reachable=False, error=reason)
    except (OSError, ValueError) as exc:
        reason = f"dial tcp {host}:{port}: {exc}"
        logger.info(f"[ERR] {reason}")
        return ProbeResult(peer=peer, reachable=False, error=reason)

    logger.info(f"[OK] {host}")
    return ProbeResult(peer=peer, reachable=True)


async def is_reachable(peer: Peer, timeout: float = PROBE_TIMEOUT_SECS) -> bool:
    """Check whether a TCP connection to the peer can be opened."""
    result = await probe_peer(peer, timeout)
    return result.reachable


async def probe_peers(
    peers: Sequence[Peer],
    *,
    timeout: float = PROBE_TIMEOUT_SECS,
    max_concurrency: int = MAX_CONCURRENT_PROBES,
) -> list[ProbeResult]:
    """
    Probe every peer with bounded concurrency.

    Results are returned in the order of `peers`, regardless of which
    probe finishes first.
    """
    if max_concurrency < 1:
        raise ValueError(f"max_concurrency must be at least 1, got {max_concurrency}")

    semaphore = asyncio.Semaphore(max_concurrency)

    async def bounded(peer: Peer) -> ProbeResult:
        async with semaphore:
            return await probe_peer(peer, timeout)

    # gather() yields results positionally, so input order is preserved.
    return list(await asyncio.gather(*(bounded(peer) for peer in peers)))


async def filter_reachable(
    peers: Sequence[Peer],
    *,
    timeout: float = PROBE_TIMEOUT_SECS,
    max_concurrency: int = MAX_CONCURRENT_PROBES,
) -> list[Peer]:
    """Return the reachable subset of `peers`, in input order."""
    results = await probe_peers(peers, timeout=timeout, max_concurrency=max_concurrency)
    reachable = [result.peer for result in results if result.reachable]
    logger.info(f"{len(reachable)} of {len(results)} peers reachable")
    return reachable
