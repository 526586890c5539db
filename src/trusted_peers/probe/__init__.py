"""TCP liveness probing of candidate peers."""

from .probe import ProbeResult, filter_reachable, is_reachable, probe_peer, probe_peers

__all__ = [
    "ProbeResult",
    "filter_reachable",
    "is_reachable",
    "probe_peer",
    "probe_peers",
]
