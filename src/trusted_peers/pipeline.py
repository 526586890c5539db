"""
One-shot peer refresh.

    source -> parse -> probe -> merge

The node configuration is only rewritten when at least one peer answers.
"""

from __future__ import annotations

import logging

import httpx

from trusted_peers.config import CheckPeersConfig
from trusted_peers.exceptions import NoReachablePeersError
from trusted_peers.node_config import update_trusted_peers
from trusted_peers.peers import Peer, parse_peers
from trusted_peers.probe import filter_reachable
from trusted_peers.source import obtain_peer_text

logger = logging.getLogger(__name__)


async def check_peers(
    config: CheckPeersConfig,
    *,
    client: httpx.AsyncClient | None = None,
) -> list[Peer]:
    """
    Refresh the trusted peers of a node configuration.

    Args:
        config: Run settings.
        client: Optional HTTP client for fetching the listing page.

    Returns:
        The peers written to `p2p.trusted_peers`.

    Raises:
        CheckPeersError: On any fatal failure. The node configuration is
            left untouched unless the failure happens while writing it.
    """
    logger.info(f"Scraping peers from {config.scrape_from}")
    text = await obtain_peer_text(
        config.scrape_from,
        timeout=config.http_timeout,
        client=client,
    )
    candidates = parse_peers(text)

    logger.info(f"Connecting to {len(candidates)} peers")
    reachable = await filter_reachable(
        candidates,
        timeout=config.probe_timeout,
        max_concurrency=config.max_concurrent_probes,
    )
    if not reachable:
        raise NoReachablePeersError(len(candidates))

    update_trusted_peers(config.config_path, reachable)
    logger.info(f"Working peers list has been updated in {config.config_path}")
    return reachable
