"""
Run configuration for the peer checker.

A single `CheckPeersConfig` is built from the command line at process start
and handed to each stage of the pipeline.
"""

from pathlib import Path
from typing import Final

from pydantic import Field

from trusted_peers.types import StrictBaseModel

DEFAULT_CONFIG_PATH: Final = Path("node-config.yaml")
"""Node configuration file whose `p2p.trusted_peers` list is rewritten."""

DEFAULT_SCRAPE_FROM: Final = "https://adapools.org/peers"
"""Page publishing the peer listing inside a `textarea.form-control` element."""

PROBE_TIMEOUT_SECS: Final = 1.0
"""Upper bound on a single TCP connect attempt."""

MAX_CONCURRENT_PROBES: Final = 32
"""Number of connect attempts allowed in flight at once."""

HTTP_TIMEOUT_SECS: Final = 30.0
"""Timeout for downloading the remote listing page."""


class CheckPeersConfig(StrictBaseModel):
    """Settings for one peer-check run."""

    config_path: Path = DEFAULT_CONFIG_PATH
    """Node configuration file to update."""

    scrape_from: str = DEFAULT_SCRAPE_FROM
    """URL or local file path of the peer listing."""

    probe_timeout: float = Field(default=PROBE_TIMEOUT_SECS, gt=0)
    """Seconds to wait for each TCP connect."""

    max_concurrent_probes: int = Field(default=MAX_CONCURRENT_PROBES, ge=1)
    """Maximum number of simultaneous probes."""

    http_timeout: float = Field(default=HTTP_TIMEOUT_SECS, gt=0)
    """Seconds to wait for the listing page."""
