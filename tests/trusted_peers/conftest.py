"""
Shared pytest fixtures for peer checker tests.

Provides loopback listeners, dead ports, and on-disk listing and node
configuration files.
"""

from __future__ import annotations

import socket
from collections.abc import Callable, Iterator
from pathlib import Path

import pytest
import yaml

# -----------------------------------------------------------------------------
# Network Fixtures
# -----------------------------------------------------------------------------


@pytest.fixture
def anyio_backend() -> str:
    """Run coroutine tests on asyncio only."""
    return "asyncio"


@pytest.fixture
def listening_port() -> Iterator[int]:
    """
    A loopback port with an active listener.

    The kernel completes TCP handshakes for a listening socket on its own,
    so the test never needs to call accept().
    """
    with socket.create_server(("127.0.0.1", 0), backlog=16) as server:
        yield server.getsockname()[1]


@pytest.fixture
def closed_port() -> int:
    """A loopback port that was just released and has no listener."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as sock:
        sock.bind(("127.0.0.1", 0))
        return sock.getsockname()[1]


# -----------------------------------------------------------------------------
# File Fixtures
# -----------------------------------------------------------------------------


SAMPLE_NODE_CONFIG: dict = {
    "storage": "/var/lib/node/storage",
    "log": [{"format": "plain", "level": "info", "output": "stderr"}],
    "rest": {"listen": "127.0.0.1:3100"},
    "p2p": {
        "public_address": "/ip4/198.51.100.7/tcp/3000",
        "topics_of_interest": {"blocks": "normal", "messages": "low"},
        "trusted_peers": [],
    },
}


@pytest.fixture
def write_listing(tmp_path: Path) -> Callable[[str], Path]:
    """Factory writing listing text to a file and returning its path."""

    def _write(text: str) -> Path:
        path = tmp_path / "peers.yaml"
        path.write_text(text, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def node_config_path(tmp_path: Path) -> Path:
    """A node configuration file with an empty trusted peer list."""
    path = tmp_path / "node-config.yaml"
    path.write_text(yaml.safe_dump(SAMPLE_NODE_CONFIG, sort_keys=False), encoding="utf-8")
    return path
