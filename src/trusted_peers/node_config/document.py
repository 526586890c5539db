"""
Node configuration document.

The node configuration is a YAML file owned by the node operator. Only one
path is touched here:

    p2p:
      trusted_peers:
      - address: /ip4/203.0.113.5/tcp/3000
        id: 0b2a8c...

Every other key is kept as loaded and written back in its original order.
"""

from __future__ import annotations

import logging
import os
import stat
import tempfile
from collections.abc import Sequence
from pathlib import Path
from typing import Any, Final

import yaml
from pydantic import TypeAdapter, ValidationError

from trusted_peers.exceptions import ConfigShapeError, ParseError, ReadError, WriteError
from trusted_peers.peers import Peer

logger = logging.getLogger(__name__)

P2P_KEY: Final = "p2p"

TRUSTED_PEERS_KEY: Final = "trusted_peers"

DEFAULT_FILE_MODE: Final = 0o644
"""Mode given to the rewritten file when the original mode cannot be read."""

_PEER_LIST = TypeAdapter(list[Peer])


class NodeConfigDocument:
    """
    An in-memory node configuration.

    Wraps the loaded mapping and gives typed access to
    `p2p.trusted_peers`. Navigation fails with `ConfigShapeError` instead
    of guessing a default shape.
    """

    def __init__(self, data: dict[str, Any], *, source: str = "node config") -> None:
        self.data = data
        self.source = source

    @classmethod
    def from_yaml(cls, content: str, *, source: str = "node config") -> NodeConfigDocument:
        """
        Load a document from YAML text.

        Raises:
            ParseError: If the text is not valid YAML.
            ConfigShapeError: If the top level is not a mapping.
        """
        try:
            data = yaml.safe_load(content)
        except yaml.YAMLError as exc:
            raise ParseError(source, str(exc)) from exc

        if not isinstance(data, dict):
            raise ConfigShapeError(
                source, f"top level must be a mapping, got {type(data).__name__}"
            )
        return cls(data, source=source)

    @classmethod
    def from_yaml_file(cls, path: Path | str) -> NodeConfigDocument:
        """
        Load a document from a YAML file.

        Raises:
            ReadError: If the file cannot be read.
            ParseError: If the file is not valid YAML.
            ConfigShapeError: If the top level is not a mapping.
        """
        path = Path(path)
        try:
            content = path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as exc:
            raise ReadError(path, str(exc)) from exc
        return cls.from_yaml(content, source=str(path))

    @property
    def p2p(self) -> dict[Any, Any]:
        """The `p2p` section."""
        if P2P_KEY not in self.data:
            raise ConfigShapeError(self.source, f"missing '{P2P_KEY}' section")
        section = self.data[P2P_KEY]
        if not isinstance(section, dict):
            raise ConfigShapeError(
                self.source,
                f"'{P2P_KEY}' must be a mapping, got {type(section).__name__}",
            )
        return section

    @property
    def trusted_peers(self) -> list[Peer]:
        """
        Currently configured trusted peers.

        A missing or null entry reads as an empty list.
        """
        raw = self.p2p.get(TRUSTED_PEERS_KEY)
        if raw is None:
            return []
        try:
            return _PEER_LIST.validate_python(raw)
        except ValidationError as exc:
            raise ConfigShapeError(
                self.source, f"'{P2P_KEY}.{TRUSTED_PEERS_KEY}' is malformed: {exc}"
            ) from exc

    def replace_trusted_peers(self, peers: Sequence[Peer]) -> None:
        """Overwrite `p2p.trusted_peers` with the given peers, in order."""
        self.p2p[TRUSTED_PEERS_KEY] = [peer.to_record() for peer in peers]

    def to_yaml(self) -> str:
        """Serialize the whole document, keeping key order as loaded."""
        return yaml.safe_dump(
            self.data,
            sort_keys=False,
            default_flow_style=False,
            allow_unicode=True,
        )

    def save(self, path: Path | str) -> None:
        """
        Atomically replace `path` with this document.

        The new content goes to a temporary file in the same directory,
        which is then renamed over the target. The target keeps its mode.

        Raises:
            WriteError: If the file cannot be written.
        """
        write_atomic(Path(path), self.to_yaml())


def write_atomic(path: Path, content: str) -> None:
    """Write `content` to `path` via a temporary file and rename."""
    try:
        mode = stat.S_IMODE(path.stat().st_mode)
    except FileNotFoundError:
        mode = DEFAULT_FILE_MODE
    except OSError as exc:
        raise WriteError(path, str(exc)) from exc

    directory = path.parent
    try:
        fd, tmp_name = tempfile.mkstemp(
            prefix=f".{path.name}.", suffix=".tmp", dir=directory
        )
    except OSError as exc:
        raise WriteError(path, str(exc)) from exc

    tmp_path = Path(tmp_name)
    try:
        with os.fdopen(fd, "w", encoding="utf-8") as fh:
            fh.write(content)
            fh.flush()
            os.fsync(fh.fileno())
        os.chmod(tmp_path, mode)
        os.replace(tmp_path, path)
    except OSError as exc:
        tmp_path.unlink(missing_ok=True)
        raise WriteError(path, str(exc)) from exc


def update_trusted_peers(config_path: Path | str, peers: Sequence[Peer]) -> NodeConfigDocument:
    """
    Replace the trusted peers in a node configuration file.

    Args:
        config_path: YAML node configuration to rewrite.
        peers: Peers to store, in order.

    Returns:
        The updated document.

    Raises:
        ReadError: If the file cannot be read.
        ParseError: If the file is not valid YAML or lacks a `p2p` mapping.
        WriteError: If the file cannot be written back.
    """
    document = NodeConfigDocument.from_yaml_file(config_path)
    existing = document.p2p.get(TRUSTED_PEERS_KEY)
    previous = len(existing) if isinstance(existing, list) else 0
    document.replace_trusted_peers(peers)
    document.save(config_path)
    logger.info(
        "Replaced %d trusted peers with %d in %s", previous, len(peers), config_path
    )
    return document
