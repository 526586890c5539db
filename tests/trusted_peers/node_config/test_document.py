"""Tests for the node configuration document and merge."""

from __future__ import annotations

import os
import stat
from pathlib import Path
from unittest.mock import patch

import pytest
import yaml

from trusted_peers.exceptions import ConfigShapeError, ParseError, ReadError, WriteError
from trusted_peers.node_config import NodeConfigDocument, update_trusted_peers, write_atomic
from trusted_peers.peers import Peer

PEERS = [
    Peer(address="/ip4/203.0.113.5/tcp/3000", id="0b2a8c51"),
    Peer(address="/ip4/198.51.100.20/tcp/3100", id="77f0e1d2"),
]


class TestNodeConfigDocument:
    """Tests for loading and navigating the document."""

    def test_trusted_peers_read_back(self) -> None:
        """Existing trusted peers are decoded into Peer records."""
        doc = NodeConfigDocument.from_yaml(
            "p2p:\n  trusted_peers:\n  - address: /ip4/1.2.3.4/tcp/5\n    id: abc\n"
        )

        assert doc.trusted_peers == [Peer(address="/ip4/1.2.3.4/tcp/5", id="abc")]

    def test_missing_trusted_peers_reads_empty(self) -> None:
        """A p2p section without trusted_peers has none."""
        doc = NodeConfigDocument.from_yaml("p2p:\n  public_address: /ip4/1.2.3.4/tcp/5\n")

        assert doc.trusted_peers == []

    def test_missing_p2p_section(self) -> None:
        """A config without p2p is rejected, never auto-created."""
        doc = NodeConfigDocument.from_yaml("storage: /tmp/storage\n")

        with pytest.raises(ConfigShapeError, match="missing 'p2p'"):
            doc.replace_trusted_peers(PEERS)
        assert "p2p" not in doc.data

    def test_p2p_not_a_mapping(self) -> None:
        """A scalar p2p section is a shape error."""
        doc = NodeConfigDocument.from_yaml("p2p: disabled\n")

        with pytest.raises(ConfigShapeError, match="must be a mapping"):
            doc.replace_trusted_peers(PEERS)

    @pytest.mark.parametrize("content", ["", "- a\n- b\n", "42\n"])
    def test_top_level_not_a_mapping(self, content: str) -> None:
        """Only mappings are valid node configurations."""
        with pytest.raises(ConfigShapeError):
            NodeConfigDocument.from_yaml(content)

    def test_shape_error_is_parse_error(self) -> None:
        """Shape errors can be handled as parse errors."""
        with pytest.raises(ParseError):
            NodeConfigDocument.from_yaml("p2p: [1, 2]\n").p2p

    def test_invalid_yaml(self) -> None:
        """Malformed YAML is a ParseError caused by the YAML error."""
        with pytest.raises(ParseError) as excinfo:
            NodeConfigDocument.from_yaml("p2p: {trusted_peers: [\n")

        assert isinstance(excinfo.value.__cause__, yaml.YAMLError)
        assert "\n" not in excinfo.value.message

    def test_malformed_existing_trusted_peers(self) -> None:
        """Reading back garbage in trusted_peers is a shape error."""
        doc = NodeConfigDocument.from_yaml("p2p:\n  trusted_peers: [1, 2]\n")

        with pytest.raises(ConfigShapeError):
            doc.trusted_peers

    def test_replace_writes_two_field_records(self) -> None:
        """Peers are stored as address/id mappings."""
        doc = NodeConfigDocument.from_yaml("p2p:\n  trusted_peers: []\n")

        doc.replace_trusted_peers(PEERS)

        assert doc.data["p2p"]["trusted_peers"] == [
            {"address": "/ip4/203.0.113.5/tcp/3000", "id": "0b2a8c51"},
            {"address": "/ip4/198.51.100.20/tcp/3100", "id": "77f0e1d2"},
        ]

    def test_to_yaml_keeps_key_order(self) -> None:
        """Serialization keeps keys in their loaded order."""
        doc = NodeConfigDocument.from_yaml("zeta: 1\np2p:\n  trusted_peers: []\nalpha: 2\n")

        assert list(yaml.safe_load(doc.to_yaml())) == ["zeta", "p2p", "alpha"]


class TestUpdateTrustedPeers:
    """Tests for update_trusted_peers()."""

    def test_replaces_trusted_peers(self, node_config_path: Path) -> None:
        """The file ends up holding exactly the given peers."""
        update_trusted_peers(node_config_path, PEERS)

        reloaded = NodeConfigDocument.from_yaml_file(node_config_path)
        assert reloaded.trusted_peers == PEERS

    def test_unrelated_values_preserved(self, node_config_path: Path) -> None:
        """Every value outside p2p.trusted_peers survives the rewrite."""
        before = yaml.safe_load(node_config_path.read_text())

        update_trusted_peers(node_config_path, PEERS)

        after = yaml.safe_load(node_config_path.read_text())
        assert after.keys() == before.keys()
        for key in before:
            if key != "p2p":
                assert after[key] == before[key]
        before["p2p"].pop("trusted_peers")
        after["p2p"].pop("trusted_peers")
        assert after["p2p"] == before["p2p"]

    def test_existing_peers_are_overwritten(self, node_config_path: Path) -> None:
        """Old entries are not merged with new ones."""
        update_trusted_peers(node_config_path, PEERS)
        update_trusted_peers(node_config_path, PEERS[1:])

        assert NodeConfigDocument.from_yaml_file(node_config_path).trusted_peers == PEERS[1:]

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing config file is a ReadError."""
        with pytest.raises(ReadError):
            update_trusted_peers(tmp_path / "absent.yaml", PEERS)

    def test_missing_p2p_leaves_file_untouched(self, tmp_path: Path) -> None:
        """Shape errors abort before anything is written."""
        path = tmp_path / "node-config.yaml"
        path.write_text("storage: /tmp/storage\n")

        with pytest.raises(ConfigShapeError):
            update_trusted_peers(path, PEERS)

        assert path.read_text() == "storage: /tmp/storage\n"

    def test_file_mode_preserved(self, node_config_path: Path) -> None:
        """The rewritten file keeps the original permissions."""
        os.chmod(node_config_path, 0o600)

        update_trusted_peers(node_config_path, PEERS)

        assert stat.S_IMODE(node_config_path.stat().st_mode) == 0o600


class TestWriteAtomic:
    """Tests for the atomic file replacement."""

    def test_creates_new_file(self, tmp_path: Path) -> None:
        """A missing target is created."""
        path = tmp_path / "fresh.yaml"

        write_atomic(path, "a: 1\n")

        assert path.read_text() == "a: 1\n"

    def test_failed_rename_keeps_original(self, node_config_path: Path) -> None:
        """If the final rename fails, the original content and directory are intact."""
        original = node_config_path.read_text()

        with patch("trusted_peers.node_config.document.os.replace", side_effect=OSError("boom")):
            with pytest.raises(WriteError, match="boom"):
                write_atomic(node_config_path, "p2p: {}\n")

        assert node_config_path.read_text() == original
        assert sorted(p.name for p in node_config_path.parent.iterdir()) == [
            node_config_path.name
        ]

    def test_missing_directory(self, tmp_path: Path) -> None:
        """A target in a nonexistent directory is a WriteError."""
        with pytest.raises(WriteError):
            write_atomic(tmp_path / "nope" / "node-config.yaml", "a: 1\n")
