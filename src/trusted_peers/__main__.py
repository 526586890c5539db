"""
Trusted peer refresh CLI entry point.

Scrape a peer listing, keep the peers that accept a TCP connection, and
write them to the `p2p.trusted_peers` list of a node configuration.

Usage::

    check-peers
    check-peers --config node.yaml --scrape-from peers.txt
    python -m trusted_peers -config node.yaml -scrapeFrom https://adapools.org/peers

Options:
    --config       Node configuration YAML to update (default: node-config.yaml)
    --scrape-from  Peer listing URL or local file (default: https://adapools.org/peers)
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from trusted_peers.config import DEFAULT_CONFIG_PATH, DEFAULT_SCRAPE_FROM, CheckPeersConfig
from trusted_peers.exceptions import CheckPeersError
from trusted_peers.pipeline import check_peers

logger = logging.getLogger(__name__)

EXIT_FAILURE = 1
EXIT_INTERRUPTED = 130


class ColoredFormatter(logging.Formatter):
    """Logging formatter with ANSI colors for better readability."""

    # ANSI color codes
    GREY = "\x1b[38;5;244m"
    BLUE = "\x1b[38;5;39m"
    GREEN = "\x1b[38;5;40m"
    YELLOW = "\x1b[38;5;220m"
    RED = "\x1b[38;5;196m"
    BOLD_RED = "\x1b[38;5;196;1m"
    CYAN = "\x1b[38;5;51m"
    RESET = "\x1b[0m"

    LEVEL_COLORS = {
        logging.DEBUG: GREY,
        logging.INFO: GREEN,
        logging.WARNING: YELLOW,
        logging.ERROR: RED,
        logging.CRITICAL: BOLD_RED,
    }

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with colors."""
        color = self.LEVEL_COLORS.get(record.levelno, self.RESET)
        timestamp = f"{self.CYAN}{self.formatTime(record, self.datefmt)}{self.RESET}"
        levelname = f"{color}{record.levelname:8}{self.RESET}"
        name = f"{self.BLUE}{record.name}{self.RESET}"
        return f"{timestamp} {levelname} {name}: {record.getMessage()}"


def setup_logging(no_color: bool = False) -> None:
    """Send INFO and above to stderr, colored unless disabled."""
    handler = logging.StreamHandler()
    handler.setLevel(logging.INFO)

    if no_color:
        formatter = logging.Formatter(
            "%(asctime)s %(levelname)-8s %(name)s: %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    else:
        formatter = ColoredFormatter(datefmt="%Y-%m-%d %H:%M:%S")
    handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(logging.INFO)
    root.addHandler(handler)


def build_parser() -> argparse.ArgumentParser:
    """Command-line parser. The single-dash spellings match the original tool."""
    parser = argparse.ArgumentParser(
        prog="check-peers",
        description="Refresh p2p.trusted_peers with peers that accept TCP connections",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=__doc__,
    )
    parser.add_argument(
        "--config",
        "-config",
        dest="config_path",
        type=Path,
        default=DEFAULT_CONFIG_PATH,
        help=f"Node configuration YAML file location (default: {DEFAULT_CONFIG_PATH})",
    )
    parser.add_argument(
        "--scrape-from",
        "--scrapeFrom",
        "-scrapeFrom",
        dest="scrape_from",
        default=DEFAULT_SCRAPE_FROM,
        help=f"Peer list URL or file in YAML format (default: {DEFAULT_SCRAPE_FROM})",
    )
    return parser


def config_from_args(argv: Sequence[str] | None = None) -> CheckPeersConfig:
    """Build the run configuration from command-line arguments."""
    args = build_parser().parse_args(argv)
    return CheckPeersConfig(config_path=args.config_path, scrape_from=args.scrape_from)


def run(config: CheckPeersConfig) -> int:
    """Execute one refresh and map the outcome to a process exit status."""
    try:
        asyncio.run(check_peers(config))
    except CheckPeersError as e:
        logger.error(e.message)
        return EXIT_FAILURE
    except KeyboardInterrupt:
        logger.info("Interrupted")
        return EXIT_INTERRUPTED
    return 0


def main(argv: Sequence[str] | None = None) -> None:
    """CLI entry point."""
    config = config_from_args(argv)
    setup_logging(no_color=not sys.stderr.isatty())
    sys.exit(run(config))


if __name__ == "__main__":
    main()
