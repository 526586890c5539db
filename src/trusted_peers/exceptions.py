"""Exception hierarchy for the peer checker.

Every error below is fatal to a run, except `InvalidAddressError`, which
the reachability probe converts into "unreachable".
"""

from __future__ import annotations

from pathlib import Path


class CheckPeersError(Exception):
    """
    Base exception for all peer checker errors.

    Attributes:
        message: Human-readable error description.
    """

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.message!r})"


class FetchError(CheckPeersError):
    """
    Raised when the remote peer listing cannot be downloaded.

    Attributes:
        url: The URL that was requested.
        status: HTTP status code for non-2xx responses, None for transport failures.
        detail: Additional context about the failure.
    """

    def __init__(
        self,
        url: str,
        *,
        status: int | None = None,
        detail: str | None = None,
    ) -> None:
        self.url = url
        self.status = status
        self.detail = detail

        if status is not None:
            msg = f"Fetching {url} failed with HTTP status {status}"
        else:
            msg = f"Fetching {url} failed"
        if detail:
            msg = f"{msg}: {detail}"

        super().__init__(msg)


class EmptySourceError(CheckPeersError):
    """Raised when the peer listing source resolves to no text."""

    def __init__(self, source: str) -> None:
        self.source = source
        super().__init__(f"Scraped peer list from {source} is empty")


class ParseError(CheckPeersError):
    """
    Raised when structured text cannot be parsed.

    Attributes:
        what: Name of the text being parsed (a listing or a config path).
        detail: Description of what went wrong.
    """

    def __init__(self, what: str, detail: str) -> None:
        self.what = what
        # YAML and validation errors span several lines; diagnostics are one line.
        self.detail = " ".join(detail.split())
        super().__init__(f"Failed to parse {what}: {self.detail}")


class ConfigShapeError(ParseError):
    """Raised when the node configuration lacks the expected mapping structure."""


class ReadError(CheckPeersError):
    """Raised when a local file cannot be read."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to read {path}: {reason}")


class WriteError(CheckPeersError):
    """Raised when the node configuration cannot be written back."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Failed to write {path}: {reason}")


class NoReachablePeersError(CheckPeersError):
    """
    Raised when every candidate peer failed its probe.

    Attributes:
        candidates: Number of peers that were probed.
    """

    def __init__(self, candidates: int) -> None:
        self.candidates = candidates
        super().__init__(f"No reachable peers ({candidates} probed)")


class InvalidAddressError(CheckPeersError, ValueError):
    """Raised when a peer address has no extractable host and port."""

    def __init__(self, address: str, detail: str) -> None:
        self.address = address
        self.detail = detail
        super().__init__(f"Invalid peer address {address!r}: {detail}")
