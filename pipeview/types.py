"""Shared types for the pipeview package."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


# ---------------------------------------------------------------------------
# Errors — raised by the bridge stages, converted to BridgeStatus by the bridge
# ---------------------------------------------------------------------------

class BridgeError(Exception):
    """Base class for errors that abort the stdin bridge."""


class StreamReadError(BridgeError):
    """Reading the input stream failed."""


class DirectoryCreationError(BridgeError):
    """The synthetic directory could not be created."""


class ContextSwitchError(BridgeError):
    """The session could not enter the synthetic directory."""


# ---------------------------------------------------------------------------
# Reader / tokenizer
# ---------------------------------------------------------------------------

@dataclass(slots=True)
class ReadResult:
    """Bytes accumulated from the input stream."""

    data: bytearray
    truncated: bool = False  # ceiling reached; more input may or may not have followed
    timed_out: bool = False

    @property
    def total_bytes(self) -> int:
        return len(self.data)


@dataclass(frozen=True, slots=True)
class PathRecord:
    """A view (offset + length) into the input buffer."""

    offset: int
    length: int

    @property
    def end(self) -> int:
        return self.offset + self.length

    @property
    def is_empty(self) -> bool:
        return self.length == 0


# ---------------------------------------------------------------------------
# Per-record outcomes — collected into a LinkManifest
# ---------------------------------------------------------------------------

class LinkOutcome(str, Enum):
    """What happened to a single record."""

    CREATED = "created"
    SKIPPED_EMPTY = "skipped_empty"
    SKIPPED_NOT_FOUND = "skipped_not_found"
    SKIPPED_COLLISION = "skipped_collision"
    SKIPPED_INVALID_NAME = "skipped_invalid_name"
    LINK_FAILED = "link_failed"


@dataclass(frozen=True, slots=True)
class RecordResult:
    """Outcome of processing one record."""

    record: str
    outcome: LinkOutcome
    source: str | None = None  # resolved absolute target
    link_name: str | None = None
    error: str | None = None

    @property
    def created(self) -> bool:
        return self.outcome is LinkOutcome.CREATED


@dataclass(slots=True)
class LinkManifest:
    """Every record's outcome, in input order."""

    directory: str
    results: list[RecordResult] = field(default_factory=list)

    @property
    def links(self) -> dict[str, str]:
        """Created links: link name -> resolved target."""
        return {r.link_name: r.source for r in self.results if r.created}

    @property
    def created_count(self) -> int:
        return sum(1 for r in self.results if r.created)

    def count(self, outcome: LinkOutcome) -> int:
        return sum(1 for r in self.results if r.outcome is outcome)

    def warnings(self) -> list[RecordResult]:
        """Records that were skipped with a user-visible warning."""
        noisy = (
            LinkOutcome.SKIPPED_COLLISION,
            LinkOutcome.SKIPPED_INVALID_NAME,
            LinkOutcome.LINK_FAILED,
        )
        return [r for r in self.results if r.outcome in noisy]


# ---------------------------------------------------------------------------
# Bridge result
# ---------------------------------------------------------------------------

class BridgeStatus(str, Enum):
    """Overall outcome of the stdin bridge."""

    SWITCHED = "switched"
    EMPTY_INPUT = "empty_input"
    READ_FAILED = "read_failed"
    DIRECTORY_FAILED = "directory_failed"
    SWITCH_FAILED = "switch_failed"


@dataclass(slots=True)
class BridgeResult:
    """Returned by handle_stdin()."""

    status: BridgeStatus
    previous_path: str
    directory: str | None = None
    manifest: LinkManifest | None = None
    total_bytes: int = 0
    truncated: bool = False
    timed_out: bool = False
    error: str | None = None

    @property
    def ok(self) -> bool:
        return self.status in (BridgeStatus.SWITCHED, BridgeStatus.EMPTY_INPUT)
