"""Synthetic view builder — one symlink per valid record in a private directory."""

from __future__ import annotations

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from utils.paths import synthetic_dir_path

from .messages import MessageLog
from .tokenizer import record_bytes
from .types import (
    DirectoryCreationError,
    LinkManifest,
    LinkOutcome,
    PathRecord,
    RecordResult,
)

logger = logging.getLogger(__name__)

_CREATE_ATTEMPTS = 8
_INVALID_NAMES = {"", ".", ".."}


def create_synthetic_dir(tmp_root: Path, program_tag: str) -> Path:
    """Create ``<tmp_root>/<program_tag>.<suffix>`` with mode 0700.

    Missing parents of *tmp_root* are created. Raises DirectoryCreationError
    if the directory cannot be made.
    """
    try:
        tmp_root.mkdir(parents=True, exist_ok=True)
    except OSError as e:
        raise DirectoryCreationError(f"{tmp_root}: {e.strerror or e}") from e

    for _ in range(_CREATE_ATTEMPTS):
        path = synthetic_dir_path(tmp_root, program_tag)
        try:
            os.mkdir(path, 0o700)
        except FileExistsError:
            logger.debug("Synthetic directory name %s taken, retrying", path.name)
            continue
        except OSError as e:
            raise DirectoryCreationError(f"{path}: {e.strerror or e}") from e
        logger.debug("Created synthetic directory %s", path)
        return path

    raise DirectoryCreationError(
        f"{tmp_root}: no free name after {_CREATE_ATTEMPTS} attempts"
    )


def resolve_source(record: str, cwd: str) -> str:
    """Absolute records are used verbatim; relative ones are joined to *cwd*."""
    if record.startswith(os.sep):
        return record
    return os.path.join(cwd, record)


def link_name_for(record: str) -> str:
    """The final path segment of *record* (trailing separators ignored)."""
    stripped = record.rstrip(os.sep)
    return stripped.rsplit(os.sep, 1)[-1]


def _reason(e: Exception) -> str:
    return getattr(e, "strerror", None) or str(e)


def _warn(messages: MessageLog | None, text: str) -> None:
    if messages is not None:
        messages.warning(text)
    else:
        logger.warning("%s", text)


def _process_record(
    record: str,
    cwd: str,
    directory: Path,
    taken: set[str],
    messages: MessageLog | None,
) -> RecordResult:
    if not record:
        return RecordResult(record=record, outcome=LinkOutcome.SKIPPED_EMPTY)

    source = resolve_source(record, cwd)

    # lstat: a symlink record is mirrored as a symlink, not followed
    try:
        os.lstat(source)
    except (OSError, ValueError) as e:
        # ValueError: embedded NUL byte
        logger.debug("Skipping %r: %s", record, _reason(e))
        return RecordResult(
            record=record,
            outcome=LinkOutcome.SKIPPED_NOT_FOUND,
            source=source,
            error=_reason(e),
        )

    name = link_name_for(record)
    if name in _INVALID_NAMES:
        _warn(messages, f"ln: '{record}': no usable file name")
        return RecordResult(
            record=record,
            outcome=LinkOutcome.SKIPPED_INVALID_NAME,
            source=source,
            link_name=name,
        )

    if name in taken:
        _warn(messages, f"ln: '{record}': '{name}' already linked from an earlier entry")
        return RecordResult(
            record=record,
            outcome=LinkOutcome.SKIPPED_COLLISION,
            source=source,
            link_name=name,
        )

    try:
        os.symlink(source, directory / name)
    except (OSError, ValueError) as e:
        reason = _reason(e)
        _warn(messages, f"ln: '{record}': {reason}")
        return RecordResult(
            record=record,
            outcome=LinkOutcome.LINK_FAILED,
            source=source,
            link_name=name,
            error=reason,
        )

    taken.add(name)
    return RecordResult(
        record=record,
        outcome=LinkOutcome.CREATED,
        source=source,
        link_name=name,
    )


def build_links(
    buf: bytes | bytearray,
    records: Iterable[PathRecord],
    cwd: str,
    directory: Path,
    messages: MessageLog | None = None,
) -> LinkManifest:
    """Create a symlink in *directory* for every record whose target exists.

    Relative records resolve against *cwd*, the working directory captured
    before any input was read. A failure on one record never stops the
    others; every record gets an entry in the returned manifest.
    """
    manifest = LinkManifest(directory=str(directory))
    taken: set[str] = set()

    for rec in records:
        record = os.fsdecode(record_bytes(buf, rec))
        manifest.results.append(_process_record(record, cwd, directory, taken, messages))

    logger.info(
        "Linked %d of %d records into %s",
        manifest.created_count,
        len(manifest.results),
        directory,
    )
    return manifest
