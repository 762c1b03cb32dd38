"""Serialize bridge results to JSON-compatible dicts."""

from __future__ import annotations

import os
from typing import Any

import orjson

from .types import BridgeResult, LinkManifest, LinkOutcome, RecordResult


def _text(value: str | None) -> str | None:
    """Paths may carry undecodable bytes (surrogateescape); JSON needs valid UTF-8."""
    if value is None:
        return None
    return os.fsencode(value).decode("utf-8", "replace")


def serialize_record(result: RecordResult) -> dict[str, Any]:
    """Convert a RecordResult to a dict."""
    return {
        "record": _text(result.record),
        "outcome": result.outcome.value,
        "source": _text(result.source),
        "link_name": _text(result.link_name),
        "error": result.error,
    }


def serialize_manifest(manifest: LinkManifest) -> dict[str, Any]:
    """Convert a LinkManifest to a dict with per-outcome counts."""
    return {
        "directory": manifest.directory,
        "links": {_text(k): _text(v) for k, v in manifest.links.items()},
        "counts": {outcome.value: manifest.count(outcome) for outcome in LinkOutcome},
        "records": [serialize_record(r) for r in manifest.results],
    }


def serialize_result(result: BridgeResult) -> dict[str, Any]:
    """Convert a BridgeResult to a dict suitable for a JSON report."""
    return {
        "status": result.status.value,
        "ok": result.ok,
        "previous_path": result.previous_path,
        "directory": result.directory,
        "total_bytes": result.total_bytes,
        "truncated": result.truncated,
        "timed_out": result.timed_out,
        "error": result.error,
        "manifest": serialize_manifest(result.manifest) if result.manifest else None,
    }


def dumps_result(result: BridgeResult, *, pretty: bool = False) -> bytes:
    """Encode a BridgeResult as JSON bytes."""
    option = orjson.OPT_INDENT_2 if pretty else 0
    return orjson.dumps(serialize_result(result), option=option)
