"""Record tokenizer — split the input buffer into newline-delimited records."""

from __future__ import annotations

from collections.abc import Iterator

from .types import PathRecord

SEPARATOR = b"\n"


def iter_records(buf: bytes | bytearray) -> Iterator[PathRecord]:
    """Yield a PathRecord for every newline-delimited span of *buf*.

    Empty spans between separators are yielded (they are ignored later).
    A final span without a trailing newline is still yielded; the empty
    span after a trailing newline is not. The buffer is never modified,
    so iterating again rescans from the start.
    """
    start = 0
    size = len(buf)

    while start < size:
        sep = buf.find(SEPARATOR, start)
        if sep == -1:
            yield PathRecord(offset=start, length=size - start)
            return
        yield PathRecord(offset=start, length=sep - start)
        start = sep + 1


def record_bytes(buf: bytes | bytearray, record: PathRecord) -> bytes:
    """Return a copy of the bytes *record* covers."""
    return bytes(buf[record.offset:record.end])
