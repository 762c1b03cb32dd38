"""Bounded stream reader — accumulate piped input under a hard byte ceiling."""

from __future__ import annotations

import logging
import os
import select
import sys
from typing import BinaryIO

from .types import ReadResult, StreamReadError

logger = logging.getLogger(__name__)


def _fileno(source: BinaryIO) -> int | None:
    try:
        return source.fileno()
    except (AttributeError, OSError, ValueError):
        # io.UnsupportedOperation is both an OSError and a ValueError
        return None


def _wait_readable(fd: int, timeout: float) -> bool:
    ready, _, _ = select.select([fd], [], [], timeout)
    return bool(ready)


def read_stream(
    source: BinaryIO,
    chunk_size: int,
    max_chunks: int,
    timeout: float | None = None,
) -> ReadResult:
    """Read *source* until end of stream or until the ceiling is reached.

    At most ``chunk_size * max_chunks`` bytes are read. Input beyond the
    ceiling is never consumed and is not an error; ``truncated`` is set on
    the result. If *timeout* is given and *source* has a selectable file
    descriptor, waiting longer than *timeout* seconds for the next chunk
    ends the stream early with whatever has been accumulated.

    Raises StreamReadError if a read fails.
    """
    limit = chunk_size * max_chunks
    fd = _fileno(source)
    buf = bytearray()
    result = ReadResult(data=buf)

    while len(buf) < limit:
        want = min(chunk_size, limit - len(buf))

        if timeout is not None and fd is not None and not _wait_readable(fd, timeout):
            logger.warning("No input for %.1fs, using %d bytes read so far", timeout, len(buf))
            result.timed_out = True
            break

        try:
            # Prefer the raw descriptor: a single read(2) per chunk
            data = os.read(fd, want) if fd is not None else source.read(want)
        except OSError as e:
            raise StreamReadError(f"read error: {e}") from e

        if not data:
            break
        buf += data
    else:
        result.truncated = True
        logger.debug("Input ceiling of %d bytes reached, remaining input ignored", limit)

    return result


def reattach_tty(stdin: BinaryIO | None = None, stdout: BinaryIO | None = None) -> bool:
    """Point stdin back at the terminal after consuming piped input.

    Duplicates stdout onto stdin when stdout is a terminal, otherwise opens
    ``/dev/tty``. Returns True on success; failures are logged only.
    """
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout

    in_fd = _fileno(stdin)
    out_fd = _fileno(stdout)
    if in_fd is None:
        return False

    try:
        if out_fd is not None and os.isatty(out_fd):
            os.dup2(out_fd, in_fd)
        else:
            tty_fd = os.open("/dev/tty", os.O_RDONLY)
            try:
                os.dup2(tty_fd, in_fd)
            finally:
                os.close(tty_fd)
    except OSError as e:
        logger.warning("Could not reattach stdin to the terminal: %s", e)
        return False

    return True
