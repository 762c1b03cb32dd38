"""Stdin bridge — turn a piped list of paths into a browsable directory.

Pipeline: read → tokenize → build links → switch context. Each stage runs
to completion before the next starts. Any abort leaves the session where it
was: nothing is created before the input is fully read, and a failed
switch removes the directory that was built.
"""

from __future__ import annotations

import logging
import shutil
from pathlib import Path
from typing import BinaryIO

from utils.paths import get_tmp_root

from .builder import build_links, create_synthetic_dir
from .config import PipeviewConfig
from .reader import read_stream
from .session import Session
from .tokenizer import iter_records
from .types import (
    BridgeResult,
    BridgeStatus,
    ContextSwitchError,
    DirectoryCreationError,
    StreamReadError,
)

logger = logging.getLogger(__name__)


def switch_context(session: Session, directory: Path, config: PipeviewConfig) -> None:
    """Make *directory* the session's current location.

    On success the directory is registered for removal at teardown and the
    listing is refreshed if configured (a refresh error is only a warning).
    On failure the directory is removed and ContextSwitchError is raised;
    the session's path is unchanged.
    """
    path = str(directory)
    try:
        session.change_dir(path)
    except OSError as e:
        shutil.rmtree(path, ignore_errors=True)
        raise ContextSwitchError(f"{path}: {e.strerror or e}") from e

    session.register_tmp_dir(path)
    if config.cd_lists_on_the_fly:
        try:
            session.refresh_listing()
        except Exception as e:
            # The switch already happened; a broken listing does not undo it
            session.messages.warning(f"{config.program_tag}: listing {path} failed: {e}")


def handle_stdin(
    session: Session,
    source: BinaryIO,
    config: PipeviewConfig | None = None,
) -> BridgeResult:
    """Read path records from *source* and switch *session* into a link farm.

    Never raises for bridge failures; the outcome is in the returned
    BridgeResult's status.
    """
    config = config or PipeviewConfig()

    # Relative records only make sense against the path captured here
    session.restore_last_path = False
    cwd = session.current_path
    result = BridgeResult(status=BridgeStatus.EMPTY_INPUT, previous_path=cwd)

    try:
        read = read_stream(
            source,
            chunk_size=config.chunk_size,
            max_chunks=config.max_chunks,
            timeout=config.read_timeout,
        )
    except StreamReadError as e:
        logger.warning("Stdin bridge aborted: %s", e)
        result.status = BridgeStatus.READ_FAILED
        result.error = str(e)
        return result

    result.total_bytes = read.total_bytes
    result.truncated = read.truncated
    result.timed_out = read.timed_out
    if read.total_bytes == 0:
        logger.debug("No input on stdin, nothing to do")
        return result

    try:
        directory = create_synthetic_dir(get_tmp_root(config.tmp_dir), config.program_tag)
    except DirectoryCreationError as e:
        session.messages.error(f"{config.program_tag}: {e}")
        result.status = BridgeStatus.DIRECTORY_FAILED
        result.error = str(e)
        return result

    buf = read.data
    result.manifest = build_links(buf, iter_records(buf), cwd, directory, session.messages)
    # The records were copied out; the input buffer is no longer needed
    del buf, read

    try:
        switch_context(session, directory, config)
    except ContextSwitchError as e:
        session.messages.error(f"{config.program_tag}: {e}")
        result.status = BridgeStatus.SWITCH_FAILED
        result.error = str(e)
        return result

    result.status = BridgeStatus.SWITCHED
    result.directory = str(directory)
    return result
