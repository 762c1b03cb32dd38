"""Pipeview — browse a piped list of paths as a directory of symlinks.

Usage::

    import sys
    from pipeview import PipeviewConfig, Session, handle_stdin

    with Session.from_cwd() as session:
        result = handle_stdin(session, sys.stdin.buffer, PipeviewConfig.load())
        print(result.status, session.current_path)
"""

from .bridge import handle_stdin, switch_context
from .builder import build_links, create_synthetic_dir, link_name_for, resolve_source
from .config import PipeviewConfig
from .messages import Message, MessageLevel, MessageLog
from .reader import read_stream, reattach_tty
from .session import Session
from .tokenizer import iter_records, record_bytes
from .types import (
    BridgeError,
    BridgeResult,
    BridgeStatus,
    ContextSwitchError,
    DirectoryCreationError,
    LinkManifest,
    LinkOutcome,
    PathRecord,
    ReadResult,
    RecordResult,
    StreamReadError,
)

__all__ = [
    # Core
    "handle_stdin",
    "switch_context",
    "Session",
    "PipeviewConfig",
    # Stages
    "read_stream",
    "reattach_tty",
    "iter_records",
    "record_bytes",
    "create_synthetic_dir",
    "build_links",
    "resolve_source",
    "link_name_for",
    # Messages
    "Message",
    "MessageLevel",
    "MessageLog",
    # Data types
    "BridgeResult",
    "BridgeStatus",
    "LinkManifest",
    "LinkOutcome",
    "PathRecord",
    "ReadResult",
    "RecordResult",
    # Errors
    "BridgeError",
    "StreamReadError",
    "DirectoryCreationError",
    "ContextSwitchError",
]
