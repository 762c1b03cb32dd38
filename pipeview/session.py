"""Session — the working context the stdin bridge reads and mutates."""

from __future__ import annotations

import logging
import os
import shutil
from collections.abc import Callable
from pathlib import Path

from .messages import MessageLog

logger = logging.getLogger(__name__)


class Session:
    """Process-wide state of one interactive file-browsing session.

    Holds the current path, the restore-last-path flag, the directory
    history, the user-visible message log, and the synthetic directory
    registered for removal at teardown.

    Usage::

        with Session.from_cwd(on_refresh=print_listing) as session:
            result = handle_stdin(session, sys.stdin.buffer, config)
            ...
        # registered synthetic directory removed here
    """

    def __init__(
        self,
        current_path: str,
        *,
        restore_last_path: bool = True,
        on_refresh: Callable[[Session], None] | None = None,
        last_path_file: str | Path | None = None,
    ) -> None:
        self.current_path = current_path
        self.restore_last_path = restore_last_path
        self.stdin_tmp_dir: str | None = None
        self.dir_history: list[str] = []
        self.messages = MessageLog()
        self._on_refresh = on_refresh
        self._last_path_file = Path(last_path_file) if last_path_file else None

    @classmethod
    def from_cwd(cls, **kwargs) -> Session:
        """Create a session positioned at the process working directory."""
        return cls(os.getcwd(), **kwargs)

    # ------------------------------------------------------------------
    # Context manager
    # ------------------------------------------------------------------

    def __enter__(self) -> Session:
        return self

    def __exit__(self, *exc: object) -> None:
        self.teardown()

    # ------------------------------------------------------------------
    # Location
    # ------------------------------------------------------------------

    def change_dir(self, path: str) -> None:
        """Enter *path* and make it the current path.

        Raises OSError if the directory cannot be entered; the current path
        is left unchanged in that case.
        """
        os.chdir(path)
        self.current_path = path
        self.add_to_dir_history(path)

    def add_to_dir_history(self, path: str) -> None:
        if not self.dir_history or self.dir_history[-1] != path:
            self.dir_history.append(path)

    def refresh_listing(self) -> None:
        if self._on_refresh is not None:
            self._on_refresh(self)

    # ------------------------------------------------------------------
    # Synthetic directory lifecycle
    # ------------------------------------------------------------------

    def register_tmp_dir(self, path: str) -> None:
        """Register *path* for recursive removal at teardown."""
        self.stdin_tmp_dir = path

    def teardown(self) -> None:
        """Remove the registered synthetic directory, if any."""
        path = self.stdin_tmp_dir
        if path is None:
            return

        self.stdin_tmp_dir = None
        try:
            shutil.rmtree(path)
            logger.debug("Removed synthetic directory %s", path)
        except FileNotFoundError:
            pass
        except OSError as e:
            logger.warning("Failed to remove %s: %s", path, e)

    # ------------------------------------------------------------------
    # Last path persistence
    # ------------------------------------------------------------------

    def save_last_path(self) -> bool:
        """Store the current path for the next session.

        Nothing is written when no last-path file is configured or when
        the current path is the synthetic directory.
        """
        if self._last_path_file is None:
            return False
        if self.stdin_tmp_dir is not None and self.current_path == self.stdin_tmp_dir:
            return False

        try:
            self._last_path_file.parent.mkdir(parents=True, exist_ok=True)
            self._last_path_file.write_text(f"*0:{self.current_path}\n", encoding="utf-8")
        except OSError as e:
            self.messages.error(f"Error saving last visited directory: {e}")
            return False
        return True

    def load_last_path(self) -> str | None:
        """Return the stored last path if restoring is enabled and it still exists."""
        if not self.restore_last_path or self._last_path_file is None:
            return None
        if not self._last_path_file.is_file():
            return None

        for line in self._last_path_file.read_text(encoding="utf-8").splitlines():
            if not line.startswith("*"):
                continue
            _, _, path = line.partition(":")
            if path and os.path.isdir(path):
                return path
        return None
