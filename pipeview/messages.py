"""User-visible message channel for the interactive session."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

logger = logging.getLogger(__name__)


class MessageLevel(str, Enum):
    ERROR = "error"
    WARNING = "warning"
    NOTICE = "notice"


_LOG_LEVELS = {
    MessageLevel.ERROR: logging.ERROR,
    MessageLevel.WARNING: logging.WARNING,
    MessageLevel.NOTICE: logging.INFO,
}


@dataclass(frozen=True, slots=True)
class Message:
    level: MessageLevel
    text: str


class MessageLog:
    """Messages shown to the user at the next prompt.

    A message identical to the one just before it is dropped. The level of
    the last accepted message is kept in ``pending_level`` so a prompt can
    show an indicator until ``clear_pending()`` is called.
    """

    def __init__(self) -> None:
        self._messages: list[Message] = []
        self.pending_level: MessageLevel | None = None

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self._messages)

    @property
    def messages(self) -> list[Message]:
        return list(self._messages)

    def add(self, level: MessageLevel, text: str) -> bool:
        """Record a message. Returns False if it duplicated the previous one."""
        if self._messages and self._messages[-1].text == text:
            return False

        self._messages.append(Message(level=level, text=text))
        self.pending_level = level
        logger.log(_LOG_LEVELS[level], "%s", text)
        return True

    def error(self, text: str) -> bool:
        return self.add(MessageLevel.ERROR, text)

    def warning(self, text: str) -> bool:
        return self.add(MessageLevel.WARNING, text)

    def notice(self, text: str) -> bool:
        return self.add(MessageLevel.NOTICE, text)

    def clear_pending(self) -> None:
        self.pending_level = None
