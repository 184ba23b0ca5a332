"""Fire-and-forget user notifications emitted on login, logout and profile changes."""
from __future__ import annotations
import logging
from typing import List, Tuple

logger = logging.getLogger(__name__)

SUCCESS = 'success'
ERROR = 'error'


class NotificationSink:
    def notify(self, level: str, message: str) -> None:
        raise NotImplementedError

    def success(self, message: str) -> None:
        self.notify(SUCCESS, message)

    def error(self, message: str) -> None:
        self.notify(ERROR, message)


class LoggingNotificationSink(NotificationSink):
    def notify(self, level, message):
        logger.log(logging.WARNING if level == ERROR else logging.INFO, message)


class FlashNotificationSink(NotificationSink):
    """Queue messages as Flask flashes; clients read them back from /auth/me."""

    def notify(self, level, message):
        from flask import flash
        flash(message, level)


class MemoryNotificationSink(NotificationSink):
    def __init__(self):
        self.messages: List[Tuple[str, str]] = []

    def notify(self, level, message):
        self.messages.append((level, message))

    @property
    def last(self):
        return self.messages[-1] if self.messages else None
