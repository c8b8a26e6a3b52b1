"""User-visible transient notices."""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable, List, Optional

from . import logger

log = logger.get("NOTIFY")

LEVELS = ("success", "info", "warning", "error")


@dataclass
class Notice:
    level: str
    message: str


@dataclass
class Notifier:
    """
    Collects notices raised by pages.

    A listener (the terminal renderer) can be attached to show notices as
    they arrive; every notice is also kept until drained.
    """

    notices: List[Notice] = field(default_factory=list)
    listener: Optional[Callable[[Notice], None]] = None

    def send(self, message: str, level: str = "info") -> Notice:
        if level not in LEVELS:
            level = "info"

        notice = Notice(level=level, message=message)
        self.notices.append(notice)
        log.debug(f"[{level}] {message}")

        if self.listener:
            self.listener(notice)
        return notice

    def success(self, message: str) -> Notice:
        return self.send(message, level="success")

    def info(self, message: str) -> Notice:
        return self.send(message, level="info")

    def warning(self, message: str) -> Notice:
        return self.send(message, level="warning")

    def error(self, message: str) -> Notice:
        return self.send(message, level="error")

    def drain(self) -> List[Notice]:
        """Return and forget pending notices."""
        pending, self.notices = self.notices, []
        return pending

    @property
    def last(self) -> Optional[Notice]:
        return self.notices[-1] if self.notices else None

    def errors(self) -> List[Notice]:
        return [n for n in self.notices if n.level == "error"]
