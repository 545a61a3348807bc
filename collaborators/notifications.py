"""Notification center: a short, self-expiring list of toasts."""

from __future__ import annotations

import itertools
import time
from collections.abc import Callable
from typing import Literal

from pydantic import BaseModel

from core.event_bus import EventBus

NOTIFICATION_ADDED = "notification-added"


class Notification(BaseModel):
    id: str
    title: str
    message: str
    icon: str | None = None
    type: Literal["info", "success", "warning", "error"] = "info"
    timestamp: float


class NotificationCenter:
    """Newest first, capped at ``max_items``, auto-dismissed after ``ttl`` seconds."""

    def __init__(
        self,
        event_bus: EventBus | None = None,
        max_items: int = 5,
        ttl: float = 4.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.event_bus = event_bus or EventBus()
        self.max_items = max_items
        self.ttl = ttl
        self.clock = clock
        self.enabled = True
        self._items: list[Notification] = []
        self._ids = itertools.count(1)

    @property
    def items(self) -> list[Notification]:
        return list(self._items)

    def add(
        self,
        title: str,
        message: str,
        type: Literal["info", "success", "warning", "error"] = "info",
        icon: str | None = None,
    ) -> Notification | None:
        if not self.enabled:
            return None
        notification = Notification(
            id=f"notif-{next(self._ids)}",
            title=title,
            message=message,
            icon=icon,
            type=type,
            timestamp=self.clock(),
        )
        self._items = [notification, *self._items][: self.max_items]
        self.event_bus.emit(NOTIFICATION_ADDED, notification.model_dump())
        return notification

    def remove(self, notification_id: str) -> None:
        self._items = [n for n in self._items if n.id != notification_id]

    def clear_all(self) -> None:
        self._items = []

    def expire(self, now: float | None = None) -> int:
        """Drop entries older than the ttl; returns how many were dismissed."""
        now = self.clock() if now is None else now
        kept = [n for n in self._items if now - n.timestamp < self.ttl]
        dismissed = len(self._items) - len(kept)
        self._items = kept
        return dismissed
