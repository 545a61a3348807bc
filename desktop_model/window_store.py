"""Window entity store: the single source of truth for open windows."""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from core.event_bus import EventBus
from desktop_model.app_registry import AppId
from desktop_model.window import DesktopSnapshot, Window

STORE_CHANGED = "store-changed"


class WindowStore:
    """Ordered collection of window records plus focus and z-order counters.

    Only the window manager writes here. Readers (renderer, dispatcher, CLI)
    use ``windows``/``find``/``snapshot`` and subscribe to ``store-changed``.
    """

    def __init__(self, event_bus: EventBus | None = None, z_start: int = 10) -> None:
        self.event_bus = event_bus or EventBus()
        self._windows: dict[str, Window] = {}
        self._focused_id: str | None = None
        self._z_counter = z_start
        self._id_counter = 0
        self._open_counter = 0
        self._revision = 0
        self.drag_snap_preview: str | None = None

    # -- reads ---------------------------------------------------------

    @property
    def focused_id(self) -> str | None:
        return self._focused_id

    @property
    def revision(self) -> int:
        return self._revision

    def windows(self) -> list[Window]:
        """All windows in creation order."""
        return list(self._windows.values())

    def find(self, window_id: str) -> Window | None:
        return self._windows.get(window_id)

    def find_by_app(self, app_id: AppId) -> Window | None:
        return next((w for w in self._windows.values() if w.app_id is app_id), None)

    def focused(self) -> Window | None:
        return self._windows.get(self._focused_id) if self._focused_id else None

    def stacking_order(self) -> list[Window]:
        """Visible windows, bottom to top."""
        return sorted((w for w in self._windows.values() if not w.minimized), key=lambda w: w.z)

    def topmost_visible(self) -> Window | None:
        visible = self.stacking_order()
        return visible[-1] if visible else None

    def snapshot(self) -> DesktopSnapshot:
        return DesktopSnapshot(
            windows=[w.to_dict() for w in self._windows.values()],
            focused_id=self._focused_id,
        )

    def __len__(self) -> int:
        return len(self._windows)

    # -- writes (window manager only) ------------------------------------

    def next_z(self) -> int:
        """Hand out a fresh z value; values are never reused."""
        self._z_counter += 1
        return self._z_counter

    def next_window_id(self, app_id: AppId) -> str:
        self._id_counter += 1
        return f"{app_id.value}-{self._id_counter}"

    def next_open_index(self) -> int:
        self._open_counter += 1
        return self._open_counter

    def add(self, window: Window) -> None:
        self._windows[window.window_id] = window

    def update(self, window_id: str, **changes: Any) -> Window:
        updated = replace(self._windows[window_id], **changes)
        self._windows[window_id] = updated
        return updated

    def remove(self, window_id: str) -> Window | None:
        return self._windows.pop(window_id, None)

    def set_focus(self, window_id: str | None) -> None:
        self._focused_id = window_id

    def notify(self, op: str, window_id: str | None = None) -> None:
        """Publish one change notification after a completed mutation."""
        self._revision += 1
        self.event_bus.emit(
            STORE_CHANGED,
            {
                "op": op,
                "window_id": window_id,
                "focused_id": self._focused_id,
                "revision": self._revision,
            },
        )
