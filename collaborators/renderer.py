"""Content renderer: maps each app kind to a body renderer.

Renderers only read window records. Geometry, focus and stacking changes
go through the window manager.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass, field

from core.event_bus import EventBus
from desktop_model.app_registry import AppId
from desktop_model.window import Window
from desktop_model.window_store import STORE_CHANGED, WindowStore
from shortcuts.platform import OTHER, PlatformProfile
from shortcuts.table import shortcut_help

logger = logging.getLogger("desk.renderer")


@dataclass
class RenderedContent:
    window_id: str
    app_id: str
    title: str
    lines: list[str] = field(default_factory=list)


Renderer = Callable[[Window], list[str]]


def _panel(window: Window) -> list[str]:
    return [window.title]


def _preview(window: Window) -> list[str]:
    if window.preview_data is None:
        return ["Nothing to preview"]
    return [f"{window.preview_data.type}: {window.preview_data.url}"]


def _settings(window: Window) -> list[str]:
    tab = (window.initial_data or {}).get("tab", "appearance")
    return [f"Settings tab: {tab}"]


def _unknown(window: Window) -> list[str]:
    return ["Unknown app"]


class ContentRenderer:
    """Capability lookup from ``AppId`` to a body renderer."""

    def __init__(self, store: WindowStore, profile: PlatformProfile = OTHER) -> None:
        self.store = store
        self.profile = profile
        self.last_frame: list[RenderedContent] = []
        self._renderers: dict[AppId, Renderer] = {app_id: _panel for app_id in AppId}
        self._renderers[AppId.PREVIEW] = _preview
        self._renderers[AppId.SETTINGS] = _settings
        self._renderers[AppId.SHORTCUTS] = self._shortcuts
        self._renderers[AppId.UNKNOWN] = _unknown

    def register(self, app_id: AppId, renderer: Renderer) -> None:
        self._renderers[app_id] = renderer

    def attach(self, event_bus: EventBus) -> None:
        """Repaint after every store change."""
        event_bus.subscribe(STORE_CHANGED, lambda _payload: self.paint())

    def render(self, app_id: AppId, window_id: str) -> RenderedContent | None:
        window = self.store.find(window_id)
        if window is None or window.app_id is not app_id:
            return None
        renderer = self._renderers.get(app_id, _unknown)
        return RenderedContent(
            window_id=window.window_id,
            app_id=window.app_id.value,
            title=window.title,
            lines=renderer(window),
        )

    def paint(self) -> list[RenderedContent]:
        """Render visible windows bottom to top."""
        frame: list[RenderedContent] = []
        for window in self.store.stacking_order():
            content = self.render(window.app_id, window.window_id)
            if content is not None:
                frame.append(content)
        self.last_frame = frame
        logger.debug("Painted %d windows (revision %d)", len(frame), self.store.revision)
        return frame

    def _shortcuts(self, window: Window) -> list[str]:
        lines: list[str] = []
        for category, entries in shortcut_help(self.profile).items():
            lines.append(category)
            lines.extend(f"  {entry['label']}: {' + '.join(entry['keys'])}" for entry in entries)
        return lines
