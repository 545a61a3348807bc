"""Settings and lock-screen collaborator."""

from __future__ import annotations

import logging
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict

from core.event_bus import EventBus

SETTINGS_CHANGED = "settings-changed"
LOCK_CHANGED = "lock-changed"


class SettingsState(BaseModel):
    """User-facing preferences plus the lock flag."""

    model_config = ConfigDict(extra="forbid")

    theme: Literal["light", "dark"] = "dark"
    accent_color: str = "#E95420"
    wallpaper: str = ""
    show_desktop_icons: bool = True
    dock_position: Literal["bottom", "left", "right"] = "bottom"
    window_animations: bool = True
    snap_enabled: bool = True
    sound_effects: bool = True
    notifications: bool = True
    locked: bool = False


class SettingsStore:
    """Owns theme and lock state. The window manager never reads it."""

    def __init__(self, event_bus: EventBus | None = None) -> None:
        self.event_bus = event_bus or EventBus()
        self.state = SettingsState()
        self.logger = logging.getLogger("desk.settings")

    @property
    def locked(self) -> bool:
        return self.state.locked

    def lock_screen(self) -> None:
        self._set_locked(True)

    def unlock_screen(self) -> None:
        self._set_locked(False)

    def update(self, **fields: Any) -> SettingsState:
        """Apply preference changes; unknown fields or bad values raise ValidationError."""
        if "locked" in fields:
            raise ValueError("Use lock_screen()/unlock_screen() to change the lock state.")
        self.state = SettingsState.model_validate({**self.state.model_dump(), **fields})
        self.event_bus.emit(SETTINGS_CHANGED, {"changed": sorted(fields)})
        return self.state

    def reset(self) -> None:
        """Restore default preferences, keeping the current lock state."""
        self.state = SettingsState(locked=self.state.locked)
        self.event_bus.emit(SETTINGS_CHANGED, {"changed": ["*"]})

    def _set_locked(self, locked: bool) -> None:
        if self.state.locked == locked:
            return
        self.state = self.state.model_copy(update={"locked": locked})
        self.logger.info("Screen %s", "locked" if locked else "unlocked")
        self.event_bus.emit(LOCK_CHANGED, {"locked": locked})
