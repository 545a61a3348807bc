"""Shortcut dispatcher: key chords in, window-manager calls and UI events out."""

from __future__ import annotations

import logging
from collections.abc import Callable

from collaborators.settings_store import SettingsStore
from core.event_bus import EventBus
from desktop_model.app_registry import AppId
from desktop_model.window import SnapSide
from shortcuts.keys import KeyEvent
from shortcuts.platform import PlatformProfile
from shortcuts.table import SHORTCUTS, Shortcut, find_shortcut
from window_manager.manager import WindowManager

logger = logging.getLogger("desk.dispatcher")

SHOW_OVERVIEW = "show-overview"
SHOW_APP_GRID = "show-app-grid"
TOGGLE_FULLSCREEN = "toggle-fullscreen"
SHORTCUT_DISPATCHED = "shortcut-dispatched"

_APP_ACTIONS = {
    "open-shortcuts": AppId.SHORTCUTS,
    "open-settings": AppId.SETTINGS,
    "open-terminal": AppId.TERMINAL,
    "open-about": AppId.ABOUT,
    "open-projects": AppId.PROJECTS,
    "open-photos": AppId.PHOTOS,
    "open-games": AppId.GAMES,
    "open-music": AppId.MUSIC,
    "open-resume": AppId.RESUME,
}


class ShortcutDispatcher:
    """Routes keydown events through the static shortcut table.

    Holds no state beyond the table and the platform profile. Window changes
    go through the window manager; overview, app grid and fullscreen requests
    are emitted on the event bus for the shell to handle; the lock request
    goes to the settings collaborator.
    """

    def __init__(
        self,
        window_manager: WindowManager,
        settings: SettingsStore,
        event_bus: EventBus,
        profile: PlatformProfile,
        shortcuts: tuple[Shortcut, ...] = SHORTCUTS,
    ) -> None:
        self.window_manager = window_manager
        self.settings = settings
        self.event_bus = event_bus
        self.profile = profile
        self.shortcuts = shortcuts
        self._handlers: dict[str, Callable[[], None]] = {
            "activities": lambda: self._emit(SHOW_OVERVIEW),
            "show-apps": lambda: self._emit(SHOW_APP_GRID),
            "fullscreen": lambda: self._emit(TOGGLE_FULLSCREEN),
            "lock-screen": self.settings.lock_screen,
            "show-desktop": self.window_manager.minimize_all,
            "close-window": self.window_manager.close_active_window,
            "maximize-window": lambda: self._on_focused(self.window_manager.toggle_maximize),
            "restore-window": lambda: self._on_focused(self.window_manager.restore_layout),
            "minimize-window": lambda: self._on_focused(self.window_manager.minimize_window),
            "snap-left": lambda: self._on_focused(
                lambda window_id: self.window_manager.snap_window(window_id, SnapSide.LEFT)
            ),
            "snap-right": lambda: self._on_focused(
                lambda window_id: self.window_manager.snap_window(window_id, SnapSide.RIGHT)
            ),
            "switch-window": lambda: self.window_manager.cycle_focus(1),
            "switch-window-back": lambda: self.window_manager.cycle_focus(-1),
        }
        for action, app_id in _APP_ACTIONS.items():
            self._handlers[action] = self._opener(app_id)

    def handle_keydown(self, event: KeyEvent) -> str | None:
        """Dispatch one keydown. Returns the handled action tag, or None."""
        # Plain typing in a text field is never hijacked.
        if event.in_text_field and not (event.meta or event.ctrl):
            return None

        shortcut = find_shortcut(event, self.profile, self.shortcuts)
        if shortcut is None:
            return None
        handler = self._handlers.get(shortcut.action)
        if handler is None:
            logger.warning("No handler for shortcut action '%s'", shortcut.action)
            return None

        event.prevent_default()
        event.stop_propagation()
        logger.debug("Shortcut '%s' -> %s", shortcut.label, shortcut.action)
        handler()
        self.event_bus.emit(SHORTCUT_DISPATCHED, {"action": shortcut.action, "label": shortcut.label})
        return shortcut.action

    def _on_focused(self, operation: Callable[[str], None]) -> None:
        focused_id = self.window_manager.store.focused_id
        if focused_id is not None:
            operation(focused_id)

    def _opener(self, app_id: AppId) -> Callable[[], None]:
        def open_app() -> None:
            self.window_manager.open_window(app_id)

        return open_app

    def _emit(self, event_name: str) -> None:
        self.event_bus.emit(event_name, {"source": "keyboard"})
