"""Static keyboard shortcut table.

Each entry carries the key labels shown in the help panel for macOS and for
Windows/Linux, the physical chord matched on each platform, and the action
tag the dispatcher routes on. "Super" is the Meta key on both platforms.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict

from shortcuts.keys import KeyEvent
from shortcuts.platform import PlatformProfile

Category = Literal["System", "Windows", "Navigation", "Apps"]

CATEGORY_ORDER: tuple[Category, ...] = ("System", "Windows", "Navigation", "Apps")


class Chord(BaseModel):
    """Physical key code plus the exact set of held modifiers."""

    model_config = ConfigDict(frozen=True)

    code: str
    meta: bool = False
    ctrl: bool = False
    alt: bool = False
    shift: bool = False

    def matches(self, event: KeyEvent) -> bool:
        return (
            event.code == self.code
            and event.meta == self.meta
            and event.ctrl == self.ctrl
            and event.alt == self.alt
            and event.shift == self.shift
        )


class Shortcut(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    category: Category
    mac_keys: tuple[str, ...]
    win_keys: tuple[str, ...]
    mac_chord: Chord
    win_chord: Chord
    action: str

    def chord_for(self, profile: PlatformProfile) -> Chord:
        return self.mac_chord if profile.is_mac else self.win_chord

    def keys_for(self, profile: PlatformProfile) -> tuple[str, ...]:
        return self.mac_keys if profile.is_mac else self.win_keys


def _entry(
    label: str,
    category: Category,
    mac_keys: list[str],
    win_keys: list[str],
    action: str,
    chord: Chord,
    win_chord: Chord | None = None,
) -> Shortcut:
    return Shortcut(
        label=label,
        category=category,
        mac_keys=tuple(mac_keys),
        win_keys=tuple(win_keys),
        mac_chord=chord,
        win_chord=win_chord or chord,
        action=action,
    )


def _super(code: str) -> Chord:
    return Chord(code=code, meta=True)


def _launcher(code: str) -> Chord:
    return Chord(code=code, ctrl=True, alt=True)


SHORTCUTS: tuple[Shortcut, ...] = (
    # System
    _entry("Activities overview", "System", ["⌥", "1"], ["Alt", "1"], "activities", Chord(code="Digit1", alt=True)),
    _entry("Show Applications", "System", ["⌥", "2"], ["Alt", "2"], "show-apps", Chord(code="Digit2", alt=True)),
    _entry("Lock Screen", "System", ["⌘", "L"], ["Super", "L"], "lock-screen", _super("KeyL")),
    _entry("Show Desktop (minimize all)", "System", ["⌘", "D"], ["Super", "D"], "show-desktop", _super("KeyD")),
    _entry("Keyboard Shortcuts", "System", ["⌘", "K"], ["Super", "K"], "open-shortcuts", _super("KeyK")),
    _entry("Settings", "System", ["⌘", "I"], ["Super", "I"], "open-settings", _super("KeyI")),
    # Windows
    _entry(
        "Close window", "Windows", ["⌘", "Q"], ["Ctrl", "Q"], "close-window",
        Chord(code="KeyQ", meta=True), Chord(code="KeyQ", ctrl=True),
    ),
    _entry("Maximize / Restore window", "Windows", ["⌘", "↑"], ["Super", "↑"], "maximize-window", _super("ArrowUp")),
    _entry("Restore / Unmaximize", "Windows", ["⌘", "↓"], ["Super", "↓"], "restore-window", _super("ArrowDown")),
    _entry("Snap window left", "Windows", ["⌘", "←"], ["Super", "←"], "snap-left", _super("ArrowLeft")),
    _entry("Snap window right", "Windows", ["⌘", "→"], ["Super", "→"], "snap-right", _super("ArrowRight")),
    _entry("Minimize window", "Windows", ["⌘", "H"], ["Super", "H"], "minimize-window", _super("KeyH")),
    # Apps
    _entry("Open Terminal", "Apps", ["⌃", "⌥", "T"], ["Ctrl", "Alt", "T"], "open-terminal", _launcher("KeyT")),
    _entry("About Me", "Apps", ["⌃", "⌥", "A"], ["Ctrl", "Alt", "A"], "open-about", _launcher("KeyA")),
    _entry("Projects", "Apps", ["⌃", "⌥", "P"], ["Ctrl", "Alt", "P"], "open-projects", _launcher("KeyP")),
    _entry("Photos", "Apps", ["⌃", "⌥", "E"], ["Ctrl", "Alt", "E"], "open-photos", _launcher("KeyE")),
    _entry("Games", "Apps", ["⌃", "⌥", "G"], ["Ctrl", "Alt", "G"], "open-games", _launcher("KeyG")),
    _entry("Music Player", "Apps", ["⌃", "⌥", "M"], ["Ctrl", "Alt", "M"], "open-music", _launcher("KeyM")),
    _entry("Resume", "Apps", ["⌃", "⌥", "R"], ["Ctrl", "Alt", "R"], "open-resume", _launcher("KeyR")),
    # Navigation
    _entry("Switch to next window", "Navigation", ["⌥", "Tab"], ["Alt", "Tab"], "switch-window", Chord(code="Tab", alt=True)),
    _entry(
        "Switch to previous window", "Navigation", ["⇧", "⌥", "Tab"], ["Shift", "Alt", "Tab"],
        "switch-window-back", Chord(code="Tab", alt=True, shift=True),
    ),
    _entry(
        "Full screen (browser)", "Navigation", ["⌃", "⌘", "F"], ["F11"], "fullscreen",
        Chord(code="KeyF", ctrl=True, meta=True), Chord(code="F11"),
    ),
)


def find_shortcut(
    event: KeyEvent,
    profile: PlatformProfile,
    shortcuts: tuple[Shortcut, ...] = SHORTCUTS,
) -> Shortcut | None:
    """First table entry whose chord for this platform matches the event."""
    return next((s for s in shortcuts if s.chord_for(profile).matches(event)), None)


def shortcut_help(
    profile: PlatformProfile,
    shortcuts: tuple[Shortcut, ...] = SHORTCUTS,
) -> dict[str, list[dict[str, object]]]:
    """Group entries by category for the help panel, with this platform's labels."""
    grouped: dict[str, list[dict[str, object]]] = {category: [] for category in CATEGORY_ORDER}
    for shortcut in shortcuts:
        grouped[shortcut.category].append(
            {"label": shortcut.label, "keys": list(shortcut.keys_for(profile)), "action": shortcut.action}
        )
    return grouped
