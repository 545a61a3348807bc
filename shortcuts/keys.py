"""Keyboard events and chord-string parsing."""

from __future__ import annotations

from dataclasses import dataclass

_MODIFIER_ALIASES = {
    "ctrl": "ctrl",
    "control": "ctrl",
    "⌃": "ctrl",
    "alt": "alt",
    "option": "alt",
    "opt": "alt",
    "⌥": "alt",
    "shift": "shift",
    "⇧": "shift",
    "meta": "meta",
    "super": "meta",
    "win": "meta",
    "cmd": "meta",
    "command": "meta",
    "⌘": "meta",
}

_NAMED_CODES = {
    "up": ("ArrowUp", "ArrowUp"),
    "↑": ("ArrowUp", "ArrowUp"),
    "arrowup": ("ArrowUp", "ArrowUp"),
    "down": ("ArrowDown", "ArrowDown"),
    "↓": ("ArrowDown", "ArrowDown"),
    "arrowdown": ("ArrowDown", "ArrowDown"),
    "left": ("ArrowLeft", "ArrowLeft"),
    "←": ("ArrowLeft", "ArrowLeft"),
    "arrowleft": ("ArrowLeft", "ArrowLeft"),
    "right": ("ArrowRight", "ArrowRight"),
    "→": ("ArrowRight", "ArrowRight"),
    "arrowright": ("ArrowRight", "ArrowRight"),
    "tab": ("Tab", "Tab"),
    "esc": ("Escape", "Escape"),
    "escape": ("Escape", "Escape"),
    "enter": ("Enter", "Enter"),
    "space": ("Space", " "),
}


@dataclass
class KeyEvent:
    """A single keydown, modelled on the DOM KeyboardEvent.

    ``code`` is the physical key (``KeyQ``, ``Digit1``, ``ArrowUp``); ``key``
    is the character produced, which depends on layout and modifiers.
    """

    code: str
    key: str = ""
    meta: bool = False
    ctrl: bool = False
    alt: bool = False
    shift: bool = False
    in_text_field: bool = False
    default_prevented: bool = False
    propagation_stopped: bool = False

    def prevent_default(self) -> None:
        self.default_prevented = True

    def stop_propagation(self) -> None:
        self.propagation_stopped = True


def key_code(token: str) -> tuple[str, str]:
    """Map a key token ("q", "1", "Up", "F11") to (code, key)."""
    lowered = token.strip().lower()
    if lowered in _NAMED_CODES:
        return _NAMED_CODES[lowered]
    if len(lowered) == 1 and lowered.isalpha():
        return f"Key{lowered.upper()}", lowered
    if len(lowered) == 1 and lowered.isdigit():
        return f"Digit{lowered}", lowered
    if lowered.startswith("f") and lowered[1:].isdigit():
        return f"F{lowered[1:]}", f"F{lowered[1:]}"
    raise ValueError(f"Unknown key: {token!r}")


def parse_chord(text: str, in_text_field: bool = False) -> KeyEvent:
    """Build a KeyEvent from a chord string such as ``"Ctrl+Alt+T"``."""
    tokens = [t for t in text.replace(" ", "").split("+") if t]
    if not tokens:
        raise ValueError("Empty chord.")
    modifiers: set[str] = set()
    for token in tokens[:-1]:
        modifier = _MODIFIER_ALIASES.get(token.lower())
        if modifier is None:
            raise ValueError(f"Unknown modifier: {token!r}")
        modifiers.add(modifier)
    code, key = key_code(tokens[-1])
    return KeyEvent(
        code=code,
        key=key,
        meta="meta" in modifiers,
        ctrl="ctrl" in modifiers,
        alt="alt" in modifiers,
        shift="shift" in modifiers,
        in_text_field=in_text_field,
    )
