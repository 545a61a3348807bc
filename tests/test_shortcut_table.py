"""Shortcut table, chord parsing and platform detection tests."""

from __future__ import annotations

import pytest

from shortcuts.keys import parse_chord
from shortcuts.platform import MAC, OTHER, detect_platform, resolve_platform
from shortcuts.table import CATEGORY_ORDER, SHORTCUTS, find_shortcut, shortcut_help


def test_every_action_appears_once() -> None:
    actions = [s.action for s in SHORTCUTS]
    assert len(actions) == len(set(actions))


def test_chords_are_unambiguous_per_platform() -> None:
    for profile in (MAC, OTHER):
        chords = [s.chord_for(profile) for s in SHORTCUTS]
        assert len(chords) == len(set(chords))


def test_help_groups_by_category_with_platform_labels() -> None:
    mac_help = shortcut_help(MAC)
    other_help = shortcut_help(OTHER)
    assert list(mac_help) == list(CATEGORY_ORDER)

    mac_close = next(e for e in mac_help["Windows"] if e["action"] == "close-window")
    other_close = next(e for e in other_help["Windows"] if e["action"] == "close-window")
    assert mac_close["keys"] == ["⌘", "Q"]
    assert other_close["keys"] == ["Ctrl", "Q"]
    assert sum(len(entries) for entries in other_help.values()) == len(SHORTCUTS)


def test_find_shortcut_first_match() -> None:
    assert find_shortcut(parse_chord("Alt+Tab"), OTHER).action == "switch-window"
    assert find_shortcut(parse_chord("Alt+Shift+Tab"), OTHER).action == "switch-window-back"
    assert find_shortcut(parse_chord("Ctrl+Cmd+F"), MAC).action == "fullscreen"
    assert find_shortcut(parse_chord("F11"), MAC) is None


@pytest.mark.parametrize(
    ("text", "code", "modifiers"),
    [
        ("Ctrl+Alt+T", "KeyT", {"ctrl", "alt"}),
        ("⌘+↑", "ArrowUp", {"meta"}),
        ("Super + Left", "ArrowLeft", {"meta"}),
        ("Alt+1", "Digit1", {"alt"}),
        ("Shift+Option+Tab", "Tab", {"shift", "alt"}),
    ],
)
def test_parse_chord(text: str, code: str, modifiers: set[str]) -> None:
    event = parse_chord(text)
    held = {name for name in ("meta", "ctrl", "alt", "shift") if getattr(event, name)}
    assert event.code == code
    assert held == modifiers


def test_parse_chord_rejects_garbage() -> None:
    with pytest.raises(ValueError):
        parse_chord("Hyper+Q")
    with pytest.raises(ValueError):
        parse_chord("Ctrl+PageWhatever")
    with pytest.raises(ValueError):
        parse_chord("")


def test_platform_detection() -> None:
    assert detect_platform("Mozilla/5.0 (Macintosh; Intel Mac OS X 14_0)") is MAC
    assert detect_platform("Mozilla/5.0 (iPad; CPU OS 17_0 like Mac OS X)") is MAC
    assert detect_platform("Mozilla/5.0 (X11; Linux x86_64)") is OTHER
    assert resolve_platform("mac") is MAC
    assert resolve_platform("other") is OTHER
    assert MAC.primary_modifier == "meta"
    assert OTHER.primary_modifier == "ctrl"
