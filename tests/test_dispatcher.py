"""Shortcut dispatcher tests."""

from __future__ import annotations

from unittest.mock import MagicMock

from core.event_bus import EventBus
from core.orchestrator import DesktopBundle, Orchestrator
from core.policy_runtime import DesktopConfig
from desktop_model.app_registry import AppId
from desktop_model.window import SnapSide
from shortcuts.dispatcher import ShortcutDispatcher
from shortcuts.keys import KeyEvent, parse_chord
from shortcuts.platform import MAC, OTHER


def build_mock_dispatcher(profile=OTHER) -> tuple[ShortcutDispatcher, MagicMock, MagicMock]:
    window_manager = MagicMock()
    window_manager.store.focused_id = "about-1"
    settings = MagicMock()
    dispatcher = ShortcutDispatcher(
        window_manager=window_manager,
        settings=settings,
        event_bus=EventBus(),
        profile=profile,
    )
    return dispatcher, window_manager, settings


def build_bundle(platform: str = "other") -> DesktopBundle:
    return Orchestrator(config=DesktopConfig(), platform=platform).build()


def test_ctrl_q_closes_active_window_once_on_other_platforms() -> None:
    dispatcher, window_manager, _ = build_mock_dispatcher()
    event = parse_chord("Ctrl+Q")

    assert dispatcher.handle_keydown(event) == "close-window"
    window_manager.close_active_window.assert_called_once_with()
    assert event.default_prevented is True
    assert event.propagation_stopped is True


def test_primary_chord_still_works_inside_text_field() -> None:
    dispatcher, window_manager, _ = build_mock_dispatcher()
    assert dispatcher.handle_keydown(parse_chord("Ctrl+Q", in_text_field=True)) == "close-window"
    window_manager.close_active_window.assert_called_once_with()


def test_non_command_chords_are_ignored_inside_text_field() -> None:
    dispatcher, window_manager, _ = build_mock_dispatcher()
    for chord in ("Alt+1", "Alt+Tab", "F11"):
        event = parse_chord(chord, in_text_field=True)
        assert dispatcher.handle_keydown(event) is None
        assert event.default_prevented is False
    window_manager.cycle_focus.assert_not_called()


def test_text_field_rule_on_mac() -> None:
    dispatcher, window_manager, _ = build_mock_dispatcher(profile=MAC)

    assert dispatcher.handle_keydown(parse_chord("Cmd+Q", in_text_field=True)) == "close-window"
    window_manager.close_active_window.assert_called_once_with()

    event = parse_chord("Alt+Tab", in_text_field=True)
    assert dispatcher.handle_keydown(event) is None
    assert event.default_prevented is False
    window_manager.cycle_focus.assert_not_called()


def test_close_chord_differs_by_platform() -> None:
    dispatcher, window_manager, _ = build_mock_dispatcher(profile=MAC)
    assert dispatcher.handle_keydown(parse_chord("Ctrl+Q")) is None
    window_manager.close_active_window.assert_not_called()

    assert dispatcher.handle_keydown(parse_chord("Cmd+Q")) == "close-window"
    window_manager.close_active_window.assert_called_once_with()


def test_matching_uses_physical_code_not_character() -> None:
    dispatcher, window_manager, _ = build_mock_dispatcher(profile=MAC)
    # Ctrl+Option+T on a Mac layout produces a dagger, not "t".
    event = KeyEvent(code="KeyT", key="†", ctrl=True, alt=True)
    assert dispatcher.handle_keydown(event) == "open-terminal"
    window_manager.open_window.assert_called_once_with(AppId.TERMINAL)


def test_extra_modifiers_do_not_match() -> None:
    dispatcher, window_manager, _ = build_mock_dispatcher()
    assert dispatcher.handle_keydown(parse_chord("Ctrl+Shift+Q")) is None
    assert dispatcher.handle_keydown(parse_chord("Super+Z")) is None
    window_manager.close_active_window.assert_not_called()


def test_window_actions_target_focused_window() -> None:
    dispatcher, window_manager, _ = build_mock_dispatcher()
    dispatcher.handle_keydown(parse_chord("Super+Left"))
    dispatcher.handle_keydown(parse_chord("Super+Up"))
    dispatcher.handle_keydown(parse_chord("Super+Down"))
    dispatcher.handle_keydown(parse_chord("Super+H"))
    window_manager.snap_window.assert_called_once_with("about-1", SnapSide.LEFT)
    window_manager.toggle_maximize.assert_called_once_with("about-1")
    window_manager.restore_layout.assert_called_once_with("about-1")
    window_manager.minimize_window.assert_called_once_with("about-1")


def test_window_actions_without_focus_do_nothing() -> None:
    dispatcher, window_manager, _ = build_mock_dispatcher()
    window_manager.store.focused_id = None
    assert dispatcher.handle_keydown(parse_chord("Super+Right")) == "snap-right"
    window_manager.snap_window.assert_not_called()


def test_lock_screen_delegates_to_settings() -> None:
    dispatcher, _, settings = build_mock_dispatcher()
    assert dispatcher.handle_keydown(parse_chord("Super+L")) == "lock-screen"
    settings.lock_screen.assert_called_once_with()


def test_overview_and_app_grid_are_emitted_upward() -> None:
    bundle = build_bundle()
    seen: list[str] = []
    bundle.event_bus.subscribe("show-overview", lambda _p: seen.append("overview"))
    bundle.event_bus.subscribe("show-app-grid", lambda _p: seen.append("apps"))
    bundle.event_bus.subscribe("toggle-fullscreen", lambda _p: seen.append("fullscreen"))

    bundle.dispatcher.handle_keydown(parse_chord("Alt+1"))
    bundle.dispatcher.handle_keydown(parse_chord("Alt+2"))
    bundle.dispatcher.handle_keydown(parse_chord("F11"))
    assert seen == ["overview", "apps", "fullscreen"]
    assert len(bundle.store) == 0


def test_keyboard_session_end_to_end() -> None:
    bundle = build_bundle()
    dispatch = bundle.dispatcher.handle_keydown

    dispatch(parse_chord("Ctrl+Alt+T"))
    dispatch(parse_chord("Super+Left"))
    dispatch(parse_chord("Ctrl+Alt+A"))
    dispatch(parse_chord("Super+Right"))
    terminal = bundle.store.find_by_app(AppId.TERMINAL)
    about = bundle.store.find_by_app(AppId.ABOUT)
    assert terminal.snap_state is SnapSide.LEFT
    assert about.snap_state is SnapSide.RIGHT
    assert bundle.store.focused_id == about.window_id

    dispatch(parse_chord("Alt+Tab"))
    assert bundle.store.focused_id == terminal.window_id

    dispatch(parse_chord("Super+D"))
    assert bundle.store.focused_id is None

    dispatch(parse_chord("Super+I"))
    dispatch(parse_chord("Super+I"))
    assert len([w for w in bundle.store.windows() if w.app_id is AppId.SETTINGS]) == 1

    dispatch(parse_chord("Ctrl+Q"))
    assert bundle.store.find_by_app(AppId.SETTINGS) is None

    dispatch(parse_chord("Super+L"))
    assert bundle.settings.locked is True


def test_dispatched_shortcuts_are_announced() -> None:
    bundle = build_bundle(platform="mac")
    seen: list[dict] = []
    bundle.event_bus.subscribe("shortcut-dispatched", seen.append)
    bundle.dispatcher.handle_keydown(parse_chord("Cmd+K"))
    assert seen == [{"action": "open-shortcuts", "label": "Keyboard Shortcuts"}]
    assert bundle.store.find_by_app(AppId.SHORTCUTS) is not None
