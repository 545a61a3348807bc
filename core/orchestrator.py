"""Top-level desktop session orchestrator."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path

from collaborators.notifications import NotificationCenter
from collaborators.renderer import ContentRenderer
from collaborators.settings_store import SettingsStore
from core.event_bus import EventBus
from core.policy_runtime import DesktopConfig, load_effective_config
from desktop_model.app_registry import AppRegistry
from desktop_model.window_store import WindowStore
from shortcuts.dispatcher import ShortcutDispatcher
from shortcuts.platform import PlatformProfile, resolve_platform
from window_manager.geometry import Viewport
from window_manager.manager import WindowManager

logger = logging.getLogger("desk.orchestrator")


@dataclass
class DesktopBundle:
    """Holds one session's wired components. This is the single owning root."""

    config: DesktopConfig
    event_bus: EventBus
    store: WindowStore
    window_manager: WindowManager
    settings: SettingsStore
    notifications: NotificationCenter
    renderer: ContentRenderer
    dispatcher: ShortcutDispatcher
    profile: PlatformProfile


class Orchestrator:
    """Creates and wires desktop components for the CLI and tests."""

    def __init__(
        self,
        root: Path | None = None,
        config: DesktopConfig | None = None,
        platform: str | None = None,
    ) -> None:
        default_root = Path(__file__).resolve().parents[1]
        self.root = (root or default_root).resolve()
        self._config = config
        self._platform = platform

    def load_config(self) -> DesktopConfig:
        """Load config/*.yaml under the root once; an explicit config wins."""
        if self._config is None:
            self._config = load_effective_config(self.root)
        return self._config

    def build(self) -> DesktopBundle:
        config = self.load_config()
        profile = resolve_platform(self._platform or config.platform)

        event_bus = EventBus()
        registry = AppRegistry(
            min_size=(config.min_window_size.w, config.min_window_size.h),
            overrides=config.apps,
        )
        store = WindowStore(event_bus=event_bus)
        window_manager = WindowManager(
            store=store,
            registry=registry,
            viewport=Viewport(
                width=config.viewport.width,
                height=config.viewport.height,
                top_inset=config.top_bar_height,
            ),
            strict=config.strict,
            cascade_step=config.cascade_step,
            cascade_slots=config.cascade_slots,
            snap_edge_threshold=config.snap_edge_threshold,
        )
        settings = SettingsStore(event_bus=event_bus)
        renderer = ContentRenderer(store=store, profile=profile)
        renderer.attach(event_bus)
        dispatcher = ShortcutDispatcher(
            window_manager=window_manager,
            settings=settings,
            event_bus=event_bus,
            profile=profile,
        )
        logger.info("Desktop session ready (platform=%s, strict=%s)", profile.name, config.strict)

        return DesktopBundle(
            config=config,
            event_bus=event_bus,
            store=store,
            window_manager=window_manager,
            settings=settings,
            notifications=NotificationCenter(event_bus=event_bus),
            renderer=renderer,
            dispatcher=dispatcher,
            profile=profile,
        )
