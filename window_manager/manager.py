"""Window manager: the only mutation surface for the window store."""

from __future__ import annotations

import functools
import logging
import threading
from collections.abc import Callable
from typing import Any, TypeVar

from core.errors import InvalidConfigurationError
from desktop_model.app_registry import AppId, AppKind, AppRegistry, coerce_app_id
from desktop_model.window import Bounds, PreviewData, SnapSide, Window
from desktop_model.window_store import WindowStore
from window_manager.geometry import (
    MAXIMIZE_TARGET,
    Viewport,
    cascade_bounds,
    clamp_size,
    clamp_to_top_bar,
    detect_snap_target,
    maximize_bounds,
    snap_bounds,
)

F = TypeVar("F", bound=Callable[..., Any])

_PREVIEW_SIZES = {"pdf": (900, 700), "image": (800, 500), "video": (800, 500)}


def _synchronized(method: F) -> F:
    """Run the whole call under the manager lock."""

    @functools.wraps(method)
    def wrapper(self: WindowManager, *args: Any, **kwargs: Any) -> Any:
        with self._lock:
            return method(self, *args, **kwargs)

    return wrapper  # type: ignore[return-value]


class WindowManager:
    """Open, close, focus, move, resize, minimize, maximize, snap and cycle windows.

    Operations on unknown window ids are no-ops. Invalid configuration (an
    unknown app id, a degenerate size, a bad snap side) raises
    ``InvalidConfigurationError`` in strict mode and otherwise falls back to
    a safe default with a warning.
    """

    def __init__(
        self,
        store: WindowStore,
        registry: AppRegistry | None = None,
        viewport: Viewport | None = None,
        *,
        strict: bool = False,
        cascade_step: int = 30,
        cascade_slots: int = 6,
        snap_edge_threshold: int = 8,
    ) -> None:
        self.store = store
        self.registry = registry or AppRegistry()
        self.viewport = viewport or Viewport(width=1280, height=800)
        self.strict = strict
        self.cascade_step = cascade_step
        self.cascade_slots = cascade_slots
        self.snap_edge_threshold = snap_edge_threshold
        self._lock = threading.RLock()
        self.logger = logging.getLogger("desk.window_manager")

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @_synchronized
    def open_window(
        self,
        app_id: str | AppId,
        title: str | None = None,
        size: tuple[int, int] | dict[str, int] | None = None,
        initial_data: dict[str, Any] | None = None,
        preview_data: PreviewData | dict[str, Any] | None = None,
    ) -> str:
        """Open a window (or re-activate a single-instance one) and return its id."""
        kind = self._resolve_kind(app_id)
        if kind.app_id is AppId.RESUME:
            return self.open_window(
                AppId.PREVIEW,
                title="Resume.pdf",
                size=_PREVIEW_SIZES["pdf"],
                preview_data=PreviewData(type="pdf", url="/resume.pdf"),
            )

        if kind.single_instance:
            existing = self.store.find_by_app(kind.app_id)
            if existing is not None:
                return self._reopen(existing, initial_data)

        w, h = self._resolve_size(kind, size)
        bounds = cascade_bounds(
            self.viewport,
            (w, h),
            self.store.next_open_index(),
            step=self.cascade_step,
            slots=self.cascade_slots,
        )
        if isinstance(preview_data, dict):
            preview_data = PreviewData.model_validate(preview_data)

        window = Window(
            window_id=self.store.next_window_id(kind.app_id),
            app_id=kind.app_id,
            title=title or kind.title,
            bounds=bounds,
            z=self.store.next_z(),
            saved_bounds=bounds,
            resizable=kind.resizable,
            minimizable=kind.minimizable,
            initial_data=dict(initial_data) if initial_data else None,
            preview_data=preview_data,
        )
        self.store.add(window)
        self.store.set_focus(window.window_id)
        self.logger.debug("Opened %s at %s (z=%d)", window.window_id, bounds, window.z)
        self.store.notify("open", window.window_id)
        return window.window_id

    @_synchronized
    def open_media_preview(self, title: str, url: str, media_type: str) -> str | None:
        """Open a preview window for an image, video or pdf."""
        size = _PREVIEW_SIZES.get(media_type)
        if size is None:
            self._invalid("Unsupported preview media type: %r", media_type)
            return None
        return self.open_window(
            AppId.PREVIEW,
            title=title,
            size=size,
            preview_data=PreviewData(type=media_type, url=url),
        )

    @_synchronized
    def activate_app(self, app_id: str | AppId) -> str:
        """Launcher click: open when absent, restore when minimized, else focus."""
        kind = self._resolve_kind(app_id)
        existing = self.store.find_by_app(kind.app_id)
        if existing is None or not kind.single_instance:
            return self.open_window(kind.app_id)
        self._raise_and_focus(existing, "restore" if existing.minimized else "focus")
        return existing.window_id

    @_synchronized
    def close_window(self, window_id: str) -> None:
        if self._find(window_id, "close_window") is None:
            return
        self.store.remove(window_id)
        if self.store.focused_id == window_id:
            top = self.store.topmost_visible()
            self.store.set_focus(top.window_id if top else None)
        self.logger.debug("Closed %s; focus=%s", window_id, self.store.focused_id)
        self.store.notify("close", window_id)

    @_synchronized
    def close_active_window(self) -> None:
        if self.store.focused_id is None:
            return
        self.close_window(self.store.focused_id)

    # ------------------------------------------------------------------
    # Focus and stacking
    # ------------------------------------------------------------------

    @_synchronized
    def focus_window(self, window_id: str) -> None:
        window = self._find(window_id, "focus_window")
        if window is None or (self.store.focused_id == window_id and not window.minimized):
            return
        self._raise_and_focus(window, "focus")

    @_synchronized
    def restore_window(self, window_id: str) -> None:
        """Bring a minimized window back (taskbar/dock click)."""
        window = self._find(window_id, "restore_window")
        if window is None:
            return
        self._raise_and_focus(window, "restore")

    @_synchronized
    def minimize_window(self, window_id: str) -> None:
        window = self._find(window_id, "minimize_window")
        if window is None or window.minimized or not window.minimizable:
            return
        self.store.update(window_id, minimized=True)
        if self.store.focused_id == window_id:
            top = self.store.topmost_visible()
            self.store.set_focus(top.window_id if top else None)
        self.logger.debug("Minimized %s; focus=%s", window_id, self.store.focused_id)
        self.store.notify("minimize", window_id)

    @_synchronized
    def minimize_all(self) -> None:
        """Show the desktop by minimizing every visible window that allows it."""
        targets = [w for w in self.store.stacking_order() if w.minimizable]
        if not targets:
            return
        for window in targets:
            self.store.update(window.window_id, minimized=True)
        focused = self.store.focused()
        if focused is None or focused.minimized:
            top = self.store.topmost_visible()
            self.store.set_focus(top.window_id if top else None)
        self.store.notify("minimize-all")

    @_synchronized
    def cycle_focus(self, direction: int = 1) -> None:
        """Focus the next visible window in descending z order, wrapping."""
        ordered = sorted(self.store.stacking_order(), key=lambda w: w.z, reverse=True)
        if len(ordered) < 2:
            return
        ids = [w.window_id for w in ordered]
        current = ids.index(self.store.focused_id) if self.store.focused_id in ids else -1
        step = 1 if direction >= 0 else -1
        target = ordered[(current + step) % len(ordered)]
        self._raise_and_focus(target, "cycle")

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    @_synchronized
    def toggle_maximize(self, window_id: str) -> None:
        window = self._find(window_id, "toggle_maximize")
        if window is None or not window.resizable:
            return
        if window.maximized:
            self.store.update(window_id, maximized=False, bounds=window.saved_bounds)
        else:
            saved = window.saved_bounds if window.constrained else window.bounds
            self.store.update(window_id, snap_state=SnapSide.NONE)
            self.store.update(
                window_id,
                maximized=True,
                saved_bounds=saved,
                bounds=maximize_bounds(self.viewport),
            )
        self._raise_and_focus(self.store.find(window_id), "maximize")

    @_synchronized
    def snap_window(self, window_id: str, side: str | SnapSide) -> None:
        snap_side = self._resolve_side(side)
        if snap_side is None:
            return
        window = self._find(window_id, "snap_window")
        if window is None or not window.resizable:
            return
        if window.snap_state is snap_side and not window.maximized:
            return
        saved = window.saved_bounds if window.constrained else window.bounds
        self.store.update(window_id, maximized=False)
        self.store.update(
            window_id,
            snap_state=snap_side,
            saved_bounds=saved,
            bounds=snap_bounds(self.viewport, snap_side),
        )
        self._raise_and_focus(self.store.find(window_id), "snap")

    @_synchronized
    def unsnap_window(self, window_id: str) -> None:
        window = self._find(window_id, "unsnap_window")
        if window is None or window.snap_state is SnapSide.NONE:
            return
        self.store.update(window_id, snap_state=SnapSide.NONE, bounds=window.saved_bounds)
        self._raise_and_focus(self.store.find(window_id), "unsnap")

    @_synchronized
    def restore_layout(self, window_id: str) -> None:
        """Leave maximize or snap, whichever is active."""
        window = self._find(window_id, "restore_layout")
        if window is None:
            return
        if window.maximized:
            self.toggle_maximize(window_id)
        elif window.snap_state is not SnapSide.NONE:
            self.unsnap_window(window_id)

    @_synchronized
    def move_window(self, window_id: str, dx: int, dy: int) -> None:
        """Manual drag. Leaves maximize/snap and becomes the new restore baseline."""
        window = self._find(window_id, "move_window")
        if window is None:
            return
        base = window.bounds
        if window.constrained:
            base = Bounds(x=base.x, y=base.y, w=window.saved_bounds.w, h=window.saved_bounds.h)
        bounds = clamp_to_top_bar(base.moved(int(dx), int(dy)), self.viewport)
        self._set_manual_bounds(window_id, bounds, "move")

    @_synchronized
    def resize_window(
        self,
        window_id: str,
        w: int,
        h: int,
        x: int | None = None,
        y: int | None = None,
    ) -> None:
        """Manual resize, clamped to the app's minimum size."""
        window = self._find(window_id, "resize_window")
        if window is None or not window.resizable:
            return
        w, h = clamp_size(w, h, self.registry.get(window.app_id).min_size)
        bounds = Bounds(
            x=window.bounds.x if x is None else int(x),
            y=window.bounds.y if y is None else int(y),
            w=w,
            h=h,
        )
        self._set_manual_bounds(window_id, bounds, "resize")

    @_synchronized
    def set_viewport(self, viewport: Viewport) -> None:
        """Recompute maximized and snapped windows for a new viewport size."""
        self.viewport = viewport
        for window in self.store.windows():
            if window.maximized:
                self.store.update(window.window_id, bounds=maximize_bounds(viewport))
            elif window.snap_state is not SnapSide.NONE:
                self.store.update(window.window_id, bounds=snap_bounds(viewport, window.snap_state))
        self.store.notify("viewport")

    # ------------------------------------------------------------------
    # Drag edge snapping
    # ------------------------------------------------------------------

    @_synchronized
    def set_drag_snap_preview(self, target: str | None) -> None:
        if self.store.drag_snap_preview == target:
            return
        self.store.drag_snap_preview = target
        self.store.notify("drag-preview")

    @_synchronized
    def end_drag(self, window_id: str, pointer_x: int, pointer_y: int) -> str | None:
        """Finish a title-bar drag; snap or maximize when released on an edge."""
        self.set_drag_snap_preview(None)
        window = self._find(window_id, "end_drag")
        if window is None:
            return None
        target = detect_snap_target(pointer_x, pointer_y, self.viewport, self.snap_edge_threshold)
        if target == MAXIMIZE_TARGET:
            if not window.maximized:
                self.toggle_maximize(window_id)
        elif target is not None:
            self.snap_window(window_id, target)
        return target

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _find(self, window_id: str, op: str) -> Window | None:
        window = self.store.find(window_id)
        if window is None:
            self.logger.debug("%s: no window %s", op, window_id)
        return window

    def _raise_and_focus(self, window: Window | None, op: str) -> None:
        if window is None:
            return
        self.store.update(window.window_id, minimized=False, z=self.store.next_z())
        self.store.set_focus(window.window_id)
        self.logger.debug("%s %s", op, window.window_id)
        self.store.notify(op, window.window_id)

    def _reopen(self, window: Window, initial_data: dict[str, Any] | None) -> str:
        if initial_data is not None:
            self.store.update(window.window_id, initial_data=dict(initial_data))
        self._raise_and_focus(window, "reopen")
        return window.window_id

    def _set_manual_bounds(self, window_id: str, bounds: Bounds, op: str) -> None:
        self.store.update(window_id, maximized=False, snap_state=SnapSide.NONE)
        self.store.update(window_id, bounds=bounds, saved_bounds=bounds)
        self.store.notify(op, window_id)

    def _resolve_kind(self, app_id: str | AppId) -> AppKind:
        resolved = coerce_app_id(app_id)
        if resolved is None or resolved is AppId.UNKNOWN:
            self._invalid("Unknown app id: %r", app_id)
            return self.registry.get(AppId.UNKNOWN)
        return self.registry.get(resolved)

    def _resolve_size(
        self,
        kind: AppKind,
        size: tuple[int, int] | dict[str, int] | None,
    ) -> tuple[int, int]:
        if kind.app_id is AppId.UNKNOWN:
            return kind.min_size
        if size is None:
            return kind.default_size
        w, h = (size["w"], size["h"]) if isinstance(size, dict) else size
        if w <= 0 or h <= 0:
            self._invalid("Degenerate window size for %s: %sx%s", kind.app_id.value, w, h)
            return kind.min_size
        return clamp_size(w, h, kind.min_size)

    def _resolve_side(self, side: str | SnapSide) -> SnapSide | None:
        try:
            resolved = SnapSide(side)
        except ValueError:
            resolved = None
        if resolved is None or resolved is SnapSide.NONE:
            self._invalid("Invalid snap side: %r", side)
            return None
        return resolved

    def _invalid(self, message: str, *args: Any) -> None:
        if self.strict:
            raise InvalidConfigurationError(message % args)
        self.logger.warning(message, *args)
