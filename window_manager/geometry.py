"""Geometry and snap engine.

Pure functions over the current viewport. Nothing here holds state, so
callers recompute targets whenever the viewport changes.
"""

from __future__ import annotations

from dataclasses import dataclass

from desktop_model.window import Bounds, SnapSide

MAXIMIZE_TARGET = "maximize"


@dataclass(frozen=True)
class Viewport:
    """Viewport size plus the fixed top chrome (top bar) height."""

    width: int
    height: int
    top_inset: int = 32


def usable_area(viewport: Viewport) -> Bounds:
    return Bounds(
        x=0,
        y=viewport.top_inset,
        w=viewport.width,
        h=max(0, viewport.height - viewport.top_inset),
    )


def maximize_bounds(viewport: Viewport) -> Bounds:
    """Full usable area below the top bar."""
    return usable_area(viewport)


def snap_bounds(viewport: Viewport, side: SnapSide) -> Bounds:
    """Left or right half of the usable area.

    The left half gets the floor of an odd width so the halves always sum
    to the full width.
    """
    area = usable_area(viewport)
    left_w = area.w // 2
    if side is SnapSide.LEFT:
        return Bounds(x=area.x, y=area.y, w=left_w, h=area.h)
    if side is SnapSide.RIGHT:
        return Bounds(x=area.x + left_w, y=area.y, w=area.w - left_w, h=area.h)
    raise ValueError(f"No snap geometry for side: {side}")


def clamp_size(w: int, h: int, min_size: tuple[int, int]) -> tuple[int, int]:
    return max(min_size[0], int(w)), max(min_size[1], int(h))


def cascade_bounds(
    viewport: Viewport,
    size: tuple[int, int],
    open_index: int,
    step: int = 30,
    slots: int = 6,
) -> Bounds:
    """Centered placement for a new window, staggered by open count."""
    w, h = size
    offset = (open_index % slots) * step
    x = max(0, min(round((viewport.width - w) / 2) + offset, viewport.width - w - 20))
    y = max(
        viewport.top_inset,
        min(round((viewport.height - h) / 2) - 40 + offset, viewport.height - h - 80),
    )
    return Bounds(x=x, y=y, w=w, h=h)


def clamp_to_top_bar(bounds: Bounds, viewport: Viewport) -> Bounds:
    if bounds.y >= viewport.top_inset:
        return bounds
    return Bounds(x=bounds.x, y=viewport.top_inset, w=bounds.w, h=bounds.h)


def detect_snap_target(x: int, y: int, viewport: Viewport, threshold: int = 8) -> str | None:
    """Snap target for a drag released at pointer (x, y).

    Returns ``"left"``/``"right"`` near a side edge, ``"maximize"`` near the
    top edge, else None. Side edges win over the top edge in the corners.
    """
    if x <= threshold:
        return SnapSide.LEFT.value
    if x >= viewport.width - threshold:
        return SnapSide.RIGHT.value
    if y <= threshold:
        return MAXIMIZE_TARGET
    return None
