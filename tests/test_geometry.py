"""Geometry engine tests."""

from __future__ import annotations

import pytest

from desktop_model.window import Bounds, SnapSide
from window_manager.geometry import (
    Viewport,
    cascade_bounds,
    clamp_size,
    detect_snap_target,
    maximize_bounds,
    snap_bounds,
)


def test_maximize_fills_area_below_top_bar() -> None:
    viewport = Viewport(width=1280, height=800, top_inset=32)
    assert maximize_bounds(viewport) == Bounds(x=0, y=32, w=1280, h=768)


def test_snap_halves_for_even_width() -> None:
    viewport = Viewport(width=1280, height=800, top_inset=32)
    assert snap_bounds(viewport, SnapSide.LEFT) == Bounds(x=0, y=32, w=640, h=768)
    assert snap_bounds(viewport, SnapSide.RIGHT) == Bounds(x=640, y=32, w=640, h=768)


def test_snap_halves_for_odd_width_leave_no_gap() -> None:
    viewport = Viewport(width=1281, height=700, top_inset=32)
    left = snap_bounds(viewport, SnapSide.LEFT)
    right = snap_bounds(viewport, SnapSide.RIGHT)
    assert left.w == 640
    assert right.x == left.x + left.w
    assert left.w + right.w == 1281


def test_snap_none_has_no_geometry() -> None:
    with pytest.raises(ValueError):
        snap_bounds(Viewport(width=800, height=600), SnapSide.NONE)


def test_cascade_staggers_and_stays_on_screen() -> None:
    viewport = Viewport(width=1280, height=800, top_inset=32)
    first = cascade_bounds(viewport, (720, 480), open_index=1)
    second = cascade_bounds(viewport, (720, 480), open_index=2)
    assert first == Bounds(x=310, y=150, w=720, h=480)
    assert (second.x - first.x, second.y - first.y) == (30, 30)

    oversized = cascade_bounds(Viewport(width=400, height=300), (900, 700), open_index=3)
    assert oversized.x == 0
    assert oversized.y == 32


def test_clamp_size_applies_floor() -> None:
    assert clamp_size(100, 500, (300, 200)) == (300, 500)
    assert clamp_size(640, 50, (300, 200)) == (640, 200)


def test_detect_snap_target_edges() -> None:
    viewport = Viewport(width=1280, height=800)
    assert detect_snap_target(3, 400, viewport) == "left"
    assert detect_snap_target(1278, 400, viewport) == "right"
    assert detect_snap_target(600, 2, viewport) == "maximize"
    assert detect_snap_target(2, 2, viewport) == "left"
    assert detect_snap_target(600, 400, viewport) is None
