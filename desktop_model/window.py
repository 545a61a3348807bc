"""Window record schema."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field, replace
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel

from desktop_model.app_registry import AppId


@dataclass(frozen=True)
class Bounds:
    """Window rectangle in viewport pixels."""

    x: int
    y: int
    w: int
    h: int

    def moved(self, dx: int, dy: int) -> Bounds:
        return replace(self, x=self.x + dx, y=self.y + dy)


class SnapSide(str, Enum):
    NONE = "none"
    LEFT = "left"
    RIGHT = "right"


class PreviewData(BaseModel):
    """Media shown by a preview window."""

    type: Literal["image", "video", "pdf"]
    url: str


@dataclass(frozen=True)
class Window:
    """One open application window.

    Records are immutable; the window manager swaps in updated copies.
    """

    window_id: str
    app_id: AppId
    title: str
    bounds: Bounds
    z: int
    saved_bounds: Bounds
    minimized: bool = False
    maximized: bool = False
    snap_state: SnapSide = SnapSide.NONE
    resizable: bool = True
    minimizable: bool = True
    initial_data: dict[str, Any] | None = None
    preview_data: PreviewData | None = None

    @property
    def constrained(self) -> bool:
        """True while maximized or snapped."""
        return self.maximized or self.snap_state is not SnapSide.NONE

    def to_dict(self) -> dict[str, Any]:
        data = asdict(self)
        data["app_id"] = self.app_id.value
        data["snap_state"] = self.snap_state.value
        data["preview_data"] = self.preview_data.model_dump() if self.preview_data else None
        return data


@dataclass
class DesktopSnapshot:
    """Read-only copy of the store handed to renderers and the CLI."""

    windows: list[dict[str, Any]] = field(default_factory=list)
    focused_id: str | None = None
