"""Registry of application kinds and their window policies."""

from __future__ import annotations

import logging
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict

logger = logging.getLogger("desk.apps")


class AppId(str, Enum):
    """Closed set of application kinds a window can host."""

    ABOUT = "about"
    PROJECTS = "projects"
    RESUME = "resume"
    CONTACT = "contact"
    TERMINAL = "terminal"
    PREVIEW = "preview"
    SETTINGS = "settings"
    PHOTOS = "photos"
    GAMES = "games"
    SNAKE = "snake"
    TETRIS = "tetris"
    MINESWEEPER = "minesweeper"
    MUSIC = "music"
    SHORTCUTS = "shortcuts"
    UNKNOWN = "unknown"


class AppKind(BaseModel):
    """Window policy for one application kind."""

    model_config = ConfigDict(frozen=True)

    app_id: AppId
    title: str
    default_size: tuple[int, int]
    min_size: tuple[int, int] = (300, 200)
    single_instance: bool = True
    resizable: bool = True
    minimizable: bool = True


_GAME = {"resizable": False, "minimizable": False}

DEFAULT_APPS: tuple[AppKind, ...] = (
    AppKind(app_id=AppId.ABOUT, title="About Me", default_size=(560, 500)),
    AppKind(app_id=AppId.PROJECTS, title="Projects", default_size=(900, 620)),
    AppKind(app_id=AppId.RESUME, title="Resume", default_size=(800, 640)),
    AppKind(app_id=AppId.CONTACT, title="Contact", default_size=(540, 580)),
    AppKind(app_id=AppId.TERMINAL, title="Terminal", default_size=(720, 480)),
    AppKind(app_id=AppId.PREVIEW, title="Preview", default_size=(800, 500), single_instance=False),
    AppKind(app_id=AppId.SETTINGS, title="Settings", default_size=(900, 600)),
    AppKind(app_id=AppId.PHOTOS, title="Photos", default_size=(900, 640)),
    AppKind(app_id=AppId.GAMES, title="Games", default_size=(740, 520)),
    AppKind(app_id=AppId.SNAKE, title="Snake", default_size=(480, 560), **_GAME),
    AppKind(app_id=AppId.TETRIS, title="Tetris", default_size=(420, 620), **_GAME),
    AppKind(app_id=AppId.MINESWEEPER, title="Minesweeper", default_size=(480, 560), **_GAME),
    AppKind(app_id=AppId.MUSIC, title="Music", default_size=(580, 640)),
    AppKind(app_id=AppId.SHORTCUTS, title="Keyboard Shortcuts", default_size=(680, 560)),
    AppKind(app_id=AppId.UNKNOWN, title="Untitled", default_size=(300, 200), single_instance=False),
)


def coerce_app_id(value: str | AppId) -> AppId | None:
    """Return the AppId for a raw tag, or None when it is not in the catalog."""
    if isinstance(value, AppId):
        return value
    try:
        return AppId(str(value).strip().lower())
    except ValueError:
        return None


class AppRegistry:
    """Tracks the policy for each application kind."""

    def __init__(
        self,
        min_size: tuple[int, int] = (300, 200),
        overrides: dict[str, Any] | None = None,
    ) -> None:
        self._apps: dict[AppId, AppKind] = {
            kind.app_id: kind.model_copy(update={"min_size": min_size}) for kind in DEFAULT_APPS
        }
        for raw_id, override in (overrides or {}).items():
            self._apply_override(raw_id, override)

    def _apply_override(self, raw_id: str, override: Any) -> None:
        app_id = coerce_app_id(raw_id)
        if app_id is None:
            logger.warning("Ignoring override for unknown app '%s'", raw_id)
            return
        fields = override.model_dump(exclude_none=True) if hasattr(override, "model_dump") else dict(override)
        update: dict[str, Any] = {}
        for key, value in fields.items():
            if key in ("default_size", "min_size") and isinstance(value, dict):
                update[key] = (int(value["w"]), int(value["h"]))
            else:
                update[key] = value
        self._apps[app_id] = self._apps[app_id].model_copy(update=update)

    def get(self, app_id: AppId) -> AppKind:
        return self._apps[app_id]

    def all(self) -> list[AppKind]:
        return [self._apps[app_id] for app_id in AppId if app_id is not AppId.UNKNOWN]
