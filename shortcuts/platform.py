"""Platform profile: which modifier is primary and which key labels apply."""

from __future__ import annotations

import re
import sys
from dataclasses import dataclass
from typing import Literal

_MAC_AGENT = re.compile(r"Mac|iPhone|iPad|iPod", re.IGNORECASE)


@dataclass(frozen=True)
class PlatformProfile:
    """Resolved once at startup and passed to the dispatcher and help panel."""

    name: Literal["mac", "other"]
    primary_modifier: Literal["meta", "ctrl"]

    @property
    def is_mac(self) -> bool:
        return self.name == "mac"


MAC = PlatformProfile(name="mac", primary_modifier="meta")
OTHER = PlatformProfile(name="other", primary_modifier="ctrl")


def detect_platform(user_agent: str | None = None) -> PlatformProfile:
    """Classify a browser user agent, or the host OS when none is given."""
    if user_agent is None:
        return MAC if sys.platform == "darwin" else OTHER
    return MAC if _MAC_AGENT.search(user_agent) else OTHER


def resolve_platform(setting: str = "auto", user_agent: str | None = None) -> PlatformProfile:
    if setting == "mac":
        return MAC
    if setting == "other":
        return OTHER
    return detect_platform(user_agent)
