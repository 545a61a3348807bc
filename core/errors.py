"""Error taxonomy for the desktop core."""

from __future__ import annotations


class DesktopError(Exception):
    """Base class for desktop core errors."""


class InvalidConfigurationError(DesktopError, ValueError):
    """Programmer error: unknown app id, degenerate size or bad snap side."""
