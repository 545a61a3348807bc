"""Configuration loading and validation."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Literal

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger("desk.config")


class ViewportConfig(BaseModel):
    """Initial viewport size in CSS pixels."""

    width: int = Field(default=1280, gt=0)
    height: int = Field(default=800, gt=0)


class SizeConfig(BaseModel):
    w: int = Field(gt=0)
    h: int = Field(gt=0)


class AppOverride(BaseModel):
    """Per-app policy overrides from config/apps.yaml."""

    title: str | None = None
    default_size: SizeConfig | None = None
    min_size: SizeConfig | None = None
    single_instance: bool | None = None
    resizable: bool | None = None
    minimizable: bool | None = None


class DesktopConfig(BaseModel):
    """Validated effective configuration."""

    viewport: ViewportConfig = Field(default_factory=ViewportConfig)
    top_bar_height: int = Field(default=32, ge=0)
    snap_edge_threshold: int = Field(default=8, ge=0)
    min_window_size: SizeConfig = Field(default_factory=lambda: SizeConfig(w=300, h=200))
    cascade_step: int = Field(default=30, ge=0)
    cascade_slots: int = Field(default=6, gt=0)
    strict: bool = False
    platform: Literal["auto", "mac", "other"] = "auto"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"] = "WARNING"
    apps: dict[str, AppOverride] = Field(default_factory=dict)


def load_yaml(path: Path) -> dict[str, Any]:
    """Load YAML from file, returning empty mapping when missing."""
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must contain a mapping: {path}")
    return data


def merge_dicts(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Recursively merge dictionaries."""
    merged: dict[str, Any] = dict(base)
    for key, value in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(value, dict):
            merged[key] = merge_dicts(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_effective_config(root: Path) -> DesktopConfig:
    """Load, merge and validate config/default.yaml and config/apps.yaml."""
    config_dir = root / "config"
    default_cfg = load_yaml(config_dir / "default.yaml")
    apps_cfg = load_yaml(config_dir / "apps.yaml")

    merged = merge_dicts(default_cfg, {"apps": apps_cfg})
    logger.debug("Loaded config from %s (%d top-level keys)", config_dir, len(merged))
    return DesktopConfig.model_validate(merged)
