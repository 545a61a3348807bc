"""Typer command handlers."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, NoReturn

import typer
import yaml

from core.orchestrator import DesktopBundle, Orchestrator
from shortcuts.keys import parse_chord
from shortcuts.table import shortcut_help

SCRIPT_OPS = {
    "open_window",
    "open_media_preview",
    "activate_app",
    "close_window",
    "close_active_window",
    "focus_window",
    "restore_window",
    "minimize_window",
    "minimize_all",
    "toggle_maximize",
    "snap_window",
    "unsnap_window",
    "restore_layout",
    "move_window",
    "resize_window",
    "cycle_focus",
    "end_drag",
}


def fail(exc: Exception) -> NoReturn:
    """Report a configuration or script error and exit with status 1."""
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=1) from exc


def _runtime(
    root: Path | None = None,
    platform: str | None = None,
    verbose: bool = False,
) -> DesktopBundle:
    orchestrator = Orchestrator(root=root, platform=platform)
    try:
        config = orchestrator.load_config()
        logging.getLogger().setLevel(logging.DEBUG if verbose else config.log_level)
        return orchestrator.build()
    except ValueError as exc:
        fail(exc)


def shortcuts(platform: str | None = None, root: Path | None = None, verbose: bool = False) -> None:
    """Print the shortcut help table."""
    bundle = _runtime(root=root, platform=platform, verbose=verbose)
    for category, entries in shortcut_help(bundle.profile).items():
        typer.echo(category)
        for entry in entries:
            keys = " + ".join(entry["keys"])
            typer.echo(f"  {keys:<20} {entry['label']}")


def apps_list(root: Path | None = None, verbose: bool = False) -> None:
    """List the app catalog and window policies."""
    bundle = _runtime(root=root, verbose=verbose)
    for kind in bundle.window_manager.registry.all():
        flags = []
        if kind.single_instance:
            flags.append("single-instance")
        if not kind.resizable:
            flags.append("fixed-size")
        if not kind.minimizable:
            flags.append("no-minimize")
        w, h = kind.default_size
        typer.echo(f"{kind.app_id.value}: {kind.title} {w}x{h} {' '.join(flags)}".rstrip())


def config_show(root: Path | None = None, verbose: bool = False) -> None:
    """Show effective configuration."""
    bundle = _runtime(root=root, verbose=verbose)
    typer.echo(json.dumps(bundle.config.model_dump(), indent=2))


def run_script(
    script: Path,
    platform: str | None = None,
    root: Path | None = None,
    verbose: bool = False,
) -> None:
    """Replay a YAML step list against a fresh session and print the final state."""
    with script.open("r", encoding="utf-8") as fh:
        steps = yaml.safe_load(fh) or []
    if not isinstance(steps, list):
        raise ValueError(f"Script must contain a list of steps: {script}")

    bundle = _runtime(root=root, platform=platform, verbose=verbose)
    events: list[str] = []
    bundle.event_bus.subscribe("store-changed", lambda payload: events.append(payload["op"]))
    for name in ("show-overview", "show-app-grid", "toggle-fullscreen"):
        bundle.event_bus.subscribe(name, lambda _payload, name=name: events.append(name))

    last_opened: str | None = None
    for index, step in enumerate(steps, start=1):
        if not isinstance(step, dict):
            raise ValueError(f"Step {index} must be a mapping.")
        result = _run_step(bundle, dict(step), last_opened)
        if isinstance(result, str) and result in {w.window_id for w in bundle.store.windows()}:
            last_opened = result

    snapshot = bundle.store.snapshot()
    typer.echo(
        json.dumps(
            {
                "focused_id": snapshot.focused_id,
                "locked": bundle.settings.locked,
                "windows": snapshot.windows,
                "events": events,
            },
            indent=2,
        )
    )


def _run_step(bundle: DesktopBundle, step: dict[str, Any], last_opened: str | None) -> Any:
    if "keys" in step:
        event = parse_chord(str(step["keys"]), in_text_field=bool(step.get("in_text_field", False)))
        return bundle.dispatcher.handle_keydown(event)

    op = str(step.pop("op", ""))
    if op not in SCRIPT_OPS:
        raise ValueError(f"Unknown script op: {op!r}")
    if step.get("window_id") == "@focused":
        step["window_id"] = bundle.store.focused_id
    elif step.get("window_id") == "@last":
        step["window_id"] = last_opened
    return getattr(bundle.window_manager, op)(**step)
