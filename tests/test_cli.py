"""CLI tests."""

from __future__ import annotations

import json
import logging
from pathlib import Path

from typer.testing import CliRunner

from ui.cli.cli import app

runner = CliRunner()


def test_shortcuts_command_prints_platform_labels() -> None:
    result = runner.invoke(app, ["shortcuts", "--platform", "mac"])
    assert result.exit_code == 0
    assert "Close window" in result.stdout
    assert "⌘ + Q" in result.stdout

    result = runner.invoke(app, ["shortcuts", "--platform", "other"])
    assert "Ctrl + Q" in result.stdout


def test_apps_command_lists_catalog() -> None:
    result = runner.invoke(app, ["apps"])
    assert result.exit_code == 0
    assert "terminal: Terminal 720x480 single-instance" in result.stdout
    assert "snake: Snake 480x560 single-instance fixed-size no-minimize" in result.stdout
    assert "unknown" not in result.stdout


def test_config_show_outputs_json() -> None:
    result = runner.invoke(app, ["config", "show"])
    assert result.exit_code == 0
    data = json.loads(result.stdout)
    assert data["top_bar_height"] == 32


def test_run_replays_script(tmp_path: Path) -> None:
    script = tmp_path / "session.yaml"
    script.write_text(
        "\n".join(
            [
                "- op: open_window",
                "  app_id: terminal",
                "- keys: Super+Left",
                "- keys: Ctrl+Alt+A",
                "- keys: Super+Right",
                "- keys: Alt+Tab",
                "- keys: Super+Up",
                "- op: focus_window",
                "  window_id: '@last'",
            ]
        ),
        encoding="utf-8",
    )
    result = runner.invoke(app, ["run", str(script), "--platform", "other"])
    assert result.exit_code == 0, result.output
    data = json.loads(result.stdout)
    windows = {w["window_id"]: w for w in data["windows"]}

    assert data["focused_id"] == "terminal-1"
    assert windows["terminal-1"]["maximized"] is True
    assert windows["terminal-1"]["snap_state"] == "none"
    assert windows["about-2"]["snap_state"] == "right"
    assert data["events"][0] == "open"


def test_run_rejects_unknown_ops(tmp_path: Path) -> None:
    script = tmp_path / "bad.yaml"
    script.write_text("- op: format_disk\n", encoding="utf-8")
    result = runner.invoke(app, ["run", str(script)])
    assert result.exit_code == 1


def write_config(root: Path, text: str) -> None:
    (root / "config").mkdir()
    (root / "config" / "default.yaml").write_text(text, encoding="utf-8")


def test_log_level_comes_from_config(tmp_path: Path) -> None:
    write_config(tmp_path, "log_level: DEBUG\n")
    root_logger = logging.getLogger()
    previous = root_logger.level
    try:
        result = runner.invoke(app, ["--root", str(tmp_path), "apps"])
        assert result.exit_code == 0, result.output
        assert root_logger.level == logging.DEBUG
    finally:
        root_logger.setLevel(previous)


def test_verbose_overrides_config_log_level(tmp_path: Path) -> None:
    write_config(tmp_path, "log_level: ERROR\n")
    root_logger = logging.getLogger()
    previous = root_logger.level
    try:
        result = runner.invoke(app, ["--root", str(tmp_path), "--verbose", "config", "show"])
        assert result.exit_code == 0, result.output
        assert root_logger.level == logging.DEBUG
    finally:
        root_logger.setLevel(previous)


def test_invalid_config_is_reported_by_every_command(tmp_path: Path) -> None:
    write_config(tmp_path, "viewport:\n  width: -5\n")
    for args in (["apps"], ["shortcuts"], ["config", "show"]):
        result = runner.invoke(app, ["--root", str(tmp_path), *args])
        assert result.exit_code == 1
        assert isinstance(result.exception, SystemExit)
        assert "Error:" in result.output
        assert "greater than 0" in result.output
