"""CLI entrypoint for kinetic-desk."""

from __future__ import annotations

import logging
from pathlib import Path

import typer

from ui.cli import commands

app = typer.Typer(help="Browser desktop window manager")
config_app = typer.Typer(help="Configuration commands")


@app.callback()
def main_callback(
    ctx: typer.Context,
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging (overrides log_level)"),
    root: Path | None = typer.Option(None, "--root", file_okay=False, help="Directory holding config/"),
) -> None:
    logging.basicConfig(format="%(levelname)s %(name)s: %(message)s")
    ctx.obj = {"verbose": verbose, "root": root}


@app.command("shortcuts")
def shortcuts_cmd(
    ctx: typer.Context,
    platform: str | None = typer.Option(None, "--platform", help="mac or other (default: config)"),
) -> None:
    """Print the keyboard shortcut table."""
    commands.shortcuts(platform=platform, **ctx.obj)


@app.command("apps")
def apps_cmd(ctx: typer.Context) -> None:
    """List the application catalog."""
    commands.apps_list(**ctx.obj)


@app.command("run")
def run_cmd(
    ctx: typer.Context,
    script: Path = typer.Argument(..., exists=True, dir_okay=False, help="YAML step list"),
    platform: str | None = typer.Option(None, "--platform", help="mac or other (default: config)"),
) -> None:
    """Replay a scripted session and print the resulting window state."""
    try:
        commands.run_script(script=script, platform=platform, **ctx.obj)
    except ValueError as exc:
        commands.fail(exc)


@config_app.command("show")
def config_show_cmd(ctx: typer.Context) -> None:
    """Show effective configuration."""
    commands.config_show(**ctx.obj)


app.add_typer(config_app, name="config")


def main() -> None:
    """Console script entrypoint."""
    app()


if __name__ == "__main__":
    main()
