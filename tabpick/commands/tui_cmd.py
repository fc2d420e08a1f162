"""
Textual full-screen TUI entrypoint.

Runs the picker against an in-memory multiplexer so the whole interaction can
be tried without a real host.
"""

from __future__ import annotations

from pathlib import Path
from typing import List, Optional

import typer

from tabpick.core.config import load_config


def tui(
    tab: Optional[List[str]] = typer.Option(None, "--tab", "-t", help="Tab name (repeatable)"),
    config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file"),
    ignore_case: Optional[bool] = typer.Option(None, "--ignore-case/--case-sensitive", help="Filter case sensitivity"),
    fullscreen: Optional[bool] = typer.Option(None, "--fullscreen/--no-fullscreen", help="Toggle fullscreen on open"),
) -> None:
    """Launch the tab picker over a simulated multiplexer."""
    try:
        from tabpick.tui.app import TabPickTuiApp
    except Exception as e:  # pragma: no cover
        raise typer.Exit(f"Failed to import TUI dependencies: {e}")

    cfg = load_config(config_file, {"ignore_case": ignore_case, "fullscreen": fullscreen})
    TabPickTuiApp(config=cfg, tabs=tab or None).run()
