#!/usr/bin/env python3
"""
tabpick - tab picker overlay for terminal multiplexers
Main CLI entry point
"""

from __future__ import annotations

import logging

import typer

# Import command modules
from tabpick.commands import config_cmd, replay_cmd, tui_cmd

app = typer.Typer(
    name="tabpick",
    help="Filter, jump to, rename, create and delete multiplexer tabs",
    no_args_is_help=True,
    add_completion=True,
)

# Full-screen Textual demo over a simulated multiplexer
app.command(name="tui", help="Run the picker over a simulated multiplexer")(tui_cmd.tui)

app.command(name="replay", help="Replay a scripted event sequence through the picker")(replay_cmd.replay)

# Register command groups
app.add_typer(config_cmd.app, name="config", help="Inspect and validate picker configuration")


@app.callback()
def callback(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Log debug output to stderr"),
) -> None:
    """
    tabpick - tab picker overlay for terminal multiplexers

      tui      - interactive picker over a simulated multiplexer
      replay   - feed a YAML event script through the picker and show each frame
      config   - show or validate configuration
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
