"""Replay command: feed a scripted event sequence through a picker session."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape

from tabpick.core.config import PickerConfig
from tabpick.core.events import Event, KeyPress, PaneUpdate, TabUpdate
from tabpick.core.host import RecordingHost, describe_command
from tabpick.core.script import ScriptError, load_script
from tabpick.core.session import PickerSession
from tabpick.core.trace import TraceWriter
from tabpick.ui.render import render_overlay

console = Console()


def describe_event(event: Event) -> str:
    if isinstance(event, TabUpdate):
        names = ", ".join(f"{t.name}{'*' if t.is_active else ''}" for t in event.tabs)
        return f"tabs [{names}]"
    if isinstance(event, PaneUpdate):
        return f"panes ({len(event.panes)} records)"
    if isinstance(event, KeyPress):
        return f"key {event.key}"
    return repr(event)


def replay(
    script: Path = typer.Argument(..., help="YAML event script", exists=True, dir_okay=False),
    trace: Optional[Path] = typer.Option(None, "--trace", help="Write a JSON Lines trace here"),
    quiet: bool = typer.Option(False, "--quiet", "-q", help="Only print commands, not frames"),
) -> None:
    """Replay SCRIPT and print every repainted frame and every issued command."""
    try:
        loaded = load_script(script)
    except ScriptError as e:
        console.print(f"[bold red]❌ Invalid script:[/] {e}")
        raise typer.Exit(1)

    host = RecordingHost()
    session = PickerSession(host, PickerConfig.from_configuration(loaded.config))
    writer = TraceWriter(trace) if trace else None
    try:
        for idx, event in enumerate(loaded.events):
            changed = session.update(event)
            console.print(f"[dim]#{idx}[/] {escape(describe_event(event))}")
            if writer:
                writer.event(idx, event, changed=changed)
            for command in host.drain():
                console.print(f"  [yellow]→ {escape(describe_command(command))}[/]")
                if writer:
                    writer.command(idx, command)
            if changed and not quiet:
                console.print(render_overlay(session))
    finally:
        if writer:
            writer.close()

    target = session.target()
    summary = (
        f"mode={session.mode.label} "
        f"filter={session.filter_text!r} "
        f"selected={target.name if target else None} "
        f"closed={session.closed}"
    )
    console.print(f"\n[bold]Final:[/] {escape(summary)}")
