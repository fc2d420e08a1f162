"""Config command for tabpick CLI."""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console

from tabpick.core.config import get_config_path, load_config, read_config_file, validate_configuration

app = typer.Typer()
console = Console()


@app.command("show")
def show(config_file: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file")):
    """Show the effective configuration."""
    path = config_file or get_config_path()
    cfg = load_config(config_file)

    console.print("\n[bold]Current Configuration:[/]")
    console.print(f"  Source: [underline]{path}[/]{'' if path.exists() else ' [dim](not found, using defaults)[/]'}")
    console.print(f"  Ignore case: [cyan]{'Enabled' if cfg.ignore_case else 'Disabled'}[/]")
    console.print(f"  Fullscreen: [cyan]{'Enabled' if cfg.fullscreen else 'Disabled'}[/]")
    console.print()


@app.command("validate")
def validate(config_file: Path = typer.Argument(..., help="Config file to validate")):
    """Validate a configuration file."""
    try:
        data = read_config_file(config_file)
    except (OSError, ValueError) as e:
        console.print(f"[bold red]❌ Invalid configuration:[/] {e}")
        raise typer.Exit(1)

    problems = validate_configuration(data)
    if problems:
        console.print(f"[bold red]❌ Invalid configuration:[/] {config_file}")
        for problem in problems:
            console.print(f"  - {problem}")
        raise typer.Exit(1)
    console.print(f"[bold green]✔[/] Configuration file is valid: [underline]{config_file}[/]")
