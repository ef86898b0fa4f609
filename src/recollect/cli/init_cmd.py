"""Initialize command - write a default configuration file."""

import typer
from rich.console import Console

from recollect.config.loader import resolve_config_path, save_config
from recollect.config.schema import RecollectConfig

console = Console()


def init_command(config_path: str | None = None, force: bool = False) -> None:
    """Write the default configuration.

    Args:
        config_path: Destination (default location if None)
        force: Overwrite existing config if present
    """
    path = resolve_config_path(config_path)

    if path.exists() and not force:
        console.print(f"[yellow]Config already exists at {path}[/yellow]")
        console.print("Use --force to overwrite")
        raise typer.Exit(code=1)

    save_config(RecollectConfig(), path)
    console.print(f"[green]✓[/green] Wrote default configuration to {path}")
