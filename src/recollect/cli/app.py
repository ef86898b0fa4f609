"""Main CLI application using Typer."""

import logging

import typer
from rich.console import Console

from recollect import __version__

app = typer.Typer(
    name="recollect",
    help="Recollect - Semantic conversation memory for chat assistants",
    no_args_is_help=True,
)

console = Console()


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
):
    """Configure logging for all commands."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.command()
def version():
    """Show recollect version."""
    console.print(f"recollect version {__version__}")


@app.command()
def init(
    config_path: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Where to write the config (default: ~/.recollect/recollect.yaml)",
    ),
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
):
    """Write a default configuration file."""
    from recollect.cli.init_cmd import init_command

    init_command(config_path=config_path, force=force)


@app.command()
def context(
    history: str = typer.Argument(..., help="JSON file with a list of {id, text, role} messages"),
    query: str = typer.Argument(..., help="New user message to retrieve context for"),
    config_path: str = typer.Option(
        None,
        "--config",
        "-c",
        help="Path to config file (default: ~/.recollect/recollect.yaml)",
    ),
    show_prompt: bool = typer.Option(
        False, "--prompt", "-p", help="Print the rendered context block"
    ),
):
    """Rehydrate memory from a conversation and show the context for a query."""
    from recollect.cli.context_cmd import context_command

    context_command(
        history_path=history,
        query=query,
        config_path=config_path,
        show_prompt=show_prompt,
    )


if __name__ == "__main__":
    app()
