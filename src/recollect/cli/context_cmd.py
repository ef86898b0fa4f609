"""Context command - rehydrate memory from a conversation file and query it."""

import asyncio
import json
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from recollect.config.loader import ConfigError, load_config
from recollect.exceptions import ProviderInitError
from recollect.memory.retriever import ContextRetriever
from recollect.memory.schema import Context

console = Console()


def _load_history(path: Path) -> list[dict]:
    try:
        data = json.loads(path.read_text())
    except (OSError, json.JSONDecodeError) as e:
        console.print(f"[red]Could not read conversation file {path}: {e}[/red]")
        raise typer.Exit(code=1) from e

    if not isinstance(data, list):
        console.print("[red]Conversation file must contain a JSON list of messages[/red]")
        raise typer.Exit(code=1)
    return data


def _render(context: Context, show_prompt: bool) -> None:
    if context.is_empty:
        console.print("[dim]No relevant context found.[/dim]")
        return

    if context.relevant_messages:
        table = Table(title="Relevant Context", show_header=True, header_style="bold cyan")
        table.add_column("Score", justify="right", width=7)
        table.add_column("Role", width=10)
        table.add_column("Message", style="white")
        for msg in context.relevant_messages:
            table.add_row(f"{msg.score:.3f}", msg.role, Text(msg.text))
        console.print(table)
    else:
        console.print(Panel(Text(context.summary or ""), title="Summary", border_style="yellow"))

    console.print(f"[dim]Estimated tokens: {context.total_tokens}[/dim]")

    if show_prompt:
        console.print(Panel(Text(context.to_prompt()), title="Prompt Block", border_style="blue"))


async def _run(retriever: ContextRetriever, history: list[dict], query: str) -> Context:
    await retriever.rehydrate_from_messages(history)
    return await retriever.get_relevant_context(query)


def context_command(
    history_path: str,
    query: str,
    config_path: str | None = None,
    show_prompt: bool = False,
) -> None:
    """Rehydrate memory from ``history_path`` and print the context for ``query``.

    Args:
        history_path: JSON file with a list of {id, text, role} messages
        query: New user message
        config_path: Optional config file path
        show_prompt: Also print the rendered context block
    """
    try:
        config = load_config(config_path)
    except ConfigError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(code=1) from e

    history = _load_history(Path(history_path))
    retriever = ContextRetriever.from_config(config)

    try:
        with console.status("Embedding conversation..."):
            context = asyncio.run(_run(retriever, history, query))
    except ProviderInitError as e:
        console.print(f"[red]Embedding model unavailable: {e}[/red]")
        raise typer.Exit(code=1) from e

    console.print(f"[dim]Memory holds {retriever.get_memory_size()} message(s)[/dim]")
    _render(context, show_prompt)
