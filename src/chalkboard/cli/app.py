"""Main CLI application using Typer."""
import asyncio
from pathlib import Path

import typer
from dotenv import load_dotenv
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from ..chat import ChatPersistence, ConversationOrchestrator
from ..persona import available_personas, build_prompt
from ..ui.formatting import render_turn
from .providers import get_persona, get_store, require_llm

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="chalkboard",
    help="Chat with a supportive or harsh AI teacher persona",
    no_args_is_help=True,
    add_completion=True,
)

# Console for rich output
console = Console()

PERSONA_HELP = "Persona variant (see 'chalkboard personas')"
STORE_HELP = "State backend: memory or sqlite"


async def _typer_confirm(prompt: str) -> bool:
    return typer.confirm(prompt)


@app.command()
def chat(
    persona: str | None = typer.Option(None, "--persona", "-p", help=PERSONA_HELP),
    store: str | None = typer.Option(None, "--store", "-s", help=STORE_HELP),
    store_path: Path | None = typer.Option(None, "--store-path", help="SQLite state file"),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel at this level: debug, info, warning, error"
    ),
):
    """Start the interactive chat TUI."""
    from ..ui import run_chat_tui

    persona_config = get_persona(persona, console)
    kv_store = get_store(store, store_path, console)
    llm = require_llm(console)

    asyncio.run(run_chat_tui(persona_config, llm, kv_store, log_level=log_level))


@app.command()
def ask(
    text: str = typer.Argument(..., help="Message to send"),
    persona: str | None = typer.Option(None, "--persona", "-p", help=PERSONA_HELP),
    store: str | None = typer.Option(None, "--store", "-s", help=STORE_HELP),
    store_path: Path | None = typer.Option(None, "--store-path", help="SQLite state file"),
):
    """Send one message and print the reply."""
    persona_config = get_persona(persona, console)
    if not text.strip():
        console.print("[yellow]Nothing to send.[/yellow]")
        raise typer.Exit(code=1)

    async def _ask():
        kv_store = get_store(store, store_path, console)
        llm = require_llm(console)
        orchestrator = ConversationOrchestrator(
            persona=persona_config,
            llm=llm,
            persistence=ChatPersistence(kv_store),
            confirm=_typer_confirm,
        )

        try:
            await kv_store.connect()
            await orchestrator.start()
            with console.status(f"[dim]{persona_config.name} is typing...[/dim]"):
                result = await orchestrator.submit(text)
        finally:
            await kv_store.disconnect()
            await llm.close()

        if result.error_message:
            console.print(f"[red]{result.error_message}[/red]")
            raise typer.Exit(code=1)

        reply = render_turn(result.conversation[-1], persona_config)
        console.print(Panel(
            reply.text,
            title=f"{reply.label} · {reply.time_label}",
            border_style=persona_config.ui.palette.primary,
        ))

    asyncio.run(_ask())


@app.command()
def prompt(
    text: str = typer.Argument(..., help="Message to compose a prompt for"),
    persona: str | None = typer.Option(None, "--persona", "-p", help=PERSONA_HELP),
):
    """Print the composed prompt without calling the model."""
    persona_config = get_persona(persona, console)
    console.print(build_prompt(persona_config, text), markup=False, highlight=False)


@app.command()
def personas():
    """List available persona variants."""
    table = Table(show_header=True, header_style="bold cyan")
    table.add_column("Key", style="cyan")
    table.add_column("Name")
    table.add_column("Tagline", style="dim")

    for key in available_personas():
        persona_config = get_persona(key, console)
        table.add_row(key, persona_config.name, persona_config.ui.tagline)

    console.print(table)


@app.command()
def history(
    persona: str | None = typer.Option(None, "--persona", "-p", help=PERSONA_HELP),
    store: str | None = typer.Option(None, "--store", "-s", help=STORE_HELP),
    store_path: Path | None = typer.Option(None, "--store-path", help="SQLite state file"),
):
    """Print the saved conversation."""
    persona_config = get_persona(persona, console)

    async def _history():
        kv_store = get_store(store, store_path, console)
        try:
            await kv_store.connect()
            turns = await ChatPersistence(kv_store).load_conversation()
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await kv_store.disconnect()

        if not turns:
            console.print("[dim]No saved conversation.[/dim]")
            return

        for turn in turns:
            view = render_turn(turn, persona_config)
            style = persona_config.ui.palette.secondary if view.is_user else persona_config.ui.palette.primary
            console.print(Panel(view.text, title=f"{view.label} · {view.time_label}", border_style=style))

    asyncio.run(_history())


@app.command()
def clear(
    persona: str | None = typer.Option(None, "--persona", "-p", help=PERSONA_HELP),
    store: str | None = typer.Option(None, "--store", "-s", help=STORE_HELP),
    store_path: Path | None = typer.Option(None, "--store-path", help="SQLite state file"),
    yes: bool = typer.Option(
        False,
        "--yes",
        "-y",
        help="Skip confirmation prompt"
    ),
):
    """Clear the saved conversation."""
    persona_config = get_persona(persona, console)

    async def _clear():
        if not yes and not typer.confirm(persona_config.ui.clear_confirmation):
            console.print("[dim]Aborted.[/dim]")
            return

        kv_store = get_store(store, store_path, console)
        try:
            await kv_store.connect()
            await ChatPersistence(kv_store).clear_conversation()
            console.print("[green]Conversation cleared.[/green]")
        except Exception as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await kv_store.disconnect()

    asyncio.run(_clear())


if __name__ == "__main__":
    app()
