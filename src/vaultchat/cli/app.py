"""Main CLI application using Typer."""
import asyncio
import logging

import typer
from dotenv import load_dotenv
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.markdown import Markdown
from rich.panel import Panel
from rich.table import Table

from ..chat import MessageDispatcher
from ..conversations import ConversationError, ConversationStore
from ..llm import LLMError
from ..settings import Shortcuts, format_hotkey, parse_hotkey, to_textual_keys
from ..transcript import Role
from ..vault import VaultError
from .providers import get_llm, get_settings_store, get_vault, require_llm

# Load environment variables
load_dotenv()

# Create Typer app
app = typer.Typer(
    name="vaultchat",
    help="Chat with Claude about the notes in a markdown vault",
    no_args_is_help=True,
    add_completion=True,
)

config_app = typer.Typer(help="Show and change the vault's chat settings", no_args_is_help=True)
app.add_typer(config_app, name="config")

# Console for rich output
console = Console()

LOG_LEVELS = {
    "debug": logging.DEBUG,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}


@app.callback()
def main_callback(
    log_level: str = typer.Option(
        "warning",
        "--log-level",
        "-l",
        help="Console log level: debug, info, warning or error"
    )
):
    """Chat with Claude about the notes in a markdown vault."""
    logging.basicConfig(
        level=LOG_LEVELS.get(log_level.lower(), logging.WARNING),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


@app.command()
def chat(
    notes: list[str] = typer.Argument(
        None,
        help="Vault paths of notes to open at startup"
    ),
    log_level: str | None = typer.Option(
        None,
        "--log-level",
        "-l",
        help="Show log panel with level: debug (all), info, warning, or error"
    ),
):
    """Launch the interactive TUI."""
    async def _chat():
        from ..ui import run_tui

        vault = get_vault(console)
        settings_store = get_settings_store()
        llm = get_llm(settings_store, console)

        await run_tui(
            vault=vault,
            settings_store=settings_store,
            llm=llm,
            log_level=log_level,
            open_notes=notes or [],
        )
        console.print("\n[dim]Goodbye![/dim]")

    try:
        asyncio.run(_chat())
    except KeyboardInterrupt:
        pass


@app.command()
def new():
    """Start a new conversation and make it current."""
    async def _new():
        store = ConversationStore(get_vault(console), get_settings_store())
        try:
            record = await store.create_conversation()
        except ConversationError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        console.print(f"[green]Started conversation:[/green] {record.path}")

    asyncio.run(_new())


@app.command(name="list")
def list_command():
    """List conversations in the vault."""
    async def _list():
        store = ConversationStore(get_vault(console), get_settings_store())
        try:
            records = await store.list_conversations()
        except VaultError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        current = await store.current_path()

        if not records:
            console.print("[yellow]No conversations yet.[/yellow]")
            console.print("[dim]Start one with: vaultchat new[/dim]")
            return

        table = Table(title=f"Conversations in {store.folder}/")
        table.add_column("", width=1)
        table.add_column("Path", style="cyan")
        table.add_column("Created", style="dim")
        for record in records:
            created = record.created.strftime("%Y-%m-%d %H:%M:%S") if record.created else "-"
            marker = "*" if record.path == current else ""
            table.add_row(marker, record.path, created)
        console.print(table)

    asyncio.run(_list())


@app.command()
def switch(
    path: str = typer.Argument(..., help="Vault path of the conversation")
):
    """Make another conversation current."""
    async def _switch():
        vault = get_vault(console)
        store = ConversationStore(vault, get_settings_store())
        if not await vault.exists(path):
            console.print(f"[yellow]Warning: {path} does not exist yet[/yellow]")
        try:
            await store.switch_to(path)
        except ConversationError as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        console.print(f"[green]Current conversation:[/green] {path}")

    asyncio.run(_switch())


@app.command()
def show():
    """Print the current conversation."""
    async def _show():
        store = ConversationStore(get_vault(console), get_settings_store())
        path = await store.current_path()
        if path is None:
            console.print("[yellow]No current conversation.[/yellow]")
            return

        messages = await store.load_current()
        console.print(f"[bold cyan]{path}[/bold cyan] [dim]({len(messages)} messages)[/dim]\n")
        for msg in messages:
            if msg.role == Role.USER:
                console.print(Panel(msg.content, title="You", title_align="left", border_style="green"))
            else:
                console.print(Panel(Markdown(msg.content), title="Claude", title_align="left", border_style="magenta"))

    asyncio.run(_show())


@app.command()
def send(
    message: str = typer.Argument(..., help="Message to send"),
    context: list[str] = typer.Option(
        None,
        "--context",
        "-c",
        help="Vault path of a note to attach (repeatable)"
    ),
):
    """Send one message to Claude and append the exchange to the current conversation."""
    async def _send():
        vault = get_vault(console)
        settings_store = get_settings_store()
        llm = require_llm(settings_store, console)

        try:
            context_files = []
            for path in context or []:
                file = await vault.get_file(path)
                if file is None:
                    console.print(f"[red]Error: context file not found: {path}[/red]")
                    raise typer.Exit(code=1)
                context_files.append(file)

            store = ConversationStore(vault, settings_store)
            dispatcher = MessageDispatcher(vault, store, llm)
            with console.status("[dim]Waiting for Claude...[/dim]"):
                reply = await dispatcher.send(message, context_files)

            console.print(Panel(Markdown(reply), title="Claude", title_align="left", border_style="magenta"))
            console.print(f"[dim]Saved to {await store.current_path()}[/dim]")

        except (ConversationError, VaultError, LLMError) as e:
            console.print(f"[red]Error: {e}[/red]")
            raise typer.Exit(code=1)
        finally:
            await llm.close()

    asyncio.run(_send())


@config_app.command(name="show")
def config_show():
    """Print the settings record."""
    settings_store = get_settings_store()
    settings = settings_store.settings

    api_key = settings.api_key
    masked = f"{api_key[:7]}...{api_key[-4:]}" if len(api_key) > 12 else ("set" if api_key else "-")

    table = Table(title=str(settings_store.path))
    table.add_column("Setting", style="cyan")
    table.add_column("Value")
    table.add_row("api_key", masked)
    table.add_row("conversation_folder", settings.conversation_folder)
    table.add_row("current_conversation_path", settings.current_conversation_path or "-")
    table.add_row("include_all_open_files", str(settings.include_all_open_files))
    for name in Shortcuts.model_fields:
        hotkeys = getattr(settings.shortcuts, name)
        try:
            keys = to_textual_keys(hotkeys)
        except ValueError:
            keys = "invalid"
        table.add_row(f"shortcuts.{name}", f"{format_hotkey(hotkeys) or '-'} [dim]({keys or 'unbound'})[/dim]")
    console.print(table)


@config_app.command(name="set")
def config_set(
    key: str = typer.Argument(..., help="Setting name, e.g. api_key or conversation_folder"),
    value: str = typer.Argument(..., help="New value"),
):
    """Change a setting."""
    if key == "shortcuts":
        console.print("[red]Error: use 'vaultchat config shortcut ACTION HOTKEY'[/red]")
        raise typer.Exit(code=1)

    settings_store = get_settings_store()
    try:
        settings_store.update(**{key: value})
    except (AttributeError, ValidationError, RuntimeError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]Updated {key}[/green]")


@config_app.command(name="shortcut")
def config_shortcut(
    action: str = typer.Argument(..., help="open_interface, open_last_conversation, new_conversation or hide_interface"),
    hotkey: str = typer.Argument(..., help='Key combination such as "Mod+Shift+N"; empty to unbind'),
):
    """Rebind one of the four chat actions."""
    if action not in Shortcuts.model_fields:
        console.print(f"[red]Error: unknown action: {action}[/red]")
        raise typer.Exit(code=1)

    hotkeys = parse_hotkey(hotkey)
    try:
        to_textual_keys(hotkeys)
    except ValueError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)

    settings_store = get_settings_store()
    shortcuts = settings_store.settings.shortcuts.model_copy(update={action: hotkeys})
    try:
        settings_store.update(shortcuts=shortcuts)
    except RuntimeError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)
    console.print(f"[green]{action}[/green] -> {format_hotkey(hotkeys) or 'unbound'}")


def main():
    """Main entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
