"""Provider factory functions for CLI.

Centralizes creation of the vault, settings store and LLM instances from
environment variables and the vault's settings record.
Hides configuration details from command implementations.
"""

import os
from pathlib import Path

import typer
from rich.console import Console

from ..llm import LLMProvider, create_llm_provider
from ..settings import SettingsStore
from ..vault import LocalVault, create_vault

# Default console for output
_console = Console()


def get_vault_root() -> Path:
    """Vault directory from ``VAULTCHAT_VAULT`` (default: current directory)."""
    return Path(os.getenv("VAULTCHAT_VAULT", ".")).expanduser()


def get_vault(console: Console | None = None) -> LocalVault:
    """Create the local vault backend.

    Raises:
        SystemExit: If the vault directory does not exist

    Environment variables:
        VAULTCHAT_VAULT: Vault directory (default: .)
    """
    con = console or _console
    root = get_vault_root()
    if not root.is_dir():
        con.print(f"[red]Error: vault directory not found: {root}[/red]")
        raise typer.Exit(code=1)
    return create_vault("local", root=root)


def get_settings_store() -> SettingsStore:
    """Load the settings record stored inside the vault."""
    store = SettingsStore.for_vault(get_vault_root())
    store.load()
    return store


def get_llm(settings_store: SettingsStore, console: Console | None = None) -> LLMProvider | None:
    """Create the Claude provider.

    The API key comes from the settings record, falling back to
    ``ANTHROPIC_API_KEY``.

    Returns:
        LLM provider instance, or None if no API key is configured

    Environment variables:
        ANTHROPIC_API_KEY: Anthropic API key (used when settings have none)
        ANTHROPIC_MODEL: Model override
    """
    con = console or _console
    api_key = settings_store.settings.api_key or os.getenv("ANTHROPIC_API_KEY", "")
    if not api_key:
        con.print("[yellow]Warning: no API key configured, sending disabled[/yellow]")
        return None

    config = {"api_key": api_key}
    model = os.getenv("ANTHROPIC_MODEL")
    if model:
        config["model"] = model
    return create_llm_provider("anthropic", **config)


def require_llm(settings_store: SettingsStore, console: Console | None = None) -> LLMProvider:
    """Get LLM provider, raising error if not configured.

    Raises:
        SystemExit: If no API key is configured
    """
    con = console or _console
    llm = get_llm(settings_store, con)
    if not llm:
        con.print("[red]Error: set an API key with 'vaultchat config set api_key <key>'[/red]")
        raise typer.Exit(code=1)
    return llm
