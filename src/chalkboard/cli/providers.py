"""Provider factory functions for CLI.

Centralizes creation of the persona, store and LLM instances from
environment variables. Hides configuration details from command
implementations.
"""

import os
from pathlib import Path
from typing import Any

import typer
from pydantic import ValidationError
from rich.console import Console

from ..llm import (
    DEFAULT_GEMINI_MODEL,
    DEFAULT_OPENAI_MODEL,
    SUPPORTED_PROVIDERS,
    LLMProvider,
    create_llm_provider,
)
from ..persona import DEFAULT_PERSONA, PersonaConfig, load_persona
from ..storage import KeyValueStore, create_key_value_store

# Default console for output
_console = Console()

DEFAULT_STORE = "sqlite"
DEFAULT_STORE_PATH = Path("~/.chalkboard/state.db")


def get_persona(key: str | None = None, console: Console | None = None) -> PersonaConfig:
    """Load a persona by key, falling back to the environment.

    Args:
        key: Persona key; None reads CHALKBOARD_PERSONA
        console: Optional Rich console for output

    Raises:
        SystemExit: If the persona cannot be found or is invalid

    Environment variables:
        CHALKBOARD_PERSONA: Persona key (default: supportive)
    """
    con = console or _console
    persona_key = key or os.getenv("CHALKBOARD_PERSONA", DEFAULT_PERSONA)
    try:
        return load_persona(persona_key)
    except FileNotFoundError:
        con.print(f"[red]Error: Unknown persona: {persona_key}[/red]")
        raise typer.Exit(code=1)
    except ValidationError as e:
        con.print(f"[red]Error: Invalid persona '{persona_key}': {e}[/red]")
        raise typer.Exit(code=1)


def get_store(
    backend: str | None = None,
    path: Path | None = None,
    console: Console | None = None,
) -> KeyValueStore:
    """Create the key-value store from options or environment variables.

    Args:
        backend: "memory" or "sqlite"; None reads CHALKBOARD_STORE
        path: SQLite file; None reads CHALKBOARD_STORE_PATH
        console: Optional Rich console for output

    Raises:
        SystemExit: If the backend is not supported

    Environment variables:
        CHALKBOARD_STORE: Backend type (memory, sqlite; default: sqlite)
        CHALKBOARD_STORE_PATH: SQLite file (default: ~/.chalkboard/state.db)
    """
    con = console or _console
    store_backend = (backend or os.getenv("CHALKBOARD_STORE", DEFAULT_STORE)).lower()

    config: dict[str, Any] = {}
    if store_backend == "sqlite":
        config["path"] = path or Path(os.getenv("CHALKBOARD_STORE_PATH", str(DEFAULT_STORE_PATH)))

    try:
        return create_key_value_store(store_backend, **config)
    except ValueError as e:
        con.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(code=1)


# Provider name -> (API key variable, model variable, default model)
_LLM_ENV = {
    "gemini": ("GEMINI_API_KEY", "GEMINI_MODEL", DEFAULT_GEMINI_MODEL),
    "openai": ("OPENAI_API_KEY", "OPENAI_CHAT_MODEL", DEFAULT_OPENAI_MODEL),
}


def get_llm(console: Console | None = None) -> LLMProvider | None:
    """Create LLM provider from environment variables.

    Args:
        console: Optional Rich console for output

    Returns:
        LLM provider instance, or None if not configured

    Environment variables:
        LLM_PROVIDER: Provider type (gemini, openai; default: gemini)
        GEMINI_API_KEY / GEMINI_MODEL: Gemini credentials and model
        OPENAI_API_KEY / OPENAI_CHAT_MODEL: OpenAI credentials and model
        OPENAI_BASE_URL: Optional OpenAI-compatible endpoint
    """
    con = console or _console
    llm_provider = os.getenv("LLM_PROVIDER", "gemini").lower()

    if llm_provider not in _LLM_ENV:
        con.print(
            f"[red]Error: Unknown LLM provider: {llm_provider} "
            f"(expected one of: {', '.join(SUPPORTED_PROVIDERS)})[/red]"
        )
        return None

    key_var, model_var, default_model = _LLM_ENV[llm_provider]
    api_key = os.getenv(key_var)
    if not api_key:
        con.print(f"[yellow]Warning: {key_var} not set[/yellow]")
        return None

    config: dict[str, Any] = {"api_key": api_key, "model": os.getenv(model_var, default_model)}
    if llm_provider == "openai":
        config["base_url"] = os.getenv("OPENAI_BASE_URL")
    return create_llm_provider(llm_provider, **config)


def require_llm(console: Console | None = None) -> LLMProvider:
    """Get LLM provider, raising error if not configured.

    Args:
        console: Optional Rich console for output

    Returns:
        LLM provider instance

    Raises:
        SystemExit: If LLM provider is not configured
    """
    con = console or _console
    llm = get_llm(con)
    if not llm:
        con.print("[red]Error: LLM provider not configured[/red]")
        raise typer.Exit(code=1)
    return llm
