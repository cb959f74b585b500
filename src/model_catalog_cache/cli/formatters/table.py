"""Rich table formatter for CLI output."""

import sys
from typing import Any, Dict, List, Optional, TextIO

from rich.console import Console
from rich.table import Table
from rich.text import Text

from ...records import FreeModelsResult
from ..utils import format_age


def create_console(output: Optional[TextIO] = None, no_color: bool = False) -> Console:
    """Create a Rich console instance.

    Args:
        output: Output stream (defaults to stdout)
        no_color: Disable color output

    Returns:
        Console instance
    """
    if output is None:
        output = sys.stdout

    return Console(file=output, no_color=no_color)


def _format_context_window(value: Optional[int]) -> str:
    """Represent context window sizes in thousands (K) and millions (M) of tokens."""
    if value is None:
        return "N/A"
    if value >= 1_000_000:
        return f"{value/1_000_000:.1f}M"
    if value >= 1_000:
        return f"{value/1_000:.0f}K"
    return str(value)


def format_free_models_table(result: FreeModelsResult, provider: str, console: Optional[Console] = None) -> None:
    """Format free models as a Rich table.

    Args:
        result: Query result
        provider: Provider that was queried
        console: Rich console instance
    """
    if console is None:
        console = create_console()

    if not result.models:
        console.print(f"No free models found for provider '{provider}'.")
        return

    table = Table(title=f"Free Models ({provider})", show_header=True, header_style="bold blue")
    table.add_column("Model ID", style="cyan", no_wrap=True)
    table.add_column("Name", style="green")
    table.add_column("Provider")
    table.add_column("Context\nWindow", justify="right")

    for model in result.models:
        table.add_row(model.id, model.name, model.provider_name, _format_context_window(model.context_window))

    console.print(table)

    if result.served_from_cache and result.cache_timestamp is not None:
        console.print(f"\nServed from cache (updated {result.cache_timestamp.isoformat()})")
    else:
        console.print("\nFetched fresh catalog data")


def format_providers_table(providers: List[str], current: str, console: Optional[Console] = None) -> None:
    """Format providers as a Rich table.

    Args:
        providers: Cached provider keys
        current: Current active provider
        console: Rich console instance
    """
    if console is None:
        console = create_console()

    table = Table(title="Cached Providers", show_header=True, header_style="bold blue")
    table.add_column("Provider", style="cyan")
    table.add_column("Status", style="green")

    for provider in sorted(providers):
        status = "✓ Current" if provider == current else ""
        table.add_row(provider, status)

    console.print(table)


def format_cache_info_table(
    config: Dict[str, Any],
    status: List[Dict[str, Any]],
    console: Optional[Console] = None,
    environment: Optional[Dict[str, Optional[str]]] = None,
) -> None:
    """Format cache information as Rich tables.

    Args:
        config: Effective cache settings
        status: Per-provider cache status
        console: Rich console instance
        environment: MCC_* environment variables; only the set ones are shown
    """
    if console is None:
        console = create_console()

    settings = Table(title="Cache Settings", show_header=True, header_style="bold blue")
    settings.add_column("Setting", style="cyan")
    settings.add_column("Value")
    for key, value in config.items():
        settings.add_row(key, "N/A" if value is None else str(value))
    console.print(settings)

    overrides = {name: value for name, value in (environment or {}).items() if value is not None}
    if overrides:
        env_table = Table(title="Environment Overrides", show_header=True, header_style="bold blue")
        env_table.add_column("Variable", style="cyan")
        env_table.add_column("Value")
        for name in sorted(overrides):
            env_table.add_row(name, overrides[name])
        console.print(env_table)

    if not status:
        console.print("\nNo cached catalogs found.")
        return

    table = Table(title="Cached Catalogs", show_header=True, header_style="bold blue")
    table.add_column("Provider", style="cyan")
    table.add_column("Updated")
    table.add_column("Age", justify="right")
    table.add_column("State")
    table.add_column("Models", justify="right")
    table.add_column("Free", justify="right")

    for entry in status:
        if "error" in entry:
            table.add_row(entry["provider_key"], "N/A", "N/A", Text("unreadable", style="red"), "N/A", "N/A")
            continue
        state = Text("stale", style="yellow") if entry["stale"] else Text("fresh", style="green")
        table.add_row(
            entry["provider_key"],
            entry["fetched_at"],
            format_age(entry["age_seconds"]),
            state,
            str(entry["model_count"]),
            str(entry["free_model_count"]),
        )

    console.print(table)
