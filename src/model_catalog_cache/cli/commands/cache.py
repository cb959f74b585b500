"""Cache management commands for the MCC CLI."""

from typing import Any, Dict

import click

from ...cache import CatalogCache
from ..formatters import (
    create_console,
    format_cache_info_json,
    format_cache_info_table,
    format_json,
    format_yaml,
)
from ..utils import ExitCode, get_mcc_env_vars, handle_error


def _print_structured(format_type: str, data: Dict[str, Any]) -> None:
    if format_type == "yaml":
        format_yaml(data)
    else:
        format_json(data)


@click.group()
def cache() -> None:
    """Manage the catalog cache."""
    pass


@cache.command()
@click.pass_context
def info(ctx: click.Context) -> None:
    """Show cache settings and the state of every cached catalog."""
    try:
        catalog_cache = CatalogCache.get_default()
        config = catalog_cache.config.as_dict()
        config["provider_source"] = ctx.obj["provider_source"]
        environment = get_mcc_env_vars()
        status = catalog_cache.cache_status()

        format_type = ctx.obj["format"]
        if format_type == "json":
            format_json(format_cache_info_json(config, status, environment))
        elif format_type == "yaml":
            format_yaml(format_cache_info_json(config, status, environment))
        else:
            console = create_console(no_color=ctx.obj["no_color"])
            format_cache_info_table(config, status, console, environment)

    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)


@cache.command()
@click.pass_context
def refresh(ctx: click.Context) -> None:
    """Fetch the remote catalog and replace every cached provider.

    Falls back to the bundled catalog when the remote service fails.
    """
    try:
        saved = CatalogCache.get_default().refresh_all()

        if ctx.obj["format"] in ("json", "yaml"):
            data = {"success": saved > 0, "providers_saved": saved}
            _print_structured(ctx.obj["format"], data)
        else:
            console = create_console(no_color=ctx.obj["no_color"])
            if saved:
                console.print(f"✅ [green]Refreshed {saved} provider catalogs[/green]")
            else:
                console.print("[yellow]No provider catalogs were written.[/yellow]")

    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)


@cache.command()
@click.pass_context
def seed(ctx: click.Context) -> None:
    """Write the bundled catalog if the cache has never been populated."""
    try:
        seeded = CatalogCache.get_default().seed_defaults()

        if ctx.obj["format"] in ("json", "yaml"):
            data = {"seeded": seeded}
            _print_structured(ctx.obj["format"], data)
        else:
            console = create_console(no_color=ctx.obj["no_color"])
            if seeded:
                console.print("✅ [green]Cache initialized from bundled catalog[/green]")
            else:
                console.print("ℹ️  Cache already populated, nothing to do.")

    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)


@cache.command()
@click.option("--yes", is_flag=True, help="Confirm deletion without prompting (required for non-interactive use).")
@click.pass_context
def clear(ctx: click.Context, yes: bool = False) -> None:
    """Clear every cached provider catalog.

    Queries fall back to a synchronous fetch (or the bundled catalog) until
    the cache is repopulated.
    """
    try:
        catalog_cache = CatalogCache.get_default()

        if not yes:
            providers = catalog_cache.list_providers()
            if not providers:
                click.echo("No cached catalogs found to clear.")
                return

            console = create_console(no_color=ctx.obj["no_color"])
            console.print(f"[yellow]Warning:[/yellow] This will delete {len(providers)} cached catalogs.")
            if not click.confirm("\nAre you sure you want to clear the cache?"):
                console.print("Cache clear cancelled.")
                return

        removed = catalog_cache.clear()

        if ctx.obj["format"] in ("json", "yaml"):
            data = {"success": True, "catalogs_removed": removed}
            _print_structured(ctx.obj["format"], data)
        else:
            console = create_console(no_color=ctx.obj["no_color"])
            if removed:
                console.print(f"✅ [green]Successfully cleared {removed} cached catalogs[/green]")
            else:
                console.print("ℹ️  No cached catalogs were found to clear.")

    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)
