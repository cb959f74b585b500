"""Model listing commands for the MCC CLI."""

import click

from ...cache import CatalogCache
from ..formatters import (
    create_console,
    format_free_models_json,
    format_free_models_table,
    format_json,
    format_yaml,
)
from ..utils import ExitCode, handle_error, resolve_provider


@click.group()
def models() -> None:
    """List models from the cached catalog."""
    pass


@models.command()
@click.option("--refresh", is_flag=True, help="Fetch the remote catalog now instead of serving the cache.")
@click.pass_context
def free(ctx: click.Context, refresh: bool = False) -> None:
    """List the free models of the active provider.

    Fresh cached data is returned immediately. Stale data is returned as well
    while the catalog refreshes in the background.
    """
    try:
        cache = CatalogCache.get_default()
        provider = resolve_provider(ctx.obj["provider"], cache.config.default_provider)
        result = cache.get_free_models(provider, force_refresh=refresh)

        format_type = ctx.obj["format"]
        if format_type == "json":
            format_json(format_free_models_json(result, provider))
        elif format_type == "yaml":
            format_yaml(format_free_models_json(result, provider))
        else:
            console = create_console(no_color=ctx.obj["no_color"])
            format_free_models_table(result, provider, console)

        # Let a stale-triggered refresh land before the process exits
        cache.wait_for_refresh(timeout=cache.config.fetch_timeout)

    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)
