"""Provider inspection commands for the MCC CLI."""

import click

from ...cache import CatalogCache
from ..formatters import (
    create_console,
    format_json,
    format_providers_json,
    format_providers_table,
    format_yaml,
)
from ..utils import ExitCode, handle_error, resolve_provider, validate_format_support


@click.group()
def providers() -> None:
    """Inspect cached providers."""
    pass


@providers.command(name="list")
@click.pass_context
def list_providers(ctx: click.Context) -> None:
    """List all providers with a cached catalog."""
    try:
        cache = CatalogCache.get_default()
        available_providers = cache.list_providers()
        current_provider = resolve_provider(ctx.obj["provider"], cache.config.default_provider)

        format_type = ctx.obj["format"]
        if format_type == "json":
            format_json(format_providers_json(available_providers, current_provider))
        elif format_type == "yaml":
            format_yaml(format_providers_json(available_providers, current_provider))
        else:
            console = create_console(no_color=ctx.obj["no_color"])
            format_providers_table(available_providers, current_provider, console)

    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)


@providers.command()
@click.argument("provider_key")
@click.pass_context
def show(ctx: click.Context, provider_key: str) -> None:
    """Show the raw cached catalog document for PROVIDER_KEY."""
    try:
        format_type = validate_format_support(ctx.obj["format"], ["json", "yaml"], "providers show", ctx.obj)
    except click.BadParameter as e:
        handle_error(e, ExitCode.INVALID_USAGE)
        return

    try:
        cache = CatalogCache.get_default()
        record = cache.get_provider_document(provider_key)
    except Exception as e:
        handle_error(e, ExitCode.GENERIC_ERROR)
        return

    if record is None:
        handle_error(click.ClickException(f"No cached catalog for provider '{provider_key}'"), ExitCode.PROVIDER_NOT_FOUND)
        return

    if format_type == "yaml":
        format_yaml(record.to_dict())
    else:
        format_json(record.to_dict())
