"""Main CLI application for the Model Catalog Cache."""

import os
from typing import Optional

import click
import rich_click

from ..config import ENV_PROVIDER
from ..logging import configure_logging
from .utils import resolve_format

# Configure rich-click
rich_click.rich_click.USE_RICH_MARKUP = True
rich_click.rich_click.USE_MARKDOWN = True
rich_click.rich_click.SHOW_ARGUMENTS = True
rich_click.rich_click.GROUP_ARGUMENTS_OPTIONS = True


def _resolve_log_level(verbose: int, quiet: int, debug: bool) -> str:
    """Map the verbosity flags to a logging level name."""
    if debug:
        return "DEBUG"
    if verbose > quiet:
        return "DEBUG" if verbose - quiet >= 2 else "INFO"
    if quiet > verbose:
        return "CRITICAL" if quiet - verbose >= 2 else "ERROR"
    return "WARNING"


@click.group(cls=rich_click.RichGroup)
@click.option(
    "--provider",
    type=str,
    help="Provider to query (e.g. opencode). Takes precedence over the MCC_PROVIDER environment variable.",
)
@click.option(
    "--format",
    type=click.Choice(["table", "json", "yaml"], case_sensitive=False),
    help="Output format. Defaults to 'table' for TTY, 'json' for non-TTY.",
)
@click.option("--verbose", "-v", count=True, help="Increase verbosity (can be used multiple times).")
@click.option("--quiet", "-q", count=True, help="Decrease verbosity (can be used multiple times).")
@click.option("--debug", is_flag=True, help="Enable debug-level logging.")
@click.option("--no-color", is_flag=True, help="Disable color output.")
@click.version_option(package_name="model-catalog-cache", prog_name="mcc")
@click.pass_context
def app(
    ctx: click.Context,
    provider: Optional[str] = None,
    format: Optional[str] = None,
    verbose: int = 0,
    quiet: int = 0,
    debug: bool = False,
    no_color: bool = False,
) -> None:
    """Model Catalog Cache CLI - query and manage the local model catalog.

    Examples:
      # List free models of the default provider
      mcc models free

      # Force a refresh from the remote catalog
      mcc models free --refresh

      # Show cache freshness per provider
      mcc cache info
    """
    ctx.ensure_object(dict)

    if provider:
        provider_source = "CLI flag (--provider)"
    elif os.getenv(ENV_PROVIDER):
        provider_source = f"Environment variable ({ENV_PROVIDER})"
    else:
        provider_source = "Configuration (config file or default)"

    if provider is not None and not provider.strip():
        raise click.BadParameter("Provider must not be empty", param_hint="--provider")

    log_level = _resolve_log_level(verbose, quiet, debug)
    configure_logging(log_level)

    ctx.obj.update(
        {
            "provider": provider.strip() if provider else None,
            "provider_source": provider_source,
            "format": resolve_format(format),
            "format_explicit": format is not None,
            "verbose": verbose,
            "quiet": quiet,
            "debug": debug,
            "no_color": no_color,
            "log_level": log_level,
        }
    )


# Import and register subcommands after the group exists
from .commands import cache, models, providers  # noqa: E402

app.add_command(models.models)
app.add_command(providers.providers)
app.add_command(cache.cache)


if __name__ == "__main__":
    app()
