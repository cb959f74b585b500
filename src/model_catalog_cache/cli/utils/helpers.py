"""Helper functions for CLI operations."""

import os
import sys
from typing import Any, Dict, List, Optional

import click

from ...config import DEFAULT_PROVIDER, ENV_PROVIDER


class ExitCode:
    """Standard exit codes for the CLI."""

    SUCCESS = 0
    GENERIC_ERROR = 1
    INVALID_USAGE = 2
    PROVIDER_NOT_FOUND = 3


def resolve_provider(cli_provider: Optional[str] = None, configured_provider: str = DEFAULT_PROVIDER) -> str:
    """Resolve provider using precedence: CLI flag > MCC_PROVIDER env > configured default.

    Args:
        cli_provider: Provider specified via CLI flag
        configured_provider: Default provider from the cache configuration

    Returns:
        Resolved provider key
    """
    if cli_provider:
        return cli_provider.strip()

    env_provider = os.getenv(ENV_PROVIDER)
    if env_provider:
        return env_provider.strip()

    return configured_provider


def resolve_format(cli_format: Optional[str] = None, default_tty: str = "table", default_non_tty: str = "json") -> str:
    """Resolve output format with TTY detection.

    Args:
        cli_format: Format specified via CLI flag
        default_tty: Default format for TTY output
        default_non_tty: Default format for non-TTY output

    Returns:
        Resolved format name
    """
    if cli_format:
        return cli_format.lower()

    if sys.stdout.isatty():
        return default_tty
    else:
        return default_non_tty


def handle_error(error: Exception, exit_code: int = ExitCode.GENERIC_ERROR) -> None:
    """Handle CLI errors with consistent formatting.

    Args:
        error: Exception to handle
        exit_code: Exit code to use
    """
    click.echo(f"Error: {str(error)}", err=True)
    sys.exit(exit_code)


def get_mcc_env_vars() -> Dict[str, Optional[str]]:
    """Get all MCC_* environment variables, including common unset ones."""
    mcc_vars: Dict[str, Optional[str]] = {key: value for key, value in os.environ.items() if key.startswith("MCC_")}

    common_vars: List[str] = [
        "MCC_PROVIDER",
        "MCC_DATA_DIR",
        "MCC_CONFIG_PATH",
        "MCC_API_URL",
        "MCC_FETCH_TIMEOUT",
        "MCC_STALE_HOURS",
        "MCC_PROXY",
        "MCC_OFFLINE",
    ]
    for var in common_vars:
        mcc_vars.setdefault(var, None)

    return mcc_vars


def validate_format_support(
    format_type: str,
    supported_formats: List[str],
    command_name: str,
    ctx_obj: Dict[str, Any],
) -> str:
    """Validate format support for a command with consistent fallback behavior.

    Args:
        format_type: The requested format
        supported_formats: List of supported formats for this command
        command_name: Name of the command for error messages
        ctx_obj: Click context object containing verbosity settings

    Returns:
        The validated format (may be changed from input for fallback)

    Raises:
        click.BadParameter: For unsupported formats that can't fall back
    """
    if format_type in supported_formats:
        return format_type

    if format_type == "table":
        fallback_format = "json" if "json" in supported_formats else supported_formats[0]
        if ctx_obj.get("verbose", 0) > 0:
            click.echo(
                f"Note: {command_name} doesn't support '{format_type}' format, using {fallback_format} instead.",
                err=True,
            )
        return fallback_format

    supported_list = "', '".join(supported_formats)
    raise click.BadParameter(f"Format '{format_type}' is not supported for {command_name}. Use '{supported_list}'.")


def format_age(seconds: int) -> str:
    """Format an age in seconds as a short human-readable string.

    Args:
        seconds: Age in seconds

    Returns:
        String such as "45s", "12m" or "7h 5m"
    """
    if seconds < 0:
        return "in the future"
    if seconds < 60:
        return f"{seconds}s"
    minutes = seconds // 60
    if minutes < 60:
        return f"{minutes}m"
    hours, minutes = divmod(minutes, 60)
    if hours < 48:
        return f"{hours}h {minutes}m"
    return f"{hours // 24}d {hours % 24}h"
