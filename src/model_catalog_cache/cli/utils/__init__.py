"""CLI utilities package."""

from .helpers import (
    ExitCode,
    format_age,
    get_mcc_env_vars,
    handle_error,
    resolve_format,
    resolve_provider,
    validate_format_support,
)

__all__ = [
    "ExitCode",
    "resolve_provider",
    "resolve_format",
    "handle_error",
    "get_mcc_env_vars",
    "validate_format_support",
    "format_age",
]
