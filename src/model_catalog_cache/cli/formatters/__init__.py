"""CLI formatters package."""

from .json import (
    format_cache_info_json,
    format_free_models_json,
    format_json,
    format_providers_json,
    format_yaml,
)
from .table import (
    create_console,
    format_cache_info_table,
    format_free_models_table,
    format_providers_table,
)

__all__ = [
    "format_json",
    "format_yaml",
    "format_free_models_json",
    "format_providers_json",
    "format_cache_info_json",
    "create_console",
    "format_free_models_table",
    "format_providers_table",
    "format_cache_info_table",
]
