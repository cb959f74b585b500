"""CLI commands package."""

from . import cache, models, providers

__all__ = ["models", "providers", "cache"]
