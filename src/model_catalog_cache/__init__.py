"""Locally persisted cache of AI model catalogs.

This package keeps per-provider model metadata (names, context windows,
pricing) from a remote catalog service on disk and answers "which models
are free right now" queries quickly, even when the remote service is slow,
unreachable, or returns incomplete data.
"""

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _version

try:
    __version__ = _version("model-catalog-cache")
except PackageNotFoundError:
    # Running from a source checkout without installing the package
    __version__ = "0.0.0"

# Import main components for easier access
from .cache import CatalogCache, get_cache
from .config import CacheConfig
from .defaults import DefaultCatalogSource
from .errors import (
    CatalogCacheError,
    ConfigurationError,
    HttpStatusError,
    NetworkError,
    ParseError,
    StoreError,
)
from .fetcher import CatalogFetcher, HttpCatalogFetcher
from .filters import filter_free_models
from .records import CachedCatalog, FreeModel, FreeModelsResult
from .store import CatalogStore, JsonFileCatalogStore, MemoryCatalogStore

# Define public API
__all__ = [
    # Core cache
    "CatalogCache",
    "CacheConfig",
    "get_cache",
    # Records
    "CachedCatalog",
    "FreeModel",
    "FreeModelsResult",
    "filter_free_models",
    # Collaborators
    "CatalogStore",
    "JsonFileCatalogStore",
    "MemoryCatalogStore",
    "CatalogFetcher",
    "HttpCatalogFetcher",
    "DefaultCatalogSource",
    # Errors
    "CatalogCacheError",
    "ConfigurationError",
    "StoreError",
    "NetworkError",
    "HttpStatusError",
    "ParseError",
]
