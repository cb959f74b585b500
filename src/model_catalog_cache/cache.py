"""Core catalog cache for answering free-model queries.

This module provides the CatalogCache class, which decides for every query
whether to serve the stored catalog, refresh it in the background, or block
on a synchronous fetch. Data falls back in a fixed order: live cache, then
freshly fetched data, then the bundled default catalog.

Typical usage:

    from model_catalog_cache import get_cache

    result = get_cache().get_free_models("opencode")
    for model in result.models:
        print(model.id, model.context_window)
"""

import threading
from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

from .config import CacheConfig
from .config_paths import ensure_data_dir_exists, get_catalogs_dir
from .defaults import DefaultCatalogSource, get_default_source
from .errors import NetworkError, ParseError, StoreError
from .fetcher import CatalogFetcher, HttpCatalogFetcher
from .filters import filter_free_models
from .logging import LogEvent, log_debug, log_error, log_info, log_warning
from .records import CachedCatalog, CatalogDocument, FreeModel, FreeModelsResult, utc_now
from .store import CatalogStore, JsonFileCatalogStore

Clock = Callable[[], datetime]


class CatalogCache:
    """Stale-while-revalidate cache over the remote model catalog.

    Every store access goes through one lock, held only around the store
    operation itself and never across the network call. At most one
    background refresh runs at a time.
    """

    _default_instance: Optional["CatalogCache"] = None
    _instance_lock = threading.RLock()

    @classmethod
    def get_default(cls) -> "CatalogCache":
        """Get the process-wide cache, seeding the store on first creation.

        Returns:
            The default CatalogCache instance
        """
        with cls._instance_lock:
            if cls._default_instance is None:
                instance = cls()
                instance.seed_defaults()
                cls._default_instance = instance
            return cls._default_instance

    @staticmethod
    def cleanup() -> None:
        """Drop the process-wide cache instance."""
        with CatalogCache._instance_lock:
            CatalogCache._default_instance = None

    def __init__(
        self,
        config: Optional[CacheConfig] = None,
        store: Optional[CatalogStore] = None,
        fetcher: Optional[CatalogFetcher] = None,
        defaults: Optional[DefaultCatalogSource] = None,
        clock: Optional[Clock] = None,
    ):
        """Initialize a cache instance.

        Args:
            config: Cache configuration. If None, the default configuration is used.
            store: Persistence backend. Defaults to JSON files under the data dir.
            fetcher: Remote catalog client. Defaults to an HTTP fetcher for config.api_url.
            defaults: Bundled catalog source. Defaults to the process-wide source.
            clock: Returns the current aware UTC time; injectable for tests.
        """
        self.config = config or CacheConfig()

        if store is None:
            try:
                ensure_data_dir_exists(self.config.data_dir)
            except OSError as e:
                log_warning(
                    LogEvent.CATALOG_STORE,
                    "Failed to prepare data directory",
                    path=str(self.config.data_dir),
                    error=e,
                )
            store = JsonFileCatalogStore(get_catalogs_dir(self.config.data_dir))
        self._store = store

        self._fetcher = fetcher or HttpCatalogFetcher(
            self.config.api_url,
            timeout=self.config.fetch_timeout,
            proxy=self.config.proxy,
        )
        self._defaults = defaults or get_default_source()
        self._clock = clock or utc_now

        self._store_lock = threading.Lock()
        self._refresh_lock = threading.Lock()
        self._refresh_thread: Optional[threading.Thread] = None
        # Only read or written while holding _store_lock
        self._last_written_at: Optional[datetime] = None

    @property
    def store(self) -> CatalogStore:
        """The persistence backend."""
        return self._store

    def get_free_models(self, provider_key: Optional[str] = None, force_refresh: bool = False) -> FreeModelsResult:
        """Get the free models for a provider.

        A fresh cached catalog is served without touching the network. A stale
        one is served as-is while a background refresh is scheduled. A missing
        or unreadable one, or ``force_refresh``, triggers a synchronous refresh
        of all providers. This method never raises for store, network or parse
        failures.

        Args:
            provider_key: Provider to query; defaults to config.default_provider
            force_refresh: Skip the cache and refresh synchronously

        Returns:
            FreeModelsResult with the models, whether they came from cache, and
            the cached timestamp when they did
        """
        key = provider_key or self.config.default_provider

        if not force_refresh:
            cached = self._read(key)
            if cached is not None:
                models = filter_free_models(key, cached.document)
                if not cached.is_stale(self._clock(), self.config.stale_after):
                    log_debug(
                        LogEvent.CATALOG_CACHE,
                        "Cache hit",
                        provider=key,
                        fetched_at=cached.fetched_at.isoformat(),
                        count=len(models),
                    )
                    return FreeModelsResult(models, True, cached.fetched_at)

                log_info(
                    LogEvent.CATALOG_CACHE,
                    "Cache stale, serving cached models and refreshing in background",
                    provider=key,
                    fetched_at=cached.fetched_at.isoformat(),
                    count=len(models),
                )
                self._schedule_background_refresh()
                return FreeModelsResult(models, True, cached.fetched_at)

            log_info(LogEvent.CATALOG_CACHE, "Cache miss, fetching catalog", provider=key)
        else:
            log_info(LogEvent.CATALOG_CACHE, "Forced refresh requested", provider=key)

        self.refresh_all()
        return FreeModelsResult(self._models_after_refresh(key), False, None)

    def refresh_all(self, fallback_on_failure: bool = True) -> int:
        """Fetch every provider's catalog and replace all cached records.

        Empty responses fall back to the bundled catalog. All records share
        one timestamp.

        Args:
            fallback_on_failure: Persist the bundled catalog when the fetch
                fails. When False a failed fetch writes nothing, leaving the
                existing records and their timestamps untouched.

        Returns:
            Number of provider records written
        """
        documents = self._fetch_documents(fallback_on_failure)
        if documents is None:
            return 0

        try:
            with self._store_lock:
                fetched_at = self._next_timestamp()
                saved = self._store.replace_all(documents, fetched_at)
        except StoreError as e:
            log_error(LogEvent.CATALOG_STORE, "Failed to persist refreshed catalog", error=e.message)
            return 0

        log_info(LogEvent.CATALOG_CACHE, "Refreshed provider catalogs", providers=saved, total=len(documents))
        return saved

    def seed_defaults(self) -> bool:
        """Persist the bundled catalog if the store has never been populated.

        The indicator provider's record marks the store as populated. Existing
        records are never overwritten, even when stale.

        Returns:
            True if the bundled catalog was written
        """
        key = self.config.indicator_provider
        with self._store_lock:
            try:
                existing = self._store.read(key)
            except StoreError as e:
                log_warning(
                    LogEvent.BOOTSTRAP,
                    "Failed to check cached catalog, skipping initialization",
                    provider=key,
                    error=e.message,
                )
                return False

            if existing is not None:
                log_debug(
                    LogEvent.BOOTSTRAP,
                    "Cached catalog already present, skipping initialization",
                    fetched_at=existing.fetched_at.isoformat(),
                )
                return False

            documents = self._defaults.load()
            if not documents:
                log_warning(LogEvent.BOOTSTRAP, "Bundled catalog is empty, nothing to initialize")
                return False

            try:
                saved = self._store.replace_all(documents, self._next_timestamp())
            except StoreError as e:
                log_error(LogEvent.BOOTSTRAP, "Failed to initialize cached catalog", error=e.message)
                return False

        log_info(LogEvent.BOOTSTRAP, "Initialized cached catalog from bundled defaults", providers=saved)
        return saved > 0

    def get_provider_document(self, provider_key: str) -> Optional[CachedCatalog]:
        """Return the raw cached record for one provider, or None."""
        return self._read(provider_key)

    def list_providers(self) -> List[str]:
        """Return the provider keys present in the store."""
        with self._store_lock:
            return self._store.list_keys()

    def cache_status(self) -> List[Dict[str, Any]]:
        """Describe every cached provider record.

        Returns:
            One entry per provider with its timestamp, age and freshness
        """
        now = self._clock()
        status: List[Dict[str, Any]] = []
        for key in self.list_providers():
            record = self._read(key)
            if record is None:
                status.append({"provider_key": key, "error": "unreadable"})
                continue

            models = record.document.get("models")
            status.append(
                {
                    "provider_key": key,
                    "provider_name": record.document.get("name"),
                    "fetched_at": record.fetched_at.isoformat(),
                    "age_seconds": int(record.age(now).total_seconds()),
                    "stale": record.is_stale(now, self.config.stale_after),
                    "model_count": len(models) if isinstance(models, dict) else 0,
                    "free_model_count": len(filter_free_models(key, record.document)),
                }
            )
        return status

    def clear(self) -> int:
        """Delete every cached record.

        Returns:
            Number of records removed
        """
        with self._store_lock:
            return self._store.clear()

    def wait_for_refresh(self, timeout: Optional[float] = None) -> bool:
        """Block until the in-flight background refresh, if any, finishes.

        Args:
            timeout: Maximum seconds to wait; None waits indefinitely

        Returns:
            True if no background refresh is running afterwards
        """
        with self._refresh_lock:
            thread = self._refresh_thread
        if thread is None:
            return True
        thread.join(timeout)
        return not thread.is_alive()

    def _read(self, provider_key: str) -> Optional[CachedCatalog]:
        try:
            with self._store_lock:
                return self._store.read(provider_key)
        except StoreError as e:
            log_warning(
                LogEvent.CATALOG_STORE,
                "Failed to read cached catalog, treating as missing",
                provider=provider_key,
                error=e.message,
            )
            return None

    def _fetch_documents(self, fallback_on_failure: bool = True) -> Optional[Dict[str, CatalogDocument]]:
        if self.config.offline:
            log_info(LogEvent.CATALOG_FETCH, "Offline mode, using bundled catalog")
            return self._defaults.load()

        try:
            documents = self._fetcher.fetch_all()
        except (NetworkError, ParseError) as e:
            if not fallback_on_failure:
                log_warning(LogEvent.CATALOG_FETCH, "Catalog fetch failed, keeping cached catalogs", error=e.message)
                return None
            log_warning(LogEvent.CATALOG_FETCH, "Catalog fetch failed, using bundled catalog", error=e.message)
            return self._defaults.load()

        if not documents:
            log_warning(LogEvent.CATALOG_FETCH, "Catalog API returned no providers, using bundled catalog")
            return self._defaults.load()

        return documents

    def _next_timestamp(self) -> datetime:
        # Called under _store_lock so timestamps follow write order
        now = self._clock()
        if self._last_written_at is not None and now < self._last_written_at:
            now = self._last_written_at
        self._last_written_at = now
        return now

    def _models_after_refresh(self, provider_key: str) -> List[FreeModel]:
        record = self._read(provider_key)
        if record is not None:
            models = filter_free_models(provider_key, record.document)
            if models:
                return models
            # An empty result may be a provider without free models or a bad
            # document; both fall back to the bundled catalog.
            log_info(
                LogEvent.CATALOG_CACHE,
                "Refreshed catalog has no free models, using bundled catalog",
                provider=provider_key,
            )

        return filter_free_models(provider_key, self._defaults.document_for(provider_key))

    def _schedule_background_refresh(self) -> bool:
        if self.config.offline:
            log_debug(LogEvent.CATALOG_CACHE, "Offline mode, skipping background refresh")
            return False

        with self._refresh_lock:
            if self._refresh_thread is not None and self._refresh_thread.is_alive():
                log_debug(LogEvent.CATALOG_CACHE, "Background refresh already in flight")
                return False

            # Daemon thread: tied to the process, not to the triggering call
            thread = threading.Thread(target=self._background_refresh, name="catalog-refresh", daemon=True)
            self._refresh_thread = thread
            thread.start()
        return True

    def _background_refresh(self) -> None:
        log_info(LogEvent.CATALOG_CACHE, "Starting background catalog refresh")
        try:
            # A failed fetch must not replace live records with the bundled catalog
            saved = self.refresh_all(fallback_on_failure=False)
        except Exception as e:
            log_error(LogEvent.CATALOG_CACHE, "Background catalog refresh failed", error=str(e))
            return
        log_info(LogEvent.CATALOG_CACHE, "Background catalog refresh finished", providers=saved)


def get_cache() -> CatalogCache:
    """Get the catalog cache singleton instance.

    Returns:
        CatalogCache: The process-wide cache instance
    """
    return CatalogCache.get_default()
