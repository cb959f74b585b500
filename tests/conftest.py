"""Shared fixtures for the catalog cache tests."""

import threading
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Any, Dict, Generator, List, Optional, Union

import pytest

from model_catalog_cache.cache import CatalogCache
from model_catalog_cache.config import CacheConfig
from model_catalog_cache.defaults import DefaultCatalogSource
from model_catalog_cache.errors import NetworkError
from model_catalog_cache.fetcher import CatalogFetcher
from model_catalog_cache.store import MemoryCatalogStore

T0 = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)

ZEN_CATALOG: Dict[str, Any] = {
    "zen": {
        "name": "Zen",
        "models": {"m1": {"cost": {"input": 0, "output": 0}}},
    }
}


class FixedClock:
    """Clock returning a settable instant."""

    def __init__(self, now: datetime = T0) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, delta: timedelta) -> None:
        self.now = self.now + delta


class StubFetcher(CatalogFetcher):
    """Fetcher returning canned catalogs (or raising) and counting calls."""

    def __init__(self, result: Union[Dict[str, Any], Exception, None] = None) -> None:
        self.result: Union[Dict[str, Any], Exception] = ZEN_CATALOG if result is None else result
        self.calls = 0
        self.release: Optional[threading.Event] = None
        self.started = threading.Event()
        self._lock = threading.Lock()

    def fetch_all(self) -> Dict[str, Any]:
        with self._lock:
            self.calls += 1
        self.started.set()
        if self.release is not None:
            self.release.wait(timeout=5)
        if isinstance(self.result, Exception):
            raise self.result
        return self.result


class RecordingStore(MemoryCatalogStore):
    """Memory store that records every replace_all call."""

    def __init__(self) -> None:
        super().__init__()
        self.replace_calls: List[datetime] = []

    def replace_all(self, documents: Any, fetched_at: datetime) -> int:
        self.replace_calls.append(fetched_at)
        return super().replace_all(documents, fetched_at)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> Generator[None, None, None]:
    """Keep tests independent of the developer's MCC_* settings and the singleton."""
    for name in (
        "MCC_API_URL",
        "MCC_FETCH_TIMEOUT",
        "MCC_STALE_HOURS",
        "MCC_PROVIDER",
        "MCC_INDICATOR_PROVIDER",
        "MCC_PROXY",
        "MCC_OFFLINE",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("MCC_CONFIG_PATH", str(tmp_path / "no-config.yaml"))
    monkeypatch.setenv("MCC_DATA_DIR", str(tmp_path / "data"))

    original_instance = CatalogCache._default_instance
    CatalogCache._default_instance = None
    yield
    CatalogCache._default_instance = original_instance


@pytest.fixture
def clock() -> FixedClock:
    return FixedClock()


@pytest.fixture
def fetcher() -> StubFetcher:
    return StubFetcher()


@pytest.fixture
def store() -> RecordingStore:
    return RecordingStore()


@pytest.fixture
def config(tmp_path: Path) -> CacheConfig:
    return CacheConfig(data_dir=tmp_path / "data", default_provider="zen", indicator_provider="zen")


@pytest.fixture
def defaults() -> DefaultCatalogSource:
    """The real bundled catalog."""
    return DefaultCatalogSource()


@pytest.fixture
def cache(
    config: CacheConfig,
    store: RecordingStore,
    fetcher: StubFetcher,
    defaults: DefaultCatalogSource,
    clock: FixedClock,
) -> CatalogCache:
    return CatalogCache(config=config, store=store, fetcher=fetcher, defaults=defaults, clock=clock)


@pytest.fixture
def failing_fetcher() -> StubFetcher:
    return StubFetcher(NetworkError("connection refused", url="https://example.invalid/api.json"))
