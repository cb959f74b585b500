"""Tests for cached catalog records and timestamps."""

from datetime import datetime, timedelta, timezone

import pytest

from model_catalog_cache.records import CachedCatalog, FreeModelsResult, parse_timestamp

T0 = datetime(2025, 1, 1, 12, 0, 0, tzinfo=timezone.utc)
SIX_HOURS = timedelta(hours=6)


class TestStaleness:
    """A record is fresh strictly below the threshold and stale at or past it."""

    def test_fresh_just_below_threshold(self) -> None:
        record = CachedCatalog("zen", {}, T0)

        assert not record.is_stale(T0 + SIX_HOURS - timedelta(seconds=1), SIX_HOURS)

    def test_stale_exactly_at_threshold(self) -> None:
        record = CachedCatalog("zen", {}, T0)

        assert record.is_stale(T0 + SIX_HOURS, SIX_HOURS)

    def test_future_timestamp_is_fresh(self) -> None:
        record = CachedCatalog("zen", {}, T0 + timedelta(hours=1))

        assert not record.is_stale(T0, SIX_HOURS)


class TestSerialization:
    """Tests for CachedCatalog.to_dict/from_dict."""

    def test_from_dict_restores_record(self) -> None:
        record = CachedCatalog("zen", {"name": "Zen", "models": {}}, T0)

        restored = CachedCatalog.from_dict(record.to_dict())

        assert restored == record

    @pytest.mark.parametrize(
        "data",
        [
            {"document": {}, "fetched_at": "2025-01-01T00:00:00+00:00"},
            {"provider_key": "zen", "document": [], "fetched_at": "2025-01-01T00:00:00+00:00"},
            {"provider_key": "zen", "document": {}},
            {"provider_key": "zen", "document": {}, "fetched_at": "yesterday"},
        ],
    )
    def test_from_dict_rejects_malformed_records(self, data: dict) -> None:
        with pytest.raises(ValueError):
            CachedCatalog.from_dict(data)


def test_parse_timestamp_accepts_zulu_suffix() -> None:
    assert parse_timestamp("2025-01-01T12:00:00Z") == T0


def test_parse_timestamp_assumes_utc_for_naive_values() -> None:
    assert parse_timestamp("2025-01-01T12:00:00").tzinfo == timezone.utc


def test_free_models_result_unpacks_and_counts() -> None:
    result = FreeModelsResult([], True, T0)
    models, from_cache, timestamp = result

    assert models == []
    assert from_cache is True
    assert timestamp == T0
    assert result.total == 0
