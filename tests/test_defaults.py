"""Tests for the bundled default catalog."""

from model_catalog_cache.defaults import DefaultCatalogSource, get_default_source
from model_catalog_cache.filters import filter_free_models


def test_bundled_catalog_loads() -> None:
    catalog = DefaultCatalogSource().load()

    assert "opencode" in catalog
    assert catalog["opencode"]["name"] == "OpenCode Zen"


def test_bundled_opencode_has_free_models() -> None:
    document = DefaultCatalogSource().document_for("opencode")

    models = filter_free_models("opencode", document)

    assert [m.id for m in models] == ["grok-code", "big-pickle"]
    assert models[0].context_window == 256000


def test_document_for_unknown_provider_is_empty() -> None:
    document = DefaultCatalogSource().document_for("no-such-provider")

    assert document == {"name": "no-such-provider", "models": {}}
    assert filter_free_models("no-such-provider", document) == []


def test_load_returns_independent_copies() -> None:
    source = DefaultCatalogSource()

    first = source.load()
    first["opencode"]["models"].clear()

    assert source.load()["opencode"]["models"]


def test_missing_asset_degrades_to_empty_catalog() -> None:
    source = DefaultCatalogSource(filename="missing.json")

    assert source.load() == {}
    assert source.document_for("opencode") == {"name": "opencode", "models": {}}


def test_missing_package_degrades_to_empty_catalog() -> None:
    assert DefaultCatalogSource(package="model_catalog_cache_no_such_pkg").load() == {}


def test_default_source_is_shared() -> None:
    assert get_default_source() is get_default_source()
