"""Tests for the error hierarchy."""

import pytest

from model_catalog_cache.errors import (
    CatalogCacheError,
    ConfigurationError,
    HttpStatusError,
    NetworkError,
    ParseError,
    StoreError,
)


@pytest.mark.parametrize("error_class", [ConfigurationError, StoreError, NetworkError, HttpStatusError, ParseError])
def test_errors_share_base_class(error_class) -> None:
    error = error_class("boom")

    assert isinstance(error, CatalogCacheError)
    assert error.message == "boom"
    assert str(error) == "boom"


def test_http_status_error_details() -> None:
    error = HttpStatusError("HTTP 404", url="https://models.dev/api.json", status_code=404)

    assert isinstance(error, NetworkError)
    assert error.url == "https://models.dev/api.json"
    assert error.status_code == 404


def test_context_attributes() -> None:
    assert StoreError("x", provider_key="zen").provider_key == "zen"
    assert ParseError("x", source="bundled").source == "bundled"
    assert ConfigurationError("x", path="/tmp/config.yaml").path == "/tmp/config.yaml"
