"""Tests for the logging helpers."""

import logging
from typing import Any, Dict, List, Tuple

import pytest

from model_catalog_cache.logging import (
    LOGGER_NAME,
    LogEvent,
    configure_logging,
    get_logger,
    log_info,
    log_warning,
    set_log_callback,
)


@pytest.fixture(autouse=True)
def reset_callback():
    yield
    set_log_callback(None)


def test_get_logger_nests_under_package() -> None:
    assert get_logger("catalog_fetch").name == f"{LOGGER_NAME}.catalog_fetch"
    assert get_logger(f"{LOGGER_NAME}.store").name == f"{LOGGER_NAME}.store"


def test_log_includes_event_data(caplog: pytest.LogCaptureFixture) -> None:
    with caplog.at_level(logging.INFO, logger=LOGGER_NAME):
        log_info(LogEvent.CATALOG_CACHE, "Cache hit", provider="zen", count=2)

    assert "Cache hit (provider=zen, count=2)" in caplog.text


def test_callback_receives_events() -> None:
    received: List[Tuple[int, str, Dict[str, Any]]] = []
    set_log_callback(lambda level, event, data: received.append((level, event, data)))

    log_warning(LogEvent.CATALOG_FETCH, "Catalog fetch failed", error="timeout")

    assert received == [(logging.WARNING, "catalog_fetch", {"message": "Catalog fetch failed", "error": "timeout"})]


def test_failing_callback_falls_back_to_logging(caplog: pytest.LogCaptureFixture) -> None:
    def broken(level: int, event: str, data: Dict[str, Any]) -> None:
        raise RuntimeError("callback down")

    set_log_callback(broken)

    with caplog.at_level(logging.ERROR, logger=LOGGER_NAME):
        log_warning(LogEvent.CATALOG_STORE, "Failed to replace provider record")

    assert "Logging callback failed with error: callback down" in caplog.text


def test_configure_logging_sets_level() -> None:
    logger = logging.getLogger(LOGGER_NAME)
    previous = logger.level
    try:
        configure_logging("error")
        assert logger.level == logging.ERROR
        configure_logging("not-a-level")
        assert logger.level == logging.WARNING
    finally:
        logger.setLevel(previous)
