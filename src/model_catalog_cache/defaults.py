"""Bundled default catalog used when the cache and the network both fail."""

import copy
import json
import threading
from importlib import resources
from typing import Dict, Optional

from .logging import LogEvent, log_debug, log_error
from .records import CatalogDocument

BUNDLED_PACKAGE = "model_catalog_cache.data"
BUNDLED_FILENAME = "models.json"


class DefaultCatalogSource:
    """Static fallback catalog shipped with the package.

    The asset is parsed once per instance and handed out as deep copies.
    Loading never raises: an unreadable or malformed asset degrades to an
    empty catalog and is logged.
    """

    def __init__(self, package: str = BUNDLED_PACKAGE, filename: str = BUNDLED_FILENAME) -> None:
        self._package = package
        self._filename = filename
        self._catalog: Optional[Dict[str, CatalogDocument]] = None
        self._lock = threading.Lock()

    def _read_asset(self) -> Dict[str, CatalogDocument]:
        try:
            content = resources.files(self._package).joinpath(self._filename).read_text(encoding="utf-8")
            data = json.loads(content)
        except (OSError, ModuleNotFoundError, ValueError) as e:
            log_error(LogEvent.DEFAULT_CATALOG, "Failed to load bundled catalog", asset=self._filename, error=e)
            return {}

        if not isinstance(data, dict):
            log_error(LogEvent.DEFAULT_CATALOG, "Bundled catalog is not a JSON object", asset=self._filename)
            return {}

        catalog = {str(key): value for key, value in data.items() if isinstance(value, dict)}
        log_debug(LogEvent.DEFAULT_CATALOG, "Loaded bundled catalog", providers=len(catalog))
        return catalog

    def load(self) -> Dict[str, CatalogDocument]:
        """Return every provider's bundled catalog document."""
        with self._lock:
            if self._catalog is None:
                self._catalog = self._read_asset()
            return copy.deepcopy(self._catalog)

    def document_for(self, provider_key: str) -> CatalogDocument:
        """Return one provider's bundled document, or an empty catalog for unknown keys."""
        document = self.load().get(provider_key)
        if document is None:
            return {"name": provider_key, "models": {}}
        return document


_default_source: Optional[DefaultCatalogSource] = None
_default_source_lock = threading.Lock()


def get_default_source() -> DefaultCatalogSource:
    """Return the process-wide bundled catalog source."""
    global _default_source
    with _default_source_lock:
        if _default_source is None:
            _default_source = DefaultCatalogSource()
        return _default_source
