"""Persistent storage for per-provider catalog documents.

Each provider key maps to exactly one record. Refreshes replace records with
a delete-then-create pair instead of an in-place update; a crash between the
two steps loses that one key until the next refresh rewrites it.
"""

import copy
import json
import os
import re
import tempfile
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Mapping, Optional

from .errors import StoreError
from .logging import LogEvent, log_debug, log_info, log_warning
from .records import CachedCatalog, CatalogDocument

RECORD_SUFFIX = ".json"

_SAFE_KEY_PATTERN = re.compile(r"^[a-zA-Z0-9._-]+$")


def is_safe_key(provider_key: str) -> bool:
    """Check that a provider key can be used as a file name.

    Args:
        provider_key: The key to validate

    Returns:
        True if the key is safe, False otherwise
    """
    if not provider_key or not provider_key.strip():
        return False

    if ".." in provider_key or provider_key.startswith("."):
        return False

    # Leaves room for the suffix within common file-name limits
    if len(provider_key) > 200:
        return False

    return bool(_SAFE_KEY_PATTERN.match(provider_key))


class CatalogStore(ABC):
    """Get and replace one provider's catalog document plus its refresh time."""

    @abstractmethod
    def read(self, provider_key: str) -> Optional[CachedCatalog]:
        """Return the stored record for a provider, or None if there is none.

        Raises:
            StoreError: If the record cannot be read or deserialized
        """

    @abstractmethod
    def delete(self, provider_key: str) -> None:
        """Remove a provider's record if present.

        Raises:
            StoreError: If the record exists but cannot be removed
        """

    @abstractmethod
    def create(self, record: CachedCatalog) -> None:
        """Write a record for a key that currently has none.

        Raises:
            StoreError: If the record cannot be written
        """

    @abstractmethod
    def list_keys(self) -> List[str]:
        """Return the provider keys that have a stored record, sorted."""

    def replace(self, record: CachedCatalog) -> None:
        """Replace one provider's record with a delete followed by a create."""
        self.delete(record.provider_key)
        self.create(record)

    def replace_all(self, documents: Mapping[str, CatalogDocument], fetched_at: datetime) -> int:
        """Replace every given provider's record with the same timestamp.

        A failure for one key is logged and does not stop the remaining keys.

        Args:
            documents: Catalog documents keyed by provider
            fetched_at: Refresh time stamped on every record

        Returns:
            Number of records written
        """
        saved = 0
        failed = 0
        for provider_key, document in documents.items():
            try:
                self.replace(CachedCatalog(provider_key=provider_key, document=document, fetched_at=fetched_at))
                saved += 1
            except StoreError as e:
                failed += 1
                log_warning(
                    LogEvent.CATALOG_STORE,
                    "Failed to replace provider record",
                    provider=provider_key,
                    error=e.message,
                )

        log_debug(LogEvent.CATALOG_STORE, "Replaced provider records", saved=saved, failed=failed)
        return saved

    def clear(self) -> int:
        """Delete every stored record.

        Returns:
            Number of records removed
        """
        removed = 0
        for provider_key in self.list_keys():
            try:
                self.delete(provider_key)
                removed += 1
            except StoreError as e:
                log_warning(LogEvent.CATALOG_STORE, "Failed to delete provider record", provider=provider_key, error=e)
        return removed


class JsonFileCatalogStore(CatalogStore):
    """Store each provider's record as a JSON file in one directory."""

    def __init__(self, directory: Path) -> None:
        """Initialize the store.

        Args:
            directory: Directory holding ``<provider_key>.json`` files; created lazily
        """
        self._directory = Path(directory)

    @property
    def directory(self) -> Path:
        """Directory holding the record files."""
        return self._directory

    def _record_path(self, provider_key: str) -> Path:
        if not is_safe_key(provider_key):
            raise StoreError(f"Unsafe provider key rejected: {provider_key!r}", provider_key=provider_key)
        return self._directory / f"{provider_key}{RECORD_SUFFIX}"

    def read(self, provider_key: str) -> Optional[CachedCatalog]:
        path = self._record_path(provider_key)
        if not path.exists():
            return None

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("record is not a JSON object")
            return CachedCatalog.from_dict(data)
        except (OSError, json.JSONDecodeError, ValueError) as e:
            raise StoreError(f"Failed to read record for '{provider_key}': {e}", provider_key=provider_key)

    def delete(self, provider_key: str) -> None:
        path = self._record_path(provider_key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StoreError(f"Failed to delete record for '{provider_key}': {e}", provider_key=provider_key)

    def create(self, record: CachedCatalog) -> None:
        path = self._record_path(record.provider_key)
        try:
            self._directory.mkdir(parents=True, exist_ok=True)
            # The file only appears at its final name once fully written
            fd, tmp_name = tempfile.mkstemp(prefix=f".{record.provider_key}.", suffix=".tmp", dir=self._directory)
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as f:
                    json.dump(record.to_dict(), f, ensure_ascii=False)
                os.replace(tmp_name, path)
            finally:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
        except (OSError, TypeError, ValueError) as e:
            raise StoreError(f"Failed to write record for '{record.provider_key}': {e}", provider_key=record.provider_key)

    def list_keys(self) -> List[str]:
        if not self._directory.is_dir():
            return []
        return sorted(
            path.name[: -len(RECORD_SUFFIX)]
            for path in self._directory.iterdir()
            if path.is_file() and path.name.endswith(RECORD_SUFFIX) and not path.name.startswith(".")
        )

    def clear(self) -> int:
        removed = super().clear()
        if removed:
            log_info(LogEvent.CATALOG_STORE, f"Cleared {removed} cached catalogs", directory=str(self._directory))
        return removed


class MemoryCatalogStore(CatalogStore):
    """Keep records in a process-local dict; documents are deep-copied in and out."""

    def __init__(self) -> None:
        """Initialize an empty store."""
        self._records: Dict[str, CachedCatalog] = {}

    def read(self, provider_key: str) -> Optional[CachedCatalog]:
        record = self._records.get(provider_key)
        if record is None:
            return None
        return CachedCatalog(record.provider_key, copy.deepcopy(record.document), record.fetched_at)

    def delete(self, provider_key: str) -> None:
        self._records.pop(provider_key, None)

    def create(self, record: CachedCatalog) -> None:
        self._records[record.provider_key] = CachedCatalog(
            record.provider_key, copy.deepcopy(record.document), record.fetched_at
        )

    def list_keys(self) -> List[str]:
        return sorted(self._records)
