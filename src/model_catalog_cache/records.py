"""Data structures shared by the catalog cache components."""

from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, NamedTuple, Optional

# One provider's catalog document, as returned by the remote service or the
# bundled defaults. Only ``name`` and ``models`` are ever interpreted.
CatalogDocument = Dict[str, Any]


def utc_now() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def parse_timestamp(value: str) -> datetime:
    """Parse an ISO 8601 timestamp, assuming UTC when no offset is given.

    Raises:
        ValueError: If the value is not a valid ISO 8601 timestamp
    """
    # fromisoformat() only accepts a trailing "Z" from Python 3.11 on
    if value.endswith("Z"):
        value = value[:-1] + "+00:00"
    parsed = datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


@dataclass(frozen=True)
class CachedCatalog:
    """One provider's catalog document as persisted, with its refresh time.

    Records are replaced wholesale on every refresh and never merged.
    """

    provider_key: str
    document: CatalogDocument
    fetched_at: datetime

    def age(self, now: datetime) -> timedelta:
        """Time elapsed since the document was fetched."""
        return now - self.fetched_at

    def is_stale(self, now: datetime, stale_after: timedelta) -> bool:
        """Whether the record is at or past the staleness threshold."""
        return self.age(now) >= stale_after

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for persistence."""
        return {
            "provider_key": self.provider_key,
            "document": self.document,
            "fetched_at": self.fetched_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "CachedCatalog":
        """Deserialize a persisted record.

        Raises:
            ValueError: If a required field is missing or malformed
        """
        provider_key = data.get("provider_key")
        document = data.get("document")
        fetched_at = data.get("fetched_at")
        if not isinstance(provider_key, str) or not provider_key:
            raise ValueError("record is missing 'provider_key'")
        if not isinstance(document, dict):
            raise ValueError("record 'document' must be a mapping")
        if not isinstance(fetched_at, str):
            raise ValueError("record is missing 'fetched_at'")
        return cls(provider_key=provider_key, document=document, fetched_at=parse_timestamp(fetched_at))


@dataclass(frozen=True)
class FreeModel:
    """A model whose input and output prices are both zero."""

    id: str
    name: str
    provider_key: str
    provider_name: str
    context_window: Optional[int] = None

    def to_dict(self) -> Dict[str, Any]:
        """Serialize for output, omitting an unknown context window."""
        data: Dict[str, Any] = {
            "id": self.id,
            "name": self.name,
            "provider_key": self.provider_key,
            "provider_name": self.provider_name,
        }
        if self.context_window is not None:
            data["context_window"] = self.context_window
        return data


class FreeModelsResult(NamedTuple):
    """Answer to a free-models query.

    ``cache_timestamp`` is set only when the models were served from cache.
    """

    models: List[FreeModel]
    served_from_cache: bool
    cache_timestamp: Optional[datetime]

    @property
    def total(self) -> int:
        """Number of free models returned."""
        return len(self.models)
