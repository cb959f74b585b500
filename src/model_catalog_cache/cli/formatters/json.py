"""JSON and YAML output formatters for CLI."""

import datetime as _dt
import json
import sys
from enum import Enum as _Enum
from typing import Any, Dict, List, Optional, TextIO

import yaml

from ...records import FreeModelsResult


def _default_serializer(obj: Any) -> Any:
    """Serialize otherwise non-JSON-serializable objects.

    - datetime/date -> ISO 8601 string
    - Enum -> value (fallback to name)
    - Fallback -> str(obj)
    """
    if isinstance(obj, (_dt.datetime, _dt.date)):
        return obj.isoformat()
    if isinstance(obj, _Enum):
        return getattr(obj, "value", obj.name)
    return str(obj)


def format_json(data: Any, output: Optional[TextIO] = None, indent: int = 2) -> None:
    """Format data as JSON and write to output.

    Args:
        data: Data to format
        output: Output stream (defaults to stdout)
        indent: JSON indentation level
    """
    if output is None:
        output = sys.stdout

    json.dump(
        data,
        output,
        indent=indent,
        ensure_ascii=False,
        sort_keys=True,
        default=_default_serializer,
    )
    output.write("\n")


def format_yaml(data: Any, output: Optional[TextIO] = None) -> None:
    """Format data as YAML and write to output.

    Values are first normalized through the JSON serializer so datetimes
    and enums render the same way in both formats.
    """
    if output is None:
        output = sys.stdout

    normalized = json.loads(json.dumps(data, default=_default_serializer))
    yaml.safe_dump(normalized, output, sort_keys=True, allow_unicode=True, default_flow_style=False)


def format_free_models_json(result: FreeModelsResult, provider: str) -> Dict[str, Any]:
    """Format a free-models query result for JSON output.

    Args:
        result: Query result
        provider: Provider that was queried

    Returns:
        Formatted data structure
    """
    return {
        "provider": provider,
        "free_models": [model.to_dict() for model in result.models],
        "total": result.total,
        "from_cache": result.served_from_cache,
        "updated_at": result.cache_timestamp,
    }


def format_providers_json(providers: List[str], current: str) -> Dict[str, Any]:
    """Format providers data for JSON output.

    Args:
        providers: Cached provider keys
        current: Current active provider

    Returns:
        Formatted data structure
    """
    return {"providers": sorted(providers), "current": current, "count": len(providers)}


def format_cache_info_json(
    config: Dict[str, Any],
    status: List[Dict[str, Any]],
    environment: Optional[Dict[str, Optional[str]]] = None,
) -> Dict[str, Any]:
    """Format cache information for JSON output.

    Args:
        config: Effective cache settings
        status: Per-provider cache status
        environment: MCC_* environment variables, if requested

    Returns:
        Formatted data structure
    """
    return {
        "config": config,
        "providers": status,
        "provider_count": len(status),
        "stale_count": sum(1 for entry in status if entry.get("stale")),
        "environment": environment or {},
    }
