"""Free-model filtering over a provider's catalog document."""

from typing import Any, List, Optional

from .records import CatalogDocument, FreeModel

# Substituted for missing or non-numeric prices so they never compare equal to zero
MISSING_COST = -1.0
UNKNOWN_PROVIDER_NAME = "Unknown"


def _as_number(value: Any) -> Optional[float]:
    # bool is an int subclass; a JSON true/false is not a price
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    return float(value)


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def is_free(model: Any) -> bool:
    """Check whether a model entry has zero input and output cost.

    Args:
        model: One entry of a catalog's ``models`` mapping

    Returns:
        True only if ``cost.input`` and ``cost.output`` are both numeric zero
    """
    if not isinstance(model, dict):
        return False
    cost = model.get("cost")
    if not isinstance(cost, dict):
        return False

    input_cost = _as_number(cost.get("input"))
    output_cost = _as_number(cost.get("output"))
    input_cost = MISSING_COST if input_cost is None else input_cost
    output_cost = MISSING_COST if output_cost is None else output_cost
    return input_cost == 0.0 and output_cost == 0.0


def filter_free_models(provider_key: str, document: CatalogDocument) -> List[FreeModel]:
    """Return the free models of one provider's catalog.

    The result follows the iteration order of the document's ``models``
    mapping. Malformed entries are skipped rather than reported.

    Args:
        provider_key: Key the document is stored under (e.g. "opencode")
        document: The provider's catalog document

    Returns:
        List of free models, possibly empty
    """
    if not isinstance(document, dict):
        return []

    provider_name = document.get("name")
    if not isinstance(provider_name, str):
        provider_name = UNKNOWN_PROVIDER_NAME

    models = document.get("models")
    if not isinstance(models, dict):
        return []

    free_models: List[FreeModel] = []
    for model_id, model in models.items():
        if not is_free(model):
            continue

        name = model.get("name")
        limit = model.get("limit")
        context_window = _as_int(limit.get("context")) if isinstance(limit, dict) else None

        free_models.append(
            FreeModel(
                id=str(model_id),
                name=name if isinstance(name, str) else str(model_id),
                provider_key=provider_key,
                provider_name=provider_name,
                context_window=context_window,
            )
        )

    return free_models
