"""Tests for free-model filtering."""

from typing import Any, Dict

import pytest

from model_catalog_cache.filters import filter_free_models, is_free
from model_catalog_cache.records import FreeModel


def _document(models: Dict[str, Any], name: str = "Zen") -> Dict[str, Any]:
    return {"name": name, "models": models}


class TestFilterFreeModels:
    """Tests for filter_free_models."""

    def test_only_models_with_zero_input_and_output_cost(self) -> None:
        document = _document(
            {
                "A": {"cost": {"input": 0, "output": 0}},
                "B": {"cost": {"input": 0, "output": 1}},
                "C": {},
            }
        )

        models = filter_free_models("zen", document)

        assert [m.id for m in models] == ["A"]

    def test_model_fields(self) -> None:
        document = _document(
            {"big-pickle": {"name": "Big Pickle", "cost": {"input": 0.0, "output": 0.0}, "limit": {"context": 200000}}},
            name="OpenCode Zen",
        )

        assert filter_free_models("opencode", document) == [
            FreeModel(
                id="big-pickle",
                name="Big Pickle",
                provider_key="opencode",
                provider_name="OpenCode Zen",
                context_window=200000,
            )
        ]

    def test_name_defaults_to_model_key(self) -> None:
        models = filter_free_models("zen", _document({"m1": {"cost": {"input": 0, "output": 0}}}))

        assert models[0].name == "m1"
        assert models[0].context_window is None

    def test_provider_name_defaults_to_unknown(self) -> None:
        document = {"models": {"m1": {"cost": {"input": 0, "output": 0}}}}

        assert filter_free_models("zen", document)[0].provider_name == "Unknown"

    def test_preserves_document_order(self) -> None:
        free = {"cost": {"input": 0, "output": 0}}
        document = _document({"zeta": free, "alpha": free, "mid": free})

        assert [m.id for m in filter_free_models("zen", document)] == ["zeta", "alpha", "mid"]

    @pytest.mark.parametrize(
        "cost",
        [
            {"input": 0},
            {"output": 0},
            {"input": None, "output": 0},
            {"input": "0", "output": "0"},
            {"input": False, "output": False},
            {"input": 0, "output": 0.0001},
        ],
    )
    def test_incomplete_or_non_numeric_cost_is_not_free(self, cost: Dict[str, Any]) -> None:
        assert filter_free_models("zen", _document({"m": {"cost": cost}})) == []

    def test_malformed_entries_are_skipped(self) -> None:
        document = _document(
            {
                "not-a-dict": "oops",
                "cost-not-a-dict": {"cost": [0, 0]},
                "good": {"cost": {"input": 0, "output": 0}, "limit": "large", "name": 42},
            }
        )

        models = filter_free_models("zen", document)

        assert len(models) == 1
        assert models[0].id == "good"
        assert models[0].name == "good"
        assert models[0].context_window is None

    @pytest.mark.parametrize("document", [None, [], "catalog", {"models": []}, {"name": "Zen"}])
    def test_malformed_documents_yield_nothing(self, document: Any) -> None:
        assert filter_free_models("zen", document) == []

    def test_non_integer_context_is_omitted(self) -> None:
        document = _document({"m": {"cost": {"input": 0, "output": 0}, "limit": {"context": 1.5}}})

        assert filter_free_models("zen", document)[0].context_window is None

    def test_does_not_mutate_document(self) -> None:
        document = _document({"m": {"cost": {"input": 0, "output": 0}}})
        snapshot = repr(document)

        filter_free_models("zen", document)

        assert repr(document) == snapshot


def test_is_free_rejects_non_mapping() -> None:
    assert is_free(None) is False
    assert is_free({"cost": {"input": 0, "output": 0}}) is True


def test_free_model_to_dict_omits_missing_context() -> None:
    model = FreeModel(id="m1", name="M1", provider_key="zen", provider_name="Zen")

    assert model.to_dict() == {"id": "m1", "name": "M1", "provider_key": "zen", "provider_name": "Zen"}
    assert FreeModel("m1", "M1", "zen", "Zen", 8192).to_dict()["context_window"] == 8192
