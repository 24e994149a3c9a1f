"""Tests for the query dispatcher."""

from __future__ import annotations

import logging

import pytest

from modelarena import LiveArena, explain
from modelarena.server.dispatcher import NOT_FOUND, QueryDispatcher


@pytest.fixture
def dispatcher(engine, explainer_a, alice_batch):
    arena = LiveArena(engine=engine)
    arena.register_model(explainer_a).register_observations(alice_batch)
    return QueryDispatcher(arena)


class TestDispatch:
    def test_found(self, dispatcher):
        result = dispatcher.dispatch("Breakdown", {"model": "A", "observation": "Alice"})
        assert result.found
        assert "contribution" in result.payload

    @pytest.mark.parametrize(
        "plot_type, params",
        [
            ("Histogram", {"model": "A"}),
            ("FeatureImportance", {}),
            ("FeatureImportance", {"model": "Z"}),
            ("Breakdown", {"model": "A"}),
            ("Breakdown", {"model": "A", "observation": "Bob"}),
            ("PartialDependence", {"model": "A", "variable": "y"}),
            ("CeterisParibus", {"model": "A", "observation": "Alice"}),
        ],
    )
    def test_not_found(self, dispatcher, plot_type, params):
        assert dispatcher.dispatch(plot_type, params) == NOT_FOUND

    def test_empty_parameter_is_missing(self, dispatcher):
        assert dispatcher.dispatch("FeatureImportance", {"model": ""}) == NOT_FOUND

    def test_extra_parameters_ignored(self, dispatcher):
        result = dispatcher.dispatch("FeatureImportance", {"model": "A", "variable": "nope"})
        assert result.found

    def test_computation_failure_is_not_found_and_logged(self, engine, training_data, caplog):
        def broken(model, data):
            raise RuntimeError("model exploded")

        arena = LiveArena(engine=engine)
        arena.register_model(explain(object(), training_data, training_data["y"], "X", broken))
        dispatcher = QueryDispatcher(arena)

        with caplog.at_level(logging.ERROR, logger="modelarena.server.dispatcher"):
            result = dispatcher.dispatch("FeatureImportance", {"model": "X"})

        assert result == NOT_FOUND
        assert "Computation failed" in caplog.text


class TestCatalogAndTimestamp:
    def test_catalog_passthrough(self, dispatcher):
        assert dispatcher.catalog()["models"] == ["A"]

    def test_timestamp_in_milliseconds(self, dispatcher):
        assert dispatcher.timestamp() == {"timestamp": dispatcher.arena.timestamp_ms()}
