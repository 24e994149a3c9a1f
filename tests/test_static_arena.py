"""Tests for the static arena and its registration cascade."""

from __future__ import annotations

from collections import Counter

import pandas as pd
import pytest

from modelarena import ComputationEngine, StaticArena, explain, new_arena
from modelarena.analysis.computers import BreakdownComputer
from modelarena.errors import (
    ArtifactNotFoundError,
    CascadeError,
    DuplicateLabelError,
    DuplicateRowIdError,
    ModelNotFoundError,
    VariableNotFoundError,
)
from modelarena.types import PlotType

from conftest import FAST_SETTINGS


def keys(arena: StaticArena) -> set:
    return {artifact.key for artifact in arena.artifacts}


class TestRegistration:
    def test_new_arena_is_static_by_default(self):
        arena = new_arena()
        assert isinstance(arena, StaticArena)
        assert arena.artifacts == ()

    def test_model_gets_global_plots(self, engine, explainer_a):
        arena = StaticArena(engine=engine).register_model(explainer_a)
        assert keys(arena) == {
            (PlotType.FEATURE_IMPORTANCE, "A", None, None),
            (PlotType.PARTIAL_DEPENDENCE, "A", None, "age"),
            (PlotType.PARTIAL_DEPENDENCE, "A", None, "income"),
            (PlotType.ACCUMULATED_DEPENDENCE, "A", None, "age"),
            (PlotType.ACCUMULATED_DEPENDENCE, "A", None, "income"),
        }

    def test_duplicate_label_leaves_arena_unchanged(
        self, engine, explainer_a, model_a, training_data
    ):
        arena = StaticArena(engine=engine).register_model(explainer_a)
        before = arena.artifacts

        with pytest.raises(DuplicateLabelError):
            arena.register_model(explain(model_a, training_data, training_data["y"], label="A"))

        assert arena.explainers.all() == [explainer_a]
        assert arena.artifacts == before

    def test_duplicate_row_ids_produce_no_artifacts(self, engine, explainer_a, two_rows):
        arena = StaticArena(engine=engine).register_model(explainer_a)
        arena.register_observations(two_rows)
        before = arena.artifacts

        with pytest.raises(DuplicateRowIdError):
            arena.register_observations(pd.DataFrame({"age": [1.0]}, index=["r1"]))

        assert arena.artifacts == before
        assert arena.observations.row_ids() == ["r1", "r2"]


class TestCascadeCoverage:
    def test_models_then_batch(self, engine, explainer_a, explainer_b, two_rows):
        """Each (model, row) pair gets one break down and one profile per shared variable."""
        arena = StaticArena(engine=engine)
        arena.register_model(explainer_a).register_model(explainer_b)
        arena.register_observations(two_rows)

        local = Counter(
            (a.plot_type, a.model, a.observation)
            for a in arena.artifacts
            if a.observation is not None
        )
        for model in ("A", "B"):
            for row in ("r1", "r2"):
                assert local[(PlotType.BREAKDOWN, model, row)] == 1
                assert local[(PlotType.SHAP_VALUES, model, row)] == 1
                assert local[(PlotType.CETERIS_PARIBUS, model, row)] == 2

    def test_order_independent(self, explainer_a, explainer_b, two_rows):
        models_first = StaticArena(engine=ComputationEngine(FAST_SETTINGS))
        models_first.register_model(explainer_a).register_model(explainer_b)
        models_first.register_observations(two_rows)

        batch_first = StaticArena(engine=ComputationEngine(FAST_SETTINGS))
        batch_first.register_observations(two_rows)
        batch_first.register_model(explainer_a).register_model(explainer_b)

        assert keys(models_first) == keys(batch_first)
        assert len(models_first.artifacts) == len(keys(models_first))
        payloads = {a.key: a.payload for a in models_first.artifacts}
        assert all(payloads[a.key] == a.payload for a in batch_first.artifacts)

    def test_no_pair_recomputed(
        self, recording_engine, explainer_a, explainer_b, two_rows, alice_batch
    ):
        engine, recorders = recording_engine
        arena = StaticArena(engine=engine)
        arena.register_model(explainer_a)
        arena.register_observations(two_rows)
        arena.register_model(explainer_b)
        arena.register_observations(alice_batch)

        pairs = [(c["model"], c["observation"]) for c in recorders[PlotType.BREAKDOWN].calls]
        assert len(pairs) == len(set(pairs)) == 6
        assert len(recorders[PlotType.FEATURE_IMPORTANCE].calls) == 2

    def test_profiles_only_for_shared_variables(self, engine, explainer_a):
        arena = StaticArena(engine=engine).register_model(explainer_a)
        arena.register_observations(pd.DataFrame({"age": [33.0], "other": [1]}, index=["o1"]))

        profiles = [a.variable for a in arena.artifacts if a.plot_type is PlotType.CETERIS_PARIBUS]
        assert profiles == ["age"]

    def test_progress_callback(self, engine, explainer_a, two_rows):
        arena = StaticArena(engine=engine).register_model(explainer_a)
        progress = []
        arena.register_observations(two_rows, progress_callback=lambda p, d: progress.append(p))
        assert progress[0] == 0.0
        assert progress[-1] == 1.0


class TestCascadeFailures:
    def test_failed_step_abandoned_others_kept(self, explainer_a, two_rows):
        class FailsForR2(BreakdownComputer):
            def compute(self, explainer, observation, variables, variable, settings):
                if observation.index[0] == "r2":
                    raise ValueError("cannot explain r2")
                return super().compute(explainer, observation, variables, variable, settings)

        engine = ComputationEngine(FAST_SETTINGS).register(FailsForR2())
        arena = StaticArena(engine=engine).register_model(explainer_a)

        with pytest.raises(CascadeError) as exc_info:
            arena.register_observations(two_rows)

        assert [(m, o) for m, o, _ in exc_info.value.failures] == [("A", "r2")]
        observations = {a.observation for a in arena.artifacts if a.observation}
        assert observations == {"r1"}
        # The registration itself is kept
        assert arena.observations.row_ids() == ["r1", "r2"]

    def test_failed_model_step(self, engine, training_data):
        def broken(model, data):
            raise RuntimeError("boom")

        explainer = explain(object(), training_data, training_data["y"], "X", broken)
        arena = StaticArena(engine=engine)
        with pytest.raises(CascadeError):
            arena.register_model(explainer)
        assert arena.artifacts == ()
        assert "X" in arena.explainers


class TestResolve:
    @pytest.fixture
    def arena(self, engine, explainer_a, alice_batch):
        arena = StaticArena(engine=engine)
        arena.register_model(explainer_a).register_observations(alice_batch)
        return arena

    def test_resolve_reads_stored_artifact(self, arena):
        artifact = arena.resolve("Breakdown", "A", "Alice")
        assert artifact in arena.artifacts

    def test_resolve_errors(self, arena):
        with pytest.raises(ModelNotFoundError):
            arena.resolve(PlotType.FEATURE_IMPORTANCE, "missing")
        with pytest.raises(VariableNotFoundError):
            arena.resolve(PlotType.PARTIAL_DEPENDENCE, "A", variable="y")

    def test_missing_artifact(self, explainer_a, alice_batch):
        engine = ComputationEngine(FAST_SETTINGS, computers=[BreakdownComputer()])
        arena = StaticArena(engine=engine).register_model(explainer_a)
        arena.register_observations(alice_batch)
        with pytest.raises(ArtifactNotFoundError):
            arena.resolve(PlotType.FEATURE_IMPORTANCE, "A")


class TestStaticCatalog:
    def test_catalog_lists_everything(self, engine, explainer_a, alice_batch):
        arena = StaticArena(engine=engine)
        arena.register_model(explainer_a).register_observations(alice_batch)
        catalog = arena.catalog()

        assert catalog["version"] == "1.0.0"
        assert catalog["models"] == ["A"]
        assert catalog["observations"] == ["Alice"]
        assert catalog["variables"] == ["age", "income"]
        assert len(catalog["data"]) == len(arena.artifacts)
        assert catalog["data"][0]["plotType"] == "FeatureImportance"
        assert "availablePlots" not in catalog

    def test_summary(self, engine, explainer_a, alice_batch):
        arena = StaticArena(engine=engine)
        arena.register_model(explainer_a).register_observations(alice_batch)
        text = str(arena)
        assert "Static Arena Summary" in text
        assert "Models: A" in text
        assert f"Plots count: {len(arena.artifacts)}" in text


class TestModelInputs:
    def test_sklearn_model_with_target_in_data(self, engine, sklearn_explainer, alice_batch):
        arena = StaticArena(engine=engine)
        arena.register_model(sklearn_explainer).register_observations(alice_batch)

        assert (PlotType.FEATURE_IMPORTANCE, "A", None, None) in keys(arena)
        assert (PlotType.BREAKDOWN, "A", "Alice", None) in keys(arena)
        assert (PlotType.CETERIS_PARIBUS, "A", "Alice", "income") in keys(arena)

    def test_preparation_failure_reported_and_cascade_continues(
        self, engine, explainer_a, empty_explainer, two_rows
    ):
        arena = StaticArena(engine=engine).register_model(explainer_a)
        arena.register_observations(two_rows)
        before = arena.artifacts

        with pytest.raises(CascadeError) as exc_info:
            arena.register_model(empty_explainer)

        failures = {(m, o) for m, o, _ in exc_info.value.failures}
        assert {("E", "r1"), ("E", "r2")} <= failures
        assert arena.artifacts[: len(before)] == before
        assert "E" in arena.explainers
