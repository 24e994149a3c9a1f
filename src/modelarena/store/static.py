"""Static arena: every plot is computed when its inputs are registered."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from typing import Any

import pandas as pd
import tqdm.auto as tqdm

from modelarena.analysis import ComputationEngine, shared_variables
from modelarena.errors import ArtifactNotFoundError, CascadeError, ComputationError
from modelarena.explainer import Explainer
from modelarena.store.base import Arena, ProgressCallback
from modelarena.types import (
    MODEL_PLOTS,
    OBSERVATION_PLOTS,
    OBSERVATION_VARIABLE_PLOTS,
    VARIABLE_PLOTS,
    Artifact,
    ArtifactKey,
    PlotType,
)

LOG = logging.getLogger(__name__)

# One unit of cascade work: a model alone (row id None) or a (model, row) pair
CascadeStep = tuple[Explainer, str | None]


class StaticArena(Arena):
    """Arena that precomputes its whole catalog.

    Each registration runs a cascade covering exactly the new pairs:
    a new model gets its model-level plots plus local plots for every
    registered observation; a new batch gets local plots for every
    registered model. Pairs covered by an earlier registration are never
    recomputed, so the final artifact set does not depend on the order
    models and observations were added in.

    A failed computation abandons only its own step; the other steps still
    run, their artifacts are kept, and the registration then raises
    CascadeError listing what is missing. The registration itself stays.
    """

    live = False

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._artifacts: list[Artifact] = []
        self._index: dict[ArtifactKey, Artifact] = {}

    @property
    def artifacts(self) -> tuple[Artifact, ...]:
        """All artifacts in the order they were produced."""
        return tuple(self._artifacts)

    def _register_model(
        self, explainer: Explainer, progress_callback: ProgressCallback | None
    ) -> None:
        self.explainers.register(explainer)
        LOG.info("Registered model '%s' with variables %s", explainer.label, explainer.variables)

        steps: list[CascadeStep] = [(explainer, None)]
        steps.extend((explainer, row_id) for row_id in self.observations.row_ids())
        self._run_cascade(steps, f"Explaining {explainer.label}", progress_callback)

    def _register_observations(
        self, observations: pd.DataFrame, progress_callback: ProgressCallback | None
    ) -> None:
        batch = self.observations.register(observations)
        LOG.info("Registered %d observations", len(batch))

        steps: list[CascadeStep] = [
            (explainer, row_id) for explainer in self.explainers.all() for row_id in batch.index
        ]
        self._run_cascade(steps, "Explaining observations", progress_callback)

    def _run_cascade(
        self,
        steps: list[CascadeStep],
        description: str,
        progress_callback: ProgressCallback | None,
    ) -> None:
        """Compute and append the artifacts of every step.

        A step's artifacts are appended only once all of them succeeded.
        """
        failures: list[tuple[str, str | None, str]] = []
        total = len(steps)

        for i, (explainer, row_id) in enumerate(tqdm.tqdm(steps, desc=description, disable=None)):
            if progress_callback:
                progress_callback(i / total, f"{description} ({i + 1}/{total})")
            try:
                produced = list(self._step_artifacts(explainer, row_id))
            except ComputationError as exc:
                LOG.warning(
                    "Abandoned cascade step model=%s observation=%s: %s",
                    explainer.label,
                    row_id,
                    exc,
                    exc_info=exc,
                )
                failures.append((explainer.label, row_id, str(exc)))
                continue
            for artifact in produced:
                self._append(artifact)

        if progress_callback:
            progress_callback(1.0, f"{description} complete")

        LOG.info(
            "Cascade finished: %d steps, %d failed, %d artifacts stored",
            total,
            len(failures),
            len(self._artifacts),
        )
        if failures:
            raise CascadeError(f"{len(failures)} of {total} cascade steps failed", failures)

    def _step_artifacts(self, explainer: Explainer, row_id: str | None) -> Iterator[Artifact]:
        engine = self.engine

        if row_id is None:
            for plot_type in _supported(engine, MODEL_PLOTS):
                yield engine.compute(plot_type, explainer)
            for plot_type in _supported(engine, VARIABLE_PLOTS):
                for variable in explainer.variables:
                    yield engine.compute(plot_type, explainer, variable=variable)
            return

        row = self.observations.row(row_id)
        for plot_type in _supported(engine, OBSERVATION_PLOTS):
            yield engine.compute(plot_type, explainer, row)
        for plot_type in _supported(engine, OBSERVATION_VARIABLE_PLOTS):
            for variable in shared_variables(explainer, row):
                yield engine.compute(plot_type, explainer, row, variable)

    def _append(self, artifact: Artifact) -> None:
        self._artifacts.append(artifact)
        self._index[artifact.key] = artifact

    def _resolve(
        self,
        plot_type: PlotType,
        explainer: Explainer,
        row: pd.DataFrame | None,
        variable: str | None,
    ) -> Artifact:
        observation = str(row.index[0]) if row is not None else None
        key = ArtifactKey(plot_type, explainer.label, observation, variable)
        artifact = self._index.get(key)
        if artifact is None:
            raise ArtifactNotFoundError(f"No stored artifact for {key}")
        return artifact

    def catalog_extras(self) -> dict[str, Any]:
        return {"data": [artifact.to_dict() for artifact in self._artifacts]}


def _supported(engine: ComputationEngine, plot_types: tuple[PlotType, ...]) -> list[PlotType]:
    return [plot_type for plot_type in plot_types if engine.supports(plot_type)]
