"""Computation engine producing artifacts from explainers."""

from __future__ import annotations

import logging

import pandas as pd

from modelarena.analysis.computers import DEFAULT_COMPUTERS
from modelarena.analysis.library import complete_observation
from modelarena.analysis.protocols import ArtifactComputer, ComputationSettings
from modelarena.errors import ComputationError
from modelarena.explainer import Explainer
from modelarena.types import Artifact, PlotType

LOG = logging.getLogger(__name__)


def shared_variables(explainer: Explainer, observation: pd.DataFrame) -> list[str]:
    """Explainer variables the observation provides, in the explainer's order."""
    columns = set(observation.columns)
    return [v for v in explainer.variables if v in columns]


class ComputationEngine:
    """Maps each plot kind to the computer that produces it.

    Arenas call compute() with already validated arguments. Computers can be
    swapped per plot kind with register().
    """

    def __init__(
        self,
        settings: ComputationSettings | None = None,
        computers: list[ArtifactComputer] | None = None,
    ):
        """Initialize the engine.

        Args:
            settings: Computation parameters. If None, uses defaults.
            computers: Computers to use. If None, uses the built-in
                computer for every plot kind.
        """
        self.settings = settings or ComputationSettings()
        self._computers: dict[PlotType, ArtifactComputer] = {}
        for computer in computers if computers is not None else [c() for c in DEFAULT_COMPUTERS]:
            self.register(computer)

    def register(self, computer: ArtifactComputer) -> ComputationEngine:
        """Use ``computer`` for its plot kind, replacing any previous one.

        Returns:
            Self for method chaining
        """
        if not isinstance(computer, ArtifactComputer):
            raise TypeError(f"{computer!r} does not implement ArtifactComputer")
        self._computers[computer.plot_type] = computer
        return self

    def supports(self, plot_type: PlotType) -> bool:
        return plot_type in self._computers

    def compute(
        self,
        plot_type: PlotType,
        explainer: Explainer,
        observation: pd.DataFrame | None = None,
        variable: str | None = None,
    ) -> Artifact:
        """Compute one artifact.

        Args:
            plot_type: Kind of plot
            explainer: Model to explain
            observation: Single-row frame indexed by its row id, for
                observation-level plots
            variable: Swept variable, for per-variable plots

        Returns:
            The computed Artifact

        Raises:
            ComputationError: If no computer handles the plot kind or the
                computation itself fails
        """
        computer = self._computers.get(plot_type)
        if computer is None:
            raise ComputationError(f"No computer registered for {plot_type.value}")

        row_id = None
        row = None
        if observation is not None:
            variables = shared_variables(explainer, observation)
            row_id = str(observation.index[0])
        else:
            variables = list(explainer.variables)

        try:
            if observation is not None:
                row = complete_observation(explainer, observation, variables)
            payload = computer.compute(explainer, row, variables, variable, self.settings)
        except Exception as exc:
            raise ComputationError(
                f"{plot_type.value} failed for model '{explainer.label}'"
                + (f", observation '{row_id}'" if row_id is not None else "")
                + (f", variable '{variable}'" if variable is not None else "")
                + f": {exc}"
            ) from exc

        LOG.debug(
            "Computed %s model=%s observation=%s variable=%s",
            plot_type.value,
            explainer.label,
            row_id,
            variable,
        )
        return Artifact(
            plot_type=plot_type,
            model=explainer.label,
            observation=row_id,
            variable=variable,
            payload=payload,
        )
