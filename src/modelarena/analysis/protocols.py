"""Protocol definitions for artifact computation."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol, runtime_checkable

import numpy as np
import pandas as pd

from modelarena.explainer import Explainer
from modelarena.types import PlotType


@dataclass(frozen=True)
class ComputationSettings:
    """Parameters shared by all computations of one engine.

    Attributes:
        grid_points: Number of grid values for dependence and ceteris
            paribus profiles.
        sample_size: Rows drawn from the explainer's data for averaged
            computations. None uses all rows.
        permutations: Rounds of shuffling for feature importance and
            random orders for Shapley values.
        random_state: Seed. Each computation starts from a fresh generator,
            so an artifact does not depend on what was computed before it.
    """

    grid_points: int = 101
    sample_size: int | None = 200
    permutations: int = 10
    random_state: int = 0

    def rng(self) -> np.random.Generator:
        return np.random.default_rng(self.random_state)


@runtime_checkable
class ArtifactComputer(Protocol):
    """Protocol for the computation behind one plot kind.

    Computers are pure: they read the explainer and observation and return
    the plot payload without side effects.
    """

    @property
    def plot_type(self) -> PlotType:
        """Plot kind this computer produces."""
        ...

    def compute(
        self,
        explainer: Explainer,
        observation: pd.DataFrame | None,
        variables: list[str],
        variable: str | None,
        settings: ComputationSettings,
    ) -> dict[str, Any]:
        """
        Compute one plot payload.

        Args:
            explainer: Model to explain
            observation: One-row frame with all of the explainer's data
                columns, or None for model-level plots
            variables: Variables the plot may use. For observation-level
                plots, only those present in both the model and observation.
            variable: The swept variable for per-variable plots, else None
            settings: Engine-wide computation parameters

        Returns:
            JSON-ready payload dict
        """
        ...
