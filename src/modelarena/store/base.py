"""Arena interface shared by the static and live stores."""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Callable
from typing import Any, ClassVar

import pandas as pd

from modelarena.analysis import ComputationEngine
from modelarena.errors import (
    ArenaQueryError,
    ModelNotFoundError,
    ObservationNotFoundError,
    VariableNotFoundError,
)
from modelarena.explainer import Explainer
from modelarena.registry import ExplainerRegistry, ObservationRegistry
from modelarena.store.catalog import build_catalog
from modelarena.store.locking import ReadWriteLock
from modelarena.types import Artifact, PlotType


ProgressCallback = Callable[[float, str], None]


class Arena(ABC):
    """Registries of models and observations plus a way to serve plots.

    Registration takes the arena's lock exclusively for its whole duration;
    resolve() and catalog() take it shared and never change state.
    """

    live: ClassVar[bool]

    def __init__(self, engine: ComputationEngine | None = None):
        """Initialize an empty arena.

        Args:
            engine: Computation engine. If None, uses the default engine.
        """
        self.engine = engine or ComputationEngine()
        self.explainers = ExplainerRegistry()
        self.observations = ObservationRegistry()
        self._lock = ReadWriteLock()

    # ------------------------------------------------------------------
    # Registration
    # ------------------------------------------------------------------

    def register_model(
        self,
        explainer: Explainer,
        progress_callback: ProgressCallback | None = None,
    ) -> Arena:
        """Add a model to the arena.

        Args:
            explainer: Explainer built with modelarena.explain
            progress_callback: Optional callback(progress, description)
                reporting cascade progress as a float from 0.0 to 1.0.
                It runs while the arena is locked for writing and must not
                call back into the arena (catalog, summary, resolve or
                register), or it will deadlock.

        Returns:
            Self for method chaining

        Raises:
            InvalidExplainerError: If explainer is not an Explainer
            DuplicateLabelError: If the label is already registered
        """
        with self._lock.write():
            self._register_model(explainer, progress_callback)
        return self

    def register_observations(
        self,
        observations: pd.DataFrame,
        progress_callback: ProgressCallback | None = None,
    ) -> Arena:
        """Add a batch of observations; row ids are taken from the index.

        Args:
            observations: DataFrame of rows to explain
            progress_callback: Optional callback(progress, description), as
                for register_model. It runs under the write lock and must not
                call back into the arena.

        Returns:
            Self for method chaining

        Raises:
            InvalidBatchError: If observations is not a usable DataFrame
            DuplicateRowIdError: If a row id is already registered
        """
        with self._lock.write():
            self._register_observations(observations, progress_callback)
        return self

    @abstractmethod
    def _register_model(
        self, explainer: Explainer, progress_callback: ProgressCallback | None
    ) -> None: ...

    @abstractmethod
    def _register_observations(
        self, observations: pd.DataFrame, progress_callback: ProgressCallback | None
    ) -> None: ...

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def resolve(
        self,
        plot_type: PlotType | str,
        model: str | None,
        observation: str | None = None,
        variable: str | None = None,
    ) -> Artifact:
        """Return the artifact for a plot request.

        Parameters a plot kind is not keyed by are ignored.

        Raises:
            ArenaQueryError: If the plot kind is unknown, or a subclass
                (ModelNotFoundError, ObservationNotFoundError,
                VariableNotFoundError, ArtifactNotFoundError) for a miss
            ComputationError: If computing the artifact failed
        """
        with self._lock.read():
            kind = _as_plot_type(plot_type)
            explainer, row, variable = self._validate_query(kind, model, observation, variable)
            return self._resolve(kind, explainer, row, variable)

    @abstractmethod
    def _resolve(
        self,
        plot_type: PlotType,
        explainer: Explainer,
        row: pd.DataFrame | None,
        variable: str | None,
    ) -> Artifact: ...

    def catalog(self) -> dict[str, Any]:
        """Describe the current state. Built fresh on every call."""
        with self._lock.read():
            return build_catalog(self)

    @abstractmethod
    def catalog_extras(self) -> dict[str, Any]:
        """Variant-specific catalog fields."""

    def summary(self) -> str:
        """Human-readable overview of models, observations and variables."""
        catalog = self.catalog()
        title = "Live Arena Summary" if self.live else "Static Arena Summary"
        lines = [
            f"===== {title} =====",
            f"Models: {', '.join(catalog['models'])}",
            f"Observations: {', '.join(catalog['observations'])}",
            f"Variables: {', '.join(catalog['variables'])}",
        ]
        if "data" in catalog:
            lines.append(f"Plots count: {len(catalog['data'])}")
        return "\n".join(lines)

    def __str__(self) -> str:
        return self.summary()

    def _validate_query(
        self,
        plot_type: PlotType,
        model: str | None,
        observation: str | None,
        variable: str | None,
    ) -> tuple[Explainer, pd.DataFrame | None, str | None]:
        """Look up and check every parameter the plot kind is keyed by."""
        explainer = self.explainers.lookup(model) if model else None
        if explainer is None:
            raise ModelNotFoundError(f"Unknown model '{model}'")

        row = None
        if plot_type.needs_observation:
            row = self.observations.row(observation) if observation else None
            if row is None:
                raise ObservationNotFoundError(f"Unknown observation '{observation}'")

        if not plot_type.needs_variable:
            return explainer, row, None

        if variable not in explainer.variables:
            raise VariableNotFoundError(
                f"Variable '{variable}' is not a variable of model '{explainer.label}'"
            )
        if row is not None and variable not in row.columns:
            raise VariableNotFoundError(
                f"Variable '{variable}' is not a column of observation '{observation}'"
            )
        return explainer, row, variable


def _as_plot_type(plot_type: PlotType | str) -> PlotType:
    if isinstance(plot_type, PlotType):
        return plot_type
    parsed = PlotType.parse(plot_type)
    if parsed is None:
        raise ArenaQueryError(f"Unknown plot type '{plot_type}'")
    return parsed
