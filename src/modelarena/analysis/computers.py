"""Default computers, one per plot kind.

Each adapts a library function to the ArtifactComputer protocol.
"""

from __future__ import annotations

from typing import Any

import pandas as pd

from modelarena.analysis.library import (
    accumulated_dependence,
    break_down,
    ceteris_paribus,
    feature_importance,
    partial_dependence,
    shap_values,
)
from modelarena.analysis.protocols import ComputationSettings
from modelarena.explainer import Explainer
from modelarena.types import PlotType


class FeatureImportanceComputer:
    """Permutation importance over all of the model's variables."""

    plot_type = PlotType.FEATURE_IMPORTANCE

    def compute(
        self,
        explainer: Explainer,
        observation: pd.DataFrame | None,
        variables: list[str],
        variable: str | None,
        settings: ComputationSettings,
    ) -> dict[str, Any]:
        return feature_importance(
            explainer,
            variables,
            settings.rng(),
            sample_size=settings.sample_size,
            permutations=settings.permutations,
        )


class PartialDependenceComputer:
    plot_type = PlotType.PARTIAL_DEPENDENCE

    def compute(
        self,
        explainer: Explainer,
        observation: pd.DataFrame | None,
        variables: list[str],
        variable: str | None,
        settings: ComputationSettings,
    ) -> dict[str, Any]:
        return partial_dependence(
            explainer,
            variable,  # type: ignore[arg-type]
            settings.rng(),
            grid_points=settings.grid_points,
            sample_size=settings.sample_size,
        )


class AccumulatedDependenceComputer:
    plot_type = PlotType.ACCUMULATED_DEPENDENCE

    def compute(
        self,
        explainer: Explainer,
        observation: pd.DataFrame | None,
        variables: list[str],
        variable: str | None,
        settings: ComputationSettings,
    ) -> dict[str, Any]:
        return accumulated_dependence(
            explainer,
            variable,  # type: ignore[arg-type]
            settings.rng(),
            grid_points=settings.grid_points,
            sample_size=settings.sample_size,
        )


class BreakdownComputer:
    plot_type = PlotType.BREAKDOWN

    def compute(
        self,
        explainer: Explainer,
        observation: pd.DataFrame | None,
        variables: list[str],
        variable: str | None,
        settings: ComputationSettings,
    ) -> dict[str, Any]:
        return break_down(
            explainer,
            observation,  # type: ignore[arg-type]
            variables,
            settings.rng(),
            sample_size=settings.sample_size,
        )


class ShapValuesComputer:
    plot_type = PlotType.SHAP_VALUES

    def compute(
        self,
        explainer: Explainer,
        observation: pd.DataFrame | None,
        variables: list[str],
        variable: str | None,
        settings: ComputationSettings,
    ) -> dict[str, Any]:
        return shap_values(
            explainer,
            observation,  # type: ignore[arg-type]
            variables,
            settings.rng(),
            sample_size=settings.sample_size,
            permutations=settings.permutations,
        )


class CeterisParibusComputer:
    plot_type = PlotType.CETERIS_PARIBUS

    def compute(
        self,
        explainer: Explainer,
        observation: pd.DataFrame | None,
        variables: list[str],
        variable: str | None,
        settings: ComputationSettings,
    ) -> dict[str, Any]:
        return ceteris_paribus(
            explainer,
            observation,  # type: ignore[arg-type]
            variable,  # type: ignore[arg-type]
            variables,
            grid_points=settings.grid_points,
        )


DEFAULT_COMPUTERS = (
    FeatureImportanceComputer,
    PartialDependenceComputer,
    AccumulatedDependenceComputer,
    BreakdownComputer,
    ShapValuesComputer,
    CeterisParibusComputer,
)
