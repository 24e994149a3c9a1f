"""Type definitions for plots and artifacts."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, NamedTuple


class PlotCategory(Enum):
    """Level a plot describes the model at."""

    DATASET = "Dataset Level"
    OBSERVATION = "Observation Level"


class PlotType(Enum):
    """The fixed catalog of plot kinds.

    Values are the wire names used in URLs and catalog entries.
    """

    FEATURE_IMPORTANCE = "FeatureImportance"
    PARTIAL_DEPENDENCE = "PartialDependence"
    ACCUMULATED_DEPENDENCE = "AccumulatedDependence"
    BREAKDOWN = "Breakdown"
    SHAP_VALUES = "SHAPValues"
    CETERIS_PARIBUS = "CeterisParibus"

    @classmethod
    def parse(cls, name: str) -> PlotType | None:
        """Return the plot type with the given wire name, or None."""
        try:
            return cls(name)
        except ValueError:
            return None

    @property
    def spec(self) -> PlotSpec:
        return PLOT_SPECS[self]

    @property
    def needs_observation(self) -> bool:
        return "observation" in self.spec.required_params

    @property
    def needs_variable(self) -> bool:
        return "variable" in self.spec.required_params


@dataclass(frozen=True)
class PlotSpec:
    """Catalog entry describing one plot kind.

    Attributes:
        display_name: Human-readable name shown by clients.
        category: Dataset or observation level.
        required_params: Query parameters an artifact of this kind is keyed by.
    """

    display_name: str
    category: PlotCategory
    required_params: tuple[str, ...]

    def describe(self, plot_type: PlotType) -> dict[str, Any]:
        return {
            "name": self.display_name,
            "plotType": plot_type.value,
            "plotCategory": self.category.value,
            "requiredParams": list(self.required_params),
        }


PLOT_SPECS: dict[PlotType, PlotSpec] = {
    PlotType.BREAKDOWN: PlotSpec(
        "Break Down", PlotCategory.OBSERVATION, ("model", "observation")
    ),
    PlotType.CETERIS_PARIBUS: PlotSpec(
        "Ceteris Paribus", PlotCategory.OBSERVATION, ("model", "observation", "variable")
    ),
    PlotType.SHAP_VALUES: PlotSpec(
        "Shapley Values", PlotCategory.OBSERVATION, ("model", "observation")
    ),
    PlotType.PARTIAL_DEPENDENCE: PlotSpec(
        "Partial Dependence", PlotCategory.DATASET, ("model", "variable")
    ),
    PlotType.ACCUMULATED_DEPENDENCE: PlotSpec(
        "Accumulated Dependence", PlotCategory.DATASET, ("model", "variable")
    ),
    PlotType.FEATURE_IMPORTANCE: PlotSpec(
        "Variable Importance", PlotCategory.DATASET, ("model",)
    ),
}

# Plot kinds computed once per model, and once per (model, observation).
MODEL_PLOTS = (PlotType.FEATURE_IMPORTANCE,)
VARIABLE_PLOTS = (PlotType.PARTIAL_DEPENDENCE, PlotType.ACCUMULATED_DEPENDENCE)
OBSERVATION_PLOTS = (PlotType.BREAKDOWN, PlotType.SHAP_VALUES)
OBSERVATION_VARIABLE_PLOTS = (PlotType.CETERIS_PARIBUS,)


class ArtifactKey(NamedTuple):
    """Identity of an artifact."""

    plot_type: PlotType
    model: str
    observation: str | None = None
    variable: str | None = None


@dataclass(frozen=True)
class Artifact:
    """One computed plot.

    Attributes:
        plot_type: Kind of plot.
        model: Label of the explainer that produced it.
        observation: Row id for observation-level plots, else None.
        variable: Variable name for per-variable plots, else None.
        payload: JSON-ready plot data (native Python values only).
    """

    plot_type: PlotType
    model: str
    observation: str | None = None
    variable: str | None = None
    payload: dict[str, Any] = field(default_factory=dict, compare=False)

    @property
    def key(self) -> ArtifactKey:
        return ArtifactKey(self.plot_type, self.model, self.observation, self.variable)

    def params(self) -> dict[str, str]:
        params = {"model": self.model}
        if self.observation is not None:
            params["observation"] = self.observation
        if self.variable is not None:
            params["variable"] = self.variable
        return params

    def to_dict(self) -> dict[str, Any]:
        """Serialize for the static catalog."""
        return {
            "plotType": self.plot_type.value,
            "plotCategory": self.plot_type.spec.category.value,
            "params": self.params(),
            "plotData": self.payload,
        }
