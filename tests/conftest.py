"""Shared fixtures: a tiny linear model, explainers and observation batches."""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd
import pytest
from sklearn.linear_model import LinearRegression

from modelarena import ComputationEngine, ComputationSettings, explain
from modelarena.analysis.computers import DEFAULT_COMPUTERS
from modelarena.explainer import Explainer
from modelarena.types import PlotType


class LinearModel:
    """Prediction = intercept + sum(coef * column), ignoring other columns."""

    def __init__(self, coefficients: dict[str, float], intercept: float = 0.0):
        self.coefficients = coefficients
        self.intercept = intercept

    def predict(self, data: pd.DataFrame) -> np.ndarray:
        prediction = np.full(len(data), self.intercept, dtype=float)
        for column, coef in self.coefficients.items():
            prediction += coef * data[column].to_numpy(dtype=float)
        return prediction


class RecordingComputer:
    """Wraps a computer and records the arguments of every call."""

    def __init__(self, inner: Any):
        self.inner = inner
        self.calls: list[dict[str, Any]] = []

    @property
    def plot_type(self) -> PlotType:
        return self.inner.plot_type

    def compute(self, explainer, observation, variables, variable, settings):
        self.calls.append(
            {
                "model": explainer.label,
                "observation": None if observation is None else str(observation.index[0]),
                "variables": list(variables),
                "variable": variable,
            }
        )
        return self.inner.compute(explainer, observation, variables, variable, settings)


FAST_SETTINGS = ComputationSettings(grid_points=5, sample_size=50, permutations=2)


@pytest.fixture
def training_data() -> pd.DataFrame:
    rng = np.random.default_rng(7)
    age = rng.integers(18, 70, size=60).astype(float)
    income = rng.normal(50000, 15000, size=60)
    y = 0.5 * age + 0.001 * income + rng.normal(0, 1, size=60)
    return pd.DataFrame({"age": age, "income": income, "y": y})


@pytest.fixture
def model_a() -> LinearModel:
    return LinearModel({"age": 0.5, "income": 0.001})


@pytest.fixture
def explainer_a(model_a, training_data):
    return explain(model_a, training_data, training_data["y"], label="A")


@pytest.fixture
def explainer_b(training_data):
    return explain(LinearModel({"age": 1.0}), training_data, training_data["y"], label="B")


@pytest.fixture
def sklearn_explainer(training_data):
    """Explainer for a scikit-learn model fitted on the predictors only."""
    model = LinearRegression().fit(training_data[["age", "income"]], training_data["y"])
    return explain(model, training_data, training_data["y"], label="A")


@pytest.fixture
def empty_explainer() -> Explainer:
    """Explainer over a zero-row frame, built directly since explain() rejects it."""
    return Explainer(
        label="E",
        model=None,
        data=pd.DataFrame({"age": pd.Series(dtype=float), "y": pd.Series(dtype=float)}),
        y=np.array([], dtype=float),
        predict_function=lambda m, d: np.zeros(len(d)),
        target_column="y",
    )


@pytest.fixture
def alice_batch() -> pd.DataFrame:
    return pd.DataFrame({"age": [30.0], "income": [50000.0], "y": [1.0]}, index=["Alice"])


@pytest.fixture
def two_rows() -> pd.DataFrame:
    return pd.DataFrame(
        {"age": [25.0, 61.0], "income": [42000.0, 81000.0]},
        index=["r1", "r2"],
    )


@pytest.fixture
def engine() -> ComputationEngine:
    return ComputationEngine(settings=FAST_SETTINGS)


@pytest.fixture
def recording_engine() -> tuple[ComputationEngine, dict[PlotType, RecordingComputer]]:
    """Engine whose computers record every call, keyed by plot kind."""
    recorders = {c.plot_type: RecordingComputer(c()) for c in DEFAULT_COMPUTERS}
    return ComputationEngine(settings=FAST_SETTINGS, computers=list(recorders.values())), recorders
