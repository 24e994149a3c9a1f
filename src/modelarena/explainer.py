"""Explainer: a fitted model bundled with the data it is explained against.

The outcome column is resolved once, when the explainer is built, and
excluded from the explainer's variables. Resolution order:

1. an explicit ``target=`` column name;
2. ``y`` is a Series named after a data column that holds the same values;
3. the first data column (in column order) whose values are identical to ``y``.

Only the resolved column is excluded. Another column that happens to hold
the same values as the target stays a predictor.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import numpy as np
import pandas as pd

from modelarena.errors import InvalidExplainerError

PredictFunction = Callable[[Any, pd.DataFrame], Any]


def default_predict_function(model: Any) -> PredictFunction:
    """Pick a prediction function for a scikit-learn style model.

    Classifiers with ``predict_proba`` are explained through the
    probability of the positive class; everything else through ``predict``.
    """
    if hasattr(model, "predict_proba"):
        return lambda m, data: np.asarray(m.predict_proba(data))[:, -1]
    if hasattr(model, "predict"):
        return lambda m, data: m.predict(data)
    raise InvalidExplainerError(
        f"Model {type(model).__name__} has no predict method; pass predict_function"
    )


@dataclass(frozen=True, eq=False)
class Explainer:
    """A registered model with its data, target and prediction function.

    Attributes:
        label: Unique model identifier inside an arena.
        model: The fitted model object, opaque to the arena.
        data: Training data (rows = samples).
        y: Target vector aligned with ``data``.
        predict_function: Callable(model, data) -> one prediction per row.
        target_column: Data column holding the target, or None.
    """

    label: str
    model: Any
    data: pd.DataFrame
    y: np.ndarray
    predict_function: PredictFunction
    target_column: str | None = None
    variables: tuple[str, ...] = field(init=False)

    def __post_init__(self) -> None:
        variables = tuple(str(c) for c in self.data.columns if c != self.target_column)
        object.__setattr__(self, "variables", variables)

    def predict(self, data: pd.DataFrame) -> np.ndarray:
        """Predict for every row of ``data`` as a float array.

        The target column is dropped first; the model only sees predictors.
        """
        if self.target_column is not None and self.target_column in data.columns:
            data = data.drop(columns=self.target_column)
        predictions = np.asarray(self.predict_function(self.model, data), dtype=float)
        return predictions.reshape(-1)

    def __repr__(self) -> str:
        return (
            f"Explainer(label={self.label!r}, model={type(self.model).__name__}, "
            f"rows={len(self.data)}, variables={list(self.variables)})"
        )


def explain(
    model: Any,
    data: pd.DataFrame,
    y: Any,
    label: str | None = None,
    predict_function: PredictFunction | None = None,
    target: str | None = None,
) -> Explainer:
    """Wrap a fitted model into an Explainer.

    Args:
        model: Fitted model.
        data: Data the model is explained against. May include the target.
        y: Target values, one per row of ``data``.
        label: Model identifier. Defaults to the model class name.
        predict_function: Callable(model, data). Defaults to
            ``predict_proba[:, -1]`` or ``predict``.
        target: Name of the target column in ``data``, when known.

    Returns:
        An immutable Explainer.

    Raises:
        InvalidExplainerError: If the arguments do not form a usable explainer.
    """
    if not isinstance(data, pd.DataFrame):
        raise InvalidExplainerError("Explainer data must be a pandas DataFrame")
    if data.columns.has_duplicates:
        raise InvalidExplainerError("Explainer data has duplicate column names")
    if data.empty:
        raise InvalidExplainerError("Explainer data has no rows or no columns")

    y_array = np.asarray(y)
    if y_array.ndim != 1 or len(y_array) != len(data):
        raise InvalidExplainerError(
            f"Target must be a vector of length {len(data)}, got shape {y_array.shape}"
        )

    if predict_function is None:
        predict_function = default_predict_function(model)
    elif not callable(predict_function):
        raise InvalidExplainerError("predict_function must be callable")

    if target is not None and target not in data.columns:
        raise InvalidExplainerError(f"Target column '{target}' not in data")

    frozen_data = data.copy()
    frozen_data.columns = [str(c) for c in frozen_data.columns]
    frozen_y = y_array.copy()
    frozen_y.flags.writeable = False

    return Explainer(
        label=str(label) if label is not None else type(model).__name__,
        model=model,
        data=frozen_data,
        y=frozen_y,
        predict_function=predict_function,
        target_column=str(target) if target is not None else find_target_column(data, y),
    )


def find_target_column(data: pd.DataFrame, y: Any) -> str | None:
    """Find the single column of ``data`` that holds the target.

    A Series target named after a matching column wins; otherwise the first
    column whose values are identical to ``y``.
    """
    name = getattr(y, "name", None)
    if isinstance(y, pd.Series) and name in data.columns and _same_values(data[name], y):
        return str(name)

    for column in data.columns:
        if _same_values(data[column], y):
            return str(column)
    return None


def _same_values(column: pd.Series, y: Any) -> bool:
    left = np.asarray(column)
    right = np.asarray(y)
    if left.shape != right.shape:
        return False
    try:
        return bool(np.array_equal(left, right, equal_nan=True))
    except TypeError:
        # equal_nan is unsupported for object arrays
        return bool(np.array_equal(left, right))
