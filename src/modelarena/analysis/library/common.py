"""Shared helpers for plot computations: sampling, grids, JSON conversion."""

from __future__ import annotations

import math
from typing import Any

import numpy as np
import pandas as pd

from modelarena.explainer import Explainer


def is_numeric(column: pd.Series) -> bool:
    """True for numeric columns; booleans count as categorical."""
    return pd.api.types.is_numeric_dtype(column) and not pd.api.types.is_bool_dtype(column)


def variable_grid(column: pd.Series, grid_points: int) -> list[Any]:
    """Values a variable is swept over.

    Numeric columns use evenly spaced quantiles (deduplicated, ascending);
    categorical columns use their distinct levels in order of appearance.
    """
    values = column.dropna()
    if is_numeric(column):
        if values.empty:
            return []
        quantiles = np.linspace(0.0, 1.0, grid_points)
        return np.unique(np.quantile(values.to_numpy(dtype=float), quantiles)).tolist()
    return list(pd.unique(values))


def sample_rows(
    explainer: Explainer,
    sample_size: int | None,
    rng: np.random.Generator,
) -> tuple[pd.DataFrame, np.ndarray]:
    """Draw rows of the explainer's data with their target values."""
    n_rows = len(explainer.data)
    if sample_size is None or n_rows <= sample_size:
        return explainer.data, explainer.y
    picked = np.sort(rng.choice(n_rows, size=sample_size, replace=False))
    return explainer.data.iloc[picked], explainer.y[picked]


def complete_observation(
    explainer: Explainer,
    observation: pd.DataFrame,
    variables: list[str],
) -> pd.DataFrame:
    """Build a one-row frame with the explainer's columns.

    ``variables`` take the observation's values. Any other data column the
    observation does not provide is filled with the column's typical value
    (median for numeric columns, most frequent level otherwise) so the row
    can be passed to the prediction function.
    """
    row = explainer.data.iloc[[0]].copy()
    for column in explainer.data.columns:
        if column in variables:
            row[column] = observation[column].iloc[0]
        else:
            row[column] = typical_value(explainer.data[column])
    row.index = observation.index[:1]
    return row


def typical_value(column: pd.Series) -> Any:
    values = column.dropna()
    if values.empty:
        return column.iloc[0]
    if is_numeric(column):
        return values.median()
    return values.mode().iloc[0]


def rmse(y_true: np.ndarray, y_pred: np.ndarray) -> float:
    y_true = np.asarray(y_true, dtype=float)
    return float(np.sqrt(np.mean((y_true - y_pred) ** 2)))


def to_native(value: Any) -> Any:
    """Convert numpy/pandas values into JSON-ready Python values.

    Non-finite floats become None.
    """
    if isinstance(value, dict):
        return {str(k): to_native(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_native(v) for v in value]
    if isinstance(value, np.ndarray):
        return [to_native(v) for v in value.tolist()]
    if isinstance(value, pd.Timestamp):
        return value.isoformat()
    if isinstance(value, np.generic):
        value = value.item()
    if isinstance(value, float) and not math.isfinite(value):
        return None
    if value is pd.NA or value is pd.NaT:
        return None
    return value


def fill_values(template: pd.Series, values: list[Any], repeats: int = 1) -> Any:
    """Repeat grid values into a column compatible with ``template``.

    Each value is repeated ``repeats`` times in a row. Categorical columns
    keep their categories; numeric columns become float.
    """
    if isinstance(template.dtype, pd.CategoricalDtype):
        return pd.Categorical(
            np.repeat(np.asarray(values, dtype=object), repeats),
            categories=template.cat.categories,
        )
    dtype = float if is_numeric(template) else object
    return np.repeat(np.asarray(values, dtype=dtype), repeats)
