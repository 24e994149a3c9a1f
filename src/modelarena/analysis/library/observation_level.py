"""Instance-level explanations: break down, Shapley values, ceteris paribus.

``observation`` arguments are one-row frames built by
``complete_observation`` and carrying all of the explainer's data columns.
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Any

import numpy as np
import pandas as pd

from modelarena.analysis.library.common import (
    fill_values,
    is_numeric,
    sample_rows,
    to_native,
    variable_grid,
)
from modelarena.explainer import Explainer


def break_down(
    explainer: Explainer,
    observation: pd.DataFrame,
    variables: list[str],
    rng: np.random.Generator,
    sample_size: int | None = None,
) -> dict[str, Any]:
    """Sequential attribution of the prediction to variables.

    Variables are ordered by the absolute change in mean prediction when
    each one alone is fixed to the observation's value, then fixed one
    after another; each contribution is the resulting change in mean
    prediction.

    Returns:
        Dict with 'intercept' (mean prediction over data), ordered
        'variables', their 'variables_value', 'contribution', and the
        observation's 'prediction'.
    """
    data, _ = sample_rows(explainer, sample_size, rng)
    intercept = float(np.mean(explainer.predict(data)))

    impacts = {}
    for variable in variables:
        fixed = data.copy()
        fixed[variable] = fill_values(data[variable], [observation[variable].iloc[0]], len(data))
        impacts[variable] = abs(float(np.mean(explainer.predict(fixed))) - intercept)
    order = sorted(variables, key=lambda v: impacts[v], reverse=True)

    contributions = _sequential_contributions(explainer, data, observation, order, intercept)

    return to_native(
        {
            "intercept": intercept,
            "variables": order,
            "variables_value": [observation[v].iloc[0] for v in order],
            "contribution": contributions,
            "prediction": float(explainer.predict(observation)[0]),
        }
    )


def shap_values(
    explainer: Explainer,
    observation: pd.DataFrame,
    variables: list[str],
    rng: np.random.Generator,
    sample_size: int | None = None,
    permutations: int = 10,
) -> dict[str, Any]:
    """Shapley values approximated by averaging break downs over random orders.

    Returns:
        Dict with 'intercept', 'variables' ordered by absolute mean
        contribution, their 'variables_value', and per-variable 'mean',
        'min' and 'max' contributions across orders.
    """
    data, _ = sample_rows(explainer, sample_size, rng)
    intercept = float(np.mean(explainer.predict(data)))

    rounds: dict[str, list[float]] = {v: [] for v in variables}
    for _ in range(max(permutations, 1)):
        order = [variables[i] for i in rng.permutation(len(variables))]
        contributions = _sequential_contributions(explainer, data, observation, order, intercept)
        for variable, contribution in zip(order, contributions):
            rounds[variable].append(contribution)

    means = {v: float(np.mean(r)) if r else 0.0 for v, r in rounds.items()}
    ordered = sorted(variables, key=lambda v: abs(means[v]), reverse=True)

    return to_native(
        {
            "intercept": intercept,
            "variables": ordered,
            "variables_value": [observation[v].iloc[0] for v in ordered],
            "mean": [means[v] for v in ordered],
            "min": [min(rounds[v], default=0.0) for v in ordered],
            "max": [max(rounds[v], default=0.0) for v in ordered],
            "prediction": float(explainer.predict(observation)[0]),
        }
    )


def ceteris_paribus(
    explainer: Explainer,
    observation: pd.DataFrame,
    variable: str,
    variables: list[str],
    grid_points: int = 101,
) -> dict[str, Any]:
    """Prediction profile of the observation while only ``variable`` changes.

    For numeric variables the observation's own value is added to the grid.
    """
    column = explainer.data[variable]
    grid = variable_grid(column, grid_points)
    own_value = observation[variable].iloc[0]
    if is_numeric(column) and not pd.isna(own_value):
        grid = np.unique(np.append(np.asarray(grid, dtype=float), float(own_value))).tolist()

    if grid:
        profile = pd.concat([observation] * len(grid), ignore_index=True)
        profile[variable] = fill_values(column, grid)
        predictions = explainer.predict(profile).tolist()
    else:
        predictions = []

    return to_native(
        {
            "variable": variable,
            "numerical": is_numeric(column),
            "x": grid,
            "y": predictions,
            "observation": {v: observation[v].iloc[0] for v in variables},
            "prediction": float(explainer.predict(observation)[0]),
        }
    )


def _sequential_contributions(
    explainer: Explainer,
    data: pd.DataFrame,
    observation: pd.DataFrame,
    order: Sequence[str],
    intercept: float,
) -> list[float]:
    """Change in mean prediction as variables are fixed in ``order``."""
    current = data.copy()
    previous = intercept
    contributions = []
    for variable in order:
        current[variable] = fill_values(data[variable], [observation[variable].iloc[0]], len(data))
        mean_prediction = float(np.mean(explainer.predict(current)))
        contributions.append(mean_prediction - previous)
        previous = mean_prediction
    return contributions
