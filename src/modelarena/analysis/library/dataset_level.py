"""Model-level explanations: feature importance and dependence profiles."""

from __future__ import annotations

from typing import Any

import numpy as np
import pandas as pd

from modelarena.analysis.library.common import (
    fill_values,
    is_numeric,
    rmse,
    sample_rows,
    to_native,
    variable_grid,
)
from modelarena.explainer import Explainer


def feature_importance(
    explainer: Explainer,
    variables: list[str],
    rng: np.random.Generator,
    sample_size: int | None = None,
    permutations: int = 10,
) -> dict[str, Any]:
    """Permutation importance measured as RMSE after shuffling a variable.

    Each variable is shuffled ``permutations`` times; the reported loss is
    the mean over rounds. ``baseline`` is the loss with every variable
    shuffled at once.

    Returns:
        Dict with 'base' (unshuffled loss), 'baseline', and per-variable
        'dropout_loss', ordered from most to least important.
    """
    data, y = sample_rows(explainer, sample_size, rng)
    base_loss = rmse(y, explainer.predict(data))

    losses: dict[str, list[float]] = {v: [] for v in variables}
    baseline_losses = []
    for _ in range(max(permutations, 1)):
        shuffled_all = data.copy()
        for variable in variables:
            shuffled = data.copy()
            shuffled[variable] = rng.permutation(data[variable].to_numpy())
            losses[variable].append(rmse(y, explainer.predict(shuffled)))
            shuffled_all[variable] = shuffled[variable]
        baseline_losses.append(rmse(y, explainer.predict(shuffled_all)))

    means = {v: float(np.mean(v_losses)) for v, v_losses in losses.items()}
    ordered = sorted(variables, key=lambda v: means[v], reverse=True)

    return to_native(
        {
            "base": base_loss,
            "baseline": float(np.mean(baseline_losses)),
            "variables": ordered,
            "dropout_loss": [means[v] for v in ordered],
            "min": [min(losses[v]) for v in ordered],
            "max": [max(losses[v]) for v in ordered],
        }
    )


def partial_dependence(
    explainer: Explainer,
    variable: str,
    rng: np.random.Generator,
    grid_points: int = 101,
    sample_size: int | None = None,
) -> dict[str, Any]:
    """Mean prediction with ``variable`` forced to each grid value."""
    data, _ = sample_rows(explainer, sample_size, rng)
    grid = variable_grid(explainer.data[variable], grid_points)
    means = _sweep_means(explainer, data, variable, grid)

    return to_native(
        {
            "variable": variable,
            "numerical": is_numeric(explainer.data[variable]),
            "x": grid,
            "y": means,
            "observationsCount": len(data),
        }
    )


def accumulated_dependence(
    explainer: Explainer,
    variable: str,
    rng: np.random.Generator,
    grid_points: int = 101,
    sample_size: int | None = None,
) -> dict[str, Any]:
    """Accumulated local effects of ``variable``.

    Numeric variables are split into quantile intervals. Each row's local
    effect is the prediction change between its interval's edges; interval
    means are accumulated, centered, and shifted by the mean prediction.
    Categorical variables have no natural interval order and fall back to
    the partial dependence of each level.
    """
    data, _ = sample_rows(explainer, sample_size, rng)
    column = explainer.data[variable]

    if not is_numeric(column):
        grid = variable_grid(column, grid_points)
        means = _sweep_means(explainer, data, variable, grid)
        return to_native(
            {
                "variable": variable,
                "numerical": False,
                "x": grid,
                "y": means,
                "observationsCount": len(data),
            }
        )

    edges = np.asarray(variable_grid(column, grid_points), dtype=float)
    mean_prediction = float(np.mean(explainer.predict(data)))
    if len(edges) < 2:
        return to_native(
            {
                "variable": variable,
                "numerical": True,
                "x": edges,
                "y": [mean_prediction] * len(edges),
                "observationsCount": len(data),
            }
        )

    values = data[variable].to_numpy(dtype=float)
    present = ~np.isnan(values)
    rows = data[present]
    bins = np.clip(np.searchsorted(edges, values[present], side="left"), 1, len(edges) - 1)

    lower = rows.copy()
    lower[variable] = edges[bins - 1]
    upper = rows.copy()
    upper[variable] = edges[bins]
    differences = explainer.predict(upper) - explainer.predict(lower)

    n_bins = len(edges) - 1
    counts = np.bincount(bins - 1, minlength=n_bins)
    sums = np.bincount(bins - 1, weights=differences, minlength=n_bins)
    effects = np.divide(sums, counts, out=np.zeros(n_bins), where=counts > 0)
    accumulated = np.concatenate([[0.0], np.cumsum(effects)])

    # Center on the count-weighted mean of interval midpoints
    midpoints = (accumulated[:-1] + accumulated[1:]) / 2
    total = counts.sum()
    offset = float(np.dot(midpoints, counts) / total) if total else 0.0

    return to_native(
        {
            "variable": variable,
            "numerical": True,
            "x": edges,
            "y": accumulated - offset + mean_prediction,
            "observationsCount": int(total),
        }
    )


def _sweep_means(
    explainer: Explainer,
    data: pd.DataFrame,
    variable: str,
    grid: list[Any],
) -> list[float]:
    """Mean prediction over ``data`` for each forced value of ``variable``."""
    if not grid:
        return []
    expanded = pd.concat([data] * len(grid), ignore_index=True)
    expanded[variable] = fill_values(data[variable], grid, repeats=len(data))
    predictions = explainer.predict(expanded).reshape(len(grid), len(data))
    return predictions.mean(axis=1).tolist()
