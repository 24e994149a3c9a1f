"""Generic explanation functions built on numpy and pandas.

Every function takes an Explainer and returns a JSON-ready dict.
"""

from modelarena.analysis.library.common import (
    complete_observation,
    is_numeric,
    sample_rows,
    to_native,
    variable_grid,
)
from modelarena.analysis.library.dataset_level import (
    accumulated_dependence,
    feature_importance,
    partial_dependence,
)
from modelarena.analysis.library.observation_level import (
    break_down,
    ceteris_paribus,
    shap_values,
)

__all__ = [
    "accumulated_dependence",
    "break_down",
    "ceteris_paribus",
    "complete_observation",
    "feature_importance",
    "is_numeric",
    "partial_dependence",
    "sample_rows",
    "shap_values",
    "to_native",
    "variable_grid",
]
