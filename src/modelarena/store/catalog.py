"""Catalog describing everything an arena can currently serve."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from modelarena.types import PLOT_SPECS

if TYPE_CHECKING:
    from modelarena.analysis import ComputationEngine
    from modelarena.store.base import Arena

CATALOG_VERSION = "1.0.0"
API_NAME = "arenar_api"


def build_catalog(arena: Arena) -> dict[str, Any]:
    """Describe the arena's current state.

    Common fields: version, observations (row ids across batches),
    variables (union over models, targets excluded) and models (labels).
    Static arenas add their full artifact list under 'data'; live arenas
    add the plot kinds they can compute and their freshness timestamp.

    Callers hold the arena's read lock; Arena.catalog() does this.
    """
    catalog: dict[str, Any] = {
        "version": CATALOG_VERSION,
        "observations": arena.observations.row_ids(),
        "variables": arena.explainers.variables(),
        "models": arena.explainers.labels(),
    }
    catalog.update(arena.catalog_extras())
    return catalog


def available_plots(engine: ComputationEngine) -> list[dict[str, Any]]:
    """Catalog entries for every plot kind the engine can compute."""
    return [
        spec.describe(plot_type)
        for plot_type, spec in PLOT_SPECS.items()
        if engine.supports(plot_type)
    ]
