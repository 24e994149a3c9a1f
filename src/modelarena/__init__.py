"""modelarena: diagnostic plots for model explanations.

Register fitted models and observations in an arena, then either export a
precomputed static snapshot or serve plots live over HTTP.

Quick start:
    from modelarena import explain, new_arena

    explainer = explain(model, data=df, y=df["y"], label="gbm")

    # Static: everything is computed now, then written to one JSON file
    arena = new_arena()
    arena.register_model(explainer).register_observations(df.head(10))
    from modelarena.snapshot import export_snapshot
    export_snapshot(arena)

    # Live: plots are computed when requested
    arena = new_arena(live=True)
    arena.register_model(explainer).register_observations(df.head(10))
    from modelarena.server import run_arena
    run_arena(arena)
"""

from __future__ import annotations

from modelarena.analysis import ComputationEngine, ComputationSettings
from modelarena.config import ArenaConfig, get_config
from modelarena.explainer import Explainer, explain
from modelarena.store import Arena, LiveArena, StaticArena, new_arena
from modelarena.types import Artifact, PlotType

__all__ = [
    "Arena",
    "ArenaConfig",
    "Artifact",
    "ComputationEngine",
    "ComputationSettings",
    "Explainer",
    "LiveArena",
    "PlotType",
    "StaticArena",
    "explain",
    "get_config",
    "new_arena",
]
