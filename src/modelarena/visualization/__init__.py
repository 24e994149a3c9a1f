"""Plotly renderers for arena artifacts.

Each renderer takes an artifact payload and returns a
plotly.graph_objects.Figure; render_artifact() picks the renderer from the
artifact's plot kind.

Usage:
    from modelarena.visualization import render_artifact

    artifact = arena.resolve("Breakdown", model="gbm", observation="Alice")
    render_artifact(artifact).show()
"""

from modelarena.visualization.export import artifact_filename, export_arena, export_figure
from modelarena.visualization.renderers import (
    render_artifact,
    render_break_down,
    render_ceteris_paribus,
    render_dependence_profile,
    render_feature_importance,
    render_shap_values,
)

__all__ = [
    "artifact_filename",
    "export_arena",
    "export_figure",
    "render_artifact",
    "render_break_down",
    "render_ceteris_paribus",
    "render_dependence_profile",
    "render_feature_importance",
    "render_shap_values",
]
