"""Renderers for individual plot kinds."""

from __future__ import annotations

import plotly.graph_objects as go

from modelarena.types import Artifact, PlotType
from modelarena.visualization.renderers.dataset_level import (
    render_dependence_profile,
    render_feature_importance,
)
from modelarena.visualization.renderers.observation_level import (
    render_break_down,
    render_ceteris_paribus,
    render_shap_values,
)

__all__ = [
    "render_artifact",
    "render_break_down",
    "render_ceteris_paribus",
    "render_dependence_profile",
    "render_feature_importance",
    "render_shap_values",
]


def render_artifact(artifact: Artifact, title: str | None = None) -> go.Figure:
    """Render any artifact with the renderer for its plot kind."""
    data = artifact.payload
    kind = artifact.plot_type

    if kind is PlotType.FEATURE_IMPORTANCE:
        return render_feature_importance(data, artifact.model, title=title)
    if kind in (PlotType.PARTIAL_DEPENDENCE, PlotType.ACCUMULATED_DEPENDENCE):
        fig = render_dependence_profile(data, artifact.model, title=title)
        if title is None:
            fig.update_layout(
                title=f"{kind.spec.display_name}: {artifact.model}, {artifact.variable}"
            )
        return fig

    observation = artifact.observation or ""
    if kind is PlotType.BREAKDOWN:
        return render_break_down(data, artifact.model, observation, title=title)
    if kind is PlotType.SHAP_VALUES:
        return render_shap_values(data, artifact.model, observation, title=title)
    return render_ceteris_paribus(data, artifact.model, observation, title=title)
