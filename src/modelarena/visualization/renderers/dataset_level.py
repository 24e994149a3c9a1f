"""Model-level plots: variable importance and dependence profiles."""

from typing import Any

import plotly.graph_objects as go


def render_feature_importance(
    data: dict[str, Any],
    model: str,
    title: str | None = None,
) -> go.Figure:
    """Render permutation importance as horizontal bars.

    Bars start at the full-model loss and extend to the loss after
    shuffling each variable. Most important variable on top.

    Args:
        data: FeatureImportance payload.
        model: Model label for the title.
        title: Optional title override.

    Returns:
        Plotly Figure.
    """
    variables = list(reversed(data["variables"]))
    losses = list(reversed(data["dropout_loss"]))
    base = data["base"]

    fig = go.Figure(
        go.Bar(
            x=[loss - base for loss in losses],
            y=variables,
            base=base,
            orientation="h",
            marker_color="#4378bf",
            customdata=losses,
            hovertemplate="%{y}<br>Loss after shuffling: %{customdata:.4f}<extra></extra>",
        )
    )
    fig.add_vline(x=base, line_dash="dash", line_color="gray")

    fig.update_layout(
        title=title or f"Variable Importance: {model}",
        xaxis_title="Loss (RMSE)",
        template="plotly_white",
        height=max(250, 40 * len(variables) + 100),
        margin=dict(l=120, r=20, t=50, b=50),
    )
    return fig


def render_dependence_profile(
    data: dict[str, Any],
    model: str,
    title: str | None = None,
) -> go.Figure:
    """Render a partial or accumulated dependence profile.

    Numeric variables render as a line, categorical variables as bars.

    Args:
        data: PartialDependence or AccumulatedDependence payload.
        model: Model label for the title.
        title: Optional title override.

    Returns:
        Plotly Figure.
    """
    fig = go.Figure()
    variable = data["variable"]

    if data["numerical"]:
        fig.add_trace(
            go.Scatter(
                x=data["x"],
                y=data["y"],
                mode="lines",
                name=model,
                line=dict(color="#4378bf", width=2),
                hovertemplate=f"{variable}: %{{x}}<br>Prediction: %{{y:.4f}}<extra></extra>",
            )
        )
    else:
        fig.add_trace(
            go.Bar(
                x=[str(x) for x in data["x"]],
                y=data["y"],
                name=model,
                marker_color="#4378bf",
            )
        )

    fig.update_layout(
        title=title or f"{variable}: {model}",
        xaxis_title=variable,
        yaxis_title="Average prediction",
        template="plotly_white",
        height=350,
    )
    return fig
