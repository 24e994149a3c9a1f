"""Observation-level plots: break down, Shapley values, ceteris paribus."""

from typing import Any

import plotly.graph_objects as go

POSITIVE = "#8bdcbe"
NEGATIVE = "#f05a71"


def _labels(data: dict[str, Any], key: str = "variables_value") -> list[str]:
    return [f"{v} = {value}" for v, value in zip(data["variables"], data[key])]


def render_break_down(
    data: dict[str, Any],
    model: str,
    observation: str,
    title: str | None = None,
) -> go.Figure:
    """Render a break down as a waterfall from intercept to prediction.

    Args:
        data: Breakdown payload.
        model: Model label.
        observation: Row id.
        title: Optional title override.

    Returns:
        Plotly Figure.
    """
    labels = ["intercept", *_labels(data), "prediction"]
    values = [data["intercept"], *data["contribution"], data["prediction"]]
    measures = ["absolute", *["relative"] * len(data["contribution"]), "total"]

    fig = go.Figure(
        go.Waterfall(
            orientation="h",
            y=labels,
            x=values,
            measure=measures,
            increasing=dict(marker=dict(color=POSITIVE)),
            decreasing=dict(marker=dict(color=NEGATIVE)),
            totals=dict(marker=dict(color="#371ea3")),
        )
    )
    fig.update_layout(
        title=title or f"Break Down: {model}, {observation}",
        yaxis=dict(autorange="reversed"),
        template="plotly_white",
        height=max(250, 35 * len(labels) + 100),
        margin=dict(l=160, r=20, t=50, b=50),
        showlegend=False,
    )
    return fig


def render_shap_values(
    data: dict[str, Any],
    model: str,
    observation: str,
    title: str | None = None,
) -> go.Figure:
    """Render mean Shapley contributions with their min-max range."""
    means = data["mean"]
    fig = go.Figure(
        go.Bar(
            x=means,
            y=_labels(data),
            orientation="h",
            marker_color=[POSITIVE if m >= 0 else NEGATIVE for m in means],
            error_x=dict(
                type="data",
                symmetric=False,
                array=[hi - m for hi, m in zip(data["max"], means)],
                arrayminus=[m - lo for lo, m in zip(data["min"], means)],
                color="gray",
            ),
        )
    )
    fig.update_layout(
        title=title or f"Shapley Values: {model}, {observation}",
        xaxis_title="Contribution",
        yaxis=dict(autorange="reversed"),
        template="plotly_white",
        height=max(250, 35 * len(means) + 100),
        margin=dict(l=160, r=20, t=50, b=50),
    )
    return fig


def render_ceteris_paribus(
    data: dict[str, Any],
    model: str,
    observation: str,
    title: str | None = None,
) -> go.Figure:
    """Render a what-if profile with the observation's own value marked."""
    variable = data["variable"]
    own_value = data["observation"].get(variable)
    fig = go.Figure()

    if data["numerical"]:
        fig.add_trace(
            go.Scatter(
                x=data["x"],
                y=data["y"],
                mode="lines",
                line=dict(color="#4378bf", width=2),
                name=observation,
            )
        )
        if own_value is not None:
            fig.add_trace(
                go.Scatter(
                    x=[own_value],
                    y=[data["prediction"]],
                    mode="markers",
                    marker=dict(size=10, color="#371ea3"),
                    name="observation",
                )
            )
    else:
        fig.add_trace(
            go.Bar(
                x=[str(x) for x in data["x"]],
                y=data["y"],
                marker_color=["#371ea3" if x == own_value else "#4378bf" for x in data["x"]],
                name=observation,
            )
        )

    fig.update_layout(
        title=title or f"Ceteris Paribus: {model}, {observation}",
        xaxis_title=variable,
        yaxis_title="Prediction",
        template="plotly_white",
        height=350,
        showlegend=False,
    )
    return fig
