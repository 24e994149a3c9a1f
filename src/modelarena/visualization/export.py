"""Write rendered artifacts to files.

Image formats (png, svg, pdf) go through kaleido, installed with the
'export' extra. HTML needs nothing beyond plotly.

Usage:
    from modelarena.visualization.export import export_arena, export_figure

    export_figure(render_artifact(artifact), "plots/breakdown", format="svg")
    paths = export_arena(arena, "plots", format="html")
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

import plotly.graph_objects as go

from modelarena.errors import ArenaError
from modelarena.store import Arena, StaticArena
from modelarena.types import Artifact
from modelarena.visualization.renderers import render_artifact

LOG = logging.getLogger(__name__)

FIGURE_FORMATS = ("png", "svg", "pdf", "html")

_UNSAFE = re.compile(r"[^A-Za-z0-9_-]+")


def export_figure(
    fig: go.Figure,
    output_path: str | Path,
    format: str = "png",
    width: int = 1000,
    height: int | None = None,
    scale: int = 2,
) -> Path:
    """Write one figure as an image or a standalone HTML page.

    Args:
        fig: Figure from any renderer.
        output_path: Destination; the format's suffix is added when missing.
        format: One of FIGURE_FORMATS.
        width: Image width in pixels.
        height: Image height in pixels. None keeps the figure's own height.
        scale: Pixel density multiplier for raster output.

    Returns:
        Path to the written file.

    Raises:
        ValueError: If format is not supported.
    """
    format = format.lower()
    if format not in FIGURE_FORMATS:
        raise ValueError(f"Unsupported format '{format}'. Use one of: {list(FIGURE_FORMATS)}")

    path = Path(output_path)
    if not path.suffix:
        path = path.with_suffix(f".{format}")
    path.parent.mkdir(parents=True, exist_ok=True)

    if format == "html":
        fig.write_html(path, include_plotlyjs="cdn")
    else:
        height = height or fig.layout.height or 600
        fig.write_image(path, format=format, width=width, height=height, scale=scale)
    return path


def artifact_filename(artifact: Artifact) -> str:
    """File stem naming an artifact by its key, e.g. 'Breakdown_gbm_Alice'."""
    parts = [artifact.plot_type.value, artifact.model, artifact.observation, artifact.variable]
    return "_".join(_UNSAFE.sub("-", part) for part in parts if part is not None)


def export_arena(arena: Arena, output_dir: str | Path, format: str = "html") -> list[Path]:
    """Render and write every artifact of a static arena.

    Returns:
        Paths of the written files, in artifact order.

    Raises:
        ArenaError: If the arena is live (live arenas hold no artifacts)
    """
    if not isinstance(arena, StaticArena):
        raise ArenaError("Only static arenas hold artifacts to export")

    output_dir = Path(output_dir)
    paths = [
        export_figure(render_artifact(artifact), output_dir / artifact_filename(artifact), format)
        for artifact in arena.artifacts
    ]
    LOG.info("Exported %d figures to %s", len(paths), output_dir)
    return paths
