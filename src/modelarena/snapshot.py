"""Static snapshot export.

A static arena is published as a single JSON document holding its full
catalog, artifacts included. Any static file host can serve it.

Usage:
    from modelarena.snapshot import export_snapshot

    path = export_snapshot(arena)                 # <snapshot_dir>/data.json
    path = export_snapshot(arena, "out/run.json")
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from modelarena.config import get_config
from modelarena.errors import ArenaError
from modelarena.store import Arena, StaticArena

LOG = logging.getLogger(__name__)

SNAPSHOT_FILENAME = "data.json"


def export_snapshot(arena: Arena, path: str | Path | None = None, indent: int | None = 2) -> Path:
    """Write a static arena's catalog to a JSON file atomically.

    Args:
        arena: StaticArena to export
        path: Destination file. Defaults to <snapshot_dir>/data.json.
        indent: JSON indentation; None for compact output.

    Returns:
        Path to the written file

    Raises:
        ArenaError: If the arena is live (live arenas hold no artifacts)
    """
    if not isinstance(arena, StaticArena):
        raise ArenaError("Only static arenas can be exported; serve live arenas with run_arena()")

    output_path = Path(path) if path is not None else get_config().snapshot_dir / SNAPSHOT_FILENAME
    output_path.parent.mkdir(parents=True, exist_ok=True)

    catalog = arena.catalog()
    temp_path = output_path.with_name(output_path.name + ".tmp")
    with open(temp_path, "w") as f:
        json.dump(catalog, f, indent=indent)
    os.replace(temp_path, output_path)

    LOG.info("Exported %d plots to %s", len(catalog["data"]), output_path)
    return output_path


def load_snapshot(path: str | Path) -> dict[str, Any]:
    """Read an exported snapshot.

    Raises:
        FileNotFoundError: If no snapshot exists at path
    """
    with open(path) as f:
        return json.load(f)
