"""Application configuration for modelarena.

Provides the default server address and snapshot directory, with
environment variable overrides for non-standard setups.

Usage:
    from modelarena.config import get_config

    cfg = get_config()
    cfg.host          # Address the live server binds to
    cfg.port          # Port the live server listens on
    cfg.snapshot_dir  # Where static snapshots are written
    cfg.project_root  # Resolved project root

Environment variable overrides:
    ARENA_HOST          Override server host (default 127.0.0.1)
    ARENA_PORT          Override server port (default 8181)
    ARENA_SNAPSHOT_DIR  Override snapshot directory path
    ARENA_PROJECT_ROOT  Override project root (snapshot default resolves from this)
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from modelarena.errors import ArenaConfigError

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 8181


@dataclass(frozen=True)
class ArenaConfig:
    """Application configuration."""

    project_root: Path
    snapshot_dir: Path
    host: str
    port: int


def get_config() -> ArenaConfig:
    """Get application configuration.

    Resolves values in this order:
    1. Environment variable override (ARENA_HOST, etc.)
    2. Defaults (snapshot directory relative to project root)

    Returns:
        ArenaConfig with resolved values

    Raises:
        ArenaConfigError: If ARENA_PORT is not a valid port number
    """
    project_root = _resolve_project_root()

    snapshot_dir = Path(
        os.environ.get("ARENA_SNAPSHOT_DIR", str(project_root / "snapshots"))
    )
    host = os.environ.get("ARENA_HOST", DEFAULT_HOST)
    port = _parse_port(os.environ.get("ARENA_PORT"))

    return ArenaConfig(
        project_root=project_root,
        snapshot_dir=snapshot_dir,
        host=host,
        port=port,
    )


def _parse_port(raw: str | None) -> int:
    if raw is None or raw == "":
        return DEFAULT_PORT
    try:
        port = int(raw)
    except ValueError as exc:
        raise ArenaConfigError(f"ARENA_PORT must be an integer, got '{raw}'") from exc
    if not 0 < port < 65536:
        raise ArenaConfigError(f"ARENA_PORT out of range: {port}")
    return port


def _resolve_project_root() -> Path:
    """Resolve the project root directory.

    Strategy:
    1. ARENA_PROJECT_ROOT environment variable (explicit override)
    2. Walk up from this file looking for pyproject.toml
    3. Fall back to current working directory
    """
    env_root = os.environ.get("ARENA_PROJECT_ROOT")
    if env_root:
        return Path(env_root).resolve()

    # Walk up from src/modelarena/config.py to find pyproject.toml
    current = Path(__file__).resolve().parent.parent.parent
    for ancestor in [current, *current.parents]:
        if (ancestor / "pyproject.toml").exists():
            return ancestor

    return Path.cwd()
