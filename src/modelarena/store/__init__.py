"""Arena stores.

Two strategies behind one Arena interface:
- StaticArena: computes every reachable plot at registration time
- LiveArena: computes plots on request, tracks a freshness timestamp
"""

from __future__ import annotations

from modelarena.analysis import ComputationEngine
from modelarena.store.base import Arena
from modelarena.store.catalog import build_catalog
from modelarena.store.live import LiveArena
from modelarena.store.static import StaticArena

__all__ = [
    "Arena",
    "LiveArena",
    "StaticArena",
    "build_catalog",
    "new_arena",
]


def new_arena(live: bool = False, engine: ComputationEngine | None = None) -> Arena:
    """Create an empty arena.

    Args:
        live: True for a live arena served over HTTP, False for a static
            arena that precomputes everything for snapshot export.
        engine: Optional computation engine shared by all plots.

    Returns:
        Empty LiveArena or StaticArena
    """
    if live:
        return LiveArena(engine=engine)
    return StaticArena(engine=engine)
