"""HTTP surface for live arenas."""

from modelarena.server.app import create_app, run_arena
from modelarena.server.dispatcher import NOT_FOUND, DispatchResult, QueryDispatcher

__all__ = [
    "NOT_FOUND",
    "DispatchResult",
    "QueryDispatcher",
    "create_app",
    "run_arena",
]
