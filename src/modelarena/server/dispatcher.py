"""Query dispatcher mapping plain request parameters to arena reads.

The boundary only distinguishes "found" from "not found": every lookup,
validation or computation failure becomes not found. Computation failures
are logged with their traceback since they usually point at a model or
data problem rather than a bad request.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from modelarena.errors import ArenaQueryError, ComputationError
from modelarena.store import Arena
from modelarena.types import PlotType

LOG = logging.getLogger(__name__)


@dataclass(frozen=True)
class DispatchResult:
    """Outcome of one plot request.

    Attributes:
        found: Whether the request resolved to an artifact.
        payload: The artifact's plot data when found, else None.
    """

    found: bool
    payload: dict[str, Any] | None = None


NOT_FOUND = DispatchResult(found=False)


class QueryDispatcher:
    """Resolves plot requests against one arena. Never mutates it."""

    def __init__(self, arena: Arena):
        self.arena = arena

    def dispatch(self, plot_type: str, params: Mapping[str, Any]) -> DispatchResult:
        """Resolve a request for a plot.

        Args:
            plot_type: Wire name of the plot kind (e.g. "Breakdown")
            params: Request parameters; 'model', 'observation' and
                'variable' are read as plain strings, others are ignored

        Returns:
            DispatchResult with the artifact payload, or NOT_FOUND
        """
        kind = PlotType.parse(plot_type)
        if kind is None:
            return NOT_FOUND

        model = _param(params, "model")
        observation = _param(params, "observation")
        variable = _param(params, "variable")

        try:
            artifact = self.arena.resolve(kind, model, observation, variable)
        except ArenaQueryError as exc:
            LOG.debug("Not found: %s %s (%s)", plot_type, dict(params), exc)
            return NOT_FOUND
        except ComputationError:
            LOG.exception("Computation failed for %s %s", plot_type, dict(params))
            return NOT_FOUND

        return DispatchResult(found=True, payload=artifact.payload)

    def catalog(self) -> dict[str, Any]:
        return self.arena.catalog()

    def timestamp(self) -> dict[str, float]:
        """Freshness timestamp in milliseconds since epoch."""
        return {"timestamp": self.arena.timestamp_ms()}  # type: ignore[attr-defined]


def _param(params: Mapping[str, Any], name: str) -> str | None:
    value = params.get(name)
    if value is None or value == "":
        return None
    return str(value)
