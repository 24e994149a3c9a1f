"""Live arena: plots are computed when they are requested."""

from __future__ import annotations

import logging
import time
from typing import Any

import pandas as pd

from modelarena.explainer import Explainer
from modelarena.store.base import Arena, ProgressCallback
from modelarena.store.catalog import API_NAME, available_plots
from modelarena.types import Artifact, PlotType

LOG = logging.getLogger(__name__)


class LiveArena(Arena):
    """Arena that stores no artifacts.

    Registration is constant time: it records the model or batch and moves
    the freshness timestamp forward. Clients poll the timestamp to learn
    that their copy of the catalog is stale. Reads compute the requested
    artifact against the current registries and leave the timestamp alone.
    """

    live = True

    def __init__(self, *args: Any, **kwargs: Any):
        super().__init__(*args, **kwargs)
        self._timestamp = time.time()

    @property
    def timestamp(self) -> float:
        """Time of the last registration (or creation), seconds since epoch."""
        return self._timestamp

    def timestamp_ms(self) -> float:
        return self._timestamp * 1000

    def _touch(self) -> None:
        # Never move backwards, even if the wall clock does
        self._timestamp = max(time.time(), self._timestamp)

    def _register_model(
        self, explainer: Explainer, progress_callback: ProgressCallback | None
    ) -> None:
        self.explainers.register(explainer)
        self._touch()
        LOG.info("Registered model '%s' with variables %s", explainer.label, explainer.variables)

    def _register_observations(
        self, observations: pd.DataFrame, progress_callback: ProgressCallback | None
    ) -> None:
        batch = self.observations.register(observations)
        self._touch()
        LOG.info("Registered %d observations", len(batch))

    def _resolve(
        self,
        plot_type: PlotType,
        explainer: Explainer,
        row: pd.DataFrame | None,
        variable: str | None,
    ) -> Artifact:
        return self.engine.compute(plot_type, explainer, row, variable)

    def catalog_extras(self) -> dict[str, Any]:
        return {
            "api": API_NAME,
            "timestamp": self.timestamp_ms(),
            "availablePlots": available_plots(self.engine),
        }
