"""Artifact computation for modelarena.

This package provides:
- library/: Generic explanation functions (importance, profiles, attributions)
- computers: One ArtifactComputer per plot kind, wrapping library functions
- ComputationEngine: Dispatches a plot kind to its computer and builds Artifacts
"""

from modelarena.analysis.engine import ComputationEngine, shared_variables
from modelarena.analysis.protocols import ArtifactComputer, ComputationSettings

__all__ = [
    "ArtifactComputer",
    "ComputationEngine",
    "ComputationSettings",
    "shared_variables",
]
