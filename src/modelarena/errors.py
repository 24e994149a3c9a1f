"""Arena exception hierarchy.

Registration errors are raised before any state changes. Query errors
describe a lookup or validation miss and never mutate the arena; the HTTP
boundary collapses all of them into a plain "not found".
"""

from __future__ import annotations


class ArenaError(Exception):
    """Base exception for all arena failures."""


class ArenaConfigError(ArenaError):
    """Raised for invalid runtime configuration."""


# ---------------------------------------------------------------------------
# Registration
# ---------------------------------------------------------------------------


class RegistrationError(ArenaError):
    """Raised when a model or observation batch cannot be registered."""


class InvalidExplainerError(RegistrationError):
    """Raised when the object to register is not a usable explainer."""


class DuplicateLabelError(RegistrationError):
    """Raised when an explainer label is already registered."""


class InvalidBatchError(RegistrationError):
    """Raised when an observation batch is not a usable table."""


class DuplicateRowIdError(RegistrationError):
    """Raised when observation row ids collide within or across batches."""


# ---------------------------------------------------------------------------
# Queries
# ---------------------------------------------------------------------------


class ArenaQueryError(ArenaError):
    """Raised when a plot request cannot be resolved."""


class ModelNotFoundError(ArenaQueryError):
    """Raised when no explainer has the requested label."""


class ObservationNotFoundError(ArenaQueryError):
    """Raised when no batch contains the requested row id."""


class VariableNotFoundError(ArenaQueryError):
    """Raised when a variable is not usable for the requested plot."""


class ArtifactNotFoundError(ArenaQueryError):
    """Raised when a static arena holds no artifact for the requested key."""


# ---------------------------------------------------------------------------
# Computation
# ---------------------------------------------------------------------------


class ComputationError(ArenaError):
    """Raised when an artifact computation fails."""


class CascadeError(ComputationError):
    """Raised when one or more steps of a static cascade failed.

    Attributes:
        failures: (model, observation, reason) for every abandoned step.
            observation is None for the model-level step.
    """

    def __init__(self, message: str, failures: list[tuple[str, str | None, str]]):
        super().__init__(message)
        self.failures = failures
