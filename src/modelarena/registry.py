"""Registries of explainers and observation batches.

Both registries are append-only: entries are validated, committed, and
never mutated or removed afterwards. Arenas validate before running any
computation so a rejected registration leaves everything untouched.
"""

from __future__ import annotations

import pandas as pd

from modelarena.errors import (
    DuplicateLabelError,
    DuplicateRowIdError,
    InvalidBatchError,
    InvalidExplainerError,
)
from modelarena.explainer import Explainer


class ExplainerRegistry:
    """Registered explainers keyed by unique label, in insertion order."""

    def __init__(self) -> None:
        self._explainers: dict[str, Explainer] = {}

    def validate(self, explainer: Explainer) -> None:
        """Check that an explainer can be registered.

        Raises:
            InvalidExplainerError: If the argument is not an Explainer.
            DuplicateLabelError: If the label is already taken.
        """
        if not isinstance(explainer, Explainer):
            raise InvalidExplainerError(
                f"Expected an Explainer (see modelarena.explain), got {type(explainer).__name__}"
            )
        if explainer.label in self._explainers:
            raise DuplicateLabelError(f"Explainer label '{explainer.label}' is already registered")

    def register(self, explainer: Explainer) -> Explainer:
        """Validate and store an explainer.

        Returns:
            The registered explainer
        """
        self.validate(explainer)
        self._explainers[explainer.label] = explainer
        return explainer

    def lookup(self, label: str) -> Explainer | None:
        return self._explainers.get(label)

    def all(self) -> list[Explainer]:
        return list(self._explainers.values())

    def labels(self) -> list[str]:
        return list(self._explainers.keys())

    def variables(self) -> list[str]:
        """Union of every explainer's variables, first-seen order."""
        seen: dict[str, None] = {}
        for explainer in self._explainers.values():
            seen.update(dict.fromkeys(explainer.variables))
        return list(seen)

    def __len__(self) -> int:
        return len(self._explainers)

    def __contains__(self, label: object) -> bool:
        return label in self._explainers


class ObservationRegistry:
    """Registered observation batches.

    Row ids are the batch index converted to strings and must be unique
    across every batch in the registry. A row id index is kept alongside
    the batches so lookups do not scan.
    """

    def __init__(self) -> None:
        self._batches: list[pd.DataFrame] = []
        self._index: dict[str, tuple[int, int]] = {}

    def validate(self, batch: pd.DataFrame) -> pd.DataFrame:
        """Check a batch and return the normalized copy that would be stored.

        Raises:
            InvalidBatchError: If the batch is not a DataFrame with columns.
            DuplicateRowIdError: If row ids repeat within the batch or
                collide with an already registered row.
        """
        if not isinstance(batch, pd.DataFrame):
            raise InvalidBatchError(
                f"Observations must be a pandas DataFrame, got {type(batch).__name__}"
            )
        if len(batch.columns) == 0:
            raise InvalidBatchError("Observations batch has no columns")
        if batch.columns.has_duplicates:
            raise InvalidBatchError("Observations batch has duplicate column names")

        normalized = batch.copy()
        normalized.index = [str(row_id) for row_id in batch.index]
        normalized.columns = [str(c) for c in batch.columns]

        if normalized.index.has_duplicates:
            repeated = sorted(set(normalized.index[normalized.index.duplicated()]))
            raise DuplicateRowIdError(f"Row ids repeated within batch: {repeated}")

        collisions = [row_id for row_id in normalized.index if row_id in self._index]
        if collisions:
            raise DuplicateRowIdError(f"Row ids already registered: {collisions}")

        return normalized

    def register(self, batch: pd.DataFrame) -> pd.DataFrame:
        """Validate and store a batch.

        Returns:
            The stored (normalized) batch
        """
        normalized = self.validate(batch)
        batch_index = len(self._batches)
        self._batches.append(normalized)
        for row_index, row_id in enumerate(normalized.index):
            self._index[row_id] = (batch_index, row_index)
        return normalized

    def lookup(self, row_id: str) -> tuple[pd.DataFrame, int] | None:
        """Find the batch holding a row id.

        Returns:
            (batch, row_index) or None if the row id is unknown
        """
        location = self._index.get(row_id)
        if location is None:
            return None
        batch_index, row_index = location
        return self._batches[batch_index], row_index

    def row(self, row_id: str) -> pd.DataFrame | None:
        """Return the observation as a single-row DataFrame, or None."""
        found = self.lookup(row_id)
        if found is None:
            return None
        batch, row_index = found
        return batch.iloc[[row_index]]

    def all(self) -> list[pd.DataFrame]:
        return list(self._batches)

    def row_ids(self) -> list[str]:
        """All row ids flattened across batches, registration order."""
        return [row_id for batch in self._batches for row_id in batch.index]

    def __len__(self) -> int:
        return len(self._batches)

    def __contains__(self, row_id: object) -> bool:
        return row_id in self._index
