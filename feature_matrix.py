from __future__ import annotations

from typing import Sequence

import numpy as np

from tree_errors import EmptyInputError, ShapeMismatchError


class FeatureMatrix:
    """Immutable row-major table of real-valued features.

    The backing array is a read-only ``float64`` copy, so every operation
    returns a new container and never touches the receiver.
    """

    def __init__(self, values: np.ndarray) -> None:
        values = np.array(values, dtype=np.float64)
        if values.ndim != 2:
            raise ShapeMismatchError("values must be a 2D array")
        values.setflags(write=False)
        self._values = values

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[float]]) -> FeatureMatrix:
        rows = [list(row) for row in rows]
        if not rows:
            raise EmptyInputError("at least one row is required")

        n_cols = len(rows[0])
        for i, row in enumerate(rows):
            if len(row) != n_cols:
                raise ShapeMismatchError(
                    f"row {i} has {len(row)} entries, expected {n_cols}"
                )
        return cls(np.asarray(rows, dtype=np.float64).reshape(len(rows), n_cols))

    @classmethod
    def from_string(cls, text: str) -> FeatureMatrix:
        """Parse ``"1 2 3; 4 5 6"``: rows split on ``;``, columns on whitespace.

        Blank row segments (e.g. a trailing ``;``) are skipped.
        """
        rows = []
        for segment in text.split(";"):
            entries = segment.split()
            if not entries:
                continue
            rows.append([float(entry) for entry in entries])
        return cls.from_rows(rows)

    @classmethod
    def from_random(
        cls,
        rows: int,
        cols: int,
        rng: np.random.Generator,
    ) -> FeatureMatrix:
        """Uniform [0, 1) matrix drawn from the caller's generator."""
        if rows <= 0 or cols <= 0:
            raise ValueError("rows and cols must be positive")
        return cls(rng.random((rows, cols)))

    @property
    def values(self) -> np.ndarray:
        return self._values

    @property
    def rows(self) -> int:
        return int(self._values.shape[0])

    @property
    def cols(self) -> int:
        return int(self._values.shape[1])

    @property
    def shape(self) -> tuple[int, int]:
        return self.rows, self.cols

    def _check_column(self, col_idx: int) -> int:
        col_idx = int(col_idx)
        if not 0 <= col_idx < self.cols:
            raise IndexError(
                f"column index {col_idx} out of range for matrix with {self.cols} columns"
            )
        return col_idx

    def row(self, row_idx: int) -> np.ndarray:
        return self._values[row_idx]

    def column(self, col_idx: int) -> np.ndarray:
        col_idx = self._check_column(col_idx)
        return self._values[:, col_idx]

    def select_rows(self, mask: Sequence[bool] | np.ndarray) -> FeatureMatrix:
        mask = np.asarray(mask, dtype=bool)
        if mask.shape != (self.rows,):
            raise ShapeMismatchError(
                f"mask has shape {mask.shape}, expected ({self.rows},)"
            )
        return FeatureMatrix(self._values[mask])

    def unique_sorted(self, col_idx: int) -> np.ndarray:
        # np.unique sorts and merges exactly-equal values, no tolerance.
        return np.unique(self.column(col_idx))

    def less_equal_mask(self, col_idx: int, threshold: float) -> np.ndarray:
        return self.column(col_idx) <= threshold

    def __len__(self) -> int:
        return self.rows

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FeatureMatrix):
            return NotImplemented
        return self.shape == other.shape and bool(np.array_equal(self._values, other._values))

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return f"FeatureMatrix(rows={self.rows}, cols={self.cols})"


def as_feature_matrix(X) -> FeatureMatrix:
    if isinstance(X, FeatureMatrix):
        return X
    return FeatureMatrix(np.asarray(X, dtype=np.float64))
