from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from feature_matrix import FeatureMatrix
from impurity import get_impurity
from tree_errors import EmptyInputError, ShapeMismatchError


@dataclass(frozen=True)
class SplitCandidate:
    feature: int
    threshold: float
    score: float


@dataclass
class DataSplit:
    left_x: FeatureMatrix
    left_y: np.ndarray
    right_x: FeatureMatrix
    right_y: np.ndarray


def _check_pair(x: FeatureMatrix, y: np.ndarray) -> np.ndarray:
    y = np.asarray(y)
    if y.ndim != 1 or y.shape[0] != x.rows:
        raise ShapeMismatchError(
            f"labels have shape {y.shape}, expected ({x.rows},)"
        )
    return y


def weighted_impurity(
    left_y: np.ndarray,
    right_y: np.ndarray,
    criterion: str = "gini",
) -> float:
    """Sample-weighted child impurity; an empty side contributes nothing."""
    impurity = get_impurity(criterion)
    n = left_y.size + right_y.size
    if n == 0:
        raise EmptyInputError("cannot score a split of zero samples")

    score = 0.0
    if left_y.size > 0:
        score += (left_y.size / n) * impurity(left_y)
    if right_y.size > 0:
        score += (right_y.size / n) * impurity(right_y)
    return score


def find_best_split(
    x: FeatureMatrix,
    y: np.ndarray,
    criterion: str = "gini",
) -> SplitCandidate:
    """Exhaustive search over every (feature, observed value) threshold.

    Columns are scanned in order and thresholds ascending; a candidate only
    replaces the incumbent when its score is strictly lower, so the first
    minimum wins. When no column separates the rows the returned threshold
    is a column maximum and routes every row left.
    """
    y = _check_pair(x, y)
    if x.rows == 0:
        raise EmptyInputError("cannot search splits over zero rows")
    if x.cols == 0:
        raise IndexError("cannot search splits over a matrix with no columns")

    best: SplitCandidate | None = None
    for feature in range(x.cols):
        for threshold in x.unique_sorted(feature):
            left_mask = x.less_equal_mask(feature, threshold)
            score = weighted_impurity(y[left_mask], y[~left_mask], criterion)
            if best is None or score < best.score:
                best = SplitCandidate(
                    feature=feature,
                    threshold=float(threshold),
                    score=score,
                )

    assert best is not None
    return best


def partition(
    x: FeatureMatrix,
    y: np.ndarray,
    left_mask: np.ndarray,
) -> DataSplit:
    y = _check_pair(x, y)
    left_mask = np.asarray(left_mask, dtype=bool)
    right_mask = ~left_mask
    return DataSplit(
        left_x=x.select_rows(left_mask),
        left_y=y[left_mask],
        right_x=x.select_rows(right_mask),
        right_y=y[right_mask],
    )
