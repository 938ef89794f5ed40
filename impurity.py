from __future__ import annotations

from typing import Callable

import numpy as np

from tree_errors import EmptyInputError


def _as_labels(labels) -> np.ndarray:
    labels = np.asarray(labels)
    if labels.ndim != 1:
        raise ValueError("labels must be a 1D array")
    if labels.size == 0:
        raise EmptyInputError("cannot compute class statistics of an empty label vector")
    return labels


def _probability_array(labels) -> tuple[np.ndarray, np.ndarray]:
    labels = _as_labels(labels)
    classes, counts = np.unique(labels, return_counts=True)
    return classes, counts / labels.size


def class_probabilities(labels) -> dict[int, float]:
    """Relative frequency of each observed class, keyed in ascending class order."""
    classes, probs = _probability_array(labels)
    return {int(c): float(p) for c, p in zip(classes, probs)}


def entropy(labels) -> float:
    """Entropy loss ``sum(-p * log2(p))``; 0 for a pure vector."""
    _, probs = _probability_array(labels)
    return float(0.0 - (probs * np.log2(probs)).sum())


def gini_index(labels) -> float:
    """Gini impurity ``1 - sum(p^2)``; 0 for a pure vector."""
    _, probs = _probability_array(labels)
    return float(1.0 - (probs * probs).sum())


IMPURITY_CRITERIA: dict[str, Callable[[np.ndarray], float]] = {
    "gini": gini_index,
    "entropy": entropy,
}


def get_impurity(criterion: str) -> Callable[[np.ndarray], float]:
    try:
        return IMPURITY_CRITERIA[criterion]
    except KeyError:
        raise ValueError(
            f"criterion must be one of: {', '.join(IMPURITY_CRITERIA)}"
        ) from None
