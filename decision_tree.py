from __future__ import annotations

import logging

import numpy as np

from feature_matrix import FeatureMatrix, as_feature_matrix
from tree_builder import (
    Node,
    TreeBuildMetrics,
    TreeBuilder,
    TreeBuilderParams,
    iter_leaves,
    traverse,
    tree_depth,
)
from tree_errors import EmptyInputError, ShapeMismatchError, UnfittedModelError

logger = logging.getLogger(__name__)


class DecisionTreeClassifier:
    """Binary CART classifier over real-valued features and integer class codes.

        model = DecisionTreeClassifier(max_depth=3, min_samples_split=2)
        model.fit(X, y)
        probs = model.predict_proba(X)
        labels = model.predict(X)

    Refitting replaces the whole tree.
    """

    def __init__(
        self,
        max_depth: int,
        min_samples_split: int,
        criterion: str = "gini",
    ) -> None:
        self.params = TreeBuilderParams(
            max_depth=max_depth,
            min_samples_split=min_samples_split,
            criterion=criterion,
        )
        self.root: Node | None = None
        self.n_features_in_: int | None = None
        self.build_metrics_: TreeBuildMetrics | None = None

    @property
    def max_depth(self) -> int:
        return self.params.max_depth

    @property
    def min_samples_split(self) -> int:
        return self.params.min_samples_split

    @property
    def criterion(self) -> str:
        return self.params.criterion

    def fit(self, X, y) -> "DecisionTreeClassifier":
        x = as_feature_matrix(X)
        y = np.asarray(y)
        if y.ndim != 1:
            raise ValueError("y must be a 1D array")
        if y.shape[0] != x.rows:
            raise ShapeMismatchError(
                f"X has {x.rows} rows but y has {y.shape[0]} labels"
            )
        if x.rows == 0:
            raise EmptyInputError("cannot fit on zero samples")
        if x.cols == 0:
            raise IndexError("cannot fit on a matrix with no columns")
        if not np.issubdtype(y.dtype, np.number) or np.issubdtype(y.dtype, np.bool_):
            raise ValueError("y must contain integer class codes")
        if not np.issubdtype(y.dtype, np.integer):
            if not np.all(np.mod(y, 1) == 0):
                raise ValueError("y must contain integer class codes")
            y = y.astype(np.int64)
        if np.any(y < 0):
            raise ValueError("class codes must be non-negative")

        builder = TreeBuilder(self.params)
        self.root = builder.build(x, y, depth=0)
        self.n_features_in_ = x.cols
        self.build_metrics_ = builder.metrics

        logger.info(
            "fitted tree on %d samples x %d features: %d splits, %d leaves, depth %d",
            x.rows,
            x.cols,
            builder.metrics.nodes_split,
            builder.metrics.n_leaves,
            builder.metrics.max_leaf_depth,
        )
        return self

    def _check_fitted(self) -> Node:
        if self.root is None:
            raise UnfittedModelError("Model must be fitted before prediction")
        return self.root

    def _check_input(self, X) -> FeatureMatrix:
        self._check_fitted()
        x = as_feature_matrix(X)
        if x.cols < self.n_features_in_:
            raise ShapeMismatchError(
                f"X has {x.cols} features, model was fitted on {self.n_features_in_}"
            )
        return x

    def predict_proba(self, X) -> list[dict[int, float]]:
        x = self._check_input(X)
        return [traverse(self.root, x.row(i)) for i in range(x.rows)]

    def predict(self, X) -> np.ndarray:
        distributions = self.predict_proba(X)
        preds = np.zeros(len(distributions), dtype=np.int64)
        for i, distribution in enumerate(distributions):
            preds[i] = most_probable_class(distribution)
        return preds

    def get_depth(self) -> int:
        return tree_depth(self._check_fitted())

    def get_n_leaves(self) -> int:
        return sum(1 for _ in iter_leaves(self._check_fitted()))

    def __repr__(self) -> str:
        return (
            f"DecisionTreeClassifier(max_depth={self.max_depth}, "
            f"min_samples_split={self.min_samples_split}, "
            f"criterion={self.criterion!r})"
        )


def most_probable_class(distribution: dict[int, float]) -> int:
    """Argmax over a distribution; ties go to the smallest class code."""
    best_class, best_prob = None, -1.0
    for cls in sorted(distribution):
        if distribution[cls] > best_prob:
            best_class, best_prob = cls, distribution[cls]
    return best_class
