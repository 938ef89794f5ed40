from __future__ import annotations

from dataclasses import dataclass, field
import logging
from typing import Union

import numpy as np

from feature_matrix import FeatureMatrix
from impurity import IMPURITY_CRITERIA, class_probabilities
from split_finder import find_best_split, partition
from tree_errors import ShapeMismatchError, UnfittedModelError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LeafNode:
    distribution: dict[int, float]
    depth: int
    n_samples: int

    @property
    def is_leaf(self) -> bool:
        return True


@dataclass(frozen=True)
class InternalNode:
    feature: int
    threshold: float
    left: Node  # rows with value <= threshold
    right: Node
    depth: int
    n_samples: int

    @property
    def is_leaf(self) -> bool:
        return False


Node = Union[LeafNode, InternalNode]


@dataclass
class TreeBuildMetrics:
    nodes_visited: int = 0
    nodes_split: int = 0
    degenerate_splits: int = 0
    # (depth, n_samples) per emitted leaf, in depth-first left-to-right order.
    leaf_records: list[tuple[int, int]] = field(default_factory=list)

    @property
    def n_leaves(self) -> int:
        return len(self.leaf_records)

    @property
    def max_leaf_depth(self) -> int:
        return max((depth for depth, _ in self.leaf_records), default=0)


def _is_int(value) -> bool:
    return isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_))


@dataclass(frozen=True)
class TreeBuilderParams:
    max_depth: int = 3
    min_samples_split: int = 2
    criterion: str = "gini"  # one of: gini, entropy

    def __post_init__(self) -> None:
        if not _is_int(self.max_depth) or self.max_depth <= 0:
            raise ValueError("max_depth must be a positive integer")
        if not _is_int(self.min_samples_split) or self.min_samples_split <= 0:
            raise ValueError("min_samples_split must be a positive integer")
        if self.criterion not in IMPURITY_CRITERIA:
            raise ValueError("criterion must be one of: gini, entropy")


class TreeBuilder:
    """Depth-first recursive CART growth over (matrix, labels) pairs."""

    def __init__(self, params: TreeBuilderParams) -> None:
        self.params = params
        self.metrics = TreeBuildMetrics()

    def _should_stop(self, y: np.ndarray, depth: int) -> bool:
        if depth > self.params.max_depth:
            return True
        if y.size < self.params.min_samples_split:
            return True
        if np.unique(y).size == 1:
            return True
        return False

    def _make_leaf(self, y: np.ndarray, depth: int) -> LeafNode:
        leaf = LeafNode(
            distribution=class_probabilities(y),
            depth=depth,
            n_samples=int(y.size),
        )
        self.metrics.leaf_records.append((depth, leaf.n_samples))
        logger.debug("leaf at depth %d over %d samples: %s", depth, y.size, leaf.distribution)
        return leaf

    def build(self, x: FeatureMatrix, y: np.ndarray, depth: int = 0) -> Node:
        self.metrics.nodes_visited += 1

        if self._should_stop(y, depth):
            return self._make_leaf(y, depth)

        split = find_best_split(x, y, criterion=self.params.criterion)
        left_mask = x.less_equal_mask(split.feature, split.threshold)

        if np.all(left_mask):
            # The threshold is the column maximum: no separation is possible.
            self.metrics.degenerate_splits += 1
            return self._make_leaf(y, depth)

        logger.debug(
            "split at depth %d on feature %d <= %r (score=%.6f, n=%d)",
            depth,
            split.feature,
            split.threshold,
            split.score,
            y.size,
        )
        data = partition(x, y, left_mask)
        self.metrics.nodes_split += 1

        left = self.build(data.left_x, data.left_y, depth + 1)
        right = self.build(data.right_x, data.right_y, depth + 1)
        return InternalNode(
            feature=split.feature,
            threshold=split.threshold,
            left=left,
            right=right,
            depth=depth,
            n_samples=int(y.size),
        )


def traverse(root: Node | None, feature_row) -> dict[int, float]:
    if root is None:
        raise UnfittedModelError("Model must be fitted before prediction")

    feature_row = np.asarray(feature_row, dtype=np.float64)
    node = root
    while not node.is_leaf:
        if node.feature >= feature_row.shape[0]:
            raise ShapeMismatchError(
                f"feature row has {feature_row.shape[0]} columns, "
                f"tree requires feature {node.feature}"
            )
        go_left = feature_row[node.feature] <= node.threshold
        node = node.left if go_left else node.right

    return dict(node.distribution)


def iter_leaves(node: Node):
    if node.is_leaf:
        yield node
        return
    yield from iter_leaves(node.left)
    yield from iter_leaves(node.right)


def tree_depth(node: Node) -> int:
    """Edges on the longest root-to-leaf path."""
    if node.is_leaf:
        return 0
    return 1 + max(tree_depth(node.left), tree_depth(node.right))
