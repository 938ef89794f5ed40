import argparse
import logging
import time
import sys
from pathlib import Path

import numpy as np

# Allow running as: python experiments/quick_tree_demo.py
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from decision_tree import DecisionTreeClassifier
from feature_matrix import FeatureMatrix
from tree_builder import Node


FAKE_MATRIX = "1 3; 2 3; 3 1; 3 1; 2 3"
FAKE_LABELS = [0, 0, 1, 1, 2]


def load_dataset(name, n_samples, n_features, n_classes, random_state):
    if name == "fake":
        return FeatureMatrix.from_string(FAKE_MATRIX), np.array(FAKE_LABELS, dtype=np.int64)
    if name == "random":
        rng = np.random.default_rng(random_state)
        x = FeatureMatrix.from_random(n_samples, n_features, rng)
        y = rng.integers(0, n_classes, size=n_samples)
        return x, y
    raise ValueError(f"Unknown dataset: {name}")


def format_tree(node: Node, indent=""):
    if node.is_leaf:
        probs = ", ".join(f"{c}: {p:.3f}" for c, p in node.distribution.items())
        return f"{indent}Leaf(n={node.n_samples}, {{{probs}}})"
    head = f"{indent}[feature {node.feature} <= {node.threshold:.4f}] n={node.n_samples}"
    left = format_tree(node.left, indent + "  ")
    right = format_tree(node.right, indent + "  ")
    return "\n".join([head, left, right])


def main():
    parser = argparse.ArgumentParser(description="Fit a CART classifier on a small dataset")
    parser.add_argument(
        "--dataset",
        type=str,
        default="fake",
        help="One of: fake (the 5x2 toy matrix), random",
    )
    parser.add_argument("--n-samples", type=int, default=50)
    parser.add_argument("--n-features", type=int, default=3)
    parser.add_argument("--n-classes", type=int, default=2)
    parser.add_argument("--max-depth", type=int, default=1)
    parser.add_argument("--min-samples-split", type=int, default=2)
    parser.add_argument("--criterion", type=str, default="gini", help="gini or entropy")
    parser.add_argument("--random-state", type=int, default=42)
    parser.add_argument("--log-level", type=str, default="WARNING")

    args = parser.parse_args()
    logging.basicConfig(level=args.log_level.upper())

    x, y = load_dataset(
        args.dataset,
        args.n_samples,
        args.n_features,
        args.n_classes,
        args.random_state,
    )
    print(f"Dataset={args.dataset} n={x.rows} d={x.cols}")
    print(f"X =\n{x.values}")
    print(f"y = {y.tolist()}")

    model = DecisionTreeClassifier(
        max_depth=args.max_depth,
        min_samples_split=args.min_samples_split,
        criterion=args.criterion,
    )
    t0 = time.perf_counter()
    model.fit(x, y)
    fit_time = time.perf_counter() - t0

    print(f"\nModel: {model} fit_time={fit_time:.4f}s")
    print(format_tree(model.root))

    probs = model.predict_proba(x)
    preds = model.predict(x)
    print("\nPrediction:")
    for i, (dist, label) in enumerate(zip(probs, preds)):
        print(f"  row {i}: predict={label} proba={dist}")
    print(f"train_accuracy={float(np.mean(preds == y)):.4f}")


if __name__ == "__main__":
    main()
