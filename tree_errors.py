class TreeError(Exception):
    """Base class for errors raised by the decision tree core."""


class ShapeMismatchError(TreeError, ValueError):
    """Features and labels (or a feature row and the tree) disagree in shape."""


class EmptyInputError(TreeError, ValueError):
    """A label vector or matrix with no rows was given where data is required."""


class UnfittedModelError(TreeError, RuntimeError):
    """Prediction was requested before the model was fitted."""
