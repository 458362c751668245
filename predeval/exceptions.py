"""Exceptions raised by metric computation and dispatch."""


class EvaluationError(ValueError):
    """Base class for all evaluation precondition violations."""


class ShapeMismatchError(EvaluationError):
    """Prediction and target sequences have different lengths."""


class InvalidInputError(EvaluationError):
    """Input is empty or holds values outside the metric's convention."""


class UndefinedMetricError(EvaluationError):
    """The metric has no defined value for the given input.

    Raised by AUC when the labels contain only one class.
    """


class UnsupportedModeError(EvaluationError):
    """Unknown metric selector, or a model lacking the required capability."""
