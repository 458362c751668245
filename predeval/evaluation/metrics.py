"""Scalar evaluation metrics for regressors and classifiers."""

from enum import Enum
from typing import Iterable

import numpy as np

from predeval.evaluation import rank
from predeval.evaluation._validation import as_aligned_arrays
from predeval.exceptions import InvalidInputError, UnsupportedModeError


class MetricKind(Enum):
    """Metrics the evaluator can compute.

    Each member carries its display name and its one-letter command line code.
    """

    AUC = ("AUC", "a")
    ERROR = ("Error", "c")
    LOGISTIC_LOSS = ("Logistic Loss", "l")
    MAE = ("MAE", "m")
    RMSE = ("RMSE", "r")

    def __init__(self, display_name: str, code: str):
        self.display_name = display_name
        self.code = code

    @classmethod
    def from_code(cls, code: str) -> "MetricKind":
        """Look up a metric by its command line code.

        Raises:
            UnsupportedModeError: If no metric uses ``code``.
        """
        for kind in cls:
            if kind.code == code:
                return kind
        valid = ", ".join(f"{kind.code} ({kind.display_name})" for kind in cls)
        raise UnsupportedModeError(f"Unsupported metric code: {code!r}. Expected one of: {valid}")


def rmse(predictions: Iterable[float], targets: Iterable[float]) -> float:
    """Root mean squared error.

    Args:
        predictions: Continuous regression outputs.
        targets: Ground truth values.

    Returns:
        ``sqrt(mean((target - prediction) ** 2))``.

    Raises:
        ShapeMismatchError: If the inputs differ in length.
        InvalidInputError: If the inputs are empty.
    """
    predictions, targets = as_aligned_arrays(predictions, targets)
    diff = targets - predictions
    return float(np.sqrt(np.mean(diff * diff)))


def mae(predictions: Iterable[float], targets: Iterable[float]) -> float:
    """Mean absolute error.

    Raises:
        ShapeMismatchError: If the inputs differ in length.
        InvalidInputError: If the inputs are empty.
    """
    predictions, targets = as_aligned_arrays(predictions, targets)
    return float(np.mean(np.abs(targets - predictions)))


def classification_error(predictions: Iterable[float], targets: Iterable[float]) -> float:
    """Fraction of predicted labels that differ from the target labels.

    Labels are compared with exact equality, so predictions and targets must
    share a label encoding.

    Raises:
        ShapeMismatchError: If the inputs differ in length.
        InvalidInputError: If the inputs are empty.
    """
    predictions, targets = as_aligned_arrays(predictions, targets)
    return float(np.mean(predictions != targets))


def logistic_loss(predictions: Iterable[float], targets: Iterable[float]) -> float:
    """Mean logistic loss of raw margins.

    Computes ``mean(log(1 + exp(-target * prediction)))`` as
    ``logaddexp(0, -target * prediction)``, which stays finite for margins of
    any magnitude.

    Args:
        predictions: Raw (unsquashed) margins.
        targets: Labels in {-1, +1}.

    Returns:
        Mean logistic loss.

    Raises:
        ShapeMismatchError: If the inputs differ in length.
        InvalidInputError: If the inputs are empty or a target is not -1 or +1.
    """
    predictions, targets = as_aligned_arrays(predictions, targets)

    if not np.all(np.abs(targets) == 1.0):
        bad = np.unique(targets[np.abs(targets) != 1.0])
        raise InvalidInputError(
            f"logistic loss expects targets in {{-1, +1}}, got {bad.tolist()}"
        )

    return float(np.mean(np.logaddexp(0.0, -targets * predictions)))


def compute_metric(
    kind: MetricKind,
    predictions: Iterable[float],
    targets: Iterable[float],
) -> float:
    """Route already-derived per-instance values to the matching metric.

    Args:
        kind: Metric to compute.
        predictions: Positive-class scores for AUC, labels for ERROR,
            raw outputs otherwise.
        targets: Targets in the convention the metric expects: 1 marks a
            positive for AUC, {-1, +1} for LOGISTIC_LOSS.

    Returns:
        Metric value.
    """
    if kind is MetricKind.AUC:
        return rank.auc(predictions, targets)
    if kind is MetricKind.ERROR:
        return classification_error(predictions, targets)
    if kind is MetricKind.LOGISTIC_LOSS:
        return logistic_loss(predictions, targets)
    if kind is MetricKind.MAE:
        return mae(predictions, targets)
    if kind is MetricKind.RMSE:
        return rmse(predictions, targets)
    raise UnsupportedModeError(f"Unsupported metric: {kind!r}")
