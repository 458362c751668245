"""Rank-based area under the ROC curve."""

from typing import Iterable, Optional, Tuple

import matplotlib.pyplot as plt
import numpy as np

from predeval.evaluation._validation import as_aligned_arrays, as_float_array
from predeval.exceptions import UndefinedMetricError

POSITIVE_LABEL = 1.0


def _as_pair(
    scores: Iterable[float],
    labels: Iterable[float],
) -> Tuple[np.ndarray, np.ndarray]:
    return as_aligned_arrays(scores, labels, names=("scores", "labels"))


def average_ranks(values: Iterable[float]) -> np.ndarray:
    """Assign 1-based ranks, averaging the ranks of tied values.

    Args:
        values: Values to rank.

    Returns:
        Array of ranks aligned with ``values``. A block of ``k`` equal values
        occupying sorted positions ``i+1 .. i+k`` all receive ``i + (k+1)/2``.
    """
    values = as_float_array(values)
    n = values.shape[0]
    order = np.argsort(values, kind="mergesort")
    sorted_values = values[order]

    ranks = np.empty(n, dtype=float)
    start = 0
    while start < n:
        end = start + 1
        while end < n and sorted_values[end] == sorted_values[start]:
            end += 1
        # positions start..end-1 hold ranks start+1..end
        ranks[order[start:end]] = (start + 1 + end) / 2.0
        start = end

    return ranks


def auc(
    scores: Iterable[float],
    labels: Iterable[float],
    positive_label: float = POSITIVE_LABEL,
) -> float:
    """Area under the ROC curve via the Mann-Whitney rank sum.

    Args:
        scores: Score per instance, higher meaning more likely positive.
        labels: Label per instance. Equal to ``positive_label`` means positive,
            anything else negative.
        positive_label: Value marking a positive label.

    Returns:
        AUC in [0, 1]. A fully tied score set yields 0.5.

    Raises:
        ShapeMismatchError: If scores and labels differ in length.
        InvalidInputError: If the input is empty.
        UndefinedMetricError: If either class is absent.
    """
    scores, labels = _as_pair(scores, labels)
    positive = labels == positive_label

    n_pos = int(positive.sum())
    n_neg = positive.shape[0] - n_pos
    if n_pos == 0 or n_neg == 0:
        raise UndefinedMetricError(
            f"AUC is undefined with {n_pos} positive and {n_neg} negative labels"
        )

    rank_sum = float(average_ranks(scores)[positive].sum())
    return (rank_sum - n_pos * (n_pos + 1) / 2.0) / (n_pos * n_neg)


def roc_curve_points(
    scores: Iterable[float],
    labels: Iterable[float],
    positive_label: float = POSITIVE_LABEL,
) -> Tuple[np.ndarray, np.ndarray]:
    """Compute the ROC curve vertices.

    Thresholds sweep from the highest score down. All instances sharing a
    score enter together, so a tied block produces one diagonal segment and
    the trapezoidal area under the returned points equals :func:`auc`.

    Returns:
        Tuple ``(fpr, tpr)``, both starting at 0 and ending at 1.

    Raises:
        Same conditions as :func:`auc`.
    """
    scores, labels = _as_pair(scores, labels)
    positive = labels == positive_label

    n_pos = int(positive.sum())
    n_neg = positive.shape[0] - n_pos
    if n_pos == 0 or n_neg == 0:
        raise UndefinedMetricError(
            f"ROC curve is undefined with {n_pos} positive and {n_neg} negative labels"
        )

    order = np.argsort(-scores, kind="mergesort")
    sorted_scores = scores[order]
    tps = np.cumsum(positive[order])
    fps = np.cumsum(~positive[order])

    # keep the last index of every distinct-score block
    last_of_block = np.r_[np.diff(sorted_scores) != 0, True]
    tpr = np.r_[0.0, tps[last_of_block] / n_pos]
    fpr = np.r_[0.0, fps[last_of_block] / n_neg]

    return fpr, tpr


def plot_roc_curve(
    scores: Iterable[float],
    labels: Iterable[float],
    title: str = "ROC Curve",
    ax: Optional[plt.Axes] = None,
    positive_label: float = POSITIVE_LABEL,
) -> plt.Axes:
    """Plot ROC curve with AUC score.

    Args:
        scores: Score per instance.
        labels: Label per instance.
        title: Plot title.
        ax: Matplotlib axes object. If None, creates new figure.
        positive_label: Value marking a positive label.

    Returns:
        Matplotlib axes object with the plot.
    """
    scores, labels = _as_pair(scores, labels)
    fpr, tpr = roc_curve_points(scores, labels, positive_label)
    roc_auc = auc(scores, labels, positive_label)

    if ax is None:
        fig, ax = plt.subplots(figsize=(8, 6))

    ax.plot(
        fpr,
        tpr,
        color="darkorange",
        lw=2,
        label=f"ROC curve (AUC = {roc_auc:.3f})",
    )
    ax.plot([0, 1], [0, 1], color="navy", lw=2, linestyle="--", label="Chance")
    ax.set_xlim([0.0, 1.0])
    ax.set_ylim([0.0, 1.05])
    ax.set_xlabel("False Positive Rate", fontsize=12)
    ax.set_ylabel("True Positive Rate", fontsize=12)
    ax.set_title(title, fontsize=14, fontweight="bold")
    ax.legend(loc="lower right", fontsize=10)
    ax.grid(True, alpha=0.3)

    return ax
