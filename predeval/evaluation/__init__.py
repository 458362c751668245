"""Evaluation metrics and model assessment utilities."""

from .evaluator import EvaluationResult, Evaluator, MlflowTracking
from .metrics import (
    MetricKind,
    classification_error,
    compute_metric,
    logistic_loss,
    mae,
    rmse,
)
from .rank import auc, average_ranks, plot_roc_curve, roc_curve_points

__all__ = [
    "EvaluationResult",
    "Evaluator",
    "MlflowTracking",
    "MetricKind",
    "auc",
    "average_ranks",
    "classification_error",
    "compute_metric",
    "logistic_loss",
    "mae",
    "plot_roc_curve",
    "rmse",
    "roc_curve_points",
]
