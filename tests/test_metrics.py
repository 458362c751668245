"""Unit tests for the scalar metric reducers."""

import math

import numpy as np
import pandas as pd
import pytest

from predeval.evaluation.metrics import (
    MetricKind,
    classification_error,
    compute_metric,
    logistic_loss,
    mae,
    rmse,
)
from predeval.exceptions import InvalidInputError, ShapeMismatchError, UnsupportedModeError


class TestRegressionMetrics:
    """Test suite for rmse and mae."""

    def test_rmse_example(self):
        assert rmse([1, 2, 3], [1, 2, 4]) == pytest.approx(math.sqrt(1.0 / 3.0))

    def test_mae_example(self):
        assert mae([1, 2, 3], [1, 2, 4]) == pytest.approx(1.0 / 3.0)

    def test_perfect_predictions(self):
        assert rmse([0.5, 1.5], [0.5, 1.5]) == 0.0
        assert mae([0.5, 1.5], [0.5, 1.5]) == 0.0

    def test_rmse_dominates_mae(self):
        """RMSE is never smaller than MAE on the same data."""
        np.random.seed(42)
        preds = np.random.normal(size=100)
        targets = np.random.normal(size=100)
        assert rmse(preds, targets) >= mae(preds, targets)

    def test_accepts_pandas_and_generators(self):
        preds = pd.Series([1.0, 2.0, 3.0])
        targets = (t for t in [1.0, 2.0, 4.0])
        assert mae(preds, targets) == pytest.approx(1.0 / 3.0)

    def test_deterministic(self):
        preds, targets = [0.1, 0.7, 2.5], [0.0, 1.0, 2.0]
        assert rmse(preds, targets) == rmse(preds, targets)

    @pytest.mark.parametrize("metric", [rmse, mae, classification_error, logistic_loss])
    def test_length_mismatch(self, metric):
        with pytest.raises(ShapeMismatchError, match="same length"):
            metric([1, 1, 1], [1, 1, 1, 1])

    @pytest.mark.parametrize("metric", [rmse, mae, classification_error, logistic_loss])
    def test_empty_input(self, metric):
        with pytest.raises(InvalidInputError, match="must not be empty"):
            metric([], [])

    def test_two_dimensional_predictions_rejected(self):
        """Per-class margins are not flattened into extra instances."""
        with pytest.raises(ShapeMismatchError, match="one value per instance"):
            rmse(np.zeros((3, 2)), np.zeros(6))


class TestClassificationError:
    """Test suite for classification_error."""

    def test_example(self):
        assert classification_error([1, 0, 1, 1], [1, 1, 1, 0]) == 0.5

    def test_exact_equality(self):
        """No tolerance: a near-miss label is an error."""
        assert classification_error([1.0000001, 0.0], [1.0, 0.0]) == 0.5

    def test_no_errors(self):
        assert classification_error([2, 0, 1], [2, 0, 1]) == 0.0


class TestLogisticLoss:
    """Test suite for logistic_loss."""

    def test_zero_margin(self):
        """A zero margin costs log(2) regardless of the target sign."""
        assert logistic_loss([0.0], [1]) == pytest.approx(math.log(2))
        assert logistic_loss([0.0], [-1]) == pytest.approx(math.log(2))

    def test_matches_naive_formula(self):
        preds = [0.5, -1.2, 2.0]
        targets = [1, -1, -1]
        expected = np.mean([math.log(1 + math.exp(-t * p)) for p, t in zip(preds, targets)])
        assert logistic_loss(preds, targets) == pytest.approx(expected)

    def test_large_margins_stay_finite(self):
        """Large margins neither overflow nor underflow."""
        assert logistic_loss([1000.0], [-1]) == pytest.approx(1000.0)
        assert logistic_loss([1000.0], [1]) == pytest.approx(0.0, abs=1e-12)
        assert math.isfinite(logistic_loss([-1e6, 1e6], [1, -1]))

    def test_rejects_zero_one_targets(self):
        """Targets must use the {-1, +1} convention."""
        with pytest.raises(InvalidInputError, match="-1, \\+1"):
            logistic_loss([0.3, 0.2], [0, 1])


class TestMetricKind:
    """Test suite for MetricKind and compute_metric."""

    @pytest.mark.parametrize(
        "code,kind",
        [
            ("a", MetricKind.AUC),
            ("c", MetricKind.ERROR),
            ("l", MetricKind.LOGISTIC_LOSS),
            ("m", MetricKind.MAE),
            ("r", MetricKind.RMSE),
        ],
    )
    def test_from_code(self, code, kind):
        assert MetricKind.from_code(code) is kind

    def test_display_names(self):
        assert [k.display_name for k in MetricKind] == [
            "AUC",
            "Error",
            "Logistic Loss",
            "MAE",
            "RMSE",
        ]

    def test_unknown_code(self):
        with pytest.raises(UnsupportedModeError, match="Unsupported metric code"):
            MetricKind.from_code("x")

    def test_compute_metric_routes(self):
        assert compute_metric(MetricKind.AUC, [0.5, 0.5, 0.5, 0.9], [0, 1, 1, 1]) == pytest.approx(
            2.0 / 3.0
        )
        assert compute_metric(MetricKind.ERROR, [1, 0, 1, 1], [1, 1, 1, 0]) == 0.5
        assert compute_metric(MetricKind.LOGISTIC_LOSS, [0.0], [1]) == pytest.approx(math.log(2))
        assert compute_metric(MetricKind.MAE, [1, 2, 3], [1, 2, 4]) == pytest.approx(1.0 / 3.0)
        assert compute_metric(MetricKind.RMSE, [1, 2, 3], [1, 2, 4]) == pytest.approx(
            math.sqrt(1.0 / 3.0)
        )

    def test_compute_metric_rejects_strings(self):
        with pytest.raises(UnsupportedModeError):
            compute_metric("rmse", [1.0], [1.0])
