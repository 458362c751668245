"""Dispatch of metric evaluation over a model and a dataset."""

import logging
from dataclasses import dataclass
from typing import Dict, Iterable, Optional

import mlflow
import numpy as np

from predeval.data.loader import Instances
from predeval.evaluation import metrics, rank
from predeval.evaluation.metrics import MetricKind
from predeval.exceptions import InvalidInputError, UnsupportedModeError
from predeval.models.base import Capability, Predictor

logger = logging.getLogger(__name__)

REQUIRED_CAPABILITY = {
    MetricKind.AUC: Capability.PREDICT_PROBABILITIES,
    MetricKind.ERROR: Capability.CLASSIFY,
    MetricKind.LOGISTIC_LOSS: Capability.REGRESS,
    MetricKind.MAE: Capability.REGRESS,
    MetricKind.RMSE: Capability.REGRESS,
}


@dataclass(frozen=True)
class MlflowTracking:
    """Where to log evaluation results in MLflow."""

    tracking_uri: str = "sqlite:///mlflow.db"
    experiment_name: str = "model_evaluation"
    run_name: Optional[str] = None


@dataclass(frozen=True)
class EvaluationResult:
    """A metric value with the per-instance values it was computed from."""

    kind: MetricKind
    value: float
    predictions: np.ndarray
    targets: np.ndarray


class Evaluator:
    """Evaluate a predictor on a dataset with a chosen metric.

    Target encoding per metric:
    - AUC: a target equal to ``positive_label`` is positive, anything else
      negative; scored with the positive-class probability.
    - ERROR: predicted labels are compared to the raw targets.
    - LOGISTIC_LOSS: targets are mapped to +1 (equal to ``positive_label``)
      or -1 (anything else); scored with the raw regression margin.
    - MAE, RMSE: raw targets against the regression output.

    AUC and logistic loss depend on which class the model's scores favour,
    so a model that declares a different ``positive_label`` is rejected.
    """

    def __init__(
        self,
        positive_label: float = rank.POSITIVE_LABEL,
        tracking: Optional[MlflowTracking] = None,
    ):
        """Initialize Evaluator.

        Args:
            positive_label: Target value marking the positive class.
            tracking: MLflow settings. If None, results are not logged to MLflow.
        """
        self.positive_label = positive_label
        self.tracking = tracking

    @staticmethod
    def required_capability(kind: MetricKind) -> Capability:
        """Return the predictor capability a metric needs."""
        return REQUIRED_CAPABILITY[kind]

    def check_supported(self, kind: MetricKind, model: Predictor) -> None:
        """Reject a metric the model cannot produce inputs for.

        Raises:
            UnsupportedModeError: If ``kind`` is not a MetricKind, the model
                lacks the required capability, or the model's scores favour a
                different positive label.
        """
        if not isinstance(kind, MetricKind):
            raise UnsupportedModeError(f"Unsupported metric: {kind!r}")

        capability = self.required_capability(kind)
        if not model.supports(capability):
            raise UnsupportedModeError(
                f"{kind.display_name} requires a model supporting {capability.value}; "
                f"{type(model).__name__} supports "
                f"{sorted(c.value for c in model.capabilities)}"
            )

        if kind in (MetricKind.AUC, MetricKind.LOGISTIC_LOSS):
            model_label = model.positive_label
            if model_label is not None and model_label != self.positive_label:
                raise UnsupportedModeError(
                    f"{kind.display_name} uses positive label {self.positive_label!r} "
                    f"but {type(model).__name__} scores towards {model_label!r}"
                )

    @staticmethod
    def check_not_empty(instances: Instances) -> None:
        """Reject an empty dataset before the model is asked to predict."""
        if len(instances) == 0:
            raise InvalidInputError("Cannot evaluate on an empty dataset")

    def encode_targets(self, kind: MetricKind, targets: np.ndarray) -> np.ndarray:
        """Map raw targets to the convention ``kind`` expects."""
        targets = np.asarray(targets, dtype=float)
        if kind is MetricKind.AUC:
            return (targets == self.positive_label).astype(float)
        if kind is MetricKind.LOGISTIC_LOSS:
            return np.where(targets == self.positive_label, 1.0, -1.0)
        return targets

    def predict_for(self, kind: MetricKind, model: Predictor, X: np.ndarray) -> np.ndarray:
        """Derive the per-instance values ``kind`` is computed from."""
        if kind is MetricKind.AUC:
            probabilities = np.asarray(model.predict_probabilities(X), dtype=float)
            return probabilities[:, 1]
        if kind is MetricKind.ERROR:
            return model.classify(X)
        return model.regress(X)

    def evaluate(self, kind: MetricKind, model: Predictor, instances: Instances) -> float:
        """Evaluate ``model`` on ``instances`` with one metric.

        Args:
            kind: Metric to compute.
            model: Predictor declaring the capability the metric needs.
            instances: Evaluation dataset.

        Returns:
            Metric value.

        Raises:
            UnsupportedModeError: If the model cannot serve the metric.
            InvalidInputError: If the dataset is empty.
            UndefinedMetricError: If AUC is requested on a single-class dataset.
        """
        return self.evaluate_detailed(kind, model, instances).value

    def evaluate_detailed(
        self, kind: MetricKind, model: Predictor, instances: Instances
    ) -> EvaluationResult:
        """Like ``evaluate``, but also return the scores and encoded targets.

        The model is queried once, so callers that plot or inspect the scores
        do not need to predict again.
        """
        self.check_supported(kind, model)
        self.check_not_empty(instances)
        result = self._compute(kind, model, instances)
        self._track({kind: result.value}, model, instances)
        return result

    def evaluate_many(
        self,
        kinds: Iterable[MetricKind],
        model: Predictor,
        instances: Instances,
    ) -> Dict[MetricKind, float]:
        """Evaluate several metrics on the same model and dataset.

        Every metric is checked against the model before any is computed, so a
        misconfigured request fails without partial results.

        Returns:
            Dictionary mapping each metric to its value.
        """
        kinds = list(kinds)
        for kind in kinds:
            self.check_supported(kind, model)
        self.check_not_empty(instances)

        results = {kind: self._compute(kind, model, instances).value for kind in kinds}
        self._track(results, model, instances)
        return results

    def eval_area_under_roc(self, model: Predictor, instances: Instances) -> float:
        return self.evaluate(MetricKind.AUC, model, instances)

    def eval_error(self, model: Predictor, instances: Instances) -> float:
        return self.evaluate(MetricKind.ERROR, model, instances)

    def eval_logistic_loss(self, model: Predictor, instances: Instances) -> float:
        return self.evaluate(MetricKind.LOGISTIC_LOSS, model, instances)

    def eval_mae(self, model: Predictor, instances: Instances) -> float:
        return self.evaluate(MetricKind.MAE, model, instances)

    def eval_rmse(self, model: Predictor, instances: Instances) -> float:
        return self.evaluate(MetricKind.RMSE, model, instances)

    def _compute(
        self, kind: MetricKind, model: Predictor, instances: Instances
    ) -> EvaluationResult:
        logger.debug(f"Computing {kind.display_name} on {len(instances)} instances")
        predictions = np.asarray(self.predict_for(kind, model, instances.features), dtype=float)
        targets = self.encode_targets(kind, instances.targets)
        value = metrics.compute_metric(kind, predictions, targets)
        return EvaluationResult(kind=kind, value=value, predictions=predictions, targets=targets)

    def _track(
        self,
        results: Dict[MetricKind, float],
        model: Predictor,
        instances: Instances,
    ) -> None:
        """Log results to MLflow. Tracking failures never affect the results."""
        if self.tracking is None:
            return

        try:
            mlflow.set_tracking_uri(self.tracking.tracking_uri)
            mlflow.set_experiment(self.tracking.experiment_name)
            with mlflow.start_run(run_name=self.tracking.run_name):
                mlflow.log_param("model_type", type(model).__name__)
                mlflow.log_param("n_instances", len(instances))
                mlflow.log_param("positive_label", self.positive_label)
                for kind, value in results.items():
                    mlflow.log_metric(kind.name.lower(), value)
        except Exception as e:
            logger.warning(f"Could not log results to MLflow: {e}")
