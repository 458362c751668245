"""Adapter exposing fitted scikit-learn estimators as predictors."""

import logging
from typing import Any, FrozenSet, Optional

import numpy as np
from sklearn.base import is_classifier, is_regressor

from predeval.exceptions import UnsupportedModeError
from predeval.models.base import Capability, Predictor

logger = logging.getLogger(__name__)


class SklearnPredictor(Predictor):
    """Wrap a fitted scikit-learn estimator.

    Capabilities are derived from the estimator type:
    - regressors support ``regress``
    - classifiers support ``classify``
    - binary classifiers whose ``classes_`` contain ``positive_label`` also
      support ``regress`` (the ``decision_function`` margin, signed so that
      positive favours ``positive_label``) and ``predict_probabilities``
      (``predict_proba`` reordered to ``[p_negative, p_positive]``)
    """

    def __init__(self, estimator: Any, positive_label: float = 1.0):
        """Initialize SklearnPredictor.

        Args:
            estimator: Fitted scikit-learn estimator.
            positive_label: Class treated as positive by ``regress`` and
                ``predict_probabilities`` on classifiers.
        """
        self.estimator = estimator
        self.positive_label = positive_label if is_classifier(estimator) else None
        self._positive_index = self._find_positive_index(estimator, positive_label)
        self._capabilities = self._detect_capabilities(estimator, self._positive_index)
        logger.debug(
            f"Wrapped {type(estimator).__name__} with capabilities "
            f"{sorted(c.value for c in self._capabilities)}"
        )

    @staticmethod
    def _find_positive_index(estimator: Any, positive_label: float) -> Optional[int]:
        """Return the column of ``positive_label`` for a binary classifier, else None."""
        if not is_classifier(estimator):
            return None
        classes = list(getattr(estimator, "classes_", []))
        if len(classes) != 2 or positive_label not in classes:
            return None
        return classes.index(positive_label)

    @staticmethod
    def _detect_capabilities(
        estimator: Any, positive_index: Optional[int]
    ) -> FrozenSet[Capability]:
        capabilities = set()
        if is_regressor(estimator):
            capabilities.add(Capability.REGRESS)
        elif is_classifier(estimator):
            capabilities.add(Capability.CLASSIFY)
            if positive_index is not None:
                if hasattr(estimator, "decision_function"):
                    capabilities.add(Capability.REGRESS)
                if hasattr(estimator, "predict_proba"):
                    capabilities.add(Capability.PREDICT_PROBABILITIES)
        else:
            # Unknown estimator type: assume predict() is a regression output
            if hasattr(estimator, "predict"):
                capabilities.add(Capability.REGRESS)
        return frozenset(capabilities)

    @property
    def capabilities(self) -> FrozenSet[Capability]:
        return self._capabilities

    def _require(self, capability: Capability) -> None:
        if capability in self._capabilities:
            return
        message = f"{type(self.estimator).__name__} does not support {capability.value}"
        if is_classifier(self.estimator) and capability is not Capability.CLASSIFY:
            classes = list(getattr(self.estimator, "classes_", []))
            message += (
                f" (needs a binary classifier with positive label "
                f"{self.positive_label!r} in classes {classes})"
            )
        raise UnsupportedModeError(message)

    def regress(self, X: np.ndarray) -> np.ndarray:
        self._require(Capability.REGRESS)
        if is_classifier(self.estimator):
            margin = np.asarray(self.estimator.decision_function(X), dtype=float)
            # decision_function favours classes_[1]
            return margin if self._positive_index == 1 else -margin
        return np.asarray(self.estimator.predict(X), dtype=float)

    def classify(self, X: np.ndarray) -> np.ndarray:
        self._require(Capability.CLASSIFY)
        return np.asarray(self.estimator.predict(X), dtype=float)

    def predict_probabilities(self, X: np.ndarray) -> np.ndarray:
        self._require(Capability.PREDICT_PROBABILITIES)
        probabilities = np.asarray(self.estimator.predict_proba(X), dtype=float)
        positive = probabilities[:, self._positive_index]
        return np.column_stack([1.0 - positive, positive])
