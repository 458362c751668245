"""Abstract predictor interface with declared capabilities."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import FrozenSet, Optional

import numpy as np

from predeval.exceptions import UnsupportedModeError


class Capability(Enum):
    """Kinds of output a predictor can produce."""

    REGRESS = "regress"
    CLASSIFY = "classify"
    PREDICT_PROBABILITIES = "predict_probabilities"


class Predictor(ABC):
    """Abstract base class for models under evaluation.

    A predictor declares up front which outputs it supports, so the evaluator
    can reject an incompatible metric before making any prediction.
    Subclasses override the methods matching their declared capabilities:
    - ``regress``: continuous output (or a raw classification margin)
    - ``classify``: discrete class labels
    - ``predict_probabilities``: ``(n_samples, 2)`` array of
      ``[p_negative, p_positive]``

    Predictors whose scores are oriented towards a particular class set
    ``positive_label``. ``None`` means the orientation is left to the caller.
    """

    positive_label: Optional[float] = None

    @property
    @abstractmethod
    def capabilities(self) -> FrozenSet[Capability]:
        """Return the set of outputs this predictor supports."""
        pass

    def supports(self, capability: Capability) -> bool:
        return capability in self.capabilities

    def regress(self, X: np.ndarray) -> np.ndarray:
        """Predict a continuous value per row of ``X``."""
        raise UnsupportedModeError(f"{type(self).__name__} does not support regress")

    def classify(self, X: np.ndarray) -> np.ndarray:
        """Predict a class label per row of ``X``."""
        raise UnsupportedModeError(f"{type(self).__name__} does not support classify")

    def predict_probabilities(self, X: np.ndarray) -> np.ndarray:
        """Predict ``[p_negative, p_positive]`` per row of ``X``."""
        raise UnsupportedModeError(
            f"{type(self).__name__} does not support predict_probabilities"
        )
