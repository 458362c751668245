"""Predictor interfaces and model loading."""

from .base import Capability, Predictor
from .io import read_predictor
from .sklearn_predictor import SklearnPredictor

__all__ = ["Capability", "Predictor", "SklearnPredictor", "read_predictor"]
