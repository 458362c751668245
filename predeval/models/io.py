"""Reading fitted models from disk."""

import logging
import pickle
from pathlib import Path
from typing import Union

from predeval.models.base import Predictor
from predeval.models.sklearn_predictor import SklearnPredictor

logger = logging.getLogger(__name__)


def read_predictor(
    model_path: Union[str, Path], positive_label: float = 1.0
) -> Predictor:
    """Load a pickled model and expose it as a Predictor.

    Args:
        model_path: Path to a pickle holding either a Predictor or a fitted
            scikit-learn estimator.
        positive_label: Class that wrapped classifiers score towards.

    Returns:
        Predictor instance. Estimators are wrapped in SklearnPredictor.

    Raises:
        FileNotFoundError: If the file does not exist.
    """
    model_path = Path(model_path)
    if not model_path.exists():
        raise FileNotFoundError(f"Model file not found: {model_path}")

    with open(model_path, "rb") as f:
        model = pickle.load(f)

    logger.info(f"Loaded {type(model).__name__} from {model_path}")

    if isinstance(model, Predictor):
        return model
    return SklearnPredictor(model, positive_label=positive_label)
