"""Evaluation settings loaded from YAML."""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Union

import yaml

from predeval.evaluation.evaluator import MlflowTracking
from predeval.evaluation.metrics import MetricKind

DEFAULT_CONFIG_PATH = Path(__file__).parent / "configs" / "evaluation.yaml"


@dataclass(frozen=True)
class EvaluationConfig:
    """Settings for command line evaluation runs."""

    default_metric: str = MetricKind.RMSE.code
    positive_label: float = 1.0
    log_level: str = "INFO"
    mlflow_enabled: bool = False
    mlflow_tracking_uri: str = "sqlite:///mlflow.db"
    mlflow_experiment_name: str = "model_evaluation"

    def __post_init__(self):
        # fail at load time rather than at evaluation time
        MetricKind.from_code(self.default_metric)

    @property
    def default_kind(self) -> MetricKind:
        return MetricKind.from_code(self.default_metric)

    def tracking(self) -> Optional[MlflowTracking]:
        """Return MLflow settings, or None when tracking is disabled."""
        if not self.mlflow_enabled:
            return None
        return MlflowTracking(
            tracking_uri=self.mlflow_tracking_uri,
            experiment_name=self.mlflow_experiment_name,
        )

    @classmethod
    def from_dict(cls, raw: dict) -> "EvaluationConfig":
        """Build settings from a parsed YAML mapping. Unknown keys are ignored."""
        mlflow_cfg = raw.get("mlflow") or {}
        defaults = cls()
        return cls(
            default_metric=str(raw.get("default_metric", defaults.default_metric)),
            positive_label=float(raw.get("positive_label", defaults.positive_label)),
            log_level=str(raw.get("log_level", defaults.log_level)).upper(),
            mlflow_enabled=bool(mlflow_cfg.get("enabled", defaults.mlflow_enabled)),
            mlflow_tracking_uri=mlflow_cfg.get("tracking_uri", defaults.mlflow_tracking_uri),
            mlflow_experiment_name=mlflow_cfg.get(
                "experiment_name", defaults.mlflow_experiment_name
            ),
        )


def load_config(config_path: Optional[Union[str, Path]] = None) -> EvaluationConfig:
    """Load evaluation settings from a YAML file.

    Args:
        config_path: YAML file to read. If None, the packaged
            ``predeval/configs/evaluation.yaml`` is used when present,
            otherwise the built-in defaults.

    Returns:
        EvaluationConfig instance.

    Raises:
        FileNotFoundError: If an explicit config_path does not exist.
        UnsupportedModeError: If default_metric is not a known metric code.
    """
    if config_path is None:
        if not DEFAULT_CONFIG_PATH.exists():
            return EvaluationConfig()
        config_path = DEFAULT_CONFIG_PATH

    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path) as f:
        raw = yaml.safe_load(f) or {}

    return EvaluationConfig.from_dict(raw)
