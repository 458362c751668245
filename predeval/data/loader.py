"""Loading evaluation datasets."""

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Union

import numpy as np
import pandas as pd
import polars as pl
import yaml

from predeval.exceptions import ShapeMismatchError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Instances:
    """Evaluation dataset: a feature matrix with one target per row."""

    features: np.ndarray
    targets: np.ndarray
    feature_names: List[str] = field(default_factory=list)

    def __post_init__(self):
        features = np.asarray(self.features, dtype=float)
        if features.ndim == 1:
            features = features.reshape(-1, 1)
        targets = np.asarray(self.targets, dtype=float).ravel()

        if features.shape[0] != targets.shape[0]:
            raise ShapeMismatchError(
                f"features and targets must have the same length "
                f"({features.shape[0]} != {targets.shape[0]})"
            )

        object.__setattr__(self, "features", features)
        object.__setattr__(self, "targets", targets)
        if not self.feature_names:
            object.__setattr__(
                self, "feature_names", [f"x{i}" for i in range(features.shape[1])]
            )

    def __len__(self) -> int:
        return self.targets.shape[0]

    @classmethod
    def from_frame(
        cls,
        df: pd.DataFrame,
        target: str,
        features: Optional[List[str]] = None,
    ) -> "Instances":
        """Build Instances from an in-memory pandas DataFrame.

        Args:
            df: DataFrame holding feature and target columns.
            target: Target column name.
            features: Feature columns. Defaults to every column but the target.

        Raises:
            ValueError: If a named column is missing.
        """
        if features is None:
            features = [col for col in df.columns if col != target]

        missing = [col for col in [target, *features] if col not in df.columns]
        if missing:
            raise ValueError(f"Columns not found in DataFrame: {missing}")

        return cls(
            features=df[features].to_numpy(dtype=float),
            targets=df[target].to_numpy(dtype=float),
            feature_names=[str(col) for col in features],
        )


def read_attributes(attribute_path: Union[str, Path]) -> dict:
    """Read an attribute file describing the dataset columns.

    The file is YAML with a ``target`` key naming the target column and an
    optional ``features`` list restricting and ordering the feature columns.

    Args:
        attribute_path: Path to the YAML attribute file.

    Returns:
        Dictionary with ``target`` and ``features`` (None when not given).
    """
    with open(attribute_path) as f:
        attributes = yaml.safe_load(f) or {}

    if "target" not in attributes:
        raise ValueError(f"Attribute file {attribute_path} must define 'target'")

    return {
        "target": attributes["target"],
        "features": attributes.get("features"),
    }


def _read_frame(data_path: Path) -> pl.DataFrame:
    suffix = data_path.suffix.lower()
    if suffix == ".parquet":
        return pl.read_parquet(data_path)
    if suffix in (".tsv", ".txt"):
        return pl.read_csv(data_path, separator="\t")
    return pl.read_csv(data_path)


def read_instances(
    data_path: Union[str, Path],
    attribute_path: Optional[Union[str, Path]] = None,
    target: Optional[str] = None,
) -> Instances:
    """Read a dataset file into Instances.

    Without an attribute file or explicit ``target``, the last column is the
    target and every other column is a feature.

    Args:
        data_path: CSV, TSV or Parquet file.
        attribute_path: Optional YAML attribute file (see read_attributes).
        target: Target column name. Overrides the attribute file.

    Returns:
        Instances built from the file.

    Raises:
        FileNotFoundError: If data_path does not exist.
        ValueError: If a named column is missing from the file.
    """
    data_path = Path(data_path)
    if not data_path.exists():
        raise FileNotFoundError(f"Data file not found: {data_path}")

    df = _read_frame(data_path)
    logger.info(f"Loaded {data_path} with shape {df.shape}")

    feature_cols = None
    if attribute_path is not None:
        attributes = read_attributes(attribute_path)
        target = target or attributes["target"]
        feature_cols = attributes["features"]

    if target is None:
        target = df.columns[-1]
    if feature_cols is None:
        feature_cols = [col for col in df.columns if col != target]

    missing = [col for col in [target, *feature_cols] if col not in df.columns]
    if missing:
        raise ValueError(f"Columns not found in {data_path}: {missing}")

    logger.debug(f"Target column: {target}; {len(feature_cols)} feature columns")

    return Instances(
        features=df.select(feature_cols).to_numpy(),
        targets=df.get_column(target).to_numpy(),
        feature_names=list(feature_cols),
    )
