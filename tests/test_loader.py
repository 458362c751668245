"""Tests for dataset loading."""

import numpy as np
import pandas as pd
import polars as pl
import pytest
import yaml

from predeval.data.loader import Instances, read_attributes, read_instances
from predeval.exceptions import ShapeMismatchError


@pytest.fixture
def sample_frame():
    """Small dataset with two features and a binary label."""
    return pl.DataFrame(
        {
            "hours": [1.0, 2.5, 3.0, 4.5],
            "score": [10.0, 20.0, 30.0, 40.0],
            "label": [0, 0, 1, 1],
        }
    )


@pytest.fixture
def csv_path(tmp_path, sample_frame):
    path = tmp_path / "data.csv"
    sample_frame.write_csv(path)
    return path


class TestInstances:
    """Test suite for the Instances container."""

    def test_shapes(self):
        instances = Instances(features=np.zeros((3, 2)), targets=[1, 0, 1])
        assert len(instances) == 3
        assert instances.feature_names == ["x0", "x1"]
        assert instances.targets.dtype == float

    def test_one_dimensional_features(self):
        instances = Instances(features=[0.1, 0.2], targets=[0, 1])
        assert instances.features.shape == (2, 1)

    def test_length_mismatch(self):
        with pytest.raises(ShapeMismatchError, match="same length"):
            Instances(features=np.zeros((3, 2)), targets=[1, 0, 1, 0])

    def test_from_frame(self):
        df = pd.DataFrame({"a": [1, 2], "b": [3, 4], "y": [0, 1]})
        instances = Instances.from_frame(df, target="y")
        np.testing.assert_array_equal(instances.features, [[1, 3], [2, 4]])
        np.testing.assert_array_equal(instances.targets, [0, 1])
        assert instances.feature_names == ["a", "b"]

    def test_from_frame_missing_column(self):
        df = pd.DataFrame({"a": [1, 2], "y": [0, 1]})
        with pytest.raises(ValueError, match="Columns not found"):
            Instances.from_frame(df, target="y", features=["a", "z"])


class TestReadInstances:
    """Test suite for read_instances."""

    def test_last_column_is_target(self, csv_path):
        instances = read_instances(csv_path)
        assert instances.feature_names == ["hours", "score"]
        np.testing.assert_array_equal(instances.targets, [0, 0, 1, 1])
        assert instances.features.shape == (4, 2)

    def test_explicit_target(self, csv_path):
        instances = read_instances(csv_path, target="hours")
        assert instances.feature_names == ["score", "label"]
        np.testing.assert_array_equal(instances.targets, [1.0, 2.5, 3.0, 4.5])

    def test_attribute_file(self, tmp_path, csv_path):
        attr_path = tmp_path / "attributes.yaml"
        attr_path.write_text(yaml.safe_dump({"target": "label", "features": ["score"]}))

        instances = read_instances(csv_path, attribute_path=attr_path)
        assert instances.feature_names == ["score"]
        np.testing.assert_array_equal(instances.features[:, 0], [10, 20, 30, 40])

    def test_parquet(self, tmp_path, sample_frame):
        path = tmp_path / "data.parquet"
        sample_frame.write_parquet(path)
        instances = read_instances(path)
        assert len(instances) == 4

    def test_tsv(self, tmp_path, sample_frame):
        path = tmp_path / "data.tsv"
        sample_frame.write_csv(path, separator="\t")
        instances = read_instances(path)
        assert instances.feature_names == ["hours", "score"]

    def test_unknown_column(self, csv_path):
        with pytest.raises(ValueError, match="Columns not found"):
            read_instances(csv_path, target="missing")

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError, match="Data file not found"):
            read_instances(tmp_path / "missing.csv")


class TestReadAttributes:
    """Test suite for read_attributes."""

    def test_features_optional(self, tmp_path):
        path = tmp_path / "attributes.yaml"
        path.write_text("target: y\n")
        assert read_attributes(path) == {"target": "y", "features": None}

    def test_target_required(self, tmp_path):
        path = tmp_path / "attributes.yaml"
        path.write_text("features: [a, b]\n")
        with pytest.raises(ValueError, match="must define 'target'"):
            read_attributes(path)
