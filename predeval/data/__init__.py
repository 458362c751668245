"""Evaluation dataset loading."""

from .loader import Instances, read_attributes, read_instances

__all__ = ["Instances", "read_attributes", "read_instances"]
