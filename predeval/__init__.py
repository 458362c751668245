"""Scalar performance metrics for trained classifiers and regressors."""

__version__ = "0.1.0"
