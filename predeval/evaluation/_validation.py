"""Input coercion shared by the rank metric and the scalar reducers."""

from typing import Iterable, Tuple

import numpy as np

from predeval.exceptions import InvalidInputError, ShapeMismatchError


def as_float_array(values: Iterable[float]) -> np.ndarray:
    """Materialize any ordered iterable (including generators) as a 1-D array.

    Raises:
        ShapeMismatchError: If the values have more than one dimension, such
            as per-class margins of a multi-class model.
    """
    if not hasattr(values, "__len__"):
        values = list(values)
    array = np.asarray(values, dtype=float)
    if array.ndim > 1:
        raise ShapeMismatchError(f"expected one value per instance, got shape {array.shape}")
    return array.ravel()


def as_aligned_arrays(
    first: Iterable[float],
    second: Iterable[float],
    names: Tuple[str, str] = ("predictions", "targets"),
) -> Tuple[np.ndarray, np.ndarray]:
    """Coerce two index-aligned sequences to float arrays.

    Raises:
        ShapeMismatchError: If the sequences differ in length.
        InvalidInputError: If the sequences are empty.
    """
    first = as_float_array(first)
    second = as_float_array(second)

    if first.shape[0] != second.shape[0]:
        raise ShapeMismatchError(
            f"{names[0]} and {names[1]} must have the same length "
            f"({first.shape[0]} != {second.shape[0]})"
        )
    if first.shape[0] == 0:
        raise InvalidInputError(f"{names[0]} and {names[1]} must not be empty")

    return first, second
