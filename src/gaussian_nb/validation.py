"""Input checks shared by training, inference and scoring."""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Optional

from .errors import EmptyInputError, NonFiniteFeatureError, ShapeMismatchError


def check_feature_matrix(
    X: Sequence[Sequence[float]],
    n_attributes: Optional[int] = None,
    name: str = "X",
) -> list[list[float]]:
    """Validate a feature matrix and return it as a list of float rows.

    Args:
        X: Sequence of feature vectors.
        n_attributes: Required row length, or ``None`` to take it from the
            first row.
        name: Argument name used in error messages.

    Returns:
        The rows converted to ``list[float]``.

    Raises:
        EmptyInputError: If ``X`` has no rows or its rows are empty.
        ShapeMismatchError: If rows have differing lengths, or a length
            other than ``n_attributes``.
        NonFiniteFeatureError: If any value is NaN or infinite.
    """
    if len(X) == 0:
        raise EmptyInputError(f"{name} contains no rows")

    expected = len(X[0]) if n_attributes is None else n_attributes
    if expected == 0:
        raise EmptyInputError(f"{name} rows contain no attributes")

    rows: list[list[float]] = []
    for i, row in enumerate(X):
        if len(row) != expected:
            raise ShapeMismatchError(
                f"{name} row {i} has {len(row)} attributes, expected {expected}"
            )
        values = [float(v) for v in row]
        for j, v in enumerate(values):
            if not math.isfinite(v):
                raise NonFiniteFeatureError(f"{name}[{i}][{j}] is not finite: {v!r}")
        rows.append(values)
    return rows


def check_same_length(a: Sequence, b: Sequence, name_a: str, name_b: str) -> None:
    """Raise ``ShapeMismatchError`` unless ``a`` and ``b`` are index-aligned."""
    if len(a) != len(b):
        raise ShapeMismatchError(
            f"{name_a} ({len(a)}) and {name_b} ({len(b)}) must have same length"
        )
