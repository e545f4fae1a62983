"""Exception hierarchy for input validation failures.

Every error is raised at the entry of ``fit``, ``predict`` or the scoring
functions, before any arithmetic runs, so bad input never surfaces later
as NaN probabilities or a wrong arg-max.
"""

from __future__ import annotations

from typing import Optional


class GaussianNBError(ValueError):
    """Base class for invalid-input errors raised by this package."""


class ShapeMismatchError(GaussianNBError):
    """Ragged feature rows, or sequences that should be aligned are not."""


class NonFiniteFeatureError(GaussianNBError):
    """A feature value is NaN or infinite."""


class EmptyInputError(GaussianNBError):
    """No rows, no labels, or zero-length feature rows."""


class LabelEncodingError(GaussianNBError):
    """Labels are not dense class codes ``1..K`` in first-appearance order."""


LabelEncodingViolation = LabelEncodingError


class DegenerateDistributionError(GaussianNBError):
    """A class/attribute pair has zero standard deviation.

    The Gaussian density is improper in that case, so prediction is
    refused instead of letting ``inf``/``nan`` reach the arg-max.

    Attributes:
        class_code: Class code (``1..K``) owning the degenerate attribute.
        attribute: Zero-based attribute index.
    """

    def __init__(self, class_code: int, attribute: int, message: Optional[str] = None) -> None:
        self.class_code = class_code
        self.attribute = attribute
        super().__init__(
            message
            or (
                f"Attribute {attribute} of class {class_code} has zero variance; "
                "its Gaussian density is undefined. Fit with var_smoothing > 0 "
                "to regularize."
            )
        )


class NotFittedError(RuntimeError):
    """The classifier was used before ``fit`` was called."""
