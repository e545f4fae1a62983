"""Class-code conventions and label encoding.

Training labels are class codes ``1..K``; predictions are zero-based class
indices ``0..K-1``. The two helpers below are the only place that offset
is applied.
"""

from __future__ import annotations

from collections.abc import Hashable, Iterable, Sequence
from dataclasses import dataclass, field

from .errors import EmptyInputError, LabelEncodingError


def index_to_code(index: int) -> int:
    """Convert a zero-based prediction index to its class code."""
    return index + 1


def code_to_index(code: int) -> int:
    """Convert a class code to its zero-based prediction index."""
    return code - 1


def validate_label_codes(y: Sequence[int]) -> int:
    """Check that labels are dense class codes in first-appearance order.

    A valid label vector starts at 1, and every label is either one already
    seen or exactly one more than the largest seen so far. That makes the
    "count the new maxima" scan equal to the number of distinct classes.

    Args:
        y: Label vector.

    Returns:
        The number of classes ``K``.

    Raises:
        EmptyInputError: If ``y`` is empty.
        LabelEncodingError: If a label is not an integer or breaks the
            ordering rule.
    """
    if len(y) == 0:
        raise EmptyInputError("label vector is empty")

    n_classes = 0
    for i, label in enumerate(y):
        if isinstance(label, bool) or not isinstance(label, int):
            raise LabelEncodingError(
                f"label {i} is {label!r}; class codes must be integers"
            )
        if label < 1 or label > n_classes + 1:
            raise LabelEncodingError(
                f"label {i} is {label} but only codes 1..{n_classes + 1} are allowed "
                "at this position; encode labels densely in first-appearance order "
                "(see LabelEncoder)"
            )
        if label == n_classes + 1:
            n_classes = label
    return n_classes


@dataclass
class LabelEncoder:
    """Maps arbitrary hashable labels to class codes ``1..K``.

    Codes are assigned in order of first appearance, which is the order
    the classifier expects.

    Example::

        enc = LabelEncoder()
        enc.fit_transform(["setosa", "virginica", "setosa"])  # [1, 2, 1]
        enc.decode_predictions([1, 0])  # ["virginica", "setosa"]
    """

    classes_: list = field(default_factory=list)
    _codes: dict = field(default_factory=dict, repr=False)

    def fit(self, labels: Iterable[Hashable]) -> "LabelEncoder":
        """Learn the label-to-code table.

        Raises:
            EmptyInputError: If ``labels`` is empty.
        """
        classes: list = []
        codes: dict = {}
        for label in labels:
            if label not in codes:
                classes.append(label)
                codes[label] = len(classes)
        if not classes:
            raise EmptyInputError("cannot fit a LabelEncoder on no labels")
        self.classes_ = classes
        self._codes = codes
        return self

    def transform(self, labels: Iterable[Hashable]) -> list[int]:
        """Map labels to class codes.

        Raises:
            LabelEncodingError: If a label was not seen during ``fit``.
        """
        if not self._codes:
            raise RuntimeError("LabelEncoder has not been fitted. Call fit() first.")
        codes = []
        for label in labels:
            try:
                codes.append(self._codes[label])
            except KeyError:
                raise LabelEncodingError(
                    f"Unknown label: {label!r}. Known: {self.classes_}"
                ) from None
        return codes

    def fit_transform(self, labels: Sequence[Hashable]) -> list[int]:
        """Fit and transform in one step."""
        return self.fit(labels).transform(labels)

    def inverse_transform(self, codes: Iterable[int]) -> list:
        """Map class codes back to the original labels."""
        labels = []
        for code in codes:
            if not 1 <= code <= len(self.classes_):
                raise LabelEncodingError(
                    f"class code {code} outside 1..{len(self.classes_)}"
                )
            labels.append(self.classes_[code - 1])
        return labels

    def decode_predictions(self, indices: Iterable[int]) -> list:
        """Map zero-based prediction indices to the original labels."""
        return self.inverse_transform(index_to_code(i) for i in indices)

    def to_dict(self) -> dict:
        return {"classes": list(self.classes_)}

    @classmethod
    def from_dict(cls, data: dict) -> "LabelEncoder":
        return cls().fit(data["classes"])
