"""Accuracy and per-class evaluation metrics."""

from __future__ import annotations

from collections import Counter
from collections.abc import Hashable, Sequence
from dataclasses import dataclass, field

from .encoding import index_to_code
from .errors import EmptyInputError
from .validation import check_same_length


def accuracy_score(predictions: Sequence[int], y: Sequence[int]) -> float:
    """Fraction of predictions that match their labels.

    Args:
        predictions: Zero-based class indices, as returned by ``predict``.
        y: Class codes ``1..K``.

    Returns:
        Accuracy in ``[0, 1]``.

    Raises:
        ShapeMismatchError: If the sequences differ in length.
        EmptyInputError: If both are empty.
    """
    check_same_length(predictions, y, "predictions", "y")
    if len(y) == 0:
        raise EmptyInputError("cannot score an empty set of predictions")
    correct = sum(1 for pred, label in zip(predictions, y) if label == index_to_code(pred))
    return correct / len(y)


@dataclass
class ClassificationMetrics:
    """Scores for one set of predictions, keyed by class label.

    ``per_class`` maps each class to its precision, recall and F1;
    ``confusion_matrix[true][predicted]`` holds row counts and ``support``
    the number of true rows per class.
    """

    accuracy: float = 0.0
    per_class: dict = field(default_factory=dict)
    macro_precision: float = 0.0
    macro_recall: float = 0.0
    macro_f1: float = 0.0
    weighted_f1: float = 0.0
    confusion_matrix: dict = field(default_factory=dict)
    support: dict = field(default_factory=dict)

    def to_dict(self) -> dict:
        """JSON-ready form; class labels become string keys."""
        scores = {
            name: round(getattr(self, name), 4)
            for name in ("accuracy", "macro_precision", "macro_recall", "macro_f1", "weighted_f1")
        }
        scores["per_class"] = {
            str(cls): {k: round(v, 4) for k, v in values.items()}
            for cls, values in self.per_class.items()
        }
        scores["confusion_matrix"] = {
            str(true): {str(pred): n for pred, n in row.items()}
            for true, row in self.confusion_matrix.items()
        }
        scores["support"] = {str(cls): n for cls, n in self.support.items()}
        return scores


def _f1(precision: float, recall: float) -> float:
    total = precision + recall
    return 2 * precision * recall / total if total > 0 else 0.0


def compute_metrics(
    y_true: Sequence[Hashable],
    y_pred: Sequence[Hashable],
) -> ClassificationMetrics:
    """Compute classification metrics from true and predicted labels.

    Both sequences must use the same label space (class codes, or decoded
    class names). Classes are reported in order of first appearance in
    ``y_true`` followed by any seen only in ``y_pred``.

    Raises:
        ShapeMismatchError: If the sequences differ in length.
        EmptyInputError: If both are empty.
    """
    check_same_length(y_true, y_pred, "y_true", "y_pred")
    if len(y_true) == 0:
        raise EmptyInputError("cannot compute metrics on empty labels")

    classes = list(dict.fromkeys([*y_true, *y_pred]))
    pairs = Counter(zip(y_true, y_pred))
    support = Counter(y_true)
    predicted = Counter(y_pred)

    per_class: dict = {}
    for cls in classes:
        hits = pairs[cls, cls]
        precision = hits / predicted[cls] if predicted[cls] else 0.0
        recall = hits / support[cls] if support[cls] else 0.0
        per_class[cls] = {"precision": precision, "recall": recall, "f1": _f1(precision, recall)}

    def macro(key: str) -> float:
        return sum(scores[key] for scores in per_class.values()) / len(classes)

    return ClassificationMetrics(
        accuracy=sum(pairs[cls, cls] for cls in classes) / len(y_true),
        per_class=per_class,
        macro_precision=macro("precision"),
        macro_recall=macro("recall"),
        macro_f1=macro("f1"),
        weighted_f1=sum(per_class[cls]["f1"] * support[cls] for cls in classes) / len(y_true),
        confusion_matrix={t: {p: pairs[t, p] for p in classes} for t in classes},
        support=dict(support),
    )
