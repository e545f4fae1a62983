"""Data models for fitted Gaussian Naive Bayes state and predictions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .encoding import index_to_code


@dataclass(frozen=True)
class ClassStatistics:
    """Per-attribute Gaussian parameters of a single class.

    Attributes:
        code: Class code (``1..K``).
        sorted_attributes: Training values of each attribute belonging to
            this class, in training order. ``sorted_attributes[j]`` holds
            every value of attribute ``j``.
        mean: Arithmetic mean of each attribute.
        std_dev: Population standard deviation of each attribute (plus
            variance smoothing, when the model was fitted with it).
    """

    code: int
    sorted_attributes: tuple[tuple[float, ...], ...]
    mean: tuple[float, ...]
    std_dev: tuple[float, ...]

    @property
    def count(self) -> int:
        """Number of training rows in the class."""
        return len(self.sorted_attributes[0]) if self.sorted_attributes else 0

    def to_dict(self) -> dict:
        return {
            "code": self.code,
            "sorted_attributes": [list(values) for values in self.sorted_attributes],
            "mean": list(self.mean),
            "std_dev": list(self.std_dev),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ClassStatistics":
        return cls(
            code=data["code"],
            sorted_attributes=tuple(tuple(v) for v in data["sorted_attributes"]),
            mean=tuple(data["mean"]),
            std_dev=tuple(data["std_dev"]),
        )


@dataclass(frozen=True)
class FittedModel:
    """Immutable result of training.

    Produced by ``fit`` and consumed by the prediction functions. A new
    ``fit`` call builds a new instance; an existing one is never mutated,
    so it can be shared between concurrent readers.

    Attributes:
        classes: Statistics per class, ordered by class code.
        n_attributes: Length of every feature vector.
        var_smoothing: Smoothing factor requested at fit time.
        epsilon: Variance actually added to every class variance.
    """

    classes: tuple[ClassStatistics, ...]
    n_attributes: int
    var_smoothing: float = 0.0
    epsilon: float = 0.0

    @property
    def n_classes(self) -> int:
        return len(self.classes)

    @property
    def class_codes(self) -> list[int]:
        return [stats.code for stats in self.classes]

    @property
    def means(self) -> list[list[float]]:
        """``means[c][j]`` for zero-based class index ``c``."""
        return [list(stats.mean) for stats in self.classes]

    @property
    def std_devs(self) -> list[list[float]]:
        """``std_devs[c][j]`` for zero-based class index ``c``."""
        return [list(stats.std_dev) for stats in self.classes]

    def degenerate_attributes(self) -> list[tuple[int, int]]:
        """Return ``(class_code, attribute)`` pairs with zero deviation."""
        return [
            (stats.code, j)
            for stats in self.classes
            for j, sigma in enumerate(stats.std_dev)
            if sigma <= 0.0
        ]

    def to_dict(self) -> dict:
        return {
            "n_attributes": self.n_attributes,
            "var_smoothing": self.var_smoothing,
            "epsilon": self.epsilon,
            "classes": [stats.to_dict() for stats in self.classes],
        }

    @classmethod
    def from_dict(cls, data: dict) -> "FittedModel":
        return cls(
            classes=tuple(ClassStatistics.from_dict(c) for c in data["classes"]),
            n_attributes=data["n_attributes"],
            var_smoothing=data.get("var_smoothing", 0.0),
            epsilon=data.get("epsilon", 0.0),
        )


@dataclass
class ClassificationResult:
    """Result of classifying a single feature vector."""

    predicted_index: int
    confidence: float
    probabilities: list[float]
    label: Optional[object] = None

    @property
    def predicted_code(self) -> int:
        return index_to_code(self.predicted_index)

    def to_dict(self) -> dict:
        return {
            "predicted_index": self.predicted_index,
            "predicted_code": self.predicted_code,
            "label": self.label,
            "confidence": round(self.confidence, 4),
            "probabilities": [round(p, 4) for p in self.probabilities],
        }
