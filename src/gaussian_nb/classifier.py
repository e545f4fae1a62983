"""Gaussian Naive Bayes classification.

Estimates a normal distribution for every (class, attribute) pair and
classifies feature vectors by maximum posterior probability, assuming
attributes are conditionally independent given the class and every class
is equally likely a priori. Pure Python; no numpy required.

Features:
- ``fit`` returning an immutable ``FittedModel``
- Log-space density accumulation with log-sum-exp normalization
- Explicit rejection of zero-variance attributes, with opt-in variance
  smoothing
- Label encoding for arbitrary class names
- Model persistence (JSON serialization)
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Hashable, Sequence
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .encoding import LabelEncoder, code_to_index, index_to_code, validate_label_codes
from .errors import (
    DegenerateDistributionError,
    EmptyInputError,
    GaussianNBError,
    NonFiniteFeatureError,
    NotFittedError,
)
from .metrics import accuracy_score
from .models import ClassificationResult, ClassStatistics, FittedModel
from .validation import check_feature_matrix, check_same_length

logger = logging.getLogger(__name__)

_LOG_SQRT_2PI = 0.5 * math.log(2 * math.pi)


# ---------------------------------------------------------------------------
# Gaussian density
# ---------------------------------------------------------------------------

def gaussian_pdf(x: float, mean: float, std_dev: float) -> float:
    """Normal probability density of ``x``.

    Raises:
        ValueError: If ``std_dev`` is not positive.
    """
    if std_dev <= 0:
        raise ValueError(f"std_dev must be positive, got {std_dev}")
    return (1 / (math.sqrt(2 * math.pi) * std_dev)) * math.exp(
        -((x - mean) ** 2) / (2 * std_dev ** 2)
    )


def gaussian_log_pdf(x: float, mean: float, std_dev: float) -> float:
    """Natural log of ``gaussian_pdf``, computed without leaving log space.

    Finite for every finite ``x``, even where the linear density
    underflows to ``0.0``.

    Raises:
        ValueError: If ``std_dev`` is not positive.
    """
    if std_dev <= 0:
        raise ValueError(f"std_dev must be positive, got {std_dev}")
    z = (x - mean) / std_dev
    return -_LOG_SQRT_2PI - math.log(std_dev) - 0.5 * z * z


# ---------------------------------------------------------------------------
# Training
# ---------------------------------------------------------------------------

def _mean(values: Sequence[float]) -> float:
    if min(values) == max(values):
        return float(values[0])
    return math.fsum(values) / len(values)


def _population_variance(values: Sequence[float], mean: float) -> float:
    # A constant column has exactly zero variance even when its mean rounds
    if min(values) == max(values):
        return 0.0
    return math.fsum((v - mean) ** 2 for v in values) / len(values)


def _smoothing_epsilon(rows: list[list[float]], var_smoothing: float) -> float:
    """Variance added to every class variance for ``var_smoothing``.

    Scaled by the largest attribute variance over the whole training set,
    or equal to ``var_smoothing`` when every attribute is constant.
    """
    if var_smoothing == 0:
        return 0.0
    largest = 0.0
    for column in zip(*rows):
        largest = max(largest, _population_variance(column, _mean(column)))
    return var_smoothing * (largest if largest > 0 else 1.0)


def fit(
    X: Sequence[Sequence[float]],
    y: Sequence[int],
    *,
    var_smoothing: float = 0.0,
) -> FittedModel:
    """Estimate per-class, per-attribute Gaussian parameters.

    Args:
        X: Feature matrix (rows of equal length).
        y: Class codes ``1..K``, dense and in first-appearance order, one
            per row of ``X``. Use ``LabelEncoder`` to produce them.
        var_smoothing: Fraction of the largest attribute variance added to
            every class variance. ``0.0`` keeps the raw statistics, in which
            case zero-variance attributes make the model unusable for
            prediction.

    Returns:
        A new ``FittedModel``.

    Raises:
        EmptyInputError: If ``X`` or ``y`` is empty.
        ShapeMismatchError: If lengths differ or rows are ragged.
        NonFiniteFeatureError: If ``X`` contains NaN or infinity.
        LabelEncodingError: If ``y`` is not a dense first-appearance coding.
        ValueError: If ``var_smoothing`` is negative.
    """
    if len(X) == 0 or len(y) == 0:
        raise EmptyInputError("cannot fit on an empty training set")
    check_same_length(X, y, "X", "y")
    rows = check_feature_matrix(X)
    n_classes = validate_label_codes(y)
    if var_smoothing < 0:
        raise ValueError(f"var_smoothing must be non-negative, got {var_smoothing}")

    n_attributes = len(rows[0])

    # Divide the training rows into per-class attribute columns
    grouped: list[list[list[float]]] = [
        [[] for _ in range(n_attributes)] for _ in range(n_classes)
    ]
    for row, code in zip(rows, y):
        columns = grouped[code_to_index(code)]
        for j, value in enumerate(row):
            columns[j].append(value)

    epsilon = _smoothing_epsilon(rows, var_smoothing)

    classes = []
    for index, columns in enumerate(grouped):
        means = [_mean(values) for values in columns]
        std_devs = [
            math.sqrt(_population_variance(values, mu) + epsilon)
            for values, mu in zip(columns, means)
        ]
        classes.append(ClassStatistics(
            code=index_to_code(index),
            sorted_attributes=tuple(tuple(values) for values in columns),
            mean=tuple(means),
            std_dev=tuple(std_devs),
        ))

    model = FittedModel(
        classes=tuple(classes),
        n_attributes=n_attributes,
        var_smoothing=var_smoothing,
        epsilon=epsilon,
    )
    logger.debug(
        "Fitted %d classes on %d rows x %d attributes (epsilon=%g)",
        n_classes, len(rows), n_attributes, epsilon,
    )
    return model


# ---------------------------------------------------------------------------
# Inference
# ---------------------------------------------------------------------------

def _check_predictable(model: FittedModel, X: Sequence[Sequence[float]]) -> list[list[float]]:
    rows = check_feature_matrix(X, model.n_attributes)
    degenerate = model.degenerate_attributes()
    if degenerate:
        class_code, attribute = degenerate[0]
        raise DegenerateDistributionError(class_code, attribute)
    return rows


def _joint_log_likelihood(model: FittedModel, row: list[float]) -> list[float]:
    """Sum of attribute log-densities for each class, in class order."""
    return [
        math.fsum(
            gaussian_log_pdf(x, mu, sigma)
            for x, mu, sigma in zip(row, stats.mean, stats.std_dev)
        )
        for stats in model.classes
    ]


def _log_scores(model: FittedModel, rows: list[list[float]]) -> list[list[float]]:
    scores = []
    for i, row in enumerate(rows):
        joint = _joint_log_likelihood(model, row)
        if max(joint) == -math.inf:
            raise NonFiniteFeatureError(
                f"X row {i} is too far from every class mean for a finite likelihood"
            )
        scores.append(joint)
    return scores


def _log_normalize(log_scores: list[float]) -> list[float]:
    # Log-sum-exp: shift by the maximum so the largest term is exp(0)
    top = max(log_scores)
    log_total = top + math.log(math.fsum(math.exp(s - top) for s in log_scores))
    return [s - log_total for s in log_scores]


def _normalize(log_scores: list[float]) -> list[float]:
    top = max(log_scores)
    exp_scores = [math.exp(s - top) for s in log_scores]
    total = math.fsum(exp_scores)
    return [p / total for p in exp_scores]


def _argmax(values: list[float]) -> int:
    """Index of the largest value; the first one wins on ties."""
    best = 0
    for i, value in enumerate(values):
        if value > values[best]:
            best = i
    return best


def predict_log_proba(model: FittedModel, X: Sequence[Sequence[float]]) -> list[list[float]]:
    """Normalized log posterior of every class for each row of ``X``."""
    rows = _check_predictable(model, X)
    return [_log_normalize(scores) for scores in _log_scores(model, rows)]


def predict_proba(model: FittedModel, X: Sequence[Sequence[float]]) -> list[list[float]]:
    """Posterior probability of every class for each row of ``X``.

    Each inner list is indexed by zero-based class index and sums to 1.

    Raises:
        EmptyInputError: If ``X`` has no rows.
        ShapeMismatchError: If a row length differs from the model's.
        NonFiniteFeatureError: If ``X`` contains NaN or infinity.
        DegenerateDistributionError: If any class/attribute pair of the
            model has zero standard deviation.
    """
    rows = _check_predictable(model, X)
    return [_normalize(scores) for scores in _log_scores(model, rows)]


def predict(model: FittedModel, X: Sequence[Sequence[float]]) -> list[int]:
    """Predict the zero-based class index of each row of ``X``.

    The class code of a prediction is ``index_to_code(index)``. Ties go to
    the lowest class index. Raises the same errors as ``predict_proba``.
    """
    predictions = [_argmax(proba) for proba in predict_proba(model, X)]
    logger.debug("Predicted %d rows over %d classes", len(predictions), model.n_classes)
    return predictions


def predict_codes(model: FittedModel, X: Sequence[Sequence[float]]) -> list[int]:
    """Predict the class code (``1..K``) of each row of ``X``."""
    return [index_to_code(i) for i in predict(model, X)]


# ---------------------------------------------------------------------------
# Classifier (High-Level API)
# ---------------------------------------------------------------------------

@dataclass
class GaussianNaiveBayesClassifier:
    """Gaussian Naive Bayes with an sklearn-like fit/predict interface.

    Wraps the module-level functions around a stored ``FittedModel``.
    Every ``fit`` replaces the model as a whole.

    Example::

        clf = GaussianNaiveBayesClassifier()
        clf.fit([[1.0], [1.2], [10.0], [10.2]], [1, 1, 2, 2])
        clf.predict([[1.1], [10.1]])  # [0, 1]

        # Arbitrary class names
        clf.fit_labels(rows, ["setosa", "virginica", ...])
        clf.predict_labels(rows)  # ["setosa", ...]

        clf.save("model.json")
        loaded = GaussianNaiveBayesClassifier.load("model.json")

    Args:
        var_smoothing: Fraction of the largest attribute variance added to
            all class variances (see ``fit``).
    """

    var_smoothing: float = 0.0

    # Learned state
    model_: Optional[FittedModel] = field(default=None, repr=False)
    label_encoder_: Optional[LabelEncoder] = field(default=None, repr=False)

    @property
    def is_fitted(self) -> bool:
        """Whether the classifier has been fitted."""
        return self.model_ is not None

    @property
    def classes_(self) -> list[int]:
        """Class codes of the fitted model."""
        return self.model_.class_codes if self.model_ else []

    def _require_model(self) -> FittedModel:
        if self.model_ is None:
            raise NotFittedError("Classifier has not been fitted. Call fit() first.")
        return self.model_

    def fit(
        self,
        X: Sequence[Sequence[float]],
        y: Sequence[int],
    ) -> "GaussianNaiveBayesClassifier":
        """Fit on class codes ``1..K``. Returns self (for method chaining)."""
        self.model_ = fit(X, y, var_smoothing=self.var_smoothing)
        self.label_encoder_ = None
        return self

    def fit_labels(
        self,
        X: Sequence[Sequence[float]],
        labels: Sequence[Hashable],
    ) -> "GaussianNaiveBayesClassifier":
        """Fit on arbitrary hashable labels, encoding them first."""
        check_same_length(X, labels, "X", "labels")
        encoder = LabelEncoder()
        codes = encoder.fit_transform(labels)
        self.model_ = fit(X, codes, var_smoothing=self.var_smoothing)
        self.label_encoder_ = encoder
        return self

    def predict(self, X: Sequence[Sequence[float]]) -> list[int]:
        """Zero-based class index per row."""
        return predict(self._require_model(), X)

    def predict_codes(self, X: Sequence[Sequence[float]]) -> list[int]:
        """Class code per row."""
        return predict_codes(self._require_model(), X)

    def predict_proba(self, X: Sequence[Sequence[float]]) -> list[list[float]]:
        return predict_proba(self._require_model(), X)

    def predict_log_proba(self, X: Sequence[Sequence[float]]) -> list[list[float]]:
        return predict_log_proba(self._require_model(), X)

    def predict_labels(self, X: Sequence[Sequence[float]]) -> list:
        """Original class labels per row (requires ``fit_labels``)."""
        if self.label_encoder_ is None:
            raise NotFittedError("No label encoding available. Call fit_labels() first.")
        return self.label_encoder_.decode_predictions(self.predict(X))

    def classify(self, X: Sequence[Sequence[float]]) -> list[ClassificationResult]:
        """Predicted class, confidence and posteriors for each row."""
        results = []
        for proba in self.predict_proba(X):
            index = _argmax(proba)
            label = (
                self.label_encoder_.decode_predictions([index])[0]
                if self.label_encoder_ is not None
                else None
            )
            results.append(ClassificationResult(
                predicted_index=index,
                confidence=proba[index],
                probabilities=proba,
                label=label,
            ))
        return results

    @staticmethod
    def accuracy_score(predictions: Sequence[int], y: Sequence[int]) -> float:
        """Fraction of zero-based ``predictions`` matching class codes ``y``."""
        return accuracy_score(predictions, y)

    def score(self, X: Sequence[Sequence[float]], y: Sequence[int]) -> float:
        """Accuracy of ``predict(X)`` against class codes ``y``."""
        check_same_length(X, y, "X", "y")
        return accuracy_score(self.predict(X), y)

    def to_dict(self) -> dict:
        """Serialize classifier state."""
        model = self._require_model()
        return {
            "var_smoothing": self.var_smoothing,
            "model": model.to_dict(),
            "label_encoder": (
                self.label_encoder_.to_dict() if self.label_encoder_ is not None else None
            ),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "GaussianNaiveBayesClassifier":
        """Deserialize classifier from a dictionary."""
        clf = cls(var_smoothing=data.get("var_smoothing", 0.0))
        clf.model_ = FittedModel.from_dict(data["model"])
        if data.get("label_encoder") is not None:
            clf.label_encoder_ = LabelEncoder.from_dict(data["label_encoder"])
        return clf

    def save(self, path: str | Path) -> None:
        """Save the fitted classifier to a JSON file.

        Raises:
            NotFittedError: If the classifier has not been fitted.
        """
        model_data = {"version": "1.0", "classifier": self.to_dict()}

        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w", encoding="utf-8") as f:
            json.dump(model_data, f, indent=2)
        logger.info("Saved model with %d classes to %s", self.model_.n_classes, path)

    @classmethod
    def load(cls, path: str | Path) -> "GaussianNaiveBayesClassifier":
        """Load a fitted classifier from a JSON file.

        Raises:
            GaussianNBError: If the file is JSON but not a saved classifier.
        """
        with open(path, "r", encoding="utf-8") as f:
            data = json.load(f)
        try:
            return cls.from_dict(data["classifier"])
        except (KeyError, TypeError, AttributeError) as e:
            raise GaussianNBError(f"{path} is not a saved gaussian-nb model") from e
