"""gaussian-nb -- Gaussian Naive Bayes classification in pure Python."""

__version__ = "0.1.0"

from .classifier import (
    GaussianNaiveBayesClassifier,
    fit,
    gaussian_log_pdf,
    gaussian_pdf,
    predict,
    predict_codes,
    predict_log_proba,
    predict_proba,
)
from .encoding import LabelEncoder, code_to_index, index_to_code, validate_label_codes
from .errors import (
    DegenerateDistributionError,
    EmptyInputError,
    GaussianNBError,
    LabelEncodingError,
    LabelEncodingViolation,
    NonFiniteFeatureError,
    NotFittedError,
    ShapeMismatchError,
)
from .evaluation import cross_validate, stratified_k_fold
from .metrics import ClassificationMetrics, accuracy_score, compute_metrics
from .models import ClassificationResult, ClassStatistics, FittedModel

__all__ = [
    # Core
    "GaussianNaiveBayesClassifier",
    "fit",
    "predict",
    "predict_codes",
    "predict_proba",
    "predict_log_proba",
    "accuracy_score",
    "gaussian_pdf",
    "gaussian_log_pdf",
    # Models
    "FittedModel",
    "ClassStatistics",
    "ClassificationResult",
    # Label encoding
    "LabelEncoder",
    "validate_label_codes",
    "index_to_code",
    "code_to_index",
    # Evaluation
    "ClassificationMetrics",
    "compute_metrics",
    "cross_validate",
    "stratified_k_fold",
    # Errors
    "GaussianNBError",
    "ShapeMismatchError",
    "NonFiniteFeatureError",
    "EmptyInputError",
    "LabelEncodingError",
    "LabelEncodingViolation",
    "DegenerateDistributionError",
    "NotFittedError",
]
