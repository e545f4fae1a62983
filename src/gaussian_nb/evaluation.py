"""Stratified k-fold cross-validation."""

from __future__ import annotations

import logging
import random
from collections.abc import Hashable, Sequence

from .classifier import fit, predict
from .encoding import LabelEncoder
from .metrics import ClassificationMetrics, compute_metrics
from .validation import check_same_length

logger = logging.getLogger(__name__)


def stratified_k_fold(
    labels: Sequence[Hashable],
    k: int = 5,
    seed: int = 42,
) -> list[tuple[list[int], list[int]]]:
    """Generate stratified k-fold train/test index splits.

    Each fold receives approximately the same class distribution as the
    full dataset. Splits depend only on ``labels``, ``k`` and ``seed``.

    Args:
        labels: Class label per row.
        k: Number of folds.
        seed: Random seed for reproducibility.

    Returns:
        List of ``(train_indices, test_indices)`` tuples.

    Raises:
        ValueError: If ``k`` is below 2 or larger than the number of rows.
    """
    if k < 2:
        raise ValueError(f"k must be at least 2, got {k}")
    if k > len(labels):
        raise ValueError(f"k ({k}) cannot exceed the number of rows ({len(labels)})")

    rng = random.Random(seed)
    by_class: dict = {}
    for index, label in enumerate(labels):
        by_class.setdefault(label, []).append(index)

    # Deal each shuffled class across the folds, starting again at fold 0
    fold_of = [0] * len(labels)
    for members in by_class.values():
        rng.shuffle(members)
        for position, index in enumerate(members):
            fold_of[index] = position % k

    return [
        (
            [i for i, f in enumerate(fold_of) if f != fold],
            [i for i, f in enumerate(fold_of) if f == fold],
        )
        for fold in range(k)
    ]


def cross_validate(
    X: Sequence[Sequence[float]],
    labels: Sequence[Hashable],
    k: int = 5,
    var_smoothing: float = 0.0,
    seed: int = 42,
) -> list[ClassificationMetrics]:
    """Run stratified k-fold cross-validation.

    Labels of each training fold are encoded afresh, so ``labels`` may be
    class codes or arbitrary class names. Test rows of a class missing
    from the training fold count as misclassified. Folds with an empty
    train or test side are skipped.

    Args:
        X: Feature matrix.
        labels: Class label per row.
        k: Number of folds.
        var_smoothing: Passed to ``fit`` for every fold.
        seed: Random seed for fold generation.

    Returns:
        List of ClassificationMetrics (one per evaluated fold).
    """
    check_same_length(X, labels, "X", "labels")

    results: list[ClassificationMetrics] = []
    for fold, (train_idx, test_idx) in enumerate(stratified_k_fold(labels, k=k, seed=seed)):
        if not train_idx or not test_idx:
            logger.warning("Skipping fold %d: empty train or test split", fold)
            continue

        encoder = LabelEncoder()
        train_codes = encoder.fit_transform([labels[i] for i in train_idx])
        model = fit([X[i] for i in train_idx], train_codes, var_smoothing=var_smoothing)

        predictions = predict(model, [X[i] for i in test_idx])
        metrics = compute_metrics(
            [labels[i] for i in test_idx],
            encoder.decode_predictions(predictions),
        )
        logger.debug("Fold %d: accuracy %.4f on %d rows", fold, metrics.accuracy, len(test_idx))
        results.append(metrics)

    return results
