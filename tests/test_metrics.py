"""Tests for accuracy scoring and classification metrics."""

from __future__ import annotations

import pytest

from gaussian_nb.errors import EmptyInputError, ShapeMismatchError
from gaussian_nb.metrics import ClassificationMetrics, accuracy_score, compute_metrics


class TestAccuracyScore:
    """Tests for accuracy_score (zero-based predictions vs class codes)."""

    def test_offset_all_correct(self):
        assert accuracy_score([0, 1, 0], [1, 2, 1]) == 1.0

    def test_offset_partial(self):
        assert accuracy_score([0, 0, 0], [1, 2, 1]) == pytest.approx(2 / 3)

    def test_all_wrong(self):
        assert accuracy_score([1, 0], [1, 2]) == 0.0

    def test_mismatched_lengths_raises(self):
        with pytest.raises(ShapeMismatchError, match="same length"):
            accuracy_score([0, 1], [1])

    def test_empty_raises(self):
        with pytest.raises(EmptyInputError):
            accuracy_score([], [])

    def test_result_in_unit_interval(self):
        score = accuracy_score([0, 1, 2, 0], [1, 1, 3, 2])
        assert 0.0 <= score <= 1.0
        assert score == 0.5


class TestComputeMetrics:
    """Tests for compute_metrics."""

    def test_perfect_predictions(self):
        y = ["a", "a", "b", "b", "c", "c"]
        m = compute_metrics(y, list(y))
        assert m.accuracy == 1.0
        assert m.macro_f1 == 1.0
        assert m.weighted_f1 == 1.0
        for scores in m.per_class.values():
            assert scores == {"precision": 1.0, "recall": 1.0, "f1": 1.0}

    def test_all_wrong_predictions(self):
        m = compute_metrics(["a", "a", "b", "b"], ["b", "b", "a", "a"])
        assert m.accuracy == 0.0
        assert m.macro_f1 == 0.0

    def test_partial_accuracy(self):
        m = compute_metrics([1, 1, 2, 2], [1, 2, 2, 1])
        assert m.accuracy == 0.5

    def test_confusion_matrix(self):
        m = compute_metrics(["a", "b", "a", "b"], ["a", "a", "b", "b"])
        assert m.confusion_matrix["a"]["a"] == 1
        assert m.confusion_matrix["b"]["a"] == 1  # b misclassified as a
        assert m.confusion_matrix["a"]["b"] == 1

    def test_class_order_follows_first_appearance(self):
        m = compute_metrics(["z", "a", "z"], ["z", "a", "q"])
        assert list(m.per_class) == ["z", "a", "q"]

    def test_support_counts(self):
        m = compute_metrics(["a", "a", "a", "b", "b"], ["a", "a", "b", "b", "b"])
        assert m.support == {"a": 3, "b": 2}

    def test_never_predicted_class(self):
        m = compute_metrics(["a", "a", "b"], ["a", "a", "a"])
        assert m.per_class["b"]["precision"] == 0.0
        assert m.per_class["b"]["recall"] == 0.0

    def test_mismatched_lengths_raises(self):
        with pytest.raises(ShapeMismatchError):
            compute_metrics(["a"], ["b", "c"])

    def test_empty_raises(self):
        with pytest.raises(EmptyInputError):
            compute_metrics([], [])

    def test_to_dict_stringifies_keys(self):
        m = compute_metrics([1, 2], [1, 2])
        d = m.to_dict()
        assert d["accuracy"] == 1.0
        assert set(d["per_class"]) == {"1", "2"}
        assert d["confusion_matrix"]["1"]["1"] == 1
        assert d["support"] == {"1": 1, "2": 1}

    def test_default_metrics(self):
        m = ClassificationMetrics()
        assert m.accuracy == 0.0
        assert m.per_class == {}
