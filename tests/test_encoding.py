"""Tests for class-code validation and label encoding."""

from __future__ import annotations

import pytest

from gaussian_nb.encoding import (
    LabelEncoder,
    code_to_index,
    index_to_code,
    validate_label_codes,
)
from gaussian_nb.errors import EmptyInputError, LabelEncodingError, LabelEncodingViolation


class TestValidateLabelCodes:
    """Tests for the dense first-appearance precondition."""

    @pytest.mark.parametrize(
        "labels, expected",
        [
            ([1], 1),
            ([1, 1, 1], 1),
            ([1, 2, 1, 2], 2),
            ([1, 2, 3, 1, 3, 2], 3),
            ([1, 1, 2, 2, 3, 3], 3),
        ],
    )
    def test_valid_codes_return_class_count(self, labels, expected):
        assert validate_label_codes(labels) == expected

    @pytest.mark.parametrize(
        "labels",
        [
            [2, 1],         # does not start at 1
            [1, 3, 2],      # skips 2 on first appearance
            [0, 1],         # zero is not a class code
            [1, -2],        # negative
            [1, 2.0],       # float
            [True, 2],      # bool
            ["1", "2"],     # strings
        ],
    )
    def test_invalid_codes_raise(self, labels):
        with pytest.raises(LabelEncodingError):
            validate_label_codes(labels)

    def test_empty_raises(self):
        with pytest.raises(EmptyInputError):
            validate_label_codes([])

    def test_violation_alias(self):
        assert LabelEncodingViolation is LabelEncodingError
        with pytest.raises(LabelEncodingViolation):
            validate_label_codes([3])

    def test_error_is_value_error(self):
        with pytest.raises(ValueError):
            validate_label_codes([2])


class TestIndexCodeConversion:
    def test_round_trip(self):
        for index in range(5):
            assert code_to_index(index_to_code(index)) == index

    def test_first_class(self):
        assert index_to_code(0) == 1
        assert code_to_index(1) == 0


class TestLabelEncoder:
    """Tests for LabelEncoder."""

    def test_first_appearance_order(self):
        enc = LabelEncoder()
        codes = enc.fit_transform(["virginica", "setosa", "virginica", "versicolor"])
        assert codes == [1, 2, 1, 3]
        assert enc.classes_ == ["virginica", "setosa", "versicolor"]

    def test_codes_satisfy_classifier_precondition(self):
        codes = LabelEncoder().fit_transform(["b", "a", "c", "a", "b"])
        assert validate_label_codes(codes) == 3

    def test_inverse_transform(self):
        enc = LabelEncoder().fit(["x", "y", "z"])
        assert enc.inverse_transform([3, 1, 2]) == ["z", "x", "y"]

    def test_decode_predictions_uses_zero_based_indices(self):
        enc = LabelEncoder().fit(["x", "y"])
        assert enc.decode_predictions([0, 1, 1]) == ["x", "y", "y"]

    def test_non_string_labels(self):
        enc = LabelEncoder()
        assert enc.fit_transform([10, 20, 10, 5]) == [1, 2, 1, 3]

    def test_unknown_label_raises(self):
        enc = LabelEncoder().fit(["x", "y"])
        with pytest.raises(LabelEncodingError, match="Unknown label"):
            enc.transform(["x", "q"])

    def test_out_of_range_code_raises(self):
        enc = LabelEncoder().fit(["x", "y"])
        with pytest.raises(LabelEncodingError):
            enc.inverse_transform([0])
        with pytest.raises(LabelEncodingError):
            enc.inverse_transform([3])

    def test_transform_before_fit_raises(self):
        with pytest.raises(RuntimeError, match="not been fitted"):
            LabelEncoder().transform(["x"])

    def test_fit_empty_raises(self):
        with pytest.raises(EmptyInputError):
            LabelEncoder().fit([])

    def test_serialization_roundtrip(self):
        enc = LabelEncoder().fit(["b", "a"])
        restored = LabelEncoder.from_dict(enc.to_dict())
        assert restored.classes_ == enc.classes_
        assert restored.transform(["a", "b"]) == [2, 1]
