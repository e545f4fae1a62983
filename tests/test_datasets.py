"""Tests for the delimited-file reader."""

from __future__ import annotations

from pathlib import Path

import pytest

from gaussian_nb.datasets import load_delimited


class TestLoadDelimited:
    """Tests for load_delimited."""

    def test_reads_header_features_and_labels(self, csv_file: Path):
        ds = load_delimited(csv_file)
        assert ds.attribute_names == ["sepal_length", "sepal_width"]
        assert ds.label_name == "species"
        assert ds.n_rows == 20
        assert ds.n_attributes == 2
        assert ds.features[0] == [1.0, 5.0]
        assert ds.labels[:2] == ["setosa", "virginica"]

    def test_no_header(self, tmp_path: Path):
        file = tmp_path / "plain.csv"
        file.write_text("1.5,2.5,a\n3.5,4.5,b\n", encoding="utf-8")
        ds = load_delimited(file, has_header=False)
        assert ds.attribute_names == ["x0", "x1"]
        assert ds.features == [[1.5, 2.5], [3.5, 4.5]]
        assert ds.labels == ["a", "b"]

    def test_unlabeled(self, tmp_path: Path):
        file = tmp_path / "samples.csv"
        file.write_text("a,b\n1,2\n3,4\n", encoding="utf-8")
        ds = load_delimited(file, labeled=False)
        assert ds.features == [[1.0, 2.0], [3.0, 4.0]]
        assert ds.labels == []

    def test_custom_delimiter_and_blank_lines(self, tmp_path: Path):
        file = tmp_path / "data.tsv"
        file.write_text("x\ty\n1\tp\n\n2\tq\n", encoding="utf-8")
        ds = load_delimited(file, delimiter="\t")
        assert ds.features == [[1.0], [2.0]]
        assert ds.labels == ["p", "q"]

    def test_labels_are_stripped(self, tmp_path: Path):
        file = tmp_path / "data.csv"
        file.write_text("x,label\n1, Iris-setosa \n", encoding="utf-8")
        assert load_delimited(file).labels == ["Iris-setosa"]

    def test_missing_file_raises(self, tmp_path: Path):
        with pytest.raises(FileNotFoundError):
            load_delimited(tmp_path / "nope.csv")

    def test_empty_file_raises(self, tmp_path: Path):
        file = tmp_path / "empty.csv"
        file.write_text("", encoding="utf-8")
        with pytest.raises(ValueError, match="no records"):
            load_delimited(file)

    def test_wrong_field_count_raises(self, tmp_path: Path):
        file = tmp_path / "ragged.csv"
        file.write_text("x,y,label\n1,2,a\n1,a\n", encoding="utf-8")
        with pytest.raises(ValueError, match=":3: expected 3 fields"):
            load_delimited(file)

    def test_error_line_counts_blank_lines(self, tmp_path: Path):
        file = tmp_path / "gaps.csv"
        file.write_text("x,y,label\n\n1,2,a\n\n\n3,4\n", encoding="utf-8")
        with pytest.raises(ValueError, match=":6: expected 3 fields"):
            load_delimited(file)

        file.write_text("x,label\n\n1,a\n\nfoo,b\n", encoding="utf-8")
        with pytest.raises(ValueError, match=":5: non-numeric"):
            load_delimited(file)

    def test_non_numeric_raises(self, tmp_path: Path):
        file = tmp_path / "bad.csv"
        file.write_text("x,label\nfoo,a\n", encoding="utf-8")
        with pytest.raises(ValueError, match="non-numeric"):
            load_delimited(file)

    def test_label_only_file_raises(self, tmp_path: Path):
        file = tmp_path / "labels.csv"
        file.write_text("label\na\n", encoding="utf-8")
        with pytest.raises(ValueError, match="at least one attribute"):
            load_delimited(file)
