"""Shared test fixtures for gaussian-nb tests."""

from __future__ import annotations

import random
from pathlib import Path

import pytest


@pytest.fixture
def tiny_data() -> tuple[list[list[float]], list[int]]:
    """Two one-attribute classes, two rows each."""
    X = [[1.0], [1.2], [10.0], [10.2]]
    y = [1, 1, 2, 2]
    return X, y


@pytest.fixture
def separated_data() -> tuple[list[list[float]], list[int]]:
    """Two classes centred at 0 and 100 with spread 0.1, 20 rows each."""
    rng = random.Random(7)
    X: list[list[float]] = []
    y: list[int] = []
    for _ in range(20):
        X.append([rng.uniform(-0.1, 0.1), rng.uniform(-0.1, 0.1)])
        y.append(1)
        X.append([100 + rng.uniform(-0.1, 0.1), 100 + rng.uniform(-0.1, 0.1)])
        y.append(2)
    return X, y


@pytest.fixture
def three_class_data() -> tuple[list[list[float]], list[str]]:
    """Three overlapping-but-distinct classes with string labels."""
    rng = random.Random(11)
    centres = {"setosa": (5.0, 3.4), "versicolor": (5.9, 2.8), "virginica": (6.6, 3.0)}
    X: list[list[float]] = []
    labels: list[str] = []
    for _ in range(15):
        for name, (a, b) in centres.items():
            X.append([rng.gauss(a, 0.3), rng.gauss(b, 0.2)])
            labels.append(name)
    return X, labels


@pytest.fixture
def csv_text() -> str:
    """Labeled CSV with a header row and two well-separated classes."""
    lines = ["sepal_length,sepal_width,species"]
    for i in range(10):
        lines.append(f"{1.0 + 0.01 * i:.2f},{5.0 + 0.02 * i:.2f},setosa")
        lines.append(f"{10.0 + 0.01 * i:.2f},{20.0 - 0.02 * i:.2f},virginica")
    return "\n".join(lines) + "\n"


@pytest.fixture
def csv_file(tmp_path: Path, csv_text: str) -> Path:
    """Temporary labeled CSV file."""
    file = tmp_path / "flowers.csv"
    file.write_text(csv_text, encoding="utf-8")
    return file
