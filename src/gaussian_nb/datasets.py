"""Delimited-file reader used by the command-line interface.

Each record holds numeric attribute columns followed by a class label in
the last column, e.g. the UCI iris and banknote-authentication CSVs.
"""

from __future__ import annotations

import csv
from dataclasses import dataclass, field
from pathlib import Path


@dataclass
class Dataset:
    """Feature rows and raw class labels read from a file."""

    features: list[list[float]] = field(default_factory=list)
    labels: list[str] = field(default_factory=list)
    attribute_names: list[str] = field(default_factory=list)
    label_name: str = "label"

    @property
    def n_rows(self) -> int:
        return len(self.features)

    @property
    def n_attributes(self) -> int:
        return len(self.attribute_names)


def load_delimited(
    path: str | Path,
    delimiter: str = ",",
    has_header: bool = True,
    labeled: bool = True,
) -> Dataset:
    """Read a delimited text file into a ``Dataset``.

    Args:
        path: File to read.
        delimiter: Field separator.
        has_header: Whether the first record names the columns.
        labeled: Whether the last column holds the class label. Unlabeled
            files yield an empty ``labels`` list.

    Returns:
        Dataset with float features and string labels.

    Raises:
        FileNotFoundError: If the file does not exist.
        ValueError: If a record has the wrong number of fields or a
            non-numeric attribute value.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"File not found: {path}")

    # Pairs of (line number, fields); blank lines are skipped but still counted
    with open(path, "r", encoding="utf-8", newline="") as f:
        reader = csv.reader(f, delimiter=delimiter)
        records = [(reader.line_num, r) for r in reader if any(v.strip() for v in r)]

    if not records:
        raise ValueError(f"{path} contains no records")

    n_fields = len(records[0][1])
    n_attributes = n_fields - 1 if labeled else n_fields
    if n_attributes < 1:
        raise ValueError(f"{path}: expected at least one attribute column")

    if has_header:
        header, records = records[0][1], records[1:]
    else:
        header = [f"x{j}" for j in range(n_attributes)] + (["label"] if labeled else [])

    dataset = Dataset(
        attribute_names=[name.strip() for name in header[:n_attributes]],
        label_name=header[-1].strip() if labeled else "label",
    )
    for lineno, record in records:
        if len(record) != n_fields:
            raise ValueError(
                f"{path}:{lineno}: expected {n_fields} fields, got {len(record)}"
            )
        try:
            dataset.features.append([float(v) for v in record[:n_attributes]])
        except ValueError as exc:
            raise ValueError(f"{path}:{lineno}: non-numeric attribute value ({exc})") from exc
        if labeled:
            dataset.labels.append(record[-1].strip())

    return dataset
