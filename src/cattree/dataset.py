"""Dataset boundary: loading delimited files, validation, splitting, and prediction export."""

from __future__ import annotations

from collections.abc import Sequence
from pathlib import Path
from typing import TYPE_CHECKING

import numpy as np
import polars as pl
from loguru import logger

from cattree.exceptions import (
    DuplicateAttributesError,
    EmptyDatasetError,
    LabelNotFoundError,
    RowLengthError,
)
from cattree.logging import log_stage

if TYPE_CHECKING:
    from cattree.tree.evaluation import PredictionRecord
    from cattree.tree.models import Row

PREDICTION_COLUMNS: tuple[str, str, str] = ("SampleID", "Actual", "Predicted")

# ---------------------------------------------------------------------------
# Public interface -- Validation
# ---------------------------------------------------------------------------


def resolve_label_index(attribute_names: Sequence[str], label_name: str) -> int:
    """Return the zero-based column index of `label_name`.

    Args:
        attribute_names (Sequence[str]): Ordered names of every column.
        label_name (str): The label attribute; must match exactly one name.

    Returns:
        int: Column index of the label.

    Raises:
        DuplicateAttributesError: If `attribute_names` contains duplicates.
        LabelNotFoundError: If `label_name` is not in `attribute_names`.

    Examples:
        >>> resolve_label_index(["Outlook", "Wind", "PlayTennis"], "PlayTennis")
        2
    """
    if len(set(attribute_names)) != len(attribute_names):
        raise DuplicateAttributesError(attribute_names=attribute_names)
    if label_name not in attribute_names:
        logger.warning("Label resolution failed", label=label_name, attributes=list(attribute_names))
        raise LabelNotFoundError(label_name=label_name, attribute_names=attribute_names)
    return list(attribute_names).index(label_name)


def validate_dataset(rows: Sequence[Sequence[str]], attribute_names: Sequence[str]) -> None:
    """Check that every row has exactly one cell per attribute.

    Args:
        rows (Sequence[Sequence[str]]): The rows to check.
        attribute_names (Sequence[str]): Ordered names of every column.

    Raises:
        RowLengthError: At the first row whose length differs from the attribute count.
    """
    expected = len(attribute_names)
    for row_index, row in enumerate(rows):
        if len(row) != expected:
            raise RowLengthError(row_index=row_index, expected=expected, actual=len(row))


# ---------------------------------------------------------------------------
# Public interface -- Loading and splitting
# ---------------------------------------------------------------------------


def load_dataset(
    path: str | Path,
    attribute_names: Sequence[str],
    *,
    delimiter: str = ",",
) -> list[Row]:
    """Read a headerless delimited file of categorical values into rows.

    Each line is split on `delimiter` with no quote handling, so a `"` is an
    ordinary character. Every cell is trimmed of surrounding whitespace and
    empty cells are kept as empty strings. Lines that are blank (or contain
    only whitespace) are skipped and do not count as rows.

    Args:
        path (str | Path): File to read.
        attribute_names (Sequence[str]): Ordered names of every column; every
            line must have exactly this many cells.
        delimiter (str): Single-character field separator. Defaults to `","`.

    Returns:
        list[Row]: One tuple of strings per non-blank line, in file order.

    Raises:
        FileNotFoundError: If `path` does not exist.
        DuplicateAttributesError: If `attribute_names` contains duplicates.
        EmptyDatasetError: If the file holds no data rows.
        RowLengthError: At the first row whose cell count differs from the
            attribute count; `row_index` counts non-blank lines from 0.
    """
    path = Path(path)
    if not path.is_file():
        raise FileNotFoundError(f"Dataset file not found: {path}")
    if len(set(attribute_names)) != len(attribute_names):
        raise DuplicateAttributesError(attribute_names=attribute_names)

    lines = pl.DataFrame({"line": path.read_text(encoding="utf-8").splitlines()}, schema={"line": pl.String})
    cells = (
        lines.filter(pl.col("line").str.strip_chars() != "")
        .select(pl.col("line").str.split(delimiter).list.eval(pl.element().str.strip_chars()).alias("cells"))
        .with_row_index("row_index")
        .with_columns(pl.col("cells").list.len().alias("width"))
    )
    if cells.is_empty():
        raise EmptyDatasetError("load")

    ragged = cells.filter(pl.col("width") != len(attribute_names))
    if not ragged.is_empty():
        row_index, _, width = ragged.row(0)
        logger.warning("Dataset load failed", path=str(path), row_index=row_index, cells=width)
        raise RowLengthError(row_index=row_index, expected=len(attribute_names), actual=width)

    log_stage("load", "Dataset loaded", path=str(path), rows=cells.height, columns=len(attribute_names))
    return [tuple(row) for row in cells["cells"].to_list()]


def split_dataset(
    rows: Sequence[Row],
    train_ratio: float = 0.7,
    *,
    seed: int | None = None,
) -> tuple[list[Row], list[Row]]:
    """Shuffle rows and split them into training and test sets.

    The training set receives the first `int(len(rows) * train_ratio)` rows
    of the shuffled order; the test set receives the rest.

    Args:
        rows (Sequence[Row]): The rows to split.
        train_ratio (float): Fraction of rows used for training, in (0, 1).
            Defaults to 0.7.
        seed (int | None): Seed for the shuffle. `None` means non-deterministic.

    Returns:
        tuple[list[Row], list[Row]]: `(train_rows, test_rows)`.

    Raises:
        ValueError: If `train_ratio` is not strictly between 0 and 1.
    """
    if not 0.0 < train_ratio < 1.0:
        raise ValueError(f"train_ratio must be between 0 and 1 (exclusive), got {train_ratio}.")

    order = np.random.default_rng(seed).permutation(len(rows))
    train_size = int(len(rows) * train_ratio)
    train_rows = [rows[position] for position in order[:train_size]]
    test_rows = [rows[position] for position in order[train_size:]]

    log_stage("split", "Dataset split", train=len(train_rows), test=len(test_rows), seed=seed)
    return train_rows, test_rows


# ---------------------------------------------------------------------------
# Public interface -- Prediction export
# ---------------------------------------------------------------------------


def write_predictions(path: str | Path, records: Sequence[PredictionRecord]) -> Path:
    """Write prediction records as CSV with header `SampleID,Actual,Predicted`.

    Args:
        path (str | Path): Destination file; parent directories are created.
        records (Sequence[PredictionRecord]): The records to write, in order.

    Returns:
        Path: The path written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    sample_id, actual, predicted = PREDICTION_COLUMNS
    pl.DataFrame(
        {
            sample_id: [record.sample_id for record in records],
            actual: [record.actual for record in records],
            predicted: [record.predicted for record in records],
        },
        schema={sample_id: pl.Int64, actual: pl.String, predicted: pl.String},
    ).write_csv(path)
    log_stage("export", "Predictions written", path=str(path), rows=len(records))
    return path
