"""Applying a fitted tree to datasets: batch prediction and accuracy."""

from __future__ import annotations

from collections.abc import Sequence

from loguru import logger
from pydantic import BaseModel, Field

from cattree.exceptions import EmptyDatasetError
from cattree.logging import log_stage
from cattree.tree.models import Row, TreeNode, predict

# ---------------------------------------------------------------------------
# Public models
# ---------------------------------------------------------------------------


class EvaluationResult(BaseModel):
    """Accuracy of a tree over a labelled dataset.

    Attributes:
        correct (int): Number of rows whose prediction matched the label.
        total (int): Number of rows evaluated.
        accuracy (float): `correct / total * 100`, a percentage in [0, 100].

    Examples:
        >>> EvaluationResult(correct=3, total=4, accuracy=75.0).accuracy
        75.0
    """

    correct: int = Field(ge=0, description="Number of rows whose prediction matched the label.")
    total: int = Field(ge=1, description="Number of rows evaluated.")
    accuracy: float = Field(ge=0.0, le=100.0, description="Percentage of rows predicted correctly.")


class PredictionRecord(BaseModel):
    """The prediction for one sample alongside its actual label.

    Attributes:
        sample_id (int): 1-based position of the sample in the evaluated dataset.
        actual (str): The label recorded in the sample.
        predicted (str): The label predicted by the tree.
    """

    sample_id: int = Field(ge=1, description="1-based position of the sample in the evaluated dataset.")
    actual: str = Field(description="The label recorded in the sample.")
    predicted: str = Field(description="The label predicted by the tree.")


# ---------------------------------------------------------------------------
# Public interface
# ---------------------------------------------------------------------------


def predict_rows(tree: TreeNode, rows: Sequence[Sequence[str]]) -> list[str]:
    """Predict a label for every row.

    Args:
        tree (TreeNode): Root of a fitted tree.
        rows (Sequence[Sequence[str]]): Samples indexed like the training rows.

    Returns:
        list[str]: One predicted label per row, in input order.
    """
    return [predict(tree, row) for row in rows]


def compute_accuracy(tree: TreeNode, rows: Sequence[Row], label_index: int) -> float:
    """Return the percentage of rows whose prediction equals their label.

    Args:
        tree (TreeNode): Root of a fitted tree.
        rows (Sequence[Row]): Labelled rows to evaluate.
        label_index (int): Column holding the actual label.

    Returns:
        float: Accuracy in [0, 100].

    Raises:
        EmptyDatasetError: If `rows` is empty.
    """
    return evaluate(tree, rows, label_index).accuracy


def evaluate(tree: TreeNode, rows: Sequence[Row], label_index: int) -> EvaluationResult:
    """Evaluate a tree over labelled rows.

    Args:
        tree (TreeNode): Root of a fitted tree.
        rows (Sequence[Row]): Labelled rows to evaluate.
        label_index (int): Column holding the actual label.

    Returns:
        EvaluationResult: Correct count, total count and accuracy percentage.

    Raises:
        EmptyDatasetError: If `rows` is empty.
    """
    if not rows:
        logger.warning("Evaluation failed", reason="empty dataset")
        raise EmptyDatasetError("accuracy")

    correct = sum(1 for row in rows if predict(tree, row) == row[label_index])
    result = EvaluationResult(correct=correct, total=len(rows), accuracy=correct / len(rows) * 100.0)
    log_stage("evaluate", "Tree evaluated", correct=result.correct, total=result.total, accuracy=result.accuracy)
    return result


def build_prediction_records(tree: TreeNode, rows: Sequence[Row], label_index: int) -> list[PredictionRecord]:
    """Pair each row's actual label with the tree's prediction.

    Args:
        tree (TreeNode): Root of a fitted tree.
        rows (Sequence[Row]): Labelled rows to predict.
        label_index (int): Column holding the actual label.

    Returns:
        list[PredictionRecord]: One record per row with 1-based `sample_id`.
    """
    return [
        PredictionRecord(sample_id=position, actual=row[label_index], predicted=predict(tree, row))
        for position, row in enumerate(rows, start=1)
    ]
