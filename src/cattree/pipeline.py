"""End-to-end experiment: load, split, fit, evaluate, and export."""

from __future__ import annotations

import time
from pathlib import Path

from pydantic import BaseModel, Field

from cattree.dataset import load_dataset, split_dataset, write_predictions
from cattree.persistence import TreeState, save_tree
from cattree.settings import ExperimentSettings
from cattree.tree.building import fit_tree
from cattree.tree.evaluation import EvaluationResult, build_prediction_records, evaluate
from cattree.tree.models import TreeNode, leaf_count, node_count, tree_depth


class ExperimentResult(BaseModel):
    """Summary of one train/evaluate run.

    Attributes:
        dataset_path (Path): The data file that was read.
        label_name (str): Name of the label column.
        metric (str): Split metric used.
        sample_count (int): Rows loaded from the data file.
        train_size (int): Rows used for training.
        test_size (int): Rows held out for evaluation.
        build_seconds (float): Wall-clock time spent growing the tree.
        depth (int): Depth of the fitted tree.
        leaf_count (int): Number of leaves in the fitted tree.
        node_count (int): Number of nodes in the fitted tree.
        evaluation (EvaluationResult): Accuracy on the held-out rows.
        predictions_path (Path | None): Where predictions were written, if requested.
        tree_path (Path | None): Where the tree was saved, if requested.
    """

    dataset_path: Path = Field(description="The data file that was read.")
    label_name: str = Field(description="Name of the label column.")
    metric: str = Field(description="Split metric used.")
    sample_count: int = Field(ge=1, description="Rows loaded from the data file.")
    train_size: int = Field(ge=0, description="Rows used for training.")
    test_size: int = Field(ge=0, description="Rows held out for evaluation.")
    build_seconds: float = Field(ge=0.0, description="Wall-clock time spent growing the tree.")
    depth: int = Field(ge=0, description="Depth of the fitted tree.")
    leaf_count: int = Field(ge=1, description="Number of leaves in the fitted tree.")
    node_count: int = Field(ge=1, description="Number of nodes in the fitted tree.")
    evaluation: EvaluationResult = Field(description="Accuracy on the held-out rows.")
    predictions_path: Path | None = Field(default=None, description="Where predictions were written.")
    tree_path: Path | None = Field(default=None, description="Where the tree was saved.")


def run_experiment(settings: ExperimentSettings) -> tuple[TreeNode, ExperimentResult]:
    """Run one experiment described by `settings`.

    Loads the dataset, shuffles it into training and test sets, grows a tree
    on the training rows, evaluates it on the test rows, and optionally writes
    predictions for every loaded row and saves the tree.

    Args:
        settings (ExperimentSettings): The validated experiment configuration.

    Returns:
        tuple[TreeNode, ExperimentResult]: The fitted tree and the run summary.

    Raises:
        EmptyDatasetError: If the data file holds no rows.
        RowLengthError: If a line's cell count differs from the attribute count.
    """
    attribute_names = settings.attribute_names or []
    label_name = settings.label_name or ""
    label_index = settings.label_index

    rows = load_dataset(settings.dataset_path, attribute_names, delimiter=settings.delimiter)
    train_rows, test_rows = split_dataset(rows, settings.train_ratio, seed=settings.seed)

    start = time.perf_counter()
    tree = fit_tree(train_rows, attribute_names, label_name, metric=settings.metric, max_depth=settings.max_depth)
    build_seconds = time.perf_counter() - start

    evaluation = evaluate(tree, test_rows, label_index)

    predictions_path = None
    if settings.predictions_path is not None:
        predictions_path = write_predictions(
            settings.predictions_path,
            build_prediction_records(tree, rows, label_index),
        )

    tree_path = None
    if settings.tree_path is not None:
        state = TreeState(
            attribute_names=attribute_names,
            label_index=label_index,
            metric=settings.metric,
            max_depth=settings.max_depth,
            root=tree,
        )
        tree_path = save_tree(settings.tree_path, state)

    result = ExperimentResult(
        dataset_path=settings.dataset_path,
        label_name=label_name,
        metric=settings.metric,
        sample_count=len(rows),
        train_size=len(train_rows),
        test_size=len(test_rows),
        build_seconds=build_seconds,
        depth=tree_depth(tree),
        leaf_count=leaf_count(tree),
        node_count=node_count(tree),
        evaluation=evaluation,
        predictions_path=predictions_path,
        tree_path=tree_path,
    )
    return tree, result
