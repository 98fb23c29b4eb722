"""cattree: Decision trees over categorical tabular data."""

from loguru import logger

from cattree.dataset import load_dataset, resolve_label_index, split_dataset, validate_dataset, write_predictions
from cattree.logging import PACKAGE_NAME, enable_logging
from cattree.persistence import TreeState, load_tree, save_tree
from cattree.pipeline import ExperimentResult, run_experiment
from cattree.settings import ExperimentSettings
from cattree.tree import (
    DecisionNode,
    EvaluationResult,
    LeafNode,
    TreeNode,
    build_tree,
    compute_accuracy,
    evaluate,
    extract_rules,
    fit_tree,
    predict,
    predict_rows,
)

logger.disable(PACKAGE_NAME)  # noqa: RUF067 - Disable logging for the cattree package by default

__all__ = [
    "DecisionNode",
    "EvaluationResult",
    "ExperimentResult",
    "ExperimentSettings",
    "LeafNode",
    "TreeNode",
    "TreeState",
    "build_tree",
    "compute_accuracy",
    "enable_logging",
    "evaluate",
    "extract_rules",
    "fit_tree",
    "load_dataset",
    "load_tree",
    "predict",
    "predict_rows",
    "resolve_label_index",
    "save_tree",
    "split_dataset",
    "validate_dataset",
    "write_predictions",
]
