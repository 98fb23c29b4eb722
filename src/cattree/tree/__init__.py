"""Decision tree sub-package: node models, metrics, induction, and evaluation."""

from __future__ import annotations

from cattree.tree.building import DEFAULT_MAX_DEPTH, build_tree, fit_tree
from cattree.tree.evaluation import (
    EvaluationResult,
    PredictionRecord,
    build_prediction_records,
    compute_accuracy,
    evaluate,
    predict_rows,
)
from cattree.tree.metrics import (
    entropy,
    gain_ratio,
    gini_impurity,
    gini_split,
    information_gain,
    majority_label,
    score_feature,
    split_info,
)
from cattree.tree.models import (
    SPLIT_METRICS,
    UNKNOWN_LABEL,
    ClassificationRule,
    DecisionNode,
    LeafNode,
    Predicate,
    Row,
    SplitMetric,
    TreeNode,
    extract_rules,
    format_tree,
    leaf_count,
    node_count,
    predict,
    tree_depth,
)
from cattree.tree.partition import partition_by_feature

__all__ = [
    "DEFAULT_MAX_DEPTH",
    "SPLIT_METRICS",
    "UNKNOWN_LABEL",
    "ClassificationRule",
    "DecisionNode",
    "EvaluationResult",
    "LeafNode",
    "Predicate",
    "PredictionRecord",
    "Row",
    "SplitMetric",
    "TreeNode",
    "build_prediction_records",
    "build_tree",
    "compute_accuracy",
    "entropy",
    "evaluate",
    "extract_rules",
    "fit_tree",
    "format_tree",
    "gain_ratio",
    "gini_impurity",
    "gini_split",
    "information_gain",
    "leaf_count",
    "majority_label",
    "node_count",
    "partition_by_feature",
    "predict",
    "predict_rows",
    "score_feature",
    "split_info",
    "tree_depth",
]
