"""Recursive tree induction and the validating fit entry point."""

from __future__ import annotations

from collections.abc import Sequence
from typing import Final, cast

from loguru import logger

from cattree.dataset import resolve_label_index, validate_dataset
from cattree.exceptions import AttributesNotFoundError, UnknownMetricError
from cattree.logging import log_stage
from cattree.tree.metrics import majority_label, score_feature
from cattree.tree.models import (
    SPLIT_METRICS,
    UNKNOWN_LABEL,
    DecisionNode,
    LeafNode,
    Row,
    SplitMetric,
    TreeNode,
    leaf_count,
    node_count,
    tree_depth,
)
from cattree.tree.partition import partition_by_feature

# ---------------------------------------------------------------------------
# Module-level constants
# ---------------------------------------------------------------------------

DEFAULT_MAX_DEPTH: Final[int] = 8
_SENTINEL_SCORE: Final[float] = -1e9  # Lower than any split score


# ---------------------------------------------------------------------------
# Public interface -- Recursive induction
# ---------------------------------------------------------------------------


def build_tree(
    rows: Sequence[Row],
    feature_indices: Sequence[int],
    label_index: int,
    metric: SplitMetric,
    attribute_names: Sequence[str],
    depth: int = 0,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> TreeNode:
    """Recursively grow a decision tree over categorical rows.

    Base cases, in precedence order:

    1. No rows: a leaf labelled `UNKNOWN_LABEL`.
    2. All rows share one label: a leaf with that label.
    3. No candidate features left, or `depth >= max_depth`: a leaf with the
       majority label.
    4. Otherwise the candidate with the strictly highest score wins (the
       first one in `feature_indices` order on ties), the rows are
       partitioned by its values and one subtree is grown per observed
       value, with the winner removed from the candidates passed down.

    Args:
        rows (Sequence[Row]): Training rows reaching this node.
        feature_indices (Sequence[int]): Columns still eligible for splitting on
            this path, in the order candidates are scored.
        label_index (int): Column holding the class label.
        metric (SplitMetric): `"gini"`, `"info"` or `"gain"`.
        attribute_names (Sequence[str]): Names of all columns, used to label
            decision nodes.
        depth (int): Depth of this node; the root is 0.
        max_depth (int): Nodes at this depth become leaves.

    Returns:
        TreeNode: The root of the grown subtree.
    """
    if not rows:
        logger.trace("Leaf formed: empty subset", depth=depth)
        return LeafNode(label=UNKNOWN_LABEL)

    first_label = rows[0][label_index]
    if all(row[label_index] == first_label for row in rows):
        logger.trace("Leaf formed: pure subset", depth=depth, label=first_label, rows=len(rows))
        return LeafNode(label=first_label)

    if not feature_indices or depth >= max_depth:
        label = majority_label(rows, label_index)
        logger.trace("Leaf formed: majority label", depth=depth, label=label, rows=len(rows))
        return LeafNode(label=label)

    best_feature, best_score = _select_best_feature(rows, feature_indices, label_index, metric)
    if best_feature is None:
        return LeafNode(label=majority_label(rows, label_index))

    logger.debug(
        "Split chosen",
        depth=depth,
        feature=attribute_names[best_feature],
        score=best_score,
        rows=len(rows),
    )

    remaining_features = [index for index in feature_indices if index != best_feature]
    children = {
        value: build_tree(
            subset,
            remaining_features,
            label_index,
            metric,
            attribute_names,
            depth=depth + 1,
            max_depth=max_depth,
        )
        for value, subset in partition_by_feature(rows, best_feature).items()
    }
    return DecisionNode(
        feature_index=best_feature,
        feature_name=attribute_names[best_feature],
        children=children,
    )


# ---------------------------------------------------------------------------
# Public interface -- Validating entry point
# ---------------------------------------------------------------------------


def fit_tree(
    rows: Sequence[Row],
    attribute_names: Sequence[str],
    label_name: str,
    *,
    metric: str,
    max_depth: int = DEFAULT_MAX_DEPTH,
    feature_names: Sequence[str] | None = None,
) -> TreeNode:
    """Validate the configuration and grow a tree over `rows`.

    Args:
        rows (Sequence[Row]): Training rows, one cell per attribute.
        attribute_names (Sequence[str]): Ordered names of every column.
        label_name (str): Name of the label column; must match exactly one
            attribute name.
        metric (str): `"gini"`, `"info"` or `"gain"`. No default is assumed.
        max_depth (int): Maximum tree depth, `>= 0`. Defaults to 8.
        feature_names (Sequence[str] | None): Restrict splitting to these
            attributes. When `None`, every attribute except the label is a
            candidate.

    Returns:
        TreeNode: The root of the fitted tree.

    Raises:
        UnknownMetricError: If `metric` is not a supported metric.
        LabelNotFoundError: If `label_name` is not an attribute name.
        AttributesNotFoundError: If any of `feature_names` is not an attribute name.
        DuplicateAttributesError: If `attribute_names` contains duplicates.
        RowLengthError: If a row does not have one cell per attribute.
        ValueError: If `max_depth` is negative or `feature_names` includes the label.
    """
    if metric not in SPLIT_METRICS:
        logger.warning("Tree fitting failed", reason="unknown metric", metric=metric)
        raise UnknownMetricError(metric=metric, valid_metrics=SPLIT_METRICS)
    if max_depth < 0:
        raise ValueError(f"max_depth must be >= 0, got {max_depth}.")

    label_index = resolve_label_index(attribute_names, label_name)
    validate_dataset(rows, attribute_names)
    feature_indices = _resolve_feature_indices(attribute_names, label_index, feature_names)

    log_stage(
        "fit",
        "Fitting tree",
        rows=len(rows),
        features=len(feature_indices),
        label=label_name,
        metric=metric,
        max_depth=max_depth,
    )
    root = build_tree(
        rows,
        feature_indices,
        label_index,
        cast(SplitMetric, metric),
        attribute_names,
        max_depth=max_depth,
    )
    logger.info(
        "Tree fitted",
        depth=tree_depth(root),
        leaves=leaf_count(root),
        nodes=node_count(root),
    )
    return root


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _select_best_feature(
    rows: Sequence[Row],
    feature_indices: Sequence[int],
    label_index: int,
    metric: SplitMetric,
) -> tuple[int | None, float]:
    """Return the candidate with the strictly highest score, first-seen on ties.

    Returns:
        tuple[int | None, float]: `(feature_index, score)`, or
            `(None, _SENTINEL_SCORE)` when no candidate beats the sentinel.
    """
    best_score = _SENTINEL_SCORE
    best_feature: int | None = None
    for feature_index in feature_indices:
        score = score_feature(rows, feature_index, label_index, metric)
        if score > best_score:
            best_score = score
            best_feature = feature_index
    return best_feature, best_score


def _resolve_feature_indices(
    attribute_names: Sequence[str],
    label_index: int,
    feature_names: Sequence[str] | None,
) -> list[int]:
    """Map candidate feature names to ascending column indices, excluding the label.

    Raises:
        AttributesNotFoundError: If a requested feature is not an attribute name.
        ValueError: If the label column is requested as a feature.
    """
    if feature_names is None:
        return [index for index in range(len(attribute_names)) if index != label_index]

    name_to_index = {name: index for index, name in enumerate(attribute_names)}
    missing = [name for name in feature_names if name not in name_to_index]
    if missing:
        raise AttributesNotFoundError(missing_attributes=missing, available_attributes=attribute_names)
    indices = {name_to_index[name] for name in feature_names}
    if label_index in indices:
        raise ValueError(
            f"Feature '{attribute_names[label_index]}' is the label column and cannot be used for splitting."
        )
    return sorted(indices)
