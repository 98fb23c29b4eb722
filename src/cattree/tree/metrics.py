"""Impurity and gain metrics over partitions of categorical rows.

Every function here is total over well-formed input: empty data yields 0.0,
`log2(0)` is never evaluated and gain ratio is guarded against a vanishing
denominator.
"""

from __future__ import annotations

from collections import Counter
from collections.abc import Callable, Sequence
from typing import Final

import numpy as np

from cattree.exceptions import UnknownMetricError
from cattree.tree.models import SPLIT_METRICS, Row, SplitMetric, most_common_label
from cattree.tree.partition import partition_by_feature

# Below this, split information is treated as zero and gain ratio is 0.0.
_SPLIT_INFO_EPSILON: Final[float] = 1e-10

# ---------------------------------------------------------------------------
# Public interface -- Impurity
# ---------------------------------------------------------------------------


def gini_impurity(rows: Sequence[Row], label_index: int) -> float:
    """Return `1 - sum(p_i ** 2)` over the label distribution of `rows`.

    Args:
        rows (Sequence[Row]): The rows to measure.
        label_index (int): Column holding the class label.

    Returns:
        float: Gini impurity in `[0, 1 - 1/k]` for `k` distinct labels, or 0.0
            when `rows` is empty.
    """
    probs = _value_fractions(rows, label_index)
    if probs.size == 0:
        return 0.0
    return float(1.0 - np.sum(np.square(probs)))


def entropy(rows: Sequence[Row], label_index: int) -> float:
    """Return the Shannon entropy, in bits, of the values in column `label_index`.

    Args:
        rows (Sequence[Row]): The rows to measure.
        label_index (int): Column whose value distribution is measured.

    Returns:
        float: Entropy `>= 0`, or 0.0 when `rows` is empty.
    """
    probs = _value_fractions(rows, label_index)
    probs = probs[probs > 0]  # Avoid log(0)
    if probs.size == 0:
        return 0.0
    return float(-np.sum(probs * np.log2(probs)))


# ---------------------------------------------------------------------------
# Public interface -- Split quality
# ---------------------------------------------------------------------------


def gini_split(rows: Sequence[Row], feature_index: int, label_index: int) -> float:
    """Return the size-weighted mean Gini impurity after splitting on `feature_index`.

    Lower is better.

    Args:
        rows (Sequence[Row]): The rows to split.
        feature_index (int): Column to partition on.
        label_index (int): Column holding the class label.

    Returns:
        float: Weighted Gini impurity of the partition, 0.0 for empty `rows`.
    """
    return _weighted_subset_measure(rows, feature_index, label_index, gini_impurity)


def information_gain(rows: Sequence[Row], feature_index: int, label_index: int) -> float:
    """Return the reduction in label entropy achieved by splitting on `feature_index`.

    Args:
        rows (Sequence[Row]): The rows to split.
        feature_index (int): Column to partition on.
        label_index (int): Column holding the class label.

    Returns:
        float: `entropy(rows) - weighted mean entropy of the subsets`. Higher
            is better.
    """
    return entropy(rows, label_index) - _weighted_subset_measure(rows, feature_index, label_index, entropy)


def split_info(rows: Sequence[Row], feature_index: int) -> float:
    """Return the entropy of the feature's own value distribution.

    Used as the denominator of `gain_ratio`; it grows with the number of
    distinct values, penalizing many-way splits.

    Args:
        rows (Sequence[Row]): The rows to measure.
        feature_index (int): Column whose value distribution is measured.

    Returns:
        float: Split information in bits.
    """
    return entropy(rows, feature_index)


def gain_ratio(rows: Sequence[Row], feature_index: int, label_index: int) -> float:
    """Return information gain normalized by split information.

    Args:
        rows (Sequence[Row]): The rows to split.
        feature_index (int): Column to partition on.
        label_index (int): Column holding the class label.

    Returns:
        float: `information_gain / split_info`, or exactly 0.0 when split
            information is zero or negligible (the feature is constant
            within `rows`).
    """
    denominator = split_info(rows, feature_index)
    if denominator < _SPLIT_INFO_EPSILON:
        return 0.0
    return information_gain(rows, feature_index, label_index) / denominator


def score_feature(rows: Sequence[Row], feature_index: int, label_index: int, metric: SplitMetric) -> float:
    """Score a candidate split so that a higher score is always better.

    `gini` is scored as the negated weighted Gini impurity; `info` and `gain`
    are scored as information gain and gain ratio respectively.

    Args:
        rows (Sequence[Row]): The rows to split.
        feature_index (int): Candidate column to partition on.
        label_index (int): Column holding the class label.
        metric (SplitMetric): One of `"gini"`, `"info"` or `"gain"`.

    Returns:
        float: The split score for `feature_index`.

    Raises:
        UnknownMetricError: If `metric` is not a supported metric name.
    """
    scorer = _METRIC_SCORERS.get(metric)
    if scorer is None:
        raise UnknownMetricError(metric=metric, valid_metrics=SPLIT_METRICS)
    return scorer(rows, feature_index, label_index)


# ---------------------------------------------------------------------------
# Public interface -- Majority vote
# ---------------------------------------------------------------------------


def majority_label(rows: Sequence[Row], label_index: int) -> str:
    """Return the most frequent label in `rows`.

    Ties are broken by the lexicographically smallest label.

    Args:
        rows (Sequence[Row]): The rows to vote over.
        label_index (int): Column holding the class label.

    Returns:
        str: The majority label, or `UNKNOWN_LABEL` when `rows` is empty.
    """
    return most_common_label(row[label_index] for row in rows)


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _value_fractions(rows: Sequence[Row], column_index: int) -> np.ndarray:
    """Return the fraction of rows holding each distinct value of a column."""
    if not rows:
        return np.empty(0, dtype=float)
    counts = np.fromiter(Counter(row[column_index] for row in rows).values(), dtype=float)
    return counts / len(rows)


def _weighted_subset_measure(
    rows: Sequence[Row],
    feature_index: int,
    label_index: int,
    measure: Callable[[Sequence[Row], int], float],
) -> float:
    """Return the size-weighted mean of `measure` over the partition by `feature_index`."""
    if not rows:
        return 0.0
    total = len(rows)
    return sum(
        len(subset) / total * measure(subset, label_index)
        for subset in partition_by_feature(rows, feature_index).values()
    )


def _negated_gini_split(rows: Sequence[Row], feature_index: int, label_index: int) -> float:
    return -gini_split(rows, feature_index, label_index)


_METRIC_SCORERS: dict[str, Callable[[Sequence[Row], int, int], float]] = {
    "gini": _negated_gini_split,
    "info": information_gain,
    "gain": gain_ratio,
}
