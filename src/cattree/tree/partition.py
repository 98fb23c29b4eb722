"""Grouping of rows by the value of one categorical column."""

from __future__ import annotations

from collections.abc import Iterable

from cattree.tree.models import Row


def partition_by_feature(rows: Iterable[Row], feature_index: int) -> dict[str, list[Row]]:
    """Group rows by their value at `feature_index`.

    A single pass over `rows`; each distinct value observed becomes a key,
    in first-seen order. Values that never occur are not represented.

    Args:
        rows (Iterable[Row]): The rows to group.
        feature_index (int): Zero-based column to group on.

    Returns:
        dict[str, list[Row]]: Mapping of observed value to the rows holding it,
            preserving the relative order of rows within each group.

    Examples:
        >>> partition_by_feature([("a", "x"), ("b", "y"), ("a", "z")], 0)
        {'a': [('a', 'x'), ('a', 'z')], 'b': [('b', 'y')]}
    """
    subsets: dict[str, list[Row]] = {}
    for row in rows:
        subsets.setdefault(row[feature_index], []).append(row)
    return subsets
