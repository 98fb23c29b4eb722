"""Tests for `partition_by_feature`."""

from __future__ import annotations

from pytest_check import check

from cattree.tree.partition import partition_by_feature


class TestPartitionByFeature:
    """Tests for grouping rows by one column's value."""

    def test_groups_rows_by_value(self) -> None:
        """Each observed value maps to the rows holding it."""
        # Arrange
        rows = [
            ("sunny", "hot", "no"),
            ("rain", "mild", "yes"),
            ("sunny", "mild", "yes"),
            ("overcast", "hot", "yes"),
        ]

        # Act
        subsets = partition_by_feature(rows, 0)

        # Assert
        with check:
            assert set(subsets) == {"sunny", "rain", "overcast"}
        with check:
            assert subsets["sunny"] == [("sunny", "hot", "no"), ("sunny", "mild", "yes")]
        with check:
            assert subsets["overcast"] == [("overcast", "hot", "yes")]

    def test_subset_sizes_sum_to_input_size(self) -> None:
        """Partitioning neither drops nor duplicates rows."""
        # Arrange
        rows = [(value, "x") for value in "abacabad"]

        # Act
        subsets = partition_by_feature(rows, 0)

        # Assert
        assert sum(len(subset) for subset in subsets.values()) == len(rows)

    def test_keys_follow_first_seen_order(self) -> None:
        """Keys appear in the order their values are first encountered."""
        rows = [("b", "1"), ("a", "2"), ("b", "3"), ("c", "4")]
        assert list(partition_by_feature(rows, 0)) == ["b", "a", "c"]

    def test_empty_rows_give_empty_mapping(self) -> None:
        """No rows means no groups."""
        assert partition_by_feature([], 0) == {}

    def test_empty_string_is_an_ordinary_value(self) -> None:
        """Empty cells form their own group."""
        rows = [("", "yes"), ("a", "no"), ("", "no")]
        assert len(partition_by_feature(rows, 0)[""]) == 2
