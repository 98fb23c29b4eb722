"""Tests for saving and restoring fitted trees."""

from __future__ import annotations

from pathlib import Path

import pydantic
import pytest
from pytest_check import check

from cattree.persistence import TreeState, load_tree, save_tree
from cattree.tree.building import fit_tree
from cattree.tree.models import DecisionNode, LeafNode, predict

ATTRIBUTES = ["A", "B", "L"]
ROWS = [
    ("a1", "b1", "yes"),
    ("a1", "b2", "yes"),
    ("a2", "b1", "no"),
    ("a2", "b2", "yes"),
    ("a2", "b2", "yes"),
]


def _make_state() -> TreeState:
    tree = fit_tree(ROWS, ATTRIBUTES, "L", metric="info")
    return TreeState(attribute_names=ATTRIBUTES, label_index=2, metric="info", max_depth=8, root=tree)


class TestSaveAndLoadTree:
    """Tests for `save_tree` and `load_tree`."""

    def test_round_trip_restores_equal_tree(self, tmp_path: Path) -> None:
        """A saved tree loads back equal and predicts identically."""
        # Arrange
        state = _make_state()

        # Act
        path = save_tree(tmp_path / "models" / "tree.json", state)
        restored = load_tree(path)

        # Assert
        with check:
            assert restored == state
        with check:
            assert restored.label_name == "L"
        for row in ROWS:
            with check:
                assert predict(restored.root, row) == predict(state.root, row)

    def test_saved_file_is_json_with_node_types(self, tmp_path: Path) -> None:
        """The file is readable JSON that tags every node with its type."""
        # Act
        path = save_tree(tmp_path / "tree.json", _make_state())

        # Assert
        text = path.read_text(encoding="utf-8")
        with check:
            assert '"node_type": "decision"' in text
        with check:
            assert '"node_type": "leaf"' in text

    def test_load_missing_file_raises(self, tmp_path: Path) -> None:
        """Loading a nonexistent file fails loudly."""
        with pytest.raises(FileNotFoundError):
            load_tree(tmp_path / "absent.json")


class TestTreeStateValidation:
    """Tests for `TreeState` schema checks."""

    def test_label_index_out_of_range(self) -> None:
        """The label index must point at an attribute."""
        with pytest.raises(pydantic.ValidationError, match="out of range"):
            TreeState(attribute_names=ATTRIBUTES, label_index=3, metric="gini", max_depth=2, root=LeafNode(label="yes"))

    def test_split_on_label_rejected(self) -> None:
        """A decision node cannot split on the label column."""
        # Arrange
        root = DecisionNode(feature_index=2, feature_name="L", children={"yes": LeafNode(label="yes")})

        # Act & Assert
        with pytest.raises(pydantic.ValidationError, match="label column"):
            TreeState(attribute_names=ATTRIBUTES, label_index=2, metric="gini", max_depth=2, root=root)

    def test_feature_name_mismatch_rejected(self) -> None:
        """A decision node's name must agree with the attribute at its index."""
        # Arrange
        root = DecisionNode(feature_index=0, feature_name="B", children={"a1": LeafNode(label="yes")})

        # Act & Assert
        with pytest.raises(pydantic.ValidationError, match="does not match"):
            TreeState(attribute_names=ATTRIBUTES, label_index=2, metric="gini", max_depth=2, root=root)

    def test_reused_feature_rejected(self) -> None:
        """A feature cannot be split on again below an ancestor that used it."""
        # Arrange
        inner = DecisionNode(feature_index=0, feature_name="A", children={"a1": LeafNode(label="yes")})
        root = DecisionNode(feature_index=0, feature_name="A", children={"a1": inner})

        # Act & Assert
        with pytest.raises(pydantic.ValidationError, match="reused"):
            TreeState(attribute_names=ATTRIBUTES, label_index=2, metric="gini", max_depth=2, root=root)

    def test_unknown_metric_rejected(self) -> None:
        """Only supported metric names can be stored."""
        with pytest.raises(pydantic.ValidationError):
            TreeState(
                attribute_names=ATTRIBUTES,
                label_index=2,
                metric="chi2",  # type: ignore[arg-type]
                max_depth=2,
                root=LeafNode(label="yes"),
            )
