"""Saving and restoring fitted trees as JSON.

A fitted tree is stored together with the attribute schema and the training
configuration it was grown with, so a restored tree can be checked against
the rows it will be asked to predict.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger
from pydantic import BaseModel, Field, model_validator

from cattree.logging import log_stage
from cattree.tree.models import DecisionNode, SplitMetric, TreeNode

__all__ = ["TreeState", "load_tree", "save_tree"]


class TreeState(BaseModel):
    """Serializable snapshot of a fitted tree and its schema.

    Attributes:
        attribute_names (list[str]): Ordered names of every column of the
            training data.
        label_index (int): Column index of the label.
        metric (SplitMetric): Metric the tree was grown with.
        max_depth (int): Depth cap the tree was grown with.
        root (TreeNode): Root node of the fitted tree.
    """

    attribute_names: list[str] = Field(min_length=1, description="Ordered names of every column.")
    label_index: int = Field(ge=0, description="Column index of the label.")
    metric: SplitMetric = Field(description="Metric the tree was grown with.")
    max_depth: int = Field(ge=0, description="Depth cap the tree was grown with.")
    root: TreeNode = Field(description="Root node of the fitted tree.")

    @property
    def label_name(self) -> str:
        """Name of the label column."""
        return self.attribute_names[self.label_index]

    @model_validator(mode="after")
    def _validate_tree_matches_schema(self) -> TreeState:
        """Validate that every decision node refers to a non-label attribute by its own name.

        Returns:
            TreeState: The validated model instance.

        Raises:
            ValueError: If the label index is out of range, or a decision node
                has an out-of-range feature index, splits on the label, carries
                a feature name that disagrees with the schema, or reuses a
                feature already used by an ancestor.
        """
        if self.label_index >= len(self.attribute_names):
            raise ValueError(
                f"label_index {self.label_index} is out of range for {len(self.attribute_names)} attributes"
            )
        errors: list[str] = []
        _collect_schema_errors(self.root, self.attribute_names, self.label_index, used=frozenset(), errors=errors)
        if errors:
            raise ValueError("; ".join(errors))
        return self


def save_tree(path: str | Path, state: TreeState) -> Path:
    """Write a tree state to `path` as JSON.

    Args:
        path (str | Path): Destination file; parent directories are created.
        state (TreeState): The state to write.

    Returns:
        Path: The path written.
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(state.model_dump_json(indent=2), encoding="utf-8")
    log_stage("save", "Tree saved", path=str(path))
    return path


def load_tree(path: str | Path) -> TreeState:
    """Read a tree state previously written by `save_tree`.

    Args:
        path (str | Path): File to read.

    Returns:
        TreeState: The validated state.

    Raises:
        FileNotFoundError: If `path` does not exist.
        pydantic.ValidationError: If the file is not a valid tree state.
    """
    path = Path(path)
    state = TreeState.model_validate_json(path.read_text(encoding="utf-8"))
    log_stage("restore", "Tree loaded", path=str(path))
    return state


# Private helpers


def _collect_schema_errors(
    node: TreeNode,
    attribute_names: list[str],
    label_index: int,
    *,
    used: frozenset[int],
    errors: list[str],
) -> None:
    """Recursively check decision nodes against the attribute schema, appending problems to `errors`."""
    if not isinstance(node, DecisionNode):
        return
    index = node.feature_index
    if index >= len(attribute_names):
        errors.append(f"feature_index {index} is out of range for {len(attribute_names)} attributes")
        return
    if index == label_index:
        errors.append(f"decision node splits on the label column '{attribute_names[index]}'")
    if node.feature_name != attribute_names[index]:
        errors.append(f"feature_name '{node.feature_name}' does not match attribute '{attribute_names[index]}'")
    if index in used:
        errors.append(f"feature '{attribute_names[index]}' is reused below an ancestor that already split on it")
    for child in node.children.values():
        _collect_schema_errors(child, attribute_names, label_index, used=used | {index}, errors=errors)
