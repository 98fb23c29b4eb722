"""Tree node models, prediction, and rule extraction for categorical decision trees."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable, Sequence
from typing import Annotated, Final, Literal

from pydantic import BaseModel, ConfigDict, Field

# ---------------------------------------------------------------------------
# Public type aliases and constants
# ---------------------------------------------------------------------------

type Row = tuple[str, ...]

type SplitMetric = Literal["gini", "info", "gain"]

SPLIT_METRICS: Final[tuple[str, ...]] = ("gini", "info", "gain")

UNKNOWN_LABEL: Final[str] = "unknown"

# ---------------------------------------------------------------------------
# Public models -- Tree nodes
# ---------------------------------------------------------------------------


class LeafNode(BaseModel):
    """A terminal node carrying the predicted label.

    Attributes:
        node_type (Literal["leaf"]): Discriminator field; always `"leaf"`.
        label (str): The label predicted for every sample reaching this leaf.

    Examples:
        >>> LeafNode(label="yes").label
        'yes'
    """

    model_config = ConfigDict(frozen=True)

    node_type: Literal["leaf"] = Field(default="leaf", description='Discriminator field. Always "leaf".')
    label: str = Field(description="Label predicted for samples reaching this leaf.")


class DecisionNode(BaseModel):
    """An internal node that routes samples by the value of one categorical feature.

    There is one child per distinct value observed in the training subset that
    reached this node, not one per globally possible value.

    Attributes:
        node_type (Literal["decision"]): Discriminator field; always `"decision"`.
        feature_index (int): Zero-based column index of the splitting feature.
        feature_name (str): Attribute name of the splitting feature, for reporting.
        children (dict[str, TreeNode]): Mapping of observed feature value to the
            subtree for samples holding that value.

    Examples:
        >>> node = DecisionNode(
        ...     feature_index=0,
        ...     feature_name="Outlook",
        ...     children={"sunny": LeafNode(label="no"), "overcast": LeafNode(label="yes")},
        ... )
        >>> sorted(node.children)
        ['overcast', 'sunny']
    """

    model_config = ConfigDict(frozen=True)

    node_type: Literal["decision"] = Field(default="decision", description='Discriminator field. Always "decision".')
    feature_index: int = Field(ge=0, description="Zero-based column index of the splitting feature.")
    feature_name: str = Field(description="Attribute name of the splitting feature.")
    children: dict[str, TreeNode] = Field(
        description="Mapping of observed feature value to the child subtree for that value.",
    )


# Use this alias when accepting either node variant; Pydantic selects the concrete model from `node_type`.
TreeNode = Annotated[LeafNode | DecisionNode, Field(discriminator="node_type")]

DecisionNode.model_rebuild()


class Predicate(BaseModel):
    """An equality condition on one categorical feature.

    Attributes:
        variable (str): Attribute name the condition applies to.
        operator (Literal["=="]): Comparison operator; categorical branches
            always test equality.
        value (str): The feature value selecting the branch.

    Examples:
        >>> p = Predicate(variable="Outlook", value="sunny")
        >>> str(p)
        'Outlook == sunny'
        >>> p.eval("rain")
        False
    """

    variable: str = Field(description="Attribute name the condition applies to, e.g. 'Outlook'.")
    operator: Literal["=="] = Field(default="==", description="Comparison operator; always equality.")
    value: str = Field(description="The feature value selecting the branch.")

    def __str__(self) -> str:
        """Return the predicate as `"<variable> == <value>"`."""
        return f"{self.variable} {self.operator} {self.value}"

    def eval(self, x: str) -> bool:
        """Evaluate this predicate against a feature value.

        Args:
            x (str): The feature value to test.

        Returns:
            bool: `True` if `x` equals the predicate value.
        """
        return x == self.value


class ClassificationRule(BaseModel):
    """A decision rule for one leaf: the root-to-leaf path and its prediction.

    Attributes:
        predicates (list[Predicate]): Predicates along the path from root to
            this leaf. An empty list means the tree is a single leaf.
        prediction (str): Label predicted at the leaf.
    """

    predicates: list[Predicate] = Field(
        description="Predicates along the path from root to this leaf. Empty for a single-leaf tree.",
    )
    prediction: str = Field(description="Label predicted at the leaf.")

    def __str__(self) -> str:
        """Return the rule as `"IF <p1> AND <p2> THEN <prediction>"`."""
        if not self.predicates:
            return f"THEN {self.prediction}"
        conditions = " AND ".join(str(predicate) for predicate in self.predicates)
        return f"IF {conditions} THEN {self.prediction}"


# ---------------------------------------------------------------------------
# Public interface -- Prediction
# ---------------------------------------------------------------------------


def predict(node: TreeNode, sample: Sequence[str]) -> str:
    """Predict the label for one sample by descending from `node`.

    At a decision node whose children do not include the sample's value, the
    prediction falls back to a majority vote over the node's *immediate* leaf
    children only; decision children are not descended into. Ties go to the
    lexicographically smallest label, and a node with no leaf children yields
    `UNKNOWN_LABEL`.

    Args:
        node (TreeNode): Root of the (sub)tree to descend.
        sample (Sequence[str]): One row of feature values, indexed like the
            training rows. The label cell, if present, is ignored.

    Returns:
        str: The predicted label. Never raises for unseen values.

    Examples:
        >>> tree = DecisionNode(
        ...     feature_index=0,
        ...     feature_name="A",
        ...     children={"a1": LeafNode(label="yes"), "a2": LeafNode(label="no")},
        ... )
        >>> predict(tree, ("a1", "b1"))
        'yes'
        >>> predict(tree, ("a3", "b1"))
        'no'
    """
    current = node
    while isinstance(current, DecisionNode):
        child = current.children.get(sample[current.feature_index])
        if child is None:
            return most_common_label(
                grandchild.label for grandchild in current.children.values() if isinstance(grandchild, LeafNode)
            )
        current = child
    return current.label


def most_common_label(labels: Iterable[str]) -> str:
    """Return the most frequent value among `labels`, smallest value on ties.

    Args:
        labels (Iterable[str]): The label strings to count.

    Returns:
        str: The winning label, or `UNKNOWN_LABEL` when there are no labels.
    """
    counts = Counter(labels)
    if not counts:
        return UNKNOWN_LABEL
    return min(counts, key=lambda label: (-counts[label], label))


# ---------------------------------------------------------------------------
# Public interface -- Tree statistics and rendering
# ---------------------------------------------------------------------------


def tree_depth(node: TreeNode) -> int:
    """Return the number of edges on the longest root-to-leaf path.

    Args:
        node (TreeNode): Root of the tree.

    Returns:
        int: 0 for a single leaf.
    """
    if isinstance(node, LeafNode):
        return 0
    return 1 + max(tree_depth(child) for child in node.children.values())


def leaf_count(node: TreeNode) -> int:
    """Return the number of leaf nodes in the tree rooted at `node`."""
    if isinstance(node, LeafNode):
        return 1
    return sum(leaf_count(child) for child in node.children.values())


def node_count(node: TreeNode) -> int:
    """Return the total number of nodes in the tree rooted at `node`."""
    if isinstance(node, LeafNode):
        return 1
    return 1 + sum(node_count(child) for child in node.children.values())


def extract_rules(node: TreeNode) -> list[ClassificationRule]:
    """Extract one human-readable rule per leaf.

    Children are visited in ascending order of their branch value so the
    output is stable regardless of the order values were seen in training.

    Args:
        node (TreeNode): Root of the tree.

    Returns:
        list[ClassificationRule]: One rule per leaf node, in depth-first order.

    Examples:
        >>> tree = DecisionNode(
        ...     feature_index=0,
        ...     feature_name="A",
        ...     children={"a2": LeafNode(label="no"), "a1": LeafNode(label="yes")},
        ... )
        >>> [str(rule) for rule in extract_rules(tree)]
        ['IF A == a1 THEN yes', 'IF A == a2 THEN no']
    """
    rules: list[ClassificationRule] = []
    _walk_tree(node, path_predicates=[], rules=rules)
    return rules


def format_tree(node: TreeNode, *, indent: str = "  ") -> str:
    """Render the tree as indented text, one line per branch or leaf.

    Args:
        node (TreeNode): Root of the tree.
        indent (str): String repeated once per depth level. Defaults to two spaces.

    Returns:
        str: Multi-line rendering, e.g.::

            Outlook = overcast -> yes
            Outlook = sunny
              Humidity = high -> no
              Humidity = normal -> yes
    """
    if isinstance(node, LeafNode):
        return f"-> {node.label}"
    lines: list[str] = []
    _render_branches(node, depth=0, indent=indent, lines=lines)
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Private helpers
# ---------------------------------------------------------------------------


def _walk_tree(node: TreeNode, *, path_predicates: list[Predicate], rules: list[ClassificationRule]) -> None:
    """Recursively walk `node` and append one rule per leaf to `rules`."""
    if isinstance(node, LeafNode):
        rules.append(ClassificationRule(predicates=path_predicates, prediction=node.label))
        return
    for value in sorted(node.children):
        predicate = Predicate(variable=node.feature_name, value=value)
        _walk_tree(node.children[value], path_predicates=[*path_predicates, predicate], rules=rules)


def _render_branches(node: DecisionNode, *, depth: int, indent: str, lines: list[str]) -> None:
    prefix = indent * depth
    for value in sorted(node.children):
        child = node.children[value]
        if isinstance(child, LeafNode):
            lines.append(f"{prefix}{node.feature_name} = {value} -> {child.label}")
        else:
            lines.append(f"{prefix}{node.feature_name} = {value}")
            _render_branches(child, depth=depth + 1, indent=indent, lines=lines)
