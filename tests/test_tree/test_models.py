"""Tests for tree node models, prediction, statistics, and rule extraction."""

from __future__ import annotations

import pydantic
import pytest
from pydantic import TypeAdapter
from pytest_check import check

from cattree.tree.building import fit_tree
from cattree.tree.models import (
    UNKNOWN_LABEL,
    ClassificationRule,
    DecisionNode,
    LeafNode,
    Predicate,
    TreeNode,
    extract_rules,
    format_tree,
    leaf_count,
    most_common_label,
    node_count,
    predict,
    tree_depth,
)


def _make_outlook_tree() -> DecisionNode:
    """Return the classic Play Tennis tree: Outlook, then Humidity or Wind."""
    return DecisionNode(
        feature_index=0,
        feature_name="Outlook",
        children={
            "sunny": DecisionNode(
                feature_index=2,
                feature_name="Humidity",
                children={"high": LeafNode(label="no"), "normal": LeafNode(label="yes")},
            ),
            "overcast": LeafNode(label="yes"),
            "rain": DecisionNode(
                feature_index=3,
                feature_name="Wind",
                children={"strong": LeafNode(label="no"), "weak": LeafNode(label="yes")},
            ),
        },
    )


# ---------------------------------------------------------------------------
# Node models
# ---------------------------------------------------------------------------


class TestTreeNodeModels:
    """Tests for `LeafNode`, `DecisionNode` and the `TreeNode` union."""

    def test_nodes_are_frozen(self) -> None:
        """Fitted trees cannot be mutated in place."""
        leaf = LeafNode(label="yes")
        with pytest.raises(pydantic.ValidationError):
            leaf.label = "no"  # type: ignore[misc]

    def test_negative_feature_index_rejected(self) -> None:
        """Feature indices are zero-based column positions."""
        with pytest.raises(pydantic.ValidationError):
            DecisionNode(feature_index=-1, feature_name="A", children={})

    def test_discriminator_restores_concrete_node_types(self) -> None:
        """Validating a dumped tree restores leaves and decision nodes by `node_type`."""
        # Arrange
        tree = _make_outlook_tree()
        adapter: TypeAdapter[TreeNode] = TypeAdapter(TreeNode)

        # Act
        restored = adapter.validate_json(adapter.dump_json(tree))

        # Assert
        with check:
            assert isinstance(restored, DecisionNode)
        with check:
            assert isinstance(restored.children["overcast"], LeafNode)  # type: ignore[union-attr]
        with check:
            assert restored == tree

    def test_dumped_nodes_carry_node_type(self) -> None:
        """Each node's dump includes its discriminator value."""
        dumped = _make_outlook_tree().model_dump()
        with check:
            assert dumped["node_type"] == "decision"
        with check:
            assert dumped["children"]["overcast"] == {"node_type": "leaf", "label": "yes"}


# ---------------------------------------------------------------------------
# predict
# ---------------------------------------------------------------------------


class TestPredict:
    """Tests for `predict`, including the out-of-vocabulary fallback."""

    @pytest.mark.parametrize(
        ("sample", "expected"),
        [
            (("sunny", "hot", "high", "weak"), "no"),
            (("sunny", "hot", "normal", "weak"), "yes"),
            (("overcast", "cool", "high", "strong"), "yes"),
            (("rain", "mild", "high", "strong"), "no"),
            (("rain", "mild", "high", "weak"), "yes"),
        ],
        ids=["sunny-high", "sunny-normal", "overcast", "rain-strong", "rain-weak"],
    )
    def test_descends_by_feature_value(self, sample: tuple[str, ...], expected: str) -> None:
        """Known values route the sample down to the matching leaf."""
        assert predict(_make_outlook_tree(), sample) == expected

    def test_leaf_root_always_returns_its_label(self) -> None:
        """A single-leaf tree predicts its label for any sample."""
        assert predict(LeafNode(label="yes"), ("anything",)) == "yes"

    def test_label_cell_is_ignored(self) -> None:
        """Samples may include the label column; it does not affect prediction."""
        assert predict(_make_outlook_tree(), ("overcast", "cool", "high", "strong", "no")) == "yes"

    def test_unseen_value_with_tied_leaf_children_uses_smallest_label(self) -> None:
        """An unseen value falls back to a vote over leaf children; a 1-1 tie resolves to "no"."""
        # Arrange
        tree = DecisionNode(
            feature_index=0,
            feature_name="A",
            children={"a1": LeafNode(label="yes"), "a2": LeafNode(label="no")},
        )

        # Act
        prediction = predict(tree, ("a3", "b1"))

        # Assert
        assert prediction == "no"

    def test_unseen_value_ignores_decision_children(self) -> None:
        """Only immediate leaf children vote; decision children are not descended into."""
        # Act - "overcast" is the only leaf child at the root
        prediction = predict(_make_outlook_tree(), ("fog", "cool", "high", "strong"))

        # Assert
        assert prediction == "yes"

    def test_unseen_value_without_leaf_children_is_unknown(self) -> None:
        """A node whose children are all decision nodes yields the unknown label."""
        # Arrange
        tree = DecisionNode(
            feature_index=0,
            feature_name="A",
            children={
                "a1": DecisionNode(feature_index=1, feature_name="B", children={"b1": LeafNode(label="yes")}),
            },
        )

        # Act
        prediction = predict(tree, ("a9", "b1"))

        # Assert
        assert prediction == UNKNOWN_LABEL

    def test_unseen_value_majority_among_leaf_children(self) -> None:
        """The most common label among leaf children wins outright."""
        # Arrange
        tree = DecisionNode(
            feature_index=0,
            feature_name="A",
            children={
                "a1": LeafNode(label="yes"),
                "a2": LeafNode(label="yes"),
                "a3": LeafNode(label="no"),
            },
        )

        # Act & Assert
        assert predict(tree, ("a4",)) == "yes"


class TestMostCommonLabel:
    """Tests for `most_common_label`."""

    def test_empty_is_unknown(self) -> None:
        """No labels yields the unknown sentinel."""
        assert most_common_label([]) == UNKNOWN_LABEL

    def test_tie_break_is_order_independent(self) -> None:
        """Ties resolve the same way however the labels are ordered."""
        with check:
            assert most_common_label(["b", "a", "c"]) == "a"
        with check:
            assert most_common_label(["c", "b", "a"]) == "a"


# ---------------------------------------------------------------------------
# Statistics, rules and rendering
# ---------------------------------------------------------------------------


class TestTreeStatistics:
    """Tests for `tree_depth`, `leaf_count` and `node_count`."""

    def test_statistics_of_outlook_tree(self) -> None:
        """The classic tree has depth 2, five leaves and eight nodes."""
        tree = _make_outlook_tree()
        with check:
            assert tree_depth(tree) == 2
        with check:
            assert leaf_count(tree) == 5
        with check:
            assert node_count(tree) == 8

    def test_statistics_of_single_leaf(self) -> None:
        """A single leaf has depth 0 and one node."""
        leaf = LeafNode(label="yes")
        with check:
            assert tree_depth(leaf) == 0
        with check:
            assert leaf_count(leaf) == 1
        with check:
            assert node_count(leaf) == 1


class TestExtractRules:
    """Tests for `extract_rules`, `ClassificationRule` and `Predicate`."""

    def test_one_rule_per_leaf_in_sorted_branch_order(self) -> None:
        """Rules follow ascending branch values at every level."""
        # Act
        rules = [str(rule) for rule in extract_rules(_make_outlook_tree())]

        # Assert
        assert rules == [
            "IF Outlook == overcast THEN yes",
            "IF Outlook == rain AND Wind == strong THEN no",
            "IF Outlook == rain AND Wind == weak THEN yes",
            "IF Outlook == sunny AND Humidity == high THEN no",
            "IF Outlook == sunny AND Humidity == normal THEN yes",
        ]

    def test_single_leaf_tree_has_unconditional_rule(self) -> None:
        """A leaf-only tree produces one rule with no predicates."""
        # Act
        rules = extract_rules(LeafNode(label="yes"))

        # Assert
        assert rules == [ClassificationRule(predicates=[], prediction="yes")]
        assert str(rules[0]) == "THEN yes"

    def test_predicate_eval(self) -> None:
        """Predicates test equality against their value."""
        predicate = Predicate(variable="Wind", value="weak")
        with check:
            assert predicate.eval("weak")
        with check:
            assert not predicate.eval("strong")


class TestFormatTree:
    """Tests for `format_tree`."""

    def test_renders_indented_branches(self) -> None:
        """Leaf branches end with their label; nested branches are indented."""
        # Act
        rendered = format_tree(_make_outlook_tree())

        # Assert
        assert rendered.splitlines() == [
            "Outlook = overcast -> yes",
            "Outlook = rain",
            "  Wind = strong -> no",
            "  Wind = weak -> yes",
            "Outlook = sunny",
            "  Humidity = high -> no",
            "  Humidity = normal -> yes",
        ]

    def test_custom_indent(self) -> None:
        """The indent string is repeated once per depth level."""
        rendered = format_tree(_make_outlook_tree(), indent="\t")
        assert "\tWind = weak -> yes" in rendered.splitlines()

    def test_single_leaf(self) -> None:
        """A single leaf renders as its label."""
        assert format_tree(LeafNode(label="no")) == "-> no"


class TestPredictFittedTree:
    """Tests for `predict` on trees grown by `fit_tree`."""

    ATTRIBUTES = ["A", "B", "L"]
    ROWS = [
        ("a1", "b1", "yes"),
        ("a1", "b2", "yes"),
        ("a2", "b1", "no"),
        ("a2", "b2", "no"),
    ]

    @pytest.mark.parametrize("metric", ["gini", "info", "gain"])
    def test_end_to_end_example(self, metric: str) -> None:
        """The separating feature is chosen and an unseen value falls back to the tied leaves."""
        # Arrange
        tree = fit_tree(self.ROWS, self.ATTRIBUTES, "L", metric=metric)

        # Act
        seen = [predict(tree, row) for row in self.ROWS]
        unseen = predict(tree, ("a3", "b1"))

        # Assert - yes/no tie resolves to the smallest label
        with check:
            assert isinstance(tree, DecisionNode) and tree.feature_name == "A"
        with check:
            assert seen == ["yes", "yes", "no", "no"]
        with check:
            assert predict(tree, ("a1", "b1")) == "yes"
        with check:
            assert unseen == "no"

    @pytest.mark.parametrize("sample", [("a2", "b2"), ("a9", "b1")], ids=["known-value", "unseen-value"])
    def test_repeated_predictions_agree(self, sample: tuple[str, ...]) -> None:
        """Predicting the same sample twice on a fitted tree gives the same label."""
        # Arrange
        tree = fit_tree(self.ROWS, self.ATTRIBUTES, "L", metric="info")

        # Act
        first = predict(tree, sample)
        second = predict(tree, sample)

        # Assert
        with check:
            assert first == second
        with check:
            assert first == "no"

    def test_refitting_gives_identical_predictions(self) -> None:
        """Two fits over the same rows predict identically, including for unseen values."""
        # Arrange
        samples = [*self.ROWS, ("a3", "b1"), ("a1", "b9"), ("a7", "b7")]

        # Act
        first_tree = fit_tree(self.ROWS, self.ATTRIBUTES, "L", metric="gain")
        second_tree = fit_tree(self.ROWS, self.ATTRIBUTES, "L", metric="gain")

        # Assert
        with check:
            assert first_tree == second_tree
        with check:
            assert [predict(first_tree, s) for s in samples] == [predict(second_tree, s) for s in samples]
