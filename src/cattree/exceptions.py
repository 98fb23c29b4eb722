"""Custom exceptions for cattree.

All exceptions subclass ValueError so callers can catch malformed input at the
package boundary with a single handler:

- UnknownMetricError: Raised when a split metric name is not recognized.
- LabelNotFoundError: Raised when the label name is not an attribute name.
- AttributesNotFoundError: Raised when requested feature names are not attribute names.
- DuplicateAttributesError: Raised when attribute names are not unique.
- RowLengthError: Raised when a row's cell count differs from the attribute count.
- EmptyDatasetError: Raised when an operation requires at least one row.
- UnknownSchemaError: Raised when a dataset schema name is not in the catalog.
"""

from __future__ import annotations

from collections.abc import Sequence


class UnknownMetricError(ValueError):
    """Raised when a split metric name is not one of the supported metrics.

    Attributes:
        metric (str): The metric name that was requested.
        valid_metrics (list[str]): The metric names that are supported.

    Examples:
        >>> err = UnknownMetricError(metric="chi2", valid_metrics=["gini", "info", "gain"])
        >>> str(err)
        "Unknown split metric 'chi2'. Valid metrics: gain, gini, info"
    """

    metric: str
    valid_metrics: list[str]

    def __init__(self, metric: str, valid_metrics: Sequence[str]) -> None:
        """Initialize UnknownMetricError.

        Args:
            metric (str): The metric name that was requested.
            valid_metrics (Sequence[str]): The metric names that are supported.
        """
        super().__init__(f"Unknown split metric {metric!r}. Valid metrics: {', '.join(sorted(valid_metrics))}")
        self.metric = metric
        self.valid_metrics = list(valid_metrics)

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including metric and valid metrics.
        """
        return f"{self.__class__.__name__}(metric={self.metric!r}, valid_metrics={self.valid_metrics!r})"


class LabelNotFoundError(ValueError):
    """Raised when the label name does not match any attribute name.

    Attributes:
        label_name (str): The label name that was requested.
        attribute_names (list[str]): The attribute names that are available.

    Examples:
        >>> err = LabelNotFoundError(label_name="target", attribute_names=["Outlook", "PlayTennis"])
        >>> err.label_name
        'target'
    """

    label_name: str
    attribute_names: list[str]

    def __init__(self, label_name: str, attribute_names: Sequence[str]) -> None:
        """Initialize LabelNotFoundError.

        Args:
            label_name (str): The label name that was requested.
            attribute_names (Sequence[str]): The attribute names that are available.
        """
        super().__init__(f"Label {label_name!r} not found in attributes: {list(attribute_names)}")
        self.label_name = label_name
        self.attribute_names = list(attribute_names)

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including label and attribute names.
        """
        return (
            f"{self.__class__.__name__}(label_name={self.label_name!r}, attribute_names={self.attribute_names!r})"
        )


class AttributesNotFoundError(ValueError):
    """Raised when requested feature attributes do not exist.

    Attributes:
        missing_attributes (list[str]): Attribute names that were not found.
        available_attributes (list[str]): Attribute names that are available.

    Examples:
        >>> err = AttributesNotFoundError(
        ...     missing_attributes=["x", "y"],
        ...     available_attributes=["a", "b", "c"],
        ... )
        >>> err.missing_attributes
        ['x', 'y']
    """

    missing_attributes: list[str]
    available_attributes: list[str]

    def __init__(self, missing_attributes: Sequence[str], available_attributes: Sequence[str]) -> None:
        """Initialize AttributesNotFoundError.

        Args:
            missing_attributes (Sequence[str]): Attribute names that were not found.
            available_attributes (Sequence[str]): Attribute names that are available.
        """
        super().__init__(f"Attributes not found: {sorted(missing_attributes)}")
        self.missing_attributes = list(missing_attributes)
        self.available_attributes = list(available_attributes)


class DuplicateAttributesError(ValueError):
    """Raised when duplicate attribute names are provided.

    Attributes:
        attribute_names (list[str]): The attribute list that contains duplicates.
        duplicate_names (list[str]): The specific names that are duplicated
            (each listed once).

    Examples:
        >>> err = DuplicateAttributesError(attribute_names=["a", "a", "b"])
        >>> err.duplicate_names
        ['a']
    """

    attribute_names: list[str]
    duplicate_names: list[str]

    def __init__(self, attribute_names: Sequence[str]) -> None:
        """Initialize DuplicateAttributesError.

        Args:
            attribute_names (Sequence[str]): The attribute list containing duplicates.
        """
        self.attribute_names = list(attribute_names)
        seen: set[str] = set()
        self.duplicate_names = []
        for name in self.attribute_names:
            if name in seen and name not in self.duplicate_names:
                self.duplicate_names.append(name)
            seen.add(name)
        super().__init__(f"Duplicate attribute names are not allowed: {self.duplicate_names}")


class RowLengthError(ValueError):
    """Raised when a row does not have one cell per attribute.

    Attributes:
        row_index (int): Zero-based position of the offending row.
        expected (int): Number of attribute names.
        actual (int): Number of cells found in the row.
    """

    row_index: int
    expected: int
    actual: int

    def __init__(self, row_index: int, expected: int, actual: int) -> None:
        """Initialize RowLengthError.

        Args:
            row_index (int): Zero-based position of the offending row.
            expected (int): Number of attribute names.
            actual (int): Number of cells found in the row.
        """
        super().__init__(f"Row {row_index} has {actual} cells, expected {expected} (one per attribute)")
        self.row_index = row_index
        self.expected = expected
        self.actual = actual

    def __repr__(self) -> str:
        """Return detailed representation for debugging.

        Returns:
            str: Detailed string representation including row index and cell counts.
        """
        return (
            f"{self.__class__.__name__}(row_index={self.row_index!r}, "
            f"expected={self.expected!r}, actual={self.actual!r})"
        )


class EmptyDatasetError(ValueError):
    """Raised when an operation needs at least one row but received none.

    Attributes:
        context (str): Short description of the operation that failed,
            e.g. `"accuracy"` or `"load"`.
    """

    context: str

    def __init__(self, context: str) -> None:
        """Initialize EmptyDatasetError.

        Args:
            context (str): Short description of the operation that failed.
        """
        super().__init__(f"Cannot compute {context} on an empty dataset")
        self.context = context


class UnknownSchemaError(ValueError):
    """Raised when a dataset schema name is not present in the schema catalog.

    Attributes:
        schema_name (str): The schema name that was requested.
        available (list[str]): Schema names present in the catalog.
    """

    schema_name: str
    available: list[str]

    def __init__(self, schema_name: str, available: Sequence[str]) -> None:
        """Initialize UnknownSchemaError.

        Args:
            schema_name (str): The schema name that was requested.
            available (Sequence[str]): Schema names present in the catalog.
        """
        super().__init__(f"Unknown dataset schema {schema_name!r}. Available schemas: {', '.join(sorted(available))}")
        self.schema_name = schema_name
        self.available = list(available)
