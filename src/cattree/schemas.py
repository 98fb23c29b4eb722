"""Column schemas for well-known categorical datasets.

Each schema names every column of a headerless data file and the column that
holds the class label, so a dataset can be loaded by schema name instead of
spelling out its attributes.
"""

from __future__ import annotations

from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, model_validator

from cattree.exceptions import DuplicateAttributesError, LabelNotFoundError, UnknownSchemaError


class DatasetSchema(BaseModel):
    """Attribute names and label column of a headerless categorical dataset.

    Attributes:
        name (str): Short catalog key, e.g. `"car"`.
        description (str): Human-readable dataset title.
        default_file (str): Conventional file name of the data file.
        attribute_names (list[str]): Ordered names of every column.
        label_name (str): Name of the label column.

    Examples:
        >>> schema = DatasetSchema(
        ...     name="tennis",
        ...     description="Play Tennis",
        ...     default_file="test.data",
        ...     attribute_names=["Outlook", "Temperature", "Humidity", "Wind", "PlayTennis"],
        ...     label_name="PlayTennis",
        ... )
        >>> schema.label_index
        4
    """

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Short catalog key.")
    description: str = Field(description="Human-readable dataset title.")
    default_file: str = Field(description="Conventional file name of the data file.")
    attribute_names: list[str] = Field(min_length=2, description="Ordered names of every column.")
    label_name: str = Field(description="Name of the label column.")

    @model_validator(mode="after")
    def _validate_label_is_unique_attribute(self) -> DatasetSchema:
        """Validate that attribute names are unique and include the label.

        Returns:
            DatasetSchema: The validated model instance.

        Raises:
            ValueError: If attribute names repeat or the label is not one of them.
        """
        if len(set(self.attribute_names)) != len(self.attribute_names):
            raise DuplicateAttributesError(attribute_names=self.attribute_names)
        if self.label_name not in self.attribute_names:
            raise LabelNotFoundError(label_name=self.label_name, attribute_names=self.attribute_names)
        return self

    @property
    def label_index(self) -> int:
        """Zero-based column index of the label."""
        return self.attribute_names.index(self.label_name)


_SCHEMAS: list[DatasetSchema] = [
    DatasetSchema(
        name="thyroid",
        description="Differentiated Thyroid Cancer Recurrence",
        default_file="Thyroid_Diff.csv",
        attribute_names=[
            "Age", "Gender", "Smoking", "Hx_Smoking", "Hx_Radiotherapy", "Thyroid_Function",
            "Physical_examination", "Adenopathy", "Pathology", "Focality", "Risk", "T", "N", "M",
            "Stage", "Response", "Target",
        ],  # fmt: skip
        label_name="Target",
    ),
    DatasetSchema(
        name="adult",
        description="Adult Census Income",
        default_file="adult.data",
        attribute_names=[
            "age", "workclass", "fnlwgt", "education", "education-num", "marital-status",
            "occupation", "relationship", "race", "sex", "capital-gain", "capital-loss",
            "hours-per-week", "native-country", "income",
        ],  # fmt: skip
        label_name="income",
    ),
    DatasetSchema(
        name="mushroom",
        description="Mushroom",
        default_file="agaricus-lepiota.data",
        attribute_names=[
            "class", "cap-shape", "cap-surface", "cap-color", "bruises", "odor", "gill-attachment",
            "gill-spacing", "gill-size", "gill-color", "stalk-shape", "stalk-root",
            "stalk-surface-above-ring", "stalk-surface-below-ring", "stalk-color-above-ring",
            "stalk-color-below-ring", "veil-type", "veil-color", "ring-number", "ring-type",
            "spore-print-color", "population", "habitat",
        ],  # fmt: skip
        label_name="class",
    ),
    DatasetSchema(
        name="car",
        description="Car Evaluation",
        default_file="car.data",
        attribute_names=["buying", "maint", "doors", "persons", "lug_boot", "safety", "evaluation"],
        label_name="evaluation",
    ),
    DatasetSchema(
        name="nursery",
        description="Nursery",
        default_file="nursery.data",
        attribute_names=[
            "parents", "has_nurs", "form", "children", "housing", "finance", "social", "health",
            "evaluation",
        ],  # fmt: skip
        label_name="evaluation",
    ),
    DatasetSchema(
        name="letter",
        description="Letter Recognition",
        default_file="letter-recognition.data",
        attribute_names=[
            "letter", "x-box", "y-box", "width", "high", "onpix", "x-bar", "y-bar", "x2bar",
            "y2bar", "xybar", "x2ybr", "xy2br", "x-ege", "xegvy", "y-ege", "yegvx",
        ],  # fmt: skip
        label_name="letter",
    ),
    DatasetSchema(
        name="chess",
        description="Chess (King-Rook vs. King)",
        default_file="krkopt.data",
        attribute_names=[
            "white-king-file", "white-king-rank", "white-rook-file", "white-rook-rank",
            "black-king-file", "black-king-rank", "outcome",
        ],  # fmt: skip
        label_name="outcome",
    ),
    DatasetSchema(
        name="pendigits",
        description="Pen-Based Recognition of Handwritten Digits",
        default_file="pen_based.data",
        attribute_names=[f"x{position}" for position in range(1, 17)] + ["digit"],
        label_name="digit",
    ),
    DatasetSchema(
        name="tic-tac-toe",
        description="Tic-Tac-Toe Endgame",
        default_file="tic-tac-toe.data",
        attribute_names=[
            "top-left", "top-middle", "top-right", "middle-left", "middle-middle", "middle-right",
            "bottom-left", "bottom-middle", "bottom-right", "outcome",
        ],  # fmt: skip
        label_name="outcome",
    ),
    DatasetSchema(
        name="tennis",
        description="Play Tennis",
        default_file="test.data",
        attribute_names=["Outlook", "Temperature", "Humidity", "Wind", "PlayTennis"],
        label_name="PlayTennis",
    ),
    DatasetSchema(
        name="students",
        description="Predict Students' Dropout and Academic Success",
        default_file="students.data",
        attribute_names=[
            "marital_status", "application_mode", "application_order", "course",
            "daytime_evening_attendance", "previous_qualification", "previous_qualification_grade",
            "nationality", "mothers_qualification", "fathers_qualification", "mothers_occupation",
            "fathers_occupation", "admission_grade", "displaced", "educational_special_needs",
            "debtor", "tuition_fees_up_to_date", "gender", "scholarship_holder",
            "age_at_enrollment", "international", "curricular_units_1st_sem_credited",
            "curricular_units_1st_sem_enrolled", "curricular_units_1st_sem_evaluations",
            "curricular_units_1st_sem_approved", "curricular_units_1st_sem_grade",
            "curricular_units_1st_sem_without_evaluations", "curricular_units_2nd_sem_credited",
            "curricular_units_2nd_sem_enrolled", "curricular_units_2nd_sem_evaluations",
            "curricular_units_2nd_sem_approved", "curricular_units_2nd_sem_grade",
            "curricular_units_2nd_sem_without_evaluations", "unemployment_rate", "inflation_rate",
            "gdp", "target",
        ],  # fmt: skip
        label_name="target",
    ),
]

SCHEMA_CATALOG: MappingProxyType[str, DatasetSchema] = MappingProxyType({schema.name: schema for schema in _SCHEMAS})


def get_schema(name: str) -> DatasetSchema:
    """Look up a dataset schema by catalog name.

    Args:
        name (str): Catalog key, e.g. `"car"` or `"mushroom"`.

    Returns:
        DatasetSchema: The matching schema.

    Raises:
        UnknownSchemaError: If `name` is not in the catalog.
    """
    try:
        return SCHEMA_CATALOG[name]
    except KeyError:
        raise UnknownSchemaError(schema_name=name, available=list(SCHEMA_CATALOG)) from None
