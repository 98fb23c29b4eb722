"""Tests for the dataset schema catalog."""

from __future__ import annotations

import pydantic
import pytest
from pytest_check import check

from cattree.exceptions import UnknownSchemaError
from cattree.schemas import SCHEMA_CATALOG, DatasetSchema, get_schema


class TestSchemaCatalog:
    """Tests for the built-in schemas."""

    @pytest.mark.parametrize("name", sorted(SCHEMA_CATALOG))
    def test_every_schema_resolves_its_label(self, name: str) -> None:
        """Each catalog schema has unique attributes that include its label."""
        # Act
        schema = SCHEMA_CATALOG[name]

        # Assert
        with check:
            assert schema.name == name
        with check:
            assert schema.attribute_names[schema.label_index] == schema.label_name
        with check:
            assert len(set(schema.attribute_names)) == len(schema.attribute_names)

    def test_tennis_schema(self) -> None:
        """The Play Tennis schema has four features and a trailing label."""
        schema = get_schema("tennis")
        with check:
            assert schema.attribute_names == ["Outlook", "Temperature", "Humidity", "Wind", "PlayTennis"]
        with check:
            assert schema.label_index == 4

    def test_car_schema_label(self) -> None:
        """The car evaluation schema predicts the evaluation column."""
        assert get_schema("car").label_name == "evaluation"

    def test_catalog_is_read_only(self) -> None:
        """The catalog cannot be modified at runtime."""
        with pytest.raises(TypeError):
            SCHEMA_CATALOG["custom"] = get_schema("car")  # type: ignore[index]


class TestGetSchema:
    """Tests for `get_schema`."""

    def test_unknown_name_raises_with_available_names(self) -> None:
        """Unknown names list what the catalog offers."""
        with pytest.raises(UnknownSchemaError) as exc_info:
            get_schema("iris")
        with check:
            assert exc_info.value.schema_name == "iris"
        with check:
            assert "car" in exc_info.value.available


class TestDatasetSchemaValidation:
    """Tests for `DatasetSchema` validation."""

    def test_label_must_be_an_attribute(self) -> None:
        """A label outside the attribute list is rejected."""
        with pytest.raises(pydantic.ValidationError, match="Label 'y' not found"):
            DatasetSchema(
                name="toy", description="Toy", default_file="toy.data", attribute_names=["a", "b"], label_name="y"
            )

    def test_attributes_must_be_unique(self) -> None:
        """Repeated attribute names are rejected."""
        with pytest.raises(pydantic.ValidationError, match="Duplicate attribute names"):
            DatasetSchema(
                name="toy", description="Toy", default_file="toy.data", attribute_names=["a", "a"], label_name="a"
            )
