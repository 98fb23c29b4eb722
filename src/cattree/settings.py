"""Experiment configuration loaded from keyword arguments, environment, or CLI."""

from __future__ import annotations

from pathlib import Path

from pydantic import Field, model_validator
from pydantic_settings import BaseSettings

from cattree.dataset import resolve_label_index
from cattree.logging import LogFormat, LogLevel
from cattree.schemas import get_schema
from cattree.tree.building import DEFAULT_MAX_DEPTH
from cattree.tree.models import SplitMetric


class ExperimentSettings(
    BaseSettings,
    env_prefix="CATTREE_",
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
):
    """Configuration record for one train/evaluate run.

    Values can be passed as keyword arguments, read from `CATTREE_*`
    environment variables (or a `.env` file), or parsed from command-line
    arguments by `python -m cattree`. Either `schema_name` or both
    `attribute_names` and `label_name` must be given; explicit values
    override those of the schema.

    Attributes:
        dataset_path (Path): Headerless delimited data file.
        schema_name (str | None): Catalog key of a known dataset schema.
        attribute_names (list[str] | None): Ordered names of every column.
        label_name (str | None): Name of the label column.
        metric (SplitMetric): `"gini"`, `"info"` or `"gain"`; required.
        max_depth (int): Maximum tree depth. Defaults to 8.
        train_ratio (float): Fraction of rows used for training. Defaults to 0.7.
        seed (int | None): Shuffle seed; `None` means non-deterministic.
        delimiter (str): Field separator of the data file. Defaults to `","`.
        predictions_path (Path | None): Where to write per-sample predictions.
        tree_path (Path | None): Where to save the fitted tree as JSON.
        log_level (LogLevel): Minimum level logged by the CLI. Defaults to "STAGE".
        log_format (LogFormat): Log line layout used by the CLI. Defaults to "short".

    Examples:
        >>> settings = ExperimentSettings(  # doctest: +SKIP
        ...     dataset_path="car.data",
        ...     schema_name="car",
        ...     metric="gain",
        ... )
        >>> settings.label_name  # doctest: +SKIP
        'evaluation'
    """

    dataset_path: Path = Field(description="Headerless delimited data file.")
    schema_name: str | None = Field(default=None, description="Catalog key of a known dataset schema.")
    attribute_names: list[str] | None = Field(default=None, description="Ordered names of every column.")
    label_name: str | None = Field(default=None, description="Name of the label column.")
    metric: SplitMetric = Field(description='Split metric: "gini", "info" or "gain".')
    max_depth: int = Field(default=DEFAULT_MAX_DEPTH, ge=0, description="Maximum tree depth.")
    train_ratio: float = Field(default=0.7, gt=0.0, lt=1.0, description="Fraction of rows used for training.")
    seed: int | None = Field(default=None, description="Shuffle seed; None means non-deterministic.")
    delimiter: str = Field(default=",", min_length=1, max_length=1, description="Field separator.")
    predictions_path: Path | None = Field(default=None, description="Where to write per-sample predictions.")
    tree_path: Path | None = Field(default=None, description="Where to save the fitted tree as JSON.")
    log_level: LogLevel = Field(default="STAGE", description="Minimum level logged by the CLI.")
    log_format: LogFormat = Field(default="short", description="Log line layout used by the CLI.")

    @model_validator(mode="after")
    def _resolve_schema(self) -> ExperimentSettings:
        """Fill attribute names and label from the schema catalog and validate the label.

        Returns:
            ExperimentSettings: The validated settings instance.

        Raises:
            ValueError: If the schema is unknown, attributes or label are
                missing, or the label is not exactly one of the attributes.
        """
        if self.schema_name is not None:
            schema = get_schema(self.schema_name)
            if self.attribute_names is None:
                self.attribute_names = list(schema.attribute_names)
            if self.label_name is None:
                self.label_name = schema.label_name
        if self.attribute_names is None or self.label_name is None:
            raise ValueError("Provide schema_name, or both attribute_names and label_name.")
        resolve_label_index(self.attribute_names, self.label_name)
        return self

    @property
    def label_index(self) -> int:
        """Zero-based column index of the label."""
        return resolve_label_index(self.attribute_names or [], self.label_name or "")
