"""
Descriptor: mapping between domain objects and feature vectors.

The descriptor fixes the feature column order used at training time and
names the optional label column. Models rely on it to marshal objects
into vectors and to turn numeric predictions back into labels.
"""

import dataclasses
import types
import typing
from collections.abc import Iterable, Sequence
from enum import Enum
from typing import Any

import numpy as np
import pandas as pd
import pandera.pandas as pa

from predictkit.config.settings import DescriptorConfig
from predictkit.descriptor.access import get_value, set_value
from predictkit.descriptor.properties import (
    CategoricalProperty,
    Property,
    property_from_config,
)
from predictkit.utils.logging import get_logger

log = get_logger(__name__)


class Descriptor:
    """
    Ordered feature columns plus an optional label column.

    Attributes:
        features: Feature properties in column order.
        label: Label property, or None when the descriptor has no label.
    """

    def __init__(
        self,
        features: Sequence[Property],
        label: Property | None = None,
    ) -> None:
        names = [f.name for f in features]
        if label is not None:
            names.append(label.name)
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            msg = f"Duplicate descriptor columns: {', '.join(duplicates)}"
            raise ValueError(msg)

        self.features: tuple[Property, ...] = tuple(features)
        self.label = label

    @property
    def length(self) -> int:
        """Number of feature columns (label excluded)."""
        return sum(f.length for f in self.features)

    @property
    def columns(self) -> list[str]:
        """Feature column names in vector order."""
        return [c for f in self.features for c in f.columns]

    def convert(self, o: Any, with_label: bool = True) -> list[float]:
        """
        Convert a domain object into feature values.

        Args:
            o: Domain object (mapping, pandas Series or attribute object).
            with_label: Append the label value after the features.

        Returns:
            Feature values in column order.
        """
        values: list[float] = []
        for feature in self.features:
            values.extend(feature.convert(get_value(o, feature.name)))
        if with_label and self.label is not None:
            values.extend(self.label.convert(get_value(o, self.label.name)))
        return values

    def to_vector(self, o: Any, with_label: bool = False) -> np.ndarray:
        """Convert a domain object into a fresh float feature vector."""
        return np.array(self.convert(o, with_label), dtype=float)

    def to_matrix(self, items: Iterable[Any], with_label: bool = False) -> np.ndarray:
        """Convert domain objects into a matrix with one row per object."""
        width = self.length + (
            self.label.length if with_label and self.label is not None else 0
        )
        rows = [self.convert(o, with_label) for o in items]
        if not rows:
            return np.zeros((0, width), dtype=float)
        return np.array(rows, dtype=float)

    def schema(self, with_label: bool = False) -> pa.DataFrameSchema:
        """
        Build a Pandera schema for frames holding this descriptor's fields.

        Extra columns are allowed; numeric columns are coerced to float.
        """
        properties = list(self.features)
        if with_label and self.label is not None:
            properties.append(self.label)

        columns: dict[str, pa.Column] = {}
        for prop in properties:
            if isinstance(prop, CategoricalProperty):
                columns[prop.name] = pa.Column(
                    checks=pa.Check.isin(prop.accepted_values),
                    nullable=True,
                )
            else:
                columns[prop.name] = pa.Column(float, nullable=True, coerce=True)

        return pa.DataFrameSchema(columns, strict=False, name="DescriptorSchema")

    def convert_frame(self, df: pd.DataFrame, with_label: bool = False) -> np.ndarray:
        """
        Validate a DataFrame and convert it into a feature matrix.

        Raises:
            pandera.errors.SchemaError: If required columns are missing or
                values are invalid.
        """
        validated = self.schema(with_label).validate(df)
        log.debug("Validated frame", n_rows=len(validated), n_columns=self.length)
        return self.to_matrix(
            (row for _, row in validated.iterrows()), with_label=with_label
        )

    @staticmethod
    def get_value(o: Any, name: str) -> Any:
        """Read a named field from a domain object."""
        return get_value(o, name)

    @staticmethod
    def set_value(o: Any, name: str, value: Any) -> None:
        """Write a named field onto a domain object in place."""
        set_value(o, name, value)

    @classmethod
    def create(cls, features: Sequence[str], label: str | None = None) -> "Descriptor":
        """Build a descriptor of float columns from field names."""
        return cls(
            [Property(name) for name in features],
            Property(label) if label is not None else None,
        )

    @classmethod
    def for_dataclass(
        cls,
        type_: type,
        label: str | None = None,
        exclude: Iterable[str] = (),
    ) -> "Descriptor":
        """
        Build a descriptor from the annotated fields of a dataclass.

        float, int and bool fields become numeric columns; Enum fields
        become categorical columns over the enum members. Field order is
        the column order.

        Args:
            type_: Dataclass type.
            label: Name of the field to use as label.
            exclude: Field names to leave out.

        Raises:
            TypeError: If type_ is not a dataclass or a field type is unsupported.
            ValueError: If the label field does not exist.
        """
        if not dataclasses.is_dataclass(type_):
            msg = f"{type_!r} is not a dataclass"
            raise TypeError(msg)

        hints = typing.get_type_hints(type_)
        excluded = set(exclude)
        features: list[Property] = []
        label_property: Property | None = None

        for field in dataclasses.fields(type_):
            if field.name in excluded:
                continue
            prop = _property_for_type(field.name, hints.get(field.name, float))
            if field.name == label:
                label_property = prop
            else:
                features.append(prop)

        if label is not None and label_property is None:
            msg = f"Label field '{label}' not found on {type_.__name__}"
            raise ValueError(msg)

        return cls(features, label_property)

    @classmethod
    def from_config(cls, config: DescriptorConfig) -> "Descriptor":
        """Build a descriptor from its configuration."""
        return cls(
            [property_from_config(f) for f in config.features],
            property_from_config(config.label) if config.label is not None else None,
        )

    def to_config(self) -> DescriptorConfig:
        """Describe this descriptor as configuration."""
        return DescriptorConfig(
            features=[f.to_config() for f in self.features],
            label=self.label.to_config() if self.label is not None else None,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-compatible dictionary."""
        return self.to_config().model_dump(mode="json")

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Descriptor":
        """Rebuild a descriptor produced by to_dict()."""
        return cls.from_config(DescriptorConfig.model_validate(data))

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Descriptor):
            return NotImplemented
        return self.features == other.features and self.label == other.label

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        label = self.label.name if self.label is not None else None
        return f"Descriptor(features={self.columns!r}, label={label!r})"


def _property_for_type(name: str, annotation: Any) -> Property:
    """Map a field annotation onto a property."""
    # Unwrap Optional[X]
    args = [a for a in typing.get_args(annotation) if a is not type(None)]
    if typing.get_origin(annotation) in (typing.Union, types.UnionType) and len(args) == 1:
        annotation = args[0]

    if isinstance(annotation, type) and issubclass(annotation, Enum):
        return CategoricalProperty(name, list(annotation))
    if annotation in (float, int, bool):
        return Property(name, annotation)

    msg = f"Unsupported field type for '{name}': {annotation!r}"
    raise TypeError(msg)
