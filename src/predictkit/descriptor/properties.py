"""
Feature column definitions.

A property knows how to turn one field of a domain object into numeric
feature values and, for label columns, how to turn a numeric prediction
back into a domain value.
"""

import math
from enum import Enum
from collections.abc import Hashable, Sequence
from typing import Any

from predictkit.config.settings import FeatureConfig, FeatureDType, FeatureKind

_DTYPES: dict[Any, FeatureDType] = {
    float: FeatureDType.FLOAT,
    int: FeatureDType.INT,
    bool: FeatureDType.BOOL,
}


def _is_missing(value: Any) -> bool:
    return value is None or (isinstance(value, float) and math.isnan(value))


def _category_key(value: Any) -> Any:
    return value.value if isinstance(value, Enum) else value


class Property:
    """A numeric column mapped one-to-one onto a domain field."""

    kind = FeatureKind.NUMERIC

    def __init__(self, name: str, dtype: type | FeatureDType | str = float) -> None:
        if not name:
            raise ValueError("Property name must not be empty")
        self.name = name
        if isinstance(dtype, type):
            if dtype not in _DTYPES:
                msg = f"Unsupported dtype for property '{name}': {dtype.__name__}"
                raise TypeError(msg)
            self.dtype = _DTYPES[dtype]
        else:
            self.dtype = FeatureDType(dtype)

    @property
    def length(self) -> int:
        """Number of feature columns this property occupies."""
        return 1

    @property
    def columns(self) -> list[str]:
        """Column names this property produces."""
        return [self.name]

    def convert(self, value: Any) -> list[float]:
        """Convert a field value into feature values (missing -> NaN)."""
        if _is_missing(value):
            return [math.nan]
        if isinstance(value, bool):
            return [1.0 if value else 0.0]
        try:
            return [float(value)]
        except (TypeError, ValueError) as e:
            msg = f"Property '{self.name}' cannot convert {value!r} to a number"
            raise ValueError(msg) from e

    def convert_back(self, value: float) -> Any:
        """Convert a numeric prediction into this property's domain type.

        A NaN prediction (e.g. from missing features) converts to NaN for
        float labels and to None otherwise.
        """
        if math.isnan(value):
            return math.nan if self.dtype == FeatureDType.FLOAT else None
        if self.dtype == FeatureDType.INT:
            return int(round(value))
        if self.dtype == FeatureDType.BOOL:
            return bool(value >= 0.5)
        return float(value)

    def to_config(self) -> FeatureConfig:
        """Describe this property as configuration."""
        return FeatureConfig(name=self.name, kind=self.kind, dtype=self.dtype)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Property):
            return NotImplemented
        return self.to_config() == other.to_config()

    def __hash__(self) -> int:
        return hash((type(self), self.name))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r}, dtype={self.dtype.value!r})"


class CategoricalProperty(Property):
    """A discrete column encoded as the index of its value in a category list."""

    kind = FeatureKind.CATEGORICAL

    def __init__(self, name: str, categories: Sequence[Hashable]) -> None:
        super().__init__(name, FeatureDType.INT)
        if not categories:
            msg = f"Categorical property '{name}' requires at least one category"
            raise ValueError(msg)
        self.categories = tuple(categories)
        # Enum members are also matched by value
        self._index = {_category_key(c): i for i, c in enumerate(self.categories)}
        if len(self._index) != len(self.categories):
            msg = f"Categorical property '{name}' has duplicate categories"
            raise ValueError(msg)

    def convert(self, value: Any) -> list[float]:
        if _is_missing(value):
            return [math.nan]
        try:
            return [float(self._index[_category_key(value)])]
        except KeyError:
            msg = (
                f"Unknown category {value!r} for property '{self.name}'. "
                f"Valid categories: {list(self.categories)}"
            )
            raise ValueError(msg) from None

    def convert_back(self, value: float) -> Any:
        if math.isnan(value):
            return None
        # Nearest valid index
        index = min(max(int(round(value)), 0), len(self.categories) - 1)
        return self.categories[index]

    def to_config(self) -> FeatureConfig:
        # Enum members persist by value
        return FeatureConfig(
            name=self.name,
            kind=self.kind,
            categories=[_category_key(c) for c in self.categories],
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CategoricalProperty):
            return NotImplemented
        return self.name == other.name and self.categories == other.categories

    def __hash__(self) -> int:
        return hash((type(self), self.name, self.categories))

    @property
    def accepted_values(self) -> list[Hashable]:
        """Categories plus the plain values of Enum categories."""
        return [*self.categories, *(c.value for c in self.categories if isinstance(c, Enum))]

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.name!r}, categories={list(self.categories)!r})"


def property_from_config(config: FeatureConfig) -> Property:
    """Build a property from its configuration."""
    if config.kind == FeatureKind.CATEGORICAL:
        return CategoricalProperty(config.name, config.categories or [])
    return Property(config.name, config.dtype)
