"""Tests for descriptors, properties and field access."""

import dataclasses
import math
from dataclasses import dataclass
from enum import Enum
from types import MappingProxyType

import numpy as np
import pandas as pd
import pandera.errors
import pytest

from predictkit.config import DescriptorConfig, FeatureConfig
from predictkit.descriptor import (
    CategoricalProperty,
    Descriptor,
    Property,
    get_value,
    set_value,
)


class Color(Enum):
    RED = "red"
    GREEN = "green"
    BLUE = "blue"


@dataclass
class House:
    size: float
    rooms: int
    garden: bool
    color: Color
    price: float | None = None


@dataclass
class Tagged:
    value: float
    tag: str


@dataclass(frozen=True)
class Frozen:
    x: float
    y: float = 0.0


# --- Properties ---


class TestProperty:
    """Tests for numeric properties."""

    def test_convert_number(self):
        assert Property("a").convert(3) == [3.0]

    def test_convert_bool(self):
        prop = Property("flag", bool)
        assert prop.convert(True) == [1.0]
        assert prop.convert(False) == [0.0]

    def test_convert_missing(self):
        assert math.isnan(Property("a").convert(None)[0])

    def test_convert_invalid(self):
        with pytest.raises(ValueError, match="cannot convert"):
            Property("a").convert("abc")

    def test_convert_back(self):
        assert Property("a").convert_back(2.5) == 2.5
        assert Property("a", int).convert_back(2.5) == 2
        assert Property("a", "int").convert_back(3.7) == 4
        assert Property("a", bool).convert_back(0.5) is True

    def test_convert_back_nan(self):
        assert math.isnan(Property("a").convert_back(math.nan))
        assert Property("a", int).convert_back(math.nan) is None
        assert Property("a", bool).convert_back(math.nan) is None

    def test_unsupported_dtype(self):
        with pytest.raises(TypeError, match="Unsupported dtype"):
            Property("a", str)

    def test_empty_name(self):
        with pytest.raises(ValueError, match="empty"):
            Property("")


class TestCategoricalProperty:
    """Tests for categorical properties."""

    def test_round_trip(self):
        prop = CategoricalProperty("color", ["red", "green", "blue"])
        assert prop.convert("green") == [1.0]
        assert prop.convert_back(1.0) == "green"

    def test_convert_back_clips(self):
        prop = CategoricalProperty("color", ["red", "green", "blue"])
        assert prop.convert_back(1.6) == "blue"
        assert prop.convert_back(7.0) == "blue"
        assert prop.convert_back(-2.0) == "red"

    def test_convert_back_nan(self):
        prop = CategoricalProperty("color", ["red", "green", "blue"])
        assert prop.convert_back(float("nan")) is None

    def test_unknown_category(self):
        prop = CategoricalProperty("color", ["red", "green"])
        with pytest.raises(ValueError, match="Unknown category 'purple'"):
            prop.convert("purple")

    def test_missing_value(self):
        prop = CategoricalProperty("color", ["red"])
        assert math.isnan(prop.convert(None)[0])
        assert math.isnan(prop.convert(float("nan"))[0])

    def test_requires_categories(self):
        with pytest.raises(ValueError, match="at least one"):
            CategoricalProperty("color", [])

    def test_duplicate_categories(self):
        with pytest.raises(ValueError, match="duplicate"):
            CategoricalProperty("color", ["red", "red"])


# --- Descriptor ---


class TestDescriptor:
    """Tests for the Descriptor."""

    def test_columns_and_length(self, descriptor):
        assert descriptor.columns == ["x", "z"]
        assert descriptor.length == 2
        assert descriptor.label.name == "y"

    def test_convert_with_label(self, descriptor):
        """The label value follows the features."""
        assert descriptor.convert({"x": 1, "z": 2, "y": 3}) == [1.0, 2.0, 3.0]

    def test_convert_without_label(self, descriptor):
        """Excluding the label never reads the label field."""
        assert descriptor.convert({"x": 1, "z": 2}, with_label=False) == [1.0, 2.0]

    def test_to_vector_is_fresh(self, descriptor):
        o = {"x": 1.0, "z": 2.0}
        first = descriptor.to_vector(o)
        second = descriptor.to_vector(o)
        assert first.dtype == np.float64
        assert first is not second
        np.testing.assert_array_equal(first, [1.0, 2.0])

    def test_to_matrix(self, descriptor):
        items = [{"x": 1.0, "z": 2.0}, {"x": 3.0, "z": 4.0}]
        np.testing.assert_array_equal(descriptor.to_matrix(items), [[1, 2], [3, 4]])

    def test_to_matrix_empty(self, descriptor):
        assert descriptor.to_matrix([]).shape == (0, 2)
        assert descriptor.to_matrix([], with_label=True).shape == (0, 3)

    def test_missing_field(self, descriptor):
        with pytest.raises(KeyError):
            descriptor.convert({"x": 1.0}, with_label=False)

    def test_duplicate_columns(self):
        with pytest.raises(ValueError, match="Duplicate descriptor columns: x"):
            Descriptor([Property("x"), Property("x")])
        with pytest.raises(ValueError, match="Duplicate"):
            Descriptor([Property("x")], Property("x"))

    def test_for_dataclass(self):
        """Field types choose numeric or categorical columns."""
        descriptor = Descriptor.for_dataclass(House, label="price")

        assert descriptor.columns == ["size", "rooms", "garden", "color"]
        assert isinstance(descriptor.features[3], CategoricalProperty)
        assert descriptor.label == Property("price")

        house = House(size=80.0, rooms=3, garden=True, color=Color.BLUE)
        assert descriptor.convert(house, with_label=False) == [80.0, 3.0, 1.0, 2.0]

    def test_for_dataclass_exclude(self):
        descriptor = Descriptor.for_dataclass(Tagged, exclude=["tag"])
        assert descriptor.columns == ["value"]
        assert descriptor.label is None

    def test_for_dataclass_unsupported_type(self):
        with pytest.raises(TypeError, match="Unsupported field type for 'tag'"):
            Descriptor.for_dataclass(Tagged)

    def test_for_dataclass_unknown_label(self):
        with pytest.raises(ValueError, match="Label field 'missing'"):
            Descriptor.for_dataclass(House, label="missing")

    def test_for_dataclass_requires_dataclass(self):
        with pytest.raises(TypeError, match="not a dataclass"):
            Descriptor.for_dataclass(dict)

    def test_from_config(self):
        config = DescriptorConfig(
            features=[
                FeatureConfig(name="size"),
                FeatureConfig(name="color", kind="categorical", categories=["red", "blue"]),
            ],
            label=FeatureConfig(name="sold", dtype="bool"),
        )
        descriptor = Descriptor.from_config(config)

        assert descriptor.features[1] == CategoricalProperty("color", ["red", "blue"])
        assert descriptor.label == Property("sold", bool)

    def test_dict_round_trip(self):
        descriptor = Descriptor(
            [Property("size"), CategoricalProperty("color", ["red", "blue"])],
            Property("rooms", int),
        )
        assert Descriptor.from_dict(descriptor.to_dict()) == descriptor


class TestConvertFrame:
    """Tests for DataFrame validation and conversion."""

    def test_convert_frame(self, descriptor):
        df = pd.DataFrame({"x": [1, 2], "z": ["0.5", "1.5"], "other": ["a", "b"]})
        np.testing.assert_array_equal(
            descriptor.convert_frame(df), [[1.0, 0.5], [2.0, 1.5]]
        )

    def test_convert_frame_with_label(self, descriptor):
        df = pd.DataFrame({"x": [1.0], "z": [2.0], "y": [3.0]})
        np.testing.assert_array_equal(
            descriptor.convert_frame(df, with_label=True), [[1.0, 2.0, 3.0]]
        )

    def test_convert_frame_categorical(self):
        descriptor = Descriptor(
            [Property("size"), CategoricalProperty("color", ["red", "blue"])]
        )
        df = pd.DataFrame({"size": [10.0, 20.0], "color": ["blue", "red"]})
        np.testing.assert_array_equal(
            descriptor.convert_frame(df), [[10.0, 1.0], [20.0, 0.0]]
        )

    def test_missing_column(self, descriptor):
        df = pd.DataFrame({"x": [1.0]})
        with pytest.raises(pandera.errors.SchemaError):
            descriptor.convert_frame(df)

    def test_invalid_category(self):
        descriptor = Descriptor([CategoricalProperty("color", ["red", "blue"])])
        df = pd.DataFrame({"color": ["green"]})
        with pytest.raises(pandera.errors.SchemaError):
            descriptor.convert_frame(df)

    def test_non_numeric(self, descriptor):
        df = pd.DataFrame({"x": ["abc"], "z": [1.0]})
        with pytest.raises(pandera.errors.SchemaError):
            descriptor.convert_frame(df)


# --- Field access ---


class TestFieldAccess:
    """Tests for get_value / set_value."""

    def test_dict(self):
        o = {"a": 1}
        set_value(o, "b", 2)
        assert get_value(o, "b") == 2

    def test_series(self):
        row = pd.Series({"a": 1.0, "b": 2.0})
        set_value(row, "b", 5.0)
        assert get_value(row, "b") == 5.0

    def test_object(self):
        house = House(size=1.0, rooms=1, garden=False, color=Color.RED)
        set_value(house, "price", 9.5)
        assert house.price == 9.5
        assert get_value(house, "rooms") == 1

    def test_read_only_mapping(self):
        with pytest.raises(TypeError, match="read-only"):
            set_value(MappingProxyType({"a": 1}), "a", 2)

    def test_frozen_dataclass(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            set_value(Frozen(x=1.0), "y", 2.0)

    def test_missing_attribute(self):
        with pytest.raises(AttributeError):
            get_value(Frozen(x=1.0), "z")
