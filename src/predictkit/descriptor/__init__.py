"""
Descriptors: how domain objects map onto feature vectors.

A Descriptor lists feature properties in column order plus an optional
label property, and converts objects to vectors and predictions back to
label values.
"""

from predictkit.descriptor.access import get_value, set_value
from predictkit.descriptor.descriptor import Descriptor
from predictkit.descriptor.properties import (
    CategoricalProperty,
    Property,
    property_from_config,
)

__all__ = [
    "CategoricalProperty",
    "Descriptor",
    "Property",
    "get_value",
    "property_from_config",
    "set_value",
]
