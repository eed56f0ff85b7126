"""
Field access on arbitrary domain objects.

Mappings (including pandas Series rows) are addressed by key, every
other object by attribute.
"""

from collections.abc import Mapping, MutableMapping
from typing import Any

import pandas as pd


def get_value(o: Any, name: str) -> Any:
    """
    Read a named field from a domain object.

    Args:
        o: Mapping, pandas Series or attribute-bearing object.
        name: Field name.

    Returns:
        The field value.

    Raises:
        KeyError: If a mapping has no such key.
        AttributeError: If an object has no such attribute.
    """
    if isinstance(o, (Mapping, pd.Series)):
        return o[name]
    return getattr(o, name)


def set_value(o: Any, name: str, value: Any) -> None:
    """
    Write a named field onto a domain object in place.

    Args:
        o: Mutable mapping, pandas Series or attribute-bearing object.
        name: Field name.
        value: Value to assign.

    Raises:
        TypeError: If o is a read-only mapping.
        AttributeError: If o does not accept the attribute (e.g. frozen dataclass).
    """
    if isinstance(o, (MutableMapping, pd.Series)):
        o[name] = value
        return
    if isinstance(o, Mapping):
        msg = f"Cannot set '{name}' on read-only mapping {type(o).__name__}"
        raise TypeError(msg)
    setattr(o, name, value)
