"""
Supervised model contract.

Model is the base class every trained model derives from. It owns the
descriptor and normalization settings and derives batch and object
prediction from the single-vector predict() each model implements.

Available models:
    - LinearModel: Fitted linear coefficients over (optionally normalized) features

Example usage:
    >>> from predictkit.descriptor import Descriptor
    >>> from predictkit.supervised import LinearModel
    >>> model = LinearModel([2.0, 0.5], bias=1.0,
    ...                     descriptor=Descriptor.create(["a", "b"], label="y"))
    >>> model.predict_object({"a": 1.0, "b": 2.0})
    {'a': 1.0, 'b': 2.0, 'y': 4.0}
"""

from predictkit.supervised.linear import LinearModel
from predictkit.supervised.model import MissingLabelError, Model, supports_persistence
from predictkit.supervised.persistence import (
    PersistableModel,
    load_model,
    save_model,
)

__all__ = [
    # Base classes
    "Model",
    "PersistableModel",
    # Errors
    "MissingLabelError",
    # Models
    "LinearModel",
    # Functions
    "load_model",
    "save_model",
    "supports_persistence",
]
