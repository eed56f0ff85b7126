"""
Linear model over normalized features.

y = bias + theta . preprocess(x)

The coefficients come from an external training procedure; this class
only evaluates them.
"""

from typing import Any

import numpy as np

from predictkit.descriptor import Descriptor
from predictkit.normalization import Normalizer, Summary
from predictkit.supervised.persistence import PersistableModel


class LinearModel(PersistableModel):
    """Fitted linear predictor.

    Attributes:
        theta: Coefficients, one per feature column.
        bias: Intercept.
    """

    def __init__(
        self,
        theta: Any,
        bias: float = 0.0,
        descriptor: Descriptor | None = None,
        *,
        normalize_features: bool = False,
        feature_normalizer: Normalizer | None = None,
        feature_properties: Summary | None = None,
    ) -> None:
        super().__init__(
            descriptor,
            normalize_features=normalize_features,
            feature_normalizer=feature_normalizer,
            feature_properties=feature_properties,
        )
        self.theta = np.array(theta, dtype=float).reshape(-1)
        self.bias = float(bias)

        if descriptor is not None and len(self.theta) != descriptor.length:
            msg = (
                f"LinearModel has {len(self.theta)} coefficients but the "
                f"descriptor has {descriptor.length} feature columns"
            )
            raise ValueError(msg)

    def predict(self, y: np.ndarray) -> float:
        x = np.array(y, dtype=float)
        if x.shape != self.theta.shape:
            msg = f"Expected {len(self.theta)} features, got shape {x.shape}"
            raise ValueError(msg)
        self.preprocess(x)
        return float(self.bias + np.dot(self.theta, x))

    def predict_batch(self, x: np.ndarray) -> np.ndarray:
        x = np.array(x, dtype=float)
        self._check_matrix(x)
        if x.shape[1] != len(self.theta):
            msg = f"Expected {len(self.theta)} features, got {x.shape[1]}"
            raise ValueError(msg)
        for row in range(x.shape[0]):
            self.preprocess(x[row])
        return x @ self.theta + self.bias

    def get_params(self) -> dict[str, Any]:
        return {"theta": self.theta.tolist(), "bias": self.bias}

    @classmethod
    def from_params(cls, params: dict[str, Any]) -> "LinearModel":
        return cls(theta=params["theta"], bias=params.get("bias", 0.0))
