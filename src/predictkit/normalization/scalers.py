"""
Concrete feature normalizers.

Columns with zero spread map to 0.0 instead of producing NaN or inf.
"""

import numpy as np

from predictkit.normalization.base import Normalizer
from predictkit.normalization.summary import Summary


def _safe_divide(numerator: np.ndarray, denominator: np.ndarray) -> np.ndarray:
    """Element-wise division with 0.0 where the denominator is zero."""
    out = np.zeros_like(numerator, dtype=float)
    np.divide(numerator, denominator, out=out, where=denominator != 0)
    return out


class MinMaxNormalizer(Normalizer):
    """Rescale each feature to [0, 1] using the training min and max."""

    name = "min_max"

    def normalize(self, x: np.ndarray, summary: Summary) -> np.ndarray:
        x = np.asarray(x, dtype=float)
        return _safe_divide(x - summary.minimum, summary.range)


class ZScoreNormalizer(Normalizer):
    """Center each feature on the training mean and scale by its standard deviation."""

    name = "z_score"

    def normalize(self, x: np.ndarray, summary: Summary) -> np.ndarray:
        x = np.asarray(x, dtype=float)
        return _safe_divide(x - summary.average, summary.standard_deviation)


class LogisticNormalizer(Normalizer):
    """Squash each feature through the logistic function.

    The summary is accepted for interface compatibility but not used.
    """

    name = "logistic"

    def normalize(self, x: np.ndarray, summary: Summary) -> np.ndarray:
        x = np.asarray(x, dtype=float)
        # Clip to keep exp() finite
        return 1.0 / (1.0 + np.exp(-np.clip(x, -500.0, 500.0)))
