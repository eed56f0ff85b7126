"""
Feature normalization.

Normalizers rescale a feature vector using statistics captured in a
Summary during training, so that inference sees the same scaling the
model was trained on.

Available normalizers:
    - MinMaxNormalizer: (x - min) / (max - min)
    - ZScoreNormalizer: (x - mean) / std
    - LogisticNormalizer: 1 / (1 + exp(-x))

Example usage:
    >>> from predictkit.normalization import Summary, create_normalizer
    >>> summary = Summary.summarize(training_matrix)
    >>> normalizer = create_normalizer("z_score")
    >>> normalizer.normalize(x, summary)
"""

from predictkit.config.settings import NormalizerType
from predictkit.normalization.base import Normalizer
from predictkit.normalization.scalers import (
    LogisticNormalizer,
    MinMaxNormalizer,
    ZScoreNormalizer,
)
from predictkit.normalization.summary import Summary

__all__ = [
    # Types
    "NormalizerType",
    "Summary",
    # Base class
    "Normalizer",
    # Normalizers
    "LogisticNormalizer",
    "MinMaxNormalizer",
    "ZScoreNormalizer",
    # Factory function
    "create_normalizer",
]


def create_normalizer(normalizer_type: NormalizerType | str) -> Normalizer:
    """Factory function to create a normalizer by type.

    Args:
        normalizer_type: Type of normalizer to create.

    Returns:
        Instantiated normalizer.

    Raises:
        ValueError: If normalizer_type is unknown.
    """
    if isinstance(normalizer_type, str):
        try:
            normalizer_type = NormalizerType(normalizer_type)
        except ValueError:
            raise ValueError(
                f"Unknown normalizer type: {normalizer_type}. "
                f"Valid types: {[t.value for t in NormalizerType]}"
            ) from None

    if normalizer_type == NormalizerType.MIN_MAX:
        return MinMaxNormalizer()

    if normalizer_type == NormalizerType.Z_SCORE:
        return ZScoreNormalizer()

    if normalizer_type == NormalizerType.LOGISTIC:
        return LogisticNormalizer()

    raise ValueError(f"Unknown normalizer type: {normalizer_type}")
