"""
Configuration management with typed Pydantic models.

Describes the descriptor layout and normalization settings of a model
and loads them from YAML with environment-aware interpolation.
"""

from predictkit.config.loader import load_config
from predictkit.config.settings import (
    DescriptorConfig,
    FeatureConfig,
    FeatureDType,
    FeatureKind,
    LoggingConfig,
    ModelConfig,
    NormalizationConfig,
    NormalizerType,
)

__all__ = [
    "DescriptorConfig",
    "FeatureConfig",
    "FeatureDType",
    "FeatureKind",
    "LoggingConfig",
    "ModelConfig",
    "NormalizationConfig",
    "NormalizerType",
    "load_config",
]
