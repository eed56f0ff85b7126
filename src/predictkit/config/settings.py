"""
Typed configuration models using Pydantic.

A model configuration names the descriptor layout (feature columns and
label), whether features are normalized before prediction, and how the
package logs.
"""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


class FeatureKind(str, Enum):
    """How a feature column is encoded into the feature vector."""

    NUMERIC = "numeric"
    CATEGORICAL = "categorical"


class FeatureDType(str, Enum):
    """Domain type a numeric column converts back to."""

    FLOAT = "float"
    INT = "int"
    BOOL = "bool"


class NormalizerType(str, Enum):
    """Available feature normalizers."""

    MIN_MAX = "min_max"
    Z_SCORE = "z_score"
    LOGISTIC = "logistic"


class FeatureConfig(BaseModel):
    """A single feature (or label) column."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Field name on the domain object")
    kind: FeatureKind = Field(default=FeatureKind.NUMERIC)
    dtype: FeatureDType = Field(
        default=FeatureDType.FLOAT, description="Value type for numeric columns"
    )
    categories: list[str | int | float | bool] | None = Field(
        default=None, description="Ordered category values (categorical only)"
    )

    @model_validator(mode="after")
    def validate_categories(self) -> "FeatureConfig":
        """Categorical columns need a non-empty category list."""
        if self.kind == FeatureKind.CATEGORICAL and not self.categories:
            msg = f"Categorical feature '{self.name}' requires categories"
            raise ValueError(msg)
        if self.kind == FeatureKind.NUMERIC and self.categories:
            msg = f"Numeric feature '{self.name}' cannot declare categories"
            raise ValueError(msg)
        return self


class DescriptorConfig(BaseModel):
    """Ordered feature columns plus an optional label column."""

    model_config = ConfigDict(frozen=True)

    features: list[FeatureConfig] = Field(min_length=1)
    label: FeatureConfig | None = Field(default=None)

    @field_validator("features")
    @classmethod
    def validate_unique_names(cls, v: list[FeatureConfig]) -> list[FeatureConfig]:
        """Feature names must be unique; their order is the column order."""
        names = [f.name for f in v]
        duplicates = sorted({n for n in names if names.count(n) > 1})
        if duplicates:
            msg = f"Duplicate feature names: {', '.join(duplicates)}"
            raise ValueError(msg)
        return v

    @model_validator(mode="after")
    def validate_label_distinct(self) -> "DescriptorConfig":
        """The label column cannot also be a feature."""
        if self.label is not None and self.label.name in {f.name for f in self.features}:
            msg = f"Label '{self.label.name}' is also listed as a feature"
            raise ValueError(msg)
        return self


class NormalizationConfig(BaseModel):
    """Feature normalization settings."""

    model_config = ConfigDict(frozen=True)

    enabled: bool = Field(default=False, description="Normalize features before predicting")
    method: NormalizerType = Field(default=NormalizerType.MIN_MAX)


class LoggingConfig(BaseModel):
    """Logging settings."""

    model_config = ConfigDict(frozen=True)

    level: str = Field(default="INFO")
    json_output: bool = Field(default=False)

    @field_validator("level")
    @classmethod
    def validate_level(cls, v: str) -> str:
        """Ensure the level is a standard logging level name."""
        levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v.upper() not in levels:
            msg = f"Unknown log level: {v!r}"
            raise ValueError(msg)
        return v.upper()


class ModelConfig(BaseModel):
    """Complete model configuration."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Model identifier")
    descriptor: DescriptorConfig
    normalization: NormalizationConfig = Field(default_factory=NormalizationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @property
    def feature_names(self) -> list[str]:
        """Feature names in column order."""
        return [f.name for f in self.descriptor.features]

    @property
    def label_name(self) -> str | None:
        """Label name, if a label is configured."""
        return self.descriptor.label.name if self.descriptor.label else None
