"""
Configuration loading utilities.

Supports environment variable interpolation and config inheritance.
Minimal configs only need: name, descriptor.features
"""

import os
import re
from pathlib import Path
from typing import Any

import yaml

from predictkit.config.settings import (
    DescriptorConfig,
    FeatureConfig,
    LoggingConfig,
    ModelConfig,
    NormalizationConfig,
)


def _interpolate_env_vars(value: str) -> str:
    """
    Interpolate environment variables in string values.

    Supports ${VAR} and ${VAR:default} syntax.
    """
    pattern = r"\$\{([^}:]+)(?::([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        default = match.group(2)
        return os.environ.get(var_name, default if default is not None else "")

    return re.sub(pattern, replacer, value)


def _process_config_values(obj: Any) -> Any:
    """Recursively process config values for env var interpolation."""
    if isinstance(obj, str):
        return _interpolate_env_vars(obj)
    if isinstance(obj, dict):
        return {k: _process_config_values(v) for k, v in obj.items()}
    if isinstance(obj, list):
        return [_process_config_values(item) for item in obj]
    return obj


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two dictionaries, with override taking precedence."""
    result = base.copy()
    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = _deep_merge(result[key], value)
        else:
            result[key] = value
    return result


def _parse_bool(value: Any) -> bool:
    """Parse a boolean that may arrive as an interpolated string."""
    if isinstance(value, bool):
        return value
    if isinstance(value, str) and value.strip().lower() in {"true", "yes", "1", "on"}:
        return True
    if isinstance(value, str) and value.strip().lower() in {"false", "no", "0", "off", ""}:
        return False
    msg = f"Cannot parse boolean from {type(value)}: {value}"
    raise ValueError(msg)


def _parse_feature(data: Any) -> FeatureConfig:
    """Accept either a bare column name or a mapping of column settings."""
    if isinstance(data, str):
        return FeatureConfig(name=data)
    if isinstance(data, dict):
        return FeatureConfig(**data)
    msg = f"Cannot parse feature from {type(data)}: {data}"
    raise ValueError(msg)


def load_yaml(path: Path) -> dict[str, Any]:
    """Load a YAML file and process environment variables."""
    with path.open(encoding="utf-8") as f:
        data = yaml.safe_load(f)
    return _process_config_values(data) if data else {}


def load_config(
    config_path: Path,
    base_path: Path | None = None,
) -> ModelConfig:
    """
    Load model configuration from YAML file(s).

    Minimal config requires only:
        - name: str
        - descriptor.features: list of column names or column mappings

    Args:
        config_path: Path to the main configuration file.
        base_path: Optional path to base configuration for inheritance.

    Returns:
        Fully validated ModelConfig instance.
    """
    if base_path is not None:
        base_data = load_yaml(base_path)
    else:
        # Try to find base.yaml in same directory
        potential_base = config_path.parent / "base.yaml"
        if potential_base.exists() and potential_base.resolve() != config_path.resolve():
            base_data = load_yaml(potential_base)
        else:
            base_data = {}

    main_data = load_yaml(config_path)

    # Merge configs (main overrides base)
    merged = _deep_merge(base_data, main_data)

    name = merged.get("name")
    if not name:
        msg = "Config must specify model 'name'"
        raise ValueError(msg)

    descriptor_data = merged.get("descriptor", {})
    features_data = descriptor_data.get("features")
    if not features_data:
        msg = "Config must specify 'descriptor.features'"
        raise ValueError(msg)

    label_data = descriptor_data.get("label")
    descriptor = DescriptorConfig(
        features=[_parse_feature(f) for f in features_data],
        label=_parse_feature(label_data) if label_data else None,
    )

    normalization_data = merged.get("normalization", {})
    normalization = NormalizationConfig(
        enabled=_parse_bool(normalization_data.get("enabled", False)),
        method=normalization_data.get("method", "min_max"),
    )

    logging_data = merged.get("logging", {})
    logging = LoggingConfig(
        level=logging_data.get("level", "INFO"),
        json_output=_parse_bool(logging_data.get("json_output", False)),
    )

    return ModelConfig(
        name=name,
        descriptor=descriptor,
        normalization=normalization,
        logging=logging,
    )
