"""
Model persistence (save/load).

Two routes are offered:
    - PersistableModel: models that opt in serialize themselves to JSON.
    - save_model() / load_model(): any Model, pickled with joblib plus a
      human-readable JSON metadata sidecar.
"""

import json
from abc import abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Any

import joblib

from predictkit.descriptor import Descriptor
from predictkit.normalization import Summary, create_normalizer
from predictkit.supervised.model import Model
from predictkit.utils.logging import get_logger

log = get_logger(__name__)

FORMAT_VERSION = 1


class PersistableModel(Model):
    """Model that can round-trip through a JSON document.

    Subclasses describe their fitted parameters with get_params() and
    rebuild themselves with from_params(); the shared state (descriptor,
    normalization flag, normalizer, summary) is handled here.
    """

    @abstractmethod
    def get_params(self) -> dict[str, Any]:
        """Return JSON-compatible fitted parameters."""
        ...

    @classmethod
    @abstractmethod
    def from_params(cls, params: dict[str, Any]) -> "PersistableModel":
        """Build an unconfigured instance from get_params() output."""
        ...

    def to_dict(self) -> dict[str, Any]:
        """Convert the whole model to a JSON-compatible dictionary."""
        return {
            "format_version": FORMAT_VERSION,
            "model_type": self.__class__.__name__,
            "descriptor": self.descriptor.to_dict() if self.descriptor else None,
            "normalize_features": self.normalize_features,
            "feature_normalizer": self.feature_normalizer.name
            if self.feature_normalizer
            else None,
            "feature_properties": self.feature_properties.to_dict()
            if self.feature_properties
            else None,
            "params": self.get_params(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "PersistableModel":
        """
        Rebuild a model produced by to_dict().

        Raises:
            ValueError: If the document was written by another model type or
                an unsupported format version.
        """
        model_type = data.get("model_type")
        if model_type != cls.__name__:
            msg = f"Cannot load {model_type!r} document as {cls.__name__}"
            raise ValueError(msg)
        if data.get("format_version") != FORMAT_VERSION:
            msg = f"Unsupported model format version: {data.get('format_version')!r}"
            raise ValueError(msg)

        model = cls.from_params(data["params"])
        if data.get("descriptor") is not None:
            model.descriptor = Descriptor.from_dict(data["descriptor"])
        model.normalize_features = bool(data.get("normalize_features", False))
        if data.get("feature_normalizer") is not None:
            model.feature_normalizer = create_normalizer(data["feature_normalizer"])
        if data.get("feature_properties") is not None:
            model.feature_properties = Summary.from_dict(data["feature_properties"])
        model.check_configuration()
        return model

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    @classmethod
    def from_json(cls, json_text: str) -> "PersistableModel":
        """Rebuild a model from to_json() output."""
        return cls.from_dict(json.loads(json_text))

    def load_json(self, json_text: str) -> "PersistableModel":
        return type(self).from_json(json_text)

    def save(self, path: Path | str) -> None:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(self.to_json(), encoding="utf-8")
        log.info("Saved model", model=self.__class__.__name__, path=str(path))

    @classmethod
    def load(cls, path: Path | str) -> "PersistableModel":
        """
        Load a model written by save().

        Raises:
            FileNotFoundError: If the file doesn't exist.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Model file not found: {path}")
        model = cls.from_json(path.read_text(encoding="utf-8"))
        log.info("Loaded model", model=cls.__name__, path=str(path))
        return model


def _base_paths(path: Path) -> tuple[Path, Path]:
    """Resolve (model_path, metadata_path) from a base or .joblib path."""
    if path.suffix == ".joblib":
        base = path.with_suffix("")  # removes .joblib
        if base.suffix == ".model":
            base = base.with_suffix("")  # removes .model
        return path, base.with_suffix(".model.json")
    return path.with_suffix(".model.joblib"), path.with_suffix(".model.json")


def save_model(model: Model, output_path: Path | str) -> tuple[Path, Path]:
    """Save any model and its metadata to disk.

    Creates two files:
        - {output_path}.model.joblib: Pickled model object
        - {output_path}.model.json: Human-readable metadata

    Args:
        model: Model to save.
        output_path: Base output path (without extension).

    Returns:
        Tuple of (model_path, metadata_path).
    """
    output_path = Path(output_path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    model_path, metadata_path = _base_paths(output_path)

    joblib.dump(model, model_path)
    log.info("Saved model", path=str(model_path))

    metadata: dict[str, Any] = {
        "model_type": model.__class__.__name__,
        "descriptor": model.descriptor.to_dict() if model.descriptor else None,
        "normalize_features": model.normalize_features,
        "feature_normalizer": model.feature_normalizer.name
        if model.feature_normalizer
        else None,
        "saved_at": datetime.now().isoformat(),
    }

    with open(metadata_path, "w", encoding="utf-8") as f:
        json.dump(metadata, f, indent=2)
    log.info("Saved model metadata", path=str(metadata_path))

    return model_path, metadata_path


def load_model(path: Path | str) -> tuple[Model, dict[str, Any]]:
    """Load a model and its metadata from disk.

    Accepts either:
        - Path to .model.joblib file directly
        - Base path (will append .model.joblib)

    Args:
        path: Path to model file or base path.

    Returns:
        Tuple of (model, metadata_dict).

    Raises:
        FileNotFoundError: If model file doesn't exist.
        TypeError: If the file does not contain a Model.
    """
    model_path, metadata_path = _base_paths(Path(path))

    if not model_path.exists():
        raise FileNotFoundError(f"Model file not found: {model_path}")

    model = joblib.load(model_path)
    if not isinstance(model, Model):
        msg = f"{model_path} does not contain a Model (got {type(model).__name__})"
        raise TypeError(msg)
    log.info("Loaded model", path=str(model_path))

    metadata: dict[str, Any] = {}
    if metadata_path.exists():
        with open(metadata_path, encoding="utf-8") as f:
            metadata = json.load(f)
        log.info("Loaded model metadata", path=str(metadata_path))
    else:
        log.warning("Model metadata not found", path=str(metadata_path))

    return model, metadata
