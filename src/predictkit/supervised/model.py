"""
Base class for supervised predictive models.

Every trained model exposes the same surface:

1. predict() - one numeric prediction from one feature vector (abstract)
2. predict_batch() - one prediction per matrix row
3. predict_object() / predict_value() - descriptor-driven prediction on
   domain objects, producing label values

Concrete models call preprocess() exactly once on a feature vector
before reading its values, so that features are normalized with the
statistics captured during training.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, TypeVar, cast

import numpy as np

from predictkit.config.settings import ModelConfig
from predictkit.descriptor import Descriptor, Property
from predictkit.normalization import Normalizer, Summary, create_normalizer
from predictkit.utils.logging import get_logger

log = get_logger(__name__)

T = TypeVar("T")
V = TypeVar("V")


class MissingLabelError(RuntimeError):
    """Raised when object prediction is requested without a label column."""


class Model(ABC):
    """Abstract base class for trained supervised models.

    Attributes:
        descriptor: Maps domain objects to feature vectors and names the label.
        normalize_features: Whether preprocess() normalizes feature vectors.
        feature_normalizer: Normalizer applied when normalize_features is set.
        feature_properties: Training-time feature statistics for the normalizer.
    """

    def __init__(
        self,
        descriptor: Descriptor | None = None,
        *,
        normalize_features: bool = False,
        feature_normalizer: Normalizer | None = None,
        feature_properties: Summary | None = None,
    ) -> None:
        self.descriptor = descriptor
        self.normalize_features = normalize_features
        self.feature_normalizer = feature_normalizer
        self.feature_properties = feature_properties

    def configure(
        self,
        config: ModelConfig,
        feature_properties: Summary | None = None,
    ) -> "Model":
        """
        Apply descriptor and normalization settings from configuration.

        Args:
            config: Model configuration.
            feature_properties: Training-time statistics; required when
                normalization is enabled.

        Returns:
            self (for method chaining)
        """
        self.descriptor = Descriptor.from_config(config.descriptor)
        self.normalize_features = config.normalization.enabled
        self.feature_normalizer = (
            create_normalizer(config.normalization.method)
            if config.normalization.enabled
            else None
        )
        self.feature_properties = feature_properties
        self.check_configuration()

        log.info(
            "Configured model",
            model=config.name,
            n_features=self.descriptor.length,
            label=config.label_name,
            normalization=config.normalization.method.value
            if config.normalization.enabled
            else None,
        )
        return self

    def check_configuration(self) -> None:
        """
        Verify the normalization settings are consistent.

        Raises:
            RuntimeError: If normalization is enabled without a normalizer or
                summary, or the summary disagrees with the descriptor width.
        """
        if not self.normalize_features:
            return

        missing = []
        if self.feature_normalizer is None:
            missing.append("feature_normalizer")
        if self.feature_properties is None:
            missing.append("feature_properties")
        if missing:
            msg = (
                f"{self.__class__.__name__} has feature normalization enabled "
                f"but no {' or '.join(missing)}"
            )
            raise RuntimeError(msg)

        if (
            self.descriptor is not None
            and self.feature_properties is not None
            and self.feature_properties.length != self.descriptor.length
        ):
            msg = (
                f"Feature summary describes {self.feature_properties.length} columns "
                f"but the descriptor has {self.descriptor.length}"
            )
            raise RuntimeError(msg)

    def preprocess(self, x: np.ndarray) -> None:
        """
        Normalize a feature vector in place.

        Does nothing when normalize_features is False. Otherwise every
        element of x is overwritten with the normalizer's output, so the
        caller's array holds normalized values afterwards.

        Args:
            x: 1-D float feature vector, modified in place.

        Raises:
            RuntimeError: If normalization is misconfigured.
            ValueError: If x is not 1-D or its length disagrees with the summary.
            TypeError: If x cannot hold float values.
        """
        if not self.normalize_features:
            return

        self.check_configuration()
        normalizer = cast("Normalizer", self.feature_normalizer)
        summary = cast("Summary", self.feature_properties)

        if x.ndim != 1:
            msg = f"Expected a 1-D feature vector, got {x.ndim} dimension(s)"
            raise ValueError(msg)
        if not np.issubdtype(x.dtype, np.floating):
            msg = f"Feature vector must be floating point to normalize in place, got {x.dtype}"
            raise TypeError(msg)
        if len(x) != summary.length:
            msg = (
                f"Feature vector has {len(x)} values but the summary "
                f"describes {summary.length} columns"
            )
            raise ValueError(msg)

        xp = normalizer.normalize(x, summary)
        if len(xp) != len(x):
            msg = (
                f"{normalizer!r} returned {len(xp)} values "
                f"for a vector of length {len(x)}"
            )
            raise ValueError(msg)

        x[:] = xp

    @abstractmethod
    def predict(self, y: np.ndarray) -> float:
        """Predict a single numeric value from one feature vector.

        Implementations call preprocess() on the vector before using it.

        Args:
            y: Feature vector in descriptor column order.

        Returns:
            Numeric prediction.
        """
        ...

    def predict_batch(self, x: np.ndarray) -> np.ndarray:
        """
        Predict every row of a feature matrix.

        Each row is copied into its own vector and passed to predict(), so
        the caller's matrix is never modified. Output order matches row
        order.

        Args:
            x: Matrix with one row per example.

        Returns:
            Vector of predictions, one per row.

        Raises:
            ValueError: If x is not 2-D or its width disagrees with the descriptor.
        """
        x = np.asarray(x, dtype=float)
        self._check_matrix(x)

        v = np.zeros(x.shape[0], dtype=float)
        for row in range(x.shape[0]):
            v[row] = self.predict(x[row].copy())
        return v

    def predict_object(self, o: T) -> T:
        """
        Predict the label of a domain object and write it back onto it.

        The object is converted to a feature vector (label excluded),
        predicted, and the converted label value is assigned to the
        object's label field.

        Args:
            o: Domain object carrying the descriptor's feature fields.

        Returns:
            The same object, with its label field set.

        Raises:
            MissingLabelError: If the descriptor has no label column.
        """
        descriptor = self._require_descriptor()
        label = self._require_label()

        result = self._predict_label(o, descriptor, label)
        descriptor.set_value(o, label.name, result)
        return o

    def predict_value(self, o: Any) -> Any:
        """
        Predict the label value of a domain object without modifying it.

        Raises:
            MissingLabelError: If the descriptor has no label column.
        """
        label = self._require_label()
        return self._predict_label(o, self._require_descriptor(), label)

    def predict_typed(self, o: T) -> T:
        """
        Predict onto a domain object, checking the result keeps its type.

        Raises:
            MissingLabelError: If the descriptor has no label column.
            TypeError: If the returned object is not an instance of type(o).
        """
        expected = type(o)
        result = self.predict_object(o)
        if not isinstance(result, expected):
            msg = f"Prediction returned {type(result).__name__}, expected {expected.__name__}"
            raise TypeError(msg)
        return result

    def predict_value_as(self, o: Any, value_type: type[V]) -> V:
        """
        Predict the label value of a domain object as a specific type.

        Args:
            o: Domain object.
            value_type: Type the label value must be an instance of.

        Returns:
            The label value.

        Raises:
            MissingLabelError: If the descriptor has no label column.
            TypeError: If the label value is not an instance of value_type.
        """
        value = self.predict_value(o)
        if not isinstance(value, value_type):
            msg = (
                f"Label value {value!r} of type {type(value).__name__} "
                f"is not a {value_type.__name__}"
            )
            raise TypeError(msg)
        return value

    # ----- persistence

    def save(self, path: Path | str) -> None:
        """Persist the model to a file.

        Raises:
            NotImplementedError: Unless a subclass provides persistence.
        """
        raise NotImplementedError(
            f"{self.__class__.__name__} does not support persistence. "
            "Use a PersistableModel or save_model() instead."
        )

    def to_json(self) -> str:
        """Serialize the model to JSON.

        Raises:
            NotImplementedError: Unless a subclass provides persistence.
        """
        raise NotImplementedError(
            f"{self.__class__.__name__} does not support JSON serialization."
        )

    def load_json(self, json_text: str) -> "Model":
        """Build a model from JSON produced by to_json().

        Raises:
            NotImplementedError: Unless a subclass provides persistence.
        """
        raise NotImplementedError(
            f"{self.__class__.__name__} does not support JSON deserialization."
        )

    # ----- helpers

    def _require_descriptor(self) -> Descriptor:
        if self.descriptor is None:
            msg = f"{self.__class__.__name__} has no descriptor"
            raise RuntimeError(msg)
        return self.descriptor

    def _require_label(self) -> Property:
        """Return the descriptor's label, failing before any conversion."""
        label = self._require_descriptor().label
        if label is None:
            raise MissingLabelError("Empty label precludes prediction!")
        return label

    def _predict_label(self, o: Any, descriptor: Descriptor, label: Property) -> Any:
        y = descriptor.to_vector(o, with_label=False)
        val = self.predict(y)
        result = label.convert_back(val)
        log.debug("Predicted label", label=label.name, raw=val, value=result)
        return result

    def _check_matrix(self, x: np.ndarray) -> None:
        if x.ndim != 2:
            msg = f"Expected a 2-D feature matrix, got {x.ndim} dimension(s)"
            raise ValueError(msg)
        if self.descriptor is not None and x.shape[1] != self.descriptor.length:
            msg = (
                f"Feature matrix has {x.shape[1]} columns but the descriptor "
                f"has {self.descriptor.length}"
            )
            raise ValueError(msg)

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}(descriptor={self.descriptor!r}, "
            f"normalize_features={self.normalize_features})"
        )


def supports_persistence(model: Model) -> bool:
    """Whether a model overrides the save/to_json/load_json stubs."""
    cls = type(model)
    return all(
        getattr(cls, name) is not getattr(Model, name)
        for name in ("save", "to_json", "load_json")
    )
