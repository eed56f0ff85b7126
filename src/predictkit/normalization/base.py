"""
Base class for feature normalizers.

A normalizer is a stateless transform: all statistics it needs come
from the Summary computed at training time.
"""

from abc import ABC, abstractmethod

import numpy as np

from predictkit.normalization.summary import Summary


class Normalizer(ABC):
    """Abstract base class for feature normalizers.

    Implementations must be pure: the input vector is never modified and
    the returned vector has the same length as the input.
    """

    #: Type identifier used for persistence.
    name: str = ""

    @abstractmethod
    def normalize(self, x: np.ndarray, summary: Summary) -> np.ndarray:
        """Normalize a feature vector.

        Args:
            x: Raw feature vector.
            summary: Training-time statistics, index-aligned with x.

        Returns:
            New normalized vector of the same length.
        """
        ...

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"

    def __eq__(self, other: object) -> bool:
        return type(self) is type(other)

    def __hash__(self) -> int:
        return hash(type(self))
