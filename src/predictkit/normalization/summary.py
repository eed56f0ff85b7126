"""
Per-feature training statistics.

A Summary is computed once from the training matrix and replayed by the
normalizers at prediction time. Column i of the summary describes
column i of every feature vector it is applied to.
"""

from dataclasses import dataclass
from typing import Any

import numpy as np


def _frozen(values: Any) -> np.ndarray:
    """Return a read-only 1-D float copy."""
    arr = np.array(values, dtype=float).reshape(-1)
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class Summary:
    """Per-column statistics of a feature matrix.

    Attributes:
        minimum: Column minima.
        maximum: Column maxima.
        average: Column means.
        standard_deviation: Column standard deviations (population).
        median: Column medians.
    """

    minimum: np.ndarray
    maximum: np.ndarray
    average: np.ndarray
    standard_deviation: np.ndarray
    median: np.ndarray | None = None

    def __post_init__(self) -> None:
        median = self.median if self.median is not None else self.average
        for name, values in (
            ("minimum", self.minimum),
            ("maximum", self.maximum),
            ("average", self.average),
            ("standard_deviation", self.standard_deviation),
            ("median", median),
        ):
            object.__setattr__(self, name, _frozen(values))

        lengths = {
            len(self.minimum),
            len(self.maximum),
            len(self.average),
            len(self.standard_deviation),
            len(self.median),
        }
        if len(lengths) != 1:
            msg = f"Summary statistics have inconsistent lengths: {sorted(lengths)}"
            raise ValueError(msg)

    @property
    def length(self) -> int:
        """Number of feature columns described."""
        return len(self.minimum)

    @property
    def range(self) -> np.ndarray:
        """Column ranges (maximum - minimum)."""
        return self.maximum - self.minimum

    @classmethod
    def summarize(cls, x: np.ndarray) -> "Summary":
        """
        Compute column statistics of a feature matrix.

        NaN entries are ignored per column.

        Args:
            x: Matrix with one row per example.

        Returns:
            Summary of the matrix columns.

        Raises:
            ValueError: If the matrix is not 2-D or has no rows.
        """
        x = np.asarray(x, dtype=float)
        if x.ndim != 2:
            msg = f"Expected a 2-D feature matrix, got {x.ndim} dimension(s)"
            raise ValueError(msg)
        if x.shape[0] == 0:
            msg = "Cannot summarize a matrix with no rows"
            raise ValueError(msg)

        return cls(
            minimum=np.nanmin(x, axis=0),
            maximum=np.nanmax(x, axis=0),
            average=np.nanmean(x, axis=0),
            standard_deviation=np.nanstd(x, axis=0),
            median=np.nanmedian(x, axis=0),
        )

    def to_dict(self) -> dict[str, list[float]]:
        """Convert to a JSON-compatible dictionary."""
        return {
            "minimum": self.minimum.tolist(),
            "maximum": self.maximum.tolist(),
            "average": self.average.tolist(),
            "standard_deviation": self.standard_deviation.tolist(),
            "median": self.median.tolist(),
        }

    @classmethod
    def from_dict(cls, data: dict[str, list[float]]) -> "Summary":
        """Rebuild a Summary produced by to_dict()."""
        return cls(
            minimum=data["minimum"],
            maximum=data["maximum"],
            average=data["average"],
            standard_deviation=data["standard_deviation"],
            median=data.get("median"),  # type: ignore[arg-type]
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Summary):
            return NotImplemented
        return all(
            np.array_equal(getattr(self, name), getattr(other, name), equal_nan=True)
            for name in ("minimum", "maximum", "average", "standard_deviation", "median")
        )
