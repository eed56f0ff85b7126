"""Pytest configuration and shared fixtures."""

import numpy as np
import pytest

from predictkit.descriptor import Descriptor
from predictkit.normalization import Summary


@pytest.fixture
def descriptor() -> Descriptor:
    """Two float feature columns and a float label."""
    return Descriptor.create(["x", "z"], label="y")


@pytest.fixture
def unlabeled_descriptor() -> Descriptor:
    """Two float feature columns without a label."""
    return Descriptor.create(["x", "z"])


@pytest.fixture
def summary() -> Summary:
    """Training statistics: col0 spans 0..10, col1 spans 0..1."""
    return Summary(
        minimum=[0.0, 0.0],
        maximum=[10.0, 1.0],
        average=[5.0, 0.5],
        standard_deviation=[2.5, 0.25],
    )


@pytest.fixture
def sample_matrix() -> np.ndarray:
    """Small feature matrix with one row per example."""
    return np.array(
        [
            [5.0, 0.3],
            [0.0, 1.0],
            [10.0, 0.0],
            [2.5, 0.75],
        ]
    )
