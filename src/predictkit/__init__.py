"""
Predictkit: the contract shared by supervised predictive models.

This package provides descriptor-driven feature marshalling, pluggable
feature normalization and a uniform prediction surface for single
vectors, batches and domain objects.
"""

from importlib.metadata import version

__version__ = version("predictkit")

__all__ = ["__version__"]
