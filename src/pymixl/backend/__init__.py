"""Backend abstraction for NumPy/PyTorch array operations."""

from pymixl.backend._array_api import (
    array_namespace,
    get_backend,
)

__all__ = ["get_backend", "array_namespace"]
