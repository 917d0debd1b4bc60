"""NumPy + SciPy backend implementation."""

from __future__ import annotations

import numpy as np
import scipy.linalg


class NumpyBackend:
    """Backend wrapping NumPy + SciPy for array operations."""

    name = "numpy"
    float64 = np.float64
    int64 = np.int64

    # --- Array creation ---
    @staticmethod
    def array(data, dtype=None):
        return np.asarray(data, dtype=dtype)

    @staticmethod
    def zeros(shape, dtype=np.float64):
        return np.zeros(shape, dtype=dtype)

    @staticmethod
    def eye(n, dtype=np.float64):
        return np.eye(n, dtype=dtype)

    @staticmethod
    def copy(a):
        return np.copy(a)

    @staticmethod
    def diagonal(a, offset=0):
        return np.diagonal(a, offset=offset)

    # --- Math operations ---
    @staticmethod
    def abs(x):
        return np.abs(x)

    @staticmethod
    def all_finite(x):
        return bool(np.all(np.isfinite(x)))

    @staticmethod
    def array_equal(a, b):
        """Exact equality; NaN equals NaN in the same position."""
        return bool(np.array_equal(a, b, equal_nan=True))

    # --- Linear algebra ---
    @staticmethod
    def matmul(a, b):
        return a @ b

    @staticmethod
    def transpose(a):
        return a.T

    @staticmethod
    def solve_triangular(U, b):
        """Solve U x = b for upper-triangular U."""
        return scipy.linalg.solve_triangular(U, b, lower=False, check_finite=False)

    # --- Type checking ---
    @staticmethod
    def is_array(x):
        return isinstance(x, np.ndarray)

    @staticmethod
    def to_numpy(x):
        return np.asarray(x)
