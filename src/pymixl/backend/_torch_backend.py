"""PyTorch backend implementation (optional dependency)."""

from __future__ import annotations

from typing import Any


def _import_torch():
    """Lazy import of torch."""
    try:
        import torch
        return torch
    except ImportError as e:
        raise ImportError(
            "PyTorch is required for the torch backend. "
            "Install it with: pip install pymixl[torch]"
        ) from e


class TorchBackend:
    """Backend wrapping PyTorch for array operations with GPU support."""

    name = "torch"

    def __init__(self, device: str = "cpu", dtype: Any = None):
        self._torch = _import_torch()
        self.device = device
        self.float64 = self._torch.float64
        self.int64 = self._torch.int64
        self._default_dtype = dtype or self._torch.float64

    # --- Array creation ---
    def array(self, data, dtype=None):
        dtype = dtype or self._default_dtype
        if isinstance(data, self._torch.Tensor):
            return data.to(device=self.device, dtype=dtype)
        return self._torch.tensor(data, dtype=dtype, device=self.device)

    def zeros(self, shape, dtype=None):
        dtype = dtype or self._default_dtype
        return self._torch.zeros(shape, dtype=dtype, device=self.device)

    def eye(self, n, dtype=None):
        dtype = dtype or self._default_dtype
        return self._torch.eye(n, dtype=dtype, device=self.device)

    def copy(self, a):
        return a.clone()

    def diagonal(self, a, offset=0):
        return self._torch.diagonal(a, offset=offset)

    # --- Math operations ---
    def abs(self, x):
        return self._torch.abs(x)

    def all_finite(self, x):
        return bool(self._torch.isfinite(x).all())

    def array_equal(self, a, b):
        """Exact equality; NaN equals NaN in the same position."""
        if a.shape != b.shape:
            return False
        return bool(self._torch.allclose(a, b, rtol=0.0, atol=0.0, equal_nan=True))

    # --- Linear algebra ---
    def matmul(self, a, b):
        return a @ b

    def transpose(self, a):
        if a.dim() < 2:
            return a
        return a.T

    def solve_triangular(self, U, b):
        """Solve U x = b for upper-triangular U."""
        x = self._torch.linalg.solve_triangular(U, b.unsqueeze(-1), upper=True)
        return x.squeeze(-1)

    # --- Type checking ---
    def is_array(self, x):
        return isinstance(x, self._torch.Tensor)

    def to_numpy(self, x):
        if isinstance(x, self._torch.Tensor):
            return x.detach().cpu().numpy()
        import numpy as np
        return np.asarray(x)
