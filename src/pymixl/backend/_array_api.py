"""Backend selection: NumPy/SciPy or PyTorch array operations.

The Gaussian distribution context stores the backend it was built with, so
the factor, the draws and the cached solution all live in one array library.
"""

from __future__ import annotations

from typing import Any, Literal

import numpy as np

BackendName = Literal["numpy", "torch"]

_BACKEND_NAMES = ("numpy", "torch")

DEFAULT_BACKEND: BackendName = "numpy"

# Backends are stateless, one instance per name is enough
_backends: dict[str, Any] = {}


def _check_name(name: str) -> None:
    if name not in _BACKEND_NAMES:
        raise ValueError(f"Unknown backend: {name!r}. Use 'numpy' or 'torch'.")


def get_backend(name: BackendName | None = None) -> Any:
    """Return a backend namespace providing array operations.

    Parameters
    ----------
    name : {"numpy", "torch"} or None
        Backend name. If None, returns the numpy backend.

    Returns
    -------
    backend : NumpyBackend or TorchBackend
    """
    if name is None:
        name = DEFAULT_BACKEND
    _check_name(name)

    if name not in _backends:
        if name == "numpy":
            from pymixl.backend._numpy_backend import NumpyBackend
            _backends[name] = NumpyBackend()
        else:
            from pymixl.backend._torch_backend import TorchBackend
            _backends[name] = TorchBackend()

    return _backends[name]


def array_namespace(*arrays: Any) -> Any:
    """Infer the backend from the input arrays.

    A PyTorch tensor anywhere in ``arrays`` selects the torch backend, a
    NumPy array selects numpy. Plain Python sequences and None are skipped;
    if nothing decides, the default backend is returned.
    """
    for arr in arrays:
        if arr is None:
            continue
        if type(arr).__module__.startswith("torch"):
            return get_backend("torch")
        if isinstance(arr, np.ndarray):
            return get_backend("numpy")

    return get_backend()
