"""Shared test fixtures for pymixl."""

from __future__ import annotations

import numpy as np
import pytest

from pymixl.backend import get_backend


class ScriptedGaussianSource:
    """Random source returning a fixed script of values, cycling when exhausted."""

    def __init__(self, values):
        self.values = list(values)
        self.calls = []

    def next_gaussian(self, std_dev: float = 1.0) -> float:
        value = self.values[len(self.calls) % len(self.values)]
        self.calls.append(std_dev)
        return value * std_dev


@pytest.fixture
def xp_numpy():
    """NumPy backend fixture."""
    return get_backend("numpy")


@pytest.fixture
def xp_torch():
    """PyTorch backend fixture (skips if torch not installed)."""
    pytest.importorskip("torch")
    return get_backend("torch")


@pytest.fixture(params=["numpy", "torch"])
def xp(request):
    """Parametrized backend fixture; the torch case skips without torch."""
    if request.param == "torch":
        pytest.importorskip("torch")
    return get_backend(request.param)


@pytest.fixture
def scripted_source():
    """Factory for scripted standard-normal sources."""
    return ScriptedGaussianSource


@pytest.fixture
def params_k1():
    """K=1 worked example: mean 0, factor [[2]]."""
    return np.array([0.0, 2.0])


@pytest.fixture
def params_k2():
    """K=2 worked example: mean [1, 2], factor [[3, 4], [0, 5]]."""
    return np.array([1.0, 2.0, 3.0, 4.0, 5.0])


@pytest.fixture
def params_k3():
    """K=3 parameters with a well-conditioned factor.

    mean = [0.5, -1.0, 2.0]
    U = [[1.5, 0.3, -0.2],
         [0.0, 0.8,  0.4],
         [0.0, 0.0,  1.1]]
    """
    return np.array([0.5, -1.0, 2.0, 1.5, 0.3, -0.2, 0.8, 0.4, 1.1])
