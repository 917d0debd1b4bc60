"""Standard-normal random sources injected into ``draw_beta``.

A source is any object with ``next_gaussian(std_dev) -> float``. Sources
hold their own generator state; give each concurrent worker its own source.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

import numpy as np

from pymixl.utils._qmc import halton_normal
from pymixl.utils._validation import ContractViolation


@runtime_checkable
class GaussianSource(Protocol):
    """Capability to draw one normal value with mean 0 and the given std dev."""

    def next_gaussian(self, std_dev: float = 1.0) -> float:
        ...


class NumpyGaussianSource:
    """Pseudo-random normals from a ``numpy.random.Generator``.

    Parameters
    ----------
    seed : int, numpy.random.Generator or None
        Seed (or ready generator) for reproducible draws.
    """

    def __init__(self, seed: int | np.random.Generator | None = None):
        self._rng = np.random.default_rng(seed)

    def next_gaussian(self, std_dev: float = 1.0) -> float:
        return float(self._rng.normal(0.0, std_dev))


class HaltonGaussianSource:
    """Quasi-random normals from a scrambled Halton sequence.

    The sequence is generated up front for ``n_draws`` beta draws of
    ``n_attributes`` coordinates each and handed out in draw-major order, so
    consecutive ``draw_beta`` calls consume consecutive Halton points.

    Parameters
    ----------
    n_draws : int
        Number of beta draws the source must serve.
    n_attributes : int
        Coordinates per draw (K).
    seed : int or None
        Seed for the scrambling.
    """

    def __init__(self, n_draws: int, n_attributes: int, seed: int | None = None):
        self._values = halton_normal(n_draws, n_attributes, seed=seed).ravel()
        self._pos = 0

    @property
    def remaining(self) -> int:
        return self._values.size - self._pos

    def reset(self) -> None:
        """Restart from the first Halton point."""
        self._pos = 0

    def next_gaussian(self, std_dev: float = 1.0) -> float:
        if self._pos >= self._values.size:
            raise ContractViolation(
                f"Halton sequence exhausted after {self._values.size} values"
            )
        value = float(self._values[self._pos]) * std_dev
        self._pos += 1
        return value
