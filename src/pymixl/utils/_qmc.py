"""Quasi-Monte Carlo draws for simulated likelihood estimation."""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray
from scipy.stats import norm, qmc


def halton_normal(n_draws: int, n_attributes: int, seed: int | None = None) -> NDArray:
    """Standard normal draws from a scrambled Halton sequence.

    Parameters
    ----------
    n_draws : int
        Number of draws (Halton points).
    n_attributes : int
        Coordinates per draw, one per random coefficient.
    seed : int or None
        Random seed for the scrambling.

    Returns
    -------
    draws : (n_draws, n_attributes) array
        Row ``r`` holds the standard normals of draw ``r``.
    """
    u = qmc.Halton(d=n_attributes, scramble=True, seed=seed).random(n_draws)
    # Keep the inverse CDF away from +-inf at the unit-cube boundary
    u = np.clip(u, 1e-10, 1.0 - 1e-10)
    return norm.ppf(u)
