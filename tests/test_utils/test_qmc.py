"""Tests for quasi-random standard normal draws."""

from __future__ import annotations

import numpy as np
from scipy.stats import norm, qmc

import pymixl.utils
from pymixl.utils import halton_normal


class TestHaltonNormal:
    def test_shape(self):
        assert halton_normal(16, 3, seed=0).shape == (16, 3)

    def test_reproducible_with_seed(self):
        np.testing.assert_array_equal(halton_normal(8, 2, seed=4), halton_normal(8, 2, seed=4))

    def test_seed_changes_scrambling(self):
        assert not np.array_equal(halton_normal(8, 2, seed=4), halton_normal(8, 2, seed=5))

    def test_finite(self):
        assert np.all(np.isfinite(halton_normal(256, 4, seed=1)))

    def test_inverse_cdf_of_scrambled_points(self):
        u = qmc.Halton(d=2, scramble=True, seed=3).random(10)
        np.testing.assert_allclose(halton_normal(10, 2, seed=3), norm.ppf(u))

    def test_roughly_standard(self):
        z = halton_normal(4096, 2, seed=2)
        np.testing.assert_allclose(z.mean(axis=0), 0.0, atol=0.05)
        np.testing.assert_allclose(z.std(axis=0), 1.0, atol=0.05)

    def test_single_public_entry_point(self):
        assert not hasattr(pymixl.utils, "halton_sequence")
