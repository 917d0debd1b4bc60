"""Tests for Cholesky factor assembly and parameter packing."""

from __future__ import annotations

import numpy as np
import pytest

from pymixl.gaussian import (
    build_cholesky_factor,
    build_layout,
    covariance_matrix,
    init,
    pack_parameters,
    setup_distribution,
)
from pymixl.utils import ContractViolation


class TestSetupDistribution:
    def test_k2_worked_example(self, params_k2):
        _, context = init(2)
        setup_distribution(params_k2, context)
        np.testing.assert_array_equal(
            context.cholesky_factor, [[3.0, 4.0], [0.0, 5.0]]
        )

    def test_k1(self, params_k1):
        _, context = init(1)
        setup_distribution(params_k1, context)
        np.testing.assert_array_equal(context.cholesky_factor, [[2.0]])

    def test_k3_placement(self, params_k3):
        _, context = init(3)
        setup_distribution(params_k3, context)
        expected = np.array([[1.5, 0.3, -0.2],
                             [0.0, 0.8, 0.4],
                             [0.0, 0.0, 1.1]])
        np.testing.assert_array_equal(context.cholesky_factor, expected)

    def test_rebuild_clears_old_entries(self, params_k2):
        _, context = init(2)
        setup_distribution(params_k2, context)
        setup_distribution(np.zeros(5), context)
        np.testing.assert_array_equal(context.cholesky_factor, np.zeros((2, 2)))

    def test_accepts_list(self):
        _, context = init(2)
        setup_distribution([1.0, 2.0, 3.0, 4.0, 5.0], context)
        assert context.cholesky_factor[0, 1] == 4.0

    @pytest.mark.parametrize("n", [4, 6, 0])
    def test_wrong_length(self, n):
        _, context = init(2)
        with pytest.raises(ContractViolation, match="setup_distribution"):
            setup_distribution(np.ones(n), context)

    def test_matches_backend(self, xp, params_k2):
        _, context = init(2, xp=xp)
        setup_distribution(xp.array(params_k2), context)
        assert xp.is_array(context.cholesky_factor)
        np.testing.assert_array_equal(
            xp.to_numpy(context.cholesky_factor), [[3.0, 4.0], [0.0, 5.0]]
        )

    def test_verbose_prints(self, capsys, params_k2):
        from pymixl.gaussian import GaussianControl
        _, context = init(2, GaussianControl(verbose=2))
        setup_distribution(params_k2, context)
        assert "Cholesky factor set up: K=2" in capsys.readouterr().out

    def test_silent_by_default(self, capsys, params_k2):
        _, context = init(2)
        setup_distribution(params_k2, context)
        assert capsys.readouterr().out == ""


class TestPackParameters:
    @pytest.mark.parametrize("K", [1, 2, 3, 5])
    def test_roundtrip(self, K):
        rng = np.random.default_rng(K)
        mean = rng.normal(size=K)
        U = np.triu(rng.normal(size=(K, K)))
        theta = pack_parameters(mean, U)

        n_params, context = init(K)
        assert theta.shape == (n_params,)
        setup_distribution(theta, context)

        np.testing.assert_array_equal(context.cholesky_factor, U)
        np.testing.assert_array_equal(
            context.cholesky_factor[np.tril_indices(K, k=-1)], 0.0
        )
        np.testing.assert_array_equal(theta[:K], mean)

    def test_lower_part_ignored(self):
        theta = pack_parameters([1.0, 2.0], [[3.0, 4.0], [99.0, 5.0]])
        np.testing.assert_array_equal(theta, [1.0, 2.0, 3.0, 4.0, 5.0])

    def test_shape_mismatch(self):
        with pytest.raises(ContractViolation):
            pack_parameters([1.0, 2.0], np.eye(3))

    def test_build_without_context(self, params_k3):
        U = build_cholesky_factor(params_k3, build_layout(3))
        assert U[1, 2] == 0.4
        assert U[2, 1] == 0.0


class TestCovarianceMatrix:
    def test_k2(self, params_k2):
        _, context = init(2)
        setup_distribution(params_k2, context)
        np.testing.assert_allclose(
            covariance_matrix(context), [[25.0, 20.0], [20.0, 25.0]]
        )

    def test_requires_setup(self):
        _, context = init(2)
        with pytest.raises(ContractViolation):
            covariance_matrix(context)
