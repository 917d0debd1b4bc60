"""Tests for validation helpers and error types."""

from __future__ import annotations

import numpy as np
import pytest

from pymixl.backend import get_backend
from pymixl.utils import ContractViolation, NonFiniteError, SingularFactorError
from pymixl.utils._validation import (
    check_finite,
    check_index,
    check_length,
    check_n_attributes,
    check_nonsingular_upper,
)


class TestErrorTypes:
    def test_contract_violation_is_value_error(self):
        assert issubclass(ContractViolation, ValueError)

    def test_singular_factor_is_linalg_error(self):
        assert issubclass(SingularFactorError, np.linalg.LinAlgError)

    def test_non_finite_is_floating_point_error(self):
        assert issubclass(NonFiniteError, FloatingPointError)

    def test_singular_factor_context(self):
        err = SingularFactorError("draw_beta", 2, 0.0)
        assert err.operation == "draw_beta"
        assert err.index == 2
        assert err.value == 0.0
        assert "U[2, 2]" in str(err)


class TestChecks:
    def test_n_attributes(self):
        assert check_n_attributes(3) == 3
        assert check_n_attributes(np.int64(2)) == 2
        for bad in (0, -1, 2.0, True, "3"):
            with pytest.raises(ContractViolation):
                check_n_attributes(bad)

    def test_length(self):
        check_length(np.zeros(3), 3, "v", "op")
        with pytest.raises(ContractViolation, match="op: v must have shape"):
            check_length(np.zeros(4), 3, "v", "op")
        with pytest.raises(ContractViolation):
            check_length(np.zeros((3, 1)), 3, "v", "op")

    def test_index(self):
        assert check_index(0, 2, "i", "op") == 0
        assert check_index(np.int64(1), 2, "i", "op") == 1
        for bad in (-1, 2, 1.0):
            with pytest.raises(ContractViolation):
                check_index(bad, 2, "i", "op")

    def test_finite(self):
        xp = get_backend("numpy")
        check_finite(np.array([1.0, -2.0]), xp, "x", "op")
        with pytest.raises(NonFiniteError):
            check_finite(np.array([1.0, np.nan]), xp, "x", "op")

    def test_nonsingular_upper(self):
        xp = get_backend("numpy")
        check_nonsingular_upper(np.array([[1.0, 5.0], [0.0, 2.0]]), xp, 1e-12, "op")
        with pytest.raises(SingularFactorError) as info:
            check_nonsingular_upper(np.array([[1.0, 5.0], [0.0, 1e-14]]), xp, 1e-12, "op")
        assert info.value.index == 1

    def test_nan_diagonal_is_singular(self):
        xp = get_backend("numpy")
        with pytest.raises(SingularFactorError):
            check_nonsingular_upper(np.array([[np.nan]]), xp, 1e-12, "op")
