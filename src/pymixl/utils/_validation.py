"""Input validation and the error types raised by pymixl."""

from __future__ import annotations

import numpy as np


class ContractViolation(ValueError):
    """A caller broke the calling contract (sizes, index ranges, call order)."""


class SingularFactorError(np.linalg.LinAlgError):
    """The Cholesky factor has a zero or near-zero diagonal entry.

    Attributes
    ----------
    operation : str
        Name of the operation that needed a non-singular factor.
    index : int
        Position ``j`` of the offending diagonal entry ``U[j, j]``.
    value : float
        The offending diagonal value.
    """

    def __init__(self, operation: str, index: int, value: float):
        self.operation = operation
        self.index = index
        self.value = value
        super().__init__(
            f"{operation}: Cholesky factor is singular, "
            f"|U[{index}, {index}]| = {abs(value):.3e}"
        )


class NonFiniteError(FloatingPointError):
    """A draw, cached solution or gradient entry is NaN or infinite."""


def check_n_attributes(n_attributes, name: str = "n_attributes") -> int:
    """Return ``n_attributes`` as int, raising if it is not a positive integer."""
    if isinstance(n_attributes, bool) or not isinstance(n_attributes, (int, np.integer)):
        raise ContractViolation(
            f"{name} must be an integer, got {type(n_attributes).__name__}"
        )
    if n_attributes < 1:
        raise ContractViolation(f"{name} must be >= 1, got {n_attributes}")
    return int(n_attributes)


def check_length(v, expected: int, name: str, operation: str) -> None:
    """Raise ContractViolation if ``v`` is not a vector of length ``expected``."""
    shape = tuple(v.shape)
    if len(shape) != 1 or shape[0] != expected:
        raise ContractViolation(
            f"{operation}: {name} must have shape ({expected},), got {shape}"
        )


def check_index(index, upper: int, name: str, operation: str) -> int:
    """Raise ContractViolation unless ``0 <= index < upper``."""
    if isinstance(index, bool) or not isinstance(index, (int, np.integer)):
        raise ContractViolation(
            f"{operation}: {name} must be an integer, got {type(index).__name__}"
        )
    if not 0 <= index < upper:
        raise ContractViolation(
            f"{operation}: {name}={index} out of range [0, {upper})"
        )
    return int(index)


def check_finite(x, xp, name: str, operation: str) -> None:
    """Raise NonFiniteError if ``x`` holds NaN or infinite values."""
    if not xp.all_finite(x):
        raise NonFiniteError(f"{operation}: {name} contains non-finite values")


def check_nonsingular_upper(U, xp, tol: float, operation: str) -> None:
    """Raise SingularFactorError if a diagonal entry of ``U`` is within ``tol`` of 0."""
    diag = xp.to_numpy(xp.diagonal(U))
    small = np.flatnonzero(~(np.abs(diag) > tol))
    if small.size:
        j = int(small[0])
        raise SingularFactorError(operation, j, float(diag[j]))
