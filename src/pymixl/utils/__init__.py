"""Utility functions and error types."""

from pymixl.utils._qmc import halton_normal
from pymixl.utils._validation import (
    ContractViolation,
    NonFiniteError,
    SingularFactorError,
)

__all__ = [
    "ContractViolation",
    "SingularFactorError",
    "NonFiniteError",
    "halton_normal",
]
