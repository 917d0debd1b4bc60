"""Drawing random coefficient vectors."""

from __future__ import annotations

from numpy.typing import NDArray

from pymixl.gaussian._context import DistributionContext, check_setup
from pymixl.gaussian._random import GaussianSource
from pymixl.utils._validation import (
    ContractViolation,
    check_finite,
    check_nonsingular_upper,
)


def draw_beta(
    context: DistributionContext,
    parameters: NDArray,
    source: GaussianSource,
) -> NDArray:
    """Draw one beta from N(mean, U U^T).

    Takes K standard normals ``z`` from ``source`` and returns
    ``beta = U @ z + mean``, the mean being the first K parameters.

    Raises
    ------
    ContractViolation
        If ``setup_distribution`` has not run for ``parameters``, or
        ``parameters`` has the wrong length.
    SingularFactorError
        If the factor has a (near) zero diagonal entry.
    NonFiniteError
        If the draw is not finite and ``control.check_finite`` is set.
    """
    xp = context.xp
    K = context.n_attributes
    parameters = check_setup(parameters, context, "draw_beta")
    check_nonsingular_upper(
        context.cholesky_factor, xp, context.control.singular_tol, "draw_beta"
    )

    z = xp.array([source.next_gaussian(1.0) for _ in range(K)], dtype=xp.float64)
    mean = parameters[:K]
    beta = xp.matmul(context.cholesky_factor, z) + mean

    if context.control.check_finite:
        check_finite(beta, xp, "beta", "draw_beta")
    return beta


def draw_betas(
    context: DistributionContext,
    parameters: NDArray,
    source: GaussianSource,
    n_draws: int,
) -> NDArray:
    """Draw ``n_draws`` betas; row ``r`` is the r-th draw, shape (n_draws, K)."""
    if n_draws < 0:
        raise ContractViolation(f"draw_betas: n_draws must be >= 0, got {n_draws}")
    xp = context.xp
    out = xp.zeros((n_draws, context.n_attributes), dtype=xp.float64)
    for r in range(n_draws):
        out[r] = draw_beta(context, parameters, source)
    return out
