"""Jacobian of a drawn beta with respect to the distribution parameters.

Rows index parameters, columns index beta coordinates. With
``beta = U z + mean``:

- the mean block is the K x K identity;
- factor entry U[r, c] only moves beta_r, with d beta_r / d U[r, c] = z_c.

``z`` is recovered once per draw by solving ``U z = beta - mean``
(``sampling_accumulate_precompute``); every entry is then an O(1) lookup.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray

from pymixl.gaussian._context import DistributionContext, as_vector, check_setup
from pymixl.utils._validation import (
    ContractViolation,
    NonFiniteError,
    check_finite,
    check_index,
    check_nonsingular_upper,
)


def sampling_accumulate_precompute(
    parameters: NDArray,
    beta: NDArray,
    context: DistributionContext,
) -> None:
    """Solve ``U x = beta - mean`` and cache ``x`` for the gradient queries of ``beta``.

    Must run after ``setup_distribution`` and before any gradient query for
    this draw.

    Raises
    ------
    ContractViolation
        If the factor was not set up for ``parameters`` or an input has
        the wrong length.
    SingularFactorError
        If the factor has a (near) zero diagonal entry.
    NonFiniteError
        If the solution is not finite and ``control.check_finite`` is set.
    """
    op = "sampling_accumulate_precompute"
    xp = context.xp
    K = context.n_attributes
    parameters = check_setup(parameters, context, op)
    beta = as_vector(beta, K, "beta", context, op)
    check_nonsingular_upper(context.cholesky_factor, xp, context.control.singular_tol, op)

    # The right hand side is beta shifted by the means
    mean = parameters[:K]
    solution = xp.solve_triangular(context.cholesky_factor, beta - mean)

    if context.control.check_finite:
        check_finite(solution, xp, "cached solution", op)

    context.cached_solution = solution
    context.cached_beta = xp.copy(beta)

    if context.control.verbose >= 2:
        print(f"  Precomputed solution for beta: max |x| = "
              f"{float(xp.to_numpy(xp.abs(solution)).max()):.3e}")


def _check_cache(context: DistributionContext, beta, op: str):
    """Return ``beta`` as a vector after checking the cache belongs to it."""
    if context.cached_solution is None:
        raise ContractViolation(f"{op} called before sampling_accumulate_precompute")
    beta = as_vector(beta, context.n_attributes, "beta", context, op)
    if context.control.check_stale and not context.xp.array_equal(beta, context.cached_beta):
        raise ContractViolation(
            f"{op}: beta differs from the beta of the last "
            "sampling_accumulate_precompute call"
        )
    return beta


def attribute_gradient_with_respect_to_parameter(
    context: DistributionContext,
    parameters: NDArray,
    beta: NDArray,
    row_index: int,
    col_index: int,
) -> float:
    """Return the (row_index, col_index) entry of d beta / d theta.

    ``row_index`` is a parameter index in ``[0, n_params)``, ``col_index`` a
    beta coordinate in ``[0, K)``.
    """
    op = "attribute_gradient_with_respect_to_parameter"
    K = context.n_attributes
    row_index = check_index(row_index, context.n_params, "row_index", op)
    col_index = check_index(col_index, K, "col_index", op)
    check_setup(parameters, context, op)
    _check_cache(context, beta, op)

    # Upper K x K block is the identity
    if row_index < K:
        return 1.0 if row_index == col_index else 0.0

    # A factor entry touches one beta coordinate only
    nonzero_column_index = int(context.layout.nonzero_column_indices[row_index])
    if col_index != nonzero_column_index:
        return 0.0

    value = float(
        context.cached_solution[
            row_index - int(context.layout.start_indices[row_index]) + nonzero_column_index
        ]
    )
    if context.control.check_finite and not math.isfinite(value):
        raise NonFiniteError(f"{op}: entry ({row_index}, {col_index}) is not finite")
    return value


def beta_jacobian(
    context: DistributionContext,
    parameters: NDArray,
    beta: NDArray,
) -> NDArray:
    """Dense d beta / d theta, shape (n_params, K).

    Intended for verification and small K; estimators should prefer
    ``accumulate_parameter_gradient``.
    """
    op = "beta_jacobian"
    xp = context.xp
    K = context.n_attributes
    layout = context.layout
    check_setup(parameters, context, op)
    _check_cache(context, beta, op)

    J = xp.zeros((context.n_params, K), dtype=xp.float64)
    J[:K, :K] = xp.eye(K, dtype=xp.float64)
    for p in range(K, context.n_params):
        row, col = layout.factor_position(p)
        J[p, row] = context.cached_solution[col]
    return J


def accumulate_parameter_gradient(
    context: DistributionContext,
    parameters: NDArray,
    beta: NDArray,
    grad_beta: NDArray,
) -> NDArray:
    """Chain rule through the draw: ``(d beta / d theta) @ grad_beta``.

    Parameters
    ----------
    grad_beta : ndarray, shape (K,)
        Gradient of a scalar (e.g. a simulated log-probability) with
        respect to beta.

    Returns
    -------
    grad_theta : ndarray, shape (n_params,)
        Gradient of the same scalar with respect to the parameters,
        computed without forming the Jacobian.
    """
    op = "accumulate_parameter_gradient"
    xp = context.xp
    K = context.n_attributes
    layout = context.layout
    check_setup(parameters, context, op)
    _check_cache(context, beta, op)
    grad_beta = as_vector(grad_beta, K, "grad_beta", context, op)

    rows = layout.nonzero_column_indices[K:]
    cols = rows + (np.arange(K, context.n_params) - layout.start_indices[K:])
    rows = xp.array(rows, dtype=xp.int64)
    cols = xp.array(cols, dtype=xp.int64)

    grad_theta = xp.zeros((context.n_params,), dtype=xp.float64)
    grad_theta[:K] = grad_beta
    grad_theta[K:] = grad_beta[rows] * context.cached_solution[cols]

    if context.control.check_finite:
        check_finite(grad_theta, xp, "grad_theta", op)
    return grad_theta
