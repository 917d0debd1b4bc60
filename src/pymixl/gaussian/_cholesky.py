"""Cholesky factor assembly from the parameter vector."""

from __future__ import annotations

from numpy.typing import NDArray

from pymixl.backend._array_api import array_namespace
from pymixl.gaussian._context import DistributionContext, as_vector
from pymixl.gaussian._layout import ParameterLayout, count_params, iter_cholesky_slots
from pymixl.packing._triu import vectriu
from pymixl.utils._validation import ContractViolation, check_length


def build_cholesky_factor(parameters: NDArray, layout: ParameterLayout, *, xp=None) -> NDArray:
    """Materialize the K x K upper-triangular factor held by ``parameters``.

    Slot ``i`` of the Cholesky block (parameter ``K + i``) goes to
    ``(row, row + i - row_start)``; everything below the diagonal is zero.
    """
    if xp is None:
        xp = array_namespace(parameters)
    parameters = xp.array(parameters, dtype=xp.float64)
    K = layout.n_attributes
    check_length(parameters, layout.n_params, "parameters", "build_cholesky_factor")

    U = xp.zeros((K, K), dtype=xp.float64)
    for i, row, row_start in iter_cholesky_slots(K):
        U[row, row + i - row_start] = parameters[K + i]
    return U


def setup_distribution(parameters: NDArray, context: DistributionContext) -> None:
    """Rebuild the factor for new parameters.

    Must be called whenever the parameter vector changes, before any draw
    or gradient query. Invalidates the cached solution of the previous draw.
    """
    parameters = as_vector(
        parameters, context.n_params, "parameters", context, "setup_distribution"
    )
    context.cholesky_factor = build_cholesky_factor(
        parameters, context.layout, xp=context.xp
    )
    context.setup_parameters = context.xp.copy(parameters)
    context.invalidate()

    if context.control.verbose >= 2:
        xp = context.xp
        diag = xp.to_numpy(xp.abs(xp.diagonal(context.cholesky_factor)))
        print(f"  Cholesky factor set up: K={context.n_attributes}, "
              f"min |U[j,j]| = {diag.min():.3e}")


def pack_parameters(mean: NDArray, factor: NDArray, *, xp=None) -> NDArray:
    """Build a parameter vector from a mean and an upper-triangular factor.

    Inverse of ``setup_distribution``: entries of ``factor`` below the
    diagonal are ignored.
    """
    if xp is None:
        xp = array_namespace(mean, factor)
    mean = xp.array(mean, dtype=xp.float64)
    factor = xp.array(factor, dtype=xp.float64)
    if len(mean.shape) != 1:
        raise ContractViolation(
            f"pack_parameters: mean must be a vector, got shape {tuple(mean.shape)}"
        )
    K = mean.shape[0]
    if tuple(factor.shape) != (K, K):
        raise ContractViolation(
            f"pack_parameters: factor must have shape ({K}, {K}), "
            f"got {tuple(factor.shape)}"
        )

    theta = xp.zeros((count_params(K),), dtype=xp.float64)
    theta[:K] = mean
    theta[K:] = vectriu(factor, xp=xp)
    return theta


def covariance_matrix(context: DistributionContext) -> NDArray:
    """Covariance of beta, U U^T, for the current factor."""
    if context.cholesky_factor is None:
        raise ContractViolation(
            "covariance_matrix called before setup_distribution"
        )
    xp = context.xp
    U = context.cholesky_factor
    return xp.matmul(U, xp.transpose(U))
