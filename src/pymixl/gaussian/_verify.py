"""Finite-difference verification of the beta Jacobian."""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np
from numpy.typing import NDArray

from pymixl.backend._array_api import get_backend
from pymixl.gaussian._cholesky import build_cholesky_factor
from pymixl.gaussian._context import DistributionContext, as_vector
from pymixl.gaussian._jacobian import beta_jacobian


@dataclass
class JacobianCheckResult:
    """Outcome of ``check_jacobian``.

    Attributes
    ----------
    analytic : NDArray, shape (n_params, K)
        Jacobian from the cached solution.
    numerical : NDArray, shape (n_params, K)
        Central finite-difference Jacobian.
    max_abs_error : float
        Largest absolute entry-wise difference.
    passed : bool
        Whether the two agree within ``rtol``/``atol``.
    """

    analytic: NDArray
    numerical: NDArray
    max_abs_error: float
    passed: bool


def check_jacobian(
    context: DistributionContext,
    parameters: NDArray,
    beta: NDArray,
    *,
    eps: float = 1e-7,
    rtol: float = 1e-5,
    atol: float = 1e-6,
) -> JacobianCheckResult:
    """Compare ``beta_jacobian`` against central finite differences.

    The draw is held fixed through its standard normals: ``z`` is solved
    afresh from ``beta`` (independently of the cache) and
    ``beta(theta) = U(theta) z + mean(theta)`` is differentiated numerically
    one parameter at a time. Requires ``sampling_accumulate_precompute`` for
    ``beta``.
    """
    xp = context.xp
    K = context.n_attributes
    layout = context.layout
    analytic = np.asarray(xp.to_numpy(beta_jacobian(context, parameters, beta)))

    theta = np.array(
        xp.to_numpy(as_vector(parameters, context.n_params, "parameters", context, "check_jacobian")),
        dtype=np.float64,
    )
    beta_np = np.asarray(
        xp.to_numpy(as_vector(beta, K, "beta", context, "check_jacobian")), dtype=np.float64
    )
    xp_np = get_backend("numpy")
    z = np.linalg.solve(build_cholesky_factor(theta, layout, xp=xp_np), beta_np - theta[:K])

    def draw_at(t):
        return build_cholesky_factor(t, layout, xp=xp_np) @ z + t[:K]

    numerical = np.zeros_like(analytic)
    for p in range(context.n_params):
        t_plus = theta.copy()
        t_minus = theta.copy()
        t_plus[p] += eps
        t_minus[p] -= eps
        numerical[p] = (draw_at(t_plus) - draw_at(t_minus)) / (2 * eps)

    max_abs_error = float(np.max(np.abs(analytic - numerical)))
    passed = bool(np.allclose(analytic, numerical, rtol=rtol, atol=atol))

    if context.control.verbose >= 1:
        status = "passed" if passed else "FAILED"
        print(f"  Jacobian check {status}: {context.n_params} x {K} entries, "
              f"max abs error = {max_abs_error:.2e}")

    return JacobianCheckResult(
        analytic=analytic,
        numerical=numerical,
        max_abs_error=max_abs_error,
        passed=passed,
    )
