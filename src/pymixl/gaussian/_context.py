"""Distribution context: the mutable state shared by all operations."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from numpy.typing import NDArray

from pymixl.backend._array_api import get_backend
from pymixl.gaussian._control import GaussianControl
from pymixl.gaussian._layout import ParameterLayout, build_layout
from pymixl.utils._validation import ContractViolation, check_length


@dataclass
class DistributionContext:
    """State of one Gaussian mixing distribution.

    The layout is fixed at ``init``. ``cholesky_factor`` (and the parameters
    it was built from) is rebuilt by ``setup_distribution`` on every
    parameter change, ``cached_solution``
    (and the beta it belongs to) by ``sampling_accumulate_precompute`` on
    every draw. A context is not safe for unsynchronized concurrent use;
    give each worker its own.
    """

    layout: ParameterLayout
    control: GaussianControl = field(default_factory=GaussianControl)
    xp: Any = None
    cholesky_factor: NDArray | None = None
    setup_parameters: NDArray | None = None
    cached_solution: NDArray | None = None
    cached_beta: NDArray | None = None

    @property
    def n_attributes(self) -> int:
        return self.layout.n_attributes

    @property
    def n_params(self) -> int:
        return self.layout.n_params

    def invalidate(self) -> None:
        """Forget the cached solution, e.g. after the parameters changed."""
        self.cached_solution = None
        self.cached_beta = None


def init(
    n_attributes: int,
    control: GaussianControl | None = None,
    *,
    xp=None,
) -> tuple[int, DistributionContext]:
    """Create a context for ``n_attributes`` random coefficients.

    Parameters
    ----------
    n_attributes : int
        K >= 1.
    control : GaussianControl or None
        Context settings. Defaults to ``GaussianControl()``.
    xp : backend, optional
        Array backend; overrides ``control.backend``.

    Returns
    -------
    n_params : int
        Length of the parameter vector, K*(K+3)/2.
    context : DistributionContext
    """
    if control is None:
        control = GaussianControl()
    if xp is None:
        xp = get_backend(control.backend)

    layout = build_layout(n_attributes)
    return layout.n_params, DistributionContext(layout=layout, control=control, xp=xp)


def as_vector(v, length: int, name: str, context: DistributionContext, operation: str):
    """Convert ``v`` to a float64 vector of the context backend and check its length.

    NumPy float64 input is returned as is, so slices of the result are views
    of the caller's array.
    """
    xp = context.xp
    v = xp.array(v, dtype=xp.float64)
    check_length(v, length, name, operation)
    return v


def check_setup(parameters, context: DistributionContext, operation: str):
    """Return ``parameters`` as a vector after checking the factor was built from them.

    With ``control.check_stale`` set, parameters that differ from those of
    the last ``setup_distribution`` call raise ContractViolation.
    """
    if context.cholesky_factor is None:
        raise ContractViolation(f"{operation} called before setup_distribution")
    parameters = as_vector(parameters, context.n_params, "parameters", context, operation)
    if context.control.check_stale and not context.xp.array_equal(
        parameters, context.setup_parameters
    ):
        raise ContractViolation(
            f"{operation}: parameters differ from those of the last "
            "setup_distribution call"
        )
    return parameters
