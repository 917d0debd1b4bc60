"""Gaussian distribution control structure.

Modelled on the model control structures of the estimators that consume
this distribution: one dataclass holding every knob of a context.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal


@dataclass
class GaussianControl:
    """Control structure for a Gaussian mixing distribution context.

    Attributes
    ----------
    backend : str
        Array backend for the factor, draws and solves: "numpy" or "torch".
        Ignored when an explicit ``xp`` is passed to ``init``.
    singular_tol : float
        A factor diagonal entry with magnitude at or below this value makes
        the factor singular (SingularFactorError on draw and precompute).
    check_finite : bool
        If True, raise NonFiniteError when a draw, cached solution or
        gradient entry is NaN or infinite.
    check_stale : bool
        If True, parameters that differ from those of the last
        ``setup_distribution`` call, or a gradient query whose beta differs
        from the beta given to the last precompute, raise ContractViolation.
    verbose : int
        Verbosity: 0=silent, 1=summary (gradient checks), 2=per-call.
    """

    backend: Literal["numpy", "torch"] = "numpy"
    singular_tol: float = 1e-12
    check_finite: bool = True
    check_stale: bool = True
    verbose: int = 0
