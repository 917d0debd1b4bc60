"""Gaussian mixing distribution for simulated mixed-logit estimation.

Call order: ``init`` once per attribute dimension, ``setup_distribution``
whenever the parameters change, then per simulation draw ``draw_beta``,
``sampling_accumulate_precompute`` and any number of
``attribute_gradient_with_respect_to_parameter`` queries.
"""

from pymixl.gaussian._control import GaussianControl
from pymixl.gaussian._layout import (
    ParameterLayout,
    build_layout,
    count_cholesky_entries,
    count_params,
)
from pymixl.gaussian._context import DistributionContext, init
from pymixl.gaussian._cholesky import (
    build_cholesky_factor,
    covariance_matrix,
    pack_parameters,
    setup_distribution,
)
from pymixl.gaussian._random import (
    GaussianSource,
    HaltonGaussianSource,
    NumpyGaussianSource,
)
from pymixl.gaussian._sampler import draw_beta, draw_betas
from pymixl.gaussian._jacobian import (
    accumulate_parameter_gradient,
    attribute_gradient_with_respect_to_parameter,
    beta_jacobian,
    sampling_accumulate_precompute,
)
from pymixl.gaussian._verify import JacobianCheckResult, check_jacobian
from pymixl.gaussian._summary import parameter_table

__all__ = [
    "GaussianControl",
    "ParameterLayout",
    "build_layout",
    "count_params",
    "count_cholesky_entries",
    "DistributionContext",
    "init",
    "build_cholesky_factor",
    "setup_distribution",
    "pack_parameters",
    "covariance_matrix",
    "GaussianSource",
    "NumpyGaussianSource",
    "HaltonGaussianSource",
    "draw_beta",
    "draw_betas",
    "sampling_accumulate_precompute",
    "attribute_gradient_with_respect_to_parameter",
    "beta_jacobian",
    "accumulate_parameter_gradient",
    "JacobianCheckResult",
    "check_jacobian",
    "parameter_table",
]
