"""pymixl: Gaussian mixing distribution for simulated mixed-logit estimation."""

from pymixl.gaussian import (
    DistributionContext,
    GaussianControl,
    HaltonGaussianSource,
    NumpyGaussianSource,
    attribute_gradient_with_respect_to_parameter,
    draw_beta,
    init,
    sampling_accumulate_precompute,
    setup_distribution,
)
from pymixl.utils import ContractViolation, NonFiniteError, SingularFactorError

__version__ = "0.1.0"

__all__ = [
    "init",
    "setup_distribution",
    "draw_beta",
    "sampling_accumulate_precompute",
    "attribute_gradient_with_respect_to_parameter",
    "DistributionContext",
    "GaussianControl",
    "NumpyGaussianSource",
    "HaltonGaussianSource",
    "ContractViolation",
    "SingularFactorError",
    "NonFiniteError",
]
