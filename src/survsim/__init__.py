"""
survsim - Random survival times under exponential, Weibull and Gompertz hazards.
"""

from .errors import (
    SurvsimError,
    InvalidParameterError,
    UnsupportedDistributionError,
)

from .survival import (
    UNBOUNDED,
    is_unbounded,
    qgompertz,
    pgompertz,
    rgompertz,
    SurvivalModel,
    Weibull,
    Exponential,
    Gompertz,
)

from .hazard_models import (
    Distribution,
    NaturalParameters,
    natural_parameters,
    model_from_parameters,
    make_survival_model,
)

from .config import (
    DEFAULT_SAMPLER_PARAMS,
    SamplerConfig,
)

from .simulate import (
    draw_survival_time,
    SurvivalTimeSampler,
)

__all__ = [
    # Errors
    "SurvsimError",
    "InvalidParameterError",
    "UnsupportedDistributionError",
    # Gompertz functions
    "UNBOUNDED",
    "is_unbounded",
    "qgompertz",
    "pgompertz",
    "rgompertz",
    # Survival models
    "SurvivalModel",
    "Weibull",
    "Exponential",
    "Gompertz",
    # Hazard models
    "Distribution",
    "NaturalParameters",
    "natural_parameters",
    "model_from_parameters",
    "make_survival_model",
    # Config
    "DEFAULT_SAMPLER_PARAMS",
    "SamplerConfig",
    # Simulation
    "draw_survival_time",
    "SurvivalTimeSampler",
]
