"""
Hazard models parameterized on the linear-predictor scale.

Regression models produce a log-scale linear predictor (``location``) and a
log-scale ancillary parameter (``par2``). natural_parameters() maps them onto
the natural scale of each distribution:

    exponential: rate = exp(location)
    weibull:     shape = exp(par2), scale = exp(location)
    gompertz:    shape = exp(par2), rate = exp(location)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Union

import numpy as np

from .errors import InvalidParameterError, UnsupportedDistributionError
from .survival import SurvivalModel, Exponential, Weibull, Gompertz


class Distribution(str, Enum):
    """Supported parametric hazard models."""
    EXPONENTIAL = "exponential"
    WEIBULL = "weibull"
    GOMPERTZ = "gompertz"

    @classmethod
    def parse(cls, value: Union["Distribution", str]) -> "Distribution":
        """
        Resolve a Distribution from a member or a case-insensitive name.

        Raises:
            UnsupportedDistributionError: for any other value
        """
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls(value.strip().lower())
            except ValueError:
                pass
        raise UnsupportedDistributionError(value)


@dataclass(frozen=True)
class NaturalParameters:
    """Natural-scale parameters; fields a distribution does not use are None."""
    distribution: Distribution
    rate: Optional[float] = None
    shape: Optional[float] = None
    scale: Optional[float] = None


def _natural_scale(name: str, value: float) -> float:
    """exp(value), rejecting values that leave the normal float range."""
    with np.errstate(over='ignore', under='ignore'):
        result = float(np.exp(value))
    if not (np.isfinite(result) and result >= np.finfo(float).tiny):
        raise InvalidParameterError(
            f"{name}={value} has no finite positive natural-scale value (exp({name}) = {result})"
        )
    return result


def natural_parameters(
    location: float,
    par2: float,
    dist: Union[Distribution, str]
) -> NaturalParameters:
    """
    Exponentiate log-scale parameters for the given distribution.

    par2 is not used by the exponential model.
    """
    distribution = Distribution.parse(dist)

    if distribution is Distribution.EXPONENTIAL:
        return NaturalParameters(distribution, rate=_natural_scale("location", location))

    elif distribution is Distribution.WEIBULL:
        return NaturalParameters(
            distribution,
            shape=_natural_scale("par2", par2),
            scale=_natural_scale("location", location),
        )

    return NaturalParameters(
        distribution,
        shape=_natural_scale("par2", par2),
        rate=_natural_scale("location", location),
    )


def model_from_parameters(params: NaturalParameters) -> SurvivalModel:
    """Build the survival model described by natural-scale parameters."""
    distribution = Distribution.parse(params.distribution)

    if distribution is Distribution.EXPONENTIAL:
        return Exponential(params.rate)
    elif distribution is Distribution.WEIBULL:
        return Weibull(params.shape, params.scale)
    return Gompertz(params.shape, params.rate)


def make_survival_model(
    location: float,
    par2: float,
    dist: Union[Distribution, str]
) -> SurvivalModel:
    """Survival model for a log-scale linear predictor and ancillary parameter."""
    return model_from_parameters(natural_parameters(location, par2, dist))
