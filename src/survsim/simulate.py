"""
Draw random survival times under exponential, Weibull or Gompertz hazards.

Each draw:
1. Resolves the distribution tag
2. Exponentiates the log-scale parameters (see hazard_models)
3. Samples exactly one variate from the resulting model
"""

from dataclasses import dataclass
from typing import Optional, Union
import logging
import warnings

import numpy as np

from .config import SamplerConfig
from .errors import InvalidParameterError
from .hazard_models import Distribution, make_survival_model

logger = logging.getLogger(__name__)


def draw_survival_time(
    location: float,
    par2: float,
    dist: Union[Distribution, str],
    rng: Optional[np.random.Generator] = None,
    strict: bool = True
) -> float:
    """
    Draw one random survival time.

    Args:
        location: Log-scale linear predictor (log rate, or log scale for Weibull)
        par2: Log-scale ancillary parameter (log shape; unused for exponential)
        dist: 'exponential', 'weibull' or 'gompertz' (or a Distribution)
        rng: numpy Generator; defaults to the global np.random state
        strict: If True, dist is matched case-insensitively and an unknown
            dist raises. If False, dist must match a lowercase name exactly;
            anything else returns 0.0 with a RuntimeWarning

    Returns:
        Survival time (may be inf for defective distributions)

    Raises:
        UnsupportedDistributionError: unknown dist with strict=True
        InvalidParameterError: exp(location) or exp(par2) overflows or
            underflows the float range
    """
    try:
        distribution = Distribution.parse(dist) if strict else Distribution(dist)
    except ValueError:
        if strict:
            raise
        warnings.warn(
            f"Unsupported distribution {dist!r}; returning 0.0. "
            f"Pass strict=True to raise instead.",
            RuntimeWarning,
            stacklevel=2
        )
        return 0.0

    model = make_survival_model(location, par2, distribution)
    logger.debug(
        "Drawing %s survival time from %r (location=%s, par2=%s)",
        distribution.value, model, location, par2
    )
    return float(model.sample(rng))


@dataclass
class SurvivalTimeSampler:
    """
    Survival time sampler bound to one distribution and random source.

    Example:
        sampler = SurvivalTimeSampler.from_config(SamplerConfig(seed=1))
        times = [sampler.draw(location=lp) for lp in linear_predictors]
    """
    distribution: Union[Distribution, str] = Distribution.GOMPERTZ
    rng: Optional[np.random.Generator] = None
    strict: bool = True

    def __post_init__(self):
        if self.strict:
            self.distribution = Distribution.parse(self.distribution)

    @classmethod
    def from_config(cls, config: SamplerConfig) -> 'SurvivalTimeSampler':
        errors = config.validate()
        if errors:
            raise InvalidParameterError(f"Invalid sampler config: {errors}")
        return cls(
            distribution=config.distribution,
            rng=config.make_rng(),
            strict=config.strict,
        )

    def draw(self, location: float, par2: float = 0.0) -> float:
        """Draw one survival time for the given log-scale parameters."""
        return draw_survival_time(
            location, par2, self.distribution, rng=self.rng, strict=self.strict
        )
