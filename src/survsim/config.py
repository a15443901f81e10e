"""
Sampler configuration.

survsim reads nothing from the environment; configuration is a plain
dataclass built from keyword arguments or a mapping.
"""

from dataclasses import dataclass, fields, asdict
from typing import Any, Dict, List, Mapping, Optional
import logging

import numpy as np

from .errors import InvalidParameterError, UnsupportedDistributionError
from .hazard_models import Distribution

logger = logging.getLogger(__name__)


DEFAULT_SAMPLER_PARAMS = dict(
    distribution=Distribution.GOMPERTZ.value,
    seed=None,
    strict=True,
)


@dataclass
class SamplerConfig:
    """
    Settings for a SurvivalTimeSampler.

    distribution: hazard model name ('exponential', 'weibull', 'gompertz')
    seed: seed for a dedicated numpy Generator; None uses the global state
    strict: raise on unknown distributions instead of returning 0.0
    """
    distribution: str = DEFAULT_SAMPLER_PARAMS['distribution']
    seed: Optional[int] = DEFAULT_SAMPLER_PARAMS['seed']
    strict: bool = DEFAULT_SAMPLER_PARAMS['strict']

    @classmethod
    def from_dict(cls, params: Mapping[str, Any]) -> 'SamplerConfig':
        """Build from a mapping; unknown keys are rejected."""
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(params) - known)
        if unknown:
            raise InvalidParameterError(f"Unknown sampler config keys: {unknown}")
        return cls(**dict(params))

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    def validate(self) -> List[str]:
        """Return a list of configuration errors (empty if valid)."""
        errors = []

        try:
            Distribution.parse(self.distribution)
        except UnsupportedDistributionError as exc:
            if self.strict:
                errors.append(str(exc))

        if self.seed is not None and (
            isinstance(self.seed, bool) or not isinstance(self.seed, (int, np.integer))
        ):
            errors.append(f"seed must be an integer or None, got {self.seed!r}")
        elif self.seed is not None and self.seed < 0:
            errors.append(f"seed must be non-negative, got {self.seed}")

        if not isinstance(self.strict, bool):
            errors.append(f"strict must be a bool, got {self.strict!r}")

        return errors

    def make_rng(self) -> Optional[np.random.Generator]:
        """Dedicated Generator when seeded, otherwise None (global state)."""
        if self.seed is None:
            return None
        logger.debug("Seeding sampler generator with %d", self.seed)
        return np.random.default_rng(self.seed)
