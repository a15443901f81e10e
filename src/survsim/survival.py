"""
Parametric survival models for simulating event times.

Each model implements:
- sample(rng) -> float: draw one time to event
- survival(t) -> float: S(t) = P(T > t)
- hazard(t) -> float: h(t) = f(t) / S(t)
- quantile(p) -> float: F^{-1}(p)

The Gompertz distribution is also exposed as plain functions
(qgompertz, pgompertz, rgompertz) for callers that only need scalars.
"""

from abc import ABC, abstractmethod
from typing import Optional

import numpy as np
from scipy import stats
from scipy.optimize import brentq

from .errors import InvalidParameterError


# Returned by qgompertz when no finite time reaches the requested probability.
UNBOUNDED = float('inf')

INVERSE_METHODS = ('auto', 'numerical')


def is_unbounded(q: float) -> bool:
    """True if q is the UNBOUNDED quantile sentinel."""
    return bool(np.isposinf(q))


def _resolve_rng(rng):
    """Use numpy's global random state unless a Generator is supplied."""
    return np.random if rng is None else rng


def _check_positive(name: str, value: float) -> None:
    if not (np.isfinite(value) and value > 0):
        raise InvalidParameterError(f"{name} must be finite and positive, got {value}")


def _check_finite(name: str, value: float) -> None:
    if not np.isfinite(value):
        raise InvalidParameterError(f"{name} must be finite, got {value}")


def _check_probability(p: float) -> None:
    if not 0 <= p <= 1:
        raise InvalidParameterError(f"p must be in [0, 1], got {p}")


def _check_gompertz(shape: float, rate: float) -> None:
    _check_finite("shape", shape)
    _check_positive("rate", rate)


# -----------------------------------------------------------------------------
# Gompertz distribution
# -----------------------------------------------------------------------------

def _gompertz_cumulative_hazard(t: float, shape: float, rate: float) -> float:
    """H(t) = rate/shape * (exp(shape*t) - 1), or rate*t when shape == 0."""
    if shape == 0:
        return rate * t
    return rate / shape * np.expm1(shape * t)


def qgompertz(p: float, shape: float, rate: float) -> float:
    """
    Gompertz quantile function.

    Solves F(q) = p for F(t) = 1 - exp(-rate/shape * (exp(shape*t) - 1)).

    - shape == 0: the exponential quantile -ln(1 - p) / rate
    - shape < 0: UNBOUNDED
    - shape > 0: ln(1 - shape * ln(1 - p) / rate) / shape

    p == 1 gives UNBOUNDED for every shape.

    Raises:
        InvalidParameterError: p outside [0, 1], non-positive rate or
            non-finite shape.
    """
    _check_probability(p)
    _check_gompertz(shape, rate)

    if p == 1:
        return UNBOUNDED
    if shape == 0:
        return float(stats.expon.ppf(p) / rate)
    if shape < 0:
        return UNBOUNDED

    x = -np.log1p(-p)
    with np.errstate(over='ignore'):
        ratio = shape * x / rate
    if np.isfinite(ratio):
        return float(np.log1p(ratio) / shape)
    # Tiny rate: log1p(ratio) == log(ratio) to double precision.
    return float((np.log(shape) + np.log(x) - np.log(rate)) / shape)


def pgompertz(q: float, shape: float, rate: float) -> float:
    """
    Gompertz distribution function F(q).

    For shape < 0 the distribution is defective: F tends to
    1 - exp(rate / shape) < 1 as q grows.
    """
    _check_gompertz(shape, rate)
    if q <= 0:
        return 0.0
    return float(-np.expm1(-_gompertz_cumulative_hazard(q, shape, rate)))


def rgompertz(shape: float, rate: float, rng: Optional[np.random.Generator] = None) -> float:
    """
    Draw one Gompertz variate by inverse-transform sampling.

    Exactly one uniform draw on [0, 1) is consumed per call.

    Args:
        shape: Gompertz shape parameter
        rate: Gompertz rate parameter (> 0)
        rng: numpy Generator; defaults to the global np.random state
    """
    _check_gompertz(shape, rate)
    u = _resolve_rng(rng).uniform(0.0, 1.0)
    return qgompertz(u, shape, rate)


# -----------------------------------------------------------------------------
# Model classes
# -----------------------------------------------------------------------------

class SurvivalModel(ABC):
    """Base class for survival models."""

    @abstractmethod
    def sample(self, rng=None) -> float:
        """Sample time to event."""
        pass

    @abstractmethod
    def survival(self, t: float) -> float:
        """Survival function S(t) = P(T > t)."""
        pass

    def hazard(self, t: float) -> float:
        """Hazard function h(t). Default uses numerical approximation."""
        eps = 1e-6
        s_t = self.survival(t)
        if s_t < eps:
            return float('inf')
        s_t_eps = self.survival(t + eps)
        return -(s_t_eps - s_t) / (eps * s_t)

    @abstractmethod
    def quantile(self, p: float) -> float:
        """Quantile function F^{-1}(p) for p in [0, 1]."""
        pass

    def cdf(self, t: float) -> float:
        """Cumulative distribution function F(t) = P(T <= t) = 1 - S(t)."""
        return 1.0 - self.survival(t)

    def inverse_survival(self, u: float, method: str = 'auto') -> float:
        """
        Inverse survival function: find t such that S(t) = u.

        Args:
            u: Target survival probability in (0, 1]
            method: 'auto' uses the closed-form quantile,
                'numerical' uses root-finding on S(t)

        Returns:
            Time t where S(t) = u
        """
        if method not in INVERSE_METHODS:
            raise ValueError(
                f"method must be one of {INVERSE_METHODS}, got '{method}'"
            )
        if method == 'numerical':
            return self._inverse_survival_numerical(u)

        if u <= 0:
            return float('inf')
        if u >= 1:
            return 0.0
        return self.quantile(1.0 - u)

    def _inverse_survival_numerical(self, u: float) -> float:
        """Numerical inverse using root-finding. For internal use."""
        if u <= 0:
            return float('inf')
        if u >= 1:
            return 0.0

        t_upper = 1.0
        while self.survival(t_upper) > u and t_upper < 1e10:
            t_upper *= 2
        if t_upper >= 1e10:
            return float('inf')

        return brentq(lambda t: self.survival(t) - u, 0, t_upper)


class Weibull(SurvivalModel):
    """
    Weibull distribution.

    shape (k): < 1 decreasing hazard, = 1 constant (exponential), > 1 increasing
    scale (λ): characteristic time
    """

    def __init__(self, shape: float, scale: float):
        _check_positive("shape", shape)
        _check_positive("scale", scale)
        self.shape = shape  # k
        self.scale = scale  # λ

    def sample(self, rng=None) -> float:
        return self.scale * _resolve_rng(rng).weibull(self.shape)

    def survival(self, t: float) -> float:
        if t < 0:
            return 1.0
        return float(np.exp(-((t / self.scale) ** self.shape)))

    def hazard(self, t: float) -> float:
        if t <= 0:
            return 0.0 if self.shape > 1 else float('inf') if self.shape < 1 else 1.0 / self.scale
        return (self.shape / self.scale) * ((t / self.scale) ** (self.shape - 1))

    def quantile(self, p: float) -> float:
        """Closed form: t = λ * (-ln(1 - p))^(1/k)"""
        _check_probability(p)
        if p == 1:
            return float('inf')
        return float(self.scale * ((-np.log1p(-p)) ** (1.0 / self.shape)))

    def __repr__(self) -> str:
        return f"Weibull(shape={self.shape!r}, scale={self.scale!r})"


class Exponential(Weibull):
    """Exponential distribution (memoryless). Special case of Weibull with shape=1."""

    def __init__(self, rate: float):
        _check_positive("rate", rate)
        super().__init__(shape=1.0, scale=1.0 / rate)
        self.rate = rate

    def sample(self, rng=None) -> float:
        return _resolve_rng(rng).exponential(1.0 / self.rate)

    def hazard(self, t: float) -> float:
        return self.rate if t >= 0 else 0.0

    def __repr__(self) -> str:
        return f"Exponential(rate={self.rate!r})"


class Gompertz(SurvivalModel):
    """
    Gompertz distribution.

    h(t) = rate * exp(shape * t)

    shape (b): > 0 increasing hazard, = 0 constant (exponential),
        < 0 decaying hazard with a cure fraction exp(rate / shape)
    rate (a): hazard at t = 0

    For shape < 0 quantile() returns UNBOUNDED for every p, while the
    numerical inverse_survival finds the finite time when one exists.
    """

    def __init__(self, shape: float, rate: float):
        _check_gompertz(shape, rate)
        self.shape = shape
        self.rate = rate

    def sample(self, rng=None) -> float:
        return rgompertz(self.shape, self.rate, rng)

    def survival(self, t: float) -> float:
        if t < 0:
            return 1.0
        return float(np.exp(-_gompertz_cumulative_hazard(t, self.shape, self.rate)))

    def cdf(self, t: float) -> float:
        return pgompertz(t, self.shape, self.rate)

    def hazard(self, t: float) -> float:
        if t < 0:
            return 0.0
        return float(self.rate * np.exp(self.shape * t))

    def quantile(self, p: float) -> float:
        return qgompertz(p, self.shape, self.rate)

    def __repr__(self) -> str:
        return f"Gompertz(shape={self.shape!r}, rate={self.rate!r})"
