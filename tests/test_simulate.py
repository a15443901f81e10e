"""
Tests for drawing survival times.

Tests cover:
- Dispatch to the exponential, Weibull and Gompertz samplers
- Unknown distribution handling (strict and legacy)
- SurvivalTimeSampler construction and reproducibility
"""

import logging
import math
import warnings

import pytest
import numpy as np
from scipy import stats

from survsim.config import SamplerConfig
from survsim.errors import InvalidParameterError, UnsupportedDistributionError
from survsim.hazard_models import Distribution
from survsim.simulate import draw_survival_time, SurvivalTimeSampler
from survsim.survival import rgompertz


class TestDrawSurvivalTime:
    """Tests for draw_survival_time."""

    def test_exponential_unit_rate_mean(self):
        """location=0 gives rate 1, so the mean is close to 1."""
        np.random.seed(42)
        times = [draw_survival_time(0.0, 0.0, "exponential") for _ in range(20000)]
        assert np.mean(times) == pytest.approx(1.0, abs=0.05)

    def test_exponential_uses_mean_one_over_rate(self):
        t = draw_survival_time(math.log(2.0), 0.0, "exponential", rng=np.random.default_rng(3))
        expected = np.random.default_rng(3).exponential(0.5)
        assert t == pytest.approx(expected)

    def test_exponential_ignores_par2(self):
        a = draw_survival_time(0.3, -5.0, "exponential", rng=np.random.default_rng(8))
        b = draw_survival_time(0.3, 5.0, "exponential", rng=np.random.default_rng(8))
        assert a == b

    def test_weibull_distribution(self):
        """Weibull draws follow shape=exp(par2), scale=exp(location)."""
        rng = np.random.default_rng(42)
        samples = [
            draw_survival_time(math.log(2.0), math.log(1.5), "weibull", rng=rng)
            for _ in range(5000)
        ]
        result = stats.kstest(samples, stats.weibull_min(c=1.5, scale=2.0).cdf)
        assert result.pvalue > 0.001

    def test_gompertz_matches_rgompertz(self):
        """Gompertz branch is rgompertz(exp(par2), exp(location))."""
        location, par2 = math.log(0.5), math.log(2.0)
        t = draw_survival_time(location, par2, "gompertz", rng=np.random.default_rng(7))
        expected = rgompertz(2.0, 0.5, rng=np.random.default_rng(7))
        assert t == pytest.approx(expected)

    def test_one_draw_per_call(self, counting_rng):
        """Every branch consumes exactly one variate."""
        for dist in ("exponential", "weibull", "gompertz"):
            counting_rng.calls = 0
            draw_survival_time(0.0, 0.0, dist, rng=counting_rng)
            assert counting_rng.calls == 1

    def test_accepts_enum(self, counting_rng):
        t = draw_survival_time(0.0, 0.0, Distribution.WEIBULL, rng=counting_rng)
        assert t == pytest.approx(0.5)

    def test_returns_float(self):
        t = draw_survival_time(0.0, 0.0, "weibull", rng=np.random.default_rng(0))
        assert type(t) is float

    def test_unknown_distribution_raises(self, counting_rng):
        with pytest.raises(UnsupportedDistributionError, match="unknown"):
            draw_survival_time(0.0, 0.0, "unknown", rng=counting_rng)
        assert counting_rng.calls == 0

    def test_unknown_distribution_legacy_zero(self, counting_rng):
        """strict=False keeps the silent-zero result, with a warning."""
        with pytest.warns(RuntimeWarning, match="Unsupported distribution"):
            t = draw_survival_time(0.0, 0.0, "unknown", rng=counting_rng, strict=False)
        assert t == 0.0
        assert counting_rng.calls == 0

    def test_known_distribution_does_not_warn_when_lenient(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            draw_survival_time(0.0, 0.0, "gompertz", rng=np.random.default_rng(0), strict=False)

    def test_overflowing_parameters_rejected(self):
        """Overflow raises an error naming the log-scale input, without numpy warnings."""
        with warnings.catch_warnings():
            warnings.simplefilter("error")
            with pytest.raises(InvalidParameterError, match="location=1000.0"):
                draw_survival_time(1000.0, 0.0, "exponential")
            with pytest.raises(InvalidParameterError, match="par2=900.0"):
                draw_survival_time(0.0, 900.0, "weibull")

    def test_underflowing_location_rejected(self):
        """A very negative location names location, not the derived rate."""
        for dist in ("exponential", "gompertz"):
            with pytest.raises(InvalidParameterError, match="location=-800.0") as exc_info:
                draw_survival_time(-800.0, 0.0, dist, rng=np.random.default_rng(0))
            assert "rate" not in str(exc_info.value)

    def test_small_location_still_draws(self):
        """Locations whose exp() stays in the normal float range are sampled."""
        t = draw_survival_time(-700.0, 0.0, "gompertz", rng=np.random.default_rng(0))
        assert math.isfinite(t)
        assert t > 600.0

    def test_lenient_mode_matches_tag_exactly(self, counting_rng):
        """With strict=False, a differently cased tag falls back to 0.0."""
        with pytest.warns(RuntimeWarning, match="Exponential"):
            t = draw_survival_time(0.0, 0.0, "Exponential", rng=counting_rng, strict=False)
        assert t == 0.0
        assert counting_rng.calls == 0

        t = draw_survival_time(0.0, 0.0, Distribution.WEIBULL, rng=counting_rng, strict=False)
        assert t == pytest.approx(0.5)

    def test_strict_mode_is_case_insensitive(self, counting_rng):
        t = draw_survival_time(0.0, 0.0, "Exponential", rng=counting_rng)
        assert t == pytest.approx(0.5)

    def test_logs_dispatch(self, caplog):
        with caplog.at_level(logging.DEBUG, logger="survsim.simulate"):
            draw_survival_time(0.0, 0.0, "gompertz", rng=np.random.default_rng(0))
        assert "Drawing gompertz survival time" in caplog.text


class TestSurvivalTimeSampler:
    """Tests for SurvivalTimeSampler."""

    def test_defaults_to_gompertz(self):
        sampler = SurvivalTimeSampler()
        assert sampler.distribution is Distribution.GOMPERTZ
        assert sampler.strict is True

    def test_parses_distribution(self):
        sampler = SurvivalTimeSampler(distribution="Weibull")
        assert sampler.distribution is Distribution.WEIBULL

    def test_rejects_unknown_when_strict(self):
        with pytest.raises(UnsupportedDistributionError):
            SurvivalTimeSampler(distribution="unknown")

    def test_lenient_unknown_returns_zero(self):
        sampler = SurvivalTimeSampler(distribution="unknown", strict=False)
        with pytest.warns(RuntimeWarning):
            assert sampler.draw(0.0, 0.0) == 0.0

    def test_draw_delegates(self):
        sampler = SurvivalTimeSampler("gompertz", rng=np.random.default_rng(5))
        expected = draw_survival_time(0.2, 0.1, "gompertz", rng=np.random.default_rng(5))
        assert sampler.draw(0.2, 0.1) == expected

    def test_from_config_is_reproducible(self):
        config = SamplerConfig(distribution="weibull", seed=123)
        first = SurvivalTimeSampler.from_config(config)
        second = SurvivalTimeSampler.from_config(config)

        a = [first.draw(0.0, 0.5) for _ in range(5)]
        b = [second.draw(0.0, 0.5) for _ in range(5)]
        assert a == b
        assert first.distribution is Distribution.WEIBULL

    def test_from_config_without_seed_uses_global_state(self):
        sampler = SurvivalTimeSampler.from_config(SamplerConfig(distribution="exponential"))
        assert sampler.rng is None

        np.random.seed(9)
        a = sampler.draw(0.0)
        np.random.seed(9)
        b = sampler.draw(0.0)
        assert a == b

    def test_from_config_rejects_invalid(self):
        with pytest.raises(InvalidParameterError, match="Invalid sampler config"):
            SurvivalTimeSampler.from_config(SamplerConfig(distribution="unknown"))
