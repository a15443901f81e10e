"""Shared test helpers."""

import pytest


class CountingRng:
    """Stand-in random source returning fixed values and counting draws."""

    def __init__(self, value: float = 0.5):
        self.value = value
        self.calls = 0

    def uniform(self, low=0.0, high=1.0):
        self.calls += 1
        return low + self.value * (high - low)

    def exponential(self, scale=1.0):
        self.calls += 1
        return self.value * scale

    def weibull(self, a):
        self.calls += 1
        return self.value


@pytest.fixture
def counting_rng():
    return CountingRng()
