"""
Exceptions raised by survsim.

All of them derive from ValueError so callers that already guard numerical
code with ``except ValueError`` keep working.
"""


class SurvsimError(ValueError):
    """Base class for survsim errors."""


class InvalidParameterError(SurvsimError):
    """A parameter lies outside its mathematical domain."""


class UnsupportedDistributionError(SurvsimError):
    """The distribution tag is not one of the supported hazard models."""

    def __init__(self, value):
        self.value = value
        super().__init__(
            f"unsupported distribution {value!r}; "
            f"expected one of 'exponential', 'weibull', 'gompertz'"
        )
