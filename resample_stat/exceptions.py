# pyre-unsafe
"""Exception hierarchy for resample_stat.

All exceptions inherit from ResampleStatError so callers can catch any
library-specific error. Input problems are also ValueErrors.

Exceptions raised by caller-supplied statistics are never wrapped:
they propagate unmodified and abort the current operation.
"""


class ResampleStatError(Exception):
    """Base exception for all resample_stat errors."""


class ValidationError(ResampleStatError, ValueError):
    """Caller input failed validation."""


class InvalidSampleSize(ValidationError):
    """Sample size is not a positive integer, or exceeds the
    population size when sampling without replacement."""


class SizeMismatch(ValidationError):
    """Group sizes do not partition the pooled data."""


class InvalidTrialCount(ValidationError):
    """Number of Monte Carlo trials is not a positive integer."""


class InvalidConfidenceLevel(ValidationError):
    """Confidence level is not strictly between 0 and 1."""


class InsufficientSampleSize(ValidationError):
    """Sample is too small for the requested computation.

    Attributes
    ----------
     n : int or None
        Size of the offending sample.
     minimum : int or None
        Smallest size for which the computation is defined.

    """

    def __init__(
        self, message: str, n: int | None = None, minimum: int | None = None
    ) -> None:
        super().__init__(message)
        self.n = n
        self.minimum = minimum


class StatisticFunctionError(ResampleStatError):
    """A statistic returned a value that cannot enter a sampling
    distribution: not numeric, not a scalar or 1-d vector, a shape
    different from earlier trials, or a model fit that did not
    converge."""
