# pyre-unsafe
"""Result records returned by the estimators.

Frozen dataclasses with the statistic values as numpy scalars or
arrays. Vector-valued statistics give per-component arrays wherever a
scalar statistic gives a float.
"""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np
import numpy.typing as npt

if TYPE_CHECKING:
    from resample_stat.distributions import SamplingDistribution


@dataclass(frozen=True, eq=False)
class ConfidenceInterval:
    """Two-sided confidence interval.

    Unpacks like the (low, high) tuples returned elsewhere:

    >>> ci_low, ci_high = ci

    """

    lower: Any
    upper: Any
    confidence_level: float
    method: str

    def __iter__(self) -> Iterator[Any]:
        yield self.lower
        yield self.upper

    @property
    def width(self) -> Any:
        return self.upper - self.lower

    def contains(self, value: Any) -> bool | npt.NDArray[np.bool_]:
        inside = np.logical_and(self.lower <= value, value <= self.upper)
        if np.ndim(inside) == 0:
            return bool(inside)
        return inside


@dataclass(frozen=True, eq=False)
class Summary:
    """Summary of a sampling distribution."""

    mean: Any
    standard_error: Any
    percentile_ci: ConfidenceInterval
    normal_ci: ConfidenceInterval
    trial_count: int


@dataclass(frozen=True, eq=False)
class JackknifeResult:
    """Jackknife estimate.

    Attributes
    ----------
     estimate : float or ndarray
        Bias-corrected estimate, the mean of the pseudo-values.
     standard_error : float or ndarray
        Jackknife standard error.
     ci : ConfidenceInterval
        Symmetric interval around `estimate`.
     pseudo_values : ndarray
        n * theta_hat - (n - 1) * partial_estimates.
     partial_estimates : ndarray
        Statistic evaluated with each observation held out in turn.
     theta_hat : float or ndarray
        Statistic evaluated on the full sample.
     bias : float or ndarray
        Jackknife estimate of bias, theta_hat - estimate.

    """

    estimate: Any
    standard_error: Any
    ci: ConfidenceInterval
    pseudo_values: npt.NDArray[np.float64]
    partial_estimates: npt.NDArray[np.float64]
    theta_hat: Any
    bias: Any


@dataclass(frozen=True, eq=False)
class BootstrapResult:
    """Bootstrap estimate."""

    theta_hat: Any
    distribution: SamplingDistribution
    standard_error: Any
    bias: Any
    normal_ci: ConfidenceInterval
    percentile_ci: ConfidenceInterval


@dataclass(frozen=True, eq=False)
class RandomizationResult:
    """Randomization (permutation) test.

    `asl` is the achieved significance level, aka the p-value.

    """

    observed: float
    distribution: SamplingDistribution
    asl: float
    alternative: str
