# pyre-unsafe
"""Statistic functions.

Each raises InsufficientSampleSize on a sample too small for it,
rather than returning NaN, so failures surface in the estimators.
"""

from typing import Any

import numpy as np
import scipy.stats as ss

from resample_stat._utils import ArrayLike
from resample_stat.exceptions import InsufficientSampleSize


def _require(x: Any, minimum: int, name: str) -> np.ndarray:
    x = np.asarray(x, dtype=np.float64)
    if len(x) < minimum:
        raise InsufficientSampleSize(
            f"{name} needs at least {minimum} observations, got {len(x)}",
            n=len(x),
            minimum=minimum,
        )
    return x


def mean(x: ArrayLike) -> float:
    return float(np.mean(_require(x, 1, "mean")))


def variance(x: ArrayLike) -> float:
    """Sample variance, divisor n - 1."""
    return float(np.var(_require(x, 2, "variance"), ddof=1))


def plugin_variance(x: ArrayLike) -> float:
    """Plug-in variance, divisor n."""
    return float(np.var(_require(x, 1, "plugin_variance"), ddof=0))


def log_variance(x: ArrayLike) -> float:
    """Log of the sample variance.

    Its sampling distribution is closer to normal than that of the
    variance, which makes it a better candidate for jackknife t
    intervals. Exponentiate the interval endpoints afterwards.

    """
    return float(np.log(variance(x)))


def skewness(x: ArrayLike) -> float:
    """Plug-in skewness, the third standardized moment."""
    return float(ss.skew(_require(x, 2, "skewness"), bias=True))


def difference_in_means(x: ArrayLike, y: ArrayLike) -> float:
    """mean(y) - mean(x)"""
    return mean(y) - mean(x)


def variance_ratio(x: ArrayLike, y: ArrayLike) -> float:
    """var(y) / var(x), both with divisor n - 1."""
    return variance(y) / variance(x)
