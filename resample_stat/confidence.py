# pyre-unsafe
"""Confidence interval methods."""

import warnings
from typing import Any

import numpy as np
import numpy.typing as npt

from resample_stat._utils import (
    DEFAULT_CONFIDENCE_LEVEL,
    Critical,
    QuantileMethod,
    _check_confidence_level,
    _critical_value,
    _quantiles,
    _unwrap,
)
from resample_stat.distributions import SamplingDistribution
from resample_stat.results import ConfidenceInterval, Summary


def _as_sampling_distribution(
    theta_star: SamplingDistribution | npt.ArrayLike,
) -> SamplingDistribution:
    if isinstance(theta_star, SamplingDistribution):
        return theta_star
    return SamplingDistribution(theta_star)


def percentile_interval(
    theta_star: SamplingDistribution | npt.ArrayLike,
    confidence_level: float = DEFAULT_CONFIDENCE_LEVEL,
    method: QuantileMethod = "linear",
) -> ConfidenceInterval:
    """Percentile Intervals

    Parameters
    ----------
     theta_star : SamplingDistribution or array_like
        Simulated or bootstrapped statistic values.
     confidence_level : float, optional
        Nominal coverage, strictly between 0 and 1. Defaults to 0.95.
     method : ["linear", "efron"], optional
        Quantile rule. "linear" (default) interpolates linearly
        between adjacent order statistics. "efron" picks a single
        order statistic, per S12.5 of [ET93].

    Returns
    -------
     ci : ConfidenceInterval
        The (1 - `confidence_level`) / 2 and 1 - (1 -
        `confidence_level`) / 2 quantiles of `theta_star`.

    Notes
    -----
    No normality assumption is made, so for skewed distributions the
    interval need not contain the mean of `theta_star`.

    """
    beta = _check_confidence_level(confidence_level)
    theta_star = _as_sampling_distribution(theta_star)

    alpha = (1 - beta) / 2
    if theta_star.trial_count * alpha < 1:
        warnings.warn(
            f"Only {theta_star.trial_count} samples for a {100 * beta:g}% "
            "percentile interval. Try more bootstrap samples."
        )

    p = _quantiles(theta_star.values, [alpha, 1 - alpha], method=method)
    return ConfidenceInterval(
        lower=_unwrap(p[0]),
        upper=_unwrap(p[1]),
        confidence_level=beta,
        method=f"percentile-{method}",
    )


def normal_interval(
    theta_star: SamplingDistribution | npt.ArrayLike,
    confidence_level: float = DEFAULT_CONFIDENCE_LEVEL,
    estimate: Any = None,
    critical: Critical = "z",
    df: float | None = None,
) -> ConfidenceInterval:
    """Normal-approximation Intervals

    Parameters
    ----------
     theta_star : SamplingDistribution or array_like
        Simulated or bootstrapped statistic values. Their standard
        deviation is the standard error.
     confidence_level : float, optional
        Nominal coverage, strictly between 0 and 1. Defaults to 0.95.
     estimate : float or array_like, optional
        Center of the interval. Defaults to the mean of `theta_star`.
     critical : ["z", "t"], optional
        Distribution of the critical value. "z" (default) uses the
        standard normal, appropriate for large Monte Carlo
        summaries. "t" uses Student's t with `df` degrees of freedom,
        appropriate when `estimate` comes from a small reference
        sample.
     df : float, optional
        Degrees of freedom for `critical` = "t". Defaults to the
        number of trials minus 1.

    Returns
    -------
     ci : ConfidenceInterval
        `estimate` +/- critical value * standard error.

    """
    theta_star = _as_sampling_distribution(theta_star)
    if df is None:
        df = theta_star.trial_count - 1
    c = _critical_value(confidence_level, critical=critical, df=df)

    if estimate is None:
        estimate = theta_star.mean()
    estimate = np.asarray(estimate, dtype=np.float64)
    se = np.asarray(theta_star.standard_error())

    return ConfidenceInterval(
        lower=_unwrap(estimate - c * se),
        upper=_unwrap(estimate + c * se),
        confidence_level=float(confidence_level),
        method=f"normal-{critical}",
    )


def summarize(
    theta_star: SamplingDistribution | npt.ArrayLike,
    confidence_level: float = DEFAULT_CONFIDENCE_LEVEL,
    critical: Critical = "z",
    df: float | None = None,
    method: QuantileMethod = "linear",
) -> Summary:
    """Summarize a sampling distribution.

    Parameters
    ----------
     theta_star : SamplingDistribution or array_like
        Simulated or bootstrapped statistic values.
     confidence_level : float, optional
        Nominal coverage of both intervals. Defaults to 0.95.
     critical : ["z", "t"], optional
        Critical value distribution for the normal interval. See
        `normal_interval`. Defaults to "z".
     df : float, optional
        Degrees of freedom for `critical` = "t".
     method : ["linear", "efron"], optional
        Quantile rule for the percentile interval. See
        `percentile_interval`. Defaults to "linear".

    Returns
    -------
     summary : Summary
        Mean, standard error (standard deviation with divisor B - 1),
        percentile and normal intervals, and number of trials.

    Examples
    --------
    >>> theta_star = sampling_distribution(heights, np.mean, 30, rng=0)
    >>> s = summarize(theta_star)
    >>> ci_low, ci_high = s.percentile_ci

    """
    theta_star = _as_sampling_distribution(theta_star)
    return Summary(
        mean=theta_star.mean(),
        standard_error=theta_star.standard_error(),
        percentile_ci=percentile_interval(
            theta_star, confidence_level=confidence_level, method=method
        ),
        normal_ci=normal_interval(
            theta_star, confidence_level=confidence_level, critical=critical, df=df
        ),
        trial_count=theta_star.trial_count,
    )
