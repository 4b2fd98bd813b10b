# pyre-unsafe
"""Standard error estimation methods."""

from collections.abc import Mapping
from typing import Any

import numpy as np
import numpy.typing as npt
import scipy.stats as ss

from resample_stat._utils import ArrayLike, RandomState, Statistic
from resample_stat.distributions import EmpiricalDistribution, SamplingDistribution
from resample_stat.sampling import bootstrap_samples, jackknife_values


def jackknife_standard_error(
    x: ArrayLike | Mapping[str, Any],
    stat: Statistic,
    jv: npt.NDArray[np.float64] | None = None,
    num_threads: int = 1,
) -> float | npt.NDArray[np.float64]:
    r"""Jackknife estimate of standard error.

    Parameters
    ----------
     x : array_like, pandas DataFrame or mapping of columns
        The data.
     stat : function
        The statistic.
     jv : array_like, optional
        Jackknife values. Can be passed if they have already been
        calculated, which will speed this up considerably.
     num_threads : int, optional
        Number of threads to use for multicore processing. Defaults to
        1, meaning all calculations will be done in a single
        thread. Set to -1 to use all available cores.

    Returns
    -------
     se : float or ndarray
        The standard error.

    Notes
    -----
    :math:`\sqrt{(n-1) \hat{var}(jv)}`, with the variance taken with
    divisor n. This equals the standard error computed from the
    pseudo-values in `jackknife`.

    The jackknife estimate of standard error is only applicable when
    `stat` is a plug-in statistic, that is, having the form
    :math:`t(\hat{F})`, where :math:`\hat{F}` is the empirical
    distribution. Moreover, it is only applicable when t is a smooth
    function. Notable exceptions include the median. See [ET93, S10.6].

    """
    if jv is None:
        jv = jackknife_values(x, stat, num_threads=num_threads)
    n = len(jv)
    se = np.sqrt((n - 1) * np.var(jv, axis=0, ddof=0))
    return float(se) if np.ndim(se) == 0 else se


def standard_error(
    dist: EmpiricalDistribution,
    stat: Statistic,
    robustness: float | None = None,
    B: int = 200,
    size: int | tuple[int, ...] | None = None,
    rng: RandomState = None,
    theta_star: SamplingDistribution | None = None,
    num_threads: int = 1,
) -> float | npt.NDArray[np.float64]:
    """Bootstrap standard error

    Parameters
    ----------
     dist : EmpiricalDistribution
        The empirical distribution, or any object with a
        `sample(size=..., rng=...)` method.
     stat : function
        The statistic for which we wish to calculate the standard
        error.
     robustness : float or None, optional
        Controls whether to use a robust estimate of standard
        error. If specified, should be a float in (0.5, 1.0), with
        lower values corresponding to greater bias but increased
        robustness. If None (default), uses the non-robust estimate of
        standard error.
     B : int, optional
        Number of bootstrap samples. Defaults to 200.
     size : int or tuple of ints, optional
        Size to pass for generating samples from the distribution.
        Defaults to None, indicating the samples will be the same size
        as the original dataset.
     rng : numpy Generator or int, optional
        Random engine, or a seed for one.
     theta_star : SamplingDistribution, optional
        Bootstrapped statistic values. Can be passed if they have
        already been calculated, which will speed this up
        considerably.
     num_threads : int, optional
        Number of threads to use for multicore processing. Defaults to
        1, meaning all calculations will be done in a single
        thread. Set to -1 to use all available cores.

    Returns
    --------
     se : float or ndarray
        The standard error.

    Notes
    -----
    The robust estimate is the distance between the `robustness` and
    1 - `robustness` percentiles of the bootstrap distribution,
    divided by the same distance for a standard normal. It is less
    sensitive to a few wild bootstrap replications.

    """
    if robustness is not None and (robustness <= 0.5 or robustness >= 1):
        raise ValueError(f"Invalid robustness: {robustness}")

    if theta_star is None:
        theta_star = bootstrap_samples(
            dist, stat, B, size=size, rng=rng, num_threads=num_threads
        )

    if robustness is None:
        return theta_star.standard_error()

    z_alpha = ss.norm.ppf(robustness)
    p = np.percentile(
        theta_star.values, [100 * robustness, 100 * (1 - robustness)], axis=0
    )
    se = (p[0] - p[1]) / (2 * z_alpha)
    return float(se) if np.ndim(se) == 0 else se
