# pyre-unsafe
"""Bootstrap estimation: standard errors, bias and confidence
intervals from resampling with replacement."""

from collections.abc import Mapping
from typing import Any

import numpy as np

from resample_stat._utils import (
    DEFAULT_CONFIDENCE_LEVEL,
    DEFAULT_TRIAL_COUNT,
    ArrayLike,
    Critical,
    QuantileMethod,
    RandomState,
    Statistic,
    _check_confidence_level,
    _statistic_value,
    _unwrap,
)
from resample_stat.confidence import normal_interval, percentile_interval
from resample_stat.distributions import EmpiricalDistribution
from resample_stat.results import BootstrapResult
from resample_stat.sampling import _simulate


def bootstrap(
    x: ArrayLike | Mapping[str, Any],
    stat: Statistic,
    trial_count: int = DEFAULT_TRIAL_COUNT,
    confidence_level: float = DEFAULT_CONFIDENCE_LEVEL,
    indices: bool = False,
    rng: RandomState = None,
    critical: Critical = "t",
    method: QuantileMethod = "linear",
    num_threads: int = 1,
) -> BootstrapResult:
    """Bootstrap estimate of a statistic.

    Parameters
    ----------
     x : array_like, pandas DataFrame or mapping of columns
        The data.
     stat : function
        The statistic, returning a float or a fixed-length vector. See
        `indices` for how it is called.
     trial_count : int, optional
        Number of bootstrap samples. Defaults to 1000.
     confidence_level : float, optional
        Nominal coverage of both intervals. Defaults to 0.95.
     indices : boolean, optional
        If False (default), `stat` is called on each bootstrap sample,
        `stat(x_star)`. If True, it is called on the full dataset and
        the resampled row positions, `stat(x, ind)`, so that it can
        refit a model on the selected rows without the caller building
        a resampled table. See `models.coefficients_statistic`.
     rng : numpy Generator or int, optional
        Random engine, or a seed for one.
     critical : ["t", "z"], optional
        Distribution of the critical value of the normal
        interval. Defaults to "t", with n - 1 degrees of freedom.
     method : ["linear", "efron"], optional
        Quantile rule of the percentile interval. Defaults to
        "linear".
     num_threads : int, optional
        Number of threads to use for multicore processing. Defaults to
        1, meaning all calculations will be done in a single
        thread. Set to -1 to use all available cores.

    Returns
    -------
     result : BootstrapResult
        Observed statistic, bootstrap distribution, standard error,
        bias, and normal and percentile intervals.

    Notes
    -----
    The normal interval is theta_hat +/- critical value * bootstrap
    standard error, which assumes the bootstrap distribution is
    roughly normal. The percentile interval makes no such assumption,
    but is not centered on theta_hat when the distribution is skewed.

    Examples
    --------
    >>> x = datasets.mouse_data("treatment")
    >>> result = bootstrap(x, np.mean, trial_count=2000, rng=0)
    >>> ci_low, ci_high = result.percentile_ci

    """
    _check_confidence_level(confidence_level)
    dist = EmpiricalDistribution(x)
    n = dist.n

    if indices:
        theta_hat = _statistic_value(stat(dist.data, np.arange(n)))

        def trial(rng):
            _, ind = dist.sample(return_indices=True, rng=rng)
            return stat(dist.data, ind)

    else:
        theta_hat = _statistic_value(stat(dist.data))

        def trial(rng):
            return stat(dist.sample(rng=rng))

    theta_star = _simulate(trial_count, trial, rng, num_threads)

    return BootstrapResult(
        theta_hat=theta_hat,
        distribution=theta_star,
        standard_error=theta_star.standard_error(),
        bias=_unwrap(np.asarray(theta_star.mean()) - np.asarray(theta_hat)),
        normal_ci=normal_interval(
            theta_star,
            confidence_level=confidence_level,
            estimate=theta_hat,
            critical=critical,
            df=n - 1,
        ),
        percentile_ci=percentile_interval(
            theta_star, confidence_level=confidence_level, method=method
        ),
    )
