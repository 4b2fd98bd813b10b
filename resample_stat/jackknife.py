# pyre-unsafe
"""Jackknife estimation: bias-corrected estimates, standard errors and
t intervals from leave-one-out pseudo-values."""

from collections.abc import Mapping
from typing import Any

import numpy as np
import numpy.typing as npt

from resample_stat._utils import (
    DEFAULT_CONFIDENCE_LEVEL,
    ArrayLike,
    Critical,
    Statistic,
    _as_dataset,
    _check_confidence_level,
    _critical_value,
    _statistic_value,
    _unwrap,
)
from resample_stat.exceptions import InsufficientSampleSize, StatisticFunctionError
from resample_stat.results import ConfidenceInterval, JackknifeResult
from resample_stat.sampling import jackknife_values


def jackknife(
    x: ArrayLike | Mapping[str, Any],
    stat: Statistic,
    confidence_level: float = DEFAULT_CONFIDENCE_LEVEL,
    critical: Critical = "t",
    df: float | None = None,
    num_threads: int = 1,
) -> JackknifeResult:
    r"""Jackknife estimate, standard error and confidence interval.

    Parameters
    ----------
     x : array_like, pandas DataFrame or mapping of columns
        The data, with n >= 2 observations.
     stat : function
        The statistic. May return a float or a fixed-length vector.
     confidence_level : float, optional
        Nominal coverage of the interval. Defaults to 0.95.
     critical : ["t", "z"], optional
        Distribution of the critical value. Defaults to "t".
     df : float, optional
        Degrees of freedom for `critical` = "t". Defaults to n - 1.
     num_threads : int, optional
        Number of threads to use for computing the jackknife
        values. Defaults to 1.

    Returns
    -------
     result : JackknifeResult
        Estimate, standard error, interval, pseudo-values, partial
        estimates, full-sample statistic and bias.

    Raises
    ------
     InsufficientSampleSize
        If `x` has fewer than 2 observations, or the statistic cannot
        be computed (is not finite) once an observation is held out.
     StatisticFunctionError
        If the statistic is not finite on the full sample.

    Notes
    -----
    With :math:`\hat{\theta}` the statistic on the full sample and
    :math:`\hat{\theta}_{(i)}` the statistic with observation i held
    out, the pseudo-values are

    .. math::

       \tilde{\theta}_i = n \hat{\theta} - (n - 1) \hat{\theta}_{(i)}

    The estimate is their mean, the standard error is their standard
    deviation (divisor n - 1) over :math:`\sqrt{n}`, and the interval
    is estimate +/- :math:`t_{n-1}` standard errors.

    Treating the pseudo-values as n independent observations, and so
    using n - 1 degrees of freedom, is an assumption. It is exact for
    the mean of a normal sample, but for variance-like statistics the
    coverage is below nominal at small n. Jackknifing a normalizing
    transform of the statistic, such as the log of a variance, usually
    does better. Both the transform and the critical value are left to
    the caller.

    Errors raised by `stat` propagate unmodified.

    """
    _check_confidence_level(confidence_level)
    x = _as_dataset(x)
    n = len(x)
    if n < 2:
        raise InsufficientSampleSize(
            f"Jackknife needs at least 2 observations, got {n}", n=n, minimum=2
        )

    theta_hat = _statistic_value(stat(x))
    if not np.all(np.isfinite(theta_hat)):
        raise StatisticFunctionError(
            f"Statistic is not finite on the full sample: {theta_hat}"
        )

    jv = jackknife_values(x, stat, num_threads=num_threads)
    if not np.all(np.isfinite(jv)):
        raise InsufficientSampleSize(
            f"Statistic is not defined on {n - 1} observations", n=n
        )

    pseudo_values = n * np.asarray(theta_hat) - (n - 1) * jv
    estimate = np.mean(pseudo_values, axis=0)
    se = np.sqrt(np.var(pseudo_values, axis=0, ddof=1) / n)

    if df is None:
        df = n - 1
    c = _critical_value(confidence_level, critical=critical, df=df)
    ci = ConfidenceInterval(
        lower=_unwrap(estimate - c * se),
        upper=_unwrap(estimate + c * se),
        confidence_level=float(confidence_level),
        method=f"jackknife-{critical}",
    )

    return JackknifeResult(
        estimate=_unwrap(estimate),
        standard_error=_unwrap(se),
        ci=ci,
        pseudo_values=pseudo_values,
        partial_estimates=jv,
        theta_hat=theta_hat,
        bias=_unwrap(np.asarray(theta_hat) - estimate),
    )


def jackknife_bias(
    x: ArrayLike | Mapping[str, Any],
    stat: Statistic,
    jv: npt.NDArray[np.float64] | None = None,
    num_threads: int = 1,
) -> float | npt.NDArray[np.float64]:
    r"""Jackknife estimate of bias.

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
     bias : float or ndarray
        Estimate of bias, :math:`(n - 1)(\bar{\theta}_{(\cdot)} -
        \hat{\theta})`.

    Notes
    -----
    The jackknife estimate of bias is only applicable when `stat` is a
    plug-in statistic, that is, having the form :math:`t(\hat{F})`,
    where :math:`\hat{F}` is the empirical distribution. Moreover, it
    is only applicable when `t` is a smooth function. Notable
    exceptions include the median. See [ET93, S10.5] for details.

    """
    if jv is None:
        jv = jackknife_values(x, stat, num_threads=num_threads)

    n = len(jv)
    bias_est = (n - 1) * (np.mean(jv, axis=0) - _statistic_value(stat(x)))
    return _unwrap(bias_est)
