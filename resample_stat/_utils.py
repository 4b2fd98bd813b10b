# pyre-unsafe
"""Private utility functions and type aliases for resampling methods."""

import multiprocessing as mp
import numbers
import warnings
from collections.abc import Callable, Mapping
from typing import Any, Literal, TypeAlias

import numpy as np
import numpy.typing as npt
import pandas as pd
import scipy.stats as ss

from resample_stat.exceptions import (
    InsufficientSampleSize,
    InvalidConfidenceLevel,
    InvalidSampleSize,
    InvalidTrialCount,
    StatisticFunctionError,
)

# Type aliases for common types
ArrayLike: TypeAlias = npt.NDArray[np.float64] | list[float] | pd.Series | pd.DataFrame
Statistic: TypeAlias = Callable[..., Any]
StatisticValue: TypeAlias = float | npt.NDArray[np.float64]
RandomState: TypeAlias = np.random.Generator | int | None
Critical: TypeAlias = Literal["z", "t"]
QuantileMethod: TypeAlias = Literal["linear", "efron"]

DEFAULT_TRIAL_COUNT = 1000
DEFAULT_CONFIDENCE_LEVEL = 0.95


def _as_generator(rng: RandomState) -> np.random.Generator:
    """Random engine for a call.

    A Generator is returned as is, so repeated calls share its
    stream. An int seeds a fresh Generator. None gives an unseeded
    Generator.

    """
    return np.random.default_rng(rng)


def _num_threads(num_threads: int) -> int:
    if num_threads == -1:
        return mp.cpu_count()
    return num_threads


def _batch_sizes(total: int, num_threads: int) -> list[int]:
    """Split `total` items into `num_threads` contiguous batches,
    the first `total % num_threads` of which get one extra item."""
    batch_size = total // num_threads
    extra = total % num_threads
    batch_sizes = [batch_size] * num_threads
    for i in range(extra):
        batch_sizes[i] += 1
    return batch_sizes


def _is_integral(value: Any) -> bool:
    return isinstance(value, numbers.Integral) and not isinstance(value, bool)


def _check_trial_count(trial_count: Any) -> int:
    if not _is_integral(trial_count) or trial_count <= 0:
        raise InvalidTrialCount(
            f"Trial count must be a positive integer, got {trial_count!r}"
        )
    return int(trial_count)


def _check_sample_size(size: Any) -> int:
    if not _is_integral(size) or size <= 0:
        raise InvalidSampleSize(
            f"Sample size must be a positive integer, got {size!r}"
        )
    return int(size)


def _check_confidence_level(confidence_level: float) -> float:
    try:
        beta = float(confidence_level)
    except (TypeError, ValueError):
        raise InvalidConfidenceLevel(
            f"Invalid confidence level: {confidence_level!r}"
        ) from None
    if not 0 < beta < 1:
        raise InvalidConfidenceLevel(
            f"Confidence level must be strictly between 0 and 1, got {beta}"
        )
    return beta


def _as_dataset(x: Any) -> npt.NDArray[Any] | pd.Series | pd.DataFrame:
    """Normalize a dataset: pandas objects are kept, a mapping of
    named columns becomes a DataFrame, anything else an array."""
    if isinstance(x, (pd.DataFrame, pd.Series)):
        return x
    if isinstance(x, Mapping):
        return pd.DataFrame(x)
    return np.asarray(x)


def _take(
    data: npt.NDArray[Any] | pd.Series | pd.DataFrame,
    ind: npt.NDArray[np.intp],
    reset_index: bool = True,
) -> npt.NDArray[Any] | pd.Series | pd.DataFrame:
    """Rows of `data` at positions `ind`."""
    if isinstance(data, (pd.DataFrame, pd.Series)):
        rows = data.iloc[ind]
        if reset_index:
            rows = rows.reset_index(drop=True)
        return rows
    return data[ind]


def _statistic_value(value: Any) -> StatisticValue:
    """Coerce the output of a statistic to a float or a 1-d array.

    Raises
    ------
     StatisticFunctionError
        If the value is not numeric, or has more than one dimension.

    """
    try:
        arr = np.asarray(value, dtype=np.float64)
    except (TypeError, ValueError) as e:
        raise StatisticFunctionError(
            f"Statistic returned a non-numeric value: {value!r}"
        ) from e

    if arr.ndim == 0:
        return float(arr)
    if arr.ndim > 1:
        raise StatisticFunctionError(
            "Statistic must return a scalar or a 1-d vector, got shape "
            f"{arr.shape}"
        )
    return arr


def _critical_value(
    confidence_level: float, critical: Critical = "z", df: float | None = None
) -> float:
    """Two-sided critical value.

    Parameters
    ----------
     confidence_level : float
        Nominal coverage, strictly between 0 and 1.
     critical : ["z", "t"], optional
        Reference distribution. "z" (default) is the standard normal,
        "t" is Student's t with `df` degrees of freedom.
     df : float, optional
        Degrees of freedom. Required when `critical` is "t".

    Returns
    -------
     c : float
        The 1 - (1 - `confidence_level`) / 2 quantile of the reference
        distribution.

    """
    beta = _check_confidence_level(confidence_level)
    q = 1 - (1 - beta) / 2
    if critical == "z":
        return float(ss.norm.ppf(q))
    elif critical == "t":
        if df is None or df < 1:
            raise InsufficientSampleSize(
                f"t critical value needs at least 1 degree of freedom, got {df}",
                minimum=2,
            )
        return float(ss.t.ppf(q, df=df))
    else:
        raise ValueError(f"Invalid critical value distribution: {critical!r}")


def _percentile(
    z: npt.NDArray[np.float64], p: float | list[float], full_sort: bool = True
) -> npt.NDArray[np.float64]:
    """Percentiles of an array, order-statistic rule.

    Parameters
    ----------
     z : array_like
        Data. Not assumed to be sorted. One-dimensional.
     p : float or list of floats
        Numbers in (0, 1), specifying the percentiles.
     full_sort : boolean, optional
        Whether to fully sort z (see Notes). Defaults to True.

    Returns
    -------
     percentiles : ndarray
        One value of z per entry of p.

    Notes
    -----
    Uses the methodology recommended in S12.5 of [ET93]: the alpha
    percentile is the k-th order statistic with k = floor((B + 1) *
    alpha), and symmetrically for the upper tail. When z is very
    large, sorting is inefficient and unnecessary. However, for
    modest B, doing a partial sort isn't actually any faster.

    """
    B = len(z)
    if not isinstance(p, list):
        p = [p]

    if full_sort:
        sorted_z = np.sort(z)

    percentiles = np.zeros((len(p),))
    for i, pi in enumerate(p):
        if pi <= 0.5:
            alpha = pi
            Balpha = B * alpha
        else:
            Balpha = B - B * pi
            alpha = 1 - pi

        if int(Balpha) == Balpha:
            k = int(Balpha)
            if pi > 0.5:
                k = B - k
        else:
            k = int(np.floor(Balpha + alpha))
            if pi > 0.5:
                k = B + 1 - k

        if k <= 0 or k > B:
            warnings.warn("Index outside of bounds. Try more bootstrap samples.")
            k = min(max(k, 1), B)

        if full_sort:
            percentiles[i] = sorted_z[k - 1]
        else:
            percentiles[i] = np.partition(z, k - 1)[k - 1]

    return percentiles


def _quantiles(
    theta_star: npt.NDArray[np.float64],
    p: list[float],
    method: QuantileMethod = "linear",
) -> npt.NDArray[np.float64]:
    """Quantiles of a sampling distribution along its trial axis.

    Returns an array of shape (len(p),) for scalar statistics or
    (len(p), k) for k-vector statistics.

    """
    if method == "linear":
        return np.quantile(theta_star, p, axis=0)
    elif method == "efron":
        if theta_star.ndim == 1:
            return _percentile(theta_star, p)
        return np.column_stack(
            [_percentile(theta_star[:, j], p) for j in range(theta_star.shape[1])]
        )
    else:
        raise ValueError(f"Invalid quantile method: {method!r}")


def _unwrap(value: Any) -> StatisticValue:
    """0-d results as floats, vector results as arrays."""
    value = np.asarray(value, dtype=np.float64)
    return float(value) if value.ndim == 0 else value
