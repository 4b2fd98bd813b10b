# pyre-unsafe
"""Sampling and Monte Carlo simulation.

Every random draw goes through an explicit numpy Generator (or a seed
for one) passed by the caller, so seeding it makes results
reproducible.
"""

from collections.abc import Callable, Mapping
from typing import Any

import numpy as np
import numpy.typing as npt
import pandas as pd
from pathos.multiprocessing import ProcessPool as Pool

from resample_stat._utils import (
    DEFAULT_TRIAL_COUNT,
    ArrayLike,
    RandomState,
    Statistic,
    _as_dataset,
    _as_generator,
    _batch_sizes,
    _is_integral,
    _check_trial_count,
    _num_threads,
    _statistic_value,
    _take,
)
from resample_stat.distributions import (
    EmpiricalDistribution,
    ParametricDistribution,
    SamplingDistribution,
)
from resample_stat.exceptions import (
    InsufficientSampleSize,
    SizeMismatch,
    StatisticFunctionError,
)


def sample(
    population: ParametricDistribution | EmpiricalDistribution | ArrayLike,
    size: int,
    replace: bool = False,
    rng: RandomState = None,
) -> npt.NDArray[Any] | pd.DataFrame:
    """Draw one random sample.

    Parameters
    ----------
     population : ParametricDistribution, EmpiricalDistribution or data
        A parametric population, or a finite dataset (array, pandas
        object or mapping of columns) to draw observations from.
     size : int
        Sample size.
     replace : boolean, optional
        Only used with finite datasets. If False (default), draw a
        simple random sample without replacement. If True, draw a
        bootstrap sample.
     rng : numpy Generator or int, optional
        Random engine, or a seed for one.

    Returns
    -------
     x : ndarray or pandas DataFrame
        `size` observations.

    Raises
    ------
     InvalidSampleSize
        If `size` is not a positive integer, or exceeds the size of
        the dataset when sampling without replacement.

    """
    if isinstance(population, ParametricDistribution):
        return population.sample(size, rng=rng)

    if not isinstance(population, EmpiricalDistribution):
        population = EmpiricalDistribution(population)
    return population.sample(size=size, replace=replace, rng=rng)


def randomize_two_groups(
    pool: ArrayLike,
    n1: int,
    n2: int,
    rng: RandomState = None,
) -> tuple[npt.NDArray[Any], npt.NDArray[Any]]:
    """Randomly reassign pooled observations to two groups.

    Parameters
    ----------
     pool : array_like
        The pooled observations of both groups.
     n1, n2 : int
        Group sizes. Must sum to the size of the pool.
     rng : numpy Generator or int, optional
        Random engine, or a seed for one.

    Returns
    -------
     group1, group2 : ndarray
        The first `n1` and the remaining `n2` elements of a uniformly
        random permutation of the pool.

    Notes
    -----
    This is the null mechanism of a randomization test: it destroys
    any association between group label and value while keeping the
    observed values and the group sizes. Every split of the pool into
    groups of the given sizes is equally likely.

    """
    pool = np.asarray(pool)
    if (
        not _is_integral(n1)
        or not _is_integral(n2)
        or n1 < 0
        or n2 < 0
        or n1 + n2 != len(pool)
    ):
        raise SizeMismatch(
            f"Group sizes {n1} + {n2} do not match pool of size {len(pool)}"
        )

    permuted = _as_generator(rng).permutation(pool)
    return permuted[:n1], permuted[n1:]


def simulate(
    trial_count: int, trial_fn: Callable[[], Any]
) -> SamplingDistribution:
    """Monte Carlo simulation.

    Parameters
    ----------
     trial_count : int
        Number of trials.
     trial_fn : function
        Takes no arguments. Performs one random draw and returns the
        statistic evaluated on it, as a float or fixed-length vector.
        Randomness must come from a Generator captured by the
        function.

    Returns
    -------
     theta_star : SamplingDistribution
        The `trial_count` statistic values, in call order.

    Raises
    ------
     InvalidTrialCount
        If `trial_count` is not a positive integer.
     StatisticFunctionError
        If a trial returns a non-numeric value, or a value whose shape
        differs from the first trial.

    Notes
    -----
    An exception raised by `trial_fn` aborts the simulation and
    propagates as is. A distribution with missing trials would bias
    any standard error or interval computed from it.

    """
    trial_count = _check_trial_count(trial_count)

    theta_star = None
    for i in range(trial_count):
        value = _statistic_value(trial_fn())
        if theta_star is None:
            theta_star = np.empty((trial_count,) + np.shape(value))
        elif np.shape(value) != theta_star.shape[1:]:
            raise StatisticFunctionError(
                f"Trial {i} returned shape {np.shape(value)}, expected "
                f"{theta_star.shape[1:]}"
            )
        theta_star[i] = value

    return SamplingDistribution(theta_star)


def multithreaded_simulate(
    trial_count: int,
    trial_fn: Callable[[np.random.Generator], Any],
    rng: RandomState = None,
    num_threads: int = -1,
) -> SamplingDistribution:
    """Monte Carlo simulation in parallel.

    Parameters
    ----------
     trial_count : int
        Number of trials.
     trial_fn : function
        Takes a numpy Generator, performs one random draw with it and
        returns the statistic evaluated on the draw.
     rng : numpy Generator or int, optional
        Random engine, or a seed for one. Used only to seed one
        independent Generator per worker.
     num_threads : int, optional
        Number of workers. Defaults to the number of available CPUs.

    Returns
    -------
     theta_star : SamplingDistribution
        The `trial_count` statistic values. Workers run contiguous
        batches of trials, and the batches are concatenated in worker
        order.

    Notes
    -----
    For a fixed seed and number of workers the result is
    reproducible, but it differs from the sequential stream produced
    by `simulate` with the same seed.

    """
    trial_count = _check_trial_count(trial_count)
    num_threads = min(_num_threads(num_threads), trial_count)
    rng = _as_generator(rng)

    def _simulate_batch(trial_fn, batch_size, seed):
        worker_rng = np.random.default_rng(seed)
        return simulate(batch_size, lambda: trial_fn(worker_rng)).values

    pool = Pool(num_threads)
    try:
        # If we have used a pool before, we need to restart it.
        pool.restart()
    except AssertionError:
        # If have never used a pool before, no need to do anything.
        pass

    results = []
    seeds = rng.integers(0, 2**32 - 1, num_threads)
    for batch_size, seed in zip(_batch_sizes(trial_count, num_threads), seeds):
        r = pool.apipe(_simulate_batch, trial_fn, batch_size, int(seed))
        results.append(r)

    try:
        batches = [res.get() for res in results]
    finally:
        pool.close()
        pool.join()

    shapes = {b.shape[1:] for b in batches}
    if len(shapes) > 1:
        raise StatisticFunctionError(
            f"Workers returned statistics of different shapes: {sorted(shapes)}"
        )
    return SamplingDistribution(np.concatenate(batches))


def _simulate(
    trial_count: int,
    trial_fn: Callable[[np.random.Generator], Any],
    rng: RandomState,
    num_threads: int,
) -> SamplingDistribution:
    """Run `trial_fn(rng)` sequentially or across a process pool."""
    num_threads = _num_threads(num_threads)
    if num_threads > 1:
        return multithreaded_simulate(
            trial_count, trial_fn, rng=rng, num_threads=num_threads
        )

    rng = _as_generator(rng)
    return simulate(trial_count, lambda: trial_fn(rng))


def sampling_distribution(
    population: ParametricDistribution | EmpiricalDistribution | ArrayLike,
    stat: Statistic,
    size: int,
    B: int = DEFAULT_TRIAL_COUNT,
    replace: bool = False,
    rng: RandomState = None,
    num_threads: int = 1,
) -> SamplingDistribution:
    """Sampling distribution of a statistic under repeated sampling.

    Parameters
    ----------
     population : ParametricDistribution, EmpiricalDistribution or data
        The population. See `sample`.
     stat : function
        The statistic.
     size : int
        Size of each sample.
     B : int, optional
        Number of samples. Defaults to 1000.
     replace : boolean, optional
        Whether to sample a finite population with
        replacement. Defaults to False.
     rng : numpy Generator or int, optional
        Random engine, or a seed for one.
     num_threads : int, optional
        Number of threads to use for multicore processing. Defaults to
        1, meaning all calculations will be done in a single
        thread. Set to -1 to use all available cores.

    Returns
    -------
     theta_star : SamplingDistribution
        The statistic evaluated on each of the `B` samples.

    Examples
    --------
    >>> heights = ParametricDistribution("normal", mean=175.7, sd=15.19)
    >>> theta_star = sampling_distribution(heights, np.mean, 30, rng=0)
    >>> theta_star.standard_error()  # close to 15.19 / sqrt(30)

    """
    if not isinstance(population, (ParametricDistribution, EmpiricalDistribution)):
        population = EmpiricalDistribution(population)

    def trial(rng):
        return stat(sample(population, size, replace=replace, rng=rng))

    return _simulate(B, trial, rng, num_threads)


def bootstrap_samples(
    dist: Any,
    stat: Statistic,
    B: int,
    size: int | tuple[int, ...] | None = None,
    rng: RandomState = None,
    num_threads: int = 1,
) -> SamplingDistribution:
    """Generate bootstrap samples.

    Parameters
    ----------
     dist : EmpiricalDistribution
        The empirical distribution. Any object with a
        `sample(size=..., rng=...)` method will do, for example a
        MultiSampleEmpiricalDistribution or a parametric model.
     stat : function
        The statistic.
     B : int
        Number of bootstrap samples.
     size : int or tuple of ints, optional
        Size to pass for generating samples. Defaults to None.
     rng : numpy Generator or int, optional
        Random engine, or a seed for one.
     num_threads : int, optional
        Number of threads to use for multicore processing. Defaults to
        1, meaning all calculations will be done in a single
        thread. Set to -1 to use all available cores.

    Returns
    -------
     theta_star : SamplingDistribution
        Bootstrapped statistic values.

    """

    def trial(rng):
        return stat(dist.sample(size=size, rng=rng))

    return _simulate(B, trial, rng, num_threads)


def randomization_samples(
    x: ArrayLike,
    y: ArrayLike,
    stat: Callable[[Any, Any], Any],
    B: int = DEFAULT_TRIAL_COUNT,
    rng: RandomState = None,
    num_threads: int = 1,
) -> SamplingDistribution:
    """Null distribution of a two-group statistic under randomization.

    Parameters
    ----------
     x, y : array_like
        Observations of the two groups.
     stat : function
        Two-group statistic, called as `stat(group1, group2)`.
     B : int, optional
        Number of random reassignments. Defaults to 1000.
     rng : numpy Generator or int, optional
        Random engine, or a seed for one.
     num_threads : int, optional
        Number of threads to use for multicore processing. Defaults to
        1, meaning all calculations will be done in a single
        thread. Set to -1 to use all available cores.

    Returns
    -------
     theta_star : SamplingDistribution
        `stat` evaluated on each random reassignment of the pooled
        observations to groups of sizes len(x) and len(y).

    """
    x = np.asarray(x)
    y = np.asarray(y)
    pool = np.concatenate([x, y])
    n1, n2 = len(x), len(y)

    def trial(rng):
        g1, g2 = randomize_two_groups(pool, n1, n2, rng=rng)
        return stat(g1, g2)

    return _simulate(B, trial, rng, num_threads)


def jackknife_values(
    x: ArrayLike | Mapping[str, Any],
    stat: Statistic,
    num_threads: int = 1,
) -> npt.NDArray[np.float64]:
    """Compute jackknife values.

    Parameters
    ----------
     x : array_like, pandas DataFrame or mapping of columns
        The data.
     stat : function
        The statistic.
     num_threads : int, optional
        Number of threads to use for multicore processing. Defaults to
        1, meaning all calculations will be done in a single
        thread. Set to -1 to use all available cores.

    Returns
    -------
     jv : ndarray
        The jackknife values, shape (n,) or (n, k) for k-vector
        statistics.

    Raises
    ------
     InsufficientSampleSize
        If `x` has fewer than 2 observations.

    Notes
    -----
    The jackknife values consist of the statistic applied to a
    collection of datasets derived from the original by holding out
    each observation in turn. For example, let x1 be the dataset
    corresponding to x, but with the first datapoint removed. The
    first jackknife value is simply stat(x1).

    """
    num_threads = _num_threads(num_threads)
    x = _as_dataset(x)
    n = len(x)
    if n < 2:
        raise InsufficientSampleSize(
            f"Jackknife needs at least 2 observations, got {n}", n=n, minimum=2
        )

    def _jackknife_sim(x, stat, start, end):
        n = len(x)
        positions = np.arange(n)
        return [
            _statistic_value(stat(_take(x, np.delete(positions, i))))
            for i in range(start, end)
        ]

    if num_threads == 1:
        theta_i = _jackknife_sim(x, stat, 0, n)
    else:
        num_threads = min(num_threads, n)
        pool = Pool(num_threads)
        try:
            pool.restart()
        except AssertionError:
            pass

        results = []
        start = 0
        for batch_size in _batch_sizes(n, num_threads):
            end = start + batch_size
            r = pool.apipe(_jackknife_sim, x, stat, start, end)
            results.append(r)
            start = end

        try:
            theta_i = [t for res in results for t in res.get()]
        finally:
            pool.close()
            pool.join()

    shapes = {np.shape(t) for t in theta_i}
    if len(shapes) > 1:
        raise StatisticFunctionError(
            f"Statistic returned values of different shapes: {sorted(shapes)}"
        )
    return np.array(theta_i, dtype=np.float64)
