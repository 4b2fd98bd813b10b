# pyre-unsafe
"""Achieved significance levels of randomization tests."""

from collections.abc import Callable
from typing import Any, Literal

import numpy as np

from resample_stat._utils import (
    DEFAULT_TRIAL_COUNT,
    ArrayLike,
    RandomState,
    _statistic_value,
)
from resample_stat.results import RandomizationResult
from resample_stat.sampling import randomization_samples
from resample_stat.stats import difference_in_means


def randomization_test(
    x: ArrayLike,
    y: ArrayLike,
    stat: Callable[[Any, Any], float] = difference_in_means,
    trial_count: int = DEFAULT_TRIAL_COUNT,
    alternative: Literal["two-sided", "greater", "less"] = "two-sided",
    rng: RandomState = None,
    num_threads: int = 1,
) -> RandomizationResult:
    """Randomization (permutation) test of two groups.

    Parameters
    ----------
     x, y : array_like
        Observations of the two groups.
     stat : function, optional
        Test statistic, called as `stat(x, y)`. Defaults to the
        difference in means, mean(y) - mean(x).
     trial_count : int, optional
        Number of random reassignments. Defaults to 1000.
     alternative : ["two-sided", "greater", "less"], optional
        Which outcomes count as at least as extreme as the observed
        statistic. Defaults to "two-sided", comparing absolute
        values.
     rng : numpy Generator or int, optional
        Random engine, or a seed for one.
     num_threads : int, optional
        Number of threads to use for multicore processing. Defaults to
        1, meaning all calculations will be done in a single
        thread. Set to -1 to use all available cores.

    Returns
    -------
     result : RandomizationResult
        Observed statistic, null distribution and achieved
        significance level.

    Notes
    -----
    Under the null hypothesis the group labels carry no information,
    so every reassignment of the pooled observations to groups of the
    observed sizes is equally likely. The achieved significance level
    is the fraction of reassignments giving a statistic at least as
    extreme as the one observed.

    """
    if alternative not in ("two-sided", "greater", "less"):
        raise ValueError(f"Invalid alternative: {alternative!r}")

    observed = _statistic_value(stat(np.asarray(x), np.asarray(y)))
    theta_star = randomization_samples(
        x, y, stat, B=trial_count, rng=rng, num_threads=num_threads
    )

    if alternative == "two-sided":
        extreme = np.abs(theta_star.values) >= abs(observed)
    elif alternative == "greater":
        extreme = theta_star.values >= observed
    else:
        extreme = theta_star.values <= observed

    asl = np.sum(extreme) / theta_star.trial_count
    return RandomizationResult(
        observed=observed,
        distribution=theta_star,
        asl=float(asl),
        alternative=alternative,
    )
