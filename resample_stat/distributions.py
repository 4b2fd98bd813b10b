# pyre-unsafe
"""Distribution classes: sources to sample from, and the sampling
distributions produced by Monte Carlo simulation."""

from collections.abc import Mapping
from typing import Any, Literal, overload

import numpy as np
import numpy.typing as npt
import pandas as pd

from resample_stat._utils import (
    ArrayLike,
    RandomState,
    Statistic,
    _as_dataset,
    _as_generator,
    _check_sample_size,
    _take,
)
from resample_stat.exceptions import InsufficientSampleSize, InvalidSampleSize


class EmpiricalDistribution:
    r"""Empirical Distribution

    The Empirical Distribution puts probability 1/n on each of n
    observations.

    Parameters
    ----------
     data : array_like, pandas DataFrame or mapping of columns
        The data. A mapping of named columns is converted to a
        DataFrame.

    """

    data: npt.NDArray[Any] | pd.Series | pd.DataFrame
    n: int
    is_multi_sample: bool

    def __init__(self, data: ArrayLike | Mapping[str, Any]) -> None:
        self.data = _as_dataset(data)
        self.n = len(self.data)
        if self.n == 0:
            raise InvalidSampleSize("Cannot sample from an empty dataset")
        self.is_multi_sample = False

    @overload
    def sample(
        self,
        size: int | None = None,
        replace: bool = True,
        return_indices: Literal[False] = False,
        reset_index: bool = True,
        rng: RandomState = None,
    ) -> npt.NDArray[Any] | pd.DataFrame: ...

    @overload
    def sample(
        self,
        size: int | None,
        replace: bool,
        return_indices: Literal[True],
        reset_index: bool = True,
        rng: RandomState = None,
    ) -> tuple[npt.NDArray[Any] | pd.DataFrame, npt.NDArray[np.intp]]: ...

    def sample(
        self,
        size: int | None = None,
        replace: bool = True,
        return_indices: bool = False,
        reset_index: bool = True,
        rng: RandomState = None,
    ) -> (
        npt.NDArray[Any]
        | pd.DataFrame
        | tuple[npt.NDArray[Any] | pd.DataFrame, npt.NDArray[np.intp]]
    ):
        """Sample from the empirical distribution

        Parameters
        ----------
         size : int, optional
            Number of observations. If None (default), samples the
            same number of points as the original dataset.
         replace : boolean, optional
            If True (default), sample with replacement: a bootstrap
            sample, with each point drawn independently and uniformly
            from the data. If False, draw a simple random sample of
            distinct observations, every subset of size `size` being
            equally likely.
         return_indices : boolean, optional
            If True, return the positions of the data points
            sampled. Defaults to False.
         reset_index : boolean, optional
            If True (default), reset the index. Applies only to data
            frames. This is usually what we would want to do, except
            for debugging perhaps.
         rng : numpy Generator or int, optional
            Random engine, or a seed for one.

        Returns
        -------
         samples : ndarray or pandas DataFrame
            Samples from the empirical distribution.
         ind : ndarray
            Positions of samples chosen. Only returned if
            `return_indices` is True.

        Raises
        ------
         InvalidSampleSize
            If `size` is not a positive integer, or exceeds the size
            of the dataset when `replace` is False.

        """
        s = self.n if size is None else _check_sample_size(size)
        if not replace and s > self.n:
            raise InvalidSampleSize(
                f"Cannot draw {s} observations without replacement from "
                f"a dataset of size {self.n}"
            )

        ind = _as_generator(rng).choice(self.n, size=s, replace=replace)
        samples = _take(self.data, ind, reset_index=reset_index)
        if return_indices:
            return samples, ind
        else:
            return samples

    def calculate_parameter(self, t: Statistic) -> Any:
        """Calculate a parameter of the distribution.

        Parameters
        ----------
         t : function
            Function to be applied to dataset. If using an n-Sample
            Distribution, t should take as input a tuple of data sets
            of the appropriate size.

        Returns
        -------
         tF : float
            Parameter of distribution.

        """
        return t(self.data)


class MultiSampleEmpiricalDistribution(EmpiricalDistribution):
    r"""Multi-Sample Empirical Distribution

    Parameters
    ----------
     datasets : tuple of arrays or pandas DataFrames.
        Observed data sets.

    Notes
    -----
    Suppose we observe

    .. math::

       x_i \sim F, i=1,...,m

       y_j \sim G, j=1,...,n

    Then :math:`P = (\hat{F}, \hat{G})` is the probabilistic mechanism
    consisting of the two empirical distributions. Sampling from
    :math:`P` amounts to sampling :math:`m` points IID from
    :math:`\hat{F}`, and :math:`n` points IID from :math:`\hat{G}`,
    which is how a two-group comparison is bootstrapped.

    Examples
    --------
    >>> rng = np.random.default_rng(0)
    >>> dist = MultiSampleEmpiricalDistribution(([1, 2, 3], [4, 5, 6]))
    >>> a, b = dist.sample(rng=rng)

    """

    dists: list[EmpiricalDistribution]
    n: list[int]  # type: ignore[assignment]

    def __init__(self, datasets: tuple[ArrayLike, ...]) -> None:
        self.data = datasets
        self.dists = [EmpiricalDistribution(d) for d in datasets]
        self.n = [d.n for d in self.dists]
        self.is_multi_sample = True

    def sample(  # type: ignore[override]
        self,
        size: tuple[int, ...] | list[int] | None = None,
        rng: RandomState = None,
    ) -> tuple[npt.NDArray[Any] | pd.DataFrame, ...]:
        """Sample from the empirical distributions

        Parameters
        ----------
         size : tuple of ints, optional
            Number of samples to be drawn from each
            EmpiricalDistribution. If None (default), samples the same
            numbers of points as the original datasets.
         rng : numpy Generator or int, optional
            Random engine, or a seed for one. Shared by all datasets.

        Returns
        -------
         samples : tuple of ndarray or pandas DataFrame
            IID samples from the empirical distributions.

        """
        rng = _as_generator(rng)
        s = self.n if size is None else size
        samples = [d.sample(size=si, rng=rng) for d, si in zip(self.dists, s)]
        return (*samples,)


class ParametricDistribution:
    """Parametric population.

    Parameters
    ----------
     family : ["normal", "poisson", "exponential", "uniform"]
        Distribution family.
     **params
        Family parameters:

        * normal: `mean` (default 0), `sd` (default 1)
        * poisson: `rate`
        * exponential: `rate` (default 1)
        * uniform: `low` (default 0), `high` (default 1)

    Examples
    --------
    >>> heights = ParametricDistribution("normal", mean=175.7, sd=15.19)
    >>> x = heights.sample(30, rng=np.random.default_rng(0))

    """

    FAMILIES = ("normal", "poisson", "exponential", "uniform")

    family: str
    params: dict[str, float]

    def __init__(self, family: str, **params: float) -> None:
        if family not in self.FAMILIES:
            raise ValueError(
                f"Unknown family {family!r}; expected one of {self.FAMILIES}"
            )

        if family == "normal":
            params = {"mean": params.get("mean", 0.0), "sd": params.get("sd", 1.0)}
            if params["sd"] < 0:
                raise ValueError(f"Invalid standard deviation: {params['sd']}")
        elif family == "poisson":
            if "rate" not in params:
                raise ValueError("Poisson family requires a `rate`")
            params = {"rate": params["rate"]}
            if params["rate"] < 0:
                raise ValueError(f"Invalid rate: {params['rate']}")
        elif family == "exponential":
            params = {"rate": params.get("rate", 1.0)}
            if params["rate"] <= 0:
                raise ValueError(f"Invalid rate: {params['rate']}")
        else:
            params = {"low": params.get("low", 0.0), "high": params.get("high", 1.0)}
            if params["high"] < params["low"]:
                raise ValueError(
                    f"Invalid bounds: low={params['low']}, high={params['high']}"
                )

        self.family = family
        self.params = params

    def __repr__(self) -> str:
        args = ", ".join(f"{k}={v}" for k, v in self.params.items())
        return f"ParametricDistribution({self.family!r}, {args})"

    @property
    def mean(self) -> float:
        """Population mean."""
        p = self.params
        if self.family == "normal":
            return p["mean"]
        elif self.family == "poisson":
            return p["rate"]
        elif self.family == "exponential":
            return 1.0 / p["rate"]
        else:
            return 0.5 * (p["low"] + p["high"])

    @property
    def sd(self) -> float:
        """Population standard deviation."""
        p = self.params
        if self.family == "normal":
            return p["sd"]
        elif self.family == "poisson":
            return float(np.sqrt(p["rate"]))
        elif self.family == "exponential":
            return 1.0 / p["rate"]
        else:
            return (p["high"] - p["low"]) / np.sqrt(12)

    def sample(self, size: int, rng: RandomState = None) -> npt.NDArray[Any]:
        """Draw `size` independent observations.

        Raises
        ------
         InvalidSampleSize
            If `size` is not a positive integer.

        """
        size = _check_sample_size(size)
        rng = _as_generator(rng)
        p = self.params
        if self.family == "normal":
            return rng.normal(p["mean"], p["sd"], size=size)
        elif self.family == "poisson":
            return rng.poisson(p["rate"], size=size)
        elif self.family == "exponential":
            return rng.exponential(1.0 / p["rate"], size=size)
        else:
            return rng.uniform(p["low"], p["high"], size=size)


class SamplingDistribution:
    """Empirical sampling distribution of a statistic.

    One statistic value per Monte Carlo trial, in trial order. The
    values are stored in a read-only array of shape (B,) for scalar
    statistics or (B, k) for k-vector statistics.

    Parameters
    ----------
     values : array_like
        Statistic values, one per trial.

    """

    values: npt.NDArray[np.float64]

    def __init__(self, values: npt.ArrayLike) -> None:
        values = np.array(values, dtype=np.float64)
        if values.ndim not in (1, 2) or len(values) == 0:
            raise ValueError(
                "A sampling distribution needs a non-empty 1-d or 2-d array, "
                f"got shape {values.shape}"
            )
        values.flags.writeable = False
        self.values = values

    def __len__(self) -> int:
        return len(self.values)

    def __repr__(self) -> str:
        return (
            f"SamplingDistribution(trial_count={self.trial_count}, "
            f"shape={self.statistic_shape})"
        )

    @property
    def trial_count(self) -> int:
        return len(self.values)

    @property
    def statistic_shape(self) -> tuple[int, ...]:
        """Shape of a single statistic value: () for scalars."""
        return self.values.shape[1:]

    def mean(self) -> float | npt.NDArray[np.float64]:
        m = np.mean(self.values, axis=0)
        return float(m) if m.ndim == 0 else m

    def standard_error(self) -> float | npt.NDArray[np.float64]:
        """Standard deviation of the distribution, divisor B - 1.

        This is the Monte Carlo estimate of the standard error of the
        statistic.

        """
        if self.trial_count < 2:
            raise InsufficientSampleSize(
                "Standard error needs at least 2 trials",
                n=self.trial_count,
                minimum=2,
            )
        se = np.std(self.values, axis=0, ddof=1)
        return float(se) if se.ndim == 0 else se
