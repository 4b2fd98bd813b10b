# pyre-unsafe
"""Monte Carlo, bootstrap and jackknife methods for sampling distributions.

This package simulates the sampling distribution of a statistic, by
repeated sampling from a population, resampling a dataset, or randomly
reassigning group labels, and derives standard errors and confidence
intervals from it. It also provides jackknife estimates with
bias-corrected point estimates and t intervals, and randomization
tests.

All random draws go through an explicit numpy Generator passed as
`rng`, so seeding it makes results reproducible.

References
----------
[ET93]:  Bradley Efron and Robert J. Tibshirani, "An Introduction to the
         Bootstrap". Chapman & Hall, 1993.
[Efr82]: Bradley Efron, "The Jackknife, the Bootstrap and Other
         Resampling Plans". SIAM, 1982.

"""

# Type aliases (public)
from resample_stat._utils import ArrayLike, RandomState, Statistic

# Bootstrap estimation
from resample_stat.bootstrap import bootstrap

# Confidence intervals
from resample_stat.confidence import normal_interval, percentile_interval, summarize

# Distribution classes
from resample_stat.distributions import (
    EmpiricalDistribution,
    MultiSampleEmpiricalDistribution,
    ParametricDistribution,
    SamplingDistribution,
)

# Errors
from resample_stat.exceptions import (
    InsufficientSampleSize,
    InvalidConfidenceLevel,
    InvalidSampleSize,
    InvalidTrialCount,
    ResampleStatError,
    SizeMismatch,
    StatisticFunctionError,
    ValidationError,
)

# Jackknife estimation
from resample_stat.jackknife import jackknife, jackknife_bias

# Model fits
from resample_stat.models import FitResult, coefficients_statistic, logit, ols

# Result records
from resample_stat.results import (
    BootstrapResult,
    ConfidenceInterval,
    JackknifeResult,
    RandomizationResult,
    Summary,
)

# Sampling functions
from resample_stat.sampling import (
    bootstrap_samples,
    jackknife_values,
    multithreaded_simulate,
    randomization_samples,
    randomize_two_groups,
    sample,
    sampling_distribution,
    simulate,
)

# Significance testing
from resample_stat.significance import randomization_test

# Standard error estimation
from resample_stat.standard_error import jackknife_standard_error, standard_error

__all__ = [
    # Type aliases
    "ArrayLike",
    "RandomState",
    "Statistic",
    # Errors
    "ResampleStatError",
    "ValidationError",
    "InvalidSampleSize",
    "SizeMismatch",
    "InvalidTrialCount",
    "InvalidConfidenceLevel",
    "InsufficientSampleSize",
    "StatisticFunctionError",
    # Distributions
    "EmpiricalDistribution",
    "MultiSampleEmpiricalDistribution",
    "ParametricDistribution",
    "SamplingDistribution",
    # Results
    "ConfidenceInterval",
    "Summary",
    "JackknifeResult",
    "BootstrapResult",
    "RandomizationResult",
    # Sampling
    "sample",
    "randomize_two_groups",
    "simulate",
    "multithreaded_simulate",
    "sampling_distribution",
    "bootstrap_samples",
    "randomization_samples",
    "jackknife_values",
    # Confidence intervals
    "percentile_interval",
    "normal_interval",
    "summarize",
    # Standard error
    "jackknife_standard_error",
    "standard_error",
    # Estimators
    "jackknife",
    "jackknife_bias",
    "bootstrap",
    # Significance testing
    "randomization_test",
    # Model fits
    "FitResult",
    "ols",
    "logit",
    "coefficients_statistic",
]
