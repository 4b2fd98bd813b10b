# pyre-unsafe
"""Model fits for use inside statistics.

A fit is an opaque function `fit(data) -> FitResult`. The helpers here
build fits from statsmodels formulas and turn a fit into an
index-based statistic for `bootstrap(..., indices=True)`.
"""

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import numpy as np
import numpy.typing as npt
import pandas as pd
import statsmodels.formula.api as smf

from resample_stat._utils import _take
from resample_stat.exceptions import StatisticFunctionError


@dataclass(frozen=True, eq=False)
class FitResult:
    """Fitted model coefficients.

    Attributes
    ----------
     coefficients : pandas Series
        Coefficient estimates indexed by term name, in model order.
     converged : boolean
        Whether the fitting procedure converged. Always True for
        closed-form fits like ordinary least squares.

    """

    coefficients: pd.Series
    converged: bool


Fit = Callable[[pd.DataFrame], FitResult]


def ols(formula: str) -> Fit:
    """Ordinary least squares fit.

    Parameters
    ----------
     formula : str
        Patsy formula, e.g. "amount ~ hrs".

    Returns
    -------
     fit : function
        Fits the model to a DataFrame and returns a FitResult.

    """

    def fit(data: pd.DataFrame) -> FitResult:
        res = smf.ols(formula=formula, data=data).fit()
        return FitResult(coefficients=res.params, converged=True)

    return fit


def logit(formula: str, maxiter: int = 35) -> Fit:
    """Logistic regression fit.

    Parameters
    ----------
     formula : str
        Patsy formula with a 0/1 response.
     maxiter : int, optional
        Maximum number of Newton iterations. Defaults to 35.

    Returns
    -------
     fit : function
        Fits the model to a DataFrame and returns a FitResult. A fit
        that runs out of iterations reports `converged` False.

    """

    def fit(data: pd.DataFrame) -> FitResult:
        res = smf.logit(formula=formula, data=data).fit(disp=0, maxiter=maxiter)
        return FitResult(
            coefficients=res.params,
            converged=bool(res.mle_retvals.get("converged", True)),
        )

    return fit


def coefficients_statistic(
    fit: Fit,
) -> Callable[[pd.DataFrame, npt.NDArray[np.intp]], npt.NDArray[np.float64]]:
    """Index-based statistic giving the coefficients of a refit.

    Parameters
    ----------
     fit : function
        A fit, as returned by `ols` or `logit`, or any function of a
        DataFrame returning a FitResult.

    Returns
    -------
     stat : function
        `stat(data, ind)` refits on the rows of `data` at positions
        `ind` and returns the coefficients as an array, in the order
        of the FitResult.

    Notes
    -----
    Errors raised by the fit, for instance on a singular design,
    propagate unmodified. A fit that did not converge raises
    StatisticFunctionError, since its coefficients would silently
    distort the bootstrap distribution.

    Examples
    --------
    >>> stat = coefficients_statistic(ols("y ~ z"))
    >>> result = bootstrap(df, stat, indices=True, rng=0)

    """

    def stat(data: Any, ind: npt.NDArray[np.intp]) -> npt.NDArray[np.float64]:
        result = fit(_take(data, ind))
        if not result.converged:
            raise StatisticFunctionError("Model fit did not converge")
        return result.coefficients.to_numpy(dtype=np.float64)

    return stat
