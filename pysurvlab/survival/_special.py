"""
Special functions for log-rank p-values.

erf uses Abramowitz & Stegun formula 7.1.26, a 5-term rational
approximation with |error| <= 1.5e-7 for x >= 0, extended to x < 0 by
oddness. At x = 0 the polynomial evaluates to about -1e-9, not exactly 0.

References:
    Abramowitz, M. & Stegun, I. A. (1964). Handbook of Mathematical
        Functions, formula 7.1.26.
"""

from __future__ import annotations

import warnings

import numpy as np

_A1 = 0.254829592
_A2 = -0.284496736
_A3 = 1.421413741
_A4 = -1.453152027
_A5 = 1.061405429
_P = 0.3275911


def erf(x):
    """Error function approximation.

    Parameters
    ----------
    x : float or array-like

    Returns
    -------
    float or NDArray
        Same shape as ``x``.
    """
    x_arr = np.asarray(x, dtype=np.float64)
    sign = np.where(x_arr >= 0, 1.0, -1.0)
    a = np.abs(x_arr)

    t = 1.0 / (1.0 + _P * a)
    y = 1.0 - (((((_A5 * t + _A4) * t) + _A3) * t + _A2) * t + _A1) * t * np.exp(-a * a)
    out = sign * y

    if out.ndim == 0:
        return float(out)
    return out


def chi_square_cdf(x, df: int = 1):
    """Chi-squared CDF.

    For df = 1, P(X <= x) = erf(sqrt(x / 2)). Any other df falls back to
    1 - exp(-x / 2), which is exact only for df = 2 and a rough guess
    otherwise; a warning is issued. Results are clipped to [0, 1] so the
    erf approximation error cannot push p-values outside the unit
    interval.

    Parameters
    ----------
    x : float or array-like
        Statistic value(s); negative values are treated as 0.
    df : int
        Degrees of freedom.

    Returns
    -------
    float or NDArray
    """
    x_arr = np.maximum(np.asarray(x, dtype=np.float64), 0.0)

    if df == 1:
        out = np.asarray(erf(np.sqrt(x_arr / 2.0)))
    else:
        warnings.warn(
            f"chi_square_cdf: df={df} uses the approximation 1 - exp(-x/2); "
            f"use scipy.stats.chi2.cdf for accurate values",
            stacklevel=2,
        )
        out = 1.0 - np.exp(-x_arr / 2.0)

    out = np.clip(out, 0.0, 1.0)
    if out.ndim == 0:
        return float(out)
    return out
