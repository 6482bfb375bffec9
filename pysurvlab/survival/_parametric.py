"""
Closed-form reference curves for the parametric models the generators
sample from. Useful for overlaying the true S(t) on an estimate.

All functions accept scalars or arrays and broadcast like numpy ufuncs.
"""

from __future__ import annotations

import numpy as np


def _out(x):
    x = np.asarray(x)
    return float(x) if x.ndim == 0 else x


def exponential_survival(t, lam: float):
    """S(t) = exp(-λ t)."""
    return _out(np.exp(-lam * np.asarray(t, dtype=np.float64)))


def weibull_survival(t, lam: float, k: float):
    """S(t) = exp(-(λ t)^k).

    Note the Weibull generator is parameterised as exp(-λ t^k); its true
    curve is ``weibull_survival(t, lam ** (1 / k), k)``.
    """
    return _out(np.exp(-np.power(lam * np.asarray(t, dtype=np.float64), k)))


def weibull_hazard(t, lam: float, k: float):
    """h(t) = k λ (λ t)^(k-1).

    At t = 0 this is 0 for k > 1 and +inf for k < 1.
    """
    with np.errstate(divide='ignore'):
        return _out(k * lam * np.power(lam * np.asarray(t, dtype=np.float64), k - 1))


def hazard_ratio(coefficient: float, delta: float = 1.0) -> float:
    """Hazard ratio exp(β · Δ) for a covariate change of ``delta``.

    e.g. ``hazard_ratio(0.02, 10)`` is the hazard ratio for ten extra
    years of age under an age coefficient of 0.02.
    """
    return float(np.exp(coefficient * delta))
