"""
Kaplan-Meier product-limit estimator.

- Product-limit survival estimate: S(t) = ∏(1 - d_j / n_j)
- Greenwood variance: Var(S(t)) = S(t)^2 * Σ(d_j / (n_j * (n_j - d_j)))
- Confidence intervals: plain S ± z·se (default) or log-log

n_j counts every subject with time >= t_j, including those censored at
t_j. Only times with at least one event produce a step; the curve is
prefixed with the origin (0, 1).

The default "plain" interval is the linear one the curve plots were
built with. "log-log" keeps the bounds inside (0, 1) without clipping
and behaves better in the tails.

References:
    Kaplan, E. L., & Meier, P. (1958). Nonparametric estimation from
        incomplete observations. JASA, 53(282), 457-481.
    Greenwood, M. (1926). The natural duration of cancer.
"""

from __future__ import annotations

import math

import numpy as np
from numpy.typing import NDArray
from scipy import stats

from pysurvlab.survival._common import KMParams
from pysurvlab.survival._risk_set import risk_table

# Conventional two-sided 95% normal quantile used for the plotted bands
Z_95 = 1.96


def z_value(conf_level: float) -> float:
    """Two-sided normal quantile for ``conf_level``; 1.96 at 95%."""
    if math.isclose(conf_level, 0.95):
        return Z_95
    return float(stats.norm.ppf((1.0 + conf_level) / 2.0))


def kaplan_meier_fit(
    time: NDArray,
    event: NDArray,
    conf_level: float,
    conf_type: str,
) -> KMParams:
    """Compute Kaplan-Meier survival curve.

    Parameters
    ----------
    time : NDArray
        (n,) time to event or censoring.
    event : NDArray
        (n,) event indicator (1=event, 0=censored).
    conf_level : float
        Confidence level for CI (e.g. 0.95).
    conf_type : str
        CI type: "plain" or "log-log".

    Returns
    -------
    KMParams
    """
    n_total = len(time)
    n_events_total = int(np.sum(event))

    # Censoring times never create a step
    unique_event_times = np.unique(time[event == 1])
    n_risk, n_events = risk_table(time, event == 1, unique_event_times)

    # Product-limit estimate
    survival = np.cumprod((n_risk - n_events) / n_risk)

    # Greenwood sum; a step where everyone at risk fails (n_j == d_j)
    # takes S to 0 and contributes nothing, so se = 0 there
    denom = n_risk * (n_risk - n_events)
    denom = np.where(denom > 0, denom, np.inf)
    greenwood_sum = np.cumsum(n_events / denom)
    se = survival * np.sqrt(greenwood_sum)

    z = z_value(conf_level)
    ci_lower, ci_upper = _compute_ci(survival, se, z, conf_type)

    return KMParams(
        time=np.concatenate(([0.0], unique_event_times)),
        survival=np.concatenate(([1.0], survival)),
        n_risk=np.concatenate(([float(n_total)], n_risk)),
        n_events=np.concatenate(([0.0], n_events)),
        se=np.concatenate(([0.0], se)),
        ci_lower=np.concatenate(([1.0], ci_lower)),
        ci_upper=np.concatenate(([1.0], ci_upper)),
        conf_level=conf_level,
        conf_type=conf_type,
        n_observations=n_total,
        n_events_total=n_events_total,
    )


def _compute_ci(
    survival: NDArray,
    se: NDArray,
    z: float,
    conf_type: str,
) -> tuple[NDArray, NDArray]:
    """Compute CI for survival function.

    Parameters
    ----------
    survival : S(t) values
    se : Greenwood standard errors
    z : normal quantile (e.g. 1.96 for 95%)
    conf_type : "plain" or "log-log"

    Returns
    -------
    (ci_lower, ci_upper) clipped to [0, 1]
    """
    if conf_type == "plain":
        ci_lower = survival - z * se
        ci_upper = survival + z * se

    elif conf_type == "log-log":
        # exp(-exp(log(-log S) ± z * se / (S * |log S|)))
        with np.errstate(divide='ignore', invalid='ignore'):
            log_s = np.log(survival)
            log_neg_log_s = np.log(-log_s)
            se_loglog = se / (survival * np.abs(log_s))
            ci_lower = np.exp(-np.exp(log_neg_log_s + z * se_loglog))
            ci_upper = np.exp(-np.exp(log_neg_log_s - z * se_loglog))
    else:
        raise ValueError(
            f"Unknown conf_type '{conf_type}'. "
            f"Choose from 'plain', 'log-log'."
        )

    ci_lower = np.clip(ci_lower, 0.0, 1.0)
    ci_upper = np.clip(ci_upper, 0.0, 1.0)

    # NaN from S=0 under log-log: widest valid band
    ci_lower = np.where(np.isnan(ci_lower), 0.0, ci_lower)
    ci_upper = np.where(np.isnan(ci_upper), 1.0, ci_upper)

    return ci_lower, ci_upper
