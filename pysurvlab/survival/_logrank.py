"""
Two-group log-rank test.

Algorithm:
    1. Pool the distinct event times of both groups
    2. At each time t_j:
       - n_1j, n_2j = subjects at risk (time >= t_j) in each group
       - d_1j, d_2j = events at exactly t_j
       - N_j = n_1j + n_2j, D_j = d_1j + d_2j
       - E_1j = n_1j * D_j / N_j
       - V_j  = n_1j * n_2j * D_j * (N_j - D_j) / (N_j^2 * (N_j - 1))
    3. chi^2 = (Σ d_1j - E_1j)^2 / Σ V_j on 1 degree of freedom

V_j is only accumulated when N_j > 1; with a single subject at risk the
hypergeometric variance is undefined and the term is skipped. If the
total variance is 0 the statistic is reported as 0 (p = 1).

References:
    Mantel, N. (1966). Evaluation of survival data and two new rank order
        statistics arising in its consideration. Cancer Chemotherapy
        Reports, 50(3), 163-170.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pysurvlab.survival._common import LogRankParams
from pysurvlab.survival._risk_set import risk_table
from pysurvlab.survival._special import chi_square_cdf


def logrank_two_group(
    time1: NDArray,
    event1: NDArray,
    time2: NDArray,
    event2: NDArray,
) -> LogRankParams:
    """Compute the log-rank test comparing two groups.

    Parameters
    ----------
    time1, event1 : NDArray
        Group 1 times and 0/1 event indicators.
    time2, event2 : NDArray
        Group 2 times and 0/1 event indicators.

    Returns
    -------
    LogRankParams
    """
    event_times = np.unique(np.concatenate((
        time1[event1 == 1], time2[event2 == 1],
    )))

    n1, d1 = risk_table(time1, event1 == 1, event_times)
    n2, d2 = risk_table(time2, event2 == 1, event_times)

    N = n1 + n2
    D = d1 + d2

    valid = (N > 0) & (D > 0)
    expected1 = np.zeros_like(N)
    expected1[valid] = n1[valid] * D[valid] / N[valid]
    expected2 = np.zeros_like(N)
    expected2[valid] = n2[valid] * D[valid] / N[valid]

    observed_minus_expected = float(np.sum(d1[valid] - expected1[valid]))

    has_var = valid & (N > 1)
    v = (n1[has_var] * n2[has_var] * D[has_var] * (N[has_var] - D[has_var])
         / (N[has_var] ** 2 * (N[has_var] - 1)))
    variance = float(np.sum(v))

    if variance > 0:
        statistic = observed_minus_expected ** 2 / variance
    else:
        statistic = 0.0

    p_value = 1.0 - chi_square_cdf(statistic, 1)

    return LogRankParams(
        statistic=statistic,
        df=1,
        p_value=float(p_value),
        observed=np.array([np.sum(d1[valid]), np.sum(d2[valid])]),
        expected=np.array([np.sum(expected1), np.sum(expected2)]),
        variance=variance,
        n_per_group=np.array([len(time1), len(time2)], dtype=np.float64),
    )
