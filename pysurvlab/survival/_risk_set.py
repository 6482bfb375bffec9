"""
Risk-set counting by a single sorted sweep.

For query times t_1 < t_2 < ... < t_m, returns

    n_risk[j] = #{i : time_i >= t_j}
    counts[j] = #{i : time_i == t_j and flag_i}

Subjects censored at exactly t_j are still in the risk set at t_j.
One pass over the sorted cohort with a pointer replaces filtering the
whole cohort at every time point.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray


def risk_table(
    time: NDArray,
    flag: NDArray,
    at_times: NDArray,
) -> tuple[NDArray, NDArray]:
    """Number at risk and flagged count at each of ``at_times``.

    Parameters
    ----------
    time : NDArray
        (n,) observed times.
    flag : NDArray
        (n,) boolean or 0/1 indicator of the outcome to count.
    at_times : NDArray
        (m,) strictly increasing query times.

    Returns
    -------
    (n_risk, counts) : tuple of (m,) float arrays
    """
    n = len(time)
    order = np.argsort(time, kind="stable")
    t_sorted = time[order]
    f_sorted = np.asarray(flag)[order]

    m = len(at_times)
    n_risk = np.zeros(m, dtype=np.float64)
    counts = np.zeros(m, dtype=np.float64)

    ptr = 0
    for j, t_j in enumerate(at_times):
        while ptr < n and t_sorted[ptr] < t_j:
            ptr += 1

        n_risk[j] = n - ptr

        while ptr < n and t_sorted[ptr] == t_j:
            if f_sorted[ptr]:
                counts[j] += 1
            ptr += 1

    return n_risk, counts
