"""
Cumulative incidence function for competing risks.

    CIF_k(t) = Σ_{t_j <= t} S(t_j-) · d_kj / n_j

where S is the all-cause Kaplan-Meier survival (any event type > 0 counts
as a failure) and d_kj the events of cause k at t_j.

Unlike the Kaplan-Meier and Nelson-Aalen kernels, every distinct observed
time is visited and emitted, including times at which only censoring
occurred; the CIF is flat across those.

S(t_j-) is recovered from the updated survival as S(t_j) · n_j / (n_j - D_j)
once at least one point has been emitted, and taken as 1 before that. When
n_j == D_j that ratio is undefined and the survival carried in from the
previous step is used instead.

References:
    Kalbfleisch, J. D. & Prentice, R. L. (2002). The Statistical Analysis
        of Failure Time Data, 2nd ed., section 8.2.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pysurvlab.survival._common import CIFParams
from pysurvlab.survival._risk_set import risk_table


def cumulative_incidence_fit(
    time: NDArray,
    event_type: NDArray,
    event_of_interest: int,
) -> CIFParams:
    """Compute the CIF for ``event_of_interest``.

    Parameters
    ----------
    time : NDArray
        (n,) observed times.
    event_type : NDArray
        (n,) integer outcome, 0 = censored.
    event_of_interest : int
        Cause whose incidence is accumulated.

    Returns
    -------
    CIFParams
    """
    unique_times = np.unique(time)
    n_risk, all_events = risk_table(time, event_type > 0, unique_times)
    _, events_of_interest = risk_table(
        time, event_type == event_of_interest, unique_times,
    )

    out_time = [0.0]
    out_cif = [0.0]
    current_cif = 0.0
    survival = 1.0

    for t_j, n_j, d_all, d_k in zip(unique_times, n_risk, all_events, events_of_interest):
        if n_j <= 0:
            continue

        survival_before = survival
        if d_all > 0:
            survival *= (n_j - d_all) / n_j

        if d_k > 0:
            if len(out_time) > 1 and n_j > d_all:
                previous_survival = (n_j / (n_j - d_all)) * survival
            elif len(out_time) > 1:
                previous_survival = survival_before
            else:
                previous_survival = 1.0
            current_cif += (d_k / n_j) * previous_survival

        out_time.append(float(t_j))
        out_cif.append(current_cif)

    return CIFParams(
        time=np.array(out_time),
        cif=np.array(out_cif),
        event_type=int(event_of_interest),
        n_observations=len(time),
        n_events_of_interest=int(np.sum(event_type == event_of_interest)),
    )
