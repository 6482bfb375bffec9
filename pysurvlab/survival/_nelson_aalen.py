"""
Nelson-Aalen cumulative hazard estimator.

    H(t) = Σ_{t_j <= t} d_j / n_j

with the same risk-set convention as the Kaplan-Meier estimator.

References:
    Nelson, W. (1972). Theory and applications of hazard plotting for
        censored failure data. Technometrics, 14(4), 945-966.
    Aalen, O. (1978). Nonparametric inference for a family of counting
        processes. Annals of Statistics, 6(4), 701-726.
"""

from __future__ import annotations

import numpy as np
from numpy.typing import NDArray

from pysurvlab.survival._common import NelsonAalenParams
from pysurvlab.survival._risk_set import risk_table


def nelson_aalen_fit(time: NDArray, event: NDArray) -> NelsonAalenParams:
    """Compute the Nelson-Aalen estimate at each distinct event time."""
    unique_event_times = np.unique(time[event == 1])
    n_risk, n_events = risk_table(time, event == 1, unique_event_times)

    hazard = n_events / n_risk
    return NelsonAalenParams(
        time=unique_event_times,
        hazard=hazard,
        cumulative_hazard=np.cumsum(hazard),
        n_risk=n_risk,
        n_events=n_events,
        n_observations=len(time),
    )
