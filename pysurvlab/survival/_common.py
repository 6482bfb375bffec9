"""
Parameter payloads for survival analysis results.

Each dataclass is a frozen payload carried inside a Result[P] envelope.
"""

from __future__ import annotations

from dataclasses import dataclass

from numpy.typing import NDArray


@dataclass(frozen=True)
class KMParams:
    """Kaplan-Meier survival curve parameters.

    Index 0 is always the synthetic origin (t=0, S=1, CI=[1, 1]); each
    later index is a distinct observed event time.
    """

    time: NDArray                # (m+1,) 0 then unique event times
    survival: NDArray            # (m+1,) S(t)
    n_risk: NDArray              # (m+1,) subjects with time >= t
    n_events: NDArray            # (m+1,) events at exactly t
    se: NDArray                  # (m+1,) Greenwood standard error
    ci_lower: NDArray            # (m+1,) lower CI for S(t)
    ci_upper: NDArray            # (m+1,) upper CI for S(t)
    conf_level: float            # confidence level (e.g. 0.95)
    conf_type: str               # "plain" (default) or "log-log"
    n_observations: int          # total n
    n_events_total: int          # total events


@dataclass(frozen=True)
class HazardPoint:
    """One step of the Nelson-Aalen estimate."""

    time: float
    hazard: float                # d / n at this time
    cumulative_hazard: float     # running sum of hazard


@dataclass(frozen=True)
class NelsonAalenParams:
    """Nelson-Aalen cumulative hazard parameters."""

    time: NDArray                # (m,) unique event times
    hazard: NDArray              # (m,) increments d_j / n_j
    cumulative_hazard: NDArray   # (m,) H(t)
    n_risk: NDArray              # (m,)
    n_events: NDArray            # (m,)
    n_observations: int


@dataclass(frozen=True)
class LogRankParams:
    """Two-group log-rank test parameters."""

    statistic: float             # chi-squared statistic
    df: int                      # always 1
    p_value: float
    observed: NDArray            # (2,) observed events per group
    expected: NDArray            # (2,) expected events per group
    variance: float              # hypergeometric variance of O1 - E1
    n_per_group: NDArray         # (2,) subjects per group


@dataclass(frozen=True)
class CIFParams:
    """Cumulative incidence function for one cause.

    Starts at (0, 0); one entry per distinct observed time, censoring-only
    times included.
    """

    time: NDArray                # (m+1,)
    cif: NDArray                 # (m+1,)
    event_type: int              # cause of interest
    n_observations: int
    n_events_of_interest: int
