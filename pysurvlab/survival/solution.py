"""
Solution wrappers for survival analysis results.

Each Solution wraps a Result[Params] and exposes user-friendly properties,
a plain-dict export for plotting, and a text summary() method.
"""

from __future__ import annotations

import numpy as np

from pysurvlab.core.result import Result
from pysurvlab.survival._common import (
    CIFParams,
    HazardPoint,
    KMParams,
    LogRankParams,
    NelsonAalenParams,
)

_MAX_SUMMARY_ROWS = 20


class _SolutionBase:
    """Shared envelope accessors."""

    __slots__ = ('_result',)

    def __init__(self, _result: Result) -> None:
        self._result = _result

    @property
    def backend_name(self) -> str:
        return self._result.backend_name

    @property
    def timing(self):
        return self._result.timing

    @property
    def warnings(self) -> tuple[str, ...]:
        return self._result.warnings

    @property
    def info(self) -> dict:
        return self._result.info


class KMSolution(_SolutionBase):
    """Kaplan-Meier survival curve solution.

    All arrays are parallel and start with the origin (0, 1).
    """

    __slots__ = ()

    def __init__(self, _result: Result[KMParams]) -> None:
        super().__init__(_result)

    # -- Properties delegating to KMParams --

    @property
    def time(self):
        """0 followed by the unique event times."""
        return self._result.params.time

    @property
    def survival(self):
        """S(t) at each time."""
        return self._result.params.survival

    @property
    def n_risk(self):
        """Number at risk (time >= t) at each time."""
        return self._result.params.n_risk

    @property
    def n_events(self):
        """Number of events at each time."""
        return self._result.params.n_events

    @property
    def se(self):
        """Greenwood standard error of S(t)."""
        return self._result.params.se

    @property
    def ci_lower(self):
        """Lower confidence bound for S(t)."""
        return self._result.params.ci_lower

    @property
    def ci_upper(self):
        """Upper confidence bound for S(t)."""
        return self._result.params.ci_upper

    @property
    def conf_level(self) -> float:
        return self._result.params.conf_level

    @property
    def conf_type(self) -> str:
        return self._result.params.conf_type

    @property
    def n_observations(self) -> int:
        return self._result.params.n_observations

    @property
    def n_events_total(self) -> int:
        return self._result.params.n_events_total

    @property
    def median_survival(self) -> float | None:
        """Median survival time (smallest t where S(t) <= 0.5)."""
        idx = self.survival <= 0.5
        if not idx.any():
            return None
        return float(self.time[idx][0])

    def survival_at(self, t):
        """Evaluate the right-continuous step function S(t).

        Times before 0 return 1.
        """
        t_arr = np.asarray(t, dtype=np.float64)
        idx = np.searchsorted(self.time, t_arr, side='right') - 1
        out = np.where(idx >= 0, self.survival[np.maximum(idx, 0)], 1.0)
        return float(out) if out.ndim == 0 else out

    def log_log_survival(self, floor: float = 0.001):
        """log(-log S(t)) for proportional hazards diagnostics.

        S is floored at ``floor`` so the transform stays finite once the
        curve reaches 0. At S = 1 (the origin) the value is -inf.
        """
        s = np.maximum(self.survival, floor)
        with np.errstate(divide='ignore'):
            return np.log(-np.log(s))

    def to_dict(self) -> dict[str, list]:
        """Parallel lists ready for a charting layer."""
        return {
            "time": self.time.tolist(),
            "survival": self.survival.tolist(),
            "n_risk": self.n_risk.astype(int).tolist(),
            "n_event": self.n_events.astype(int).tolist(),
            "confidence_lower": self.ci_lower.tolist(),
            "confidence_upper": self.ci_upper.tolist(),
        }

    def summary(self) -> str:
        """Text summary of the Kaplan-Meier fit."""
        lines = []
        lines.append("Call: kaplan_meier()")
        lines.append("")
        lines.append(
            f"  n={self.n_observations}, "
            f"events={self.n_events_total}"
        )
        lines.append("")

        median = self.median_survival
        median_str = f"{median:.4g}" if median is not None else "NA"
        lines.append(f"  median survival = {median_str}")
        lines.append("")

        ci_pct = int(round(self.conf_level * 100))
        lines.append(
            f"  {'time':>8s}  {'n.risk':>8s}  {'n.event':>8s}  "
            f"{'survival':>10s}  {'se':>10s}  "
            f"{f'lower {ci_pct}%':>10s}  {f'upper {ci_pct}%':>10s}"
        )

        # Skip the synthetic origin row
        m = len(self.time) - 1
        show = min(m, _MAX_SUMMARY_ROWS)
        for i in range(1, show + 1):
            lines.append(
                f"  {self.time[i]:8.4g}  {self.n_risk[i]:8.0f}  "
                f"{self.n_events[i]:8.0f}  "
                f"{self.survival[i]:10.6f}  {self.se[i]:10.6f}  "
                f"{self.ci_lower[i]:10.6f}  {self.ci_upper[i]:10.6f}"
            )
        if m > _MAX_SUMMARY_ROWS:
            lines.append(f"  ... ({m - _MAX_SUMMARY_ROWS} more rows)")

        for w in self.warnings:
            lines.append(f"  Warning: {w}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"KMSolution(n={self.n_observations}, "
            f"events={self.n_events_total}, "
            f"median={self.median_survival})"
        )


class NelsonAalenSolution(_SolutionBase):
    """Nelson-Aalen cumulative hazard solution."""

    __slots__ = ()

    def __init__(self, _result: Result[NelsonAalenParams]) -> None:
        super().__init__(_result)

    @property
    def time(self):
        """Unique event times."""
        return self._result.params.time

    @property
    def hazard(self):
        """Hazard increment d_j / n_j at each event time."""
        return self._result.params.hazard

    @property
    def cumulative_hazard(self):
        return self._result.params.cumulative_hazard

    @property
    def n_risk(self):
        return self._result.params.n_risk

    @property
    def n_events(self):
        return self._result.params.n_events

    @property
    def n_observations(self) -> int:
        return self._result.params.n_observations

    @property
    def points(self) -> tuple[HazardPoint, ...]:
        """One HazardPoint per event time."""
        p = self._result.params
        return tuple(
            HazardPoint(time=float(t), hazard=float(h), cumulative_hazard=float(c))
            for t, h, c in zip(p.time, p.hazard, p.cumulative_hazard)
        )

    def to_dict(self) -> dict[str, list]:
        return {
            "time": self.time.tolist(),
            "hazard": self.hazard.tolist(),
            "cumulative_hazard": self.cumulative_hazard.tolist(),
        }

    def summary(self) -> str:
        """Text summary of the Nelson-Aalen fit."""
        lines = ["Call: nelson_aalen()", ""]
        lines.append(f"  n={self.n_observations}, event times={len(self.time)}")
        lines.append("")
        lines.append(
            f"  {'time':>8s}  {'n.risk':>8s}  {'n.event':>8s}  "
            f"{'hazard':>10s}  {'cumhaz':>10s}"
        )
        m = len(self.time)
        for i in range(min(m, _MAX_SUMMARY_ROWS)):
            lines.append(
                f"  {self.time[i]:8.4g}  {self.n_risk[i]:8.0f}  "
                f"{self.n_events[i]:8.0f}  "
                f"{self.hazard[i]:10.6f}  {self.cumulative_hazard[i]:10.6f}"
            )
        if m > _MAX_SUMMARY_ROWS:
            lines.append(f"  ... ({m - _MAX_SUMMARY_ROWS} more rows)")
        return "\n".join(lines)

    def __repr__(self) -> str:
        final = float(self.cumulative_hazard[-1]) if len(self.time) else 0.0
        return (
            f"NelsonAalenSolution(n={self.n_observations}, "
            f"event_times={len(self.time)}, H_max={final:.4g})"
        )


class LogRankSolution(_SolutionBase):
    """Two-group log-rank test solution."""

    __slots__ = ()

    def __init__(self, _result: Result[LogRankParams]) -> None:
        super().__init__(_result)

    @property
    def statistic(self) -> float:
        """Chi-squared statistic."""
        return self._result.params.statistic

    @property
    def df(self) -> int:
        return self._result.params.df

    @property
    def p_value(self) -> float:
        return self._result.params.p_value

    @property
    def observed(self):
        return self._result.params.observed

    @property
    def expected(self):
        return self._result.params.expected

    @property
    def variance(self) -> float:
        return self._result.params.variance

    @property
    def n_per_group(self):
        return self._result.params.n_per_group

    def to_dict(self) -> dict[str, float]:
        return {
            "chi_square": self.statistic,
            "p_value": self.p_value,
            "df": self.df,
        }

    def summary(self) -> str:
        """Text summary of the log-rank test."""
        lines = []
        lines.append("Call: logrank_test()")
        lines.append("")

        lines.append(f"  {'':>8s}  {'N':>6s}  {'Observed':>10s}  {'Expected':>10s}  {'(O-E)^2/E':>10s}")
        for i in range(2):
            oe = ((self.observed[i] - self.expected[i]) ** 2
                  / self.expected[i]) if self.expected[i] > 0 else 0
            lines.append(
                f"  {f'group{i + 1}':>8s}  {self.n_per_group[i]:6.0f}  "
                f"{self.observed[i]:10.1f}  {self.expected[i]:10.1f}  "
                f"{oe:10.3f}"
            )

        lines.append("")
        lines.append(
            f"  Chisq= {self.statistic:.4f} on {self.df} degrees of freedom, "
            f"p= {self.p_value:.4g}"
        )
        for w in self.warnings:
            lines.append(f"  Warning: {w}")

        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"LogRankSolution(chisq={self.statistic:.4f}, "
            f"df={self.df}, p={self.p_value:.4g})"
        )


class CIFSolution(_SolutionBase):
    """Cumulative incidence function for one cause."""

    __slots__ = ()

    def __init__(self, _result: Result[CIFParams]) -> None:
        super().__init__(_result)

    @property
    def time(self):
        """0 followed by every distinct observed time."""
        return self._result.params.time

    @property
    def cif(self):
        return self._result.params.cif

    @property
    def event_type(self) -> int:
        return self._result.params.event_type

    @property
    def n_observations(self) -> int:
        return self._result.params.n_observations

    @property
    def n_events_of_interest(self) -> int:
        return self._result.params.n_events_of_interest

    def incidence_at(self, t):
        """Evaluate the right-continuous step function CIF(t)."""
        t_arr = np.asarray(t, dtype=np.float64)
        idx = np.searchsorted(self.time, t_arr, side='right') - 1
        out = np.where(idx >= 0, self.cif[np.maximum(idx, 0)], 0.0)
        return float(out) if out.ndim == 0 else out

    def to_dict(self) -> dict:
        return {
            "time": self.time.tolist(),
            "cif": self.cif.tolist(),
            "event_type": self.event_type,
        }

    def summary(self) -> str:
        lines = ["Call: cumulative_incidence()", ""]
        lines.append(
            f"  n={self.n_observations}, cause={self.event_type}, "
            f"events={self.n_events_of_interest}"
        )
        lines.append(f"  final incidence = {float(self.cif[-1]):.4f}")
        for w in self.warnings:
            lines.append(f"  Warning: {w}")
        return "\n".join(lines)

    def __repr__(self) -> str:
        return (
            f"CIFSolution(n={self.n_observations}, cause={self.event_type}, "
            f"final={float(self.cif[-1]):.4g})"
        )
