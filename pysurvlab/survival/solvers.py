"""
Public API for survival analysis.

    kaplan_meier(cohort) → KMSolution
    nelson_aalen(cohort) → NelsonAalenSolution
    logrank_test(group1, group2) → LogRankSolution
    cumulative_incidence(cohort, event_of_interest) → CIFSolution
    landmark_kaplan_meier(cohort, landmark_time) → KMSolution

Each function validates inputs, builds a design, runs the kernel, and
wraps the Result in a Solution. Degenerate data never raises: it yields
the neutral curve or statistic plus a note in ``warnings``.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import replace
from typing import Any, Literal

import numpy as np

from pysurvlab.core.compute.timing import Timer
from pysurvlab.core.exceptions import InvalidParameterError
from pysurvlab.core.result import Result
from pysurvlab.core.validation import check_non_negative_scalar
from pysurvlab.survival.design import CompetingRisksDesign, SurvivalDesign
from pysurvlab.survival._cif import cumulative_incidence_fit
from pysurvlab.survival._km import kaplan_meier_fit
from pysurvlab.survival._logrank import logrank_two_group
from pysurvlab.survival._nelson_aalen import nelson_aalen_fit
from pysurvlab.survival.solution import (
    CIFSolution, KMSolution, LogRankSolution, NelsonAalenSolution,
)


def _check_conf(conf_level: float, conf_type: str) -> None:
    if conf_level <= 0 or conf_level >= 1:
        raise InvalidParameterError(
            f"conf_level must be in (0, 1), got {conf_level}",
            parameter="conf_level", value=conf_level,
        )

    if conf_type not in ("plain", "log-log"):
        raise InvalidParameterError(
            f"conf_type must be 'plain' or 'log-log', "
            f"got '{conf_type}'",
            parameter="conf_type", value=conf_type,
        )


def _km_warnings(design: SurvivalDesign) -> tuple[str, ...]:
    if design.n == 0:
        return ("empty cohort: curve is the origin only",)
    if design.n_events == 0:
        return ("no events observed: survival stays at 1",)
    return ()


def kaplan_meier(
    cohort: Sequence[Any],
    *,
    conf_level: float = 0.95,
    conf_type: Literal["plain", "log-log"] = "plain",
) -> KMSolution:
    """Kaplan-Meier survival curve estimation.

    Parameters
    ----------
    cohort : sequence of subject records, or SurvivalDesign
        Each record has ``time`` and ``event``.
    conf_level : float
        Confidence level for CI (default 0.95, z = 1.96).
    conf_type : str
        "plain" (default): S ± z·se clipped to [0, 1].
        "log-log": interval on the log(-log S) scale.

    Returns
    -------
    KMSolution
    """
    design = SurvivalDesign.from_cohort(cohort)
    _check_conf(conf_level, conf_type)

    timer = Timer()
    timer.start()

    with timer.section("sweep"):
        params = kaplan_meier_fit(
            design.time, design.event,
            conf_level=conf_level,
            conf_type=conf_type,
        )

    timer.stop()

    result = Result(
        params=params,
        info={"method": "Kaplan-Meier", "conf_type": conf_type},
        timing=timer.result(),
        backend_name="cpu_km",
        warnings=_km_warnings(design),
    )

    return KMSolution(_result=result)


def nelson_aalen(cohort: Sequence[Any]) -> NelsonAalenSolution:
    """Nelson-Aalen cumulative hazard estimation.

    Parameters
    ----------
    cohort : sequence of subject records, or SurvivalDesign
        Each record has ``time`` and ``event``.

    Returns
    -------
    NelsonAalenSolution
        Empty arrays when no events were observed.
    """
    design = SurvivalDesign.from_cohort(cohort)

    timer = Timer()
    timer.start()

    with timer.section("sweep"):
        params = nelson_aalen_fit(design.time, design.event)

    timer.stop()

    warnings_list = []
    if design.n_events == 0:
        warnings_list.append("no events observed: cumulative hazard is empty")

    result = Result(
        params=params,
        info={"method": "Nelson-Aalen"},
        timing=timer.result(),
        backend_name="cpu_nelson_aalen",
        warnings=tuple(warnings_list),
    )

    return NelsonAalenSolution(_result=result)


def logrank_test(
    group1: Sequence[Any],
    group2: Sequence[Any],
) -> LogRankSolution:
    """Log-rank test comparing two groups.

    Only two groups are supported, so df is always 1. The p-value uses
    the erf-based chi-squared CDF.

    Parameters
    ----------
    group1, group2 : sequence of subject records, or SurvivalDesign

    Returns
    -------
    LogRankSolution
    """
    design1 = SurvivalDesign.from_cohort(group1)
    design2 = SurvivalDesign.from_cohort(group2)

    timer = Timer()
    timer.start()

    with timer.section("sweep"):
        params = logrank_two_group(
            design1.time, design1.event,
            design2.time, design2.event,
        )

    timer.stop()

    warnings_list = []
    if params.variance == 0:
        warnings_list.append("variance is zero: chi-square reported as 0")

    result = Result(
        params=params,
        info={"method": "Log-rank test"},
        timing=timer.result(),
        backend_name="cpu_logrank",
        warnings=tuple(warnings_list),
    )

    return LogRankSolution(_result=result)


def cumulative_incidence(
    cohort: Sequence[Any],
    event_of_interest: int,
) -> CIFSolution:
    """Cumulative incidence function for one competing cause.

    Parameters
    ----------
    cohort : sequence of competing-risk records, or CompetingRisksDesign
        Each record has ``time`` and ``event_type`` (0 = censored).
    event_of_interest : int
        Cause to accumulate, >= 1.

    Returns
    -------
    CIFSolution
    """
    design = CompetingRisksDesign.from_cohort(cohort)

    if (isinstance(event_of_interest, bool)
            or not isinstance(event_of_interest, (int, np.integer))
            or event_of_interest < 1):
        raise InvalidParameterError(
            f"event_of_interest must be an integer >= 1, got {event_of_interest!r}",
            parameter="event_of_interest", value=event_of_interest,
        )

    timer = Timer()
    timer.start()

    with timer.section("sweep"):
        params = cumulative_incidence_fit(
            design.time, design.event_type, int(event_of_interest),
        )

    timer.stop()

    warnings_list = []
    if params.n_events_of_interest == 0:
        warnings_list.append(
            f"no events of type {event_of_interest}: incidence stays at 0"
        )

    result = Result(
        params=params,
        info={"method": "Cumulative incidence", "event_of_interest": int(event_of_interest)},
        timing=timer.result(),
        backend_name="cpu_cif",
        warnings=tuple(warnings_list),
    )

    return CIFSolution(_result=result)


def landmark_kaplan_meier(
    cohort: Sequence[Any],
    landmark_time: float,
    *,
    conf_level: float = 0.95,
    conf_type: Literal["plain", "log-log"] = "plain",
) -> KMSolution:
    """Kaplan-Meier curve conditional on survival to ``landmark_time``.

    Subjects with time >= landmark_time are kept, their clock is reset to
    the landmark, a Kaplan-Meier curve is fitted, and its times are
    shifted back onto the original time axis. The curve therefore starts
    at (landmark_time, 1). An event exactly at the landmark is kept, so
    the first event time can repeat the origin time.

    Returns
    -------
    KMSolution
        ``info["n_included"]`` holds the number of subjects kept.
    """
    landmark_time = check_non_negative_scalar(landmark_time, "landmark_time")
    design = SurvivalDesign.from_cohort(cohort)
    _check_conf(conf_level, conf_type)

    timer = Timer()
    timer.start()

    with timer.section("subset"):
        keep = design.time >= landmark_time
        subset = SurvivalDesign.for_survival(
            design.time[keep] - landmark_time, design.event[keep],
        )

    with timer.section("sweep"):
        fit = kaplan_meier_fit(
            subset.time, subset.event,
            conf_level=conf_level,
            conf_type=conf_type,
        )
        params = replace(fit, time=fit.time + landmark_time)

    timer.stop()

    result = Result(
        params=params,
        info={
            "method": "Landmark Kaplan-Meier",
            "conf_type": conf_type,
            "landmark_time": landmark_time,
            "n_included": subset.n,
            "n_excluded": design.n - subset.n,
        },
        timing=timer.result(),
        backend_name="cpu_km",
        warnings=_km_warnings(subset),
    )

    return KMSolution(_result=result)
