"""
Immutable containers for time-to-event data.

SurvivalDesign wraps time and event indicator; CompetingRisksDesign wraps
time and event type. Both are built either from parallel arrays or from a
cohort of subject records, and validate at construction time: all
downstream kernels trust clean data.

A cohort element may be any object with the relevant attributes (the
records from pysurvlab.simulate) or a mapping with the same keys.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from typing import Any

import numpy as np
from numpy.typing import NDArray

from pysurvlab.core.exceptions import ValidationError
from pysurvlab.core.validation import (
    check_1d,
    check_array,
    check_consistent_length,
    check_finite,
    check_non_negative,
)


def _field(record: Any, name: str, index: int) -> Any:
    if isinstance(record, Mapping):
        if name not in record:
            raise ValidationError(f"cohort[{index}]: missing key '{name}'")
        return record[name]
    try:
        return getattr(record, name)
    except AttributeError:
        raise ValidationError(
            f"cohort[{index}]: {type(record).__name__} has no attribute '{name}'"
        ) from None


def _check_time(time) -> NDArray:
    time = check_array(time, "time")
    check_1d(time, "time")
    check_finite(time, "time")
    check_non_negative(time, "time")
    return time


@dataclass(frozen=True)
class SurvivalDesign:
    """Immutable right-censored survival data.

    Parameters
    ----------
    time : NDArray
        Observed time (event or censoring). Non-negative.
    event : NDArray
        Event indicator: 1 = event observed, 0 = censored.
    """

    time: NDArray
    event: NDArray

    @classmethod
    def for_survival(cls, time, event) -> SurvivalDesign:
        """Create and validate survival data from parallel arrays.

        An empty cohort is valid; estimators return their neutral curves.

        Raises
        ------
        ValidationError
            If times are negative or NaN, or events are not 0/1.
        DimensionError
            If time and event lengths differ.
        """
        time = _check_time(time)
        event = check_array(event, "event")
        check_1d(event, "event")
        check_consistent_length(time, event, names=("time", "event"))

        unique_events = np.unique(event)
        if not np.all(np.isin(unique_events, [0.0, 1.0])):
            raise ValidationError(
                f"event must contain only 0 and 1, "
                f"got unique values: {unique_events}"
            )

        return cls(time=time, event=event)

    @classmethod
    def from_cohort(cls, cohort: Sequence[Any]) -> SurvivalDesign:
        """Create from subject records with ``time`` and ``event`` fields."""
        if isinstance(cohort, SurvivalDesign):
            return cohort
        time = [_field(s, "time", i) for i, s in enumerate(cohort)]
        event = [bool(_field(s, "event", i)) for i, s in enumerate(cohort)]
        return cls.for_survival(
            np.asarray(time, dtype=np.float64),
            np.asarray(event, dtype=np.float64),
        )

    @property
    def n(self) -> int:
        """Number of observations."""
        return len(self.time)

    @property
    def n_events(self) -> int:
        """Number of observed events."""
        return int(np.sum(self.event))


@dataclass(frozen=True)
class CompetingRisksDesign:
    """Immutable competing-risks data.

    Parameters
    ----------
    time : NDArray
        Observed time. Non-negative.
    event_type : NDArray
        0 = censored, 1..K = cause that ended observation.
    """

    time: NDArray
    event_type: NDArray

    @classmethod
    def for_competing_risks(cls, time, event_type) -> CompetingRisksDesign:
        """Create and validate competing-risks data from parallel arrays.

        Raises
        ------
        ValidationError
            If times are invalid or event types are not non-negative integers.
        DimensionError
            If lengths differ.
        """
        time = _check_time(time)
        event_type = check_array(event_type, "event_type")
        check_1d(event_type, "event_type")
        check_finite(event_type, "event_type")
        check_consistent_length(time, event_type, names=("time", "event_type"))

        if not np.all(np.isfinite(event_type)):
            raise ValidationError(
                f"event_type must be finite, got unique values: {np.unique(event_type)}"
            )

        if np.any(event_type < 0) or np.any(event_type != np.floor(event_type)):
            raise ValidationError(
                f"event_type must contain non-negative integers, "
                f"got unique values: {np.unique(event_type)}"
            )

        return cls(time=time, event_type=event_type.astype(np.int64))

    @classmethod
    def from_cohort(cls, cohort: Sequence[Any]) -> CompetingRisksDesign:
        """Create from subject records with ``time`` and ``event_type`` fields."""
        if isinstance(cohort, CompetingRisksDesign):
            return cohort
        time = [_field(s, "time", i) for i, s in enumerate(cohort)]
        event_type = [_field(s, "event_type", i) for i, s in enumerate(cohort)]
        return cls.for_competing_risks(
            np.asarray(time, dtype=np.float64),
            np.asarray(event_type, dtype=np.float64),
        )

    @property
    def n(self) -> int:
        return len(self.time)

    @property
    def causes(self) -> NDArray:
        """Distinct event types observed, excluding censoring."""
        return np.unique(self.event_type[self.event_type > 0])
