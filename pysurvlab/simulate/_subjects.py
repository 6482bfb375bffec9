"""
Subject records produced by the cohort generators.

All records are frozen dataclasses: a cohort is a tuple of them and is
never mutated after generation.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from dataclasses import asdict, dataclass, fields

from pysurvlab.core.exceptions import InvalidParameterError

# Observed times are reported to this many decimal places
TIME_DECIMALS = 2


@dataclass(frozen=True)
class Coefficients:
    """Log hazard ratios for the simulated proportional hazards model.

    A field left as None has no coefficient; its covariate contributes
    nothing to the linear predictor.
    """

    age: float | None = None
    treatment: float | None = None
    biomarker: float | None = None

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, float]) -> Coefficients:
        """Build from a ``{"age": 0.02, ...}`` style mapping.

        Raises
        ------
        InvalidParameterError
            If a key does not name a simulated covariate.
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(mapping) - known)
        if unknown:
            raise InvalidParameterError(
                f"coefficients: unknown covariate(s) {unknown}, "
                f"expected a subset of {sorted(known)}",
                parameter="coefficients", value=dict(mapping),
            )
        return cls(**{k: float(v) for k, v in mapping.items()})


@dataclass(frozen=True)
class Covariates:
    """Covariate values attached to a subject. Unset fields are None."""

    age: float | None = None
    treatment: int | None = None
    biomarker: float | None = None
    group: int | None = None

    def linear_predictor(self, coefficients: Coefficients) -> float:
        """Σ coefficient · value over covariates that have a coefficient."""
        total = 0.0
        for name in ("age", "treatment", "biomarker"):
            value = getattr(self, name)
            coef = getattr(coefficients, name)
            if value is None or coef is None:
                continue
            total += coef * value
        return total

    def as_dict(self) -> dict[str, float | int]:
        """Only the covariates that are set."""
        return {k: v for k, v in asdict(self).items() if v is not None}


@dataclass(frozen=True)
class Subject:
    """One subject of a right-censored survival cohort.

    ``time`` is min(event time, censoring time); ``event`` is True when the
    observed time is the event.
    """

    id: str
    time: float
    event: bool
    covariates: Covariates | None = None


@dataclass(frozen=True)
class CompetingRiskSubject:
    """Subject whose observation ends with exactly one outcome.

    ``event_type`` is 0 for censoring or 1..K for the cause that occurred
    first.
    """

    id: str
    time: float
    event_type: int
    covariates: Covariates | None = None


@dataclass(frozen=True)
class RecurrentEventSubject:
    """Subject who may experience the same event repeatedly."""

    id: str
    event_times: tuple[float, ...]
    end_of_follow_up: float

    @property
    def n_events(self) -> int:
        return len(self.event_times)


@dataclass(frozen=True)
class TwoGroupCohort:
    """Pair of cohorts for group comparisons."""

    group1: tuple[Subject, ...]
    group2: tuple[Subject, ...]


def round_time(x: float, decimals: int = TIME_DECIMALS) -> float:
    """Round half up to ``decimals`` places; infinities pass through."""
    if not math.isfinite(x):
        return x
    scale = 10 ** decimals
    return math.floor(x * scale + 0.5) / scale
