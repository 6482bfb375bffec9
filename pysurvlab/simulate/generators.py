"""
Synthetic cohort generators.

Every generator draws latent failure times by inverse-CDF sampling against
a uniform random source:

    exponential:  T = -ln(U) / λ
    Weibull:      T = (-ln(U) / λ)^(1/k)

Rate-based censoring draws an independent exponential censoring time with
hazard λ_c = λ · c / (1 - c). Against an exponential event time with
hazard λ this makes P(censored) = λ_c / (λ + λ_c) = c in expectation; the
realised proportion in any one cohort varies. With c = 0 the censoring
hazard is zero and nobody is censored.

Observed time = min(event, censoring), rounded to two decimals for
display; the event flag compares the unrounded times. Each generator is a
pure function of its arguments and seed.
"""

from __future__ import annotations

import math
from collections.abc import Mapping, Sequence

from pysurvlab.core.validation import (
    check_censoring_rate,
    check_count,
    check_non_negative_scalar,
    check_positive,
    check_seed,
)
from pysurvlab.simulate._rng import RandomSource, random_source
from pysurvlab.simulate._subjects import (
    Coefficients,
    CompetingRiskSubject,
    Covariates,
    RecurrentEventSubject,
    Subject,
    TwoGroupCohort,
    round_time,
)

DEFAULT_CENSORING_RATE = 0.3
DEFAULT_COMPETING_CENSORING_RATE = 0.2

# Offset between the two seeded streams of a two-group cohort
GROUP_SEED_OFFSET = 1000

# Non-proportional hazards demo: exponential vs Weibull(k=2)
NON_PH_EXPONENTIAL_RATE = 0.1
NON_PH_WEIBULL_RATE = 0.08
NON_PH_WEIBULL_SHAPE = 2.0
NON_PH_CENSOR_THRESHOLD = 0.7


def _neg_log(u: float) -> float:
    """-ln(u), with -ln(0) = +inf."""
    if u <= 0.0:
        return math.inf
    return -math.log(u)


def _censoring_time(u: float, rate: float, censoring_rate: float) -> float:
    if censoring_rate == 0.0:
        return math.inf
    return _neg_log(u) / (rate * censoring_rate / (1.0 - censoring_rate))


def _exponential_subjects(
    n: int,
    lam: float,
    censoring_rate: float,
    rng: RandomSource,
) -> tuple[Subject, ...]:
    subjects = []
    for i in range(n):
        event_time = _neg_log(rng()) / lam
        censor_time = _censoring_time(rng(), lam, censoring_rate)
        subjects.append(Subject(
            id=f"subject_{i + 1}",
            time=round_time(min(event_time, censor_time)),
            event=event_time <= censor_time,
        ))
    return tuple(subjects)


def generate_exponential_data(
    n: int,
    lam: float,
    censoring_rate: float = DEFAULT_CENSORING_RATE,
    seed: int | None = None,
) -> tuple[Subject, ...]:
    """Cohort with constant hazard ``lam`` and rate-based censoring.

    Parameters
    ----------
    n : int
        Number of subjects (>= 0).
    lam : float
        Event hazard, > 0.
    censoring_rate : float
        Target expected censoring proportion in [0, 1).
    seed : int or None
        Seed for the reproducible random source.

    Returns
    -------
    tuple[Subject, ...]

    Raises
    ------
    InvalidParameterError
        If any parameter is outside its domain.
    """
    n = check_count(n, "n")
    lam = check_positive(lam, "lam")
    censoring_rate = check_censoring_rate(censoring_rate)
    seed = check_seed(seed)

    return _exponential_subjects(n, lam, censoring_rate, random_source(seed))


def generate_weibull_data(
    n: int,
    lam: float,
    k: float,
    censoring_rate: float = DEFAULT_CENSORING_RATE,
    seed: int | None = None,
) -> tuple[Subject, ...]:
    """Cohort with Weibull event times, S(t) = exp(-λ t^k).

    k > 1 gives an increasing hazard, k < 1 a decreasing one, k = 1 reduces
    to the exponential model. Censoring uses the exponential formula keyed
    on ``lam``, so the realised censoring proportion only tracks
    ``censoring_rate`` closely when k is near 1.

    Parameters
    ----------
    n : int
        Number of subjects (>= 0).
    lam : float
        Scale parameter, > 0.
    k : float
        Shape parameter, > 0.
    censoring_rate : float
        Target censoring proportion in [0, 1).
    seed : int or None
        Seed for the reproducible random source.

    Returns
    -------
    tuple[Subject, ...]
    """
    n = check_count(n, "n")
    lam = check_positive(lam, "lam")
    k = check_positive(k, "k")
    censoring_rate = check_censoring_rate(censoring_rate)
    seed = check_seed(seed)

    rng = random_source(seed)
    subjects = []
    for i in range(n):
        event_time = (_neg_log(rng()) / lam) ** (1.0 / k)
        censor_time = _censoring_time(rng(), lam, censoring_rate)
        subjects.append(Subject(
            id=f"subject_{i + 1}",
            time=round_time(min(event_time, censor_time)),
            event=event_time <= censor_time,
        ))
    return tuple(subjects)


def generate_two_group_data(
    n1: int,
    n2: int,
    lam1: float,
    lam2: float,
    censoring_rate: float = DEFAULT_CENSORING_RATE,
    seed: int | None = None,
) -> TwoGroupCohort:
    """Two independent exponential cohorts tagged with a ``group`` covariate.

    Group 2 is drawn from seed + 1000 when a seed is given, so the streams
    do not overlap at the start while the pair stays reproducible.

    Returns
    -------
    TwoGroupCohort
        ``group1`` subjects carry ``group=0``, ``group2`` carry ``group=1``.
    """
    n1 = check_count(n1, "n1")
    n2 = check_count(n2, "n2")
    lam1 = check_positive(lam1, "lam1")
    lam2 = check_positive(lam2, "lam2")
    censoring_rate = check_censoring_rate(censoring_rate)
    seed = check_seed(seed)

    seed2 = seed + GROUP_SEED_OFFSET if seed is not None else None
    group1 = _exponential_subjects(n1, lam1, censoring_rate, random_source(seed))
    group2 = _exponential_subjects(n2, lam2, censoring_rate, random_source(seed2))

    return TwoGroupCohort(
        group1=tuple(_with_group(s, 0) for s in group1),
        group2=tuple(_with_group(s, 1) for s in group2),
    )


def _with_group(subject: Subject, group: int) -> Subject:
    return Subject(
        id=subject.id,
        time=subject.time,
        event=subject.event,
        covariates=Covariates(group=group),
    )


def generate_competing_risks_data(
    n: int,
    lam1: float,
    lam2: float,
    censoring_rate: float = DEFAULT_COMPETING_CENSORING_RATE,
    seed: int | None = None,
) -> tuple[CompetingRiskSubject, ...]:
    """Cohort with two competing exponential causes.

    Each subject draws a latent time for cause 1, cause 2, and censoring
    (keyed on ``lam1``); whichever is smallest is observed. Exact float
    ties are resolved in check order: cause 1, then cause 2, then
    censoring.

    Parameters
    ----------
    n : int
        Number of subjects (>= 0).
    lam1, lam2 : float
        Cause-specific hazards, > 0.
    censoring_rate : float
        Censoring proportion parameter in [0, 1).
    seed : int or None
        Seed for the reproducible random source.

    Returns
    -------
    tuple[CompetingRiskSubject, ...]
    """
    n = check_count(n, "n")
    lam1 = check_positive(lam1, "lam1")
    lam2 = check_positive(lam2, "lam2")
    censoring_rate = check_censoring_rate(censoring_rate)
    seed = check_seed(seed)

    rng = random_source(seed)
    subjects = []
    for i in range(n):
        time1 = _neg_log(rng()) / lam1
        time2 = _neg_log(rng()) / lam2
        censor_time = _censoring_time(rng(), lam1, censoring_rate)

        min_time = min(time1, time2, censor_time)
        if min_time == time1:
            event_type = 1
        elif min_time == time2:
            event_type = 2
        else:
            event_type = 0

        subjects.append(CompetingRiskSubject(
            id=f"subject_{i + 1}",
            time=round_time(min_time),
            event_type=event_type,
        ))
    return tuple(subjects)


def generate_recurrent_event_data(
    n: int,
    mean_events_per_subject: float,
    follow_up_time: float,
    seed: int | None = None,
) -> tuple[RecurrentEventSubject, ...]:
    """Cohort of subjects with repeated events over a fixed window.

    The per-subject count is floor(-ln(U) · mean), an exponential draw
    rounded down. It is NOT Poisson: its mean is roughly mean - 0.5 and its
    variance is much larger than a Poisson's. Event times are independent
    Uniform[0, follow_up_time], rounded and sorted.

    A count draw of exactly U = 0 would be unbounded and is replaced by
    the next draw. Every seeded stream hits 0 once per period (seed 22643
    does so on its first draw).

    Parameters
    ----------
    n : int
        Number of subjects (>= 0).
    mean_events_per_subject : float
        Scale of the count draw, >= 0.
    follow_up_time : float
        Length of the observation window, > 0.
    seed : int or None
        Seed for the reproducible random source.

    Returns
    -------
    tuple[RecurrentEventSubject, ...]
    """
    n = check_count(n, "n")
    mean_events_per_subject = check_non_negative_scalar(
        mean_events_per_subject, "mean_events_per_subject",
    )
    follow_up_time = check_positive(follow_up_time, "follow_up_time")
    seed = check_seed(seed)

    rng = random_source(seed)
    subjects = []
    for i in range(n):
        u = rng()
        while u == 0.0:
            u = rng()
        n_events = math.floor(-math.log(u) * mean_events_per_subject)

        times = sorted(round_time(rng() * follow_up_time) for _ in range(n_events))
        subjects.append(RecurrentEventSubject(
            id=f"subject_{i + 1}",
            event_times=tuple(t for t in times if t <= follow_up_time),
            end_of_follow_up=follow_up_time,
        ))
    return tuple(subjects)


def generate_data_with_covariates(
    n: int,
    baseline_hazard: float,
    coefficients: Coefficients | Mapping[str, float],
    censoring_rate: float = DEFAULT_CENSORING_RATE,
    seed: int | None = None,
) -> tuple[Subject, ...]:
    """Cohort simulated from a proportional hazards model.

    Covariates per subject:
        age ~ Uniform[40, 80], treatment ~ Bernoulli(0.5),
        biomarker ~ Uniform[0, 10]

    Individual hazard = baseline_hazard · exp(Σ β_j x_j), summing over the
    covariates that have a coefficient. Censoring is keyed on the baseline
    hazard, not the individual one. The linear predictor uses the exact
    draws; the stored covariates are rounded for display (age to whole
    years, biomarker to two decimals).

    Parameters
    ----------
    n : int
        Number of subjects (>= 0).
    baseline_hazard : float
        Hazard at all-zero covariates, > 0.
    coefficients : Coefficients or mapping
        Log hazard ratios; keys/fields among ``age``, ``treatment``,
        ``biomarker``.
    censoring_rate : float
        Censoring proportion parameter in [0, 1).
    seed : int or None
        Seed for the reproducible random source.

    Returns
    -------
    tuple[Subject, ...]
    """
    n = check_count(n, "n")
    baseline_hazard = check_positive(baseline_hazard, "baseline_hazard")
    if not isinstance(coefficients, Coefficients):
        coefficients = Coefficients.from_mapping(coefficients)
    censoring_rate = check_censoring_rate(censoring_rate)
    seed = check_seed(seed)

    rng = random_source(seed)
    subjects = []
    for i in range(n):
        age = 40.0 + rng() * 40.0
        treatment = 0 if rng() < 0.5 else 1
        biomarker = rng() * 10.0

        drawn = Covariates(age=age, treatment=treatment, biomarker=biomarker)
        individual_hazard = baseline_hazard * math.exp(
            drawn.linear_predictor(coefficients)
        )

        event_time = _neg_log(rng()) / individual_hazard
        censor_time = _censoring_time(rng(), baseline_hazard, censoring_rate)

        subjects.append(Subject(
            id=f"subject_{i + 1}",
            time=round_time(min(event_time, censor_time)),
            event=event_time <= censor_time,
            covariates=Covariates(
                age=round_time(age, 0),
                treatment=treatment,
                biomarker=round_time(biomarker),
            ),
        ))
    return tuple(subjects)


def generate_non_proportional_hazards_data(
    n: int,
    seed: int | None = None,
) -> TwoGroupCohort:
    """Two groups whose hazards are not proportional.

    Group 1 has a constant hazard (exponential, λ = 0.1); group 2 an
    increasing one (Weibull, λ = 0.08, k = 2). Each subject is censored
    independently with probability 0.3 by a coin flip, not by a censoring
    time, so censored subjects keep their event time. Meant for plotting
    crossing log(-log S(t)) curves only.

    Parameters
    ----------
    n : int
        Total subjects; each group gets ceil(n / 2).
    seed : int or None
        Seed for the reproducible random source.

    Returns
    -------
    TwoGroupCohort
    """
    n = check_count(n, "n")
    seed = check_seed(seed)

    rng = random_source(seed)
    group1 = []
    group2 = []
    for i in range((n + 1) // 2):
        time1 = _neg_log(rng()) / NON_PH_EXPONENTIAL_RATE
        censored1 = rng() > NON_PH_CENSOR_THRESHOLD
        group1.append(Subject(
            id=f"g1_subject_{i + 1}",
            time=round_time(time1),
            event=not censored1,
            covariates=Covariates(group=0),
        ))

        time2 = (_neg_log(rng()) / NON_PH_WEIBULL_RATE) ** (1.0 / NON_PH_WEIBULL_SHAPE)
        censored2 = rng() > NON_PH_CENSOR_THRESHOLD
        group2.append(Subject(
            id=f"g2_subject_{i + 1}",
            time=round_time(time2),
            event=not censored2,
            covariates=Covariates(group=1),
        ))

    return TwoGroupCohort(group1=tuple(group1), group2=tuple(group2))


def cause_specific_cohort(
    cohort: Sequence[CompetingRiskSubject],
    event_type: int,
) -> tuple[Subject, ...]:
    """Treat one cause as the event and every other outcome as censored.

    1 - KM on the result is the naive cause-specific curve that
    overestimates incidence when competing causes are present.
    """
    return tuple(
        Subject(
            id=s.id,
            time=s.time,
            event=s.event_type == event_type,
            covariates=s.covariates,
        )
        for s in cohort
    )


def landmark_cohort(
    cohort: Sequence[Subject],
    landmark_time: float,
) -> tuple[Subject, ...]:
    """Subjects still under observation at ``landmark_time``, clock reset.

    Subjects with time >= landmark_time are kept and their time becomes
    time - landmark_time.
    """
    landmark_time = check_non_negative_scalar(landmark_time, "landmark_time")
    return tuple(
        Subject(
            id=s.id,
            time=s.time - landmark_time,
            event=s.event,
            covariates=s.covariates,
        )
        for s in cohort
        if s.time >= landmark_time
    )
