"""
Synthetic cohort generation.

Public API:
    random_source(seed) -> Callable[[], float]
    generate_exponential_data(n, lam, censoring_rate, seed)
    generate_weibull_data(n, lam, k, censoring_rate, seed)
    generate_two_group_data(n1, n2, lam1, lam2, censoring_rate, seed)
    generate_competing_risks_data(n, lam1, lam2, censoring_rate, seed)
    generate_recurrent_event_data(n, mean_events_per_subject, follow_up_time, seed)
    generate_data_with_covariates(n, baseline_hazard, coefficients, censoring_rate, seed)
    generate_non_proportional_hazards_data(n, seed)
    cause_specific_cohort(cohort, event_type)
    landmark_cohort(cohort, landmark_time)
"""

from pysurvlab.simulate._rng import random_source
from pysurvlab.simulate._subjects import (
    Coefficients,
    CompetingRiskSubject,
    Covariates,
    RecurrentEventSubject,
    Subject,
    TwoGroupCohort,
)
from pysurvlab.simulate.generators import (
    cause_specific_cohort,
    generate_competing_risks_data,
    generate_data_with_covariates,
    generate_exponential_data,
    generate_non_proportional_hazards_data,
    generate_recurrent_event_data,
    generate_two_group_data,
    generate_weibull_data,
    landmark_cohort,
)

__all__ = [
    "random_source",
    "Subject",
    "CompetingRiskSubject",
    "RecurrentEventSubject",
    "TwoGroupCohort",
    "Covariates",
    "Coefficients",
    "generate_exponential_data",
    "generate_weibull_data",
    "generate_two_group_data",
    "generate_competing_risks_data",
    "generate_recurrent_event_data",
    "generate_data_with_covariates",
    "generate_non_proportional_hazards_data",
    "cause_specific_cohort",
    "landmark_cohort",
]
