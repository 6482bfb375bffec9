"""
Survival analysis.

Public API:
    kaplan_meier(cohort) -> KMSolution
    nelson_aalen(cohort) -> NelsonAalenSolution
    logrank_test(group1, group2) -> LogRankSolution
    cumulative_incidence(cohort, event_of_interest) -> CIFSolution
    landmark_kaplan_meier(cohort, landmark_time) -> KMSolution

Special functions and reference curves:
    erf, chi_square_cdf
    exponential_survival, weibull_survival, weibull_hazard, hazard_ratio
"""

from pysurvlab.survival.solvers import (
    cumulative_incidence,
    kaplan_meier,
    landmark_kaplan_meier,
    logrank_test,
    nelson_aalen,
)
from pysurvlab.survival.solution import (
    CIFSolution,
    KMSolution,
    LogRankSolution,
    NelsonAalenSolution,
)
from pysurvlab.survival.design import CompetingRisksDesign, SurvivalDesign
from pysurvlab.survival._common import HazardPoint
from pysurvlab.survival._special import chi_square_cdf, erf
from pysurvlab.survival._parametric import (
    exponential_survival,
    hazard_ratio,
    weibull_hazard,
    weibull_survival,
)

__all__ = [
    "kaplan_meier",
    "nelson_aalen",
    "logrank_test",
    "cumulative_incidence",
    "landmark_kaplan_meier",
    "KMSolution",
    "NelsonAalenSolution",
    "LogRankSolution",
    "CIFSolution",
    "HazardPoint",
    "SurvivalDesign",
    "CompetingRisksDesign",
    "erf",
    "chi_square_cdf",
    "exponential_survival",
    "weibull_survival",
    "weibull_hazard",
    "hazard_ratio",
]
