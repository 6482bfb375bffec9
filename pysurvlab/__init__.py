"""
PySurvLab: survival analysis estimators and synthetic cohorts for teaching.

Subpackages:
    simulate: seeded cohort generators (exponential, Weibull, competing
        risks, recurrent events, proportional hazards)
    survival: Kaplan-Meier, Nelson-Aalen, log-rank, cumulative incidence
    core: result envelope, exceptions, validation
"""

__version__ = "0.1.0"

from pysurvlab import simulate
from pysurvlab import survival

__all__ = [
    "__version__",
    "simulate",
    "survival",
]
