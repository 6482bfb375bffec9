"""
Core infrastructure for PySurvLab.

Shared abstractions used by the survival and simulate subpackages.

Key components:
    result: Generic Result[P] envelope
    exceptions: Exception hierarchy
    validation: Input validators
    compute: Timing
"""

from pysurvlab.core.result import Result
from pysurvlab.core.exceptions import (
    PySurvLabError,
    ValidationError,
    DimensionError,
    InvalidParameterError,
)

__all__ = [
    # Result
    "Result",
    # Exceptions
    "PySurvLabError",
    "ValidationError",
    "DimensionError",
    "InvalidParameterError",
]
