"""
Exception hierarchy for PySurvLab.

All exceptions inherit from PySurvLabError to allow catching any
library-specific error.

Design principles:
    - Exceptions carry diagnostic information as attributes
    - Error messages are actionable with actual vs expected values
    - Degenerate statistics (empty risk sets, zero variance) are not errors;
      estimators record them as Result warnings instead
"""

from typing import Any


class PySurvLabError(Exception):
    """Base exception for all PySurvLab errors."""
    pass


class ValidationError(PySurvLabError):
    """
    Input validation failed.

    Raised when user-provided cohorts or arrays fail validation checks.
    """
    pass


class DimensionError(ValidationError):
    """
    Array lengths are inconsistent.

    Raised when parallel arrays (time, event, event type) do not line up.
    """
    pass


class InvalidParameterError(ValidationError):
    """
    A generator or estimator parameter is outside its valid domain.

    Raised eagerly at generation time, e.g. for a censoring rate of 1
    (which would divide by zero) or a non-positive hazard.

    Attributes:
        parameter: Name of the offending parameter
        value: The value that was rejected
    """

    def __init__(
        self,
        message: str,
        parameter: str | None = None,
        value: Any = None,
    ):
        super().__init__(message)
        self.parameter = parameter
        self.value = value
