"""
Generic result container for all PySurvLab computations.

The Result class provides a standardized envelope that every estimator
returns. Domain payloads (KMParams, LogRankParams, ...) ride inside it,
alongside timing, warnings, and provenance.

Design decisions:
    - Generic over parameter payload P for type safety
    - info dict for flexible metadata (method, conf_type, landmark)
    - timing is optional (don't burden unit tests)
    - warnings carry degenerate-input notes instead of raising
    - Immutable (frozen=True) for reproducibility
"""

import platform
from dataclasses import dataclass, field
from typing import TypeVar, Generic, Any

P = TypeVar('P')  # Parameter payload type


def _default_provenance() -> dict[str, str]:
    """Library versions that produced a result."""
    import numpy as np
    import scipy

    from pysurvlab import __version__

    return {
        'pysurvlab_version': __version__,
        'numpy_version': np.__version__,
        'scipy_version': scipy.__version__,
        'python_version': platform.python_version(),
    }


@dataclass(frozen=True)
class Result(Generic[P]):
    """
    Immutable result envelope for survival computations.

    Type Parameters:
        P: The domain-specific parameter payload type

    Attributes:
        params: Domain-specific payload (curves, statistics)
        info: Structured metadata (method, options)
        timing: Execution timing breakdown, or None if not measured
        backend_name: Identifier of the kernel that produced this result
        warnings: Non-fatal issues encountered during computation
        provenance: Versions of the libraries used

    Examples:
        >>> Result(
        ...     params=KMParams(...),
        ...     info={'method': 'Kaplan-Meier', 'conf_type': 'plain'},
        ...     timing={'total_seconds': 0.001},
        ...     backend_name='cpu_km',
        ... )
    """
    params: P
    info: dict[str, Any]
    timing: dict[str, float] | None
    backend_name: str
    warnings: tuple[str, ...] = field(default_factory=tuple)
    provenance: dict[str, str] = field(default_factory=_default_provenance)

    def has_warning(self, substring: str) -> bool:
        """Check if any warning contains the given substring."""
        return any(substring in w for w in self.warnings)
