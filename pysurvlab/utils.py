"""
Display helpers for summary statistics.
"""

from __future__ import annotations

import numpy as np

from pysurvlab.core.exceptions import InvalidParameterError
from pysurvlab.simulate._rng import random_source


def percentile(values, p: float) -> float:
    """p-th percentile (0-100) with linear interpolation between ranks.

    The position on the sorted values is p/100 · (n - 1); this is R's
    quantile type 7 and numpy's default. Empty input gives nan.
    """
    if not 0 <= p <= 100:
        raise InvalidParameterError(
            f"p: must be in [0, 100], got {p}",
            parameter="p", value=p,
        )
    arr = np.asarray(values, dtype=np.float64).ravel()
    if arr.size == 0:
        return float("nan")
    return float(np.percentile(arr, p))


def format_number(value: float, decimals: int = 3) -> str:
    """Fixed-point string with ``decimals`` digits after the point."""
    return f"{value:.{decimals}f}"


def random_between(low: float, high: float, seed: int | None = None) -> float:
    """Single uniform draw from [low, high)."""
    return random_source(seed)() * (high - low) + low
