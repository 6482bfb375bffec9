"""
Uniform(0, 1) random sources for the cohort generators.

Seeded sources are a tiny linear congruential generator so that classroom
demos reproduce exactly from a seed:

    state_0 = seed
    state_n = (state_{n-1} * 9301 + 49297) mod 233280
    u_n     = state_n / 233280

The period is at most 233280 and successive draws are visibly correlated
in high dimensions. Good enough to draw a few hundred subjects for a plot;
not suitable for Monte Carlo studies or anything security related.

Unseeded sources draw from numpy's default generator with fresh OS entropy.
"""

from __future__ import annotations

from typing import Callable

import numpy as np

LCG_MULTIPLIER = 9301
LCG_INCREMENT = 49297
LCG_MODULUS = 233280

RandomSource = Callable[[], float]


def lcg_source(seed: int) -> RandomSource:
    """Deterministic LCG stream starting from ``seed``."""
    state = seed

    def draw() -> float:
        nonlocal state
        state = (state * LCG_MULTIPLIER + LCG_INCREMENT) % LCG_MODULUS
        return state / LCG_MODULUS

    return draw


def random_source(seed: int | None = None) -> RandomSource:
    """Return a uniform [0, 1) source.

    Parameters
    ----------
    seed : int or None
        If given, the returned source is the reproducible LCG stream for
        that seed. If None, draws come from ``np.random.default_rng()``.

    Returns
    -------
    Callable[[], float]
    """
    if seed is not None:
        return lcg_source(seed)

    rng = np.random.default_rng()

    def draw() -> float:
        return float(rng.random())

    return draw
