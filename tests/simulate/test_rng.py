"""
Tests for the uniform random sources.
"""

import pytest

from pysurvlab.simulate import random_source
from pysurvlab.simulate._rng import LCG_MODULUS, lcg_source


class TestSeededSource:

    def test_first_draws_seed_42(self):
        """state_1 = (42*9301 + 49297) % 233280 = 206659, state_2 = 190736."""
        draw = random_source(42)
        assert draw() == 206659 / 233280
        assert draw() == 190736 / 233280

    def test_seed_zero_is_seeded(self):
        draw = random_source(0)
        assert draw() == 49297 / 233280

    def test_reproducible(self):
        a = random_source(123)
        b = random_source(123)
        assert [a() for _ in range(50)] == [b() for _ in range(50)]

    def test_independent_streams(self):
        a = random_source(5)
        b = random_source(5)
        first = a()
        a()
        assert b() == first

    def test_range(self):
        draw = lcg_source(99)
        values = [draw() for _ in range(5000)]
        assert all(0.0 <= v < 1.0 for v in values)
        # Every value is a multiple of 1/233280
        assert all((v * LCG_MODULUS).is_integer() for v in values)

    def test_roughly_uniform_mean(self):
        draw = random_source(2024)
        values = [draw() for _ in range(10000)]
        assert sum(values) / len(values) == pytest.approx(0.5, abs=0.02)


class TestUnseededSource:

    def test_range(self):
        draw = random_source()
        values = [draw() for _ in range(1000)]
        assert all(0.0 <= v < 1.0 for v in values)
        assert all(isinstance(v, float) for v in values)

    def test_not_constant(self):
        draw = random_source(None)
        assert len({draw() for _ in range(100)}) > 1
