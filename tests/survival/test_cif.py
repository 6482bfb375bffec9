"""
Tests for cumulative_incidence().
"""

import numpy as np
import pytest
from numpy.testing import assert_allclose

from pysurvlab.core.exceptions import InvalidParameterError, ValidationError
from pysurvlab.simulate import (
    CompetingRiskSubject,
    cause_specific_cohort,
    generate_competing_risks_data,
)
from pysurvlab.survival import CIFSolution, CompetingRisksDesign, cumulative_incidence, kaplan_meier


class TestCumulativeIncidence:

    def test_hand_computed_cause_1(self, competing_cohort):
        """S: 3/4 after t=1, 1/2 after t=2, 0 after t=4.

        CIF_1 gains 1/4 · 1 at t=1 and 1/1 · S(4-) = 1/2 at t=4.
        """
        result = cumulative_incidence(competing_cohort, 1)

        assert isinstance(result, CIFSolution)
        assert result.event_type == 1
        assert_allclose(result.time, [0, 1, 2, 3, 4])
        assert_allclose(result.cif, [0, 0.25, 0.25, 0.25, 0.75])

    def test_hand_computed_cause_2(self, competing_cohort):
        result = cumulative_incidence(competing_cohort, 2)
        assert_allclose(result.cif, [0, 0, 0.25, 0.25, 0.25])

    def test_censoring_times_emitted(self, competing_cohort):
        """t=3 has only censoring but still appears."""
        result = cumulative_incidence(competing_cohort, 1)
        assert 3.0 in result.time

    def test_causes_sum_to_all_cause_incidence(self, competing_cohort):
        cif1 = cumulative_incidence(competing_cohort, 1)
        cif2 = cumulative_incidence(competing_cohort, 2)
        assert_allclose(cif1.cif + cif2.cif, [0, 0.25, 0.5, 0.5, 1.0])

    def test_absent_cause(self, competing_cohort):
        result = cumulative_incidence(competing_cohort, 3)
        assert np.all(result.cif == 0)
        assert result._result.has_warning("no events of type 3")

    def test_empty(self):
        result = cumulative_incidence([], 1)
        assert_allclose(result.time, [0.0])
        assert_allclose(result.cif, [0.0])

    def test_invalid_event_of_interest(self, competing_cohort):
        with pytest.raises(InvalidParameterError):
            cumulative_incidence(competing_cohort, 0)
        with pytest.raises(InvalidParameterError):
            cumulative_incidence(competing_cohort, 1.5)

    def test_negative_event_type_rejected(self):
        with pytest.raises(ValidationError, match="non-negative integers"):
            cumulative_incidence([CompetingRiskSubject("a", 1.0, -1)], 1)

    def test_infinite_event_type_rejected(self):
        with pytest.raises(ValidationError, match="finite"):
            CompetingRisksDesign.for_competing_risks([1.0, 2.0], [np.inf, 1])
        with pytest.raises(ValidationError, match="finite"):
            cumulative_incidence(
                [{"time": 1.0, "event_type": np.inf},
                 {"time": 2.0, "event_type": 1}],
                1,
            )

    def test_incidence_at(self, competing_cohort):
        result = cumulative_incidence(competing_cohort, 1)
        assert result.incidence_at(0.5) == 0.0
        assert result.incidence_at(3.5) == 0.25
        assert result.incidence_at(100.0) == 0.75

    def test_summary(self, competing_cohort):
        text = cumulative_incidence(competing_cohort, 1).summary()
        assert "cause=1" in text
        assert "final incidence = 0.7500" in text


class TestCumulativeIncidenceProperties:

    @pytest.mark.parametrize("seed", [1, 7, 42, 99])
    def test_monotone_and_bounded(self, seed):
        cohort = generate_competing_risks_data(200, 0.06, 0.04, 0.2, seed=seed)
        for cause in (1, 2):
            result = cumulative_incidence(cohort, cause)
            assert np.all(np.diff(result.cif) >= -1e-12)
            assert np.all((result.cif >= 0) & (result.cif <= 1 + 1e-12))
            assert result.time[0] == 0.0
            assert result.cif[0] == 0.0

    @pytest.mark.parametrize("seed", [3, 11])
    def test_sum_bounded_by_all_cause_incidence(self, seed):
        cohort = generate_competing_risks_data(200, 0.06, 0.04, 0.2, seed=seed)
        cif1 = cumulative_incidence(cohort, 1)
        cif2 = cumulative_incidence(cohort, 2)

        all_cause = kaplan_meier(
            [{"time": s.time, "event": s.event_type > 0} for s in cohort]
        )
        overall = 1.0 - all_cause.survival_at(cif1.time)
        total = cif1.cif + cif2.cif
        assert np.all(total <= overall + 1e-9)
        assert_allclose(total, overall, atol=1e-9)

    def test_naive_km_overestimates(self):
        cohort = generate_competing_risks_data(400, 0.06, 0.06, 0.1, seed=5)
        cif1 = cumulative_incidence(cohort, 1)
        naive = kaplan_meier(cause_specific_cohort(cohort, 1))
        t_end = float(cif1.time[-1])
        assert 1.0 - naive.survival_at(t_end) >= cif1.incidence_at(t_end) - 1e-12

    def test_design_passthrough(self, competing_cohort):
        design = CompetingRisksDesign.from_cohort(competing_cohort)
        assert_allclose(design.causes, [1, 2])
        assert_allclose(cumulative_incidence(design, 1).cif, [0, 0.25, 0.25, 0.25, 0.75])
