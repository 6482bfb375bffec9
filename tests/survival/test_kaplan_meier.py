"""
Tests for kaplan_meier().

Hand-computed reference values; the risk set at t counts every subject
with time >= t, including those censored at t.
"""

import math

import numpy as np
import pytest
from numpy.testing import assert_allclose

from pysurvlab.core.exceptions import DimensionError, InvalidParameterError, ValidationError
from pysurvlab.simulate import Subject, generate_exponential_data, generate_weibull_data
from pysurvlab.survival import KMSolution, SurvivalDesign, kaplan_meier


class TestKaplanMeierBasic:
    """Basic Kaplan-Meier survival curve estimation."""

    def test_three_subjects(self, three_subject_cohort):
        """Event at 1, censored at 2, event at 3.

        S(1) = 1 - 1/3 = 2/3; at t=3 one subject is at risk and fails,
        so S(3) = 2/3 * 0 = 0.
        """
        result = kaplan_meier(three_subject_cohort)

        assert isinstance(result, KMSolution)
        assert_allclose(result.time, [0, 1, 3])
        assert_allclose(result.n_risk, [3, 3, 1])
        assert_allclose(result.n_events, [0, 1, 1])
        assert_allclose(result.survival, [1, 2 / 3, 0.0], rtol=1e-12)

    def test_textbook_curve(self, textbook_cohort):
        result = kaplan_meier(textbook_cohort)

        assert result.n_observations == 6
        assert result.n_events_total == 4
        assert_allclose(result.time, [0, 1, 3, 5, 6])
        assert_allclose(result.n_risk, [6, 6, 4, 2, 1])
        assert_allclose(result.survival, [1, 5 / 6, 5 / 8, 5 / 16, 0.0], rtol=1e-12)

    def test_origin_point(self, textbook_cohort):
        result = kaplan_meier(textbook_cohort)
        assert result.time[0] == 0.0
        assert result.survival[0] == 1.0
        assert result.n_risk[0] == 6
        assert result.n_events[0] == 0
        assert result.ci_lower[0] == 1.0
        assert result.ci_upper[0] == 1.0

    def test_empty_cohort(self):
        result = kaplan_meier([])
        assert_allclose(result.time, [0.0])
        assert_allclose(result.survival, [1.0])
        assert_allclose(result.n_risk, [0.0])
        assert result._result.has_warning("empty cohort")

    def test_all_censored(self):
        cohort = [Subject(f"s{i}", float(i), False) for i in range(1, 6)]
        result = kaplan_meier(cohort)
        assert len(result.time) == 1
        assert result.median_survival is None
        assert result._result.has_warning("no events")

    def test_tied_events_and_censoring(self):
        """Censored subjects at t stay in the risk set at t."""
        cohort = [
            Subject("a", 1.0, True), Subject("b", 1.0, False),
            Subject("c", 2.0, True), Subject("d", 2.0, False),
            Subject("e", 3.0, True),
        ]
        result = kaplan_meier(cohort)
        assert_allclose(result.time, [0, 1, 2, 3])
        assert_allclose(result.n_risk, [5, 5, 3, 1])
        assert_allclose(result.n_events, [0, 1, 1, 1])

    def test_tied_events(self):
        cohort = [Subject(str(i), t, True) for i, t in enumerate([1, 1, 2, 2, 3])]
        result = kaplan_meier(cohort)
        assert_allclose(result.n_events, [0, 2, 2, 1])
        assert_allclose(result.survival, [1, 3 / 5, 1 / 5, 0.0], rtol=1e-12)

    def test_unsorted_input(self, textbook_cohort):
        shuffled = [textbook_cohort[i] for i in (3, 0, 5, 2, 4, 1)]
        assert_allclose(
            kaplan_meier(shuffled).survival,
            kaplan_meier(textbook_cohort).survival,
        )

    def test_mapping_records(self):
        cohort = [
            {"id": "a", "time": 1, "event": True},
            {"id": "b", "time": 2, "event": False},
            {"id": "c", "time": 3, "event": True},
        ]
        result = kaplan_meier(cohort)
        assert_allclose(result.survival, [1, 2 / 3, 0.0])


class TestKaplanMeierConfidenceIntervals:
    """Greenwood variance and confidence bands."""

    def test_greenwood_se(self, textbook_cohort):
        result = kaplan_meier(textbook_cohort)
        # Σ d/(n(n-d)) at t=1, 3, 5; t=6 has n == d and adds nothing
        g = np.cumsum([1 / 30, 1 / 12, 1 / 2])
        expected_se = np.array([5 / 6, 5 / 8, 5 / 16]) * np.sqrt(g)
        assert_allclose(result.se[1:4], expected_se, rtol=1e-12)
        assert result.se[4] == 0.0

    def test_plain_ci_default(self, three_subject_cohort):
        result = kaplan_meier(three_subject_cohort)
        assert result.conf_type == "plain"
        assert result.conf_level == 0.95

        se = (2 / 3) * math.sqrt(1 / 6)
        assert result.ci_lower[1] == pytest.approx(2 / 3 - 1.96 * se)
        # Upper bound clipped at 1
        assert result.ci_upper[1] == 1.0
        # S = 0 collapses the band
        assert result.ci_lower[2] == 0.0
        assert result.ci_upper[2] == 0.0

    def test_loglog_ci_brackets(self, textbook_cohort):
        result = kaplan_meier(textbook_cohort, conf_type="log-log")
        assert result.conf_type == "log-log"
        assert np.all(result.ci_lower <= result.survival + 1e-12)
        assert np.all(result.ci_upper >= result.survival - 1e-12)
        assert np.all((result.ci_lower >= 0) & (result.ci_upper <= 1))

    def test_conf_level_90_narrower(self, textbook_cohort):
        r95 = kaplan_meier(textbook_cohort, conf_level=0.95)
        r90 = kaplan_meier(textbook_cohort, conf_level=0.90)
        width_95 = r95.ci_upper - r95.ci_lower
        width_90 = r90.ci_upper - r90.ci_lower
        assert np.all(width_90 <= width_95 + 1e-12)

    def test_invalid_conf_level(self, textbook_cohort):
        with pytest.raises(InvalidParameterError):
            kaplan_meier(textbook_cohort, conf_level=1.0)

    def test_invalid_conf_type(self, textbook_cohort):
        with pytest.raises(InvalidParameterError):
            kaplan_meier(textbook_cohort, conf_type="log")


class TestKaplanMeierProperties:
    """Invariants over generated cohorts."""

    @pytest.mark.parametrize("seed", [1, 2, 3, 17, 42, 1000])
    def test_monotone_and_bracketed(self, seed):
        cohort = generate_exponential_data(120, 0.08, 0.35, seed=seed)
        result = kaplan_meier(cohort)

        assert np.all(np.diff(result.survival) <= 0)
        assert np.all((result.survival >= 0) & (result.survival <= 1))
        assert np.all(result.ci_lower <= result.survival + 1e-12)
        assert np.all(result.ci_upper >= result.survival - 1e-12)
        assert np.all((result.ci_lower >= 0) & (result.ci_upper <= 1))
        assert np.all(np.diff(result.time) > 0)

    @pytest.mark.parametrize("seed", [5, 6])
    def test_weibull_cohort(self, seed):
        cohort = generate_weibull_data(80, 0.01, 2.0, 0.2, seed=seed)
        result = kaplan_meier(cohort)
        assert np.all(np.diff(result.survival) <= 0)
        assert result.n_events_total == sum(s.event for s in cohort)


class TestKMSolutionHelpers:

    def test_median(self, textbook_cohort):
        # S(5) = 5/16 is the first value <= 0.5
        assert kaplan_meier(textbook_cohort).median_survival == 5.0

    def test_survival_at(self, textbook_cohort):
        result = kaplan_meier(textbook_cohort)
        assert result.survival_at(0.5) == 1.0
        assert result.survival_at(1.0) == pytest.approx(5 / 6)
        assert result.survival_at(2.9) == pytest.approx(5 / 6)
        assert result.survival_at(-1.0) == 1.0
        assert_allclose(result.survival_at([3.0, 10.0]), [5 / 8, 0.0])

    def test_log_log_survival(self, textbook_cohort):
        result = kaplan_meier(textbook_cohort)
        ll = result.log_log_survival()
        assert ll[0] == -np.inf
        assert ll[1] == pytest.approx(math.log(-math.log(5 / 6)))
        assert ll[-1] == pytest.approx(math.log(-math.log(0.001)))

    def test_to_dict(self, three_subject_cohort):
        d = kaplan_meier(three_subject_cohort).to_dict()
        assert d["time"] == [0.0, 1.0, 3.0]
        assert d["n_risk"] == [3, 3, 1]
        assert d["n_event"] == [0, 1, 1]
        assert len(d["confidence_lower"]) == 3

    def test_summary_and_repr(self, textbook_cohort):
        result = kaplan_meier(textbook_cohort)
        text = result.summary()
        assert "median survival = 5" in text
        assert "n=6, events=4" in text
        assert "lower 95%" in text
        assert "KMSolution(n=6" in repr(result)

    def test_timing_recorded(self, textbook_cohort):
        result = kaplan_meier(textbook_cohort)
        assert result.timing["total_seconds"] >= 0
        assert result.backend_name == "cpu_km"


class TestSurvivalDesign:

    def test_negative_time_rejected(self):
        with pytest.raises(ValidationError, match="non-negative"):
            kaplan_meier([Subject("a", -1.0, True)])

    def test_bad_event_rejected(self):
        with pytest.raises(ValidationError, match="only 0 and 1"):
            SurvivalDesign.for_survival([1.0, 2.0], [1, 2])

    def test_length_mismatch(self):
        with pytest.raises(DimensionError):
            SurvivalDesign.for_survival([1.0, 2.0], [1])

    def test_missing_field(self):
        with pytest.raises(ValidationError, match="missing key 'event'"):
            kaplan_meier([{"time": 1.0}])

    def test_design_passthrough(self, textbook_cohort):
        design = SurvivalDesign.from_cohort(textbook_cohort)
        assert design.n == 6
        assert design.n_events == 4
        assert SurvivalDesign.from_cohort(design) is design
        assert_allclose(kaplan_meier(design).survival, kaplan_meier(textbook_cohort).survival)
