"""
pytest configuration and shared fixtures.
"""

import pytest

from pysurvlab.simulate import CompetingRiskSubject, Subject


@pytest.fixture
def three_subject_cohort():
    """Event at 1, censored at 2, event at 3."""
    return (
        Subject(id="a", time=1.0, event=True),
        Subject(id="b", time=2.0, event=False),
        Subject(id="c", time=3.0, event=True),
    )


@pytest.fixture
def textbook_cohort():
    """Six subjects, two censored (times 1..6, events 1,0,1,0,1,1)."""
    events = [True, False, True, False, True, True]
    return tuple(
        Subject(id=f"s{i + 1}", time=float(i + 1), event=e)
        for i, e in enumerate(events)
    )


@pytest.fixture
def competing_cohort():
    """Cause 1 at 1, cause 2 at 2, censored at 3, cause 1 at 4."""
    return (
        CompetingRiskSubject(id="a", time=1.0, event_type=1),
        CompetingRiskSubject(id="b", time=2.0, event_type=2),
        CompetingRiskSubject(id="c", time=3.0, event_type=0),
        CompetingRiskSubject(id="d", time=4.0, event_type=1),
    )
