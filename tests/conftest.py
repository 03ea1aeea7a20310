import random
from datetime import datetime, timedelta, timezone

import pytest

from recall.fsrs import CardLifecycle, CardMemoryState, ParameterSet, ReviewScheduler, SessionConfig
from recall.session_builders import CardRecord


NOW = datetime(2026, 3, 2, 9, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def scheduler():
    """Default settings with fuzz disabled: fully deterministic."""
    return ReviewScheduler(ParameterSet(enable_fuzz=False), SessionConfig(), random.Random(0))


@pytest.fixture
def fuzzy_scheduler():
    """Default settings with fuzz enabled and a fixed seed."""
    return ReviewScheduler(ParameterSet(), SessionConfig(), random.Random(1234))


@pytest.fixture
def make_state():
    """Build a CardMemoryState relative to NOW (offsets in days)."""
    def _make(
        lifecycle=CardLifecycle.REVIEW,
        due_in=0.0,
        reviewed_ago=None,
        stability=5.0,
        difficulty=5.0,
        repetition_count=1,
        lapse_count=0,
    ):
        if lifecycle == CardLifecycle.NEW:
            return CardMemoryState(lifecycle=lifecycle, next_due_at=NOW + timedelta(days=due_in))
        return CardMemoryState(
            lifecycle=lifecycle,
            next_due_at=NOW + timedelta(days=due_in),
            difficulty=difficulty,
            stability=stability,
            retrievability=0.9,
            repetition_count=repetition_count,
            lapse_count=lapse_count,
            last_reviewed_at=None if reviewed_ago is None else NOW - timedelta(days=reviewed_ago),
        )
    return _make


@pytest.fixture
def make_card(make_state):
    """Build a CardRecord; created_offset is days before NOW."""
    def _make(card_id, lifecycle=CardLifecycle.REVIEW, due_in=0.0, created_offset=30.0, **state_kwargs):
        return CardRecord(
            card_id=card_id,
            state=make_state(lifecycle=lifecycle, due_in=due_in, **state_kwargs),
            created_at=NOW - timedelta(days=created_offset),
        )
    return _make
