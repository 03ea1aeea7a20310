"""Tests for recall/fsrs/preview.py."""

from datetime import timedelta

import pytest

from recall.fsrs import CardLifecycle, Rating, format_interval, new_card_state


def test_preview_has_all_ratings(scheduler, now):
    options = scheduler.preview_schedule(new_card_state(now), now)
    assert list(options) == [Rating.AGAIN, Rating.HARD, Rating.GOOD, Rating.EASY]
    assert all(option.rating == rating for rating, option in options.items())


def test_preview_labels_for_new_card(scheduler, now):
    options = scheduler.preview_schedule(new_card_state(now), now)
    labels = {rating: option.interval_label for rating, option in options.items()}
    assert labels == {
        Rating.AGAIN: "1m",
        Rating.HARD: "10m",
        Rating.GOOD: "1d",
        Rating.EASY: "4d",
    }


def test_preview_matches_committed_review(scheduler, now, make_state):
    """Each option is exactly what answering with that rating would produce."""
    state = make_state(reviewed_ago=6.0, stability=6.0)
    options = scheduler.preview_schedule(state, now)

    for rating, option in options.items():
        committed, _ = scheduler.process_review(state, rating, now)
        assert option.new_state == committed
        assert option.interval_days == committed.scheduled_interval_days


def test_preview_does_not_mutate(scheduler, now, make_state):
    state = make_state(lifecycle=CardLifecycle.RELEARNING, reviewed_ago=0.01)
    before = (state.lifecycle, state.stability, state.difficulty, state.next_due_at)
    scheduler.preview_schedule(state, now)
    assert (state.lifecycle, state.stability, state.difficulty, state.next_due_at) == before


def test_preview_is_idempotent(fuzzy_scheduler, now, make_state):
    """Fuzz aside, repeated previews agree; long intervals stay within the fuzz band."""
    state = make_state(reviewed_ago=2.0, stability=2.0)
    first = fuzzy_scheduler.preview_schedule(state, now)
    second = fuzzy_scheduler.preview_schedule(state, now)
    assert first[Rating.AGAIN] == second[Rating.AGAIN]
    assert first[Rating.HARD].new_state.stability == second[Rating.HARD].new_state.stability


def test_preview_review_ordering(scheduler, now, make_state):
    """Better answers never schedule sooner."""
    state = make_state(reviewed_ago=10.0, stability=10.0)
    options = scheduler.preview_schedule(state, now)
    intervals = [options[rating].interval_days for rating in Rating]
    assert intervals == sorted(intervals)


def test_preview_defaults_now(scheduler, now):
    options = scheduler.preview_schedule(new_card_state(now - timedelta(days=1)))
    assert options[Rating.GOOD].new_state.last_reviewed_at > now


@pytest.mark.parametrize(
    "days, label",
    [
        (0.02, "29m"),
        (1 / 1440, "1m"),
        (59 / 1440, "59m"),
        (0.0625, "2h"),
        (1.0, "1d"),
        (29.4, "29d"),
        (30.0, "1mo"),
        (45.0, "2mo"),
        (364.0, "12mo"),
        (365.0, "1.0y"),
        (400.0, "1.1y"),
    ],
)
def test_format_interval(days, label):
    assert format_interval(days) == label


def test_preview_repeatable_without_fuzz(scheduler, now, make_state):
    state = make_state(reviewed_ago=30.0, stability=25.0)
    assert scheduler.preview_schedule(state, now) == scheduler.preview_schedule(state, now)
