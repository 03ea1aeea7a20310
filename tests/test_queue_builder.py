"""Tests for recall/session_builders queue building."""

from datetime import timedelta

from recall.fsrs import CardLifecycle, SessionConfig
from recall.session_builders import (
    build_session_pools,
    build_session_queue,
    get_due_cards,
    get_new_cards,
)
from recall.session_builders.pool_utils import interleave_batches

L = CardLifecycle


def _ids(items):
    return [item.card_id for item in items]


def test_due_cards_ordering(now, make_card):
    """Short-term before review before new, each by earliest due date."""
    cards = [
        make_card("review-late", L.REVIEW, due_in=-1.0),
        make_card("new", L.NEW, due_in=-5.0),
        make_card("relearn", L.RELEARNING, due_in=-0.01),
        make_card("review-early", L.REVIEW, due_in=-3.0),
        make_card("learn", L.LEARNING, due_in=-0.02),
        make_card("future", L.REVIEW, due_in=2.0),
    ]
    assert _ids(get_due_cards(cards, now)) == [
        "learn", "relearn", "review-early", "review-late", "new",
    ]


def test_due_boundary_is_inclusive(now, make_card):
    cards = [make_card("exact", due_in=0.0), make_card("later", due_in=1 / 86400)]
    assert _ids(get_due_cards(cards, now)) == ["exact"]


def test_new_cards_by_creation_time(make_card):
    cards = [
        make_card("b", L.NEW, created_offset=2.0),
        make_card("review", L.REVIEW, created_offset=9.0),
        make_card("a", L.NEW, created_offset=5.0),
        make_card("c", L.NEW, created_offset=1.0),
    ]
    assert _ids(get_new_cards(cards)) == ["a", "b", "c"]


def test_short_term_cards_come_first(now, make_card):
    cards = [
        make_card("r1", L.REVIEW, due_in=-2.0),
        make_card("n1", L.NEW),
        make_card("l1", L.LEARNING, due_in=-0.001),
    ]
    queue = build_session_queue(cards, now, SessionConfig())
    assert _ids(queue) == ["l1", "r1", "n1"]


def test_reviews_interleaved_with_new_cards(now, make_card):
    """Ten reviews, then one new card, repeated."""
    reviews = [make_card(f"r{i:02d}", L.REVIEW, due_in=-30.0 + i) for i in range(25)]
    news = [make_card(f"n{i}", L.NEW, created_offset=10.0 - i) for i in range(3)]
    queue = build_session_queue(reviews + news, now, SessionConfig())

    expected = (
        [f"r{i:02d}" for i in range(10)] + ["n0"]
        + [f"r{i:02d}" for i in range(10, 20)] + ["n1"]
        + [f"r{i:02d}" for i in range(20, 25)] + ["n2"]
    )
    assert _ids(queue) == expected


def test_new_cards_drain_after_reviews(now, make_card):
    cards = [make_card("r0", L.REVIEW, due_in=-1.0)] + [
        make_card(f"n{i}", L.NEW, created_offset=10.0 - i) for i in range(3)
    ]
    assert _ids(build_session_queue(cards, now)) == ["r0", "n0", "n1", "n2"]


def test_daily_caps(now, make_card):
    cards = (
        [make_card(f"r{i}", L.REVIEW, due_in=-10.0 + i) for i in range(5)]
        + [make_card(f"n{i}", L.NEW, created_offset=10.0 - i) for i in range(5)]
        + [make_card(f"l{i}", L.LEARNING, due_in=-0.01) for i in range(4)]
    )
    config = SessionConfig(new_cards_per_day=2, max_reviews_per_day=3)
    pools = build_session_pools(cards, now, config)

    assert _ids(pools.review) == ["r0", "r1", "r2"]
    assert _ids(pools.new) == ["n0", "n1"]
    assert len(pools.short_term) == 4


def test_zero_review_cap_means_unlimited(now, make_card):
    cards = [make_card(f"r{i}", L.REVIEW, due_in=-1.0) for i in range(300)]
    pools = build_session_pools(cards, now, SessionConfig(max_reviews_per_day=0))
    assert len(pools.review) == 300


def test_default_review_cap(now, make_card):
    cards = [make_card(f"r{i}", L.REVIEW, due_in=-1.0) for i in range(250)]
    queue = build_session_queue(cards, now)
    assert len(queue) == 200


def test_zero_new_cards_per_day(now, make_card):
    cards = [make_card("n0", L.NEW), make_card("r0", L.REVIEW, due_in=-1.0)]
    queue = build_session_queue(cards, now, SessionConfig(new_cards_per_day=0))
    assert _ids(queue) == ["r0"]


def test_priorities_strictly_increase(now, make_card):
    cards = [make_card(f"r{i}", L.REVIEW, due_in=-1.0 - i) for i in range(12)] + [
        make_card("n0", L.NEW),
        make_card("l0", L.LEARNING, due_in=-0.5),
    ]
    queue = build_session_queue(cards, now)
    assert [item.priority for item in queue] == list(range(len(queue)))
    assert len(set(_ids(queue))) == len(queue)


def test_queue_items_carry_card_details(now, make_card):
    card = make_card("r0", L.REVIEW, due_in=-2.0)
    (item,) = build_session_queue([card], now)
    assert item.due_at == now - timedelta(days=2)
    assert item.lifecycle == L.REVIEW


def test_empty_collection(now):
    assert build_session_queue([], now) == []
    assert get_due_cards([], now) == []


def test_snapshot_not_modified(now, make_card):
    cards = [make_card("r1", L.REVIEW, due_in=-1.0), make_card("l1", L.LEARNING, due_in=-0.1)]
    before = list(cards)
    build_session_queue(cards, now)
    assert cards == before


def test_interleave_batches_without_secondary():
    assert list(interleave_batches([1, 2, 3], [], 2)) == [1, 2, 3]


def test_interleave_batches_without_primary():
    assert list(interleave_batches([], ["a", "b"], 10)) == ["a", "b"]
