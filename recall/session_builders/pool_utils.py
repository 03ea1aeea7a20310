"""
Pool utilities for session builders.

Shared primitives over a card snapshot. None of them mutate their
inputs; each returns a new list.
"""

from __future__ import annotations

from datetime import datetime
from typing import Iterator, Optional, Sequence, TypeVar

from recall.fsrs.constants import CardLifecycle, SHORT_TERM_LIFECYCLES
from recall.fsrs.memory_state import as_utc
from recall.session_builders.pool_types import CardRecord


T = TypeVar("T")

LIFECYCLE_PRIORITY = {
    CardLifecycle.LEARNING: 0,
    CardLifecycle.RELEARNING: 0,
    CardLifecycle.REVIEW: 1,
    CardLifecycle.NEW: 2,
}


def due_cards_from_snapshot(cards: Sequence[CardRecord], now: datetime) -> list[CardRecord]:
    """
    Cards with next_due_at <= now.

    Ordered learning/relearning first, then review, then new; ties
    broken by earliest due date.
    """
    now = as_utc(now)
    due = [card for card in cards if as_utc(card.next_due_at) <= now]
    due.sort(key=lambda card: (LIFECYCLE_PRIORITY[card.lifecycle], as_utc(card.next_due_at)))
    return due


def new_cards_from_snapshot(cards: Sequence[CardRecord]) -> list[CardRecord]:
    """Never-reviewed cards, oldest first."""
    new = [card for card in cards if card.lifecycle == CardLifecycle.NEW]
    new.sort(key=lambda card: as_utc(card.created_at))
    return new


def short_term_only(cards: Sequence[CardRecord]) -> list[CardRecord]:
    return [card for card in cards if card.lifecycle in SHORT_TERM_LIFECYCLES]


def review_only(cards: Sequence[CardRecord]) -> list[CardRecord]:
    return [card for card in cards if card.lifecycle == CardLifecycle.REVIEW]


def cap(items: Sequence[T], limit: Optional[int]) -> list[T]:
    """First `limit` items; None means no cap."""
    if limit is None:
        return list(items)
    return list(items[:limit])


def interleave_batches(
    primary: Sequence[T],
    secondary: Sequence[T],
    batch_size: int,
) -> Iterator[T]:
    """
    Yield up to batch_size primary items, then one secondary item, until
    both sequences are exhausted.
    """
    p_idx = 0
    s_idx = 0
    while p_idx < len(primary) or s_idx < len(secondary):
        batch_end = min(p_idx + batch_size, len(primary))
        while p_idx < batch_end:
            yield primary[p_idx]
            p_idx += 1
        if s_idx < len(secondary):
            yield secondary[s_idx]
            s_idx += 1
