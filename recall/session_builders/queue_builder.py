"""
Queue Builder - Session Queue Creation

Creates an ordered study queue from three pools:
1. Short-term pool: due learning/relearning cards (never capped)
2. Review pool: due review cards, capped at max_reviews_per_day (0 = unlimited)
3. New pool: never-reviewed cards, oldest first, capped at new_cards_per_day

Queue Logic:
- All short-term cards come first, in due order
- Then reviews and new cards are interleaved: up to REVIEW_BATCH_SIZE
  reviews, then one new card, repeated until both pools are empty
- Every item gets a strictly increasing priority matching its position
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional, Sequence

from recall.fsrs.constants import REVIEW_BATCH_SIZE
from recall.fsrs.schemas import SessionConfig
from recall.session_builders.pool_types import CardRecord, ReviewQueueItem, SessionPools
from recall.session_builders.pool_utils import (
    cap,
    due_cards_from_snapshot,
    interleave_batches,
    new_cards_from_snapshot,
    review_only,
    short_term_only,
)

logger = logging.getLogger(__name__)


def get_due_cards(cards: Sequence[CardRecord], now: Optional[datetime] = None) -> list[CardRecord]:
    """Cards due at `now`, short-term first, then review, then new."""
    if now is None:
        now = datetime.now(timezone.utc)
    return due_cards_from_snapshot(cards, now)


def get_new_cards(cards: Sequence[CardRecord]) -> list[CardRecord]:
    """Never-reviewed cards by creation time."""
    return new_cards_from_snapshot(cards)


def build_session_pools(
    cards: Sequence[CardRecord],
    now: datetime,
    config: SessionConfig,
) -> SessionPools:
    """
    Split a card snapshot into the three capped, ordered session pools.

    Args:
        cards: Full card collection (consistent snapshot)
        now: Session start time
        config: Daily caps

    Returns:
        SessionPools
    """
    due = due_cards_from_snapshot(cards, now)
    review_limit = config.max_reviews_per_day or None

    return SessionPools(
        short_term=short_term_only(due),
        review=cap(review_only(due), review_limit),
        new=cap(new_cards_from_snapshot(cards), config.new_cards_per_day),
    )


def build_session_queue(
    cards: Sequence[CardRecord],
    now: Optional[datetime] = None,
    config: Optional[SessionConfig] = None,
) -> list[ReviewQueueItem]:
    """
    Build the ordered work queue for one study session.

    Args:
        cards: Full card collection (consistent snapshot)
        now: Session start time (defaults to now, UTC)
        config: Daily caps (defaults to SessionConfig())

    Returns:
        ReviewQueueItems in presentation order; priority == position
    """
    if now is None:
        now = datetime.now(timezone.utc)
    if config is None:
        config = SessionConfig()

    pools = build_session_pools(cards, now, config)

    ordered = list(pools.short_term)
    ordered.extend(interleave_batches(pools.review, pools.new, REVIEW_BATCH_SIZE))

    queue = [
        ReviewQueueItem(
            card_id=card.card_id,
            due_at=card.next_due_at,
            lifecycle=card.lifecycle,
            priority=position,
        )
        for position, card in enumerate(ordered)
    ]

    logger.debug(
        "Session queue: %d short-term, %d review, %d new (of %d cards)",
        len(pools.short_term), len(pools.review), len(pools.new), len(cards),
    )
    return queue
