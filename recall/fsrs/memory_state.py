"""
Memory State - Card State and Retrievability

Defines the per-card memory state and the time-derived quantities
computed from it.

Key concepts:
- Stability (S): days until recall probability decays to 90%
- Difficulty (D): intrinsic hardness on a 1-10 scale
- Retrievability (R): probability of successful recall at time t
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

from recall.errors import InvalidTimestampError
from recall.fsrs.constants import CardLifecycle, SECONDS_PER_DAY

LN_09 = math.log(0.9)


@dataclass(frozen=True)
class CardMemoryState:
    """
    Memory state for a single card.

    Immutable: the review state machine returns a new value for every
    transition and never edits one in place.
    """
    lifecycle: CardLifecycle
    next_due_at: datetime

    # Memory model (0 until the first review)
    difficulty: float = 0.0
    stability: float = 0.0
    retrievability: float = 0.0

    # Review tracking
    repetition_count: int = 0
    lapse_count: int = 0
    last_reviewed_at: Optional[datetime] = None
    scheduled_interval_days: float = 0.0
    elapsed_days: float = 0.0

    @property
    def is_new(self) -> bool:
        return self.lifecycle == CardLifecycle.NEW


def as_utc(timestamp: datetime) -> datetime:
    """Treat naive timestamps as UTC; convert aware ones to UTC."""
    if timestamp.tzinfo is None:
        return timestamp.replace(tzinfo=timezone.utc)
    return timestamp.astimezone(timezone.utc)


def new_card_state(now: Optional[datetime] = None) -> CardMemoryState:
    """
    Initialize state for a card that has never been reviewed.

    The card is due immediately.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    return CardMemoryState(lifecycle=CardLifecycle.NEW, next_due_at=as_utc(now))


def calculate_retrievability(elapsed_days: float, stability: float) -> float:
    """
    Probability of recall after elapsed_days for a memory of the given stability.

    Formula: R = exp(ln(0.9) * t / S)

    R is exactly 0.9 when t == S, 1.0 at t == 0, and 0 for a card with
    no stability yet.
    """
    if stability <= 0:
        return 0.0
    return math.exp(LN_09 * max(0.0, elapsed_days) / stability)


def get_elapsed_days(last_reviewed_at: Optional[datetime], now: datetime) -> float:
    """
    Days since the previous review (0 if never reviewed).

    Raises:
        InvalidTimestampError: if now is earlier than last_reviewed_at
    """
    if last_reviewed_at is None:
        return 0.0

    delta = as_utc(now) - as_utc(last_reviewed_at)
    if delta < timedelta(0):
        raise InvalidTimestampError(
            f"Review time {now.isoformat()} is earlier than last review {last_reviewed_at.isoformat()}"
        )
    return delta.total_seconds() / SECONDS_PER_DAY


def current_retrievability(state: CardMemoryState, now: datetime) -> float:
    """Retrievability of a card at `now`, without mutating it."""
    if state.last_reviewed_at is None:
        return 0.0
    elapsed = max(0.0, (as_utc(now) - as_utc(state.last_reviewed_at)).total_seconds() / SECONDS_PER_DAY)
    return calculate_retrievability(elapsed, state.stability)
