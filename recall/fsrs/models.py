"""
Review log records.

Produced by the scheduler, persisted (or not) by the caller.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from recall.fsrs.constants import CardLifecycle, Rating


@dataclass(frozen=True)
class ReviewLogEntry:
    """
    Log entry for a single answered card.

    Captures the lifecycle transition and timing of one review.
    Append-only: never edited after creation.
    """
    card_id: Optional[str]
    timestamp: datetime
    rating: Rating
    lifecycle_before: CardLifecycle
    lifecycle_after: CardLifecycle
    scheduled_interval_days: float
    elapsed_days: float
    duration_ms: int = 0  # Time spent answering

    def __repr__(self):
        return f"<ReviewLogEntry({self.card_id}, rating={int(self.rating)}, {self.lifecycle_before.value}->{self.lifecycle_after.value})>"
