"""
Typed records shared across session builders.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from recall.fsrs.constants import CardLifecycle
from recall.fsrs.memory_state import CardMemoryState


@dataclass(frozen=True)
class CardRecord:
    """
    A card as the queue builder and statistics see it.

    Content, storage and display live with the caller; only the id,
    creation time and memory state matter here.
    """
    card_id: str
    state: CardMemoryState
    created_at: datetime

    @property
    def lifecycle(self) -> CardLifecycle:
        return self.state.lifecycle

    @property
    def next_due_at(self) -> datetime:
        return self.state.next_due_at


@dataclass(frozen=True)
class ReviewQueueItem:
    """One slot in a session queue. Lower priority = shown sooner."""
    card_id: str
    due_at: datetime
    lifecycle: CardLifecycle
    priority: int


@dataclass(frozen=True)
class SessionPools:
    """
    Session-scoped pools, already ordered and capped.
    """
    short_term: list[CardRecord]
    review: list[CardRecord]
    new: list[CardRecord]
