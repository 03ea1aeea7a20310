"""
Study session record.

Tracks progress through one built queue. Like card state, a session is
a value: record_answer returns an advanced copy.
"""

from __future__ import annotations

import uuid
from dataclasses import dataclass, field, replace
from datetime import datetime, timezone
from typing import Optional, Sequence

from recall.fsrs.constants import CardLifecycle, Rating
from recall.fsrs.models import ReviewLogEntry
from recall.fsrs.schemas import SessionConfig
from recall.session_builders.pool_types import CardRecord, ReviewQueueItem
from recall.session_builders.queue_builder import build_session_queue


@dataclass(frozen=True)
class StudySession:
    """Progress through one session queue."""
    session_id: str
    started_at: datetime
    queue: tuple[ReviewQueueItem, ...] = field(default_factory=tuple)
    current_index: int = 0
    reviewed_count: int = 0
    new_learned_count: int = 0
    failed_count: int = 0
    is_active: bool = True

    @property
    def current_item(self) -> Optional[ReviewQueueItem]:
        if not self.is_active or self.current_index >= len(self.queue):
            return None
        return self.queue[self.current_index]

    @property
    def remaining(self) -> int:
        return max(0, len(self.queue) - self.current_index)


def create_study_session(
    cards: Sequence[CardRecord],
    now: Optional[datetime] = None,
    config: Optional[SessionConfig] = None,
) -> StudySession:
    """
    Start a session over a freshly built queue.

    An empty queue yields an already inactive session.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    queue = tuple(build_session_queue(cards, now, config))
    return StudySession(
        session_id=f"session_{uuid.uuid4().hex}",
        started_at=now,
        queue=queue,
        is_active=bool(queue),
    )


def record_answer(session: StudySession, log_entry: ReviewLogEntry) -> StudySession:
    """
    Count one answered card and move to the next queue slot.

    Raises:
        ValueError: if the session is no longer active, or the answer is
            for a card other than the current queue slot
    """
    if not session.is_active:
        raise ValueError(f"Session {session.session_id} is not active")

    expected_id = session.queue[session.current_index].card_id
    if log_entry.card_id != expected_id:
        raise ValueError(
            f"Session {session.session_id} expects an answer for {expected_id!r}, "
            f"got {log_entry.card_id!r}"
        )

    next_index = session.current_index + 1
    return replace(
        session,
        current_index=next_index,
        reviewed_count=session.reviewed_count + 1,
        new_learned_count=session.new_learned_count + int(log_entry.lifecycle_before == CardLifecycle.NEW),
        failed_count=session.failed_count + int(log_entry.rating == Rating.AGAIN),
        is_active=next_index < len(session.queue),
    )
