"""Session builder modules: queue ordering and study-session records."""

from recall.session_builders.pool_types import (
    CardRecord,
    ReviewQueueItem,
    SessionPools,
)
from recall.session_builders.queue_builder import (
    build_session_pools,
    build_session_queue,
    get_due_cards,
    get_new_cards,
)
from recall.session_builders.study_session import (
    StudySession,
    create_study_session,
    record_answer,
)

__all__ = [
    "CardRecord",
    "ReviewQueueItem",
    "SessionPools",
    "build_session_pools",
    "build_session_queue",
    "get_due_cards",
    "get_new_cards",
    "StudySession",
    "create_study_session",
    "record_answer",
]
