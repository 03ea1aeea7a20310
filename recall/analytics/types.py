"""
Types for study statistics.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

from recall.fsrs.constants import CardLifecycle


@dataclass(frozen=True)
class DailyStats:
    """
    Review activity for one UTC calendar day.
    """
    date: date
    reviewed: int = 0
    new_learned: int = 0
    failed: int = 0
    total_time_ms: int = 0
    average_accuracy: float = 0.0


@dataclass(frozen=True)
class AggregateStats:
    """
    Collection-wide snapshot: card counts, retention and streaks.
    """
    total_cards: int
    by_lifecycle: dict[CardLifecycle, int]
    due_cards: int
    overdue_cards: int
    retention_rate: float
    total_reviews: int
    streak: int
    best_streak: int
    average_daily_reviews: float
    predicted_retention: float
