"""
Scheduling preview - what each answer would do.

Runs the state machine once per rating on the same (immutable) input so
the learner can see the consequences before answering.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from recall.fsrs.constants import MINUTES_PER_DAY, Rating
from recall.fsrs.memory_model import round_half_up
from recall.fsrs.memory_state import CardMemoryState, as_utc

if TYPE_CHECKING:
    from recall.fsrs.scheduler import ReviewScheduler


@dataclass(frozen=True)
class SchedulingOption:
    """Hypothetical outcome of one rating."""
    rating: Rating
    new_state: CardMemoryState
    interval_days: float
    interval_label: str


def format_interval(days: float) -> str:
    """
    Human-readable interval.

    - under a day: minutes ("10m"), or hours once the minutes reach 60 ("2h")
    - under 30 days: days ("4d")
    - under 365 days: 30-day months ("2mo")
    - otherwise: years with one decimal ("1.1y")
    """
    if days < 1:
        minutes = round_half_up(days * MINUTES_PER_DAY)
        if minutes < 60:
            return f"{minutes}m"
        return f"{round_half_up(minutes / 60)}h"
    if days < 30:
        return f"{round_half_up(days)}d"
    if days < 365:
        return f"{round_half_up(days / 30)}mo"
    return f"{days / 365:.1f}y"


def preview_schedule(
    scheduler: ReviewScheduler,
    state: CardMemoryState,
    now: Optional[datetime] = None,
) -> dict[Rating, SchedulingOption]:
    """
    Compute the outcome of every rating for a card without committing one.

    Args:
        scheduler: Scheduler whose parameters and config apply
        state: Current card state (not modified)
        now: Hypothetical review time (defaults to now, UTC)

    Returns:
        Mapping of Rating -> SchedulingOption, in rating order
    """
    now = as_utc(now) if now is not None else datetime.now(timezone.utc)

    options: dict[Rating, SchedulingOption] = {}
    for rating in Rating:
        new_state = scheduler.next_state(state, rating, now)
        options[rating] = SchedulingOption(
            rating=rating,
            new_state=new_state,
            interval_days=new_state.scheduled_interval_days,
            interval_label=format_interval(new_state.scheduled_interval_days),
        )
    return options
