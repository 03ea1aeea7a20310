"""
Short-Term Steps - Learning and Relearning Intervals

Learning and relearning cards are scheduled on minute-scale steps taken
from SessionConfig. These helpers turn a step choice into a fractional
day interval; they never touch stability.
"""

from __future__ import annotations

from recall.fsrs.constants import (
    HARD_STEP_MULTIPLIER,
    MINUTES_PER_DAY,
    CardLifecycle,
)
from recall.fsrs.schemas import SessionConfig


def minutes_to_days(minutes: float) -> float:
    return minutes / MINUTES_PER_DAY


def steps_for(lifecycle: CardLifecycle, config: SessionConfig) -> tuple[float, ...]:
    """Step list that applies to a short-term card."""
    if lifecycle == CardLifecycle.RELEARNING:
        return config.relearning_steps
    return config.learning_steps


def first_step_days(steps: tuple[float, ...]) -> float:
    """Interval for Again: back to the first step."""
    return minutes_to_days(steps[0])


def new_card_hard_step_days(steps: tuple[float, ...]) -> float:
    """Hard on a new card uses the second step, or the first if there is only one."""
    return minutes_to_days(steps[min(1, len(steps) - 1)])


def hard_step_days(steps: tuple[float, ...]) -> float:
    """
    Hard on a learning/relearning card repeats the current step, stretched.

    Cards do not carry a step index, so the current step is the first one.
    """
    return minutes_to_days(steps[0] * HARD_STEP_MULTIPLIER)
