"""
Interval fuzzing.

The only non-deterministic step of the scheduler. The random source is
always passed in, so a seeded random.Random (or enable_fuzz=False) makes
every schedule replayable.
"""

from __future__ import annotations

from typing import Protocol

from recall.fsrs.constants import (
    FUZZ_FULL_SCALE_DAYS,
    FUZZ_RATIO,
    FUZZ_THRESHOLD_DAYS,
)
from recall.fsrs.memory_model import round_half_up


class RandomSource(Protocol):
    """Anything with a random() -> float in [0, 1), e.g. random.Random."""

    def random(self) -> float: ...


def apply_fuzz(interval: float, rng: RandomSource, enabled: bool = True) -> float:
    """
    Spread an interval by up to +/-5%, scaled down for short intervals.

    - Sub-day intervals (learning steps) are returned untouched.
    - Intervals below 2.5 days, or any interval with fuzz disabled, are
      rounded to whole days.
    - Otherwise: fuzz_range = interval * 0.05 * min(1, interval / 100) and
      the result is round(interval + uniform(-fuzz_range, fuzz_range)),
      floored at 1 day.

    Args:
        interval: Raw interval in days
        rng: Random source consulted only when a draw is needed
        enabled: ParameterSet.enable_fuzz

    Returns:
        Interval in days
    """
    if interval < 1:
        return interval

    if not enabled or interval < FUZZ_THRESHOLD_DAYS:
        return float(round_half_up(interval))

    fuzz_factor = min(1.0, interval / FUZZ_FULL_SCALE_DAYS)
    fuzz_range = interval * FUZZ_RATIO * fuzz_factor
    fuzz = (rng.random() - 0.5) * 2 * fuzz_range

    return float(max(1, round_half_up(interval + fuzz)))
