"""
FSRS Constants and Parameters

Enums, default weights and fixed limits for the scheduler in one place.
Tunable values live on ParameterSet / SessionConfig (recall.fsrs.schemas);
everything here is fixed by the algorithm.
"""

from __future__ import annotations

from enum import Enum, IntEnum
from typing import Final


# ---- Ratings ----

class Rating(IntEnum):
    """Learner's recall rating for a single answer."""
    AGAIN = 1   # Recall failed
    HARD = 2    # Recalled with significant effort
    GOOD = 3    # Recalled with some effort
    EASY = 4    # Recalled effortlessly


RATING_LABELS: Final[dict[Rating, str]] = {
    Rating.AGAIN: "Again",
    Rating.HARD: "Hard",
    Rating.GOOD: "Good",
    Rating.EASY: "Easy",
}


# ---- Lifecycle ----

class CardLifecycle(str, Enum):
    """Where a card sits in its learning lifecycle."""
    NEW = "new"                 # Never reviewed
    LEARNING = "learning"       # Pre-graduation, minute-scale steps
    REVIEW = "review"           # Graduated, day-scale intervals
    RELEARNING = "relearning"   # Lapsed from review, minute-scale steps


SHORT_TERM_LIFECYCLES: Final[frozenset[CardLifecycle]] = frozenset(
    {CardLifecycle.LEARNING, CardLifecycle.RELEARNING}
)


# ---- Default FSRS-4.5 weights ----

WEIGHT_COUNT: Final[int] = 19

DEFAULT_WEIGHTS: Final[tuple[float, ...]] = (
    0.4072,   # w0: initial stability, Again
    1.1829,   # w1: initial stability, Hard
    3.1262,   # w2: initial stability, Good
    15.4722,  # w3: initial stability, Easy
    7.2102,   # w4: initial difficulty base
    0.5316,   # w5: initial difficulty rating slope
    1.0651,   # w6: difficulty mean-reversion weight
    0.0234,   # w7: difficulty rating step
    1.616,    # w8: success stability growth
    0.1544,   # w9: success stability saturation
    1.0824,   # w10: success retrievability gain
    1.9813,   # w11: failure stability scale
    0.0953,   # w12: failure difficulty exponent
    0.2975,   # w13: failure stability exponent
    2.2042,   # w14: failure retrievability gain
    0.2407,   # w15: hard penalty
    2.9466,   # w16: easy bonus
    0.5034,   # w17: short-term (unused by this scheduler)
    0.6567,   # w18: short-term (unused by this scheduler)
)


# ---- Global Constants ----

DEFAULT_TARGET_RETENTION = 0.9
DEFAULT_MAXIMUM_INTERVAL = 36500   # days (100 years)

D_MIN = 1.0           # Minimum difficulty
D_MAX = 10.0          # Maximum difficulty
S_FAIL_MIN = 0.1      # Minimum stability after a lapse (days)
S_MIN = 0.01          # Floor for any stability once reviewed (days)

HARD_STEP_MULTIPLIER = 1.2   # Hard answer in learning/relearning
FUZZ_THRESHOLD_DAYS = 2.5    # Intervals below this are never fuzzed
FUZZ_RATIO = 0.05            # Max +/- perturbation as a fraction of the interval
FUZZ_FULL_SCALE_DAYS = 100   # Intervals shorter than this get proportionally less fuzz

MINUTES_PER_DAY = 24 * 60
SECONDS_PER_DAY = 86400.0


# ---- Session Queue ----

REVIEW_BATCH_SIZE = 10       # Reviews emitted between consecutive new cards
OVERDUE_GRACE_DAYS = 1.0     # Due longer than this counts as overdue
RETENTION_WINDOW_DAYS = 30   # Trailing window for retention / daily averages
