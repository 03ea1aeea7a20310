"""
Memory Model - Difficulty and Stability Updates

Pure FSRS-4.5 formulas. Every function takes the weight vector explicitly
so results depend only on their arguments.

Key principles:
- Difficulty mean-reverts toward the initial difficulty of a Good answer
- Successful recall at low retrievability grows stability the most
- Lapses shrink stability, but never below S_FAIL_MIN
"""

from __future__ import annotations

import math
from typing import Sequence

from recall.fsrs.constants import (
    D_MAX,
    D_MIN,
    S_FAIL_MIN,
    S_MIN,
    Rating,
)
from recall.fsrs.memory_state import LN_09


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from -inf (2.5 -> 3, not 2)."""
    return int(math.floor(value + 0.5))


def clamp_difficulty(difficulty: float) -> float:
    return max(D_MIN, min(D_MAX, difficulty))


def initial_difficulty(rating: Rating, w: Sequence[float]) -> float:
    """
    Difficulty after the very first answer.

    Formula: D0(G) = w4 - exp(w5 * (G - 1)) + 1

    Not clamped: next_difficulty uses the raw D0(Good) as its mean-reversion
    target, and the state machine clamps what it stores.
    """
    return w[4] - math.exp(w[5] * (int(rating) - 1)) + 1


def initial_stability(rating: Rating, w: Sequence[float]) -> float:
    """Stability after the very first answer: S0(G) = w[G-1]."""
    return max(S_MIN, w[int(rating) - 1])


def next_difficulty(difficulty: float, rating: Rating, w: Sequence[float]) -> float:
    """
    Difficulty after a subsequent answer.

    Formula:
        D' = clamp(w6 * D0(Good) + (1 - w6) * (D - w7 * (G - 3)), 1, 10)
    """
    target = initial_difficulty(Rating.GOOD, w)
    shifted = difficulty - w[7] * (int(rating) - 3)
    return clamp_difficulty(w[6] * target + (1 - w[6]) * shifted)


def stability_after_success(
    difficulty: float,
    stability: float,
    retrievability: float,
    rating: Rating,
    w: Sequence[float],
) -> float:
    """
    Stability after a successful recall (Hard, Good or Easy).

    Formula:
        S' = S * (exp(w8) * (11 - D) * S^(-w9) * (exp(w10 * (1 - R)) - 1)
                  * penalty * bonus + 1)

    penalty = w15 for Hard (else 1), bonus = w16 for Easy (else 1).
    """
    if rating == Rating.AGAIN:
        raise ValueError("Use stability_after_failure for AGAIN ratings")

    hard_penalty = w[15] if rating == Rating.HARD else 1.0
    easy_bonus = w[16] if rating == Rating.EASY else 1.0

    growth = (
        math.exp(w[8])
        * (11 - difficulty)
        * math.pow(stability, -w[9])
        * (math.exp(w[10] * (1 - retrievability)) - 1)
        * hard_penalty
        * easy_bonus
    )
    return max(S_MIN, stability * (growth + 1))


def stability_after_failure(
    difficulty: float,
    stability: float,
    retrievability: float,
    w: Sequence[float],
) -> float:
    """
    Stability after a lapse.

    Formula:
        S' = max(0.1, w11 * D^(-w12) * ((S + 1)^w13 - 1) * exp(w14 * (1 - R)))
    """
    new_stability = (
        w[11]
        * math.pow(difficulty, -w[12])
        * (math.pow(stability + 1, w[13]) - 1)
        * math.exp(w[14] * (1 - retrievability))
    )
    return max(S_FAIL_MIN, new_stability)


def optimal_interval(stability: float, target_retention: float, maximum_interval: int) -> int:
    """
    Whole-day interval at which retrievability decays to target_retention.

    Formula: I = S * ln(target) / ln(0.9), rounded and clamped to [1, maximum_interval]
    """
    interval = stability * math.log(target_retention) / LN_09
    return min(max(1, round_half_up(interval)), maximum_interval)
