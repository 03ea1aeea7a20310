"""
Scheduler - Review State Machine

Pure scheduling and state updates (no I/O).

Main workflow:
1. Validate the rating and review time
2. Compute elapsed days since the previous review
3. Pick the transition for the card's lifecycle
4. Fuzz and clamp the resulting interval
5. Return the new card state + a review log entry

Lifecycle transitions:
- NEW -> LEARNING (Again/Hard) or REVIEW (Good/Easy)
- LEARNING/RELEARNING -> same (Again/Hard) or REVIEW (Good/Easy)
- REVIEW -> RELEARNING (Again) or REVIEW (Hard/Good/Easy)

Nothing ever returns to NEW.
"""

from __future__ import annotations

import logging
import random
from dataclasses import replace
from datetime import datetime, timedelta, timezone
from typing import Optional, Tuple

from recall.errors import InvalidDurationError, InvalidRatingError, InvalidStateError
from recall.fsrs import memory_model, preview, short_term
from recall.fsrs.constants import D_MAX, D_MIN, CardLifecycle, Rating, SHORT_TERM_LIFECYCLES
from recall.fsrs.fuzz import RandomSource, apply_fuzz
from recall.fsrs.memory_state import (
    CardMemoryState,
    as_utc,
    calculate_retrievability,
    get_elapsed_days,
)
from recall.fsrs.models import ReviewLogEntry
from recall.fsrs.schemas import ParameterSet, SessionConfig

logger = logging.getLogger(__name__)


def coerce_rating(rating: object) -> Rating:
    """
    Validate a caller-supplied rating.

    Raises:
        InvalidRatingError: for anything other than the integers 1..4
    """
    if isinstance(rating, bool) or not isinstance(rating, int):
        raise InvalidRatingError(rating)
    try:
        return Rating(rating)
    except ValueError:
        raise InvalidRatingError(rating) from None


def check_reviewed_state(state: CardMemoryState) -> None:
    """
    Reject a non-new card whose memory model is unusable.

    Raises:
        InvalidStateError: stability <= 0 or difficulty outside [1, 10]
    """
    if state.lifecycle == CardLifecycle.NEW:
        return
    if not state.stability > 0:
        raise InvalidStateError(
            f"{state.lifecycle.value} card must have stability > 0, got {state.stability!r}"
        )
    if not D_MIN <= state.difficulty <= D_MAX:
        raise InvalidStateError(
            f"{state.lifecycle.value} card must have difficulty in [{D_MIN:g}, {D_MAX:g}], "
            f"got {state.difficulty!r}"
        )


class ReviewScheduler:
    """
    FSRS scheduler bound to one ParameterSet and SessionConfig.

    Build one per session (or per test) and pass it to whatever needs it.
    The instance holds no per-card state; the only thing it mutates is
    its random source when fuzzing.
    """

    def __init__(
        self,
        parameters: Optional[ParameterSet] = None,
        config: Optional[SessionConfig] = None,
        rng: Optional[RandomSource] = None,
    ):
        """
        Args:
            parameters: FSRS constants; defaults to ParameterSet()
            config: Step and cap policy; defaults to SessionConfig()
            rng: Random source for interval fuzz; seed it for replayable runs
        """
        self.parameters = parameters or ParameterSet()
        self.config = config or SessionConfig()
        self.rng = rng if rng is not None else random.Random()

    def with_parameters(self, parameters: ParameterSet) -> ReviewScheduler:
        """Scheduler with a replacement ParameterSet (same config and random source)."""
        return ReviewScheduler(parameters, self.config, self.rng)

    def with_config(self, config: SessionConfig) -> ReviewScheduler:
        """Scheduler with a replacement SessionConfig (same parameters and random source)."""
        return ReviewScheduler(self.parameters, config, self.rng)

    # ---- Public API ----

    def process_review(
        self,
        state: CardMemoryState,
        rating: int,
        now: Optional[datetime] = None,
        card_id: Optional[str] = None,
        duration_ms: int = 0,
    ) -> Tuple[CardMemoryState, ReviewLogEntry]:
        """
        Apply one answer to a card.

        The input state is left untouched. Caller is responsible for
        persisting the returned state and log entry.

        Args:
            state: Card state before the answer
            rating: Again(1), Hard(2), Good(3) or Easy(4)
            now: Review timestamp (defaults to now, UTC)
            card_id: Identifier copied into the log entry
            duration_ms: Time spent answering

        Returns:
            Tuple of (new_state, log_entry)

        Raises:
            InvalidRatingError: rating outside 1..4
            InvalidTimestampError: now earlier than the last review
            InvalidStateError: reviewed card with unusable stability or difficulty
            InvalidDurationError: negative duration_ms
        """
        if duration_ms < 0:
            raise InvalidDurationError(f"Answer duration must be >= 0 ms, got {duration_ms}")

        new_state = self.next_state(state, rating, now)

        log_entry = ReviewLogEntry(
            card_id=card_id,
            timestamp=new_state.last_reviewed_at,
            rating=Rating(rating),
            lifecycle_before=state.lifecycle,
            lifecycle_after=new_state.lifecycle,
            scheduled_interval_days=new_state.scheduled_interval_days,
            elapsed_days=new_state.elapsed_days,
            duration_ms=int(duration_ms),
        )
        return new_state, log_entry

    def next_state(
        self,
        state: CardMemoryState,
        rating: int,
        now: Optional[datetime] = None,
    ) -> CardMemoryState:
        """Card state after one answer, without building a log entry."""
        rating = coerce_rating(rating)
        check_reviewed_state(state)
        now = as_utc(now) if now is not None else datetime.now(timezone.utc)
        elapsed_days = get_elapsed_days(state.last_reviewed_at, now)

        if state.lifecycle == CardLifecycle.NEW:
            updated, raw_interval = self._review_new(state, rating)
        elif state.lifecycle in SHORT_TERM_LIFECYCLES:
            updated, raw_interval = self._review_short_term(state, rating)
        else:
            updated, raw_interval = self._review_graduated(state, rating, elapsed_days)

        interval = self._finalize_interval(raw_interval)

        logger.debug(
            "%s -> %s on %s: interval %.4f d (raw %.4f d)",
            state.lifecycle.value, updated.lifecycle.value, rating.name, interval, raw_interval,
        )

        return replace(
            updated,
            elapsed_days=elapsed_days,
            last_reviewed_at=now,
            scheduled_interval_days=interval,
            next_due_at=now + timedelta(days=interval),
        )

    def preview_schedule(
        self,
        state: CardMemoryState,
        now: Optional[datetime] = None,
    ) -> dict[Rating, preview.SchedulingOption]:
        """Hypothetical outcome for each rating; see recall.fsrs.preview."""
        return preview.preview_schedule(self, state, now)

    # ---- Transitions ----

    def _review_new(self, state: CardMemoryState, rating: Rating) -> Tuple[CardMemoryState, float]:
        """First answer: seed difficulty and stability from the rating."""
        w = self.parameters.w
        steps = self.config.learning_steps

        stability = memory_model.initial_stability(rating, w)
        updated = replace(
            state,
            difficulty=memory_model.clamp_difficulty(memory_model.initial_difficulty(rating, w)),
            stability=stability,
            retrievability=calculate_retrievability(0.0, stability),
            repetition_count=1,
        )

        if rating == Rating.AGAIN:
            return replace(updated, lifecycle=CardLifecycle.LEARNING), short_term.first_step_days(steps)
        if rating == Rating.HARD:
            return replace(updated, lifecycle=CardLifecycle.LEARNING), short_term.new_card_hard_step_days(steps)
        if rating == Rating.GOOD:
            return replace(updated, lifecycle=CardLifecycle.REVIEW), self.config.graduating_interval
        return replace(updated, lifecycle=CardLifecycle.REVIEW), self.config.easy_interval

    def _review_short_term(self, state: CardMemoryState, rating: Rating) -> Tuple[CardMemoryState, float]:
        """Learning / relearning: step through minutes, or graduate on Good/Easy."""
        steps = short_term.steps_for(state.lifecycle, self.config)
        updated = replace(state, retrievability=calculate_retrievability(0.0, state.stability))

        if rating == Rating.AGAIN:
            return updated, short_term.first_step_days(steps)
        if rating == Rating.HARD:
            return updated, short_term.hard_step_days(steps)

        graduated = replace(
            updated,
            lifecycle=CardLifecycle.REVIEW,
            repetition_count=state.repetition_count + 1,
            difficulty=memory_model.next_difficulty(state.difficulty, rating, self.parameters.w),
        )
        if rating == Rating.GOOD:
            return graduated, self.config.graduating_interval
        return graduated, self.config.easy_interval

    def _review_graduated(
        self,
        state: CardMemoryState,
        rating: Rating,
        elapsed_days: float,
    ) -> Tuple[CardMemoryState, float]:
        """Review card: full memory-model update driven by retrievability."""
        w = self.parameters.w
        retrievability = calculate_retrievability(elapsed_days, state.stability)
        difficulty = memory_model.next_difficulty(state.difficulty, rating, w)

        if rating == Rating.AGAIN:
            lapsed = replace(
                state,
                lifecycle=CardLifecycle.RELEARNING,
                lapse_count=state.lapse_count + 1,
                stability=memory_model.stability_after_failure(
                    state.difficulty, state.stability, retrievability, w
                ),
                difficulty=difficulty,
                retrievability=retrievability,
            )
            return lapsed, short_term.first_step_days(self.config.relearning_steps)

        stability = memory_model.stability_after_success(
            state.difficulty, state.stability, retrievability, rating, w
        )
        recalled = replace(
            state,
            repetition_count=state.repetition_count + 1,
            stability=stability,
            difficulty=difficulty,
            retrievability=retrievability,
        )
        interval = memory_model.optimal_interval(
            stability, self.parameters.target_retention, self.parameters.maximum_interval
        )
        return recalled, float(interval)

    def _finalize_interval(self, raw_interval: float) -> float:
        """Fuzz, then keep the interval inside (0, maximum_interval]."""
        interval = apply_fuzz(raw_interval, self.rng, self.parameters.enable_fuzz)
        return min(interval, float(self.parameters.maximum_interval))
