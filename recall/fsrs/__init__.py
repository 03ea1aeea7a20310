"""
FSRS - Free Spaced Repetition Scheduler

Main API for the review scheduler.

This package implements the FSRS-4.5 memory model with:
- Difficulty / Stability / Retrievability per card
- Forgetting curve: R = exp(ln(0.9) * t / S)
- A four-state lifecycle: new -> learning -> review <-> relearning
- Optional interval fuzz behind an injectable random source

Quick start:
    from recall import fsrs

    scheduler = fsrs.ReviewScheduler(rng=random.Random(42))
    card = fsrs.new_card_state(now)

    # Process a review (pure; caller persists the results)
    card, log_entry = scheduler.process_review(card, fsrs.Rating.GOOD, now)

    # Show what each answer would do
    options = scheduler.preview_schedule(card, later)
"""

# Core scheduler API
from recall.fsrs.scheduler import ReviewScheduler, coerce_rating
from recall.fsrs.preview import SchedulingOption, format_interval, preview_schedule

# Settings
from recall.fsrs.schemas import ParameterSet, SessionConfig

# Constants and enums
from recall.fsrs.constants import (
    CardLifecycle,
    DEFAULT_WEIGHTS,
    RATING_LABELS,
    Rating,
    WEIGHT_COUNT,
)

# Memory state and model (for advanced usage)
from recall.fsrs.memory_state import (
    CardMemoryState,
    calculate_retrievability,
    current_retrievability,
    get_elapsed_days,
    new_card_state,
)
from recall.fsrs.memory_model import (
    initial_difficulty,
    initial_stability,
    next_difficulty,
    optimal_interval,
    stability_after_failure,
    stability_after_success,
)
from recall.fsrs.fuzz import RandomSource, apply_fuzz
from recall.fsrs.models import ReviewLogEntry


__all__ = [
    # Core algorithm
    "ReviewScheduler",
    "coerce_rating",
    "preview_schedule",
    "SchedulingOption",
    "format_interval",

    # Settings
    "ParameterSet",
    "SessionConfig",

    # Enums
    "Rating",
    "RATING_LABELS",
    "CardLifecycle",

    # Memory state
    "CardMemoryState",
    "new_card_state",
    "calculate_retrievability",
    "current_retrievability",
    "get_elapsed_days",
    "ReviewLogEntry",

    # Memory model
    "initial_difficulty",
    "initial_stability",
    "next_difficulty",
    "stability_after_success",
    "stability_after_failure",
    "optimal_interval",
    "apply_fuzz",
    "RandomSource",

    # Parameters
    "DEFAULT_WEIGHTS",
    "WEIGHT_COUNT",
]
