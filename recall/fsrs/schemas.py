"""
Pydantic models for scheduler settings.

ParameterSet drives every memory-model formula; SessionConfig drives
short-term steps and daily queue caps. Both are frozen: callers replace
them wholesale rather than editing fields.
"""

from __future__ import annotations

import math

from pydantic import BaseModel, ConfigDict, Field, field_validator

from recall.fsrs.constants import (
    DEFAULT_MAXIMUM_INTERVAL,
    DEFAULT_TARGET_RETENTION,
    DEFAULT_WEIGHTS,
    WEIGHT_COUNT,
)


class ParameterSet(BaseModel):
    """Tunable FSRS constants."""
    model_config = ConfigDict(frozen=True)

    target_retention: float = Field(
        DEFAULT_TARGET_RETENTION, gt=0.0, lt=1.0,
        description="Desired probability of recall at the due date",
    )
    maximum_interval: int = Field(
        DEFAULT_MAXIMUM_INTERVAL, ge=1,
        description="Upper bound on any scheduled interval (days)",
    )
    weights: tuple[float, ...] = Field(
        DEFAULT_WEIGHTS,
        description=f"FSRS weight vector w0..w{WEIGHT_COUNT - 1}",
    )
    enable_fuzz: bool = Field(True, description="Randomly spread long intervals")

    @field_validator("weights")
    @classmethod
    def _check_weights(cls, weights: tuple[float, ...]) -> tuple[float, ...]:
        if len(weights) != WEIGHT_COUNT:
            raise ValueError(f"weights must contain exactly {WEIGHT_COUNT} values, got {len(weights)}")
        if not all(math.isfinite(w) for w in weights):
            raise ValueError("weights must all be finite numbers")
        return weights

    @property
    def w(self) -> tuple[float, ...]:
        """Short alias matching the published formulas."""
        return self.weights


class SessionConfig(BaseModel):
    """Per-session study policy."""
    model_config = ConfigDict(frozen=True)

    new_cards_per_day: int = Field(20, ge=0)
    max_reviews_per_day: int = Field(200, ge=0, description="0 = unlimited")
    learning_steps: tuple[float, ...] = Field((1.0, 10.0), min_length=1, description="Minutes")
    relearning_steps: tuple[float, ...] = Field((10.0,), min_length=1, description="Minutes")
    graduating_interval: float = Field(1.0, gt=0.0, description="Days")
    easy_interval: float = Field(4.0, gt=0.0, description="Days")

    @field_validator("learning_steps", "relearning_steps")
    @classmethod
    def _check_steps(cls, steps: tuple[float, ...]) -> tuple[float, ...]:
        if any(not math.isfinite(step) or step <= 0 for step in steps):
            raise ValueError("step durations must be positive minutes")
        return steps
