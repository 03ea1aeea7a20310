"""
Validation errors raised at the scheduler boundary.

Numeric drift inside the memory model is clamped and never raised;
only malformed caller input ends up here.
"""

from __future__ import annotations


class ReviewValidationError(ValueError):
    """Base class for rejected review input."""


class InvalidRatingError(ReviewValidationError):
    """Rating outside Again(1)..Easy(4)."""

    def __init__(self, rating: object):
        self.rating = rating
        super().__init__(f"Rating must be one of 1 (Again), 2 (Hard), 3 (Good), 4 (Easy); got {rating!r}")


class InvalidTimestampError(ReviewValidationError):
    """Review time earlier than the card's last review."""


class InvalidDurationError(ReviewValidationError):
    """Negative answer time."""


class InvalidStateError(ReviewValidationError):
    """Reviewed card whose stability or difficulty is outside its domain."""
