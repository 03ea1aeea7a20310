"""
Constants for analytics frames and windows.
"""

from __future__ import annotations

from typing import Final

import pandas as pd

from recall.fsrs.constants import OVERDUE_GRACE_DAYS, RETENTION_WINDOW_DAYS


ONE_DAY: Final[pd.Timedelta] = pd.Timedelta(days=1)
OVERDUE_GRACE: Final[pd.Timedelta] = pd.Timedelta(days=OVERDUE_GRACE_DAYS)
TRAILING_WINDOW: Final[pd.Timedelta] = pd.Timedelta(days=RETENTION_WINDOW_DAYS)

DEFAULT_FORECAST_DAYS: Final[int] = 7

LOG_COLUMNS: Final[list[str]] = [
    "card_id",
    "timestamp",
    "rating",
    "lifecycle_before",
    "lifecycle_after",
    "scheduled_interval_days",
    "elapsed_days",
    "duration_ms",
]

CARD_COLUMNS: Final[list[str]] = [
    "card_id",
    "lifecycle",
    "next_due_at",
    "last_reviewed_at",
    "stability",
]

HISTORY_COLUMNS: Final[list[str]] = ["day_utc", "reviewed"]
