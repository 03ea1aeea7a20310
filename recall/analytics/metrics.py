"""
Metric computations for study statistics.
"""

from __future__ import annotations

from typing import Optional

import pandas as pd

from recall.analytics.constants import ONE_DAY, OVERDUE_GRACE
from recall.fsrs.constants import CardLifecycle, Rating
from recall.fsrs.memory_state import calculate_retrievability


def filter_window(log_df: pd.DataFrame, start: pd.Timestamp, end: pd.Timestamp) -> pd.DataFrame:
    """Log rows with start <= timestamp < end."""
    return log_df[(log_df["timestamp"] >= start) & (log_df["timestamp"] < end)]


def compute_success_ratio(log_df: pd.DataFrame) -> float:
    """
    Fraction of reviews rated Hard or better (0 for no reviews).
    """
    if log_df.empty:
        return 0.0
    return float((log_df["rating"] >= int(Rating.HARD)).sum()) / len(log_df)


def compute_day_counts(day_df: pd.DataFrame) -> dict[str, int]:
    """
    Reviewed / newly learned / failed counts and answer time for one day's rows.
    """
    return {
        "reviewed": int(len(day_df)),
        "new_learned": int((day_df["lifecycle_before"] == CardLifecycle.NEW.value).sum()),
        "failed": int((day_df["rating"] == int(Rating.AGAIN)).sum()),
        "total_time_ms": int(day_df["duration_ms"].sum()),
    }


def compute_trailing_retention(log_df: pd.DataFrame, now: pd.Timestamp, window: pd.Timedelta) -> float:
    """
    Success ratio over reviews logged less than `window` before now.
    """
    if log_df.empty:
        return 0.0
    recent = log_df[(now - log_df["timestamp"]) < window]
    return compute_success_ratio(recent)


def compute_lifecycle_counts(cards_df: pd.DataFrame) -> dict[CardLifecycle, int]:
    """
    Card count per lifecycle, with zeros for empty lifecycles.
    """
    counts = cards_df["lifecycle"].value_counts()
    return {lifecycle: int(counts.get(lifecycle.value, 0)) for lifecycle in CardLifecycle}


def compute_due_counts(cards_df: pd.DataFrame, now: pd.Timestamp) -> tuple[int, int]:
    """
    (due, overdue): due means next_due_at <= now; overdue means due more
    than a day ago.
    """
    if cards_df.empty:
        return 0, 0
    due_mask = cards_df["next_due_at"] <= now
    overdue_mask = due_mask & ((now - cards_df["next_due_at"]) > OVERDUE_GRACE)
    return int(due_mask.sum()), int(overdue_mask.sum())


def build_day_index(history_df: pd.DataFrame, today: Optional[pd.Timestamp] = None) -> pd.DatetimeIndex:
    """
    Dense UTC day index from the first history day through yesterday (or
    the last history day, whichever is later).

    Today is only part of the index when the history has a row for it, so
    a day that has not been studied yet never breaks the streak.
    """
    if history_df.empty:
        return pd.DatetimeIndex([], tz="UTC")
    start = history_df["day_utc"].min()
    end = history_df["day_utc"].max()
    if today is not None and today - ONE_DAY > end:
        end = today - ONE_DAY
    return pd.date_range(start=start, end=end, freq="D")


def compute_streaks(history_df: pd.DataFrame, today: Optional[pd.Timestamp] = None) -> tuple[int, int]:
    """
    (current streak, best streak) of consecutive days with reviews.

    Days missing from the history (up to yesterday) count as zero-review
    days. The current streak counts back from the last day of the index
    and stops at the first zero-review day.
    """
    day_index = build_day_index(history_df, today)
    if len(day_index) == 0:
        return 0, 0

    reviewed = history_df.groupby("day_utc")["reviewed"].sum()
    active = reviewed.reindex(day_index, fill_value=0).gt(0).astype("int64")

    run_id = (active == 0).cumsum()
    best = int(active.groupby(run_id).sum().max())
    current = int(active.iloc[::-1].cummin().sum())
    return current, best


def compute_average_daily_reviews(history_df: pd.DataFrame, now: pd.Timestamp, window: pd.Timedelta) -> float:
    """
    Mean `reviewed` over history rows dated less than `window` before now.
    """
    if history_df.empty:
        return 0.0
    recent = history_df[(now - history_df["day_utc"]) < window]
    if recent.empty:
        return 0.0
    return float(recent["reviewed"].mean())


def compute_predicted_retention(cards_df: pd.DataFrame, now: pd.Timestamp) -> float:
    """
    Mean current retrievability over review-lifecycle cards (0 if none).
    """
    review = cards_df[cards_df["lifecycle"] == CardLifecycle.REVIEW.value]
    if review.empty:
        return 0.0

    elapsed_days = ((now - review["last_reviewed_at"]) / ONE_DAY).fillna(0.0)
    retrievability = [
        calculate_retrievability(elapsed, stability)
        for elapsed, stability in zip(elapsed_days, review["stability"])
    ]
    return sum(retrievability) / len(retrievability)


def compute_workload(cards_df: pd.DataFrame, now: pd.Timestamp, days_ahead: int) -> pd.Series:
    """
    Cards falling due in each of the next days_ahead 24h windows.

    Window i covers [now + i days, now + (i + 1) days). Cards already due
    before now are not counted.
    """
    day_offsets = pd.RangeIndex(days_ahead)
    if cards_df.empty or days_ahead <= 0:
        return pd.Series(0, index=day_offsets, dtype="int64")

    offsets = (cards_df["next_due_at"] - now) / ONE_DAY
    in_range = offsets[(offsets >= 0) & (offsets < days_ahead)]
    counts = (in_range // 1).astype("int64").value_counts()
    return counts.reindex(day_offsets, fill_value=0).astype("int64")
