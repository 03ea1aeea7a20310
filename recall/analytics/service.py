"""
Service layer to assemble study statistics.

Read-only over the snapshot it is given: nothing here changes card
state or the review log.
"""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from typing import Optional, Sequence, Union

import pandas as pd

from recall.analytics.constants import DEFAULT_FORECAST_DAYS, ONE_DAY, TRAILING_WINDOW
from recall.analytics.metrics import (
    compute_average_daily_reviews,
    compute_day_counts,
    compute_due_counts,
    compute_lifecycle_counts,
    compute_predicted_retention,
    compute_streaks,
    compute_success_ratio,
    compute_trailing_retention,
    compute_workload,
    filter_window,
)
from recall.analytics.queries import (
    load_card_snapshot_df,
    load_daily_history_df,
    load_review_log_df,
    utc_day,
)
from recall.analytics.types import AggregateStats, DailyStats
from recall.fsrs.memory_state import as_utc
from recall.fsrs.models import ReviewLogEntry
from recall.session_builders.pool_types import CardRecord

logger = logging.getLogger(__name__)


def _utc_timestamp(now: Optional[datetime]) -> pd.Timestamp:
    if now is None:
        now = datetime.now(timezone.utc)
    return pd.Timestamp(as_utc(now))


def daily_stats(log_entries: Sequence[ReviewLogEntry], day: Union[date, datetime]) -> DailyStats:
    """
    Review activity for one UTC calendar day.

    Args:
        log_entries: Review log (any order, any span)
        day: The day to report; datetimes are reduced to their UTC date

    Returns:
        DailyStats with average_accuracy = share of reviews rated Hard or better
    """
    day = utc_day(day)
    start = pd.Timestamp(day).tz_localize("UTC")
    day_df = filter_window(load_review_log_df(log_entries), start, start + ONE_DAY)

    counts = compute_day_counts(day_df)
    return DailyStats(
        date=day,
        reviewed=counts["reviewed"],
        new_learned=counts["new_learned"],
        failed=counts["failed"],
        total_time_ms=counts["total_time_ms"],
        average_accuracy=compute_success_ratio(day_df),
    )


def aggregate_stats(
    cards: Sequence[CardRecord],
    log_entries: Sequence[ReviewLogEntry],
    daily_history: Sequence[DailyStats],
    now: Optional[datetime] = None,
) -> AggregateStats:
    """
    Collection-wide statistics at `now`.

    Args:
        cards: Full card collection
        log_entries: Review log
        daily_history: Per-day stats used for streaks and daily averages
        now: Reference time (defaults to now, UTC)

    Returns:
        AggregateStats
    """
    now_ts = _utc_timestamp(now)
    cards_df = load_card_snapshot_df(cards)
    log_df = load_review_log_df(log_entries)
    history_df = load_daily_history_df(daily_history)

    due, overdue = compute_due_counts(cards_df, now_ts)
    streak, best_streak = compute_streaks(history_df, today=now_ts.floor("D"))

    stats = AggregateStats(
        total_cards=len(cards),
        by_lifecycle=compute_lifecycle_counts(cards_df),
        due_cards=due,
        overdue_cards=overdue,
        retention_rate=compute_trailing_retention(log_df, now_ts, TRAILING_WINDOW),
        total_reviews=len(log_entries),
        streak=streak,
        best_streak=best_streak,
        average_daily_reviews=compute_average_daily_reviews(history_df, now_ts, TRAILING_WINDOW),
        predicted_retention=compute_predicted_retention(cards_df, now_ts),
    )
    logger.debug("Aggregate stats over %d cards / %d reviews: %s", len(cards), len(log_entries), stats)
    return stats


def forecast_workload(
    cards: Sequence[CardRecord],
    now: Optional[datetime] = None,
    days_ahead: int = DEFAULT_FORECAST_DAYS,
) -> dict[str, int]:
    """
    Number of cards falling due in each of the next days_ahead days.

    Day i is the 24h window starting at now + i days, keyed by its UTC
    start date (YYYY-MM-DD), in chronological order.

    Raises:
        ValueError: if days_ahead is negative
    """
    if days_ahead < 0:
        raise ValueError(f"days_ahead must be >= 0, got {days_ahead}")

    now_ts = _utc_timestamp(now)
    counts = compute_workload(load_card_snapshot_df(cards), now_ts, days_ahead)

    start = now_ts.to_pydatetime()
    return {
        (start + timedelta(days=int(offset))).date().isoformat(): int(count)
        for offset, count in counts.items()
    }
