"""
Data-loading helpers for analytics.

Turn the caller's records into typed dataframes. All timestamps become
tz-aware UTC so window comparisons never mix naive and aware values.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Sequence, Union

import pandas as pd

from recall.analytics.constants import CARD_COLUMNS, HISTORY_COLUMNS, LOG_COLUMNS
from recall.analytics.types import DailyStats
from recall.fsrs.memory_state import as_utc
from recall.fsrs.models import ReviewLogEntry
from recall.session_builders.pool_types import CardRecord


def utc_day(value: Union[date, datetime]) -> date:
    """Calendar day of a date, or of a datetime taken in UTC."""
    if isinstance(value, datetime):
        return as_utc(value).date()
    return value


def _empty_log_df() -> pd.DataFrame:
    return pd.DataFrame({
        "card_id": pd.Series(dtype="object"),
        "timestamp": pd.Series(dtype="datetime64[ns, UTC]"),
        "rating": pd.Series(dtype="int64"),
        "lifecycle_before": pd.Series(dtype="object"),
        "lifecycle_after": pd.Series(dtype="object"),
        "scheduled_interval_days": pd.Series(dtype="float64"),
        "elapsed_days": pd.Series(dtype="float64"),
        "duration_ms": pd.Series(dtype="int64"),
    })[LOG_COLUMNS]


def _empty_card_df() -> pd.DataFrame:
    return pd.DataFrame({
        "card_id": pd.Series(dtype="object"),
        "lifecycle": pd.Series(dtype="object"),
        "next_due_at": pd.Series(dtype="datetime64[ns, UTC]"),
        "last_reviewed_at": pd.Series(dtype="datetime64[ns, UTC]"),
        "stability": pd.Series(dtype="float64"),
    })[CARD_COLUMNS]


def load_review_log_df(entries: Sequence[ReviewLogEntry]) -> pd.DataFrame:
    """
    Review log entries as a dataframe sorted by timestamp.
    """
    if not entries:
        return _empty_log_df()

    df = pd.DataFrame([
        {
            "card_id": entry.card_id,
            "timestamp": entry.timestamp,
            "rating": int(entry.rating),
            "lifecycle_before": entry.lifecycle_before.value,
            "lifecycle_after": entry.lifecycle_after.value,
            "scheduled_interval_days": float(entry.scheduled_interval_days),
            "elapsed_days": float(entry.elapsed_days),
            "duration_ms": int(entry.duration_ms),
        }
        for entry in entries
    ], columns=LOG_COLUMNS)
    df["timestamp"] = pd.to_datetime(df["timestamp"], utc=True)
    df = df.sort_values("timestamp").reset_index(drop=True)
    return df


def load_card_snapshot_df(cards: Sequence[CardRecord]) -> pd.DataFrame:
    """
    Current card states as a dataframe (one row per card).

    last_reviewed_at is NaT for cards never reviewed.
    """
    if not cards:
        return _empty_card_df()

    df = pd.DataFrame([
        {
            "card_id": card.card_id,
            "lifecycle": card.lifecycle.value,
            "next_due_at": card.state.next_due_at,
            "last_reviewed_at": card.state.last_reviewed_at,
            "stability": float(card.state.stability),
        }
        for card in cards
    ], columns=CARD_COLUMNS)
    df["next_due_at"] = pd.to_datetime(df["next_due_at"], utc=True)
    df["last_reviewed_at"] = pd.to_datetime(df["last_reviewed_at"], utc=True)
    return df


def load_daily_history_df(history: Sequence[DailyStats]) -> pd.DataFrame:
    """
    Daily-stats history as (day_utc, reviewed) rows, oldest first.
    """
    if not history:
        return pd.DataFrame({
            "day_utc": pd.Series(dtype="datetime64[ns, UTC]"),
            "reviewed": pd.Series(dtype="int64"),
        })[HISTORY_COLUMNS]

    df = pd.DataFrame(
        [{"day_utc": pd.Timestamp(utc_day(stat.date)), "reviewed": int(stat.reviewed)} for stat in history],
        columns=HISTORY_COLUMNS,
    )
    df["day_utc"] = pd.to_datetime(df["day_utc"]).dt.tz_localize("UTC")
    return df.sort_values("day_utc").reset_index(drop=True)
