"""Resolve raw events into active intervals and per-application periods."""

from __future__ import annotations

import logging
from datetime import timedelta
from typing import Iterable, Optional, Sequence

from .models import AppPeriod, Event, Interval
from .normalization import make_title

logger = logging.getLogger(__name__)

ACTIVE_STATUS = "not-afk"
APP_MERGE_GAP = timedelta(seconds=5)


def is_active(event: Event) -> bool:
    return event.payload.get("status") == ACTIVE_STATUS


def merge_intervals(intervals: Sequence[Interval], grace: timedelta) -> list[Interval]:
    """Merge start-sorted intervals whose gap is at most ``grace``."""
    merged: list[Interval] = []
    current: Interval | None = None
    for interval in intervals:
        if current is None:
            current = interval
        elif interval.start <= current.end + grace:
            current = Interval(current.start, max(current.end, interval.end))
        else:
            merged.append(current)
            current = interval
    if current is not None:
        merged.append(current)
    return merged


def resolve_active_periods(
    events: Iterable[Event], grace_minutes: float = 0.0
) -> list[Interval]:
    """Return the disjoint spans when the presence watcher saw the user.

    ``events`` must already be sorted by timestamp, as the event source
    returns them.
    """
    intervals = [Interval(event.timestamp, event.end) for event in events if is_active(event)]
    logger.debug("Collected %d active spans.", len(intervals))
    merged = merge_intervals(intervals, timedelta(minutes=grace_minutes))
    logger.debug("Merged into %d active intervals.", len(merged))
    return merged


def merge_app_periods(
    periods: Sequence[AppPeriod], max_gap: timedelta = APP_MERGE_GAP
) -> list[AppPeriod]:
    """Collapse consecutive same-title periods separated by at most ``max_gap``."""
    merged: list[AppPeriod] = []
    current: AppPeriod | None = None
    for period in periods:
        if (
            current is not None
            and period.title == current.title
            and period.start - current.end <= max_gap
        ):
            current = AppPeriod(current.title, current.start, max(current.end, period.end))
            continue
        if current is not None:
            merged.append(current)
        current = period
    if current is not None:
        merged.append(current)
    return merged


def clip_to_interval(period: AppPeriod, interval: Interval) -> Optional[AppPeriod]:
    """Return the part of ``period`` inside ``interval``, or ``None`` if empty."""
    start = max(period.start, interval.start)
    end = min(period.end, interval.end)
    if end <= start:
        return None
    return AppPeriod(period.title, start, end)


def resolve_app_periods(
    events: Iterable[Event], interval: Optional[Interval] = None
) -> list[AppPeriod]:
    """Map focus events from one active interval to merged app periods.

    When ``interval`` is given, each period is clipped to it so focus that
    spans away time is only counted while the user was present.
    """
    periods = [AppPeriod(make_title(event.payload), event.timestamp, event.end) for event in events]
    if interval is not None:
        clipped = (clip_to_interval(period, interval) for period in periods)
        periods = [period for period in clipped if period is not None]
    periods.sort(key=lambda period: period.start)
    merged = merge_app_periods(periods)
    logger.debug("Resolved %d focus events into %d app periods.", len(periods), len(merged))
    return merged
