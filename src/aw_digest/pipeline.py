"""Build the daily usage summary from an event source."""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional, Protocol

from .activity import resolve_active_periods, resolve_app_periods
from .chunking import build_usage_buckets
from .client import ActivityWatchClient, BucketInfo
from .config import SummarySettings
from .days import day_range
from .models import AppPeriod, Event
from .reporting import EMPTY_DAY_TEXT, summarize_usage

logger = logging.getLogger(__name__)


class EventSource(Protocol):
    def get_bucket_info(self) -> BucketInfo: ...

    def get_events(self, bucket_id: str, start: datetime, end: datetime) -> list[Event]: ...


def collect_app_periods(
    source: EventSource, start: datetime, end: datetime, grace_minutes: float
) -> list[AppPeriod]:
    """Return app periods from every active interval in ``[start, end)``, in order."""
    info = source.get_bucket_info()
    presence = source.get_events(info.afk_bucket_id, start, end)
    active = resolve_active_periods(presence, grace_minutes)
    logger.debug("Found %d active intervals from %d afk events.", len(active), len(presence))

    periods: list[AppPeriod] = []
    for interval in active:
        focus = source.get_events(info.window_bucket_id, interval.start, interval.end)
        periods.extend(resolve_app_periods(focus, interval))
    return periods


def build_daily_summary(
    day: date, settings: SummarySettings, source: Optional[EventSource] = None
) -> str:
    """Return the formatted summary for ``day``.

    Any error from the event source propagates; nothing is returned in that
    case.
    """
    start, end = day_range(day)
    if source is None:
        with ActivityWatchClient(
            settings.base_url,
            lookback_limit=settings.lookback_limit,
            timeout=settings.timeout_seconds,
        ) as client:
            return _summarize(day, start, end, settings, client)
    return _summarize(day, start, end, settings, source)


def _summarize(
    day: date, start: datetime, end: datetime, settings: SummarySettings, source: EventSource
) -> str:
    logger.info("Requesting ActivityWatch data for %s", day.isoformat())
    periods = collect_app_periods(source, start, end, settings.grace_minutes)
    if not periods:
        logger.info("No ActivityWatch data for %s", day.isoformat())
        return EMPTY_DAY_TEXT
    logger.debug("Collected %d app periods.", len(periods))

    buckets = build_usage_buckets(periods, settings.bucket_minutes)
    logger.debug("Built %d usage buckets.", len(buckets))
    text = summarize_usage(
        buckets,
        coverage_percent=settings.coverage_percent,
        min_count=settings.min_count,
    )
    logger.info("Summarized %d buckets for %s", len(buckets), day.isoformat())
    return text
