"""Partition app periods into fixed-length buckets and total their usage."""

from __future__ import annotations

from datetime import timedelta
from typing import Iterable, Sequence

from .models import AppPeriod, Interval, UsageBucket

Chunk = tuple[Interval, list[AppPeriod]]


def chunk_app_periods(periods: Sequence[AppPeriod], bucket_minutes: float) -> list[Chunk]:
    """Group chronologically ordered periods by the bucket containing their start.

    Bucket boundaries are anchored at the first period's start. A period is
    never split; all of it belongs to the bucket it starts in. Buckets that
    receive no periods are skipped. A period that starts before the current
    bucket (possible when a look-back event reaches back over an earlier
    interval) stays in the current bucket.
    """
    if not periods:
        return []
    length = timedelta(minutes=bucket_minutes)
    anchor = periods[0].start
    chunks: list[Chunk] = []
    current_index = -1
    for period in periods:
        index = (period.start - anchor) // length
        if index > current_index:
            bucket_start = anchor + index * length
            chunks.append((Interval(bucket_start, bucket_start + length), []))
            current_index = index
        chunks[-1][1].append(period)
    return chunks


def aggregate_usage(periods: Iterable[AppPeriod], bucket: Interval) -> UsageBucket:
    usage: dict[str, float] = {}
    for period in periods:
        usage[period.title] = usage.get(period.title, 0.0) + period.duration_seconds
    return UsageBucket(start=bucket.start, end=bucket.end, usage=usage)


def build_usage_buckets(
    periods: Sequence[AppPeriod], bucket_minutes: float
) -> list[UsageBucket]:
    return [
        aggregate_usage(assigned, bucket)
        for bucket, assigned in chunk_app_periods(periods, bucket_minutes)
    ]
