"""Render usage buckets as a nested Markdown list."""

from __future__ import annotations

from datetime import datetime
from typing import Iterable, Sequence

from .models import UsageBucket

EMPTY_DAY_TEXT = "No ActivityWatch data :("


def rank_usage(bucket: UsageBucket) -> list[tuple[str, float]]:
    """Order titles by descending seconds; ties keep first-seen order."""
    return sorted(bucket.usage.items(), key=lambda item: item[1], reverse=True)


def select_top_entries(
    ranked: Sequence[tuple[str, float]],
    *,
    bucket_seconds: float,
    coverage_percent: float,
    min_count: int,
) -> list[tuple[str, float]]:
    """Take ranked entries until both the count and coverage floors are met.

    At least one entry is always taken from a non-empty ranking.
    """
    target = coverage_percent / 100.0 * bucket_seconds
    selected: list[tuple[str, float]] = []
    covered = 0.0
    for title, seconds in ranked:
        selected.append((title, seconds))
        covered += seconds
        if len(selected) >= min_count and covered >= target:
            break
    return selected


def summarize_usage(
    buckets: Iterable[UsageBucket],
    *,
    coverage_percent: float = 70.0,
    min_count: int = 0,
) -> str:
    lines: list[str] = []
    for bucket in buckets:
        lines.append(f"- **{format_clock(bucket.start)}**")
        entries = select_top_entries(
            rank_usage(bucket),
            bucket_seconds=bucket.length_seconds,
            coverage_percent=coverage_percent,
            min_count=min_count,
        )
        for title, seconds in entries:
            lines.append(f"    - *{format_duration(seconds)}*: {title}")
    return "".join(f"{line}\n" for line in lines)


def format_clock(moment: datetime) -> str:
    """Local 24-hour wall clock time, e.g. ``13:45``."""
    return moment.astimezone().strftime("%H:%M")


def format_duration(seconds: float) -> str:
    total_seconds = int(round(seconds))
    minutes, secs = divmod(total_seconds, 60)
    return f"{minutes}:{secs:02d}"
