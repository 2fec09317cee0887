from datetime import datetime, timedelta, timezone

from aw_digest.activity import merge_app_periods, resolve_active_periods, resolve_app_periods
from aw_digest.models import AppPeriod, Event, Interval

T0 = datetime(2024, 3, 15, 9, 0, tzinfo=timezone.utc)


def at(seconds: float) -> datetime:
    return T0 + timedelta(seconds=seconds)


def afk_event(start: float, duration: float, status: str = "not-afk") -> Event:
    return Event(timestamp=at(start), duration=duration, data={"status": status})


def test_overlapping_spans_merge_without_grace():
    events = [afk_event(0, 10), afk_event(8, 12)]
    assert resolve_active_periods(events, grace_minutes=0) == [Interval(at(0), at(20))]


def test_gap_just_beyond_grace_stays_split():
    grace = 2
    events = [afk_event(0, 10), afk_event(10 + grace * 60 + 1, 30)]
    result = resolve_active_periods(events, grace_minutes=grace)
    assert len(result) == 2
    assert result[0] == Interval(at(0), at(10))


def test_gap_within_grace_merges():
    grace = 2
    start = 10 + grace * 60 - 1
    events = [afk_event(0, 10), afk_event(start, 30)]
    assert resolve_active_periods(events, grace_minutes=grace) == [
        Interval(at(0), at(start + 30))
    ]


def test_contained_span_keeps_longer_end():
    events = [afk_event(0, 100), afk_event(10, 5)]
    assert resolve_active_periods(events) == [Interval(at(0), at(100))]


def test_afk_events_are_ignored():
    events = [afk_event(0, 10), afk_event(10, 50, status="afk"), afk_event(100, 10)]
    assert resolve_active_periods(events) == [
        Interval(at(0), at(10)),
        Interval(at(100), at(110)),
    ]


def test_no_events_yields_no_intervals():
    assert resolve_active_periods([], grace_minutes=5) == []


def test_same_title_within_five_seconds_merges():
    periods = [AppPeriod("a", at(0), at(10)), AppPeriod("a", at(14), at(20))]
    assert merge_app_periods(periods) == [AppPeriod("a", at(0), at(20))]


def test_same_title_after_six_seconds_stays_split():
    periods = [AppPeriod("a", at(0), at(10)), AppPeriod("a", at(16), at(20))]
    assert merge_app_periods(periods) == periods


def test_different_titles_never_merge():
    periods = [AppPeriod("a", at(0), at(10)), AppPeriod("b", at(10), at(20))]
    assert merge_app_periods(periods) == periods


def test_resolve_app_periods_sorts_normalizes_and_keeps_last():
    events = [
        Event(
            timestamp=at(30),
            duration=10,
            data={"app": "firefox", "title": "Docs — Mozilla Firefox"},
        ),
        Event(timestamp=at(0), duration=10, data={"app": "kitty", "title": "vim"}),
        Event(timestamp=at(12), duration=10, data={"app": "kitty", "title": "vim"}),
    ]
    assert resolve_app_periods(events) == [
        AppPeriod("kitty: vim", at(0), at(22)),
        AppPeriod("Firefox: Docs", at(30), at(40)),
    ]


def test_periods_are_clipped_to_their_interval():
    events = [
        Event(timestamp=at(-30), duration=60, data={"app": "kitty", "title": "vim"}),
        Event(timestamp=at(50), duration=100, data={"app": "Slack", "title": "general"}),
        Event(timestamp=at(200), duration=10, data={"app": "Slack", "title": "general"}),
    ]
    assert resolve_app_periods(events, Interval(at(0), at(100))) == [
        AppPeriod("kitty: vim", at(0), at(30)),
        AppPeriod("Slack: general", at(50), at(100)),
    ]
