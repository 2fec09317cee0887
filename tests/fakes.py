"""Shared test doubles."""

from datetime import datetime

from aw_digest.client import BucketInfo
from aw_digest.errors import ConfigurationError, TransportError
from aw_digest.models import Event


class FakeSource:
    """In-memory event source that filters events the way the server does."""

    def __init__(self, afk_events=(), window_events=(), fail_on=None, misconfigured=False):
        self.afk_events = list(afk_events)
        self.window_events = list(window_events)
        self.fail_on = fail_on
        self.misconfigured = misconfigured
        self.requests = []

    def get_bucket_info(self):
        if self.misconfigured:
            raise ConfigurationError("Required afkstatus bucket not found.")
        return BucketInfo("afk", "window")

    def get_events(self, bucket_id: str, start: datetime, end: datetime):
        self.requests.append((bucket_id, start, end))
        if bucket_id == self.fail_on:
            raise TransportError("boom", url=f"fake://{bucket_id}", status=500)
        events = self.afk_events if bucket_id == "afk" else self.window_events
        return sorted(
            (event for event in events if event.timestamp < end and event.end > start),
            key=lambda event: event.timestamp,
        )


def event(start: datetime, seconds: float, **data) -> Event:
    return Event(timestamp=start, duration=seconds, data=data)
