"""HTTP client for the local ActivityWatch server."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Optional

import requests
from pydantic import TypeAdapter, ValidationError

from .errors import ConfigurationError, TransportError
from .models import Event

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:5600"
AFK_BUCKET_TYPE = "afkstatus"
WINDOW_BUCKET_TYPE = "currentwindow"
DEFAULT_LOOKBACK_LIMIT = 5

_EVENT_LIST = TypeAdapter(list[Event])


@dataclass(slots=True)
class BucketInfo:
    """Bucket ids discovered on the server."""

    afk_bucket_id: str
    window_bucket_id: str
    other_bucket_ids: list[str] = field(default_factory=list)


class ActivityWatchClient:
    """Reads buckets and events from the ActivityWatch REST API."""

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        lookback_limit: int = DEFAULT_LOOKBACK_LIMIT,
        timeout: Optional[float] = None,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.lookback_limit = lookback_limit
        self.timeout = timeout
        self._owns_session = session is None
        self._session = session or requests.Session()

    def close(self) -> None:
        """Close the HTTP session if this client created it."""
        if self._owns_session:
            self._session.close()

    def __enter__(self) -> "ActivityWatchClient":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def get_bucket_info(self) -> BucketInfo:
        """Find the single afk and window buckets."""
        data = self._get_json("/api/0/buckets/")
        if not isinstance(data, dict):
            raise TransportError(
                "Bucket listing is not a JSON object", url=self.base_url + "/api/0/buckets/"
            )
        afk_bucket_id: Optional[str] = None
        window_bucket_id: Optional[str] = None
        others: list[str] = []
        for bucket_id, meta in data.items():
            bucket_type = (meta or {}).get("type")
            if bucket_type == AFK_BUCKET_TYPE:
                if afk_bucket_id is not None:
                    raise ConfigurationError(
                        f"Found a second {AFK_BUCKET_TYPE} bucket: {bucket_id!r}"
                    )
                afk_bucket_id = bucket_id
            elif bucket_type == WINDOW_BUCKET_TYPE:
                if window_bucket_id is not None:
                    raise ConfigurationError(
                        f"Found a second {WINDOW_BUCKET_TYPE} bucket: {bucket_id!r}"
                    )
                window_bucket_id = bucket_id
            else:
                others.append(bucket_id)

        if afk_bucket_id is None:
            raise ConfigurationError(f"Required {AFK_BUCKET_TYPE} bucket not found.")
        if window_bucket_id is None:
            raise ConfigurationError(f"Required {WINDOW_BUCKET_TYPE} bucket not found.")
        logger.debug(
            "Using buckets afk=%s window=%s (ignoring %d others)",
            afk_bucket_id,
            window_bucket_id,
            len(others),
        )
        return BucketInfo(afk_bucket_id, window_bucket_id, others)

    def get_events(self, bucket_id: str, start: datetime, end: datetime) -> list[Event]:
        """Return events overlapping ``[start, end)`` sorted by timestamp.

        Events that began before ``start`` but run past it are included by
        checking the last few events ending at or before ``start``.
        """
        path = f"/api/0/buckets/{bucket_id}/events"
        events = self._get_events(path, {"start": _iso(start), "end": _iso(end)})
        previous = self._get_events(
            path, {"end": _iso(start), "limit": str(self.lookback_limit)}
        )
        overlapping = [event for event in previous if event.end > start]
        logger.debug(
            "Bucket %s: %d events in range, %d overlapping from before %s",
            bucket_id,
            len(events),
            len(overlapping),
            start.isoformat(),
        )
        return sorted(overlapping + events, key=lambda event: event.timestamp)

    def _get_events(self, path: str, params: dict[str, str]) -> list[Event]:
        payload = self._get_json(path, params)
        try:
            return _EVENT_LIST.validate_python(payload)
        except ValidationError as exc:
            raise TransportError(
                f"Malformed events from {path}: {exc.error_count()} validation errors",
                url=self.base_url + path,
            ) from exc

    def _get_json(self, path: str, params: Optional[dict[str, str]] = None) -> Any:
        url = self.base_url + path
        try:
            response = self._session.get(
                url,
                params=params,
                headers={"accept": "application/json"},
                timeout=self.timeout,
            )
        except requests.RequestException as exc:
            raise TransportError(f"Request to {url} failed: {exc}", url=url) from exc
        if not response.ok:
            raise TransportError(
                f"Request to {url} failed with status {response.status_code}",
                url=url,
                status=response.status_code,
            )
        try:
            return response.json()
        except ValueError as exc:
            raise TransportError(f"Invalid JSON from {url}", url=url) from exc


def _iso(moment: datetime) -> str:
    return moment.astimezone(timezone.utc).isoformat()
