"""FastAPI application that serves daily summaries as plain text."""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Optional

from fastapi import FastAPI, HTTPException, Query, Request
from fastapi.responses import PlainTextResponse

from .config import SummarySettings
from .days import parse_day_selector
from .errors import ConfigurationError, InputFormatError, TransportError
from .pipeline import EventSource, build_daily_summary

logger = logging.getLogger(__name__)


def create_app(
    *,
    settings: Optional[SummarySettings] = None,
    source_factory: Optional[Callable[[SummarySettings], EventSource]] = None,
) -> FastAPI:
    """Instantiate the FastAPI application."""
    resolved_settings = settings or SummarySettings()

    app = FastAPI(title="ActivityWatch Digest", version="0.1.0")
    app.state.settings = resolved_settings

    @app.get("/api/status")
    def status(request: Request) -> Dict[str, Any]:
        current: SummarySettings = request.app.state.settings
        return {
            "base_url": current.base_url,
            "bucket_minutes": current.bucket_minutes,
            "coverage_percent": current.coverage_percent,
            "min_count": current.min_count,
            "grace_minutes": current.grace_minutes,
        }

    @app.get("/api/summary", response_class=PlainTextResponse)
    def summary(
        request: Request,
        day: str = Query(
            default="0",
            description="Day offset from today, YYYY-MM-DD, or MM-DD.",
        ),
    ) -> str:
        current: SummarySettings = request.app.state.settings
        try:
            target = parse_day_selector(day)
            source = source_factory(current) if source_factory else None
            return build_daily_summary(target, current, source)
        except InputFormatError as exc:
            raise HTTPException(status_code=400, detail=str(exc)) from exc
        except TransportError as exc:
            logger.error("ActivityWatch request failed: %s", exc)
            raise HTTPException(status_code=502, detail=str(exc)) from exc
        except ConfigurationError as exc:
            logger.error("ActivityWatch is misconfigured: %s", exc)
            raise HTTPException(status_code=500, detail=str(exc)) from exc

    return app
