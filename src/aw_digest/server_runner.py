"""Helpers to launch the local summary server."""

from __future__ import annotations

import logging
from typing import Optional

import uvicorn

from .config import SummarySettings
from .webapp import create_app


def run_server(
    *,
    host: str = "127.0.0.1",
    port: int = 5680,
    settings: Optional[SummarySettings] = None,
    log_level: str = "info",
) -> None:
    """Start the FastAPI server in the foreground."""
    app = create_app(settings=settings or SummarySettings())
    logging.getLogger("uvicorn.error").setLevel(log_level.upper())
    uvicorn.run(app, host=host, port=port, log_level=log_level)
