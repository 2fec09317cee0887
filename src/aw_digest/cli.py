"""Command-line interface for the ActivityWatch digest."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import NoReturn, Optional

import typer

from .config import SummarySettings, load_settings
from .errors import AwDigestError
from .paths import get_settings_path

app = typer.Typer(help="Summarize a day of ActivityWatch window activity.")
logger = logging.getLogger(__name__)


@app.callback(no_args_is_help=True)
def main(verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable verbose logs.")) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s %(message)s",
    )


def _resolve_settings(settings_path: Optional[Path], **options) -> SummarySettings:
    defaults = load_settings(settings_path or get_settings_path())
    return SummarySettings.from_options(defaults=defaults, **options)


def _fail(exc: AwDigestError) -> NoReturn:
    logger.error("%s", exc)
    typer.echo(f"Error: {exc}", err=True)
    raise typer.Exit(code=1)


@app.command()
def summary(
    day: str = typer.Option(
        "0",
        "--day",
        "-d",
        help="Day offset from today (e.g. -1), YYYY-MM-DD, or MM-DD.",
    ),
    base_url: Optional[str] = typer.Option(
        None, "--url", help="ActivityWatch server address."
    ),
    bucket_minutes: Optional[float] = typer.Option(
        None, "--bucket-minutes", help="Length of each summary bucket in minutes."
    ),
    coverage_percent: Optional[float] = typer.Option(
        None,
        "--coverage",
        help="Percent of each bucket the listed apps must cover.",
    ),
    min_count: Optional[int] = typer.Option(
        None, "--min-count", help="Minimum number of apps listed per bucket."
    ),
    grace_minutes: Optional[float] = typer.Option(
        None,
        "--grace",
        help="Minutes of away time that still count as one active session.",
    ),
    settings_path: Optional[Path] = typer.Option(
        None, "--settings", path_type=Path, help="Location of the settings JSON file."
    ),
) -> None:
    """Print the bucketed app usage summary for a day."""
    from .days import parse_day_selector
    from .pipeline import build_daily_summary

    try:
        target = parse_day_selector(day)
        settings = _resolve_settings(
            settings_path,
            base_url=base_url,
            bucket_minutes=bucket_minutes,
            coverage_percent=coverage_percent,
            min_count=min_count,
            grace_minutes=grace_minutes,
        )
        text = build_daily_summary(target, settings)
    except AwDigestError as exc:
        _fail(exc)
    typer.echo(text, nl=False)


@app.command()
def buckets(
    base_url: Optional[str] = typer.Option(
        None, "--url", help="ActivityWatch server address."
    ),
    settings_path: Optional[Path] = typer.Option(
        None, "--settings", path_type=Path, help="Location of the settings JSON file."
    ),
) -> None:
    """Show which buckets a summary would read."""
    from .client import ActivityWatchClient

    try:
        settings = _resolve_settings(settings_path, base_url=base_url)
        with ActivityWatchClient(
            settings.base_url,
            lookback_limit=settings.lookback_limit,
            timeout=settings.timeout_seconds,
        ) as client:
            info = client.get_bucket_info()
    except AwDigestError as exc:
        _fail(exc)
    typer.echo(f"afk:    {info.afk_bucket_id}")
    typer.echo(f"window: {info.window_bucket_id}")
    for bucket_id in info.other_bucket_ids:
        typer.echo(f"other:  {bucket_id}")


@app.command()
def serve(
    host: str = typer.Option("127.0.0.1", "--host", help="Interface to bind the server."),
    port: int = typer.Option(
        5680, "--port", min=1, max=65535, help="TCP port for the server."
    ),
    base_url: Optional[str] = typer.Option(
        None, "--url", help="ActivityWatch server address."
    ),
    settings_path: Optional[Path] = typer.Option(
        None, "--settings", path_type=Path, help="Location of the settings JSON file."
    ),
) -> None:
    """Serve summaries as plain text for editor integrations."""
    from .server_runner import run_server

    try:
        settings = _resolve_settings(settings_path, base_url=base_url)
    except AwDigestError as exc:
        _fail(exc)
    run_server(host=host, port=port, settings=settings)
