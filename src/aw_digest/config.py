"""Configuration models and helpers for summary generation."""

from __future__ import annotations

import json
import logging
import math
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from pydantic import BaseModel, ConfigDict, ValidationError

from .client import DEFAULT_BASE_URL, DEFAULT_LOOKBACK_LIMIT
from .errors import ConfigurationError

logger = logging.getLogger(__name__)

MINUTES_PER_DAY = 24 * 60


@dataclass(slots=True)
class SummarySettings:
    """Everything one summary run needs besides the day."""

    base_url: str = DEFAULT_BASE_URL
    bucket_minutes: float = 15.0
    coverage_percent: float = 70.0
    min_count: int = 0
    grace_minutes: float = 0.0
    lookback_limit: int = DEFAULT_LOOKBACK_LIMIT
    timeout_seconds: Optional[float] = None

    @classmethod
    def from_options(
        cls,
        *,
        base_url: Optional[str] = None,
        bucket_minutes: Optional[float] = None,
        coverage_percent: Optional[float] = None,
        min_count: Optional[int] = None,
        grace_minutes: Optional[float] = None,
        lookback_limit: Optional[int] = None,
        timeout_seconds: Optional[float] = None,
        defaults: Optional["SummarySettings"] = None,
    ) -> "SummarySettings":
        """Overlay the given options on ``defaults`` and validate the result."""
        base = defaults or cls()
        settings = cls(
            base_url=base_url if base_url is not None else base.base_url,
            bucket_minutes=bucket_minutes if bucket_minutes is not None else base.bucket_minutes,
            coverage_percent=(
                coverage_percent if coverage_percent is not None else base.coverage_percent
            ),
            min_count=min_count if min_count is not None else base.min_count,
            grace_minutes=grace_minutes if grace_minutes is not None else base.grace_minutes,
            lookback_limit=lookback_limit if lookback_limit is not None else base.lookback_limit,
            timeout_seconds=(
                timeout_seconds if timeout_seconds is not None else base.timeout_seconds
            ),
        )
        settings.validate()
        return settings

    def validate(self) -> None:
        for name in ("bucket_minutes", "coverage_percent", "grace_minutes"):
            if not math.isfinite(getattr(self, name)):
                raise ConfigurationError(f"{name} must be a finite number")
        if self.timeout_seconds is not None and not math.isfinite(self.timeout_seconds):
            raise ConfigurationError("timeout_seconds must be a finite number")
        if not 0 < self.bucket_minutes <= MINUTES_PER_DAY:
            raise ConfigurationError("bucket_minutes must be positive and at most one day")
        if not 0 <= self.coverage_percent <= 100:
            raise ConfigurationError("coverage_percent must be between 0 and 100")
        if self.min_count < 0:
            raise ConfigurationError("min_count must not be negative")
        if not 0 <= self.grace_minutes <= MINUTES_PER_DAY:
            raise ConfigurationError("grace_minutes must be between 0 and one day")
        if self.lookback_limit < 1:
            raise ConfigurationError("lookback_limit must be at least 1")
        if self.timeout_seconds is not None and self.timeout_seconds <= 0:
            raise ConfigurationError("timeout_seconds must be positive")


class SettingsFile(BaseModel):
    """Schema of the optional ``settings.json`` file."""

    base_url: Optional[str] = None
    bucket_minutes: Optional[float] = None
    coverage_percent: Optional[float] = None
    min_count: Optional[int] = None
    grace_minutes: Optional[float] = None
    lookback_limit: Optional[int] = None
    timeout_seconds: Optional[float] = None

    model_config = ConfigDict(extra="forbid")


def load_settings(path: Path) -> SummarySettings:
    """Read defaults from ``path``; a missing file yields built-in defaults."""
    if not path.exists():
        logger.debug("No settings file at %s; using defaults.", path)
        return SummarySettings()
    try:
        raw = json.loads(path.read_text(encoding="utf-8"))
        stored = SettingsFile.model_validate(raw)
    except (OSError, ValueError, ValidationError) as exc:
        raise ConfigurationError(f"Invalid settings file {path}: {exc}") from exc
    logger.debug("Loaded settings from %s", path)
    return SummarySettings.from_options(**stored.model_dump(exclude_none=True))
