import json

import pytest

from aw_digest.config import SummarySettings, load_settings
from aw_digest.errors import ConfigurationError


def test_defaults():
    settings = SummarySettings()
    assert settings.bucket_minutes == 15
    assert settings.coverage_percent == 70
    assert settings.min_count == 0
    assert settings.grace_minutes == 0
    assert settings.lookback_limit == 5


def test_options_override_defaults():
    base = SummarySettings(bucket_minutes=30, min_count=2)
    settings = SummarySettings.from_options(coverage_percent=50, defaults=base)
    assert settings.bucket_minutes == 30
    assert settings.min_count == 2
    assert settings.coverage_percent == 50


@pytest.mark.parametrize(
    "options",
    [
        {"bucket_minutes": 0},
        {"coverage_percent": 101},
        {"coverage_percent": -1},
        {"min_count": -1},
        {"grace_minutes": -0.5},
        {"lookback_limit": 0},
    ],
)
def test_invalid_options_raise(options):
    with pytest.raises(ConfigurationError):
        SummarySettings.from_options(**options)


def test_missing_settings_file_uses_defaults(tmp_path):
    assert load_settings(tmp_path / "settings.json") == SummarySettings()


def test_settings_file_values_are_loaded(tmp_path):
    path = tmp_path / "settings.json"
    path.write_text(json.dumps({"bucket_minutes": 20, "base_url": "http://aw:1234"}))
    settings = load_settings(path)
    assert settings.bucket_minutes == 20
    assert settings.base_url == "http://aw:1234"
    assert settings.coverage_percent == 70


@pytest.mark.parametrize("content", ["{not json", '{"colour": "blue"}', '{"min_count": -3}'])
def test_bad_settings_file_raises(tmp_path, content):
    path = tmp_path / "settings.json"
    path.write_text(content)
    with pytest.raises(ConfigurationError):
        load_settings(path)


@pytest.mark.parametrize(
    "options",
    [
        {"grace_minutes": float("nan")},
        {"grace_minutes": float("inf")},
        {"bucket_minutes": float("nan")},
        {"bucket_minutes": float("inf")},
        {"bucket_minutes": 1e12},
        {"coverage_percent": float("nan")},
        {"timeout_seconds": float("inf")},
    ],
)
def test_non_finite_options_raise(options):
    with pytest.raises(ConfigurationError):
        SummarySettings.from_options(**options)
