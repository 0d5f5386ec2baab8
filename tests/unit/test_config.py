from decimal import Decimal

import pytest
from pydantic import ValidationError

from salarytax.config import Settings, get_settings


def test_defaults():
    settings = Settings()
    assert settings.default_regime == "india-new"
    assert settings.default_period == "annual"
    assert settings.default_gross == Decimal("1200000")
    assert settings.log_dir is None


def test_environment_overrides(monkeypatch):
    monkeypatch.setenv("SALARYTAX_DEFAULT_REGIME", " UK ")
    monkeypatch.setenv("SALARYTAX_DEFAULT_PERIOD", "Monthly")
    monkeypatch.setenv("SALARYTAX_DEFAULT_GROSS", "4,500")
    monkeypatch.setenv("BUILD_VERSION", "9.9.9")
    settings = get_settings()
    assert settings.default_regime == "uk"
    assert settings.default_period == "monthly"
    assert settings.default_gross == Decimal("4500")
    assert settings.build_version == "9.9.9"


def test_unknown_default_regime_rejected(monkeypatch):
    monkeypatch.setenv("SALARYTAX_DEFAULT_REGIME", "atlantis")
    with pytest.raises(ValidationError, match="SALARYTAX_DEFAULT_REGIME"):
        Settings()


def test_bad_period_and_gross_fall_back(monkeypatch):
    monkeypatch.setenv("SALARYTAX_DEFAULT_PERIOD", "weekly")
    monkeypatch.setenv("SALARYTAX_DEFAULT_GROSS", "lots")
    settings = Settings()
    assert settings.default_period == "annual"
    assert settings.default_gross == Decimal("1200000")


def test_negative_gross_rejected(monkeypatch):
    monkeypatch.setenv("SALARYTAX_DEFAULT_GROSS", "-1")
    with pytest.raises(ValidationError):
        Settings()


def test_settings_are_cached_and_frozen():
    first = get_settings()
    assert get_settings() is first
    with pytest.raises(ValidationError):
        first.default_regime = "uk"  # type: ignore[misc]
