from __future__ import annotations

import os
from decimal import Decimal, InvalidOperation
from functools import lru_cache
from typing import Literal, cast

from pydantic import BaseModel, Field
from pydantic import ConfigDict, field_validator

from salarytax.tax.dispatch import DEFAULT_REGIME, list_supported_regimes

_PERIODS = {"annual", "monthly"}


def _env_period() -> Literal["annual", "monthly"]:
    lower = os.getenv("SALARYTAX_DEFAULT_PERIOD", "annual").strip().lower()
    normalized = lower if lower in _PERIODS else "annual"
    return cast(Literal["annual", "monthly"], normalized)


def _env_decimal(name: str, default: str) -> Decimal:
    raw = os.getenv(name, default)
    try:
        return Decimal(raw.replace(",", "").strip())
    except InvalidOperation:
        return Decimal(default)


class Settings(BaseModel):
    default_regime: str = Field(
        default_factory=lambda: os.getenv("SALARYTAX_DEFAULT_REGIME", DEFAULT_REGIME)
    )
    default_period: Literal["annual", "monthly"] = Field(default_factory=_env_period)
    default_gross: Decimal = Field(
        default_factory=lambda: _env_decimal("SALARYTAX_DEFAULT_GROSS", "1200000")
    )
    log_dir: str | None = Field(default_factory=lambda: os.getenv("SALARYTAX_LOG_DIR") or None)
    build_version: str = Field(default_factory=lambda: os.getenv("BUILD_VERSION", "dev"))
    build_sha: str = Field(default_factory=lambda: os.getenv("BUILD_SHA", "local"))

    model_config = ConfigDict(frozen=True, validate_default=True)

    @field_validator("default_regime", mode="before")
    @classmethod
    def _known_regime(cls, value: str) -> str:
        normalized = (value or DEFAULT_REGIME).strip().lower()
        if normalized not in list_supported_regimes():
            raise ValueError(
                f"SALARYTAX_DEFAULT_REGIME must be one of {list_supported_regimes()}, got {normalized}"
            )
        return normalized

    @field_validator("default_gross")
    @classmethod
    def _non_negative_gross(cls, value: Decimal) -> Decimal:
        if value < 0:
            raise ValueError("SALARYTAX_DEFAULT_GROSS must not be negative")
        return value


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
