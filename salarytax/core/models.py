from __future__ import annotations

from decimal import Decimal
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

Period = Literal["annual", "monthly"]

_ZERO = Decimal("0")


class Slice(BaseModel):
    amount: Decimal
    rate: Decimal
    tax: Decimal

    model_config = ConfigDict(frozen=True)


class ExtraItem(BaseModel):
    label: str
    amount: Decimal

    model_config = ConfigDict(frozen=True)


class ComputationInput(BaseModel):
    regime_id: str
    gross_amount: Decimal = _ZERO
    period: Period = "annual"
    standard_deduction: Decimal = _ZERO
    other_deductions: Decimal = _ZERO
    regime_params: dict[str, Any] = Field(default_factory=dict)

    model_config = ConfigDict(frozen=True)

    @field_validator("regime_id", mode="before")
    @classmethod
    def _normalize_regime(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("period", mode="before")
    @classmethod
    def _normalize_period(cls, value: Any) -> Any:
        return value.strip().lower() if isinstance(value, str) else value

    @field_validator("gross_amount", "standard_deduction", "other_deductions", mode="before")
    @classmethod
    def _missing_amount_is_zero(cls, value: Any) -> Any:
        return _ZERO if value is None or value == "" else value


class ComputationResult(BaseModel):
    regime_id: str
    currency: str
    gross_annual: Decimal
    deductions: Decimal
    taxable_base: Decimal
    band_tax: Decimal
    slices: tuple[Slice, ...] = ()
    extras: tuple[ExtraItem, ...] = ()
    extras_total: Decimal
    total_tax: Decimal
    net_annual: Decimal
    effective_rate: Decimal
    marginal_rate: Decimal

    model_config = ConfigDict(frozen=True)


__all__ = [
    "Period",
    "Slice",
    "ExtraItem",
    "ComputationInput",
    "ComputationResult",
]
