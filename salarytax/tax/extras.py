"""Payroll-style surcharges that sit beside the progressive income tax.

Each strategy is a frozen dataclass exposing ``amount(taxable, gross)`` and
``item(taxable, gross)``. Strategies read gross income unless built with
``basis="taxable"``.
"""
from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Literal, Union

from salarytax.core.amounts import ZERO, clamp_non_negative
from salarytax.core.models import ExtraItem

Basis = Literal["gross", "taxable"]


def _base(basis: Basis, taxable: Decimal, gross: Decimal) -> Decimal:
    return clamp_non_negative(taxable if basis == "taxable" else gross)


@dataclass(frozen=True)
class CappedRate:
    label: str
    rate: Decimal
    cap: Decimal
    basis: Basis = "gross"

    def amount(self, taxable: Decimal, gross: Decimal) -> Decimal:
        return self.rate * min(_base(self.basis, taxable, gross), self.cap)

    def item(self, taxable: Decimal, gross: Decimal) -> ExtraItem:
        return ExtraItem(label=self.label, amount=self.amount(taxable, gross))


@dataclass(frozen=True)
class UncappedRate:
    label: str
    rate: Decimal
    basis: Basis = "gross"

    def amount(self, taxable: Decimal, gross: Decimal) -> Decimal:
        return self.rate * _base(self.basis, taxable, gross)

    def item(self, taxable: Decimal, gross: Decimal) -> ExtraItem:
        return ExtraItem(label=self.label, amount=self.amount(taxable, gross))


@dataclass(frozen=True)
class TwoTier:
    label: str
    rate_low: Decimal
    rate_high: Decimal
    lower_threshold: Decimal
    upper_limit: Decimal
    basis: Basis = "gross"

    def amount(self, taxable: Decimal, gross: Decimal) -> Decimal:
        base = _base(self.basis, taxable, gross)
        low = max(ZERO, min(base, self.upper_limit) - self.lower_threshold)
        high = max(ZERO, base - self.upper_limit)
        return self.rate_low * low + self.rate_high * high

    def item(self, taxable: Decimal, gross: Decimal) -> ExtraItem:
        return ExtraItem(label=self.label, amount=self.amount(taxable, gross))


Surcharge = Union[CappedRate, UncappedRate, TwoTier]


__all__ = ["Basis", "CappedRate", "UncappedRate", "TwoTier", "Surcharge"]
