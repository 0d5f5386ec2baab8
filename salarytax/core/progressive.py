from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable

from salarytax.core.amounts import ZERO, clamp_non_negative
from salarytax.core.bands import Band
from salarytax.core.models import Slice


@dataclass(frozen=True)
class ProgressiveTax:
    tax: Decimal
    slices: tuple[Slice, ...]

    @property
    def marginal_rate(self) -> Decimal:
        return self.slices[-1].rate if self.slices else ZERO


def compute_progressive_tax(income: Decimal | float | None, bands: Iterable[Band]) -> ProgressiveTax:
    """Slice ``income`` across ``bands`` and tax each slice at its band rate.

    Only bands that receive income produce a slice. Income sitting exactly on a
    band's upper bound stays in that band.
    """
    remaining = clamp_non_negative(income)
    last_cap = ZERO
    total = ZERO
    slices: list[Slice] = []
    for band in bands:
        if remaining <= 0:
            break
        width = remaining if band.unbounded else band.up_to - last_cap
        amount = max(ZERO, min(remaining, width))
        if amount > 0:
            tax = amount * band.rate
            slices.append(Slice(amount=amount, rate=band.rate, tax=tax))
            total += tax
            remaining -= amount
            if not band.unbounded:
                last_cap = band.up_to
    return ProgressiveTax(tax=total, slices=tuple(slices))


__all__ = ["ProgressiveTax", "compute_progressive_tax"]
