from __future__ import annotations

from decimal import Decimal

D = Decimal
ZERO = D("0")


def to_decimal(value: float | int | str | Decimal | None) -> Decimal:
    if value is None:
        return ZERO
    return value if isinstance(value, Decimal) else Decimal(str(value))


def clamp_non_negative(value: float | int | str | Decimal | None) -> Decimal:
    return max(ZERO, to_decimal(value))


__all__ = ["D", "ZERO", "to_decimal", "clamp_non_negative"]
