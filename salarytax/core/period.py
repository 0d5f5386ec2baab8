from __future__ import annotations

from decimal import Decimal

from salarytax.core.amounts import to_decimal
from salarytax.core.models import ComputationResult, ExtraItem, Period, Slice

PERIODS_PER_YEAR: dict[str, int] = {
    "annual": 1,
    "monthly": 12,
}

_MONEY_FIELDS = (
    "gross_annual",
    "deductions",
    "taxable_base",
    "band_tax",
    "extras_total",
    "total_tax",
    "net_annual",
)


def _periods(period: Period | str) -> Decimal:
    try:
        return Decimal(PERIODS_PER_YEAR[period])
    except KeyError as exc:
        raise ValueError(f"Unsupported period '{period}'") from exc


def to_annual(amount: Decimal | float | int, period: Period | str) -> Decimal:
    return to_decimal(amount) * _periods(period)


def to_period(annual_amount: Decimal | float | int, period: Period | str) -> Decimal:
    return to_decimal(annual_amount) / _periods(period)


def period_view(result: ComputationResult, period: Period | str) -> ComputationResult:
    """Re-express every monetary figure of ``result`` per ``period``.

    Field names keep their annual spelling; rates are left untouched.
    """
    if _periods(period) == 1:
        return result
    update: dict[str, object] = {name: to_period(getattr(result, name), period) for name in _MONEY_FIELDS}
    update["slices"] = tuple(
        Slice(amount=to_period(s.amount, period), rate=s.rate, tax=to_period(s.tax, period))
        for s in result.slices
    )
    update["extras"] = tuple(
        ExtraItem(label=e.label, amount=to_period(e.amount, period)) for e in result.extras
    )
    return result.model_copy(update=update)


__all__ = ["PERIODS_PER_YEAR", "to_annual", "to_period", "period_view"]
