from __future__ import annotations

import logging
from decimal import Decimal

from salarytax.config import get_settings
from salarytax.core.amounts import ZERO, clamp_non_negative
from salarytax.core.bands import validate_bands
from salarytax.core.models import ComputationInput, ComputationResult, Period
from salarytax.core.period import to_annual
from salarytax.core.progressive import compute_progressive_tax
from salarytax.tax.dispatch import UnknownRegimeError, get_regime

logger = logging.getLogger("salarytax")


def compute(in_: ComputationInput) -> ComputationResult:
    """Compute income tax, extras and take-home pay for one input.

    Everything is worked on annual figures; use ``period_view`` to re-express
    the result per month. Raises ``UnknownRegimeError`` for unregistered
    regimes and ``BandPartitionError`` when parameters produce broken bands.
    """
    regime = get_regime(in_.regime_id)
    gross_annual = clamp_non_negative(to_annual(in_.gross_amount, in_.period))
    deductions = clamp_non_negative(in_.standard_deduction + in_.other_deductions)
    taxable_base = max(ZERO, gross_annual - deductions)

    params = regime.resolve_params(in_.regime_params)
    bands = validate_bands(regime.bands_fn(params))
    progressive = compute_progressive_tax(taxable_base, bands)
    extras = tuple(regime.extras_fn(taxable_base, gross_annual, params))

    extras_total = sum((item.amount for item in extras), ZERO)
    total_tax = progressive.tax + extras_total
    net_annual = max(ZERO, gross_annual - total_tax)
    effective_rate = total_tax / gross_annual if gross_annual > 0 else ZERO

    logger.debug(
        "Computed regime=%s gross_annual=%s taxable=%s total_tax=%s",
        regime.id,
        gross_annual,
        taxable_base,
        total_tax,
    )
    return ComputationResult(
        regime_id=regime.id,
        currency=regime.currency,
        gross_annual=gross_annual,
        deductions=deductions,
        taxable_base=taxable_base,
        band_tax=progressive.tax,
        slices=progressive.slices,
        extras=extras,
        extras_total=extras_total,
        total_tax=total_tax,
        net_annual=net_annual,
        effective_rate=effective_rate,
        marginal_rate=progressive.marginal_rate,
    )


def default_input(
    regime_id: str,
    gross_amount: Decimal | float | None = None,
    period: Period | None = None,
) -> ComputationInput:
    """Input pre-filled with the regime's default deductions and parameters."""
    settings = get_settings()
    regime = get_regime(regime_id)
    return ComputationInput(
        regime_id=regime.id,
        gross_amount=settings.default_gross if gross_amount is None else gross_amount,
        period=period or settings.default_period,
        standard_deduction=regime.default_deductions.standard,
        other_deductions=regime.default_deductions.other,
        regime_params=dict(regime.default_params),
    )


def compute_or_default(in_: ComputationInput) -> tuple[ComputationResult, bool]:
    """Compute ``in_``, falling back to the configured default regime.

    Returns the result and whether the fallback was taken.
    """
    try:
        return compute(in_), False
    except UnknownRegimeError as exc:
        fallback = get_settings().default_regime
        logger.warning("Unknown regime %r; falling back to %s: %s", in_.regime_id, fallback, exc)
        return compute(default_input(fallback, in_.gross_amount, in_.period)), True


__all__ = ["compute", "compute_or_default", "default_input"]
