from __future__ import annotations

from decimal import Decimal, InvalidOperation

from salarytax.core.amounts import D, ZERO, to_decimal
from salarytax.core.bands import Band, band_table
from salarytax.core.models import ExtraItem
from salarytax.tax.extras import TwoTier
from salarytax.tax.regimes.base import Params, RegimeConfig, param_flag

PERSONAL_ALLOWANCE = D("12570")
BASIC_RATE_LIMIT = D("50270")

# Bands above the personal allowance; these never move.
ABOVE_ALLOWANCE = band_table(
    (
        (50_270, "0.20"),
        (125_140, "0.40"),
        (None, "0.45"),
    )
)

NATIONAL_INSURANCE = TwoTier(
    "National Insurance (employee)",
    rate_low=D("0.08"),
    rate_high=D("0.02"),
    lower_threshold=PERSONAL_ALLOWANCE,
    upper_limit=BASIC_RATE_LIMIT,
)


def personal_allowance(params: Params) -> Decimal:
    raw = params.get("personal_allowance")
    if raw is None or raw == "" or isinstance(raw, bool):
        return PERSONAL_ALLOWANCE
    try:
        value = to_decimal(raw)
    except (InvalidOperation, ValueError, TypeError):
        return PERSONAL_ALLOWANCE
    if not value.is_finite():
        return PERSONAL_ALLOWANCE
    return max(ZERO, value)


def _bands(params: Params) -> tuple[Band, ...]:
    # Allowance taper above 100k is not modelled. An allowance at or past a
    # fixed threshold swallows that band instead of overlapping it.
    allowance = personal_allowance(params)
    zero_band = (Band(up_to=allowance, rate=ZERO),) if allowance > 0 else ()
    return zero_band + tuple(b for b in ABOVE_ALLOWANCE if b.unbounded or b.up_to > allowance)


def _national_insurance(taxable: Decimal, gross: Decimal, params: Params) -> list[ExtraItem]:
    if not param_flag(params, "include_ni"):
        return []
    return [NATIONAL_INSURANCE.item(taxable, gross)]


regime = RegimeConfig(
    id="uk",
    label="United Kingdom (rUK)",
    currency="£",
    notes="Simplified Income Tax + optional NI (not Scotland). Update thresholds yearly.",
    bands_fn=_bands,
    extras_fn=_national_insurance,
    default_params={"include_ni": True, "personal_allowance": 12_570},
)
