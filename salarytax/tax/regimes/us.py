from __future__ import annotations

from decimal import Decimal
from typing import Literal

from salarytax.core.amounts import D
from salarytax.core.bands import Band, band_table
from salarytax.core.models import ExtraItem
from salarytax.tax.extras import CappedRate, UncappedRate
from salarytax.tax.regimes.base import Params, RegimeConfig, param_flag

FilingStatus = Literal["single", "married"]

# Placeholder federal brackets; update with current-year figures.
SINGLE_BRACKETS = band_table(
    (
        (11_000, "0.10"),
        (47_000, "0.12"),
        (100_000, "0.22"),
        (191_000, "0.24"),
        (243_000, "0.32"),
        (366_000, "0.35"),
        (None, "0.37"),
    )
)

MARRIED_BRACKETS = band_table(
    (
        (22_000, "0.10"),
        (94_000, "0.12"),
        (201_000, "0.22"),
        (383_000, "0.24"),
        (487_000, "0.32"),
        (732_000, "0.35"),
        (None, "0.37"),
    )
)

SS_WAGE_CAP = D("168600")
SOCIAL_SECURITY = CappedRate("Social Security (6.2%)", rate=D("0.062"), cap=SS_WAGE_CAP)
MEDICARE = UncappedRate("Medicare (1.45%)", rate=D("0.0145"))


def filing_status(params: Params) -> FilingStatus:
    raw = str(params.get("filing") or "single").strip().lower()
    return "married" if raw == "married" else "single"


def _bands(params: Params) -> tuple[Band, ...]:
    return MARRIED_BRACKETS if filing_status(params) == "married" else SINGLE_BRACKETS


def _fica(taxable: Decimal, gross: Decimal, params: Params) -> list[ExtraItem]:
    if not param_flag(params, "include_fica"):
        return []
    return [SOCIAL_SECURITY.item(taxable, gross), MEDICARE.item(taxable, gross)]


regime = RegimeConfig(
    id="us",
    label="United States – Federal",
    currency="$",
    notes="Simplified federal. Add state taxes separately if needed.",
    bands_fn=_bands,
    extras_fn=_fica,
    default_params={"filing": "single", "include_fica": True},
)
