from __future__ import annotations

from salarytax.core.bands import band_table
from salarytax.tax.regimes.base import RegimeConfig, fixed_bands, no_extras

INDIA_OLD_SLABS = band_table(
    (
        (250_000, "0"),
        (500_000, "0.05"),
        (1_000_000, "0.20"),
        (None, "0.30"),
    )
)

regime = RegimeConfig(
    id="india-old",
    label="India – Old Regime",
    currency="₹",
    notes="Sample slabs. Update yearly. Add 80C/80D and similar claims to other deductions.",
    bands_fn=fixed_bands(INDIA_OLD_SLABS),
    extras_fn=no_extras,
)
