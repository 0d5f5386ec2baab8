from __future__ import annotations

from salarytax.core.bands import band_table
from salarytax.tax.regimes.base import RegimeConfig, fixed_bands, no_extras

INDIA_NEW_SLABS = band_table(
    (
        (300_000, "0"),
        (700_000, "0.05"),
        (1_000_000, "0.10"),
        (1_200_000, "0.15"),
        (1_500_000, "0.20"),
        (None, "0.30"),
    )
)

regime = RegimeConfig(
    id="india-new",
    label="India – New Regime",
    currency="₹",
    notes="Sample slabs. Update yearly.",
    bands_fn=fixed_bands(INDIA_NEW_SLABS),
    extras_fn=no_extras,
)
