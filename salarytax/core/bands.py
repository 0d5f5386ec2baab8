from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Iterable, Sequence

from salarytax.core.amounts import D, ZERO

# Upper bound of the top band. Kept distinct from float("inf") so display code
# never has to format infinity.
UNBOUNDED = None


class BandPartitionError(ValueError):
    pass


@dataclass(frozen=True)
class Band:
    up_to: Decimal | None
    rate: Decimal

    @property
    def unbounded(self) -> bool:
        return self.up_to is UNBOUNDED


def band_table(rows: Iterable[tuple[int | str | None, str]]) -> tuple[Band, ...]:
    """Build bands from ``(upper_bound, rate)`` rows; ``None`` marks the top band."""
    return tuple(
        Band(up_to=None if upper is None else D(str(upper)), rate=D(rate))
        for upper, rate in rows
    )


def validate_bands(bands: Sequence[Band]) -> tuple[Band, ...]:
    """Check that ``bands`` partition ``[0, inf)`` without gaps or overlaps.

    Returns the bands as a tuple so callers can keep an immutable copy.
    """
    if not bands:
        raise BandPartitionError("Band sequence is empty")
    last_cap = ZERO
    for index, band in enumerate(bands):
        if band.rate < 0 or band.rate > 1:
            raise BandPartitionError(f"Band {index} rate {band.rate} outside [0, 1]")
        if band.unbounded:
            if index != len(bands) - 1:
                raise BandPartitionError(f"Unbounded band {index} is not the last band")
            continue
        if band.up_to <= last_cap:
            raise BandPartitionError(
                f"Band {index} upper bound {band.up_to} does not exceed previous bound {last_cap}"
            )
        last_cap = band.up_to
    if not bands[-1].unbounded:
        raise BandPartitionError(f"Top band ends at {bands[-1].up_to}; expected an unbounded band")
    return tuple(bands)


__all__ = ["UNBOUNDED", "Band", "BandPartitionError", "band_table", "validate_bands"]
