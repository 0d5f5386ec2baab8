from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Callable, Mapping, Sequence

from salarytax.core.amounts import ZERO
from salarytax.core.bands import Band
from salarytax.core.models import ExtraItem

Params = Mapping[str, Any]
BandsFunction = Callable[[Params], Sequence[Band]]
ExtrasFunction = Callable[[Decimal, Decimal, Params], list[ExtraItem]]

_TRUE_STRINGS = {"1", "true", "yes", "on"}


@dataclass(frozen=True)
class DeductionDefaults:
    standard: Decimal = ZERO
    other: Decimal = ZERO


@dataclass(frozen=True)
class RegimeConfig:
    id: str
    label: str
    currency: str
    bands_fn: BandsFunction
    extras_fn: ExtrasFunction
    notes: str | None = None
    default_deductions: DeductionDefaults = field(default_factory=DeductionDefaults)
    default_params: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self) -> None:
        object.__setattr__(self, "default_params", MappingProxyType(dict(self.default_params)))

    def resolve_params(self, params: Params | None = None) -> dict[str, Any]:
        resolved = dict(self.default_params)
        resolved.update(params or {})
        return resolved

    def bands(self, params: Params | None = None) -> tuple[Band, ...]:
        return tuple(self.bands_fn(self.resolve_params(params)))

    def extras(self, taxable: Decimal, gross: Decimal, params: Params | None = None) -> list[ExtraItem]:
        return list(self.extras_fn(taxable, gross, self.resolve_params(params)))


def fixed_bands(bands: Sequence[Band]) -> BandsFunction:
    frozen = tuple(bands)
    return lambda _params: frozen


def no_extras(_taxable: Decimal, _gross: Decimal, _params: Params) -> list[ExtraItem]:
    return []


def param_flag(params: Params, name: str) -> bool:
    value = params.get(name)
    if isinstance(value, str):
        return value.strip().lower() in _TRUE_STRINGS
    return bool(value)
