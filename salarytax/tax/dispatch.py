from __future__ import annotations

from typing import Dict, Iterable, List

from salarytax.core.bands import validate_bands
from salarytax.tax.regimes.base import RegimeConfig
from salarytax.tax.regimes.india_new import regime as india_new
from salarytax.tax.regimes.india_old import regime as india_old
from salarytax.tax.regimes.uk import regime as uk
from salarytax.tax.regimes.us import regime as us

_REGISTRY: Dict[str, RegimeConfig] = {}

DEFAULT_REGIME = "india-new"


class UnknownRegimeError(KeyError):
    pass


def register_regimes(regimes: Iterable[RegimeConfig]) -> None:
    for regime in regimes:
        key = regime.id.lower()
        if key in _REGISTRY:
            raise ValueError(f"Regime '{key}' registered twice")
        # Fail at import rather than under-taxing on the first request.
        validate_bands(regime.bands())
        _REGISTRY[key] = regime


register_regimes(
    (
        india_new,
        india_old,
        us,
        uk,
    ),
)


def get_regime(regime_id: str) -> RegimeConfig:
    key = (regime_id or "").strip().lower()
    try:
        return _REGISTRY[key]
    except KeyError as exc:
        raise UnknownRegimeError(f"No tax regime registered for '{regime_id}'") from exc


def list_regimes() -> List[RegimeConfig]:
    return list(_REGISTRY.values())


def list_supported_regimes() -> list[str]:
    return sorted(_REGISTRY)


__all__ = [
    "DEFAULT_REGIME",
    "UnknownRegimeError",
    "get_regime",
    "list_regimes",
    "list_supported_regimes",
    "register_regimes",
]
