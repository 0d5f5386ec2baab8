import logging
from typing import Any

from fastapi import FastAPI, HTTPException

from salarytax.config import get_settings
from salarytax.core.bands import Band
from salarytax.core.engine import compute_or_default, default_input
from salarytax.core.models import ComputationInput, ComputationResult, Period
from salarytax.core.period import period_view
from salarytax.lifespan import build_application_lifespan
from salarytax.share import encode_state, restore_state
from salarytax.tax.dispatch import UnknownRegimeError, get_regime, list_regimes, list_supported_regimes
from salarytax.tax.regimes.base import RegimeConfig

logger = logging.getLogger("salarytax")


async def _announce_defaults(_: FastAPI) -> None:
    settings = get_settings()
    logger.info(
        "Salary tax API ready; default_regime=%s default_period=%s",
        settings.default_regime,
        settings.default_period,
    )


app = FastAPI(
    title="Salary Tax Calculator",
    description="Income tax, payroll extras and take-home pay for India, US and UK regimes. Rates are illustrative.",
    lifespan=build_application_lifespan("api", startup_hook=_announce_defaults),
)


class ComputeRequest(ComputationInput):
    display_period: Period | None = None


def _band_payload(band: Band) -> dict[str, str | None]:
    return {
        "up_to": None if band.unbounded else format(band.up_to, "f"),
        "rate": format(band.rate, "f"),
    }


def _regime_payload(regime: RegimeConfig) -> dict[str, Any]:
    return {
        "id": regime.id,
        "label": regime.label,
        "currency": regime.currency,
        "notes": regime.notes,
        "default_deductions": {
            "standard": format(regime.default_deductions.standard, "f"),
            "other": format(regime.default_deductions.other, "f"),
        },
        "default_params": dict(regime.default_params),
    }


def _outcome(in_: ComputationInput, display_period: Period | None = None) -> dict[str, Any]:
    result, fell_back = compute_or_default(in_)
    if fell_back:
        in_ = default_input(result.regime_id, in_.gross_amount, in_.period)
    display: ComputationResult = period_view(result, display_period or in_.period)
    return {
        "regime_fallback": fell_back,
        "input": in_.model_dump(mode="json"),
        "result": result.model_dump(mode="json"),
        "display": display.model_dump(mode="json"),
        "display_period": display_period or in_.period,
    }


@app.get("/health")
def health():
    settings = getattr(app.state, "settings", get_settings())
    return {
        "status": "ok",
        "default_regime": settings.default_regime,
        "build": {
            "version": settings.build_version,
            "sha": settings.build_sha,
        },
        "regimes": list_supported_regimes(),
    }


@app.get("/regimes")
def regimes():
    return [_regime_payload(regime) for regime in list_regimes()]


@app.get("/regimes/{regime_id}/bands")
def regime_bands(regime_id: str):
    try:
        regime = get_regime(regime_id)
    except UnknownRegimeError as exc:
        raise HTTPException(status_code=404, detail=f"Unknown regime '{regime_id}'") from exc
    return {
        "regime": regime.id,
        "params": dict(regime.default_params),
        "bands": [_band_payload(band) for band in regime.bands()],
    }


@app.post("/compute")
def compute_endpoint(req: ComputeRequest):
    in_ = ComputationInput.model_validate(req.model_dump(exclude={"display_period"}))
    return _outcome(in_, req.display_period)


@app.post("/share")
def share(req: ComputationInput):
    return {"state": encode_state(req)}


@app.get("/share/{state}")
def open_shared(state: str):
    settings = getattr(app.state, "settings", get_settings())
    base = default_input(settings.default_regime)
    restored = restore_state(state, base)
    outcome = _outcome(restored)
    outcome["state_restored"] = restored is not base
    return outcome
