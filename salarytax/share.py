"""Opaque, reversible text encoding of a ``ComputationInput`` for shareable links.

The encoding is compact JSON wrapped in URL-safe base64. It is not a stable
format and carries no version marker; blobs from older builds may fail to
decode, in which case ``restore_state`` leaves the current input untouched.
"""
from __future__ import annotations

import base64
import json
import logging
from typing import Any

from pydantic import ValidationError

from salarytax.core.models import ComputationInput

logger = logging.getLogger("salarytax")

STATE_PARAM = "calc"


class MalformedStateError(ValueError):
    pass


def encode_state(in_: ComputationInput) -> str:
    payload = in_.model_dump(mode="json")
    data = json.dumps(payload, separators=(",", ":"), ensure_ascii=False).encode("utf-8")
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _decode_payload(blob: str) -> dict[str, Any]:
    text = (blob or "").strip()
    if not text:
        raise MalformedStateError("Empty state")
    padded = text + "=" * (-len(text) % 4)
    try:
        raw = base64.b64decode(padded.encode("ascii"), altchars=b"-_", validate=True)
        payload = json.loads(raw.decode("utf-8"))
    except ValueError as exc:
        raise MalformedStateError(f"State is not valid encoded JSON: {exc}") from exc
    if not isinstance(payload, dict):
        raise MalformedStateError(f"State must decode to an object, got {type(payload).__name__}")
    return payload


def decode_state(blob: str) -> ComputationInput:
    payload = _decode_payload(blob)
    try:
        return ComputationInput.model_validate(payload)
    except ValidationError as exc:
        raise MalformedStateError(f"State does not describe a computation input: {exc}") from exc


def restore_state(blob: str | None, current: ComputationInput) -> ComputationInput:
    """Overlay the fields stored in ``blob`` on ``current``.

    Anything that cannot be decoded leaves ``current`` as it was.
    """
    if not blob:
        return current
    try:
        payload = _decode_payload(blob)
        merged = {**current.model_dump(), **payload}
        return ComputationInput.model_validate(merged)
    except (MalformedStateError, ValidationError) as exc:
        logger.debug("Ignoring shared state: %s", exc)
        return current


__all__ = ["STATE_PARAM", "MalformedStateError", "decode_state", "encode_state", "restore_state"]
