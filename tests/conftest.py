import pathlib
import sys

import pytest

p = str(pathlib.Path(__file__).resolve().parents[1])
sys.path.insert(0, p) if p not in sys.path else None

from salarytax.config import get_settings  # noqa: E402

_ENV_KEYS = (
    "SALARYTAX_DEFAULT_REGIME",
    "SALARYTAX_DEFAULT_PERIOD",
    "SALARYTAX_DEFAULT_GROSS",
    "SALARYTAX_LOG_DIR",
    "BUILD_VERSION",
    "BUILD_SHA",
    "NO_COLOR",
)


@pytest.fixture(autouse=True)
def _clean_settings(monkeypatch):
    for key in _ENV_KEYS:
        monkeypatch.delenv(key, raising=False)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
