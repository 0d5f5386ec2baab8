from decimal import Decimal as D

import pytest

from salarytax.core.engine import compute
from salarytax.core.period import PERIODS_PER_YEAR, period_view, to_annual, to_period
from tests.fixtures.min_client import make_min_input


def test_monthly_factor_is_twelve():
    assert PERIODS_PER_YEAR == {"annual": 1, "monthly": 12}
    assert to_annual(D("5000"), "monthly") == D("60000")
    assert to_period(D("60000"), "monthly") == D("5000")


def test_annual_is_identity():
    assert to_annual(D("1234.56"), "annual") == D("1234.56")
    assert to_period(D("1234.56"), "annual") == D("1234.56")


def test_no_rounding_is_applied():
    assert to_period(D("100"), "monthly") == D("100") / D("12")


def test_unknown_period_rejected():
    with pytest.raises(ValueError, match="Unsupported period"):
        to_annual(D("1"), "fortnightly")


def test_period_view_converts_money_not_rates():
    result = compute(make_min_input("uk", gross_amount=D("60000")))
    monthly = period_view(result, "monthly")
    assert monthly.gross_annual == D("5000")
    assert monthly.total_tax == result.total_tax / 12
    assert monthly.net_annual == result.net_annual / 12
    assert monthly.extras[0].label == result.extras[0].label
    assert monthly.extras[0].amount == result.extras[0].amount / 12
    assert [s.rate for s in monthly.slices] == [s.rate for s in result.slices]
    assert monthly.slices[1].tax == result.slices[1].tax / 12
    assert monthly.effective_rate == result.effective_rate
    assert monthly.marginal_rate == result.marginal_rate


def test_period_view_annual_returns_result_unchanged():
    result = compute(make_min_input("india-new"))
    assert period_view(result, "annual") is result
