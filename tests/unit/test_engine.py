from decimal import Decimal as D

import pytest

from salarytax.core.bands import BandPartitionError, band_table
from salarytax.core.engine import compute, compute_or_default, default_input
from salarytax.core.models import ComputationInput
from salarytax.tax import dispatch
from salarytax.tax.dispatch import UnknownRegimeError
from salarytax.tax.extras import UncappedRate
from salarytax.tax.regimes.base import RegimeConfig, fixed_bands, no_extras
from tests.fixtures.min_client import make_min_input, make_regime_examples


def test_india_new_sample_salary():
    r = compute(make_min_input("india-new", gross_amount=D("1200000")))
    assert r.gross_annual == D("1200000")
    assert r.taxable_base == D("1200000")
    assert r.band_tax == D("80000")
    assert r.extras == ()
    assert r.total_tax == D("80000")
    assert r.net_annual == D("1120000")
    assert r.effective_rate == D("80000") / D("1200000")
    assert r.marginal_rate == D("0.15")
    assert r.currency == "₹"


def test_india_old_with_other_deductions():
    r = compute(make_min_input("india-old", gross_amount=D("1150000"), other_deductions=D("150000")))
    assert r.deductions == D("150000")
    assert r.taxable_base == D("1000000")
    assert r.band_tax == D("112500")
    assert r.marginal_rate == D("0.20")


def test_uk_income_tax_and_national_insurance():
    r = compute(make_min_input("uk", gross_amount=D("60000")))
    assert r.band_tax == D("11432")
    assert [e.label for e in r.extras] == ["National Insurance (employee)"]
    assert r.extras_total == D("3210.6")
    assert r.total_tax == D("14642.6")
    assert r.net_annual == D("45357.4")
    assert r.marginal_rate == D("0.40")


def test_us_capped_social_security_on_gross():
    r = compute(make_min_input("us", gross_amount=D("200000")))
    amounts = {e.label: e.amount for e in r.extras}
    assert amounts["Social Security (6.2%)"] == D("168600") * D("0.062")
    assert amounts["Social Security (6.2%)"] != D("200000") * D("0.062")
    assert amounts["Medicare (1.45%)"] == D("2900")
    assert r.band_tax == D("41800")
    assert r.total_tax == D("55153.2")


def test_filing_status_changes_tax_at_100k():
    single = compute(make_min_input("us", gross_amount=D("100000"), regime_params={"filing": "single"}))
    married = compute(make_min_input("us", gross_amount=D("100000"), regime_params={"filing": "married"}))
    assert single.band_tax == D("17080")
    assert married.band_tax == D("12160")
    assert single.total_tax != married.total_tax
    assert single.extras == married.extras


@pytest.mark.parametrize("gross", [D("20000"), D("40000"), D("50000")])
def test_personal_allowance_shift_reduces_tax(gross):
    old = compute(make_min_input("uk", gross_amount=gross, regime_params={"personal_allowance": 12_570}))
    new = compute(make_min_input("uk", gross_amount=gross, regime_params={"personal_allowance": 15_000}))
    assert old.band_tax - new.band_tax == (D("15000") - D("12570")) * D("0.20")
    assert old.extras == new.extras


def test_extras_use_gross_while_bands_use_taxable():
    r = compute(make_min_input("us", gross_amount=D("100000"), standard_deduction=D("14600")))
    assert r.taxable_base == D("85400")
    amounts = {e.label: e.amount for e in r.extras}
    assert amounts["Medicare (1.45%)"] == D("100000") * D("0.0145")


def test_monthly_input_is_annualized():
    r = compute(make_min_input("india-new", gross_amount=D("100000"), period="monthly"))
    assert r.gross_annual == D("1200000")
    assert r.band_tax == D("80000")


@pytest.mark.parametrize("regime_id", ["india-new", "india-old", "us", "uk"])
def test_zero_gross_has_zero_effective_rate(regime_id):
    r = compute(make_min_input(regime_id, gross_amount=D("0"), standard_deduction=D("-5000")))
    assert r.gross_annual == D("0")
    assert r.effective_rate == D("0")
    assert r.marginal_rate == D("0")
    assert r.slices == ()


def test_negative_gross_clamps_to_zero():
    r = compute(make_min_input("uk", gross_amount=D("-1000")))
    assert r.gross_annual == D("0")
    assert r.total_tax == D("0")


def test_deduction_sum_is_clamped_not_each_part():
    partial = compute(make_min_input("uk", standard_deduction=D("-5000"), other_deductions=D("8000")))
    assert partial.deductions == D("3000")
    negative = compute(make_min_input("uk", standard_deduction=D("-10000"), other_deductions=D("2000")))
    assert negative.deductions == D("0")
    assert negative.taxable_base == negative.gross_annual


def test_deductions_above_gross_leave_no_taxable_income():
    r = compute(make_min_input("india-new", gross_amount=D("100000"), standard_deduction=D("250000")))
    assert r.taxable_base == D("0")
    assert r.band_tax == D("0")
    assert r.net_annual == D("100000")


def test_aggregation_invariants_hold_for_examples():
    for in_ in make_regime_examples().values():
        r = compute(in_)
        assert sum((s.amount for s in r.slices), D("0")) == r.taxable_base
        assert sum((s.tax for s in r.slices), D("0")) == r.band_tax
        assert r.total_tax == r.band_tax + sum((e.amount for e in r.extras), D("0"))
        assert r.net_annual == max(D("0"), r.gross_annual - r.total_tax)


def test_compute_is_idempotent():
    in_ = make_min_input("us", gross_amount=D("123456.78"), regime_params={"filing": "married"})
    first = compute(in_)
    second = compute(in_)
    assert first == second
    assert first.model_dump_json() == second.model_dump_json()


def test_net_never_negative(monkeypatch):
    punitive = RegimeConfig(
        id="punitive",
        label="Punitive",
        currency="$",
        bands_fn=fixed_bands(band_table(((None, "1"),))),
        extras_fn=lambda taxable, gross, params: [UncappedRate("Levy", D("0.5")).item(taxable, gross)],
    )
    monkeypatch.setitem(dispatch._REGISTRY, "punitive", punitive)
    r = compute(make_min_input("punitive", gross_amount=D("1000")))
    assert r.total_tax == D("1500.0")
    assert r.net_annual == D("0")


def test_broken_parameter_bands_fail_fast(monkeypatch):
    broken = RegimeConfig(
        id="gappy",
        label="Gappy",
        currency="$",
        bands_fn=lambda params: band_table(((params.get("cap", 100), "0"),)),
        extras_fn=no_extras,
    )
    monkeypatch.setitem(dispatch._REGISTRY, "gappy", broken)
    with pytest.raises(BandPartitionError):
        compute(make_min_input("gappy"))


def test_unknown_regime_raises_from_compute():
    with pytest.raises(UnknownRegimeError):
        compute(make_min_input("atlantis"))


def test_compute_or_default_falls_back(monkeypatch):
    monkeypatch.setenv("SALARYTAX_DEFAULT_REGIME", "uk")
    result, fell_back = compute_or_default(make_min_input("atlantis", gross_amount=D("60000")))
    assert fell_back is True
    assert result.regime_id == "uk"
    assert result.total_tax == D("14642.6")


def test_compute_or_default_passes_known_regime_through():
    in_ = make_min_input("us")
    result, fell_back = compute_or_default(in_)
    assert fell_back is False
    assert result == compute(in_)


def test_default_input_uses_regime_defaults():
    in_ = default_input("us")
    assert in_ == ComputationInput(
        regime_id="us",
        gross_amount=D("1200000"),
        period="annual",
        regime_params={"filing": "single", "include_fica": True},
    )
    monthly = default_input("uk", D("4000"), "monthly")
    assert monthly.gross_amount == D("4000")
    assert monthly.period == "monthly"
    assert monthly.regime_params == {"include_ni": True, "personal_allowance": 12_570}
