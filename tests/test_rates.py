"""Rate table lookups and unit conversions."""

import pandas as pd
import pytest

from crtlogic import rates
from crtlogic.exceptions import UnknownVoltageLevel, PricingError


def test_dist_rate_by_voltage():
    assert rates.dist_ro_per_mwh("33kV") == 4.0
    assert rates.dist_ro_per_mwh("11kV") == 5.0
    assert rates.dist_ro_per_mwh("0.415kV") == 10.6


def test_unknown_voltage_level_raises():
    with pytest.raises(UnknownVoltageLevel) as exc:
        rates.dist_ro_per_mwh("132kV")
    assert "33kV" in str(exc.value)
    # part of the pricing error family and a ValueError
    assert isinstance(exc.value, PricingError)
    assert isinstance(exc.value, ValueError)


def test_capacity_conversion():
    assert rates.omr_per_kw_month_from_omr_per_mw_year(12000.0) == 1.0
    assert rates.capacity_omr_per_kw_month("CPR") == pytest.approx(7691 / 12000.0)
    assert rates.supply_omr_per_month() == pytest.approx(50 / 12.0)


def test_tables_are_read_only():
    with pytest.raises(TypeError):
        rates.DIST_BZ_PER_KWH["11kV"] = 1.0  # type: ignore[index]
    with pytest.raises(TypeError):
        rates.BST_MIS_2025_RO_PER_MWH["Apr"]["OP"] = 1.0  # type: ignore[index]


def test_bst_rate_by_block_and_band():
    assert rates.bst_rate(pd.Timestamp("2024-07-08T14:00:00")) == 36.0  # WDP May-Jul
    assert rates.bst_rate(pd.Timestamp("2024-07-06T14:00:00")) == 28.0  # WEDP May-Jul
    assert rates.bst_rate(pd.Timestamp("2024-08-10T23:00:00")) == 27.0  # NP Aug-Sep
    assert rates.bst_rate(pd.Timestamp("2024-01-10T09:00:00")) == 12.0  # OP Jan-Mar


def test_effective_rate():
    ts = pd.Timestamp("2024-07-08T14:00:00")
    assert rates.effective_rate_omr_per_kwh(ts, "11kV") == pytest.approx((36 + 5) / 1000.0)
    assert rates.effective_rate_omr_per_kwh(ts, "11kV", tuos_adder=2.0) == pytest.approx(0.043)


def test_effective_rates_vectorised(hourly_rng):
    vec = rates.effective_rates(hourly_rng, "33kV")
    scalar = [rates.effective_rate_omr_per_kwh(ts, "33kV") for ts in hourly_rng]
    assert list(vec) == pytest.approx(scalar)


def test_aware_timestamp_read_on_local_clock():
    # 10:00 UTC on Monday 8 July is 14:00 in Muscat (WDP)
    ts = pd.Timestamp("2024-07-08T10:00:00Z")
    assert rates.bst_rate(ts) == 36.0
    assert rates.effective_rate_omr_per_kwh(ts, "11kV") * 1000.0 == pytest.approx(41.0)
    # same instant read on a UTC wall clock is off-peak
    assert rates.bst_rate(ts, tz="UTC") == 19.0


def test_effective_rates_vectorised_aware_index(hourly_rng):
    idx = hourly_rng.tz_localize("Europe/London")
    vec = rates.effective_rates(idx, "11kV")
    scalar = [rates.effective_rate_omr_per_kwh(ts, "11kV") for ts in idx]
    assert list(vec) == pytest.approx(scalar)
    assert list(vec) == pytest.approx(list(rates.effective_rates(idx.tz_convert("Asia/Muscat"), "11kV")))
