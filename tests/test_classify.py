"""TOU band and season block classification.

- test_band_examples: weekend/weekday midday peaks and the midnight-wrapping night band.
- test_bands_partition_every_minute: each minute of a full week maps to exactly one band.
- test_vectorised_matches_scalar*: tou_bands over an index agrees with tou_band, naive or aware.
- test_month_block_*: block lookup and the out-of-range guard.
"""

import numpy as np
import pandas as pd
import pytest

from crtlogic import classify, canon
from crtlogic.exceptions import InvalidMonth


@pytest.mark.parametrize(
    "ts, band",
    [
        ("2024-07-06T14:00:00", "WEDP"),  # Saturday
        ("2024-07-05T13:00:00", "WEDP"),  # Friday
        ("2024-07-08T14:00:00", "WDP"),  # Monday
        ("2024-07-07T15:59:00", "WDP"),  # Sunday is a working day
        ("2024-07-06T23:30:00", "NP"),
        ("2024-07-07T02:00:00", "NP"),
        ("2024-07-07T02:59:00", "NP"),
        ("2024-07-07T03:00:00", "OP"),
        ("2024-07-08T12:59:00", "OP"),
        ("2024-07-08T16:00:00", "OP"),
        ("2024-07-08T21:59:00", "OP"),
        ("2024-07-08T22:00:00", "NP"),
    ],
)
def test_band_examples(ts, band):
    assert classify.tou_band(pd.Timestamp(ts)) == band


def test_bands_partition_every_minute():
    """A week of minutes: weekdays never see WEDP, Fri/Sat never see WDP, no gaps."""
    idx = pd.date_range("2024-07-01", periods=7 * 24 * 60, freq="min")
    bands = classify.tou_bands(idx)
    assert len(bands) == len(idx)
    assert set(bands) <= set(canon.BANDS)

    weekend = np.isin(np.asarray(idx.dayofweek), canon.WEEKEND_DAYS)
    assert not (bands[~weekend] == "WEDP").any()
    assert not (bands[weekend] == "WDP").any()

    # per day: 300 NP minutes, 180 midday-peak minutes, the rest OP
    per_day = pd.Series(bands).groupby(np.asarray(idx.date)).value_counts().unstack(fill_value=0)
    assert (per_day["NP"] == 300).all()
    assert ((per_day.get("WDP", 0) + per_day.get("WEDP", 0)) == 180).all()
    assert (per_day["OP"] == 1440 - 300 - 180).all()


def test_vectorised_matches_scalar(hourly_rng):
    vec = classify.tou_bands(hourly_rng)
    scalar = [classify.tou_band(ts) for ts in hourly_rng]
    assert list(vec) == scalar


def test_vectorised_uses_local_wall_clock():
    idx = pd.DatetimeIndex(["2024-07-08T10:00:00Z"]).tz_convert(canon.DEFAULT_TZ)
    # 10:00 UTC is 14:00 in Muscat
    assert classify.tou_bands(idx)[0] == "WDP"


def test_scalar_reads_aware_timestamp_on_local_clock():
    assert classify.tou_band(pd.Timestamp("2024-07-08T10:00:00Z")) == "WDP"
    assert classify.tou_band(pd.Timestamp("2024-07-08T10:00:00Z"), tz="UTC") == "OP"


def test_vectorised_matches_scalar_aware_index(hourly_rng):
    idx = hourly_rng.tz_localize("Europe/London")
    vec = classify.tou_bands(idx)
    scalar = [classify.tou_band(ts) for ts in idx]
    assert list(vec) == scalar
    assert list(vec) == list(classify.tou_bands(idx.tz_convert(canon.DEFAULT_TZ)))


@pytest.mark.parametrize(
    "month, block",
    [(1, "Jan-Mar"), (3, "Jan-Mar"), (4, "Apr"), (5, "May-Jul"), (7, "May-Jul"),
     (8, "Aug-Sep"), (9, "Aug-Sep"), (10, "Oct"), (11, "Nov-Dec"), (12, "Nov-Dec")],
)
def test_month_block_lookup(month, block):
    assert classify.month_block(month) == block


@pytest.mark.parametrize("month", [0, 13, -1])
def test_month_block_rejects_out_of_range(month):
    with pytest.raises(InvalidMonth):
        classify.month_block(month)
    with pytest.raises(InvalidMonth):
        classify.month_blocks([1, month])


def test_month_blocks_vectorised():
    assert list(classify.month_blocks(range(1, 13))) == [classify.month_block(m) for m in range(1, 13)]
