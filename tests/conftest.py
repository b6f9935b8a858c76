import numpy as np
import pandas as pd
import pytest

TZ = "Asia/Muscat"


@pytest.fixture
def hourly_rng():
    # Two weeks from Monday 2024-07-01 (May–Jul block)
    return pd.date_range("2024-07-01", periods=24 * 14, freq="h")


@pytest.fixture
def readings_df(hourly_rng):
    # Daily load shape peaking mid-afternoon, constant energy per hour
    hours = np.asarray(hourly_rng.hour, dtype=float)
    kw = 200.0 + 100.0 * np.exp(-((hours - 14.0) ** 2) / 8.0)
    return pd.DataFrame({"timestamp": hourly_rng, "kw": kw, "kwh": kw})


@pytest.fixture
def two_month_records():
    # Last week of July plus first week of August, as plain records
    rng = pd.date_range("2024-07-25", "2024-08-07 23:00", freq="h")
    return [
        {"timestamp": ts.strftime("%Y-%m-%dT%H:%M:%S"), "kw": 100.0 + ts.hour, "kwh": 100.0 + ts.hour}
        for ts in rng
    ]


@pytest.fixture
def may_half_op_half_np():
    # 720 readings of 500 kWh in May: 360 at 05:xx (OP), 360 at 23:xx (NP)
    recs = []
    for day in range(1, 31):
        for minute in range(12):
            recs.append({"timestamp": f"2024-05-{day:02d}T05:{minute:02d}:00", "kw": 500.0, "kwh": 500.0})
            recs.append({"timestamp": f"2024-05-{day:02d}T23:{minute:02d}:00", "kw": 500.0, "kwh": 500.0})
    return recs
