from __future__ import annotations
import numpy as np
import pandas as pd

from . import canon, transform, utils, validate
from .types import DemandMethod, Peaks


def top_n_mean(values, n: int = 3) -> float:
    """Mean of the n largest strictly positive finite values; 0.0 when there are none."""
    arr = utils.finite_values(pd.Series(values, dtype=float))
    arr = arr[arr > 0]
    if arr.size == 0:
        return 0.0
    top = np.sort(arr)[::-1][:n]
    return float(top.mean())


def coincident_kw(group: pd.DataFrame, method: DemandMethod, n: int = 3) -> float:
    """
    Coincident demand proxy (DC) for one month of priced hours.

    'top3_peakbands' averages the n largest kW readings in WDP/WEDP hours and
    only falls back to all hours when no peak-band hour has positive demand.
    'top3_any' uses all hours directly.
    """
    validate.validate_demand_method(method)
    if method == "top3_peakbands":
        in_peak = group["band"].isin(canon.PEAK_BANDS)
        dc = top_n_mean(group.loc[in_peak, "kw"], n)
        if dc > 0:
            return dc
    return top_n_mean(group["kw"], n)


def non_coincident_kw(group: pd.DataFrame) -> float:
    """Non-coincident demand (DNC): the month's maximum finite kW, 0.0 if none."""
    arr = utils.finite_values(group["kw"])
    return float(arr.max()) if arr.size else 0.0


def estimate_peaks(group: pd.DataFrame, method: DemandMethod = "top3_peakbands", n: int = 3) -> Peaks:
    return {
        "dc_kw": coincident_kw(group, method, n),
        "dnc_kw": non_coincident_kw(group),
    }


def monthly_peaks(priced: pd.DataFrame, method: DemandMethod = "top3_peakbands", n: int = 3) -> pd.DataFrame:
    """
    Peak demand per calendar month.

    Output:
        DataFrame with columns ['month', 'dc_kw', 'dnc_kw'], ascending by month
    """
    validate.validate_demand_method(method)
    if priced.empty:
        return pd.DataFrame(columns=["month", "dc_kw", "dnc_kw"])

    months = transform.month_key(pd.DatetimeIndex(priced.index))
    rows = [
        {"month": month, **estimate_peaks(g, method, n)}
        for month, g in priced.groupby(months, sort=True)
    ]
    return pd.DataFrame(rows, columns=["month", "dc_kw", "dnc_kw"])
