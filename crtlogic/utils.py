# crtlogic/utils.py
from __future__ import annotations
import numpy as np
import pandas as pd
from zoneinfo import ZoneInfo
from typing import cast

from . import canon
from .types import ReadingsFrame


def ensure_tz_aware_index(df: pd.DataFrame, tz: str) -> pd.DataFrame:
    """
    Localise a naive index as wall-clock time in `tz`, or convert an aware one.
    Wall-clock times that do not exist (or are ambiguous) in `tz` become NaT.
    """
    if df.index.name != canon.INDEX_NAME:
        raise ValueError(f"Index must be '{canon.INDEX_NAME}', got {df.index.name}")
    idx = pd.DatetimeIndex(df.index)
    if idx.tz is None:
        idx = idx.tz_localize(ZoneInfo(tz), ambiguous="NaT", nonexistent="NaT")
    else:
        idx = idx.tz_convert(ZoneInfo(tz))
    idx.name = canon.INDEX_NAME
    return df.set_axis(idx, axis=0)


def to_local(ts, tz: str = canon.DEFAULT_TZ) -> pd.Timestamp:
    """Single timestamp on the local wall clock of `tz`."""
    ts = pd.Timestamp(ts)
    return ts.tz_localize(ZoneInfo(tz)) if ts.tz is None else ts.tz_convert(ZoneInfo(tz))


def local_index(idx: pd.DatetimeIndex, tz: str = canon.DEFAULT_TZ) -> pd.DatetimeIndex:
    """Aware index converted to the wall clock of `tz`; a naive index is taken as already local."""
    idx = pd.DatetimeIndex(idx)
    return idx if idx.tz is None else idx.tz_convert(ZoneInfo(tz))


def minutes_of_day(idx: pd.DatetimeIndex) -> np.ndarray:
    """Local wall-clock minutes since midnight (hour*60 + minute)."""
    return np.asarray(idx.hour, dtype=int) * 60 + np.asarray(idx.minute, dtype=int)


def weekend_mask(idx: pd.DatetimeIndex) -> np.ndarray:
    """True where the local date falls on the Oman weekend (Fri/Sat)."""
    dow = np.asarray(idx.dayofweek)  # Mon=0..Sun=6
    return np.isin(dow, canon.WEEKEND_DAYS)


def month_label(ts: pd.Series | pd.DatetimeIndex) -> pd.Series:
    """Return YYYY-MM month labels from a datetime-like Series/Index."""
    if isinstance(ts, pd.DatetimeIndex):
        return pd.Series(ts.strftime("%Y-%m"), index=ts)
    return ts.dt.strftime("%Y-%m")


def week_start(idx: pd.DatetimeIndex) -> pd.DatetimeIndex:
    """Monday (local midnight) of the ISO week each timestamp falls in."""
    days = pd.to_timedelta(np.asarray(idx.dayofweek), unit="D")
    return (idx - days).normalize()


def finite_values(s: pd.Series) -> np.ndarray:
    """Float array of the finite entries of `s` (NaN and +/-inf dropped)."""
    arr = pd.to_numeric(s, errors="coerce").to_numpy(dtype=float)
    return arr[np.isfinite(arr)]


def empty_readings_frame(tz: str = canon.DEFAULT_TZ) -> ReadingsFrame:
    """
    Return an empty ReadingsFrame with the correct tz-aware index and required columns.
    """
    idx = pd.DatetimeIndex([], tz=ZoneInfo(tz), name=canon.INDEX_NAME)
    out = pd.DataFrame({c: pd.Series(dtype=float) for c in canon.REQUIRED_COLS}, index=idx)
    out.__class__ = ReadingsFrame
    return cast(ReadingsFrame, out)
