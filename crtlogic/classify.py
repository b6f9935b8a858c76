"""Time-of-use band and season block classification.

Bands are decided on the local wall clock, first match wins:

  1. NP    22:00 -> 02:59 (wraps midnight), every day
  2. WEDP  13:00 -> 15:59 on Friday/Saturday
     WDP   13:00 -> 15:59 on other days
  3. OP    everything else (03:00–12:59, 16:00–21:59)
"""
from __future__ import annotations
import numpy as np
import pandas as pd

from . import canon, utils
from .exceptions import InvalidMonth
from .types import TOUBand, SeasonBlock


def _band_for(minutes: int, is_weekend: bool) -> TOUBand:
    if minutes >= canon.NIGHT_START_MIN or minutes <= canon.NIGHT_END_MIN:
        return "NP"
    if canon.MIDDAY_START_MIN <= minutes <= canon.MIDDAY_END_MIN:
        return "WEDP" if is_weekend else "WDP"
    return "OP"


def tou_band(ts, *, tz: str = canon.DEFAULT_TZ) -> TOUBand:
    """TOU band for one timestamp on the local wall clock of `tz` (naive = already local)."""
    ts = utils.to_local(ts, tz)
    return _band_for(ts.hour * 60 + ts.minute, ts.dayofweek in canon.WEEKEND_DAYS)


def tou_bands(idx: pd.DatetimeIndex, *, tz: str = canon.DEFAULT_TZ) -> np.ndarray:
    """Vectorised `tou_band` over a DatetimeIndex; returns an object array of band names."""
    idx = utils.local_index(idx, tz)
    minutes = utils.minutes_of_day(idx)
    weekend = utils.weekend_mask(idx)

    night = (minutes >= canon.NIGHT_START_MIN) | (minutes <= canon.NIGHT_END_MIN)
    midday = (minutes >= canon.MIDDAY_START_MIN) & (minutes <= canon.MIDDAY_END_MIN)

    # np.select honours condition order, matching the precedence above
    return np.select(
        [night, midday & weekend, midday],
        ["NP", "WEDP", "WDP"],
        default="OP",
    ).astype(object)


def month_block(month: int) -> SeasonBlock:
    """Season block for a calendar month (1-12)."""
    try:
        return canon.MONTH_BLOCKS[int(month)]  # type: ignore[return-value]
    except (KeyError, ValueError, TypeError):
        raise InvalidMonth(f"Invalid month: {month}") from None


def month_blocks(months) -> np.ndarray:
    m = np.asarray(months, dtype=int)
    bad = (m < 1) | (m > 12)
    if bad.any():
        raise InvalidMonth(f"Invalid month: {int(m[bad][0])}")
    lookup = np.array([None] + [canon.MONTH_BLOCKS[i] for i in range(1, 13)], dtype=object)
    return lookup[m]
