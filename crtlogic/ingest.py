from __future__ import annotations
import logging
from typing import Iterable, Mapping, Any, cast

import pandas as pd

from . import canon, utils, validate
from .exceptions import IngestError
from .types import ReadingsFrame

logger = logging.getLogger(__name__)


def _auto_rename(df: pd.DataFrame) -> pd.DataFrame:
    new = df.copy()

    # 1) If index is already datetime-like, just name it t_start
    if isinstance(new.index, pd.DatetimeIndex):
        new.index.name = canon.INDEX_NAME
    else:
        # 2) Otherwise find a timestamp column and set as index
        cols = {str(c).lower(): c for c in new.columns}
        tcol = next((cols[k] for k in canon.COMMON_TIMESTAMP_NAMES if k in cols), None)
        if tcol is None:
            raise IngestError(
                "No timestamp column found and index is not datetime. "
                "Expected one of: t_start, timestamp, time, ts, datetime, date."
            )
        parsed = pd.to_datetime(new[tcol], errors="coerce")
        new = new.drop(columns=[tcol]).set_index(pd.DatetimeIndex(parsed, name=canon.INDEX_NAME))

    # 3) Standardise column names (kW / kWh / power / energy)
    lower = {str(c).lower(): c for c in new.columns}
    renames = {}
    if "kw" not in new.columns:
        for candidate in ("kw", "power", "demand"):
            if candidate in lower:
                renames[lower[candidate]] = "kw"
                break
    if "kwh" not in new.columns:
        for candidate in ("kwh", "energy", "consumption", "value"):
            if candidate in lower:
                renames[lower[candidate]] = "kwh"
                break
    return new.rename(columns=renames)


def from_dataframe(df: pd.DataFrame, *, tz: str = canon.DEFAULT_TZ) -> ReadingsFrame:
    """
    Normalise a DataFrame of hourly readings:
      - index: tz-aware 't_start' on the local wall clock of `tz`
      - columns: kw, kwh (float; unparseable values become NaN)

    Input order is preserved. Rows whose timestamp cannot be parsed are dropped.
    """
    df = _auto_rename(df)
    for col in canon.REQUIRED_COLS:
        if col not in df.columns:
            raise IngestError(f"Missing required column: {col}")

    df = df[list(canon.REQUIRED_COLS)].copy()
    for col in canon.REQUIRED_COLS:
        df[col] = pd.to_numeric(df[col], errors="coerce").astype(float)

    df.index.name = canon.INDEX_NAME
    df = utils.ensure_tz_aware_index(df, tz)

    bad_ts = df.index.isna()
    if bad_ts.any():
        logger.warning("Dropping %d reading(s) with unusable timestamps", int(bad_ts.sum()))
        df = df[~bad_ts]

    out = validate.clean_readings(df)
    logger.debug("Ingested %d hourly readings", len(out))
    return out


def from_records(
    records: Iterable[Mapping[str, Any]], *, tz: str = canon.DEFAULT_TZ
) -> ReadingsFrame:
    """Build a ReadingsFrame from HourlyReading-like mappings ({timestamp, kw, kwh})."""
    rows = list(records)
    if not rows:
        return utils.empty_readings_frame(tz)
    return from_dataframe(pd.DataFrame.from_records(rows), tz=tz)


def as_readings(readings, *, tz: str = canon.DEFAULT_TZ) -> ReadingsFrame:
    """Accept a ReadingsFrame, a raw DataFrame or an iterable of records."""
    if isinstance(readings, ReadingsFrame):
        validate.assert_readings(readings)
        return validate.clean_readings(utils.ensure_tz_aware_index(readings, tz))
    if isinstance(readings, pd.DataFrame):
        if readings.empty and not isinstance(readings.index, pd.DatetimeIndex):
            return utils.empty_readings_frame(tz)
        return from_dataframe(readings, tz=tz)
    return from_records(cast(Iterable[Mapping[str, Any]], readings), tz=tz)
