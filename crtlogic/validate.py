from __future__ import annotations
import numpy as np
import pandas as pd
from typing import cast

from . import canon, exceptions
from .types import ReadingsFrame


def assert_readings(df: pd.DataFrame) -> None:
    if df.index.name != canon.INDEX_NAME:
        raise exceptions.CanonError(f"Index must be '{canon.INDEX_NAME}'.")
    if not isinstance(df.index, pd.DatetimeIndex):
        raise exceptions.CanonError("Index must be a DatetimeIndex.")
    if df.index.tz is None:
        raise exceptions.CanonError("Index must be tz-aware.")
    if df.index.hasnans:
        raise exceptions.CanonError("Index must not contain NaT timestamps.")
    for col in canon.REQUIRED_COLS:
        if col not in df.columns:
            raise exceptions.CanonError(f"Missing required column '{col}'.")


def clean_readings(df: pd.DataFrame) -> ReadingsFrame:
    """
    Validated readings: non-finite kw/kwh become NaN so that every downstream
    sum/max skips them while the rest of the hour still counts.
    """
    assert_readings(df)
    out = df[list(canon.REQUIRED_COLS)].astype(float)
    out = out.where(np.isfinite(out.to_numpy()), np.nan)
    out.__class__ = ReadingsFrame
    return cast(ReadingsFrame, out)


def validate_resolution(resolution: str) -> str:
    exceptions.require(
        resolution in canon.RESOLUTIONS,
        f"resolution must be one of {', '.join(canon.RESOLUTIONS)}",
        exceptions.PricingError,
    )
    return resolution


def validate_demand_method(method: str) -> str:
    exceptions.require(
        method in canon.DEMAND_METHODS,
        f"dc_method must be one of {', '.join(canon.DEMAND_METHODS)}",
        exceptions.PricingError,
    )
    return method
