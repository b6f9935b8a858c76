from __future__ import annotations
import logging
from typing import List

import numpy as np
import pandas as pd

from . import canon, ingest, rates, utils, validate
from .config import EngineConfig, default_config
from .types import AggregatedPoint, ReadingsFrame, Resolution

logger = logging.getLogger(__name__)


def month_key(idx: pd.DatetimeIndex) -> np.ndarray:
    """YYYY-MM keys from the local calendar date of each timestamp."""
    return utils.month_label(idx).to_numpy(dtype=object)


def monthly_energy(priced: pd.DataFrame) -> pd.DataFrame:
    """
    Accumulate priced hours per calendar month.

    Returns:
        DataFrame, one row per month ascending, with columns:
          - 'month' (YYYY-MM), 'kwh_total'
          - 'kwh_<band>' for every TOU band
          - 'energy_cost_bst_omr', 'energy_cost_dv_omr', 'energy_cost_tuos_omr'
          - 'energy_cost_<band>' for every TOU band (bst + dv + tuos)
    """
    band_kwh_cols = [f"kwh_{b}" for b in canon.BANDS]
    band_cost_cols = [f"energy_cost_{b}" for b in canon.BANDS]
    cols = [
        "month",
        "kwh_total",
        *band_kwh_cols,
        "energy_cost_bst_omr",
        "energy_cost_dv_omr",
        "energy_cost_tuos_omr",
        *band_cost_cols,
    ]
    if priced.empty:
        return pd.DataFrame(columns=cols)

    s = priced.assign(month=month_key(pd.DatetimeIndex(priced.index)))

    totals = s.groupby("month", sort=True)[["kwh", "bst_cost", "dv_cost", "tuos_cost"]].sum()
    totals = totals.rename(
        columns={
            "kwh": "kwh_total",
            "bst_cost": "energy_cost_bst_omr",
            "dv_cost": "energy_cost_dv_omr",
            "tuos_cost": "energy_cost_tuos_omr",
        }
    )

    by_band = (
        s.groupby(["month", "band"])[["kwh", "energy_cost"]]
        .sum()
        .unstack("band")
        .reindex(columns=pd.MultiIndex.from_product([["kwh", "energy_cost"], canon.BANDS]))
        .fillna(0.0)
    )
    by_band.columns = [f"{metric}_{band}" for metric, band in by_band.columns]

    out = totals.join(by_band, how="left").fillna(0.0).reset_index()
    return out[cols]


## Resolution series for charts


def _bucket_keys(idx: pd.DatetimeIndex, resolution: str) -> tuple[np.ndarray, np.ndarray]:
    """(sort key, display label) per timestamp for a bucketed resolution."""
    if resolution == "daily":
        keys = np.asarray(idx.strftime("%Y-%m-%d"), dtype=object)
        return keys, keys
    if resolution == "weekly":
        keys = np.asarray(utils.week_start(idx).strftime("%Y-%m-%d"), dtype=object)
        return keys, np.array([f"W {k}" for k in keys], dtype=object)
    if resolution == "monthly":
        keys = month_key(idx)
        return keys, keys
    keys = np.asarray(idx.strftime("%Y"), dtype=object)
    return keys, keys


def _hourly_points(
    readings: ReadingsFrame, voltage_level: str, tuos_adder: float, cfg: EngineConfig
) -> List[AggregatedPoint]:
    # display window: the last N readings as supplied, not bucketed
    tail = readings.iloc[-cfg.hourly_window :] if cfg.hourly_window > 0 else readings.iloc[0:0]
    idx = pd.DatetimeIndex(tail.index)
    # unusable readings show as empty hours rather than gaps
    kwh = np.nan_to_num(tail["kwh"].to_numpy(dtype=float), nan=0.0)
    omr = kwh * rates.effective_rates(idx, voltage_level, tuos_adder, tz=cfg.tz)
    labels = idx.strftime("%m-%d %H:%M")
    return [
        {
            "label": str(label),
            "kwh": round(float(k), cfg.round_digits),
            "omr": round(float(o), cfg.round_digits),
        }
        for label, k, o in zip(labels, kwh, omr)
    ]


def aggregate(
    readings,
    resolution: Resolution,
    voltage_level: str,
    tuos_adder: float = 0.0,
    *,
    config: EngineConfig | None = None,
) -> List[AggregatedPoint]:
    """
    Energy and cost series at a chart resolution.

    - hourly: the last `hourly_window` readings in input order, labelled 'MM-DD HH:MM'
    - daily / weekly (Monday start, 'W YYYY-MM-DD') / monthly / yearly: summed buckets
      sorted ascending by key

    Cost per hour is kwh * effective OMR/kWh rate; values rounded per bucket.
    """
    cfg = config or default_config()
    validate.validate_resolution(resolution)
    # fail on a bad tier even when there is nothing to price
    rates.dist_ro_per_mwh(voltage_level)
    readings = ingest.as_readings(readings, tz=cfg.tz)

    if readings.empty:
        return []

    if resolution == "hourly":
        return _hourly_points(readings, voltage_level, tuos_adder, cfg)

    idx = pd.DatetimeIndex(readings.index)
    kwh = readings["kwh"].to_numpy(dtype=float)
    omr = kwh * rates.effective_rates(idx, voltage_level, tuos_adder, tz=cfg.tz)
    keys, labels = _bucket_keys(idx, resolution)

    d = pd.DataFrame({"key": keys, "label": labels, "kwh": kwh, "omr": omr})
    out = d.groupby(["key", "label"], sort=True)[["kwh", "omr"]].sum().reset_index()
    out[["kwh", "omr"]] = out[["kwh", "omr"]].round(cfg.round_digits)
    logger.debug("Aggregated %d readings into %d %s buckets", len(d), len(out), resolution)
    return [
        {"label": str(r.label), "kwh": float(r.kwh), "omr": float(r.omr)}
        for r in out.itertuples(index=False)
    ]
