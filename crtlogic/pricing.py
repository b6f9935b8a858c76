from __future__ import annotations
import logging
from typing import Any, Mapping, Union

import pandas as pd

from . import canon, classify, rates, utils, validate
from .config import resolve_options
from .types import PricedHour, ReadingsFrame, TariffCalculationOptions

logger = logging.getLogger(__name__)

PRICED_COLS = [
    "kw",
    "kwh",
    "mwh",
    "band",
    "block",
    "bst_ro_per_mwh",
    "bst_cost",
    "dv_cost",
    "tuos_cost",
    "energy_cost",
]

OptionsLike = Union[TariffCalculationOptions, Mapping[str, Any], None]


def _as_float(v) -> float:
    try:
        return float(v)
    except (TypeError, ValueError):
        return float("nan")


def price_hour(
    reading: Mapping[str, Any], options: OptionsLike = None, *, tz: str = canon.DEFAULT_TZ
) -> PricedHour:
    """
    Price a single hourly reading ({timestamp, kw, kwh}).

    bst = mwh * BST[block][band], dv = mwh * distribution(voltage),
    tuos = mwh * adder; energy_cost is their sum.
    """
    opts = resolve_options(options)
    dv_rate = rates.dist_ro_per_mwh(opts.voltage_level)

    ts = utils.to_local(reading["timestamp"], tz)
    kwh = _as_float(reading.get("kwh"))
    mwh = kwh / 1000.0

    band = classify.tou_band(ts, tz=tz)
    block = classify.month_block(ts.month)
    bst = float(rates.BST_MIS_2025_RO_PER_MWH[block][band])

    bst_cost = mwh * bst
    dv_cost = mwh * dv_rate
    tuos_cost = mwh * opts.tuos_energy_adder_omr_per_mwh
    return {
        "t_start": ts,
        "kw": _as_float(reading.get("kw")),
        "kwh": kwh,
        "mwh": mwh,
        "band": band,
        "block": block,
        "bst_ro_per_mwh": bst,
        "bst_cost": bst_cost,
        "dv_cost": dv_cost,
        "tuos_cost": tuos_cost,
        "energy_cost": bst_cost + dv_cost + tuos_cost,
    }


def price_hours(
    readings: ReadingsFrame, options: OptionsLike = None, *, tz: str = canon.DEFAULT_TZ
) -> pd.DataFrame:
    """
    Price every reading in a ReadingsFrame.

    Returns the frame (same instants and order, on the wall clock of `tz`) with columns:
      kw, kwh, mwh, band, block, bst_ro_per_mwh, bst_cost, dv_cost, tuos_cost, energy_cost

    Non-finite kwh stays NaN through the cost columns, so monthly sums skip it.
    """
    opts = resolve_options(options)
    # configuration errors surface before any data is touched
    dv_rate = rates.dist_ro_per_mwh(opts.voltage_level)
    validate.assert_readings(readings)

    idx = utils.local_index(readings.index, tz)
    bands = classify.tou_bands(idx, tz=tz)
    blocks = classify.month_blocks(idx.month)
    bst = rates.bst_lookup(blocks, bands)

    kwh = readings["kwh"].to_numpy(dtype=float)
    mwh = kwh / 1000.0

    out = pd.DataFrame(
        {
            "kw": readings["kw"].to_numpy(dtype=float),
            "kwh": kwh,
            "mwh": mwh,
            "band": bands,
            "block": blocks,
            "bst_ro_per_mwh": bst,
            "bst_cost": mwh * bst,
            "dv_cost": mwh * dv_rate,
            "tuos_cost": mwh * opts.tuos_energy_adder_omr_per_mwh,
        },
        index=idx,
    )
    out["energy_cost"] = out["bst_cost"] + out["dv_cost"] + out["tuos_cost"]
    logger.debug("Priced %d hours at %s", len(out), opts.voltage_level)
    return out[PRICED_COLS]
