"""
Oman 2025 MIS cost-reflective tariff rate tables.

Energy (BST) rates are RO per MWh by season block and TOU band. Distribution
rates are published in bz/kWh, which is numerically the same as RO/MWh.
Capacity rates are OMR per MW per year.
"""
from __future__ import annotations
from types import MappingProxyType
from typing import Final, Mapping

import numpy as np
import pandas as pd

from . import canon, classify, utils
from .exceptions import UnknownVoltageLevel

BST_MIS_2025_RO_PER_MWH: Final[Mapping[str, Mapping[str, float]]] = MappingProxyType(
    {
        "Jan-Mar": MappingProxyType({"OP": 12, "NP": 12, "WDP": 12, "WEDP": 12}),
        "Apr": MappingProxyType({"OP": 16, "NP": 16, "WDP": 16, "WEDP": 16}),
        "May-Jul": MappingProxyType({"OP": 19, "NP": 46, "WDP": 36, "WEDP": 28}),
        "Aug-Sep": MappingProxyType({"OP": 17, "NP": 27, "WDP": 20, "WEDP": 20}),
        "Oct": MappingProxyType({"OP": 16, "NP": 16, "WDP": 16, "WEDP": 16}),
        "Nov-Dec": MappingProxyType({"OP": 12, "NP": 12, "WDP": 12, "WEDP": 12}),
    }
)

DIST_BZ_PER_KWH: Final[Mapping[str, float]] = MappingProxyType(
    {
        "33kV": 4.0,
        "11kV": 5.0,
        "0.415kV": 10.6,
    }
)

CAPACITY_OMR_PER_MW_YEAR: Final[Mapping[str, float]] = MappingProxyType(
    {
        "CGR": 6775,
        "CPR": 7691,
        "NCPR": 1839,
    }
)

SUPPLY_CHARGE_OMR_PER_YEAR: Final[float] = 50
VAT_RATE: Final[float] = 0.05


def dist_ro_per_mwh(voltage_level: str) -> float:
    """Distribution rate in RO/MWh for the given voltage level."""
    try:
        return float(DIST_BZ_PER_KWH[voltage_level])
    except (KeyError, TypeError):
        raise UnknownVoltageLevel(
            f"voltage_level must be one of {', '.join(DIST_BZ_PER_KWH)}, got {voltage_level!r}"
        ) from None


def omr_per_kw_month_from_omr_per_mw_year(x_omr_per_mw_year: float) -> float:
    # 1000 kW/MW x 12 months
    return x_omr_per_mw_year / 12000.0


def capacity_omr_per_kw_month(component: str) -> float:
    return omr_per_kw_month_from_omr_per_mw_year(CAPACITY_OMR_PER_MW_YEAR[component])


def supply_omr_per_month() -> float:
    return SUPPLY_CHARGE_OMR_PER_YEAR / 12.0


def bst_rate(ts, *, tz: str = canon.DEFAULT_TZ) -> float:
    ts = utils.to_local(ts, tz)
    return float(BST_MIS_2025_RO_PER_MWH[classify.month_block(ts.month)][classify.tou_band(ts, tz=tz)])


def bst_lookup(blocks: np.ndarray, bands: np.ndarray) -> np.ndarray:
    """BST RO/MWh for paired arrays of season blocks and bands."""
    table = {
        (blk, band): float(BST_MIS_2025_RO_PER_MWH[blk][band])
        for blk in canon.SEASON_BLOCKS
        for band in canon.BANDS
    }
    return np.fromiter(
        (table[(blk, band)] for blk, band in zip(blocks, bands)),
        dtype=float,
        count=len(bands),
    )


def bst_rates(idx: pd.DatetimeIndex, *, tz: str = canon.DEFAULT_TZ) -> np.ndarray:
    idx = utils.local_index(idx, tz)
    return bst_lookup(classify.month_blocks(idx.month), classify.tou_bands(idx, tz=tz))


def effective_rate_omr_per_kwh(
    ts, voltage_level: str, tuos_adder: float = 0.0, *, tz: str = canon.DEFAULT_TZ
) -> float:
    """Effective OMR/kWh for one hour: (BST + distribution + adder) RO/MWh / 1000."""
    return (bst_rate(ts, tz=tz) + dist_ro_per_mwh(voltage_level) + tuos_adder) / 1000.0


def effective_rates(
    idx: pd.DatetimeIndex,
    voltage_level: str,
    tuos_adder: float = 0.0,
    *,
    tz: str = canon.DEFAULT_TZ,
) -> np.ndarray:
    dv = dist_ro_per_mwh(voltage_level)
    return (bst_rates(idx, tz=tz) + dv + tuos_adder) / 1000.0
