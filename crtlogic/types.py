from __future__ import annotations
from typing import TypedDict, Literal, List, Optional, Union
from datetime import datetime

import pandas as pd
from pydantic import BaseModel

TOUBand = Literal["OP", "NP", "WDP", "WEDP"]
SeasonBlock = Literal["Jan-Mar", "Apr", "May-Jul", "Aug-Sep", "Oct", "Nov-Dec"]
DemandMethod = Literal["top3_peakbands", "top3_any"]
Resolution = Literal["hourly", "daily", "weekly", "monthly", "yearly"]


# Readings DataFrame
class ReadingsFrame(pd.DataFrame):
    """
    Hourly load readings.

    Expected:
      - DatetimeIndex named 't_start', tz-aware (local calendar zone)
      - Columns: ['kw', 'kwh'] as floats, NaN where the source value was unusable
    """

    @property
    def _constructor(self):
        return ReadingsFrame

    @property
    def kw(self) -> pd.Series:
        return self["kw"]

    @property
    def kwh(self) -> pd.Series:
        return self["kwh"]


class HourlyReading(TypedDict):
    timestamp: Union[str, datetime]
    kw: float
    kwh: float


class BandValues(TypedDict):
    OP: float
    NP: float
    WDP: float
    WEDP: float


class PricedHour(TypedDict):
    t_start: pd.Timestamp
    kw: float
    kwh: float
    mwh: float
    band: TOUBand
    block: SeasonBlock
    bst_ro_per_mwh: float
    bst_cost: float
    dv_cost: float
    tuos_cost: float
    energy_cost: float


class Peaks(TypedDict):
    dc_kw: float
    dnc_kw: float


class MonthlyBill(TypedDict):
    month: str  # YYYY-MM
    kwh_total: float
    mwh_total: float
    kwh_by_band: BandValues
    energy_cost_by_band: BandValues
    energy_cost_bst_omr: float
    energy_cost_dv_omr: float
    energy_cost_tuos_omr: float
    tou_energy_omr: float
    dc_kw: float
    dnc_kw: float
    capacity_cpr_omr: float
    capacity_ncpr_omr: float
    capacity_cgr_omr: float
    capacity_omr: float
    supply_omr: float
    subtotal_omr: float
    vat_omr: float
    total_bill_omr: float
    # configuration echoed back
    voltage_level: str
    dv_ro_per_mwh: float
    tuos_energy_adder_omr_per_mwh: float
    include_cgr: bool
    dc_method: str


class AggregatedPoint(TypedDict):
    label: str
    kwh: float
    omr: float


## Bill reductions
class BillTotals(TypedDict):
    total_kwh: float
    total_energy_omr: float
    total_capacity_omr: float
    total_supply_omr: float
    total_vat_omr: float
    total_bill_omr: float


class PeriodSummary(TypedDict):
    label: str
    months: List[str]
    totals: Optional[BillTotals]
    avg_dc_kw: float
    avg_dnc_kw: float


class PeakDemandPoint(TypedDict):
    month: str  # e.g. "Jul 2024"
    dc_kw: float
    dnc_kw: float
    capacity_omr: float
    capacity_cpr_omr: float
    capacity_ncpr_omr: float
    capacity_cgr_omr: float


## Calculation options
class TariffCalculationOptions(BaseModel):
    """Caller configuration for one bill calculation."""

    voltage_level: str  # checked against the rate table by the engine
    tuos_energy_adder_omr_per_mwh: float = 0.0
    include_cgr: bool = True
    dc_method: DemandMethod = "top3_peakbands"

    model_config = {"frozen": True}
