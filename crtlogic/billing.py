from __future__ import annotations
import logging
from typing import Any, Iterable, List, Mapping, Union

import pandas as pd

from . import canon, demand, ingest, pricing, rates, transform
from .config import EngineConfig, default_config, resolve_options
from .types import (
    BandValues,
    HourlyReading,
    MonthlyBill,
    Peaks,
    ReadingsFrame,
    TariffCalculationOptions,
)

logger = logging.getLogger(__name__)

ReadingsLike = Union[ReadingsFrame, pd.DataFrame, Iterable[HourlyReading]]
OptionsLike = Union[TariffCalculationOptions, Mapping[str, Any], None]


def _band_values(row: Mapping[str, Any], prefix: str) -> BandValues:
    return {b: float(row.get(f"{prefix}_{b}", 0.0)) for b in canon.BANDS}  # type: ignore[return-value]


def assemble_bill(
    month: str,
    energy: Mapping[str, Any],
    peaks: Peaks,
    options: OptionsLike = None,
) -> MonthlyBill:
    """
    Build one month's bill from its energy totals (a `transform.monthly_energy` row)
    and its peak demand.

    Capacity rates are converted OMR/MW-year -> OMR/kW-month; CPR and CGR bill
    against DC, NCPR against DNC. Supply is one twelfth of the annual charge.
    """
    opts = resolve_options(options)
    dv_rate = rates.dist_ro_per_mwh(opts.voltage_level)

    kwh_total = float(energy.get("kwh_total", 0.0))
    cost_bst = float(energy.get("energy_cost_bst_omr", 0.0))
    cost_dv = float(energy.get("energy_cost_dv_omr", 0.0))
    cost_tuos = float(energy.get("energy_cost_tuos_omr", 0.0))
    tou_energy = cost_bst + cost_dv + cost_tuos

    dc_kw = float(peaks["dc_kw"])
    dnc_kw = float(peaks["dnc_kw"])

    capacity_cpr = dc_kw * rates.capacity_omr_per_kw_month("CPR")
    capacity_ncpr = dnc_kw * rates.capacity_omr_per_kw_month("NCPR")
    capacity_cgr = dc_kw * rates.capacity_omr_per_kw_month("CGR") if opts.include_cgr else 0.0
    capacity_total = capacity_cpr + capacity_ncpr + capacity_cgr

    supply = rates.supply_omr_per_month()

    subtotal = tou_energy + capacity_total + supply
    vat = subtotal * rates.VAT_RATE

    return {
        "month": month,
        "kwh_total": kwh_total,
        "mwh_total": kwh_total / 1000.0,
        "kwh_by_band": _band_values(energy, "kwh"),
        "energy_cost_by_band": _band_values(energy, "energy_cost"),
        "energy_cost_bst_omr": cost_bst,
        "energy_cost_dv_omr": cost_dv,
        "energy_cost_tuos_omr": cost_tuos,
        "tou_energy_omr": tou_energy,
        "dc_kw": dc_kw,
        "dnc_kw": dnc_kw,
        "capacity_cpr_omr": capacity_cpr,
        "capacity_ncpr_omr": capacity_ncpr,
        "capacity_cgr_omr": capacity_cgr,
        "capacity_omr": capacity_total,
        "supply_omr": supply,
        "subtotal_omr": subtotal,
        "vat_omr": vat,
        "total_bill_omr": subtotal + vat,
        "voltage_level": opts.voltage_level,
        "dv_ro_per_mwh": dv_rate,
        "tuos_energy_adder_omr_per_mwh": float(opts.tuos_energy_adder_omr_per_mwh),
        "include_cgr": bool(opts.include_cgr),
        "dc_method": opts.dc_method,
    }


def calculate_monthly_bills(
    readings: ReadingsLike,
    options: OptionsLike = None,
    *,
    config: EngineConfig | None = None,
) -> List[MonthlyBill]:
    """
    Itemised CRT bill for every calendar month present in `readings`, ascending.

    `readings` may be a ReadingsFrame, a DataFrame with timestamp/kw/kwh columns,
    or an iterable of {timestamp, kw, kwh} records in any order.
    """
    cfg = config or default_config()
    opts = resolve_options(options)
    # fail fast on configuration before touching data
    rates.dist_ro_per_mwh(opts.voltage_level)

    df = ingest.as_readings(readings, tz=cfg.tz)
    if df.empty:
        return []

    priced = pricing.price_hours(df, opts, tz=cfg.tz)
    energy = transform.monthly_energy(priced)
    peaks = demand.monthly_peaks(priced, opts.dc_method, cfg.top_n).set_index("month")

    bills = [
        assemble_bill(
            row["month"],
            row,
            {
                "dc_kw": float(peaks.at[row["month"], "dc_kw"]),
                "dnc_kw": float(peaks.at[row["month"], "dnc_kw"]),
            },
            opts,
        )
        for row in energy.to_dict(orient="records")
    ]
    bills.sort(key=lambda b: b["month"])
    logger.debug("Assembled %d monthly bills from %d readings", len(bills), len(df))
    return bills


def monthly_bills_frame(
    readings: ReadingsLike,
    options: OptionsLike = None,
    *,
    config: EngineConfig | None = None,
) -> pd.DataFrame:
    """Tabular form of `calculate_monthly_bills`; band dicts become kwh_<band> / energy_cost_<band>."""
    bills = calculate_monthly_bills(readings, options, config=config)
    records = []
    for bill in bills:
        rec: dict[str, Any] = {
            k: v for k, v in bill.items() if k not in ("kwh_by_band", "energy_cost_by_band")
        }
        for b in canon.BANDS:
            rec[f"kwh_{b}"] = bill["kwh_by_band"][b]
            rec[f"energy_cost_{b}"] = bill["energy_cost_by_band"][b]
        records.append(rec)
    return pd.DataFrame.from_records(records)
