from __future__ import annotations
from typing import List, Optional, Sequence

from . import canon
from .types import BillTotals, MonthlyBill, PeakDemandPoint, PeriodSummary


def bill_totals(bills: Sequence[MonthlyBill]) -> Optional[BillTotals]:
    """Sum the headline components across months; None when there are no bills."""
    if not bills:
        return None
    return {
        "total_kwh": float(sum(b["kwh_total"] for b in bills)),
        "total_energy_omr": float(sum(b["tou_energy_omr"] for b in bills)),
        "total_capacity_omr": float(sum(b["capacity_omr"] for b in bills)),
        "total_supply_omr": float(sum(b["supply_omr"] for b in bills)),
        "total_vat_omr": float(sum(b["vat_omr"] for b in bills)),
        "total_bill_omr": float(sum(b["total_bill_omr"] for b in bills)),
    }


def period_summary(bills: Sequence[MonthlyBill], last_n: int = 4) -> PeriodSummary:
    """
    Roll up the trailing `last_n` months (the report's "season").

    Bills are expected in ascending month order, as returned by
    `billing.calculate_monthly_bills`.
    """
    recent = list(bills[-last_n:]) if last_n > 0 else []
    if len(recent) >= 2:
        label = f"{recent[0]['month']} to {recent[-1]['month']}"
    else:
        label = "Recent Season"

    n = len(recent)
    return {
        "label": label,
        "months": [b["month"] for b in recent],
        "totals": bill_totals(recent),
        "avg_dc_kw": float(sum(b["dc_kw"] for b in recent) / n) if n else 0.0,
        "avg_dnc_kw": float(sum(b["dnc_kw"] for b in recent) / n) if n else 0.0,
    }


def month_display_label(month: str) -> str:
    """'2024-07' -> 'Jul 2024'; other strings pass through."""
    if len(month) != 7:
        return month
    year, mm = month.split("-")
    return f"{canon.MONTH_ABBR[int(mm) - 1]} {year}"


def peak_demand_series(bills: Sequence[MonthlyBill]) -> List[PeakDemandPoint]:
    """Per-month demand and capacity charges, rounded for charting."""
    return [
        {
            "month": month_display_label(b["month"]),
            "dc_kw": float(round(b["dc_kw"])),
            "dnc_kw": float(round(b["dnc_kw"])),
            "capacity_omr": round(b["capacity_omr"], 2),
            "capacity_cpr_omr": round(b["capacity_cpr_omr"], 2),
            "capacity_ncpr_omr": round(b["capacity_ncpr_omr"], 2),
            "capacity_cgr_omr": round(b["capacity_cgr_omr"], 2),
        }
        for b in bills
    ]
