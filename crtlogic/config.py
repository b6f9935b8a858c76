from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Union

from . import canon
from .types import TariffCalculationOptions


@dataclass(frozen=True)
class EngineConfig:
    # Local calendar zone used for banding and month/week grouping
    tz: str = canon.DEFAULT_TZ

    # Coincident demand proxy: mean of the N largest readings
    top_n: int = 3

    # Hourly chart window (one week of hours)
    hourly_window: int = 168

    # Decimal places for chart series values
    round_digits: int = 2


def default_config() -> EngineConfig:
    return EngineConfig()


def default_options() -> TariffCalculationOptions:
    """Options the dashboard bills with: 11kV, CGR included, peak-band DC."""
    return TariffCalculationOptions(
        voltage_level="11kV",
        include_cgr=True,
        dc_method="top3_peakbands",
    )


def resolve_options(
    options: Optional[Union[TariffCalculationOptions, Mapping[str, Any]]],
) -> TariffCalculationOptions:
    if options is None:
        return default_options()
    if isinstance(options, TariffCalculationOptions):
        return options
    return TariffCalculationOptions(**dict(options))
