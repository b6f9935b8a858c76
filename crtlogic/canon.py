from __future__ import annotations
from typing import Final

INDEX_NAME: Final[str] = "t_start"
REQUIRED_COLS: Final[list[str]] = ["kw", "kwh"]
DEFAULT_TZ: Final[str] = "Asia/Muscat"
COMMON_TIMESTAMP_NAMES = ("t_start", "timestamp", "time", "ts", "datetime", "date")

# TOU bands, in reporting order
BANDS: Final[tuple[str, ...]] = ("OP", "NP", "WDP", "WEDP")
PEAK_BANDS: Final[tuple[str, ...]] = ("WDP", "WEDP")

SEASON_BLOCKS: Final[tuple[str, ...]] = (
    "Jan-Mar",
    "Apr",
    "May-Jul",
    "Aug-Sep",
    "Oct",
    "Nov-Dec",
)

# month number -> season block
MONTH_BLOCKS: Final[dict[int, str]] = {
    1: "Jan-Mar",
    2: "Jan-Mar",
    3: "Jan-Mar",
    4: "Apr",
    5: "May-Jul",
    6: "May-Jul",
    7: "May-Jul",
    8: "Aug-Sep",
    9: "Aug-Sep",
    10: "Oct",
    11: "Nov-Dec",
    12: "Nov-Dec",
}

# Minutes-of-day bounds, inclusive
NIGHT_START_MIN: Final[int] = 22 * 60  # 22:00 -> midnight
NIGHT_END_MIN: Final[int] = 2 * 60 + 59  # midnight -> 02:59
MIDDAY_START_MIN: Final[int] = 13 * 60
MIDDAY_END_MIN: Final[int] = 15 * 60 + 59

# Oman weekend: Friday, Saturday (Mon=0..Sun=6)
WEEKEND_DAYS: Final[tuple[int, ...]] = (4, 5)

DEMAND_METHODS: Final[tuple[str, ...]] = ("top3_peakbands", "top3_any")
RESOLUTIONS: Final[tuple[str, ...]] = ("hourly", "daily", "weekly", "monthly", "yearly")

MONTH_ABBR: Final[tuple[str, ...]] = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)
