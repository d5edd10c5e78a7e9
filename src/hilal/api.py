from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .baseline.factory import make_baseline
from .baseline.specs import ALL_SPECS, BaselineSpec
from .baseline.table import BaselineTable
from .calendar import HijriCalendar
from .config import Settings
from .core.types import HijriDate

logger = logging.getLogger(__name__)


def list_baselines() -> List[str]:
    return sorted(ALL_SPECS)

def load_baseline(name: str = "tabular", *, start_year: Optional[int] = None, end_year: Optional[int] = None) -> BaselineTable:
    spec = BaselineSpec.like(name)
    if start_year is not None:
        spec = spec.tweak(start_year=start_year)
    if end_year is not None:
        spec = spec.tweak(end_year=end_year)
    return make_baseline(spec)

def open_calendar(settings: Optional[Settings] = None, **kwargs: Any) -> HijriCalendar:
    """
    New editing session. Keyword arguments are Settings fields and are only
    accepted when no Settings instance is passed.
    """
    if settings is None:
        settings = Settings.from_mapping(kwargs)
    elif kwargs:
        raise TypeError("Pass either a Settings instance or keyword settings, not both")
    return HijriCalendar.from_settings(settings)

def save_adjustments(cal: HijriCalendar, path: Union[str, Path]) -> None:
    Path(path).write_text(cal.adjustment_data(as_text=True) + "\n", encoding="utf-8")
    logger.info("Wrote %d adjustments to %s", len(cal.store), path)

# ============================================================
# Month-level listing
# ============================================================

def month_info(cal: HijriCalendar, year: int, month: int) -> Dict[str, Any]:
    off = cal.baseline.require(month, year)
    start = cal.view.value_at(off)
    default = cal.baseline.value_at(off)
    return {
        "year": year,
        "month": month,
        "offset": off,
        "start": start,
        "default_start": default,
        "adjusted": start != default,
        "days": cal.view.month_length(off),
        "label": cal.gregorian_label(start),
        "name": cal.format(start, "_F"),
    }

def months_in_year(cal: HijriCalendar, year: int) -> List[Dict[str, Any]]:
    return [month_info(cal, year, m) for m in range(1, 13)]

def days_in_month(cal: HijriCalendar, year: int, month: int) -> List[Dict[str, Any]]:
    rows = []
    start = cal.month_start(year, month)
    for d in range(1, cal.days_in_month(year, month) + 1):
        mjd = start + d - 1
        rows.append({"hijri": HijriDate(year, month, d), "mjd": mjd, "date": cal.to_gregorian(HijriDate(year, month, d))})
    return rows
