"""hilal public API.

Hijri calendar over a tabulated baseline with locally adjustable month starts.
Every month stays 29 or 30 days long: changing one start cascades to its
neighbours.
"""

from .api import (
    list_baselines,
    load_baseline,
    open_calendar,
    save_adjustments,
    month_info,
    months_in_year,
    days_in_month,
)
from .adjust.cascade import CascadeEngine
from .adjust.store import AdjustmentStore
from .adjust.view import EffectiveView
from .baseline.table import BaselineTable
from .calendar import HijriCalendar
from .config import Settings
from .core.errors import (
    HilalError,
    DomainRangeError,
    InvariantError,
    SnapshotDecodeError,
    ConfigError,
)
from .core.types import HijriDate, Candidate, ForcedAdjustment, AdjustmentInfo

__all__ = [
    "list_baselines",
    "load_baseline",
    "open_calendar",
    "save_adjustments",
    "month_info",
    "months_in_year",
    "days_in_month",
    "CascadeEngine",
    "AdjustmentStore",
    "EffectiveView",
    "BaselineTable",
    "HijriCalendar",
    "Settings",
    "HilalError",
    "DomainRangeError",
    "InvariantError",
    "SnapshotDecodeError",
    "ConfigError",
    "HijriDate",
    "Candidate",
    "ForcedAdjustment",
    "AdjustmentInfo",
]
