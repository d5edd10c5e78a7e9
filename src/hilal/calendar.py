"""
hilal.calendar
--------------
The session object. Binds one baseline table, one adjustment store, the
effective view over both and the cascade engine, and converts dates using
the adjusted month starts.

One instance is one editing session; callers sharing an instance must
serialize access themselves.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from typing import List, Optional, Tuple, Union

from .adjust.cascade import CascadeEngine
from .adjust.store import AdjustmentStore, Snapshot
from .adjust.view import EffectiveView
from .baseline.interfaces import BaselineTableProtocol
from .core.errors import DomainRangeError, InvariantError
from .core.time import date_to_mjd, mjd_to_date
from .core.types import AdjustmentInfo, Candidate, HijriDate
from .format import DEFAULT_GREGORIAN_FORMAT, LANGCODES, format_mjd

logger = logging.getLogger(__name__)

_GREG_SPLIT_RE = re.compile(r"[-/.\\ ]")

MonthStart = Union[int, date, str]


def parse_month_start(value: MonthStart) -> int:
    """
    Day-count of a proposed month start: an int is taken as-is, a date is
    converted, a string is read as a Gregorian 'd/m/yyyy' (separators - / . \\ or space).
    """
    if isinstance(value, bool):
        raise TypeError("Month start must be an int, a date or a 'd/m/yyyy' string")
    if isinstance(value, int):
        return value
    if isinstance(value, date):
        return date_to_mjd(value)
    if isinstance(value, str):
        s = value.strip()
        if re.fullmatch(r"-?[0-9]+", s):
            return int(s)
        parts = _GREG_SPLIT_RE.split(s)
        if len(parts) != 3 or not all(p.isdigit() for p in parts):
            raise ValueError(f"Cannot read Gregorian date '{value}' (expected d/m/yyyy)")
        gd, gm, gy = (int(p) for p in parts)
        return date_to_mjd(date(gy, gm, gd))
    raise TypeError("Month start must be an int, a date or a 'd/m/yyyy' string")


class HijriCalendar:
    def __init__(
        self,
        baseline: BaselineTableProtocol,
        adj_data: Optional[Snapshot] = None,
        *,
        grdate_format: str = DEFAULT_GREGORIAN_FORMAT,
        default_format: str = "_j _M _Y",
        langcode: str = "en",
    ):
        if langcode not in LANGCODES:
            raise ValueError(f"Unsupported langcode '{langcode}'. Available: {list(LANGCODES)}")
        self.baseline = baseline
        self.store = AdjustmentStore.deserialize(adj_data) if adj_data else AdjustmentStore()
        self.view = EffectiveView(baseline, self.store)
        self.grdate_format = grdate_format
        self.default_format = default_format
        self.langcode = langcode
        self.engine = CascadeEngine(baseline, self.store, self.view, labeler=self.gregorian_label)

        outside = [k for k in self.store if k not in baseline]
        if outside:
            raise DomainRangeError(f"Adjustments outside the baseline table at offsets {outside}")
        bad = self.view.violations()
        if bad:
            raise InvariantError(f"Adjusted calendar has invalid month lengths (offset, length): {bad}")

    @classmethod
    def from_settings(cls, settings) -> "HijriCalendar":
        """Build from a hilal.config.Settings instance."""
        return cls(
            settings.load_baseline(),
            settings.load_adj_data(),
            grdate_format=settings.grdate_format,
            default_format=settings.default_format,
            langcode=settings.langcode,
        )

    # ---------------------------------------------------------
    # Adjustments
    # ---------------------------------------------------------

    def add_adjustment(self, year: int, month: int, start: MonthStart) -> bool:
        return self.engine.commit_insertion(month, year, parse_month_start(start))

    def delete_adjustment(self, year: int, month: int) -> List[Tuple[int, int]]:
        """Returns (month, year) of the overrides dropped along with this one."""
        return [self.baseline.off2month(k) for k in self.engine.commit_deletion(month, year)]

    def deletion_preview(self, year: int, month: int) -> List[Tuple[int, int]]:
        return self.engine.removal_preview(month, year)

    def possible_starts(self, year: int, month: int) -> List[Candidate]:
        return self.engine.enumerate_candidates(month, year)

    def current_adjustments(self) -> List[AdjustmentInfo]:
        return self.engine.current_adjustments()

    def adjustment_data(self, as_text: bool = True):
        if as_text:
            return self.store.serialize()
        return dict(self.store.entries())

    # ---------------------------------------------------------
    # Date conversion over the effective view
    # ---------------------------------------------------------

    def month_start(self, year: int, month: int) -> int:
        return self.view.value_at(self.baseline.require(month, year))

    def days_in_month(self, year: int, month: int) -> int:
        off = self.baseline.require(month, year)
        length = self.view.month_length(off)
        if length is None:
            raise DomainRangeError(f"Length of {month}/{year} is unknown: it is the last month of the table")
        return length

    def year_length(self, year: int) -> int:
        return sum(self.days_in_month(year, m) for m in range(1, 13))

    def is_leap_year(self, year: int) -> bool:
        return self.year_length(year) == 355

    def day_of_year(self, d: HijriDate) -> int:
        """0-based day of the Hijri year."""
        return self.to_mjd(d) - self.month_start(d.year, 1)

    def to_mjd(self, d: HijriDate) -> int:
        if not (1 <= d.day <= self.days_in_month(d.year, d.month)):
            raise ValueError(f"Day {d.day} is not in month {d.month}/{d.year}")
        return self.month_start(d.year, d.month) + d.day - 1

    def from_mjd(self, mjd: int) -> HijriDate:
        off = self.view.locate(mjd)
        if off is None:
            raise DomainRangeError(f"Day-count {mjd} is outside the calendar table")
        month, year = self.baseline.off2month(off)
        return HijriDate(year=year, month=month, day=mjd - self.view.value_at(off) + 1)

    def to_gregorian(self, d: HijriDate) -> date:
        return mjd_to_date(self.to_mjd(d))

    def from_gregorian(self, g: date) -> HijriDate:
        return self.from_mjd(date_to_mjd(g))

    # ---------------------------------------------------------
    # Formatting
    # ---------------------------------------------------------

    def gregorian_label(self, mjd: int) -> str:
        return format_mjd(mjd, self.grdate_format, langcode=self.langcode)

    def format(self, mjd: int, fmt: Optional[str] = None, *, force_hijri: bool = False) -> str:
        return format_mjd(
            mjd,
            fmt if fmt is not None else self.default_format,
            self,
            langcode=self.langcode,
            force_hijri=force_hijri,
        )
