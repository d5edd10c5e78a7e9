"""
hilal.baseline.arithmetic
-------------------------
Tabular (arithmetical) Islamic calendar used as a baseline when no almanac
table is supplied. Odd months have 30 days, even months 29, and month 12
gains a day in the leap years of a 30-year cycle.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import FrozenSet

from ..core.time import jdn_to_mjd
from .table import BaselineTable

CYCLE_YEARS = 30
COMMON_YEAR_DAYS = 354

# JDN of 1 Muharram 1 AH (civil epoch, Friday 16 July 622 Julian)
JDN_EPOCH_CIVIL = 1948440
JDN_EPOCH_ASTRONOMICAL = 1948439


@dataclass(frozen=True)
class TabularParams:
    epoch_jdn: int
    leap_years: FrozenSet[int]   # positions 1..30 inside the cycle

    def __post_init__(self) -> None:
        if not self.leap_years:
            raise ValueError("leap_years must not be empty")
        if not all(1 <= y <= CYCLE_YEARS for y in self.leap_years):
            raise ValueError("leap_years must be in 1..30")

    @property
    def cycle_days(self) -> int:
        return CYCLE_YEARS * COMMON_YEAR_DAYS + len(self.leap_years)


class TabularMonthEngine:
    """Discrete arithmetic of the tabular calendar: month starts as JDN."""
    def __init__(self, params: TabularParams):
        self.p = params

    def is_leap_year(self, year: int) -> bool:
        return ((year - 1) % CYCLE_YEARS) + 1 in self.p.leap_years

    def leaps_before(self, year: int) -> int:
        """Number of leap years among 1 .. year-1."""
        cycles, rem = divmod(year - 1, CYCLE_YEARS)
        return cycles * len(self.p.leap_years) + sum(1 for k in self.p.leap_years if k <= rem)

    def year_start_jdn(self, year: int) -> int:
        return self.p.epoch_jdn + COMMON_YEAR_DAYS * (year - 1) + self.leaps_before(year)

    def month_start_jdn(self, year: int, month: int) -> int:
        if not (1 <= month <= 12):
            raise ValueError("month must be in 1..12")
        # ceil(29.5 * (month - 1))
        return self.year_start_jdn(year) + (59 * (month - 1) + 1) // 2

    def month_start_mjd(self, year: int, month: int) -> int:
        return jdn_to_mjd(self.month_start_jdn(year, month))


def build_tabular_table(
    params: TabularParams,
    start_year: int,
    end_year: int,
    *,
    epoch_year: int | None = None,
    name: str = "tabular",
) -> BaselineTable:
    """
    Tabulate every month of start_year..end_year, plus month 1 of end_year + 1
    so that the length of the last tabulated month is known.
    """
    if end_year < start_year:
        raise ValueError("end_year must be >= start_year")
    eng = TabularMonthEngine(params)
    if epoch_year is None:
        epoch_year = start_year
    starts = [eng.month_start_mjd(y, m) for y in range(start_year, end_year + 1) for m in range(1, 13)]
    starts.append(eng.month_start_mjd(end_year + 1, 1))
    return BaselineTable(
        epoch_year=epoch_year,
        first_offset=12 * (start_year - epoch_year),
        starts=tuple(starts),
        name=name,
    )
