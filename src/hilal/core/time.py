from __future__ import annotations
from datetime import date

# MJD 0 is 1858-11-17, JDN 2400001.
MJD_EPOCH_JDN = 2400001


def to_jdn(d: date) -> int:
    """Convert Gregorian date to Julian Day Number (JDN)."""
    y, m, day = d.year, d.month, d.day
    a = (14 - m) // 12
    y2 = y + 4800 - a
    m2 = m + 12 * a - 3
    jdn = day + (153 * m2 + 2) // 5 + 365 * y2 + y2 // 4 - y2 // 100 + y2 // 400 - 32045
    return jdn

def from_jdn(jdn: int) -> date:
    """Fliegel-Van Flandern inverse of to_jdn (Gregorian)."""
    a = jdn + 32044
    b = (4 * a + 3) // 146097
    c = a - (146097 * b) // 4
    d = (4 * c + 3) // 1461
    e = c - (1461 * d) // 4
    m = (5 * e + 2) // 153
    day = e - (153 * m + 2) // 5 + 1
    month = m + 3 - 12 * (m // 10)
    year = 100 * b + d - 4800 + (m // 10)
    return date(year, month, day)

def jdn_to_mjd(jdn: int) -> int:
    return jdn - MJD_EPOCH_JDN

def mjd_to_jdn(mjd: int) -> int:
    return mjd + MJD_EPOCH_JDN

def date_to_mjd(d: date) -> int:
    """Gregorian date -> modified Julian day (the day-count used by all tables)."""
    return jdn_to_mjd(to_jdn(d))

def mjd_to_date(mjd: int) -> date:
    return from_jdn(mjd_to_jdn(mjd))

def weekday_sunday0(mjd: int) -> int:
    """Day of week with 0=Sunday..6=Saturday."""
    # MJD 0 (1858-11-17) was a Wednesday.
    return (mjd + 3) % 7
