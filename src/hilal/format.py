"""
hilal.format
------------
Date-format mini-language. A format string is parsed once into a sequence of
tagged tokens, and each token is resolved against a day-count.

Hijri fields are written with a leading underscore (`_j _M _Y`), Gregorian
fields as bare letters (`j-n-Y`), and a backslash escapes the next character.

| Code | Hijri (`_c`) | Gregorian (`c`) |
|---|---|---|
| j / d | day, without / with leading zero | same |
| S | English ordinal suffix of the day | same |
| z | day of the year, from 0 | same |
| F / M | full / short month name | same |
| t | days in the month | same |
| m / n | month number, with / without leading zero | same |
| Y / y | four / two digit year | same |
| L | 1 in a 355-day year, else 0 | - |
| D / l | - | short / full weekday name |
| N / w | - | ISO weekday 1..7 / weekday 0 (Sunday)..6 |
"""

from __future__ import annotations

import calendar as pycal
from dataclasses import dataclass
from typing import List, Optional, Protocol, Union

from .core.time import mjd_to_date, weekday_sunday0
from .core.types import HijriDate

HIJRI_CODES = frozenset("jdzFMtmnyYLS")
GREGORIAN_CODES = frozenset("djDlNwzFMmntYyS")
FORCEABLE_CODES = frozenset("jdzFMtmnyYL")

HIJRI_MONTHS = {
    "en": (
        "Muharram", "Safar", "Rabi' al-Awwal", "Rabi' al-Thani", "Jumada al-Ula", "Jumada al-Akhirah",
        "Rajab", "Sha'ban", "Ramadan", "Shawwal", "Dhu al-Qi'dah", "Dhu al-Hijjah",
    ),
    "ar": (
        "محرم", "صفر", "ربيع الأول", "ربيع الآخر", "جمادى الأولى", "جمادى الآخرة",
        "رجب", "شعبان", "رمضان", "شوال", "ذو القعدة", "ذو الحجة",
    ),
}
HIJRI_MONTHS_SHORT = ("Muh", "Saf", "Rb1", "Rb2", "Jm1", "Jm2", "Raj", "Sha", "Ram", "Shw", "Qid", "Hij")

GREGORIAN_MONTHS = {
    "en": (
        "January", "February", "March", "April", "May", "June",
        "July", "August", "September", "October", "November", "December",
    ),
    "ar": (
        "يناير", "فبراير", "مارس", "أبريل", "مايو", "يونيو",
        "يوليو", "أغسطس", "سبتمبر", "أكتوبر", "نوفمبر", "ديسمبر",
    ),
}
# Levantine (Syriac) month names, used for the full Arabic Gregorian month
SYRIAC_MONTHS_AR = (
    "كانون الثاني", "شباط", "آذار", "نيسان", "أيار", "حزيران",
    "تموز", "آب", "أيلول", "تشرين الأول", "تشرين الثاني", "كانون الأول",
)
# Sunday first
WEEKDAYS = {
    "en": ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday"),
    "ar": ("الأحد", "الإثنين", "الثلاثاء", "الأربعاء", "الخميس", "الجمعة", "السبت"),
}

LANGCODES = tuple(HIJRI_MONTHS)


# ============================================================
# Tokens
# ============================================================

@dataclass(frozen=True)
class LiteralText:
    text: str

@dataclass(frozen=True)
class Escape:
    char: str

@dataclass(frozen=True)
class HijriField:
    code: str
    ordinal: bool = False  # `_jS` / `_dS`

@dataclass(frozen=True)
class GregorianField:
    code: str

Token = Union[LiteralText, Escape, HijriField, GregorianField]


def tokenize(fmt: str, *, force_hijri: bool = False) -> List[Token]:
    tokens: List[Token] = []
    i, n = 0, len(fmt)
    while i < n:
        c = fmt[i]
        if c == "\\":
            if i + 1 < n:
                tokens.append(Escape(fmt[i + 1]))
                i += 2
            else:
                tokens.append(LiteralText(c))
                i += 1
        elif c == "_":
            if i + 1 >= n:
                break
            code = fmt[i + 1]
            i += 2
            if code in ("j", "d") and i < n and fmt[i] == "S":
                tokens.append(HijriField(code, ordinal=True))
                i += 1
            elif code in HIJRI_CODES:
                tokens.append(HijriField(code))
            else:
                tokens.append(LiteralText(code))
        elif force_hijri and c in FORCEABLE_CODES:
            tokens.append(HijriField(c))
            i += 1
        elif c in GREGORIAN_CODES:
            tokens.append(GregorianField(c))
            i += 1
        else:
            tokens.append(LiteralText(c))
            i += 1
    return _join_literals(tokens)


def _join_literals(tokens: List[Token]) -> List[Token]:
    out: List[Token] = []
    for t in tokens:
        if isinstance(t, LiteralText) and out and isinstance(out[-1], LiteralText):
            out[-1] = LiteralText(out[-1].text + t.text)
        else:
            out.append(t)
    return out


# ============================================================
# Rendering
# ============================================================

class HijriSource(Protocol):
    """What rendering Hijri fields needs from a calendar."""
    def from_mjd(self, mjd: int) -> HijriDate: ...
    def days_in_month(self, year: int, month: int) -> int: ...
    def is_leap_year(self, year: int) -> bool: ...
    def day_of_year(self, d: HijriDate) -> int: ...


def english_suffix(n: int) -> str:
    if 10 <= n % 100 <= 20:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(n % 10, "th")


def _lang(langcode: str) -> str:
    if langcode not in LANGCODES:
        raise ValueError(f"Unsupported langcode '{langcode}'. Available: {list(LANGCODES)}")
    return langcode


def _hijri_field(tok: HijriField, h: HijriDate, cal: HijriSource, langcode: str) -> str:
    code = tok.code
    if code in ("j", "d"):
        s = str(h.day) if code == "j" else f"{h.day:02d}"
        if tok.ordinal and langcode == "en":
            s += english_suffix(h.day)
        return s
    if code == "S":
        return english_suffix(h.day) if langcode == "en" else ""
    if code == "z":
        return str(cal.day_of_year(h))
    if code == "F":
        return HIJRI_MONTHS[langcode][h.month - 1]
    if code == "M":
        return HIJRI_MONTHS_SHORT[h.month - 1] if langcode == "en" else HIJRI_MONTHS[langcode][h.month - 1]
    if code == "t":
        return str(cal.days_in_month(h.year, h.month))
    if code == "m":
        return f"{h.month:02d}"
    if code == "n":
        return str(h.month)
    if code == "Y":
        return str(h.year)
    if code == "y":
        return f"{h.year % 100:02d}"
    if code == "L":
        return "1" if cal.is_leap_year(h.year) else "0"
    raise ValueError(f"Unknown Hijri format code '_{code}'")


def _gregorian_field(code: str, mjd: int, langcode: str) -> str:
    g = mjd_to_date(mjd)
    w = weekday_sunday0(mjd)
    if code == "j":
        return str(g.day)
    if code == "d":
        return f"{g.day:02d}"
    if code == "S":
        return english_suffix(g.day) if langcode == "en" else ""
    if code == "z":
        return str(g.timetuple().tm_yday - 1)
    if code == "D":
        name = WEEKDAYS[langcode][w]
        return name[:3] if langcode == "en" else name
    if code == "l":
        return WEEKDAYS[langcode][w]
    if code == "N":
        return str(w or 7)
    if code == "w":
        return str(w)
    if code == "F":
        return SYRIAC_MONTHS_AR[g.month - 1] if langcode == "ar" else GREGORIAN_MONTHS["en"][g.month - 1]
    if code == "M":
        name = GREGORIAN_MONTHS[langcode][g.month - 1]
        return name[:3] if langcode == "en" else name
    if code == "m":
        return f"{g.month:02d}"
    if code == "n":
        return str(g.month)
    if code == "t":
        return str(pycal.monthrange(g.year, g.month)[1])
    if code == "Y":
        return str(g.year)
    if code == "y":
        return f"{g.year % 100:02d}"
    raise ValueError(f"Unknown Gregorian format code '{code}'")


def render(tokens: List[Token], mjd: int, calendar: Optional[HijriSource] = None, langcode: str = "en") -> str:
    langcode = _lang(langcode)
    h: Optional[HijriDate] = None
    parts = []
    for tok in tokens:
        if isinstance(tok, LiteralText):
            parts.append(tok.text)
        elif isinstance(tok, Escape):
            parts.append(tok.char)
        elif isinstance(tok, GregorianField):
            parts.append(_gregorian_field(tok.code, mjd, langcode))
        else:
            if calendar is None:
                raise ValueError("Hijri format fields need a calendar")
            if h is None:
                h = calendar.from_mjd(mjd)
            parts.append(_hijri_field(tok, h, calendar, langcode))
    return "".join(parts)


def format_mjd(
    mjd: int,
    fmt: str,
    calendar: Optional[HijriSource] = None,
    *,
    langcode: str = "en",
    force_hijri: bool = False,
) -> str:
    return render(tokenize(fmt, force_hijri=force_hijri), mjd, calendar, langcode)


DEFAULT_GREGORIAN_FORMAT = "j-n-Y"

def gregorian_label(mjd: int) -> str:
    """Default display of a day-count, e.g. '19-7-2023'."""
    g = mjd_to_date(mjd)
    return f"{g.day}-{g.month}-{g.year}"
