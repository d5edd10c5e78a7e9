# tests/test_calendar.py

import random
from datetime import date, timedelta

import pytest

from hilal.calendar import HijriCalendar, parse_month_start
from hilal.core.errors import DomainRangeError, InvariantError, SnapshotDecodeError
from hilal.core.time import date_to_mjd, mjd_to_date
from hilal.core.types import HijriDate


@pytest.fixture
def cal(tabular_table):
    return HijriCalendar(tabular_table)


def test_known_conversion(cal):
    assert cal.from_gregorian(date(2023, 7, 19)) == HijriDate(1445, 1, 1)
    assert cal.from_gregorian(date(2023, 7, 18)) == HijriDate(1444, 12, 29)
    assert cal.to_gregorian(HijriDate(1445, 1, 1)) == date(2023, 7, 19)


def test_gregorian_round_trip(cal):
    random.seed(123)
    start = date(2019, 1, 1)
    for _ in range(500):
        d0 = start + timedelta(days=random.randint(0, 3000))
        h = cal.from_gregorian(d0)
        assert 1 <= h.day <= cal.days_in_month(h.year, h.month)
        assert cal.to_gregorian(h) == d0


def test_year_lengths(cal):
    assert cal.year_length(1445) == 355
    assert cal.is_leap_year(1445)
    assert cal.year_length(1444) == 354
    assert cal.day_of_year(HijriDate(1445, 1, 1)) == 0
    assert cal.day_of_year(HijriDate(1445, 12, 30)) == 354


def test_conversion_domain(cal, tabular_table):
    with pytest.raises(DomainRangeError):
        cal.from_gregorian(date(1900, 1, 1))
    with pytest.raises(DomainRangeError):
        cal.days_in_month(1300, 1)
    with pytest.raises(ValueError):
        cal.to_mjd(HijriDate(1445, 2, 30))
    # the last tabulated start has no known length
    m, y = tabular_table.off2month(tabular_table.last_offset)
    with pytest.raises(DomainRangeError):
        cal.days_in_month(y, m)


@pytest.mark.parametrize(
    "value",
    ["20/7/2023", "20-7-2023", "20.7.2023", "20\\7\\2023", "20 7 2023", " 20/07/2023 ", date(2023, 7, 20)],
)
def test_parse_month_start_gregorian(value):
    assert parse_month_start(value) == date_to_mjd(date(2023, 7, 20))


def test_parse_month_start_other():
    assert parse_month_start(60145) == 60145
    assert parse_month_start("60145") == 60145
    with pytest.raises(ValueError):
        parse_month_start("2023-07")
    with pytest.raises(ValueError):
        parse_month_start("31/2/2023")
    with pytest.raises(TypeError):
        parse_month_start(True)
    with pytest.raises(TypeError):
        parse_month_start(1.5)


def test_sighting_adjustment(cal):
    # Muharram 1445 sighted a day late
    assert cal.add_adjustment(1445, 1, "20/7/2023")
    assert cal.days_in_month(1444, 12) == 30
    assert cal.days_in_month(1445, 1) == 29
    assert cal.from_gregorian(date(2023, 7, 19)) == HijriDate(1444, 12, 30)
    assert cal.from_gregorian(date(2023, 7, 20)) == HijriDate(1445, 1, 1)

    (info,) = cal.current_adjustments()
    assert (info.month, info.year) == (1, 1445)
    assert info.current_label == "20-7-2023"
    assert info.default_label == "19-7-2023"

    assert cal.adjustment_data(as_text=False) == {info.offset: date_to_mjd(date(2023, 7, 20))}
    assert cal.delete_adjustment(1445, 1) == []
    assert cal.adjustment_data() == "{}"


def test_rejected_adjustment(cal):
    assert not cal.add_adjustment(1445, 1, date(2023, 7, 18))
    assert len(cal.store) == 0


def test_possible_starts(cal):
    cands = cal.possible_starts(1445, 9)
    assert len(cands) == 2
    assert sum(c.current_set for c in cands) == 1
    assert cal.possible_starts(1300, 1) == []


def test_snapshot_round_trip(cal, tabular_table):
    cal.add_adjustment(1445, 1, "20/7/2023")
    assert cal.add_adjustment(1446, 9, cal.month_start(1446, 9) + 1)
    text = cal.adjustment_data()
    again = HijriCalendar(tabular_table, text)
    assert again.view.items() == cal.view.items()
    assert again.adjustment_data() == text


def test_deletion_preview(cal):
    safar = cal.month_start(1445, 2)
    cal.add_adjustment(1445, 1, "20/7/2023")
    assert cal.add_adjustment(1445, 2, safar + 1)
    assert cal.days_in_month(1445, 1) == 30
    assert cal.deletion_preview(1445, 2) == []
    # Muharram back on its default start would last 31 days unless Safar moves back too
    assert cal.deletion_preview(1445, 1) == [(2, 1445)]
    assert cal.delete_adjustment(1445, 1) == [(2, 1445)]
    assert cal.view.violations() == []


def test_construction_checks(tabular_table):
    with pytest.raises(SnapshotDecodeError):
        HijriCalendar(tabular_table, "{bad")
    with pytest.raises(DomainRangeError):
        HijriCalendar(tabular_table, {str(tabular_table.last_offset + 5): 99999})
    off = tabular_table.month2off(3, 1441)
    with pytest.raises(InvariantError):
        HijriCalendar(tabular_table, {off: tabular_table.value_at(off) + 5})
    with pytest.raises(ValueError):
        HijriCalendar(tabular_table, langcode="fr")


def test_format(cal):
    mjd = date_to_mjd(date(2023, 7, 19))
    assert cal.format(mjd) == "1 Muh 1445"
    assert cal.format(mjd, "_jS _F _Y") == "1st Muharram 1445"
    assert cal.format(mjd, "_d/_m/_y _L _t _z") == "01/01/45 1 30 0"
    assert cal.format(mjd, "l j F Y") == "Wednesday 19 July 2023"
    assert cal.format(mjd, "j F", force_hijri=True) == "1 Muharram"
    assert cal.gregorian_label(mjd) == "19-7-2023"
    assert mjd_to_date(mjd) == date(2023, 7, 19)


def test_format_arabic(tabular_table):
    cal = HijriCalendar(tabular_table, langcode="ar")
    mjd = date_to_mjd(date(2023, 7, 19))
    assert cal.format(mjd, "_F") == "محرم"
    assert cal.format(mjd, "_jS") == "1"
    assert cal.format(mjd, "l") == "الأربعاء"
    assert cal.format(mjd, "F") == "تموز"
    assert cal.format(mjd, "M") == "يوليو"
