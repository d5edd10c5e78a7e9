# tests/test_baseline.py

import json
from datetime import date

import pytest

from hilal.baseline.arithmetic import JDN_EPOCH_CIVIL, TabularMonthEngine, build_tabular_table
from hilal.baseline.factory import make_baseline
from hilal.baseline.specs import ALL_SPECS, BaselineSpec
from hilal.baseline.table import BaselineTable
from hilal.core.errors import DomainRangeError, InvariantError
from hilal.core.time import mjd_to_date


def test_baseline_rejects_invalid_lengths():
    with pytest.raises(InvariantError):
        BaselineTable(epoch_year=1400, first_offset=0, starts=(1000, 1029, 1060))
    with pytest.raises(InvariantError):
        BaselineTable(epoch_year=1400, first_offset=0, starts=(1000, 1028))
    with pytest.raises(ValueError):
        BaselineTable(epoch_year=1400, first_offset=0, starts=())


def test_table_access(toy_table):
    assert toy_table.first_offset == 100
    assert toy_table.last_offset == 103
    assert len(toy_table) == 4
    assert 99 not in toy_table and 104 not in toy_table
    assert toy_table.value_at(102) == 1059
    assert toy_table.value_at(104) is None
    assert toy_table[100] == 1000
    with pytest.raises(DomainRangeError):
        toy_table[99]


def test_coordinates_are_inverse(tabular_table):
    for off in tabular_table.offsets():
        m, y = tabular_table.off2month(off)
        assert 1 <= m <= 12
        assert tabular_table.month2off(m, y) == off
    assert tabular_table.off2month(tabular_table.first_offset) == (1, 1440)


def test_month_range_checks(toy_table):
    with pytest.raises(ValueError):
        toy_table.month2off(13, 1408)
    m, y = toy_table.off2month(101)
    assert toy_table.require(m, y) == 101
    with pytest.raises(DomainRangeError):
        toy_table.require(1, 1300)


def test_every_spec_satisfies_month_law():
    for name, spec in ALL_SPECS.items():
        t = make_baseline(spec.tweak(start_year=1400, end_year=1460))
        diffs = [b - a for a, b in zip(t.starts, t.starts[1:])]
        assert set(diffs) <= {29, 30}, name
        assert len(t) == 61 * 12 + 1


def test_tabular_known_epochs():
    eng = TabularMonthEngine(ALL_SPECS["tabular"].params)
    assert eng.month_start_jdn(1, 1) == JDN_EPOCH_CIVIL
    # 1 Muharram 1445
    assert mjd_to_date(eng.month_start_mjd(1445, 1)) == date(2023, 7, 19)
    assert eng.is_leap_year(1445)
    assert not eng.is_leap_year(1444)


def test_tabular_year_lengths():
    eng = TabularMonthEngine(ALL_SPECS["tabular"].params)
    for y in range(1, 91):
        length = eng.year_start_jdn(y + 1) - eng.year_start_jdn(y)
        assert length == (355 if eng.is_leap_year(y) else 354)
    # one full cycle
    assert eng.year_start_jdn(31) - eng.year_start_jdn(1) == 10631


def test_build_tabular_table_epoch_year():
    params = ALL_SPECS["tabular"].params
    t = build_tabular_table(params, 1445, 1446, epoch_year=1318)
    assert t.first_offset == 12 * (1445 - 1318)
    assert t.off2month(t.first_offset) == (1, 1445)
    with pytest.raises(ValueError):
        build_tabular_table(params, 1446, 1445)


def test_payload_and_json_round_trip(tmp_path, toy_table):
    payload = toy_table.to_payload()
    assert BaselineTable.from_payload(payload) == toy_table

    p = tmp_path / "almanac.json"
    p.write_text(json.dumps(payload), encoding="utf-8")
    assert BaselineTable.from_json(p) == toy_table
    assert make_baseline(BaselineSpec.from_file(str(p))).starts == toy_table.starts


def test_payload_first_year_month():
    t = BaselineTable.from_payload({"epoch_year": 1318, "first_year": 1319, "first_month": 3, "starts": [1000, 1030]})
    assert t.first_offset == 14
    assert t.off2month(14) == (3, 1319)
    with pytest.raises(ValueError):
        BaselineTable.from_payload({"epoch_year": 1318, "starts": [1000, 1029.5]})
    with pytest.raises(ValueError):
        BaselineTable.from_payload({"starts": [1000]})


def test_from_mapping(toy_table):
    assert BaselineTable.from_mapping(1400, toy_table.as_dict(), name="toy") == toy_table
    with pytest.raises(ValueError):
        BaselineTable.from_mapping(1400, {1: 1000, 3: 1059})


def test_unknown_spec():
    with pytest.raises(KeyError):
        BaselineSpec.like("nope")
