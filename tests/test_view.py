# tests/test_view.py

import logging

from hilal.adjust.store import AdjustmentStore
from hilal.adjust.view import EffectiveView, merge
from hilal.calendar import HijriCalendar
from hilal.diagnostics.month_lengths import build_report
from hilal.logging_config import setup_logging


def test_value_at_falls_back_to_baseline(toy_table):
    store = AdjustmentStore({101: 1030})
    view = EffectiveView(toy_table, store)
    assert view.value_at(101) == 1030
    assert view.value_at(102) == 1059
    assert view.value_at(99) is None
    assert view.month_length(100) == 30
    assert view.month_length(103) is None


def test_cache_follows_store_mutations(toy_table):
    store = AdjustmentStore()
    view = EffectiveView(toy_table, store)
    assert view.values() == [1000, 1029, 1059, 1088]
    store.set(102, 1058)
    assert view.values() == [1000, 1029, 1058, 1088]
    store.remove(102)
    assert view.items() == list(toy_table.as_dict().items())


def test_locate(toy_table):
    view = EffectiveView(toy_table, AdjustmentStore())
    assert view.locate(999) is None
    assert view.locate(1000) == 100
    assert view.locate(1028) == 100
    assert view.locate(1029) == 101
    assert view.locate(1087) == 102
    # the last start closes the table
    assert view.locate(1088) is None


def test_violations(toy_table):
    view = EffectiveView(toy_table, AdjustmentStore({102: 1062}))
    assert view.violations() == [(101, 33), (102, 26)]


def test_merge_ignores_offsets_outside_table(toy_table):
    assert merge(toy_table, {500: 1}) == toy_table.as_dict()


def test_month_length_report(tabular_table):
    cal = HijriCalendar(tabular_table)
    cal.add_adjustment(1445, 1, "20/7/2023")
    rep = build_report(cal)
    assert len(rep.offsets) == len(tabular_table)
    assert sum(rep.counts("baseline").values()) == len(tabular_table) - 1
    assert set(rep.counts("effective")) == {29, 30}
    assert rep.invalid() == []
    assert list(rep.adjusted()) == [tabular_table.month2off(1, 1445)]


def test_setup_logging_replaces_handlers(tmp_path):
    log_file = tmp_path / "hilal.log"
    setup_logging(logging.DEBUG, log_file=str(log_file))
    setup_logging(logging.DEBUG, log_file=str(log_file))
    logger = logging.getLogger("hilal")
    assert len(logger.handlers) == 2
    logging.getLogger("hilal.test").debug("hello")
    for h in logger.handlers:
        h.flush()
    assert "hello" in log_file.read_text(encoding="utf-8")
    setup_logging(logging.WARNING)


def test_setup_logging_closes_replaced_handlers(tmp_path):
    setup_logging(logging.DEBUG, log_file=str(tmp_path / "a.log"))
    old = [h for h in logging.getLogger("hilal").handlers if isinstance(h, logging.FileHandler)]
    setup_logging(logging.WARNING)
    assert old and old[0].stream is None
    assert all(not isinstance(h, logging.FileHandler) for h in logging.getLogger("hilal").handlers)
