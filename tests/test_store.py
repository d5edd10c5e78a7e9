# tests/test_store.py

import pytest

from hilal.adjust.store import AdjustmentStore
from hilal.core.errors import InvariantError, SnapshotDecodeError


def test_set_get_remove_bumps_revision():
    s = AdjustmentStore()
    assert s.get(5) is None
    s.set(5, 300)
    assert s.get(5) == 300
    assert 5 in s and len(s) == 1
    r = s.revision
    s.remove(5)
    assert s.get(5) is None
    assert s.revision == r + 1

    # removing an absent offset is not a mutation
    s.remove(5)
    assert s.revision == r + 1


def test_entries_sorted_by_value():
    s = AdjustmentStore({7: 500, 2: 100, 4: 300})
    assert s.entries() == [(2, 100), (4, 300), (7, 500)]
    assert list(s) == [2, 4, 7]


def test_value_order_must_match_offset_order():
    s = AdjustmentStore({1: 200, 2: 100})
    with pytest.raises(InvariantError):
        s.check_order()
    with pytest.raises(InvariantError):
        s.serialize()


@pytest.mark.parametrize("data", [{1: 100, 2: 100}, {2: 100, 1: 100}])
def test_equal_values_break_order(data):
    with pytest.raises(InvariantError):
        AdjustmentStore(data).check_order()


def test_serialize_is_canonical():
    a = AdjustmentStore({5: 300, 2: 100})
    b = AdjustmentStore({2: 100, 5: 300})
    assert a.serialize() == '{"2":100,"5":300}'
    assert a.serialize() == b.serialize()
    assert AdjustmentStore().serialize() == "{}"


def test_deserialize_text_and_mapping():
    s = AdjustmentStore({2: 100, 5: 300})
    assert AdjustmentStore.deserialize(s.serialize()) == s
    assert AdjustmentStore.deserialize({"2": 100, "5": 300}) == s
    assert AdjustmentStore.deserialize({2: 100, 5: 300}) == s


@pytest.mark.parametrize("text", ["", "  ", "{}", "[]"])
def test_deserialize_empty(text):
    assert len(AdjustmentStore.deserialize(text)) == 0


@pytest.mark.parametrize(
    "text",
    [
        "{not json",
        '{"1": 1.5}',
        '{"1": "100"}',
        '{"1": true}',
        '{"x": 1}',
        '{"1.0": 1}',
        '{"1": 100, "1": 101}',
        "[1, 2]",
        "5",
        '{"1": {"a": 1}}',
        '{"1": 200, "2": 100}',
    ],
)
def test_deserialize_rejects_malformed(text):
    with pytest.raises(SnapshotDecodeError):
        AdjustmentStore.deserialize(text)


def test_deserialize_rejects_unsupported_type():
    with pytest.raises(SnapshotDecodeError):
        AdjustmentStore.deserialize(5)
    with pytest.raises(SnapshotDecodeError):
        AdjustmentStore.deserialize({"1": None})
