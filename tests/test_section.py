"""Unit tests for IniSection (mapping and positional operations)."""

import pytest

from pyinifile import (
    IGNORE_CASE,
    MISSING,
    ORDINAL,
    ArgumentNullError,
    CountRangeError,
    DuplicateKeyError,
    IndexRangeError,
    IniSection,
    IniValue,
    InvalidOperationError,
    RangeOverflowError,
)


def _ordered(*keys: str) -> IniSection:
    s = IniSection(ordered=True)
    for i, k in enumerate(keys):
        s.add(k, i)
    return s


def _snapshot(s: IniSection) -> list[tuple[str, str | None]]:
    return [(k, v.value) for k, v in s.items()]


# ---------------------------------------------------------------------------
# key comparer
# ---------------------------------------------------------------------------

def test_ignore_case_equality_and_hash_agree() -> None:
    assert IGNORE_CASE.equals("Straße", "STRASSE")
    assert IGNORE_CASE.hash("Straße") == IGNORE_CASE.hash("STRASSE")
    assert not ORDINAL.equals("a", "A")


def test_comparers_compare_by_fold() -> None:
    assert IGNORE_CASE == IGNORE_CASE
    assert IGNORE_CASE != ORDINAL


# ---------------------------------------------------------------------------
# mapping
# ---------------------------------------------------------------------------

def test_keys_case_insensitive_by_default() -> None:
    s = IniSection()
    s["Key"] = "v"
    assert s["KEY"].as_string() == "v"
    assert "key" in s
    s["key"] = "w"
    assert list(s) == ["Key"]
    assert s.get("kEy").value == "w"


def test_ordinal_comparer_is_case_sensitive() -> None:
    s = IniSection(comparer=ORDINAL)
    s["a"] = "1"
    s["A"] = "2"
    assert len(s) == 2
    assert s["a"].value == "1"


def test_get_missing_returns_sentinel() -> None:
    s = IniSection()
    assert s["nope"] is MISSING
    assert s.get("nope") is MISSING
    assert s["nope"].to_int(3) == 3


def test_assigned_objects_are_wrapped() -> None:
    s = IniSection()
    s["n"] = 3
    s["b"] = True
    s["v"] = IniValue(" x ")
    assert s["n"].to_int() == 3
    assert s["b"].to_bool() is True
    assert s["v"].value == " x "


def test_add_duplicate_raises_and_keeps_content() -> None:
    s = IniSection({"a": "1"})
    with pytest.raises(DuplicateKeyError):
        s.add("A", "2")
    assert _snapshot(s) == [("a", "1")]


def test_duplicate_key_error_is_key_error() -> None:
    with pytest.raises(KeyError):
        IniSection({"a": "1"}).add("a", "2")


def test_remove() -> None:
    s = IniSection({"a": "1", "b": "2"})
    assert s.remove("A") is True
    assert s.remove("a") is False
    assert list(s) == ["b"]


def test_del_missing_raises() -> None:
    with pytest.raises(KeyError):
        del IniSection()["x"]


def test_pop_and_setdefault() -> None:
    s = IniSection({"a": "1"})
    assert s.pop("missing", None) is None
    with pytest.raises(KeyError):
        s.pop("missing")
    assert s.pop("A").value == "1"
    assert s.setdefault("c", "3").value == "3"
    assert s.setdefault("C", "4").value == "3"


def test_copy_rekeys_with_collision() -> None:
    s = IniSection({"a": "1", "A": "2"}, ORDINAL)
    with pytest.raises(DuplicateKeyError):
        s.copy(IGNORE_CASE)


def test_copy_keeps_order_flag() -> None:
    s = _ordered("b", "a")
    c = s.copy(ORDINAL)
    assert c.ordered
    assert list(c) == ["b", "a"]
    assert c.comparer is ORDINAL


def test_equality_is_content_based() -> None:
    assert IniSection({"a": "1"}) == IniSection({"a": "1"})


def test_equality_uses_comparer() -> None:
    assert IniSection({"Key": "1"}) == IniSection({"KEY": "1"})
    assert IniSection({"Key": "1"}) != IniSection({"Key": "2"})
    assert IniSection({"a": "1"}, ORDINAL) != IniSection({"A": "1"}, ORDINAL)


# ---------------------------------------------------------------------------
# ordered mode
# ---------------------------------------------------------------------------

def test_set_appends_new_and_replaces_in_place() -> None:
    s = _ordered("a", "b")
    s["c"] = "new"
    s["A"] = "replaced"
    assert _snapshot(s) == [("a", "replaced"), ("b", "1"), ("c", "new")]


def test_remove_keeps_order_in_sync() -> None:
    s = _ordered("a", "b", "c")
    s.remove("B")
    assert list(s) == ["a", "c"]
    assert s.index_of("c") == 1


def test_toggle_does_not_restore_order() -> None:
    s = _ordered("a", "b")
    s.insert(0, "z", "first")
    assert list(s) == ["z", "a", "b"]
    s.ordered = False
    s.ordered = True
    assert list(s) != ["z", "a", "b"]
    assert sorted(s) == ["a", "b", "z"]


def test_clear_keeps_mode() -> None:
    s = _ordered("a")
    s.clear()
    assert len(s) == 0
    assert s.ordered
    s["x"] = "1"
    assert s.index_of("x") == 0


@pytest.mark.parametrize("call", [
    lambda s: s.index_of("a"),
    lambda s: s.last_index_of("a"),
    lambda s: s.insert(0, "x", "1"),
    lambda s: s.insert_range(0, [("x", "1")]),
    lambda s: s.remove_at(0),
    lambda s: s.remove_range(0, 1),
    lambda s: s.reverse(),
    lambda s: s[0],
    lambda s: s.__setitem__(0, "v"),
    lambda s: s.ordered_values(),
])
def test_positional_ops_need_order(call) -> None:
    s = IniSection({"a": "1"})
    with pytest.raises(InvalidOperationError):
        call(s)
    assert _snapshot(s) == [("a", "1")]


# ---------------------------------------------------------------------------
# positional operations
# ---------------------------------------------------------------------------

def test_index_of_and_last_index_of() -> None:
    s = _ordered("a", "b", "c", "d")
    assert s.index_of("C") == 2
    assert s.index_of("a", 1) == -1
    assert s.index_of("c", 1, 1) == -1
    assert s.last_index_of("b") == 1
    assert s.last_index_of("d", 0, 3) == -1
    assert s.index_of("missing") == -1


def test_index_of_at_end_is_empty_range() -> None:
    s = _ordered("a")
    assert s.index_of("a", 1) == -1


@pytest.mark.parametrize("index, count, error", [
    (-1, None, IndexRangeError),
    (4, None, IndexRangeError),
    (0, -1, CountRangeError),
    (2, 2, RangeOverflowError),
])
def test_range_validation(index: int, count: int | None, error: type) -> None:
    s = _ordered("a", "b", "c")
    with pytest.raises(error):
        s.index_of("a", index, count)
    with pytest.raises(error):
        s.last_index_of("a", index, count)


def test_insert() -> None:
    s = _ordered("a", "b")
    s.insert(1, "x", "v")
    s.insert(3, "y", "w")
    assert list(s) == ["a", "x", "b", "y"]


def test_insert_duplicate_leaves_section_unchanged() -> None:
    s = _ordered("a", "b")
    before = _snapshot(s)
    with pytest.raises(DuplicateKeyError):
        s.insert(0, "B", "v")
    assert _snapshot(s) == before


def test_insert_bad_index() -> None:
    s = _ordered("a")
    with pytest.raises(IndexRangeError):
        s.insert(2, "x", "v")
    assert list(s) == ["a"]


def test_insert_range() -> None:
    s = _ordered("a", "d")
    s.insert_range(1, [("b", "1"), ("c", "2")])
    s.insert_range(4, {"e": "3"})
    assert list(s) == ["a", "b", "c", "d", "e"]
    assert s["c"].value == "2"


def test_insert_range_is_all_or_nothing() -> None:
    s = _ordered("a", "b")
    before = _snapshot(s)
    with pytest.raises(DuplicateKeyError):
        s.insert_range(0, [("x", "1"), ("A", "2")])
    with pytest.raises(DuplicateKeyError):
        s.insert_range(0, [("y", "1"), ("Y", "2")])
    assert _snapshot(s) == before


def test_insert_range_none() -> None:
    with pytest.raises(ArgumentNullError):
        _ordered("a").insert_range(0, None)


def test_remove_at() -> None:
    s = _ordered("a", "b", "c")
    s.remove_at(1)
    assert list(s) == ["a", "c"]
    assert "b" not in s
    with pytest.raises(IndexRangeError):
        s.remove_at(2)
    assert list(s) == ["a", "c"]


def test_remove_range() -> None:
    s = _ordered("a", "b", "c", "d")
    s.remove_range(1, 2)
    assert list(s) == ["a", "d"]
    assert len(s) == 2
    with pytest.raises(RangeOverflowError):
        s.remove_range(1, 2)
    with pytest.raises(CountRangeError):
        s.remove_range(0, -1)
    assert list(s) == ["a", "d"]


def test_reverse() -> None:
    s = _ordered("a", "b", "c", "d")
    s.reverse()
    assert list(s) == ["d", "c", "b", "a"]
    s.reverse(1, 2)
    assert list(s) == ["d", "b", "c", "a"]
    with pytest.raises(RangeOverflowError):
        s.reverse(3, 2)


def test_positional_get_set() -> None:
    s = _ordered("a", "b")
    assert s[1].value == "1"
    s[0] = "zero"
    assert s["a"].value == "zero"
    assert s.key_at(1) == "b"
    assert [v.value for v in s.ordered_values()] == ["zero", "1"]
    with pytest.raises(IndexRangeError):
        s[2]
    with pytest.raises(IndexRangeError):
        s[-1] = "x"
