import logging
import types

import pytest

from raw_mailer.map_utils import (
    KeyValue,
    case_insensitive_access,
    cleanup,
    extract_value_from_map_ignore_case,
    find_value,
    find_value_dot_path,
    from_key_value_list,
    group_by_property,
    map_by_unique_property,
    safe_call_function,
    simple_deep_compare,
    to_key_value_list,
)


def test_map_by_unique_property_with_dicts_and_objects():
    alice = {"id": 1, "name": "alice"}
    bob = types.SimpleNamespace(id=2, name="bob")

    mapped = map_by_unique_property([alice, bob], "id")

    assert mapped == {1: alice, 2: bob}


@pytest.mark.parametrize(
    "items,prop",
    [
        (None, "id"),
        ([{"id": 1}], ""),
        ([{"id": 1}, {"name": "no id"}], "id"),
        ([{"id": 1}, {"id": 1}], "id"),
        ([None], "id"),
    ],
)
def test_map_by_unique_property_errors(items, prop):
    with pytest.raises(ValueError):
        map_by_unique_property(items, prop)


def test_group_by_property_keeps_input_order():
    rows = [{"team": "a", "n": 1}, {"team": "b", "n": 2}, {"team": "a", "n": 3}]

    grouped = group_by_property(rows, "team")

    assert list(grouped) == ["a", "b"]
    assert [row["n"] for row in grouped["a"]] == [1, 3]


def test_group_by_property_rejects_missing_values():
    with pytest.raises(ValueError):
        group_by_property([{"team": None}], "team")


def test_find_value_and_dot_path():
    doc = {"a": {"b": {"c": 0}}, "list": []}

    assert find_value(doc, ["a", "b", "c"]) == 0
    assert find_value(doc, []) is doc
    assert find_value(doc, ["a", "missing", "c"]) is None
    assert find_value(None, ["a"]) is None
    assert find_value_dot_path(doc, "a.b") == {"c": 0}
    assert find_value_dot_path(doc, "") is doc
    assert find_value_dot_path(None, "a.b") is None


def test_simple_deep_compare():
    assert simple_deep_compare(None, None) is True
    assert simple_deep_compare({"a": 1}, None) is False
    assert simple_deep_compare({"a": [1, {"b": 2}]}, {"a": [1, {"b": 2}]}) is True
    assert simple_deep_compare({"a": 1, "b": 2}, {"b": 2, "a": 1}) is False
    assert simple_deep_compare([1, 2], [2, 1]) is False


def test_key_value_list_round_trip():
    pairs = to_key_value_list({"x": 1, "y": "two"})

    assert pairs == [KeyValue(key="x", value=1), KeyValue(key="y", value="two")]
    assert from_key_value_list(pairs) == {"x": 1, "y": "two"}


def test_cleanup_strips_empty_values_recursively():
    source = {
        "name": "ann",
        "nickname": "",
        "age": None,
        "score": 0,
        "active": False,
        "address": {"street": "", "city": "Rome", "zip": None},
        "tags": [{"label": "", "id": 1}, "x", None],
    }

    cleaned = cleanup(source)

    assert cleaned == {
        "name": "ann",
        "score": 0,
        "active": False,
        "address": {"city": "Rome"},
        "tags": [{"id": 1}, "x", None],
    }
    assert source["nickname"] == ""
    assert source["address"]["zip"] is None


def test_cleanup_flags():
    source = {"zero": 0, "flag": False, "none": None, "empty": "", "nested": {"zero": 0}}

    cleaned = cleanup(source, strip_zero=True, strip_null=False, strip_empty_string=False)

    assert cleaned == {"flag": False, "none": None, "empty": "", "nested": {"zero": 0}}


def test_cleanup_nested_values_use_default_flags():
    source = {"a": {"b": None, "c": ""}, "items": [{"d": None}], "e": None}

    cleaned = cleanup(source, strip_null=False, strip_empty_string=False)

    assert cleaned == {"a": {}, "items": [{}], "e": None}


def test_cleanup_returns_scalars_unchanged():
    assert cleanup(None) is None
    assert cleanup("text") == "text"
    assert cleanup(5) == 5


def test_extract_value_from_map_ignore_case_warns_on_duplicates(caplog):
    headers = {"Content-Type": "text/html", "content-type": "text/plain", "X": "y"}

    with caplog.at_level(logging.WARNING):
        value = extract_value_from_map_ignore_case(headers, "CONTENT-TYPE")

    assert value == "text/plain"
    assert "Multiple entries found" in caplog.text
    assert extract_value_from_map_ignore_case(headers, "missing") is None
    assert extract_value_from_map_ignore_case(None, "X") is None


def test_safe_call_function(caplog):
    calls = []
    ok = types.SimpleNamespace(close=lambda: calls.append("closed"))

    def explode():
        raise RuntimeError("boom")

    broken = types.SimpleNamespace(close=explode, name="not callable")

    assert safe_call_function(ok, "close") is True
    assert calls == ["closed"]
    with caplog.at_level(logging.WARNING):
        assert safe_call_function(broken, "close") is False
    assert "boom" in caplog.text
    assert safe_call_function(broken, "name") is False
    assert safe_call_function(ok, "missing") is False
    assert safe_call_function(None, "close") is False


def test_case_insensitive_access():
    data = {"Authorization": "Bearer t", "empty": "", "EMPTY": "fallback"}

    assert case_insensitive_access(data, "Authorization") == "Bearer t"
    assert case_insensitive_access(data, "authorization") == "Bearer t"
    assert case_insensitive_access(data, "empty") == ""
    assert case_insensitive_access(data, "missing") is None
    assert case_insensitive_access(None, "x") is None
