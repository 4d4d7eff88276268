"""Merge engine tests."""
import pytest

import preset_bundles as pb
from preset_bundles import KeyOrigin


def test_merge_example():
    base = {"x": 1, "y": {"a": 1}}
    child = {"y": {"b": 2}, "inherits": "System"}

    assert pb.merge(base, child) == {"x": 1, "y": {"a": 1, "b": 2}}


def test_child_inherits_is_dropped():
    merged = pb.merge({"name": "base"}, {"inherits": "Generic PLA", "name": "child"})

    assert pb.INHERITS not in merged
    assert merged["name"] == "child"


def test_base_inherits_is_kept():
    merged = pb.merge(
        {"inherits": "Generic PLA @System", "temp": ["200"]},
        {"inherits": "something else"},
    )

    assert merged["inherits"] == "Generic PLA @System"


def test_nested_inherits_is_not_stripped():
    merged = pb.merge({}, {"extra": {"inherits": "kept"}})

    assert merged == {"extra": {"inherits": "kept"}}


def test_scalar_child_value_wins():
    merged = pb.merge(
        {"a": 1, "b": "base", "c": None}, {"a": 2, "b": "child", "c": False}
    )

    assert merged == {"a": 2, "b": "child", "c": False}


def test_lists_are_replaced_not_concatenated():
    merged = pb.merge(
        {"nozzle_temperature": ["200", "205"], "compat": ["X1", "P1"]},
        {"nozzle_temperature": ["215"]},
    )

    assert merged["nozzle_temperature"] == ["215"]
    assert merged["compat"] == ["X1", "P1"]


def test_object_replaced_by_scalar_and_back():
    assert pb.merge({"a": {"b": 1}}, {"a": 3}) == {"a": 3}
    assert pb.merge({"a": 3}, {"a": {"b": 1}}) == {"a": {"b": 1}}


def test_deep_recursive_merge():
    base = {"a": {"b": {"c": 1, "d": 2}, "e": 3}}
    child = {"a": {"b": {"d": 20, "f": 4}}}

    assert pb.merge(base, child) == {"a": {"b": {"c": 1, "d": 20, "f": 4}, "e": 3}}


def test_inputs_are_not_modified():
    base = {"y": {"a": 1}, "list": [1]}
    child = {"y": {"b": 2}, "inherits": "System"}

    merged = pb.merge(base, child)
    merged["y"]["a"] = 99
    merged["list"].append(2)

    assert base == {"y": {"a": 1}, "list": [1]}
    assert child == {"y": {"b": 2}, "inherits": "System"}


@pytest.mark.parametrize("base, child", [([], {}), ({}, "text"), (None, {})])
def test_non_objects_raise(base, child):
    with pytest.raises(pb.MergeError):
        pb.merge(base, child)


def test_load_document_rejects_non_objects(tmp_path):
    path = tmp_path / "list.json"
    path.write_text("[1, 2]", encoding="utf-8")

    with pytest.raises(pb.MergeError):
        pb.load_document(path)


def test_load_document_bad_json(tmp_path):
    path = tmp_path / "bad.json"
    path.write_text("{not json", encoding="utf-8")

    with pytest.raises(pb.MergeError):
        pb.load_document(path)


def test_key_origins():
    base = {"kept": 1, "replaced": [1], "nested": {"a": 1}}
    child = {"replaced": [2], "nested": {"b": 2}, "new": "x", "inherits": "Sys"}

    assert pb.key_origins(base, child) == {
        "kept": KeyOrigin.BASE,
        "replaced": KeyOrigin.OVERRIDE,
        "nested": KeyOrigin.MERGED,
        "new": KeyOrigin.ADDED,
    }
