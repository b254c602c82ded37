from types import SimpleNamespace

import pytest

from syringe.errors import PathConflictError
from syringe.paths import assign, has_own, read_path, split_path, write_path


def test_split_path_drops_empty_segments():
    assert split_path("a..b.c.", ".") == ["a", "b", "c"]
    assert split_path("a#b", "#") == ["a", "b"]
    assert split_path("", ".") == []


def test_read_path_walks_nested_mappings():
    tree = {"first": {"second": {"third": "done"}}}

    assert read_path("first.second.third", tree, ".") == "done"
    assert read_path("first/second", tree, "/") == {"third": "done"}


def test_read_path_short_circuits_on_missing_segment():
    tree = {"first": {"second": "done"}}

    assert read_path("first.missing.third", tree, ".") is None
    assert read_path("first.second.third", tree, ".") is None


def test_read_path_with_no_segments_returns_root():
    tree = {"a": 1}

    assert read_path("", tree, ".") is tree
    assert read_path("...", tree, ".") is tree


def test_read_path_indexes_lists_and_attributes():
    tree = {"items": ["zero", "one"], "ns": SimpleNamespace(value=3)}

    assert read_path("items.1", tree, ".") == "one"
    assert read_path("items.5", tree, ".") is None
    assert read_path("ns.value", tree, ".") == 3


def test_write_path_creates_missing_containers():
    tree = {"a": {"keep": 1}}

    inner = write_path("a.b.c", tree, ".")
    inner["leaf"] = "done"

    assert tree == {"a": {"keep": 1, "b": {"c": {"leaf": "done"}}}}


def test_write_path_creates_namespaces_inside_objects():
    root = SimpleNamespace()

    parent = write_path("x.y", root, ".")
    assign(parent, "f", "done")

    assert root.x.y.f == "done"


def test_write_path_refuses_to_overwrite_scalar_segments():
    tree = {"a": "scalar"}

    with pytest.raises(PathConflictError, match="Cannot write below 'a'"):
        write_path("a.b", tree, ".")

    assert tree == {"a": "scalar"}


def test_write_path_fills_none_segments():
    tree = {"a": None}

    write_path("a.b", tree, ".")["c"] = 1

    assert tree == {"a": {"b": {"c": 1}}}


def test_write_path_walks_into_lists():
    tree = {"items": [{"name": "zero"}, None]}

    write_path("items.0", tree, ".")["name"] = "first"
    write_path("items.1", tree, ".")["name"] = "second"

    assert tree == {"items": [{"name": "first"}, {"name": "second"}]}


def test_assign_sets_list_elements_by_index():
    items = [1, 2]

    assign(items, "0", "a")
    assign(items, "-1", "b")

    assert items == ["a", "b"]


@pytest.mark.parametrize(
    "container, key",
    [([1, 2], "2"), ([1, 2], "first"), ((1, 2), "0")],
)
def test_assign_outside_a_writable_list_raises(container, key):
    with pytest.raises(PathConflictError):
        assign(container, key, "value")


def test_has_own_distinguishes_none_valued_keys():
    assert has_own({"a": None}, "a")
    assert not has_own({}, "a")
    assert has_own(SimpleNamespace(a=None), "a")
    assert not has_own(None, "a")
    assert has_own([None], "0")
    assert not has_own([None], "1")
