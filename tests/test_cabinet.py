import pytest

from syringe.cabinet import BindingTable
from syringe.config import RegistrySettings
from syringe.builders import create


def process(data):
    return data


@pytest.fixture
def registry(root):
    return create({"data": "done"}, RegistrySettings(root=root, max_bindings=2))


def test_table_is_unbounded_by_default(make_registry):
    registry = make_registry({"data": "done"})

    for _ in range(10):
        registry.bind(["data"], process)

    assert len(registry.bindings) == 10


def test_capped_table_discards_oldest_record(registry):
    first = registry.bind(["data"], process)
    second = registry.bind(["data"], process)
    third = registry.bind(["data"], process)

    assert len(registry.bindings) == 2
    assert first not in registry.bindings
    assert [r.bound for r in registry.bindings] == [second, third]
    assert first() == "done"


def test_evict_forgets_a_binding(registry):
    f = registry.bind(["data"], process)

    assert registry.bindings.evict(f) is True
    assert registry.bindings.evict(f) is False
    assert registry.bindings.find_bound(f) is None
    assert len(registry.bindings) == 0


def test_new_table_is_empty():
    table = BindingTable()

    assert table.find_target(process) == []
    assert list(table) == []
