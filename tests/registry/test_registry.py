import pytest

from typetag.allocation.id_space import IDSpace
from typetag.errors import DuplicateNameError
from typetag.registry.registry import Assignment, TagRegistry


def test_insert_and_lookup():
    reg = TagRegistry()
    assert reg.insert("A", 5) is None
    assert reg.by_name("A") == Assignment("A", 5)
    assert reg.by_id(5) == Assignment("A", 5)
    assert reg.by_name("B") is None
    assert reg.by_id(0) is None


def test_insert_conflicting_id_returns_existing_name():
    reg = TagRegistry()
    reg.insert("A", 5)
    assert reg.insert("B", 5) == "A"
    assert "B" not in reg
    assert len(reg) == 1


def test_insert_same_pair_is_noop():
    reg = TagRegistry()
    reg.insert("A", 5)
    assert reg.insert("A", 5) is None
    assert len(reg) == 1


def test_rebinding_name_to_another_id_is_rejected():
    reg = TagRegistry()
    reg.insert("A", 5)
    with pytest.raises(DuplicateNameError):
        reg.insert("A", 6)
    assert reg.by_id(6) is None


def test_remove_clears_both_indices():
    reg = TagRegistry()
    reg.insert("A", 5)
    reg.remove("A")
    reg.remove("missing")
    assert reg.by_name("A") is None
    assert reg.by_id(5) is None
    assert len(reg) == 0


def test_insert_consumes_ids_in_range_only():
    space = IDSpace(0, 10)
    reg = TagRegistry(space)
    reg.insert("A", 3)
    reg.insert("B", 150)
    assert 3 not in space
    assert len(space) == 10
    assert reg.by_id(150) == Assignment("B", 150)


def test_bind_space_consumes_existing_ids():
    reg = TagRegistry()
    reg.insert("A", 1)
    reg.insert("B", 2)
    space = IDSpace(0, 3)
    reg.bind_space(space)
    assert len(space) == 2
    reg.insert("C", 3)
    assert len(space) == 1


def test_sort_orders_by_id():
    reg = TagRegistry()
    reg.insert("C", 30)
    reg.insert("A", 10)
    reg.insert("B", 20)
    reg.sort()
    assert [a.name for a in reg] == ["A", "B", "C"]
    assert reg.to_dict() == {"A": 10, "B": 20, "C": 30}
