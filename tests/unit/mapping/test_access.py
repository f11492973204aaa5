"""Location-path navigation with and without allocation."""

from __future__ import annotations

import copy

import pytest

from fieldmap.access import (
    FieldSlot,
    field_by_indexes,
    field_by_indexes_read_only,
    slot_by_indexes,
)
from fieldmap.typeinfo import InvalidUsageError

from . import Branch, Leaf, Person, Root


def test_mutable_walk_allocates_through_none_chain() -> None:
    root = Root()

    value = field_by_indexes(root, (0, 0, 0))

    assert value == 0
    assert root.branch == Branch(leaf=Leaf(value=0), labels=None)


def test_mutable_walk_initializes_missing_mapping() -> None:
    root = Root(branch=Branch())

    labels = field_by_indexes(root, (0, 1))
    labels["env"] = "prod"

    assert root.branch is not None
    assert root.branch.labels == {"env": "prod"}


def test_mutable_walk_allocates_optional_scalar() -> None:
    root = Root()

    assert field_by_indexes(root, (1,)) == ""
    assert root.note == ""


def test_slot_write_reaches_record_through_none_chain() -> None:
    root = Root()

    slot = slot_by_indexes(root, (0, 0, 0))
    slot.set(7)

    assert isinstance(slot, FieldSlot)
    assert slot.get() == 7
    assert root.branch is not None
    assert root.branch.leaf == Leaf(value=7)


def test_slot_leaves_final_attribute_untouched() -> None:
    root = Root()

    slot = slot_by_indexes(root, (0, 1))

    assert root.branch is not None
    assert root.branch.labels is None
    assert slot.attribute == "labels"


def test_slot_rejects_empty_location_path() -> None:
    with pytest.raises(ValueError, match="must not be empty"):
        slot_by_indexes(Person(), ())


def test_read_only_walk_never_mutates() -> None:
    root = Root()
    before = copy.deepcopy(root)

    assert field_by_indexes_read_only(root, (0, 0, 0)) is None
    assert field_by_indexes_read_only(root, (1,)) is None
    assert root == before


def test_read_only_walk_reads_populated_values() -> None:
    person = Person(name="ada")
    person.addr.city = "London"

    assert field_by_indexes_read_only(person, (1, 0)) == "London"
    assert field_by_indexes_read_only(person, ()) is person


def test_walk_into_non_record_is_a_contract_violation() -> None:
    person = Person(name="ada")

    with pytest.raises(InvalidUsageError) as excinfo:
        field_by_indexes(person, (0, 0))

    assert excinfo.value.method == "field_by_indexes"
