"""Kind classification, optional dereference, zero values, and declared-field tables."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from typing import Annotated, Any, Literal, Optional

import pytest

from fieldmap.discovery import get_mapping
from fieldmap.typeinfo import (
    InvalidUsageError,
    Kind,
    declared_fields,
    deref,
    kind_of,
    kind_of_value,
    must_be_record,
    must_be_record_type,
    zero_value,
)

from . import Address, Color, Derived, Needs, Person, Positive, Required, UserId


@pytest.mark.parametrize(
    ("annotation", "expected"),
    [
        (Person, Kind.RECORD),
        (Optional[Person], Kind.OPTIONAL),
        (int | None, Kind.OPTIONAL),
        (dict[str, int], Kind.MAPPING),
        (Mapping[str, int], Kind.MAPPING),
        (list[int], Kind.SEQUENCE),
        (Sequence[str], Kind.SEQUENCE),
        (str, Kind.SCALAR),
        (bytes, Kind.SCALAR),
        (int | str, Kind.SCALAR),
        (Annotated[Person, "meta"], Kind.RECORD),
        (None, Kind.NONE),
    ],
)
def test_kind_of_classifies_declared_types(annotation: Any, expected: Kind) -> None:
    assert kind_of(annotation) is expected


def test_kind_of_value_classifies_live_values() -> None:
    assert kind_of_value(Person()) is Kind.RECORD
    assert kind_of_value(Person) is Kind.SCALAR
    assert kind_of_value({"a": 1}) is Kind.MAPPING
    assert kind_of_value([1, 2]) is Kind.SEQUENCE
    assert kind_of_value("text") is Kind.SCALAR
    assert kind_of_value(None) is Kind.NONE


def test_deref_unwraps_one_optional_level() -> None:
    assert deref(Optional[Person]) is Person
    assert deref(Person | None) is Person
    assert deref(Person) is Person
    assert deref(Annotated[Optional[int], "meta"]) is int
    assert deref(int | str) == int | str


def test_must_be_record_reports_operation_and_kind() -> None:
    with pytest.raises(InvalidUsageError) as excinfo:
        must_be_record(42, "field_by_name")

    assert excinfo.value.method == "field_by_name"
    assert excinfo.value.kind is Kind.SCALAR
    assert "call of field_by_name on scalar value" in str(excinfo.value)
    assert isinstance(excinfo.value, TypeError)


def test_must_be_record_type_rejects_non_records() -> None:
    must_be_record_type(Person, "get_mapping")
    with pytest.raises(InvalidUsageError) as excinfo:
        must_be_record_type(dict[str, int], "get_mapping")
    assert excinfo.value.kind is Kind.MAPPING


@pytest.mark.parametrize(
    ("annotation", "expected"),
    [
        (int, 0),
        (str, ""),
        (bool, False),
        (dict[str, int], {}),
        (Mapping[str, int], {}),
        (Sequence[int], []),
        (Optional[int], None),
        (Any, None),
        (Literal["a", "b"], "a"),
        (UserId, 0),
        (Color, Color.RED),
    ],
)
def test_zero_value_of_scalars_and_containers(annotation: Any, expected: object) -> None:
    assert zero_value(annotation) == expected


def test_zero_value_of_record_honours_defaults_and_fills_required_fields() -> None:
    assert zero_value(Person) == Person(name="", addr=Address(city=""))
    assert zero_value(Required) == Required(
        count=0,
        label="",
        color=Color.RED,
        owner=UserId(0),
        tags=[],
    )


def test_zero_value_is_none_when_record_rejects_construction() -> None:
    assert zero_value(Needs) is None
    assert zero_value(Positive) is None


def test_declared_fields_are_positional_and_cached() -> None:
    fields = declared_fields(Derived)

    assert [(item.position, item.name) for item in fields] == [(0, "base"), (1, "extra")]
    assert fields[0].embedded is True
    assert fields[1].embedded is False
    assert fields[0].type is declared_fields(Derived)[0].type
    assert declared_fields(Derived) is fields


def test_declared_fields_resolve_string_annotations() -> None:
    fields = declared_fields(Person)
    assert fields[1].type is Address


def test_unresolvable_annotations_fall_back_and_warn(caplog: pytest.LogCaptureFixture) -> None:
    @dataclass
    class Dangling:
        ref: UndefinedThing = None  # type: ignore[name-defined]  # noqa: F821
        count: int = field(default=0)

    with caplog.at_level(logging.WARNING, logger="fieldmap"):
        fields = declared_fields(Dangling)

    assert [item.type for item in fields] == ["UndefinedThing", int]
    events = [record.msg for record in caplog.records if isinstance(record.msg, dict)]
    assert [event["event"] for event in events] == ["fieldmap_annotations_unresolved"]
    assert events[0]["record"].endswith("Dangling")
    assert events[0]["fields"] == ["ref"]


def test_unresolvable_annotation_does_not_stop_walking_siblings() -> None:
    @dataclass
    class PartlyDangling:
        ref: UndefinedThing = None  # type: ignore[name-defined]  # noqa: F821
        addr: Address = field(default_factory=Address, metadata={"db": "addr"})

    fields = get_mapping(PartlyDangling, "db")

    assert fields.paths() == ["", "addr", "addr.city"]
    assert fields[1].type is Address
