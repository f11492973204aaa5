"""Navigate live records by location path (declared field positions)."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Any

from fieldmap.typeinfo import DeclaredField, declared_fields, deref, must_be_record, zero_value


@dataclass(frozen=True, slots=True)
class FieldSlot:
    """Writable handle on one attribute of a live record."""

    owner: Any
    attribute: str

    def get(self) -> Any:
        return getattr(self.owner, self.attribute)

    def set(self, value: Any) -> None:
        setattr(self.owner, self.attribute, value)


def field_by_indexes(record: Any, indexes: Sequence[int]) -> Any:
    """Return the value at ``indexes``, allocating ``None`` levels on the way.

    Every visited attribute that holds ``None`` is replaced with the zero value
    of its declared (dereferenced) type, so a chain of unset optional records
    or mappings becomes reachable for writing.
    """

    value = record
    for position in indexes:
        value = _descend(value, position, "field_by_indexes")
    return value


def field_by_indexes_read_only(record: Any, indexes: Sequence[int]) -> Any:
    """Return the value at ``indexes`` without allocating; ``None`` short-circuits."""

    value = record
    for position in indexes:
        if value is None:
            return None
        declared = _declared_at(value, position, "field_by_indexes_read_only")
        value = getattr(value, declared.name)
    return value


def slot_by_indexes(record: Any, indexes: Sequence[int]) -> FieldSlot:
    """Return a writable slot for the field at ``indexes``.

    Intermediate levels are allocated like :func:`field_by_indexes`; the final
    attribute is left untouched.
    """

    if not indexes:
        raise ValueError("location path must not be empty")

    owner = record
    for position in indexes[:-1]:
        owner = _descend(owner, position, "slot_by_indexes")
    declared = _declared_at(owner, indexes[-1], "slot_by_indexes")
    return FieldSlot(owner=owner, attribute=declared.name)


def _descend(owner: Any, position: int, method: str) -> Any:
    declared = _declared_at(owner, position, method)
    value = getattr(owner, declared.name)
    if value is None:
        allocated = zero_value(deref(declared.type))
        if allocated is not None:
            setattr(owner, declared.name, allocated)
            value = allocated
    return value


def _declared_at(owner: Any, position: int, method: str) -> DeclaredField:
    must_be_record(owner, method)
    return declared_fields(type(owner))[position]


__all__ = [
    "FieldSlot",
    "field_by_indexes",
    "field_by_indexes_read_only",
    "slot_by_indexes",
]
