"""Kinds, optional dereference, zero values, and per-class declared-field tables."""

from __future__ import annotations

import collections.abc
import dataclasses
import enum
import functools
import inspect
import types
from dataclasses import MISSING, dataclass
from enum import StrEnum
from typing import Annotated, Any, Final, Literal, Union, get_args, get_origin, get_type_hints

from fieldmap.constants import EMBED_METADATA_KEY, PRIVATE_PREFIX
from fieldmap.observability.logging import get_logger

_NONE_TYPE: Final[type] = type(None)

# Abstract container annotations and the concrete type used for their zero value.
_CONCRETE_CONTAINERS: Final[dict[object, type]] = {
    collections.abc.Mapping: dict,
    collections.abc.MutableMapping: dict,
    collections.abc.Sequence: list,
    collections.abc.MutableSequence: list,
    collections.abc.Collection: list,
    collections.abc.Iterable: list,
    collections.abc.Set: frozenset,
    collections.abc.MutableSet: set,
}

_logger = get_logger(__name__)


class Kind(StrEnum):
    """Coarse classification of a declared type or a live value."""

    RECORD = "record"
    OPTIONAL = "optional"
    MAPPING = "mapping"
    SEQUENCE = "sequence"
    SCALAR = "scalar"
    NONE = "none"


class InvalidUsageError(TypeError):
    """Raised when an operation is handed a value or type of the wrong kind.

    This is a programmer error: ``method`` names the violated operation and
    ``kind`` the kind that was actually received.
    """

    def __init__(self, method: str, kind: Kind) -> None:
        self.method = method
        self.kind = kind
        super().__init__(f"call of {method} on {kind.value} value; expected {Kind.RECORD.value}")


@dataclass(frozen=True, slots=True)
class DeclaredField:
    """One dataclass field with its declared position and resolved annotation."""

    position: int
    field: dataclasses.Field[Any]
    type: Any

    @property
    def name(self) -> str:
        return self.field.name

    @property
    def exported(self) -> bool:
        return not self.field.name.startswith(PRIVATE_PREFIX)

    @property
    def embedded(self) -> bool:
        return bool(self.field.metadata.get(EMBED_METADATA_KEY, False))


def embed(
    *,
    default: Any = MISSING,
    default_factory: Any = MISSING,
    metadata: collections.abc.Mapping[str, object] | None = None,
    **tags: str,
) -> Any:
    """Declare an embedded record field whose fields are promoted into the owner.

    Keyword ``tags`` become field metadata, so ``embed(db="base")`` tags the
    embedding field the same way ``field(metadata={"db": "base"})`` would.
    """

    merged: dict[str, object] = {**(metadata or {}), **tags, EMBED_METADATA_KEY: True}
    return dataclasses.field(default=default, default_factory=default_factory, metadata=merged)


def is_record_type(tp: object) -> bool:
    return isinstance(tp, type) and dataclasses.is_dataclass(tp)


def deref(tp: Any) -> Any:
    """Unwrap one level of ``Optional[...]`` (and any ``Annotated`` wrapper)."""

    tp = _strip_annotated(tp)
    if _is_union(get_origin(tp)):
        args = get_args(tp)
        present = tuple(arg for arg in args if arg is not _NONE_TYPE)
        if len(present) == 1 and len(present) != len(args):
            return _strip_annotated(present[0])
    return tp


def kind_of(tp: Any) -> Kind:
    """Classify a declared type annotation."""

    tp = _strip_annotated(tp)
    if tp is None or tp is _NONE_TYPE:
        return Kind.NONE
    if is_record_type(tp):
        return Kind.RECORD

    origin = get_origin(tp)
    if _is_union(origin):
        return Kind.OPTIONAL if _NONE_TYPE in get_args(tp) else Kind.SCALAR

    target = origin if origin is not None else tp
    if isinstance(target, type):
        if issubclass(target, collections.abc.Mapping):
            return Kind.MAPPING
        if issubclass(target, (str, bytes, bytearray)):
            return Kind.SCALAR
        if issubclass(target, (collections.abc.Sequence, collections.abc.Set)):
            return Kind.SEQUENCE
    return Kind.SCALAR


def kind_of_value(value: object) -> Kind:
    """Classify a live value."""

    if value is None:
        return Kind.NONE
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return Kind.RECORD
    if isinstance(value, collections.abc.Mapping):
        return Kind.MAPPING
    if isinstance(value, (str, bytes, bytearray)):
        return Kind.SCALAR
    if isinstance(value, (collections.abc.Sequence, collections.abc.Set)):
        return Kind.SEQUENCE
    return Kind.SCALAR


def must_be_record_type(tp: Any, method: str) -> None:
    kind = kind_of(tp)
    if kind is not Kind.RECORD:
        raise InvalidUsageError(method, kind)


def must_be_record(value: object, method: str) -> None:
    kind = kind_of_value(value)
    if kind is not Kind.RECORD:
        raise InvalidUsageError(method, kind)


def zero_value(tp: Any) -> Any:
    """Build the zero value of ``tp``.

    Records are instantiated with their own defaults where declared and the
    zero value of each remaining field otherwise. ``Optional`` types, ``Any``
    and anything that cannot be constructed without arguments yield ``None``.
    """

    tp = _strip_annotated(tp)
    if tp is None or tp is _NONE_TYPE or tp is Any:
        return None
    if is_record_type(tp):
        return _zero_record(tp)

    supertype = getattr(tp, "__supertype__", None)
    if supertype is not None:
        return zero_value(supertype)

    origin = get_origin(tp)
    if _is_union(origin):
        args = get_args(tp)
        if _NONE_TYPE in args:
            return None
        return zero_value(args[0])
    if origin is Literal:
        return get_args(tp)[0]

    target = origin if origin is not None else tp
    if not isinstance(target, type):
        return None
    if issubclass(target, enum.Enum):
        return next(iter(target), None)

    concrete = _CONCRETE_CONTAINERS.get(target, target)
    if inspect.isabstract(concrete):
        return None
    try:
        return concrete()
    except TypeError:
        return None


@functools.cache
def declared_fields(cls: type) -> tuple[DeclaredField, ...]:
    """Return the declared fields of dataclass ``cls`` in declaration order."""

    hints = _resolve_hints(cls)
    return tuple(
        DeclaredField(position=position, field=item, type=hints.get(item.name, item.type))
        for position, item in enumerate(dataclasses.fields(cls))
    )


def _zero_record(cls: type) -> Any:
    kwargs: dict[str, Any] = {}
    for declared in declared_fields(cls):
        item = declared.field
        if not item.init:
            continue
        if item.default is not MISSING or item.default_factory is not MISSING:
            continue
        kwargs[item.name] = zero_value(declared.type)
    # Required ``InitVar`` arguments and ``__post_init__`` checks can reject zeros.
    try:
        return cls(**kwargs)
    except (TypeError, ValueError):
        return None


def _resolve_hints(cls: type) -> dict[str, Any]:
    try:
        return get_type_hints(cls, include_extras=True)
    except (NameError, TypeError) as exc:
        error = str(exc)

    hints: dict[str, Any] = {}
    unresolved: list[str] = []
    for owner in reversed(cls.__mro__):
        for name, annotation in _own_annotations(owner).items():
            try:
                hints[name] = _resolve_annotation(owner, name, annotation)
            except (NameError, TypeError):
                # Left out so the raw ``Field.type`` is used for this field only.
                hints.pop(name, None)
                unresolved.append(name)

    _logger.warning(
        "fieldmap_annotations_unresolved",
        record=cls.__qualname__,
        fields=unresolved,
        error=error,
    )
    return hints


def _own_annotations(owner: type) -> dict[str, Any]:
    try:
        return dict(inspect.get_annotations(owner))
    except NameError:
        return {}


def _resolve_annotation(owner: type, name: str, annotation: Any) -> Any:
    holder = type(
        owner.__name__,
        (),
        {"__annotations__": {name: annotation}, "__module__": owner.__module__},
    )
    return get_type_hints(holder, localns=dict(vars(owner)), include_extras=True)[name]


def _strip_annotated(tp: Any) -> Any:
    while get_origin(tp) is Annotated:
        tp = get_args(tp)[0]
    return tp


def _is_union(origin: object) -> bool:
    return origin is Union or origin is types.UnionType


__all__ = [
    "DeclaredField",
    "InvalidUsageError",
    "Kind",
    "declared_fields",
    "deref",
    "embed",
    "is_record_type",
    "kind_of",
    "kind_of_value",
    "must_be_record",
    "must_be_record_type",
    "zero_value",
]
