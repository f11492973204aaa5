"""
Breadth-first discovery of the addressable fields of a record type.

Discovery walks the declared fields of a dataclass, queueing embedded records
and nested record fields so that every field reachable from the root gets a
location path (declared positions) and a logical dot-joined path. Results are
ordered breadth-first, which gives shallow fields precedence over same-named
fields promoted from deeper embedding levels.

Naming per field:
- the tag value when the mapper's tag key is present in the field metadata
- otherwise ``map_func(attribute name)`` when a name transform is configured
- otherwise the empty name
A ``,``-separated suffix is parsed into options; the name ``-`` removes the
field (and everything beneath it) from the result.
"""

from __future__ import annotations

from collections import deque
from collections.abc import Callable
from dataclasses import dataclass, replace
from types import MappingProxyType

from fieldmap.constants import (
    OPTION_SEPARATOR,
    OPTION_VALUE_SEPARATOR,
    PATH_SEPARATOR,
    SKIP_NAME,
)
from fieldmap.descriptors import FieldInfo, Fields
from fieldmap.typeinfo import (
    Kind,
    declared_fields,
    deref,
    kind_of,
    must_be_record_type,
    zero_value,
)

NameFunc = Callable[[str], str]


@dataclass(frozen=True, slots=True)
class NamingPolicy:
    """How declared fields map to logical names; fixed per mapper."""

    tag_name: str = ""
    map_func: NameFunc | None = None
    tag_map_func: NameFunc | None = None


@dataclass(frozen=True, slots=True)
class _Pending:
    record: type
    parent: FieldInfo | None
    parent_path: str


def parse_name(raw: str) -> tuple[str, dict[str, str]]:
    """Split ``"name,opt,key=value"`` into the name and its options."""

    parts = raw.split(OPTION_SEPARATOR)
    if len(parts) == 1:
        return raw, {}

    options: dict[str, str] = {}
    for option in parts[1:]:
        pair = option.split(OPTION_VALUE_SEPARATOR)
        options[pair[0]] = pair[1] if len(pair) > 1 else ""
    return parts[0], options


def get_mapping(
    cls: type,
    tag_name: str = "",
    map_func: NameFunc | None = None,
    tag_map_func: NameFunc | None = None,
) -> Fields:
    """Discover every addressable field of record type ``cls``."""

    root = deref(cls)
    must_be_record_type(root, "get_mapping")

    discovered: list[FieldInfo] = []
    queue: deque[_Pending] = deque([_Pending(record=root, parent=None, parent_path="")])

    while queue:
        pending = queue.popleft()
        parent_index = pending.parent.index if pending.parent is not None else ()

        for declared in declared_fields(pending.record):
            metadata = declared.field.metadata
            has_tag = bool(tag_name) and tag_name in metadata

            tag = ""
            if has_tag:
                tag = str(metadata[tag_name])
                raw_name = tag
            elif map_func is not None:
                raw_name = map_func(declared.name)
            else:
                raw_name = ""

            name, options = parse_name(raw_name)
            if tag_map_func is not None:
                tag = tag_map_func(tag)

            if pending.parent_path:
                path = f"{pending.parent_path}{PATH_SEPARATOR}{name}"
            else:
                path = name

            if name == SKIP_NAME:
                continue
            if not declared.exported:
                continue

            info = FieldInfo(
                index=(*parent_index, declared.position),
                path=path,
                name=name,
                field=declared.field,
                type=declared.type,
                zero=zero_value(declared.type),
                options=MappingProxyType(options),
                tag=tag,
            )

            if declared.embedded:
                target = deref(declared.type)
                must_be_record_type(target, "embed")
                info = replace(info, embedded=True)
                # Untagged embedding is transparent: children keep the parent's prefix.
                child_path = path if has_tag else pending.parent_path
                queue.append(_Pending(record=target, parent=info, parent_path=child_path))
            elif kind_of(declared.type) is Kind.RECORD:
                queue.append(_Pending(record=deref(declared.type), parent=info, parent_path=path))

            discovered.append(info)

    return Fields(discovered)


__all__ = ["NameFunc", "NamingPolicy", "get_mapping", "parse_name"]
