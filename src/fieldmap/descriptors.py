"""Field and type descriptors produced by discovery and served by the mapper."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable, Iterator, Mapping, Sequence
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, overload


@dataclass(frozen=True, slots=True)
class FieldInfo:
    """Resolved location and naming of one field reachable from a record type.

    ``index`` is the traversal of declared positions from the root record,
    ``path`` the dot-joined logical name used as the public lookup key.
    ``tag`` carries the raw tag string after the mapper's tag transform.
    """

    index: tuple[int, ...]
    path: str
    name: str
    field: dataclasses.Field[Any]
    type: Any
    zero: Any
    options: Mapping[str, str] = dataclasses.field(default_factory=lambda: MappingProxyType({}))
    tag: str = ""
    embedded: bool = False

    @property
    def attribute(self) -> str:
        return self.field.name


class Fields(Sequence[FieldInfo]):
    """Ordered descriptors of one record type, in breadth-first discovery order."""

    __slots__ = ("_by_index", "_by_path", "_items")

    def __init__(self, items: Iterable[FieldInfo] = ()) -> None:
        self._items: tuple[FieldInfo, ...] = tuple(items)
        by_path: dict[str, FieldInfo] = {}
        by_index: dict[tuple[int, ...], FieldInfo] = {}
        for info in self._items:
            # First occurrence wins so shallower fields shadow promoted ones.
            by_path.setdefault(info.path, info)
            by_index.setdefault(info.index, info)
        self._by_path = by_path
        self._by_index = by_index

    @overload
    def __getitem__(self, item: int) -> FieldInfo: ...

    @overload
    def __getitem__(self, item: slice) -> tuple[FieldInfo, ...]: ...

    def __getitem__(self, item: int | slice) -> FieldInfo | tuple[FieldInfo, ...]:
        return self._items[item]

    def __len__(self) -> int:
        return len(self._items)

    def __iter__(self) -> Iterator[FieldInfo]:
        return iter(self._items)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Fields):
            return NotImplemented
        return self._items == other._items

    def __repr__(self) -> str:
        return f"Fields({[info.path for info in self._items]!r})"

    def get_by_path(self, path: str) -> tuple[FieldInfo | None, bool]:
        """Return the first descriptor whose path equals ``path``."""

        info = self._by_path.get(path)
        return info, info is not None

    def get_by_traversal(self, index: Sequence[int]) -> tuple[FieldInfo | None, bool]:
        """Return the descriptor whose location path equals ``index`` exactly."""

        info = self._by_index.get(tuple(index))
        return info, info is not None

    def field_map(self) -> dict[str, FieldInfo]:
        """Map paths to descriptors, skipping embedded markers and unnamed fields.

        When several descriptors share a path, the one discovered last wins;
        use :meth:`get_by_path` for shallow-first resolution.
        """

        return {info.path: info for info in self._items if info.name and not info.embedded}

    def paths(self) -> list[str]:
        return [info.path for info in self._items]


__all__ = ["FieldInfo", "Fields"]
