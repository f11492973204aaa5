"""
Memoizing name-to-field mapper.

A ``Mapper`` resolves logical field names (from a metadata tag and/or a name
transform) to location paths inside dataclass records, caching the discovered
layout per record type. It integrates with:
- `get_mapping()` for breadth-first field discovery
- the accessors in `fieldmap.access` for reading and writing live records
- `structlog` for machine-parseable cache events
"""

from __future__ import annotations

import threading
from collections.abc import Mapping, Sequence
from typing import Any

from fieldmap.access import (
    FieldSlot,
    field_by_indexes,
    field_by_indexes_read_only,
    slot_by_indexes,
)
from fieldmap.config.schema import naming_policy_from_config
from fieldmap.descriptors import Fields
from fieldmap.discovery import NameFunc, NamingPolicy, get_mapping
from fieldmap.observability.logging import get_logger
from fieldmap.typeinfo import deref, must_be_record, must_be_record_type


class Mapper:
    """
    General purpose mapper of names to dataclass fields.

    Tags take precedence; any other field is named ``map_func(attribute)``
    when a name transform is configured. Discovery results are cached per
    record type for the lifetime of the mapper, and a single lock covers the
    whole check-compute-store sequence.
    """

    def __init__(
        self,
        tag_name: str = "",
        *,
        map_func: NameFunc | None = None,
        tag_map_func: NameFunc | None = None,
        logger: Any | None = None,
    ) -> None:
        self._policy = NamingPolicy(
            tag_name=tag_name,
            map_func=map_func,
            tag_map_func=tag_map_func,
        )
        self._cache: dict[Any, Fields] = {}
        self._lock = threading.Lock()
        self._logger = logger if logger is not None else get_logger(__name__)

    @classmethod
    def from_policy(cls, policy: NamingPolicy, *, logger: Any | None = None) -> Mapper:
        return cls(
            policy.tag_name,
            map_func=policy.map_func,
            tag_map_func=policy.tag_map_func,
            logger=logger,
        )

    @classmethod
    def from_config(cls, config: Mapping[str, object], *, logger: Any | None = None) -> Mapper:
        """Build a mapper from the ``[naming]`` section of a config payload.

        Only the given payload is consulted; the mapper never reads files or the
        environment. Pass the result of :func:`fieldmap.config.load_config` to
        opt into ``fieldmap.toml``, ``[tool.fieldmap]`` and ``FIELDMAP_`` sources.
        """

        return cls.from_policy(naming_policy_from_config(config), logger=logger)

    @property
    def policy(self) -> NamingPolicy:
        return self._policy

    def type_map(self, cls: Any) -> Fields:
        """Return the field descriptors of ``cls``, discovering them on first use.

        ``Optional[Record]`` and ``Record`` share one cache entry.
        """

        root = deref(cls)
        with self._lock:
            mapping = self._cache.get(root)
            if mapping is None:
                mapping = get_mapping(
                    root,
                    self._policy.tag_name,
                    self._policy.map_func,
                    self._policy.tag_map_func,
                )
                self._cache[root] = mapping
                self._logger.debug(
                    "fieldmap_type_mapped",
                    record=_type_name(root),
                    fields=len(mapping),
                    cache_size=len(self._cache),
                )
        return mapping

    def field_by_name(self, record: Any, name: str) -> Any:
        """Return the live value mapped to ``name``.

        Intermediate ``None`` levels are allocated on the way. When ``name`` is
        not mapped, ``record`` itself is returned; use :meth:`Fields.get_by_path`
        to tell a miss apart from a hit.
        """

        must_be_record(record, "Mapper.field_by_name")
        info, ok = self.type_map(type(record)).get_by_path(name)
        if not ok or info is None:
            self._logger.debug(
                "fieldmap_name_missing",
                record=_type_name(type(record)),
                name=name,
            )
            return record
        return field_by_indexes(record, info.index)

    def fields_by_name(self, record: Any, names: Sequence[str]) -> list[Any]:
        """Return live values for ``names`` positionally; unmapped names yield ``None``."""

        must_be_record(record, "Mapper.fields_by_name")
        mapping = self.type_map(type(record))
        values: list[Any] = []
        for name in names:
            info, ok = mapping.get_by_path(name)
            values.append(field_by_indexes(record, info.index) if ok and info else None)
        return values

    def slot_by_name(self, record: Any, name: str) -> FieldSlot | None:
        """Return a writable slot for ``name`` or ``None`` when it is not mapped."""

        must_be_record(record, "Mapper.slot_by_name")
        info, ok = self.type_map(type(record)).get_by_path(name)
        if not ok or info is None:
            return None
        return slot_by_indexes(record, info.index)

    def traversals_by_name(self, cls: Any, names: Sequence[str]) -> list[tuple[int, ...]]:
        """Return location paths for ``names`` positionally; unmapped names yield ``()``."""

        root = deref(cls)
        must_be_record_type(root, "Mapper.traversals_by_name")
        mapping = self.type_map(root)

        traversals: list[tuple[int, ...]] = []
        for name in names:
            info, ok = mapping.get_by_path(name)
            traversals.append(info.index if ok and info else ())
        return traversals

    def field_map(self, record: Any) -> dict[str, Any]:
        """Map every named, non-embedded path of ``record`` to its current value.

        Values are read without allocation, so the record is never modified.
        """

        must_be_record(record, "Mapper.field_map")
        mapping = self.type_map(type(record))
        return {
            path: field_by_indexes_read_only(record, info.index)
            for path, info in mapping.field_map().items()
        }


def new_mapper(tag_name: str) -> Mapper:
    """Return a mapper which obeys the field tag ``tag_name`` (ignored when empty)."""

    return Mapper(tag_name)


def new_mapper_func(tag_name: str, map_func: NameFunc) -> Mapper:
    """Return a mapper which obeys ``tag_name`` and names untagged fields with ``map_func``."""

    return Mapper(tag_name, map_func=map_func)


def new_mapper_tag_func(tag_name: str, map_func: NameFunc, tag_map_func: NameFunc) -> Mapper:
    """Return a mapper with both a field-name transform and a tag-value transform.

    Useful for tags such as ``json`` whose values look like ``"name,omitempty"``.
    """

    return Mapper(tag_name, map_func=map_func, tag_map_func=tag_map_func)


def _type_name(cls: Any) -> str:
    return getattr(cls, "__qualname__", repr(cls))


__all__ = ["Mapper", "new_mapper", "new_mapper_func", "new_mapper_tag_func"]
