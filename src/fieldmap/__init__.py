"""
fieldmap — name-to-field mapping for dataclass records.

File: src/fieldmap/__init__.py

Purpose
- Package root. Resolves logical names (metadata tags and/or a name transform)
  to location paths inside dataclass records, including fields promoted from
  embedded records, and reads or writes live values through those paths.

Functional requirements
- Must not have side effects at import time (no config loading, no logging init).
"""

from fieldmap.access import (
    FieldSlot,
    field_by_indexes,
    field_by_indexes_read_only,
    slot_by_indexes,
)
from fieldmap.config import ConfigLoadError, ConfigValidationError, load_config
from fieldmap.descriptors import FieldInfo, Fields
from fieldmap.discovery import NameFunc, NamingPolicy, get_mapping, parse_name
from fieldmap.mapper import Mapper, new_mapper, new_mapper_func, new_mapper_tag_func
from fieldmap.observability import configure_logging
from fieldmap.typeinfo import (
    DeclaredField,
    InvalidUsageError,
    Kind,
    declared_fields,
    deref,
    embed,
    kind_of,
    zero_value,
)

__version__ = "0.1.0"

__all__ = [
    "ConfigLoadError",
    "ConfigValidationError",
    "DeclaredField",
    "FieldInfo",
    "FieldSlot",
    "Fields",
    "InvalidUsageError",
    "Kind",
    "Mapper",
    "NameFunc",
    "NamingPolicy",
    "__version__",
    "configure_logging",
    "declared_fields",
    "deref",
    "embed",
    "field_by_indexes",
    "field_by_indexes_read_only",
    "get_mapping",
    "kind_of",
    "load_config",
    "new_mapper",
    "new_mapper_func",
    "new_mapper_tag_func",
    "parse_name",
    "slot_by_indexes",
    "zero_value",
]
