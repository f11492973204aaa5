"""
fieldmap — configuration schema and validation.

File: src/fieldmap/config/schema.py

Purpose
- Define configuration defaults and strict validation rules for naming policies
  and logging.

Functional requirements
- Validate config payloads and return structured errors (field path + message).
- Resolve transform names to the built-in name transform functions.

Non-functional requirements
- Keep rules deterministic and easy to audit.
"""

from __future__ import annotations

import copy
import re
from collections.abc import Callable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any, Final, TypedDict

from fieldmap.constants import CONFIG_SCHEMA_VERSION
from fieldmap.discovery import NamingPolicy

ConfigSchemaVersion: Final[int] = CONFIG_SCHEMA_VERSION

_CAMEL_CASE_BOUNDARY = re.compile(r"([a-z0-9])([A-Z])")
_NON_ALNUM = re.compile(r"[^a-z0-9]+")
_LOG_LEVELS: Final[tuple[str, ...]] = ("CRITICAL", "DEBUG", "ERROR", "INFO", "WARNING")


def to_snake_case(name: str) -> str:
    with_boundaries = _CAMEL_CASE_BOUNDARY.sub(r"\1_\2", name.strip())
    return _NON_ALNUM.sub("_", with_boundaries.lower()).strip("_")


def to_kebab_case(name: str) -> str:
    return to_snake_case(name).replace("_", "-")


NAME_TRANSFORMS: Final[Mapping[str, Callable[[str], str] | None]] = {
    "none": None,
    "lower": str.lower,
    "upper": str.upper,
    "snake_case": to_snake_case,
    "kebab_case": to_kebab_case,
}


class NamingConfig(TypedDict):
    tag_name: str
    name_transform: str
    tag_transform: str


class LoggingConfig(TypedDict):
    level: str
    json: bool


class FieldmapConfig(TypedDict):
    schema_version: int
    naming: NamingConfig
    logging: LoggingConfig


DEFAULT_CONFIG: Final[FieldmapConfig] = {
    "schema_version": CONFIG_SCHEMA_VERSION,
    "naming": {
        "tag_name": "",
        "name_transform": "none",
        "tag_transform": "none",
    },
    "logging": {
        "level": "WARNING",
        "json": True,
    },
}


@dataclass(frozen=True, slots=True)
class ConfigValidationIssue:
    """Single structured validation failure."""

    path: str
    message: str


@dataclass(frozen=True, slots=True)
class ConfigValidationResult:
    """Validation result with normalized config when no issues were found."""

    config: dict[str, Any] | None
    issues: tuple[ConfigValidationIssue, ...]

    @property
    def is_valid(self) -> bool:
        return self.config is not None and not self.issues


class ConfigValidationError(ValueError):
    """Raised when strict config validation fails."""

    def __init__(self, issues: Sequence[ConfigValidationIssue]) -> None:
        self.issues = tuple(issues)
        if not self.issues:
            rendered = "unknown validation failure"
        else:
            rendered = "\n".join(f"- {item.path}: {item.message}" for item in self.issues)
        super().__init__(f"invalid config:\n{rendered}")


class _IssueCollector:
    __slots__ = ("_items",)

    def __init__(self) -> None:
        self._items: list[ConfigValidationIssue] = []

    def add(self, path: str, message: str) -> None:
        self._items.append(ConfigValidationIssue(path=path, message=message))

    def items(self) -> tuple[ConfigValidationIssue, ...]:
        return tuple(self._items)

    @property
    def has_issues(self) -> bool:
        return bool(self._items)


def default_config() -> FieldmapConfig:
    """Return a deep copy of the built-in defaults."""

    return copy.deepcopy(DEFAULT_CONFIG)


def merge_config(base: Mapping[str, object], overlay: Mapping[str, object]) -> dict[str, Any]:
    """Deep-merge ``overlay`` onto a copy of ``base``."""

    merged = _deep_copy_mapping(base)
    _merge_into(merged, overlay)
    return merged


def validate_config(config: Mapping[str, object] | object) -> ConfigValidationResult:
    """Validate a full config payload and return structured issues."""

    issues = _IssueCollector()
    root = _as_object(config, "", issues)
    if root is None:
        return ConfigValidationResult(config=None, issues=issues.items())

    _reject_unknown_keys(root, {"schema_version", "naming", "logging"}, "", issues)
    _require_keys(root, {"schema_version", "naming", "logging"}, "", issues)

    normalized: dict[str, Any] = {}
    if "schema_version" in root:
        version = _as_int(root["schema_version"], "schema_version", issues, minimum=1)
        if version is not None and version != ConfigSchemaVersion:
            issues.add(
                "schema_version",
                f"unsupported schema version {version}; expected {ConfigSchemaVersion}",
            )
        normalized["schema_version"] = version
    if "naming" in root:
        normalized["naming"] = _validate_naming(root["naming"], "naming", issues)
    if "logging" in root:
        normalized["logging"] = _validate_logging(root["logging"], "logging", issues)

    if issues.has_issues:
        return ConfigValidationResult(config=None, issues=issues.items())
    return ConfigValidationResult(config=normalized, issues=())


def assert_valid_config(config: Mapping[str, object] | object) -> dict[str, Any]:
    """Validate ``config`` and return the normalized payload or raise."""

    result = validate_config(config)
    if not result.is_valid or result.config is None:
        raise ConfigValidationError(result.issues)
    return result.config


def naming_policy_from_config(config: Mapping[str, object]) -> NamingPolicy:
    """Build a :class:`NamingPolicy` from a (possibly partial) config payload."""

    validated = assert_valid_config(merge_config(default_config(), config))
    naming = validated["naming"]
    return NamingPolicy(
        tag_name=naming["tag_name"],
        map_func=NAME_TRANSFORMS[naming["name_transform"]],
        tag_map_func=NAME_TRANSFORMS[naming["tag_transform"]],
    )


def _validate_naming(value: object, path: str, issues: _IssueCollector) -> dict[str, Any] | None:
    section = _as_object(value, path, issues)
    if section is None:
        return None

    keys = {"tag_name", "name_transform", "tag_transform"}
    _reject_unknown_keys(section, keys, path, issues)
    _require_keys(section, keys, path, issues)

    normalized: dict[str, Any] = {}
    if "tag_name" in section:
        tag_name = section["tag_name"]
        if not isinstance(tag_name, str):
            issues.add(_join(path, "tag_name"), f"expected string, got {type(tag_name).__name__}")
        elif ":" in tag_name or "," in tag_name:
            issues.add(_join(path, "tag_name"), "must not contain ':' or ','")
        else:
            normalized["tag_name"] = tag_name.strip()
    for key in ("name_transform", "tag_transform"):
        if key in section:
            normalized[key] = _as_enum(
                section[key],
                _join(path, key),
                issues,
                allowed_values=tuple(NAME_TRANSFORMS),
            )
    return normalized


def _validate_logging(value: object, path: str, issues: _IssueCollector) -> dict[str, Any] | None:
    section = _as_object(value, path, issues)
    if section is None:
        return None

    keys = {"level", "json"}
    _reject_unknown_keys(section, keys, path, issues)
    _require_keys(section, keys, path, issues)

    normalized: dict[str, Any] = {}
    if "level" in section:
        level = section["level"]
        if isinstance(level, str):
            level = level.strip().upper()
        normalized["level"] = _as_enum(
            level, _join(path, "level"), issues, allowed_values=_LOG_LEVELS
        )
    if "json" in section:
        normalized["json"] = _as_bool(section["json"], _join(path, "json"), issues)
    return normalized


def _as_object(value: object, path: str, issues: _IssueCollector) -> dict[str, object] | None:
    if not isinstance(value, Mapping):
        issues.add(path, f"expected object, got {type(value).__name__}")
        return None
    out: dict[str, object] = {}
    for key, item in value.items():
        if not isinstance(key, str):
            issues.add(path, f"object key must be string, got {type(key).__name__}")
            continue
        out[key] = item
    return out


def _as_str(value: object, path: str, issues: _IssueCollector) -> str | None:
    if not isinstance(value, str):
        issues.add(path, f"expected string, got {type(value).__name__}")
        return None
    parsed = value.strip()
    if not parsed:
        issues.add(path, "must not be empty")
        return None
    return parsed


def _as_bool(value: object, path: str, issues: _IssueCollector) -> bool | None:
    if isinstance(value, bool):
        return value
    issues.add(path, f"expected boolean, got {type(value).__name__}")
    return None


def _as_int(
    value: object,
    path: str,
    issues: _IssueCollector,
    *,
    minimum: int | None = None,
) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        issues.add(path, f"expected integer, got {type(value).__name__}")
        return None
    if minimum is not None and value < minimum:
        issues.add(path, f"must be >= {minimum}")
        return None
    return value


def _as_enum(
    value: object,
    path: str,
    issues: _IssueCollector,
    *,
    allowed_values: tuple[str, ...],
) -> str | None:
    parsed = _as_str(value, path, issues)
    if parsed is None:
        return None
    if parsed not in allowed_values:
        expected = ", ".join(sorted(allowed_values))
        issues.add(path, f"invalid value {parsed!r}; expected one of: {expected}")
        return None
    return parsed


def _reject_unknown_keys(
    payload: Mapping[str, object],
    allowed: set[str],
    path: str,
    issues: _IssueCollector,
) -> None:
    for key in sorted(payload):
        if key not in allowed:
            issues.add(_join(path, key), "unknown field")


def _require_keys(
    payload: Mapping[str, object],
    required: set[str],
    path: str,
    issues: _IssueCollector,
) -> None:
    for key in sorted(required):
        if key not in payload:
            issues.add(_join(path, key), "missing required field")


def _join(path: str, key: str) -> str:
    if not path:
        return key
    return f"{path}.{key}"


def _merge_into(target: dict[str, Any], overlay: Mapping[str, object]) -> None:
    for key, value in overlay.items():
        if isinstance(value, Mapping):
            existing = target.get(key)
            if isinstance(existing, dict):
                _merge_into(existing, value)
            else:
                target[key] = _deep_copy_mapping(value)
            continue
        target[key] = copy.deepcopy(value)


def _deep_copy_mapping(value: Mapping[str, object]) -> dict[str, Any]:
    return {key: _deep_copy_value(item) for key, item in value.items()}


def _deep_copy_value(value: object) -> Any:
    if isinstance(value, Mapping):
        return _deep_copy_mapping(value)
    return copy.deepcopy(value)


__all__ = [
    "DEFAULT_CONFIG",
    "NAME_TRANSFORMS",
    "ConfigSchemaVersion",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "ConfigValidationResult",
    "FieldmapConfig",
    "LoggingConfig",
    "NamingConfig",
    "assert_valid_config",
    "default_config",
    "merge_config",
    "naming_policy_from_config",
    "to_kebab_case",
    "to_snake_case",
    "validate_config",
]
