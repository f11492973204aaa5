"""
fieldmap config package public API.

File: src/fieldmap/config/__init__.py

Purpose
- Export config loading/validation entrypoints and public error types.

Functional requirements
- Support loading from ``fieldmap.toml`` or ``[tool.fieldmap]`` + ``FIELDMAP_`` env overrides.
- Fail fast with clear structured validation/load errors.
"""

from fieldmap.config.loader import (
    DEFAULT_CONFIG_FILE,
    ENV_PREFIX,
    PYPROJECT_FILE,
    ConfigLoadError,
    load_config,
)
from fieldmap.config.schema import (
    DEFAULT_CONFIG,
    NAME_TRANSFORMS,
    ConfigSchemaVersion,
    ConfigValidationError,
    ConfigValidationIssue,
    ConfigValidationResult,
    FieldmapConfig,
    assert_valid_config,
    default_config,
    merge_config,
    naming_policy_from_config,
    to_kebab_case,
    to_snake_case,
    validate_config,
)

__all__ = [
    "ConfigLoadError",
    "ConfigSchemaVersion",
    "ConfigValidationError",
    "ConfigValidationIssue",
    "ConfigValidationResult",
    "DEFAULT_CONFIG",
    "DEFAULT_CONFIG_FILE",
    "ENV_PREFIX",
    "FieldmapConfig",
    "NAME_TRANSFORMS",
    "PYPROJECT_FILE",
    "assert_valid_config",
    "default_config",
    "load_config",
    "merge_config",
    "naming_policy_from_config",
    "to_kebab_case",
    "to_snake_case",
    "validate_config",
]
