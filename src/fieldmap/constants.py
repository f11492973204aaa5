"""Stable constants shared across the mapper, discovery, and config layers."""

from __future__ import annotations

from typing import Final

# Field metadata key marking an embedded (anonymously composed) record field.
EMBED_METADATA_KEY: Final[str] = "fieldmap.embed"

# Logical name syntax.
OPTION_SEPARATOR: Final[str] = ","
OPTION_VALUE_SEPARATOR: Final[str] = "="
PATH_SEPARATOR: Final[str] = "."
SKIP_NAME: Final[str] = "-"
PRIVATE_PREFIX: Final[str] = "_"

# Config and logging.
CONFIG_SCHEMA_VERSION: Final[int] = 1
LOGGER_NAME: Final[str] = "fieldmap"

__all__ = [
    "CONFIG_SCHEMA_VERSION",
    "EMBED_METADATA_KEY",
    "LOGGER_NAME",
    "OPTION_SEPARATOR",
    "OPTION_VALUE_SEPARATOR",
    "PATH_SEPARATOR",
    "PRIVATE_PREFIX",
    "SKIP_NAME",
]
