"""structlog wiring for fieldmap events, rendered through stdlib ``logging``."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import IO, Any

import structlog

from fieldmap.constants import LOGGER_NAME

_PROCESSORS_META_CHAIN: tuple[Any, ...] = (
    structlog.stdlib.filter_by_level,
    structlog.stdlib.add_log_level,
    structlog.stdlib.add_logger_name,
    structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
)


def get_logger(name: str) -> Any:
    """Return a structlog logger bound to the stdlib logger ``name``.

    Events stay silent until the host application configures the stdlib
    ``fieldmap`` logger, either directly or through :func:`configure_logging`.
    """

    return structlog.wrap_logger(
        logging.getLogger(name),
        wrapper_class=structlog.stdlib.BoundLogger,
        processors=list(_PROCESSORS_META_CHAIN),
    )


def configure_logging(
    level: int | str = "WARNING",
    *,
    json_output: bool = True,
    stream: IO[str] | None = None,
    logger_name: str = LOGGER_NAME,
) -> logging.Logger:
    """Attach a single structured handler to the package logger and return it."""

    parsed_level = _parse_log_level(level)
    renderer: Any = (
        structlog.processors.JSONRenderer(sort_keys=True)
        if json_output
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    formatter = structlog.stdlib.ProcessorFormatter(
        foreign_pre_chain=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
        ],
        processors=[
            structlog.stdlib.ProcessorFormatter.remove_processors_meta,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            renderer,
        ],
    )

    handler = logging.StreamHandler(stream)
    handler.setLevel(parsed_level)
    handler.setFormatter(formatter)

    logger = logging.getLogger(logger_name)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()
    logger.addHandler(handler)
    logger.setLevel(parsed_level)
    logger.propagate = False
    return logger


def configure_logging_from_config(
    config: Mapping[str, object],
    *,
    stream: IO[str] | None = None,
) -> logging.Logger:
    """Configure logging from the ``[logging]`` section of a loaded config."""

    section = config.get("logging")
    if not isinstance(section, Mapping):
        section = {}
    raw_level = section.get("level", "WARNING")
    level: int | str = raw_level if isinstance(raw_level, (int, str)) else "WARNING"
    return configure_logging(level, json_output=bool(section.get("json", True)), stream=stream)


def reset_logging(logger_name: str = LOGGER_NAME) -> None:
    """Remove handlers installed by :func:`configure_logging`."""

    logger = logging.getLogger(logger_name)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
        existing.close()
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def _parse_log_level(value: int | str) -> int:
    if isinstance(value, int):
        return value

    if not isinstance(value, str):
        raise ValueError(f"level must be int or str, got {type(value).__name__}")

    normalized = value.strip().upper()
    parsed = logging.getLevelName(normalized)
    if isinstance(parsed, int):
        return parsed

    raise ValueError(f"unsupported logging level {value!r}")


__all__ = [
    "configure_logging",
    "configure_logging_from_config",
    "get_logger",
    "reset_logging",
]
