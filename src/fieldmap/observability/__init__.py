"""Public observability primitives: structured event logging for fieldmap."""

from fieldmap.observability.logging import (
    configure_logging,
    configure_logging_from_config,
    get_logger,
    reset_logging,
)

__all__ = [
    "configure_logging",
    "configure_logging_from_config",
    "get_logger",
    "reset_logging",
]
