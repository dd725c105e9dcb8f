"""Observability infrastructure for structured logging."""

from scrobblekit.infrastructure.observability.logging import (
    LastfmJsonFormatter,
    configure_logging,
    configure_logging_from_settings,
    get_correlation_id,
    set_correlation_id,
)

__all__ = [
    "LastfmJsonFormatter",
    "configure_logging",
    "configure_logging_from_settings",
    "get_correlation_id",
    "set_correlation_id",
]
