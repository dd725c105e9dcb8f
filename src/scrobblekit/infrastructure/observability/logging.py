"""Logging setup for applications embedding scrobblekit.

The library itself only ever calls ``logging.getLogger(__name__)``; nothing is
configured on import. Applications (and the test suite) call
``configure_logging`` once to get either compact human-readable lines or JSON.
"""

import contextvars
import logging
import sys
import traceback
import uuid
from pathlib import Path
from typing import Any

from pythonjsonlogger import jsonlogger

from scrobblekit.config.settings import Settings, get_settings

PACKAGE_NAME = "scrobblekit"

# Hey future me, contextvars (not threading.local) so every asyncio task sees its own ID. An app
# that scrobbles for many users can tag each job and grep the Last.fm calls belonging to it.
correlation_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "correlation_id", default=""
)


def get_correlation_id() -> str:
    """Get the current correlation ID from context.

    Returns:
        Current correlation ID or empty string if not set
    """
    return correlation_id_var.get()


def set_correlation_id(correlation_id: str | None = None) -> str:
    """Set correlation ID in context.

    Args:
        correlation_id: Correlation ID to set. If None, generates a new UUID

    Returns:
        The correlation ID that was set
    """
    if correlation_id is None:
        correlation_id = str(uuid.uuid4())
    correlation_id_var.set(correlation_id)
    return correlation_id


class CorrelationIdFilter(logging.Filter):
    """Add correlation ID to log records."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.correlation_id = get_correlation_id()
        return True


def _package_frames(tb: Any) -> list[traceback.FrameSummary]:
    """Frames of a traceback that belong to this package (no site-packages, no stdlib)."""
    return [frame for frame in traceback.extract_tb(tb) if PACKAGE_NAME in frame.filename]


class CompactExceptionFormatter(logging.Formatter):
    """Shows exception chains root cause first, one ``╰─►`` line per exception.

    Example output::

        12:01:07 │ WARNING │ scrobblekit...lastfm_http:78 │ Last.fm request failed: timed out
        ╰─► ReadTimeout: timed out
        ╰─► NetworkError: Request to Last.fm failed: timed out
            File "lastfm_http.py", line 80, in send
              raise NetworkError(f"Request to Last.fm failed: {e}") from e
    """

    def formatException(self, ei: Any) -> str:
        _, exc_value, _ = ei
        if exc_value is None:
            return ""

        chain: list[BaseException] = []
        current: BaseException | None = exc_value
        while current is not None and current not in chain:
            chain.append(current)
            current = current.__cause__ or current.__context__
        chain.reverse()

        lines: list[str] = []
        for exc in chain:
            lines.append(f"╰─► {exc.__class__.__name__}: {exc}")
            for frame in _package_frames(exc.__traceback__):
                lines.append(
                    f'    File "{Path(frame.filename).name}", line {frame.lineno}, in {frame.name}'
                )
                if frame.line:
                    lines.append(f"      {frame.line.strip()}")
        return "\n".join(lines)


class LastfmJsonFormatter(jsonlogger.JsonFormatter):  # type: ignore[name-defined,misc]
    """One JSON object per line: level, logger, source location, app and correlation ID.

    Args:
        app_name: Written into every line as "app" so several embedding apps can share a sink
    """

    def __init__(self, *args: Any, app_name: str = PACKAGE_NAME, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self.app_name = app_name

    def add_fields(
        self,
        log_record: dict[str, Any],
        record: logging.LogRecord,
        message_dict: dict[str, Any],
    ) -> None:
        super().add_fields(log_record, record, message_dict)

        log_record["timestamp"] = self.formatTime(record, self.datefmt)
        log_record["level"] = record.levelname
        log_record["logger"] = record.name
        log_record["app"] = self.app_name
        log_record["source"] = f"{record.module}.{record.funcName}:{record.lineno}"

        # The filter stamps every record, jobs without an ID carry "". Extras are already
        # copied by the base class, so an empty one has to be taken out again.
        if not getattr(record, "correlation_id", ""):
            log_record.pop("correlation_id", None)

        if record.exc_info:
            log_record["exc_info"] = self.formatException(record.exc_info)


def _level(name: str | None, fallback: int) -> int:
    if not name:
        return fallback
    level = logging.getLevelName(name.upper())
    return level if isinstance(level, int) else fallback


# Listen up, this replaces the ROOT logger's handlers. Call it once at startup of the embedding
# app, never from library code. httpx/httpcore are pushed to WARNING or every request shows up
# twice (theirs and ours). package_level lets you see scrobblekit's DEBUG request lines without
# drowning in DEBUG from everything else.
def configure_logging(
    log_level: str = "INFO",
    json_format: bool = False,
    app_name: str = PACKAGE_NAME,
    package_level: str | None = None,
) -> None:
    """Install one stdout handler on the root logger.

    Args:
        log_level: Root level (DEBUG, INFO, WARNING, ERROR, CRITICAL); unknown names mean INFO
        json_format: Emit JSON lines instead of the compact text format
        app_name: Application name written into JSON lines
        package_level: Separate level for the ``scrobblekit`` loggers; None follows the root
    """
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    level = _level(log_level, logging.INFO)
    root_logger.setLevel(level)

    handler = logging.StreamHandler(sys.stdout)
    handler.addFilter(CorrelationIdFilter())

    if json_format:
        formatter: logging.Formatter = LastfmJsonFormatter(
            "%(timestamp)s %(level)s %(name)s %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
            app_name=app_name,
        )
    else:
        formatter = CompactExceptionFormatter(
            fmt="%(asctime)s │ %(levelname)-7s │ %(name)s:%(lineno)d │ %(message)s",
            datefmt="%H:%M:%S",
        )
    handler.setFormatter(formatter)
    root_logger.addHandler(handler)

    package_logger = logging.getLogger(PACKAGE_NAME)
    package_logger.setLevel(_level(package_level, logging.NOTSET))

    for noisy in ("httpx", "httpcore", "asyncio"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    logging.getLogger(__name__).debug(
        f"Logging configured for {app_name} (level={log_level}, json={json_format}, "
        f"package_level={package_level})"
    )


def configure_logging_from_settings(settings: Settings | None = None) -> None:
    """Configure logging from ``SCROBBLEKIT_LOG_*`` settings.

    Args:
        settings: Settings to use; defaults to the cached environment settings
    """
    settings = settings or get_settings()
    configure_logging(
        log_level=settings.log_level,
        json_format=settings.log_json,
        app_name=settings.app_name,
        package_level=settings.log_package_level,
    )
