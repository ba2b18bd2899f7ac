"""Structured logging for the Watchdog application.

Log lines are rendered by structlog through the standard library. Values bound
with :func:`bind_request_context` (the request id, for instance) are merged
into every line logged while the request is handled.
"""

import logging
import logging.handlers
import sys
from pathlib import Path
from typing import Any, Optional

import structlog
from structlog.types import Processor

# Rotating file handler installed by the last setup_logging() call
_file_handler: Optional[logging.Handler] = None

SIZE_UNITS = {"KB": 1024, "MB": 1024**2, "GB": 1024**3}


def setup_logging(
    level: str = "INFO",
    format_type: str = "structured",
    file_enabled: bool = True,
    file_path: str = "data/watchdog.log",
    max_file_size: str = "10MB",
    backup_count: int = 5,
) -> None:
    """
    Set up application logging with structlog.

    Safe to call more than once; the previous file handler is replaced.

    Args:
        level: Logging level (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        format_type: 'structured' renders JSON, 'plain' renders console text
        file_enabled: Whether to also write to a rotating log file
        file_path: Path to log file
        max_file_size: Size before rotation, e.g. "10MB"
        backup_count: Number of rotated files to keep
    """
    log_level = getattr(logging, level.upper(), logging.INFO)

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=log_level)
    logging.getLogger().setLevel(log_level)

    processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.processors.TimeStamper(fmt="ISO"),
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
    ]

    if format_type == "structured":
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        context_class=dict,
        cache_logger_on_first_use=True,
    )

    _replace_file_handler(
        file_path if file_enabled else None, max_file_size, backup_count, log_level
    )


def _replace_file_handler(
    file_path: Optional[str],
    max_file_size: str,
    backup_count: int,
    log_level: int,
) -> None:
    """Swap the rotating file handler; ``file_path=None`` only removes it."""
    global _file_handler

    root_logger = logging.getLogger()
    if _file_handler is not None:
        root_logger.removeHandler(_file_handler)
        _file_handler.close()
        _file_handler = None

    if file_path is None:
        return

    log_file = Path(file_path)
    log_file.parent.mkdir(parents=True, exist_ok=True)

    handler = logging.handlers.RotatingFileHandler(
        filename=log_file,
        maxBytes=parse_file_size(max_file_size),
        backupCount=backup_count,
    )
    handler.setLevel(log_level)
    handler.setFormatter(logging.Formatter("%(message)s"))

    root_logger.addHandler(handler)
    _file_handler = handler


def parse_file_size(size_str: str) -> int:
    """Parse "512KB", "10MB", "1GB" or a plain byte count into bytes."""
    size_str = size_str.strip().upper()
    for unit, multiplier in SIZE_UNITS.items():
        if size_str.endswith(unit):
            return int(size_str[: -len(unit)]) * multiplier
    return int(size_str)


def get_logger(name: str = None) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


def bind_request_context(**values: Any) -> None:
    """Attach values to every log line of the current request."""
    structlog.contextvars.bind_contextvars(**values)


def clear_request_context() -> None:
    structlog.contextvars.clear_contextvars()


def log_performance(
    operation: str,
    duration_ms: float,
    slow_threshold_ms: Optional[float] = None,
    **context: Any,
) -> None:
    """
    Log performance metrics.

    Operations slower than ``slow_threshold_ms`` are logged as warnings.

    Args:
        operation: Name of the operation
        duration_ms: Duration in milliseconds
        slow_threshold_ms: Optional threshold above which the metric is a warning
        **context: Additional context
    """
    logger = get_logger("performance")
    if slow_threshold_ms is not None and duration_ms > slow_threshold_ms:
        logger.warning(
            "Slow operation detected",
            operation=operation,
            duration_ms=round(duration_ms, 3),
            threshold_ms=slow_threshold_ms,
            **context,
        )
        return

    logger.debug(
        "Performance metric",
        operation=operation,
        duration_ms=round(duration_ms, 3),
        **context,
    )


def log_audit_event(event: str, actor: str = None, **context: Any) -> None:
    """
    Log an audit event.

    Args:
        event: What happened, e.g. "reseed"
        actor: Who triggered it, e.g. "admin" or "startup"
        **context: Additional context
    """
    get_logger("audit").info("Audit event", event=event, actor=actor, **context)
