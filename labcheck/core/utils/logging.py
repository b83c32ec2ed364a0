"""
Structured logging utilities.

Provides logging setup for structlog and a context manager for structured
operation logging with timing and error tracking.
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Iterator  # noqa: TCH003
from contextlib import contextmanager
from typing import Any

import structlog

from labcheck.core.config.logging_config import LoggingConfig  # noqa: TCH001

logger = structlog.get_logger(__name__)


def configure_logging(logging_config: LoggingConfig) -> None:
    """
    Configure stdlib logging and route structlog through it.

    Args:
        logging_config: Level, format and optional file destination
    """
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if logging_config.file_path:
        handlers.append(logging.FileHandler(logging_config.file_path))

    logging.basicConfig(
        level=logging_config.level.upper(),
        format=logging_config.format,
        handlers=handlers,
        force=True,
    )

    renderer: Any = (
        structlog.processors.JSONRenderer()
        if logging_config.json
        else structlog.dev.ConsoleRenderer(colors=False)
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            renderer,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )


@contextmanager
def log_operation(
    operation: str,
    subject_ids: dict[str, str] | None = None,
    **context: Any,
) -> Iterator[None]:
    """
    Context manager for structured operation logging.

    Logs operation start, completion, and errors with timing information.

    Args:
        operation: Name of the operation being performed
        subject_ids: Dictionary of subject identifiers (e.g., {"exercise": "k8s-01-invalid-pod"})
        **context: Additional context to include in logs

    Example:
        with log_operation("exercise_validation", exercise_id=exercise.id):
            verdict = run_rules(...)
    """
    start_time = time.perf_counter()
    log_context = {**(subject_ids or {}), **context}

    logger.debug(f"Starting {operation}", operation=operation, **log_context)

    try:
        yield
    except Exception as e:
        latency_ms = int((time.perf_counter() - start_time) * 1000)
        logger.error(
            f"{operation} failed after {latency_ms}ms",
            operation=operation,
            error=str(e),
            latency_ms=latency_ms,
            exc_info=True,
            **log_context,
        )
        raise
    else:
        latency_ms = int((time.perf_counter() - start_time) * 1000)
        logger.debug(
            f"{operation} completed in {latency_ms}ms",
            operation=operation,
            latency_ms=latency_ms,
            **log_context,
        )
