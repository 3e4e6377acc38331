"""Structured logging for the scoring pipeline.

Engines log through the standard library (``logging.getLogger(__name__)``)
at debug level; the service, facade and CLI emit structured events via
:func:`get_logger`.  Both end up in the same stdlib handlers, rendered as
JSON lines (``json_logs=True``) or colored console output.

Usage::

    from finrisk.logging_config import assessment_context, get_logger

    logger = get_logger(__name__)
    with assessment_context(company_id=7, period="1402-Q1"):
        logger.info("assessment_completed", rating="BBB", final_score=71.4)
    # {"event": "assessment_completed", "company_id": 7, "period": "1402-Q1", ...}
"""

import logging
import sys
from contextlib import contextmanager
from typing import Any, Iterator, Optional, TextIO

import structlog

from finrisk.config import Settings

ENGINE_LOGGER = "finrisk.engines"


def _processors(json_logs: bool) -> list:
    processors = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]
    if json_logs:
        processors.append(structlog.processors.JSONRenderer())
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=True))
    return processors


def setup_logging(
    json_logs: bool = False,
    log_level: str = "INFO",
    engine_log_level: Optional[str] = None,
    stream: Optional[TextIO] = None,
) -> None:
    """Configure structlog over stdlib logging.

    Args:
        json_logs: Render JSON lines instead of console output.
        log_level: Root level (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        engine_log_level: Separate level for the engines' stdlib loggers;
            inherits ``log_level`` when None.
        stream: Handler stream, stdout by default.  The CLI passes stderr
            so its JSON report on stdout stays parseable.
    """
    logging.basicConfig(
        format="%(message)s",
        stream=stream or sys.stdout,
        level=getattr(logging, log_level.upper()),
    )
    if engine_log_level is not None:
        logging.getLogger(ENGINE_LOGGER).setLevel(getattr(logging, engine_log_level.upper()))

    structlog.configure(
        processors=_processors(json_logs),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def setup_logging_from_settings(settings: Settings, stream: Optional[TextIO] = None) -> None:
    setup_logging(
        json_logs=settings.json_logs,
        log_level=settings.log_level,
        engine_log_level=settings.engine_log_level,
        stream=stream,
    )


@contextmanager
def assessment_context(**fields: Any) -> Iterator[None]:
    """Bind *fields* to every structured event logged in this context.

    Context variables are per thread, so each worker of a portfolio run
    carries its own company id.
    """
    with structlog.contextvars.bound_contextvars(**fields):
        yield


def get_logger(name: str) -> Any:
    """Structured logger for *name* (usually ``__name__``)."""
    return structlog.get_logger(name)
