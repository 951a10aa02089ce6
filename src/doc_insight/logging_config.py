"""
Structured logging configuration using structlog.

Sets up structlog once per process (API startup or CLI entry point) and
provides helpers to bind per-analysis context so every event emitted while an
analysis runs carries its identifiers.
"""

import logging
from typing import Optional, TextIO

import structlog

from .config import settings


def setup_logging(
    json_output: Optional[bool] = None,
    level: Optional[str] = None,
    file: Optional[TextIO] = None,
) -> None:
    """
    Configure structlog processors and the filtering level.

    Args:
        json_output: Render JSON lines (default: ``settings.log_json``).
            The CLI passes ``False`` for human-readable console output.
        level: Minimum level name (default: ``settings.log_level``)
        file: Output stream (default: stdout)
    """
    use_json = settings.log_json if json_output is None else json_output
    level_name = (level or settings.log_level).upper()

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            (
                structlog.processors.JSONRenderer()
                if use_json
                else structlog.dev.ConsoleRenderer()
            ),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(level_name)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=file),
        cache_logger_on_first_use=True,
    )


def bind_analysis_context(analysis_id: str, template_id: str, provider: str) -> None:
    """Attach analysis identifiers to every log event of the current context."""
    structlog.contextvars.bind_contextvars(
        analysis_id=analysis_id,
        template_id=template_id,
        provider=provider,
    )


def clear_analysis_context() -> None:
    """Drop identifiers bound by :func:`bind_analysis_context`."""
    structlog.contextvars.unbind_contextvars("analysis_id", "template_id", "provider")
