"""
structlog configuration for hosts that want the library's log events.

The library only emits debug events (caught exceptions, rejected
as_valid_data calls) and one error event in the HTTP adapter. With
structlog's defaults every level, debug included, is printed to stdout;
hosts set a threshold by configuring structlog, for instance:

    from fluent_result.log_config import configure_structlog
    from fluent_result.settings import get_settings

    configure_structlog(get_settings().log_level)
"""

from __future__ import annotations

import logging

import structlog


def configure_structlog(log_level: str = "INFO") -> None:
    """
    Configure structlog for structured console logging.

    Unknown level names fall back to INFO.
    """
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(
            getattr(logging, log_level.upper(), logging.INFO)
        ),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )
