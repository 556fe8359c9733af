"""Structured logging configuration.

All modules obtain loggers via :func:`get_logger`; the CLI calls
:func:`setup_logging` once at start-up.  Log records go to stderr so
they never interleave with the tables printed on stdout.

Usage::

    from ahndn_client.utils.logging import get_logger, setup_logging

    setup_logging("DEBUG")
    logger = get_logger(__name__)
    logger.debug("reply received", size=512)
"""

from __future__ import annotations

import logging
import sys
from typing import Any

import structlog
from structlog.typing import Processor

DEFAULT_LEVEL: str = "WARNING"


def setup_logging(level: str = DEFAULT_LEVEL) -> None:
    """Route structlog through stdlib logging with a console renderer.

    Calling it again replaces the previous handler, so tests and
    repeated ``main()`` calls do not stack handlers.
    """
    shared_processors: list[Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
    ]

    structlog.configure(
        processors=shared_processors + [
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )

    formatter = structlog.stdlib.ProcessorFormatter(
        processor=structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        foreign_pre_chain=shared_processors,
    )

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level.upper()))

    for handler in root_logger.handlers[:]:
        if getattr(handler, "_ahndn_client", False):
            root_logger.removeHandler(handler)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(formatter)
    handler._ahndn_client = True  # type: ignore[attr-defined]
    root_logger.addHandler(handler)


def get_logger(name: str) -> Any:
    """Return a structlog logger bound to *name* (typically ``__name__``)."""
    return structlog.get_logger(name)
