"""
Logging Configuration
=====================

Structured logging for the compiler. Uses structlog on top of the standard
library's logging, so library callers that never configure logging get the
stdlib defaults: nothing below WARNING, and only on stderr. The CLI calls
setup_logging to attach its own stderr handler.
"""

import logging
import sys

import structlog
from structlog.types import Processor

LOGGER_NAME = "testlang"


def configure_structlog(json_output: bool = False) -> None:
    """Route structlog through stdlib loggers under the `testlang` namespace."""
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_logger_name,
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
    ]

    if json_output:
        processors.append(structlog.processors.JSONRenderer(sort_keys=True))
    else:
        processors.append(structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()))

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def setup_logging(level: str = "WARNING", json_output: bool = False) -> None:
    """Configure compiler logging for the current process.

    Args:
        level: Minimum level name (DEBUG, INFO, WARNING, ...).
        json_output: Render events as JSON lines instead of console text.
    """
    configure_structlog(json_output)

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(logging.Formatter("%(message)s"))

    logger = logging.getLogger(LOGGER_NAME)
    for existing in list(logger.handlers):
        logger.removeHandler(existing)
    logger.addHandler(handler)
    logger.setLevel(getattr(logging, level.upper()))
    logger.propagate = False


def get_logger(name: str) -> structlog.stdlib.BoundLogger:
    """Get a structured logger instance."""
    return structlog.get_logger(name)


# Library use without setup_logging stays on the stdlib defaults
if not structlog.is_configured():
    configure_structlog()
