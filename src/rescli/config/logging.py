"""structlog configuration for rescli.

Records from ``logging.getLogger(__name__)`` calls and from structlog
loggers share one stderr handler:

- Human (default): console renderer, colored when stderr is a TTY
- JSON (--log-json): one JSON object per line

With ``-v`` the invocation context (runtime binary, state file, API base
URL) is bound once and attached to every record, so a debug trace says
which docker and which config.ini it talked to.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping

import structlog

# Loggers that are chatty at INFO regardless of our own level.
_QUIET_LOGGERS = ("httpx", "httpcore")


def configure_logging(
    *,
    verbose: bool = False,
    log_json: bool = False,
    context: Mapping[str, object] | None = None,
) -> None:
    """Route stdlib and structlog records through one stderr handler.

    Args:
        verbose: ``rescli.*`` at DEBUG. When False, only WARNING+.
        log_json: Use JSON renderer instead of console renderer.
        context: Invocation fields bound into structlog contextvars when
            *verbose* is set. Cleared on every call.
    """
    structlog.contextvars.clear_contextvars()
    if verbose and context:
        structlog.contextvars.bind_contextvars(**context)

    shared_processors: list[structlog.types.Processor] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]

    if log_json:
        renderer: structlog.types.Processor = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[
            *shared_processors,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared_processors,
            processors=[
                structlog.stdlib.ProcessorFormatter.remove_processors_meta,
                renderer,
            ],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger("rescli").setLevel(logging.DEBUG if verbose else logging.WARNING)
    for name in _QUIET_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

