"""structlog configuration for the envtag CLI.

Library code only ever calls ``logging.getLogger(__name__)`` and never
configures handlers; applications embedding envtag keep their own
logging setup.  The CLI routes everything through structlog:

- Human (default): colored console output to stderr
- JSON (--log-json): structured JSON lines to stderr
"""

from __future__ import annotations

import logging
import sys

import structlog

LOGGER_NAME = "envtag"


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso"),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.UnicodeDecoder(),
    ]


def _level(*, verbose: bool, quiet: bool) -> int:
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def configure_logging(
    *,
    verbose: bool = False,
    quiet: bool = False,
    log_json: bool = False,
) -> None:
    """Configure structlog processors and route stdlib records to stderr.

    Args:
        verbose: DEBUG for the ``envtag`` logger (wins over *quiet*).
        quiet: ERROR only for the ``envtag`` logger.
        log_json: Use the JSON renderer instead of the console renderer.
    """
    shared = _shared_processors()

    renderer: structlog.types.Processor
    if log_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())

    structlog.configure(
        processors=[*shared, structlog.stdlib.ProcessorFormatter.wrap_for_formatter],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=False,
    )

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            foreign_pre_chain=shared,
            processors=[structlog.stdlib.ProcessorFormatter.remove_processors_meta, renderer],
        )
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(handler)
    root_logger.setLevel(logging.WARNING)

    logging.getLogger(LOGGER_NAME).setLevel(_level(verbose=verbose, quiet=quiet))
