"""
Structured logging for the CLI.

structlog renders either JSON lines or colored console output on stderr,
so the board printed to stdout stays readable.
"""

import logging
import sys

import structlog


def setup_logging(level: str = "INFO", format: str = "console") -> None:
    """Configure structlog and the stdlib root logger.

    ``format`` is ``"json"`` or ``"console"``.
    """
    if format == "json":
        renderers = [structlog.processors.format_exc_info, structlog.processors.JSONRenderer()]
    else:
        renderers = [structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())]

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            *renderers,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level.upper())

    # Request lines from httpx would drown the refresh events
    for name in ("httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)
