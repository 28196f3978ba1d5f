import logging
import sys

import structlog

LOG_LEVELS = ["debug", "info", "warning", "error"]


def configure_logging(level: str = "warning", json: bool = False) -> None:
    """Route structlog output to stderr so it never fights the live view on stdout."""
    renderer = (
        structlog.processors.JSONRenderer(indent=2)
        if json
        else structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty())
    )
    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%H:%M:%S"),
            renderer,
        ],
        wrapper_class=structlog.make_filtering_bound_logger(getattr(logging, level.upper())),
        # Resolve stderr per logger so redirected streams are honoured.
        logger_factory=lambda *args: structlog.PrintLogger(sys.stderr),
        cache_logger_on_first_use=False,
    )
