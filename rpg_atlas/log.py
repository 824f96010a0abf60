"""structlog setup shared by library callers and tests."""
from __future__ import annotations

import logging
import sys

import structlog

from rpg_atlas.config import LoggingSection


def configure_logging(section: LoggingSection) -> None:
    """Route structlog through the stdlib logger at the configured level."""
    level = getattr(logging, section.level.upper(), logging.INFO)
    logging.basicConfig(format="%(message)s", stream=sys.stderr, level=level)
    logging.getLogger("rpg_atlas").setLevel(level)

    renderer = structlog.processors.JSONRenderer() if section.json else structlog.dev.ConsoleRenderer()
    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            renderer,
        ],
        wrapper_class=structlog.stdlib.BoundLogger,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )
