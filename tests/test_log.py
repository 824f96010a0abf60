from __future__ import annotations

import logging

import structlog

from rpg_atlas.config import LoggingSection
from rpg_atlas.log import configure_logging


def test_configure_logging_sets_package_level():
    try:
        configure_logging(LoggingSection(level="debug", json=False))
        assert logging.getLogger("rpg_atlas").level == logging.DEBUG
        assert structlog.is_configured()
    finally:
        structlog.reset_defaults()
