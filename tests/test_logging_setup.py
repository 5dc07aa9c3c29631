from __future__ import annotations

import logging

from agenda.logging_setup import LOGGER_NAME, configure_logging


def test_configure_logging_is_idempotent() -> None:
    logger = logging.getLogger(LOGGER_NAME)
    logger.handlers.clear()
    try:
        configure_logging(logging.INFO)
        configure_logging(logging.DEBUG)
        assert len(logger.handlers) == 1
        assert logger.level == logging.DEBUG
    finally:
        logger.handlers.clear()
