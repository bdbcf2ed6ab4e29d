from __future__ import annotations

import logging
import sys

PACKAGE_LOGGER = "task_manager_api"

# Single stderr handler shared by every app instance in the process.
_handler: logging.Handler | None = None


def configure_logging(level: str | int = logging.INFO) -> logging.Handler:
    """Attach one stderr handler to the package logger.

    Repeated calls (one per `create_app`) only adjust the level.
    """
    global _handler

    logger = logging.getLogger(PACKAGE_LOGGER)
    logger.setLevel(level if isinstance(level, int) else level.upper())
    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(
            logging.Formatter(
                fmt="%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s",
                datefmt="%Y-%m-%d %H:%M:%S",
            )
        )
    if _handler not in logger.handlers:
        logger.addHandler(_handler)
    return _handler
