"""Logging setup shared by the autoprop modules.

Modules obtain their logger with ``get_logger(__name__)``; the CLI calls
``configure_logging`` once to attach handlers.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "autoprop"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return a logger under the autoprop hierarchy."""
    if not name:
        return logging.getLogger(_LOGGER_NAME)
    if name == _LOGGER_NAME or name.startswith(f"{_LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{_LOGGER_NAME}.{name}")


def configure_logging(
    *, verbose: bool = False, log_file: Path | str | None = None
) -> logging.Logger:
    """Configure the autoprop logger with console output and optional file sink.

    Args:
        verbose: Log at DEBUG instead of WARNING on the console.
        log_file: Optional path receiving a DEBUG-level log.

    Returns:
        The configured package logger.
    """
    console_level = logging.DEBUG if verbose else logging.WARNING
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    # Reset handlers so repeated CLI invocations don't duplicate output.
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setLevel(console_level)
    stream_handler.setFormatter(
        logging.Formatter("[autoprop] %(levelname)s %(message)s")
    )
    logger.addHandler(stream_handler)

    if log_file is not None:
        file_handler = logging.FileHandler(Path(log_file), encoding="utf-8")
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        logger.addHandler(file_handler)

    return logger


__all__ = ["configure_logging", "get_logger"]
