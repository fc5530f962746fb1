"""Logging setup for protogen runs.

Suppressed tags and unreadable sources are reported at DEBUG level, run
summaries at INFO. ``--verbose`` on the command line shows the former,
``--log-file`` keeps a timestamped copy of everything emitted.
"""

from __future__ import annotations

import logging
from pathlib import Path

_LOGGER_NAME = "protogen"
_CONSOLE_FORMAT = "[protogen] %(levelname)s %(message)s"
_FILE_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def get_logger(name: str | None = None) -> logging.Logger:
    """Return ``protogen`` or one of its children, e.g. ``protogen.parser``."""
    return logging.getLogger(f"{_LOGGER_NAME}.{name}" if name else _LOGGER_NAME)


def configure_logging(
    *, verbose: bool = False, log_file: Path | str | None = None
) -> logging.Logger:
    """Install the console handler and, when ``log_file`` is given, a file sink.

    Handlers installed by an earlier call are closed and replaced, so the
    CLI can be driven repeatedly from one process without doubled output.
    """
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger(_LOGGER_NAME)
    logger.setLevel(level)
    logger.propagate = False
    _drop_handlers(logger)

    logger.addHandler(_handler(logging.StreamHandler(), level, _CONSOLE_FORMAT))
    if log_file is not None:
        path = Path(log_file)
        path.parent.mkdir(parents=True, exist_ok=True)
        logger.addHandler(
            _handler(logging.FileHandler(path, encoding="utf-8"), level, _FILE_FORMAT)
        )
    return logger


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt))
    return handler


def _drop_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()


__all__ = ["configure_logging", "get_logger"]
