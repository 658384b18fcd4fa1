"""
Logging configuration for applications embedding proctrack.

The library never configures logging on import; its package logger only
carries a ``NullHandler``. Applications (and the CLI) call ``setup_logging``
once to get:
- Console output on stderr at the configured level
- Optional file output, truncated on each start unless ``PROCTRACK_LOG_APPEND`` is set
"""

import logging
import sys
import threading
from pathlib import Path
from typing import Union

from .config import env_bool, env_str
from .config.errors import ConfigurationError

_config_lock = threading.Lock()
_MODULE_LOGGER = logging.getLogger(__name__)

TECHNICAL_FORMAT = "%(asctime)s.%(msecs)03d - %(name)s - %(levelname)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"


def _resolve_level(level: Union[str, int, None]) -> int:
    if level is None:
        level = env_str("PROCTRACK_LOG_LEVEL", or_value="WARNING")
    if isinstance(level, int):
        return level
    resolved = logging.getLevelName(str(level).upper())
    if not isinstance(resolved, int):
        raise ConfigurationError.invalid_value("PROCTRACK_LOG_LEVEL", level, "Expected a logging level name")
    return resolved


def _close_handlers(logger: logging.Logger) -> None:
    for handler in list(logger.handlers):
        try:
            handler.close()
        except OSError as e:  # Best-effort cleanup operation  # policy_guard: allow-silent-handler
            _MODULE_LOGGER.debug("Handler close failed for logger '%s': %s", logger.name, e)
        logger.removeHandler(handler)


def _build_console_handler(level: int) -> logging.Handler:
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(logging.Formatter(TECHNICAL_FORMAT, DATE_FORMAT))
    console_handler.setLevel(level)
    return console_handler


def _build_file_handler(log_file: Path, level: int) -> logging.Handler:
    log_file.parent.mkdir(parents=True, exist_ok=True)
    file_mode = "a" if env_bool("PROCTRACK_LOG_APPEND", or_value=False) else "w"
    file_handler = logging.FileHandler(log_file, mode=file_mode, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(TECHNICAL_FORMAT, DATE_FORMAT))
    file_handler.setLevel(level)
    return file_handler


def setup_logging(
    level: Union[str, int, None] = None,
    log_file: Union[str, Path, None] = None,
) -> logging.Logger:
    """Configure the root logger; safe to call more than once."""

    with _config_lock:
        resolved_level = _resolve_level(level)
        if log_file is None:
            log_file = env_str("PROCTRACK_LOG_FILE")

        root_logger = logging.getLogger()
        _close_handlers(root_logger)
        root_logger.addHandler(_build_console_handler(resolved_level))
        if log_file:
            root_logger.addHandler(_build_file_handler(Path(log_file).expanduser(), resolved_level))
        root_logger.setLevel(resolved_level)

        logging.getLogger("asyncio").setLevel(logging.WARNING)
        return root_logger


__all__ = ["DATE_FORMAT", "TECHNICAL_FORMAT", "setup_logging"]
