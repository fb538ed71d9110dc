"""Logging setup for the command line tool.

Console output goes to stderr so stdout only carries the outcome line.
A rotating file log is added when a log file path is configured.
"""
from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler

_LOG_FORMAT = "%(asctime)s [%(levelname)-8s] %(name)s: %(message)s"
_LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")

# Handlers we installed, so reconfiguration replaces instead of stacking them.
_file_handler: logging.Handler | None = None
_console_handler: logging.Handler | None = None


def _parse_level(level: str) -> int:
    level_str = (level or "WARNING").strip().upper()
    if level_str not in _LEVELS:
        level_str = "WARNING"
    return getattr(logging, level_str, logging.WARNING)


def setup_logging(level: str = "WARNING", log_file: str = "", max_size_mb: int = 10) -> None:
    global _file_handler, _console_handler

    log_level = _parse_level(level)
    root = logging.getLogger()

    if _file_handler and _file_handler in root.handlers:
        root.removeHandler(_file_handler)
        _file_handler.close()
    _file_handler = None
    if _console_handler and _console_handler in root.handlers:
        root.removeHandler(_console_handler)

    formatter = logging.Formatter(_LOG_FORMAT, datefmt=_LOG_DATE_FORMAT)

    ch = logging.StreamHandler()
    ch.setLevel(log_level)
    ch.setFormatter(formatter)
    _console_handler = ch
    root.addHandler(ch)

    if log_file:
        log_dir = os.path.dirname(os.path.abspath(log_file))
        os.makedirs(log_dir, exist_ok=True)
        fh = RotatingFileHandler(
            log_file,
            maxBytes=max(1, int(max_size_mb)) * 1024 * 1024,
            backupCount=5,
            encoding="utf-8",
        )
        fh.setLevel(log_level)
        fh.setFormatter(formatter)
        _file_handler = fh
        root.addHandler(fh)

    root.setLevel(log_level)

    # ldap3 logs through its own switch; keep the library quiet unless debugging.
    logging.getLogger("ldap3").setLevel(max(log_level, logging.WARNING))
