"""
Logging configuration — central setup for all entrypoints.

Called once at startup by main.py.  Every module that does
``logger = logging.getLogger(__name__)`` inherits this config.

Levels are resolved in precedence order:
    CLI flag  >  HOOKSTRAP_LOG_LEVEL env var  >  INFO (default)

Console lines read ``[INFO] msg`` / ``[WARN] msg`` / ``[ERROR] msg`` /
``[STEP] msg``, coloured green / yellow / red / blue when the stream is
a terminal.  Optional file output via HOOKSTRAP_LOG_FILE /
HOOKSTRAP_LOG_FILE_LEVEL env vars.
"""

from __future__ import annotations

import logging
import sys

import click

# ── Custom level ────────────────────────────────────────────────

# Pipeline phase transitions sit between INFO and WARNING
STEP = 25
logging.addLevelName(STEP, "STEP")

# ── Format strings ──────────────────────────────────────────────

# Default console — "[LEVEL] message"
_FMT_CONSOLE = "[%(levelname)s] %(message)s"

# DEBUG level — full diagnostic with file:line
_FMT_DEBUG = "%(asctime)s [%(levelname)s] %(name)s:%(lineno)d — %(message)s"
_DATEFMT_DEBUG = "%H:%M:%S"

# File output — always full detail
_FMT_FILE = "%(asctime)s %(levelname)-5s %(name)s:%(lineno)d — %(message)s"
_DATEFMT_FILE = "%Y-%m-%d %H:%M:%S"

_LEVEL_LABELS = {"WARNING": "WARN", "CRITICAL": "ERROR"}
_LEVEL_COLORS = {
    "DEBUG": "white",
    "INFO": "green",
    "STEP": "blue",
    "WARN": "yellow",
    "ERROR": "red",
}


class ColorFormatter(logging.Formatter):
    """Short level labels, coloured with click when ``color`` is on."""

    def __init__(self, fmt: str, datefmt: str | None = None, color: bool = True) -> None:
        super().__init__(fmt, datefmt=datefmt)
        self.color = color

    def format(self, record: logging.LogRecord) -> str:
        original = record.levelname
        label = _LEVEL_LABELS.get(original, original)
        if self.color:
            label = click.style(label, fg=_LEVEL_COLORS.get(label, "white"))
        record.levelname = label
        try:
            return super().format(record)
        finally:
            record.levelname = original


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    log_file_level: str | None = None,
) -> None:
    """Configure Python logging for the entire process.

    Args:
        level: Log level name (DEBUG, INFO, STEP, WARNING, ERROR, CRITICAL).
        log_file: Optional path to a log file.
        log_file_level: Optional separate level for the log file.
            Defaults to the same as ``level``.
    """
    numeric_level = _parse_level(level)

    # ── Console handler (stderr) ────────────────────────────────
    if numeric_level <= logging.DEBUG:
        fmt, datefmt = _FMT_DEBUG, _DATEFMT_DEBUG
    else:
        fmt, datefmt = _FMT_CONSOLE, None

    console = logging.StreamHandler(sys.stderr)
    console.setLevel(numeric_level)
    console.setFormatter(ColorFormatter(fmt, datefmt=datefmt, color=sys.stderr.isatty()))

    # ── Root logger ─────────────────────────────────────────────
    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(console)

    # Effective root level = minimum of console and file levels
    effective_level = numeric_level

    # ── File handler (optional) ─────────────────────────────────
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else numeric_level
        effective_level = min(effective_level, file_level)

        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FMT_FILE, datefmt=_DATEFMT_FILE))
        root.addHandler(fh)

    root.setLevel(effective_level)

    # Don't propagate exceptions from logging itself
    logging.raiseExceptions = False


def log_step(logger: logging.Logger, msg: str, *args: object) -> None:
    """Log a pipeline phase transition at STEP level."""
    logger.log(STEP, msg, *args)


def _parse_level(level: str | None) -> int:
    """Convert a level name string to its numeric constant."""
    if not level:
        return logging.INFO
    name = level.upper()
    if name == "WARN":
        name = "WARNING"
    numeric = logging.getLevelName(name)
    if not isinstance(numeric, int):
        return logging.INFO
    return numeric
