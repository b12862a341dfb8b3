"""Centralized logging configuration for the pipeline."""
from __future__ import annotations

import logging
import os
import sys
from datetime import date
from pathlib import Path

LOG_DIR = Path(__file__).resolve().parent.parent / "logs"
_FORMATTER = logging.Formatter(
    "%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)
_configured = False

# Third-party loggers that drown out per-job progress at INFO.
_NOISY_LOGGERS: tuple[str, ...] = ("urllib3", "sqlalchemy.engine", "sqlalchemy.pool")


def _level(name: str | None) -> int:
    return getattr(logging, (name or "INFO").upper(), logging.INFO)


def _file_logging_enabled() -> bool:
    return os.environ.get("LOG_TO_FILE", "true").lower() in ("1", "true", "yes")


def get_logger(name: str) -> logging.Logger:
    """Return a named logger; the first call installs the root handlers."""
    global _configured
    if not _configured:
        _install_handlers(_level(os.environ.get("LOG_LEVEL")))
        _configured = True
    return logging.getLogger(name)


def set_level(level_name: str) -> None:
    """Change the console level at runtime (the dated log file stays at DEBUG)."""
    level = _level(level_name)
    root = logging.getLogger()
    has_file = any(isinstance(h, logging.FileHandler) for h in root.handlers)
    root.setLevel(logging.DEBUG if has_file else level)
    for handler in root.handlers:
        if not isinstance(handler, logging.FileHandler):
            handler.setLevel(level)


def _install_handlers(level: int) -> None:
    root = logging.getLogger()
    root.setLevel(level)
    for noisy in _NOISY_LOGGERS:
        logging.getLogger(noisy).setLevel(logging.WARNING)

    # Respect handlers set up by an embedding application or test runner.
    if root.handlers:
        return

    console = logging.StreamHandler(sys.stdout)
    console.setLevel(level)
    console.setFormatter(_FORMATTER)
    root.addHandler(console)

    if _file_logging_enabled():
        _add_daily_file(root)


def _add_daily_file(root: logging.Logger) -> None:
    log_file = LOG_DIR / f"pipeline_{date.today():%Y-%m-%d}.log"
    try:
        LOG_DIR.mkdir(parents=True, exist_ok=True)
        handler = logging.FileHandler(log_file, encoding="utf-8")
    except OSError as exc:
        root.warning("File logging disabled, cannot open %s: %s", log_file, exc)
        return
    handler.setLevel(logging.DEBUG)
    handler.setFormatter(_FORMATTER)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
