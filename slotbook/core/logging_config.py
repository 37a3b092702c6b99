"""
Logging setup: rotating log file plus console output.
"""

from __future__ import annotations

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from slotbook.core.config import LoggingConfig, get_settings


def setup_logging(logging_cfg: LoggingConfig | None = None) -> None:
    """
    Configure application-wide logging with rotation.

    Safe to call more than once; existing root handlers are replaced.
    """
    if logging_cfg is None:
        logging_cfg = get_settings().logging

    logs_dir: Path = logging_cfg.logs_dir
    logs_dir.mkdir(parents=True, exist_ok=True)
    log_file = logs_dir / "slotbook.log"

    formatter = logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    file_handler = RotatingFileHandler(
        log_file,
        maxBytes=logging_cfg.max_bytes,
        backupCount=logging_cfg.backup_count,
        encoding="utf-8",
    )
    file_handler.setFormatter(formatter)

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)

    root = logging.getLogger()
    root.setLevel(logging_cfg.log_level.upper())
    root.handlers.clear()
    root.addHandler(file_handler)
    root.addHandler(console_handler)


__all__ = ["setup_logging"]
