"""Logging utilities for the math tutor client."""
from __future__ import annotations

import logging
import sys
from logging.handlers import RotatingFileHandler

from core.config import settings

LOG_FILE = settings.base_dir / "math_tutor.log"


def init_logging() -> None:
    """Initialize logging with console and rotating file handler."""
    logger.setLevel(settings.log_level)
    if logger.handlers:
        return

    LOG_FILE.parent.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )
    # Problem text is full of unicode math symbols
    encoding = (getattr(sys.stdout, 'encoding', None) or '').lower()
    if encoding not in ('utf-8', 'utf8') and hasattr(sys.stdout, 'reconfigure'):
        sys.stdout.reconfigure(encoding='utf-8', errors='replace')
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    file_handler = RotatingFileHandler(
        LOG_FILE,
        maxBytes=1_000_000,
        backupCount=3,
        encoding='utf-8',
        errors='replace'
    )
    file_handler.setFormatter(formatter)

    logger.addHandler(console_handler)
    logger.addHandler(file_handler)


logger = logging.getLogger("math_tutor")
