"""
Runtime settings for the resume extraction engine.

Only ambient concerns live here (logging, input limits). Keyword tables,
category taxonomy and fallback values are constants owned by the extractor
modules and are not configurable.
"""

import logging
import os
import sys
from typing import Optional

from dotenv import load_dotenv

load_dotenv()

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
LOG_DATEFMT = "%Y-%m-%d %H:%M:%S"


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}")
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {value}")
    return value


class Config:
    LOG_LEVEL = os.getenv("RESUME_PARSER_LOG_LEVEL", "WARNING").upper()

    # Decoded PDFs occasionally come back as megabytes of junk; nothing
    # past this point is looked at.
    MAX_INPUT_CHARS = _int_env("RESUME_PARSER_MAX_INPUT_CHARS", 2_000_000)


def configure_logging(level: Optional[str] = None) -> logging.Logger:
    """Attach a stdout handler to the package logger.

    The library itself only installs a NullHandler; host applications call
    this once if they want the extraction trace on the console.
    """
    logger = logging.getLogger("resume_parsing")
    logger.setLevel(level or Config.LOG_LEVEL)

    # Avoid duplicate handlers when called more than once
    if any(getattr(h, "_resume_parsing", False) for h in logger.handlers):
        return logger

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(fmt=LOG_FORMAT, datefmt=LOG_DATEFMT))
    handler._resume_parsing = True
    logger.addHandler(handler)
    return logger
