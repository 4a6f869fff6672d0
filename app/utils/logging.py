"""
Logging helpers shared by the API and the admin scripts.

Console output is configured by whoever owns the process (main.py or the
script). This module only adds the optional daily log file and two helpers
that prefix a message with where it came from.
"""

import logging
import os
from datetime import datetime
from pathlib import Path
from typing import Optional

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# Parent of every app.* module logger
logger = logging.getLogger("app")

def setup_file_logging(log_dir: str = "logs") -> Path:
    """
    Mirror the app loggers into logs/lasu_cms_<date>.log.

    Safe to call more than once per process; the same file is only attached
    once.

    Args:
        log_dir: Directory for the log files, created if missing

    Returns:
        Path of the log file being written
    """
    log_path = Path(log_dir)
    log_path.mkdir(parents=True, exist_ok=True)
    log_file = log_path / f"lasu_cms_{datetime.now():%Y%m%d}.log"

    for handler in logger.handlers:
        if isinstance(handler, logging.FileHandler) and handler.baseFilename == os.path.abspath(log_file):
            return log_file

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT))
    logger.addHandler(file_handler)
    return log_file

def _with_context(message: str, context: Optional[str]) -> str:
    return f"{context}: {message}" if context else message

def log_error(error: Exception, context: Optional[str] = None):
    """
    Log an error, prefixed with context when given. The traceback goes to
    DEBUG so that scripts stay readable at the default level.
    """
    logger.error(_with_context(str(error), context))
    logger.debug("Stack trace:", exc_info=error)

def log_info(message: str, context: Optional[str] = None):
    logger.info(_with_context(message, context))
