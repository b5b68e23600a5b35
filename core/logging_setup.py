"""loguru sinks for the clean-orders command. Library modules only import `logger`."""

import sys
from pathlib import Path
from typing import Optional

from loguru import logger

CONSOLE_FORMAT = "<level>{level: <8}</level> | {message}"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}"


def setup_logging(level: str = "INFO", log_file: Optional[Path] = None) -> int:
    """
    Send log records to stderr and, when `log_file` is given, to that file.

    The file is rewritten on every run so it holds one run's row errors.
    Returns the numeric severity of `level`; unknown names raise ValueError.
    """
    level = level.upper()
    severity = logger.level(level).no

    logger.remove()
    logger.add(sys.stderr, level=level, format=CONSOLE_FORMAT)

    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        logger.add(log_file, level=level, format=FILE_FORMAT, mode="w", encoding="utf-8")

    logger.debug("Logging at {} (file={})", level, log_file)
    return severity
