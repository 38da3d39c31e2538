"""
logging_utils.py
----------------

Colorized console logging for the `squircle` logger, with an optional
rotating log file for demo runs.
"""

__all__ = ["configure_logging", "ColorFormatter", "LOGGER_NAME"]

import os
import time
import logging
from typing import Optional, Union
from logging.handlers import RotatingFileHandler
from pathlib import Path

from colorama import Fore, Style, init as colorama_init

LOGGER_NAME = "squircle"


class ColorFormatter(logging.Formatter):
    """Console formatter with the level name colored by severity."""
    COLORS = {
        "DEBUG":    Fore.CYAN,
        "INFO":     Fore.GREEN,
        "WARNING":  Fore.YELLOW,
        "ERROR":    Fore.RED,
        "CRITICAL": Fore.RED + Style.BRIGHT,
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self.COLORS.get(record.levelname, "")
        return (
            f"[{self.formatTime(record, self.datefmt)}] [{record.name}] "
            f"[{color}{record.levelname:<5s}{Style.RESET_ALL}] {record.getMessage()}"
        )


def configure_logging(level: int = logging.INFO,
                      log_dir: Optional[Union[str, os.PathLike]] = None,
                      name: str = LOGGER_NAME,
                      run_prefix: str = "squircle") -> Optional[Path]:
    """Attach a colorized console handler, plus a rotating file when `log_dir` is set.

    Handlers left on the logger by a previous call are closed and replaced.

    Returns:
        Path of the log file, or None for console-only logging.
    """
    colorama_init(strip=False, convert=True)
    datefmt = "%H:%M:%S"

    logger = logging.getLogger(name)
    logger.setLevel(level)
    for h in list(logger.handlers):
        logger.removeHandler(h)
        h.close()

    ch = logging.StreamHandler()
    ch.setFormatter(ColorFormatter(datefmt=datefmt))
    logger.addHandler(ch)

    log_path = None
    if log_dir is not None:
        log_dir = Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_path = log_dir / f"{run_prefix}_PID{os.getpid()}_{time.strftime('%Y-%m-%d_%H%M%S')}.log"

        fh = RotatingFileHandler(log_path, maxBytes=5_000_000, backupCount=5)
        fh.setFormatter(logging.Formatter(
            "[%(asctime)s] [%(name)s] [%(levelname)-5s] %(message)s", datefmt,
        ))
        logger.addHandler(fh)

    logger.debug(f"Logging configured for '{name}' (file: {log_path}).")
    return log_path
