"""
Pinboard Emulator - Logging Setup

Console output goes through rich's RichHandler; a file handler with the
detailed format is added when a log directory or file is given.

Log files: ``<log_dir>/<name>_YYYYMMDD_HHMMSS.log``
"""

import logging
from datetime import datetime
from pathlib import Path
from typing import Optional, Union

from rich.console import Console
from rich.logging import RichHandler

FILE_FORMAT = "%(asctime)s | %(levelname)-7s | %(name)s | %(funcName)s:%(lineno)d | %(message)s"
FILE_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(
    name: str = "pinboard_emulator",
    level: int = logging.DEBUG,
    console_level: int = logging.WARNING,
    log_dir: Optional[Path] = None,
    log_file: Optional[Union[str, Path]] = None,
    rich_console: bool = True,
) -> logging.Logger:
    """Configure and return the named logger.

    Calling it again for the same name returns the logger unchanged.
    """
    logger = logging.getLogger(name)
    if logger.handlers:
        return logger
    logger.setLevel(level)

    # ── File handler: captures everything (DEBUG+) ──
    if log_file is None and log_dir is not None:
        log_dir = Path(log_dir)
        ts = datetime.now().strftime("%Y%m%d_%H%M%S")
        log_file = log_dir / f"{name}_{ts}.log"
    if log_file is not None:
        log_file = Path(log_file)
        log_file.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(str(log_file), encoding="utf-8")
        fh.setLevel(logging.DEBUG)
        fh.setFormatter(logging.Formatter(FILE_FORMAT, datefmt=FILE_DATEFMT))
        logger.addHandler(fh)

    # ── Console handler: WARNING+ by default ──
    if rich_console:
        ch = RichHandler(
            level=console_level,
            console=Console(stderr=True),
            show_time=False,
            show_path=False,
            markup=False,
            rich_tracebacks=True,
        )
        ch.setLevel(console_level)
        logger.addHandler(ch)

    logger.debug("Logger initialized: %s (file: %s)", name, log_file)
    return logger
