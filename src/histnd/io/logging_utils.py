"""
logging_utils.py
================

Central logging setup.

Responsibilities
----------------
• Configure the "histnd" logger once
• Log to:
    - stderr (stdout carries the histogram itself)
    - optional file
• Avoid duplicate handlers

Module loggers are children ("histnd.importer", "histnd.exporter") and
propagate here.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional, Union
import logging
import sys


LOGGER_NAME = "histnd"


# ============================================================
# LOGGER SETUP
# ============================================================

def setup_logger(
    level: str = "INFO",
    log_path: Optional[Union[str, Path]] = None,
) -> logging.Logger:
    """
    Create and configure the histnd logger.

    Parameters
    ----------
    level : str
        "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"
    log_path : Path or None
        Optional log file, truncated on setup.

    Returns
    -------
    logger : logging.Logger
    """
    logger = logging.getLogger(LOGGER_NAME)

    level_no = getattr(logging, str(level).upper(), logging.INFO)
    logger.setLevel(level_no)

    # Repeated calls only adjust the level and re-bind stderr
    if logger.handlers:
        for h in logger.handlers:
            h.setLevel(level_no)
            if type(h) is logging.StreamHandler:
                h.setStream(sys.stderr)
        return logger

    fmt = (
        "%(asctime)s | "
        "%(levelname)-8s | "
        "%(name)s | "
        "%(message)s"
    )
    datefmt = "%Y-%m-%d %H:%M:%S"
    formatter = logging.Formatter(fmt, datefmt=datefmt)

    # --------------------------------------------------------
    # Console handler (stderr)
    # --------------------------------------------------------
    ch = logging.StreamHandler(sys.stderr)
    ch.setLevel(level_no)
    ch.setFormatter(formatter)
    logger.addHandler(ch)

    # --------------------------------------------------------
    # File handler
    # --------------------------------------------------------
    if log_path is not None:
        log_path = Path(log_path).expanduser().resolve()
        log_path.parent.mkdir(parents=True, exist_ok=True)
        fh = logging.FileHandler(log_path, mode="w")
        fh.setLevel(level_no)
        fh.setFormatter(formatter)
        logger.addHandler(fh)
        logger.debug("Logging to file: %s", log_path)

    return logger
