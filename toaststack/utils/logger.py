from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

from textual.logging import TextualHandler

FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(
    log_file: str = "", log_level: str = "INFO", devtools: bool = False
) -> logging.Logger:
    """Configure the ``toaststack`` logger once.

    Warnings always go to stderr. *log_file* receives everything at
    *log_level*; *devtools* mirrors records to the Textual dev console.
    """
    logger = logging.getLogger("toaststack")
    if logger.handlers:
        return logger
    level = getattr(logging, log_level.upper(), logging.INFO)
    logger.setLevel(level)

    fmt = logging.Formatter(FORMAT)

    stderr_handler = logging.StreamHandler(sys.stderr)
    stderr_handler.setLevel(logging.WARNING)
    stderr_handler.setFormatter(fmt)
    logger.addHandler(stderr_handler)

    if log_file:
        expanded = os.path.expanduser(log_file)
        Path(expanded).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(expanded)
        file_handler.setLevel(level)
        file_handler.setFormatter(fmt)
        logger.addHandler(file_handler)

    if devtools:
        console_handler = TextualHandler()
        console_handler.setLevel(level)
        logger.addHandler(console_handler)

    return logger
