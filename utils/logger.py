"""Logging setup for the CLI."""

import logging
from pathlib import Path
from typing import Optional, Union

from utils.constants import LOGGER_NAME


def get_logger() -> logging.Logger:
    return logging.getLogger(LOGGER_NAME)


def setup_logger(
    log_path: Optional[Union[Path, str]] = None,
    verbose: bool = False
) -> logging.Logger:
    """Attach console (and optional file) handlers once."""
    logger = get_logger()
    logger.setLevel(logging.DEBUG if verbose else logging.INFO)
    if not logger.handlers:
        ch = logging.StreamHandler()
        ch.setFormatter(logging.Formatter("[%(levelname)s] %(message)s"))
        logger.addHandler(ch)
        if log_path:
            log_path = Path(log_path)
            log_path.parent.mkdir(parents=True, exist_ok=True)
            fh = logging.FileHandler(log_path, encoding="utf-8")
            fh.setFormatter(logging.Formatter("%(asctime)s [%(levelname)s] %(message)s"))
            logger.addHandler(fh)
    return logger
