"""Logging: short status lines on the console, full records in a rotating file."""

import logging
import os
from logging.handlers import RotatingFileHandler

LOG_FILENAME = "libris_scan.log"


def setup_logger(log_dir: str = "logs", verbose: bool = False) -> logging.Logger:
    os.makedirs(log_dir, exist_ok=True)
    level = logging.DEBUG if verbose else logging.INFO

    logger = logging.getLogger("libris_scan")
    logger.setLevel(logging.DEBUG)

    if logger.handlers:
        return logger

    console = logging.StreamHandler()
    console.setLevel(level)
    console.setFormatter(logging.Formatter("%(levelname)-7s %(message)s"))
    logger.addHandler(console)

    # 10MB per file, keep 5
    fh = RotatingFileHandler(
        os.path.join(log_dir, LOG_FILENAME),
        maxBytes=10 * 1024 * 1024,
        backupCount=5,
        encoding="utf-8",
    )
    fh.setLevel(logging.DEBUG)
    fh.setFormatter(logging.Formatter(
        "%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    ))
    logger.addHandler(fh)

    return logger
