from __future__ import annotations

import logging
import os
from logging.handlers import RotatingFileHandler
from typing import Any

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
DATE_FORMAT = "%Y-%m-%d %H:%M:%S"
ROOT_LOGGER = "rehabweek"


def setup_logging(cfg: Any) -> logging.Logger:
    """
    Configure the application loggers:
    - console at cfg.log_level
    - optional rotating audit file at DEBUG when cfg.log_file is set
    """
    root = logging.getLogger(ROOT_LOGGER)
    root.setLevel(logging.DEBUG)
    root.handlers.clear()

    fmt = logging.Formatter(LOG_FORMAT, DATE_FORMAT)

    ch = logging.StreamHandler()
    ch.setFormatter(fmt)
    ch.setLevel(getattr(logging, str(cfg.log_level).upper(), logging.INFO))
    root.addHandler(ch)

    if cfg.log_file:
        log_dir = os.path.dirname(cfg.log_file)
        if log_dir:
            os.makedirs(log_dir, exist_ok=True)
        fh = RotatingFileHandler(cfg.log_file, maxBytes=1_000_000, backupCount=10, encoding="utf-8")
        fh.setFormatter(fmt)
        fh.setLevel(logging.DEBUG)
        root.addHandler(fh)

    return root


def get_logger(name: str) -> logging.Logger:
    # Keep every module under the configured root so handlers apply.
    return logging.getLogger(f"{ROOT_LOGGER}.{name}")


def kv(**kwargs: Any) -> str:
    """Key=value compact formatting (values repr()'d for clarity)."""
    return " ".join(f"{k}={v!r}" for k, v in kwargs.items())
