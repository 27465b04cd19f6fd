from __future__ import annotations

import logging
from pathlib import Path

import typer

from ..config import Config

app = typer.Typer(no_args_is_help=True, help="Hand gestures driving the modes and camera of the installation.")

DEFAULT_USER_CONFIG_PATH = Config.get_user_path()

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(verbose: bool = False) -> logging.Logger:
    """Configure the ``gesture_art`` logger with a single stream handler."""
    level = logging.DEBUG if verbose else logging.INFO
    logger = logging.getLogger("gesture_art")
    logger.setLevel(level)

    # Configure handler if logger doesn't have one
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
        logger.propagate = False  # Don't propagate to root logger
    for handler in logger.handlers:
        handler.setLevel(level)
    return logger


def load_config(config_path: Path | None, verbose: bool) -> Config:
    setup_logging(verbose)
    return Config.load(config_path)
