"""Logging setup for the settlement engine and the settle-round CLI.

Every module logs under the 'sidegames' namespace (sidegames.engine,
sidegames.validators, ...). The engine itself never configures handlers;
callers opt in with setup_logging().
"""

import logging
import sys
from datetime import datetime
from pathlib import Path
from typing import Optional, TextIO

ROOT_LOGGER = 'sidegames'

DETAILED_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
SIMPLE_FORMAT = '%(levelname)s: %(message)s'


def level_from_flags(verbose: bool = False, quiet: bool = False) -> int:
    """Map CLI verbosity flags to a logging level (verbose wins)."""
    if verbose:
        return logging.DEBUG
    if quiet:
        return logging.ERROR
    return logging.WARNING


def _handler(handler: logging.Handler, level: int, fmt: str) -> logging.Handler:
    handler.setLevel(level)
    handler.setFormatter(logging.Formatter(fmt, datefmt='%Y-%m-%d %H:%M:%S'))
    return handler


def setup_logging(
    log_dir: Optional[Path] = None,
    level: int = logging.INFO,
    log_to_file: bool = False,
    log_to_console: bool = True,
    stream: Optional[TextIO] = None,
) -> logging.Logger:
    """
    Configure the 'sidegames' logger.

    Replaces any handlers from a previous call, so it is safe to call once
    per CLI invocation.

    Args:
        log_dir: Directory for settlement logs (default: ./logs)
        level: Logging level (default: INFO)
        log_to_file: Also write a timestamped sidegames_*.log (default: False)
        log_to_console: Write simple one-line messages to a stream (default: True)
        stream: Console stream (default: stderr, leaving stdout for the ledger)

    Returns:
        Configured logger instance

    Example:
        from sidegames.logging_config import setup_logging
        logger = setup_logging(level=logging.DEBUG)
        logger.info("Settling round")
    """
    logger = logging.getLogger(ROOT_LOGGER)
    logger.setLevel(level)
    logger.handlers = []

    if log_to_file:
        log_dir = Path('logs') if log_dir is None else Path(log_dir)
        log_dir.mkdir(parents=True, exist_ok=True)
        log_file = log_dir / f'sidegames_{datetime.now().strftime("%Y%m%d_%H%M%S")}.log'
        logger.addHandler(_handler(logging.FileHandler(log_file), level, DETAILED_FORMAT))

    if log_to_console:
        console = logging.StreamHandler(stream or sys.stderr)
        logger.addHandler(_handler(console, level, SIMPLE_FORMAT))

    return logger


def get_logger(name: str = ROOT_LOGGER) -> logging.Logger:
    """Logger in the sidegames namespace; unconfigured until setup_logging() runs."""
    return logging.getLogger(name)
