import logging
import sys
from logging.handlers import RotatingFileHandler
from pathlib import Path

from irito.infrastructure import settings


def setup_logger(
    name: str = "irito",
    log_level: str | int = settings.LOG_LEVEL,
    log_file: str | Path | None = settings.LOG_FILE,
) -> logging.Logger:
    """
    Sets up the package logger with console (stderr) output and, when a log
    file is configured, a RotatingFileHandler.
    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level)

    # Prevent adding handlers multiple times if logger is already set up
    if logger.handlers:
        return logger

    console_format = logging.Formatter("%(levelname)s %(name)s: %(message)s")
    file_format = logging.Formatter(
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    # stdout is reserved for command output
    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(log_level)
    console_handler.setFormatter(console_format)
    logger.addHandler(console_handler)

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            log_path, maxBytes=5 * 1024 * 1024, backupCount=3, encoding="utf-8"  # 5 MB
        )
        file_handler.setLevel(log_level)
        file_handler.setFormatter(file_format)
        logger.addHandler(file_handler)

    return logger
