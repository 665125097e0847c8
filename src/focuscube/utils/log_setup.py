"""Logging configuration for applications embedding the configurator core."""

import logging
import logging.handlers
import os
from pathlib import Path

logger = logging.getLogger(__name__)

DEFAULT_LOG_DIR = Path.home() / ".focuscube" / "logs"

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'
LOG_DATE_FORMAT = '%Y-%m-%d %H:%M:%S'


def setup_logging(log_level: str = "INFO", log_file: Path | None = None) -> Path:
    """
    Configure the root logger with a rotating file handler.

    Calling it again for the same file only updates the level; a second
    handler is never attached for one path.

    Args:
        log_level: Level name (DEBUG/INFO/WARNING/ERROR)
        log_file: Log file path (defaults to ~/.focuscube/logs/focuscube.log)

    Returns:
        The path being logged to

    Raises:
        ValueError: If log_level is not a known level name
    """
    level = logging.getLevelName(log_level.upper())
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {log_level}")

    if log_file is None:
        DEFAULT_LOG_DIR.mkdir(parents=True, exist_ok=True)
        log_path = DEFAULT_LOG_DIR / "focuscube.log"
    else:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

    root_logger = logging.getLogger()
    root_logger.setLevel(level)

    target = os.path.abspath(log_path)
    for handler in root_logger.handlers:
        if isinstance(handler, logging.handlers.RotatingFileHandler) and handler.baseFilename == target:
            handler.setLevel(level)
            logger.debug(f"Logging already configured for {log_path}, level={logging.getLevelName(level)}")
            return log_path

    formatter = logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)

    # Keeps last 5 files, max 10MB each
    file_handler = logging.handlers.RotatingFileHandler(
        log_path,
        maxBytes=10 * 1024 * 1024,
        backupCount=5
    )
    file_handler.setLevel(level)
    file_handler.setFormatter(formatter)

    root_logger.addHandler(file_handler)

    logger.info(f"Logging configured: level={logging.getLevelName(level)}, file={log_path}")
    return log_path
