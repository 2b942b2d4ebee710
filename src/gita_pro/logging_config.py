"""Session logging for gita-pro.

Everything goes to a log file under the configured log directory; the
terminal only shows what the CLI prints itself.
"""

import logging
from pathlib import Path

from gita_pro import __version__

LOGGER_NAME = "gita_pro"
LOG_FILE_NAME = "gita_pro.log"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s"
MAX_LOG_BYTES = 10 * 1024 * 1024
LOG_BACKUPS = 5


def _rotate_log_if_needed(log_file: Path, max_bytes: int = MAX_LOG_BYTES, backup_count: int = LOG_BACKUPS) -> None:
    """Move an oversized log aside as ``.1``, shifting older backups along.

    Args:
        log_file: Current session log
        max_bytes: Size at which the log is moved aside
        backup_count: Backups kept; the oldest beyond this is removed
    """
    if not log_file.exists() or log_file.stat().st_size < max_bytes:
        return

    backups = [log_file.with_name(f"{log_file.name}.{n}") for n in range(1, backup_count + 1)]
    backups[-1].unlink(missing_ok=True)
    for older, newer in zip(reversed(backups[:-1]), reversed(backups[1:])):
        if older.exists():
            older.rename(newer)

    log_file.rename(backups[0])


def setup_logging(log_dir: Path, level: int = logging.DEBUG) -> logging.Logger:
    """Point the gita_pro logger at this session's log file.

    Safe to call more than once; handlers from an earlier call are closed.

    Args:
        log_dir: Directory holding gita_pro.log and its backups
        level: Minimum level written to the log file

    Returns:
        The gita_pro package logger
    """
    log_dir.mkdir(parents=True, exist_ok=True)
    log_file = log_dir / LOG_FILE_NAME
    _rotate_log_if_needed(log_file)

    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        handler.close()
        logger.removeHandler(handler)

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(level)
    file_handler.setFormatter(logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S"))
    logger.addHandler(file_handler)

    logger.info(f"gita {__version__} session start, logging to {log_file}")
    return logger


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the gita_pro namespace.

    Args:
        name: Module name (usually __name__)

    Returns:
        Logger instance
    """
    if name == LOGGER_NAME or name.startswith(f"{LOGGER_NAME}."):
        return logging.getLogger(name)
    return logging.getLogger(f"{LOGGER_NAME}.{name}")
