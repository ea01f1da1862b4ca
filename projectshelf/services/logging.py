# projectshelf/services/logging.py
import sys
from typing import Optional
from loguru import logger

from ..config.paths import get_user_log_dir

CONSOLE_FORMAT = "<level>{level: <8}</level> | <cyan>{name}:{function}:{line}</cyan> - <level>{message}</level>"
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {name}:{function}:{line} - {message}"
LOG_FILE_NAME = "projectshelf_{time:YYYY-MM-DD}.log"

def setup_logging(level: str = "WARNING", verbose: bool = False, log_to_file: Optional[bool] = None) -> None:
    """
    Configures loguru sinks for a CLI run.

    Console output goes to stderr at `level` (DEBUG when verbose). A daily log file
    under the user log dir is only written when asked for; by default that is when
    running verbose, so plain listing and deleting leave nothing on disk.
    """
    console_level = "DEBUG" if verbose else level
    if log_to_file is None:
        log_to_file = verbose

    logger.remove()
    logger.add(sys.stderr, level=console_level, format=CONSOLE_FORMAT, colorize=True)

    if not log_to_file:
        return

    log_path = LOG_FILE_NAME
    try:
        log_path = get_user_log_dir() / LOG_FILE_NAME
        logger.add(
            str(log_path),
            level="DEBUG",
            format=FILE_FORMAT,
            rotation="1 day",
            retention="7 days",
            encoding="utf-8",
        )
    except (OSError, ValueError) as e:
        logger.warning(f"File logging disabled, cannot write to {log_path}: {e}")
        return
    logger.debug(f"Logging to {log_path} at level {console_level}")
