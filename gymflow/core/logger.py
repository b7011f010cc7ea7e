"""Logger configuration for the GymFlow API server and CLI.

Both entry points log through loguru: a colored stderr sink and, when
LOG_FILE is set, a rotating zipped file sink. Unset arguments fall back to
the application settings.
"""

import sys
from pathlib import Path

from loguru import logger

from gymflow.config.settings import settings

CONSOLE_FORMAT = (
    "<green>{time:YYYY-MM-DD HH:mm:ss}</green> | <level>{level: <8}</level> | "
    "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> - <level>{message}</level>"
)
FILE_FORMAT = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level: <8} | {process} | {name}:{function}:{line} - {message}"


def setup_logger(
    level: str | None = None,
    log_file: str | None = None,
    console_level: str | None = None,
) -> None:
    """Configure loguru with console and optional file output.

    Args:
        level: Logging level for the file sink, and the console unless
            console_level is given. Defaults to LOG_LEVEL.
        log_file: Path of the log file. Defaults to LOG_FILE; no file sink
            when both are unset.
        console_level: Separate console threshold, so the CLI can keep its
            terminal output clean while the file still gets everything.
    """
    level = level or settings.log_level
    log_file = log_file or settings.log_file

    logger.remove()

    logger.add(
        sys.stderr,
        format=CONSOLE_FORMAT,
        level=console_level or level,
        colorize=True,
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)

        logger.add(
            log_path,
            format=FILE_FORMAT,
            level=level,
            rotation=settings.log_rotation,
            retention=settings.log_retention,
            compression="zip",
            backtrace=True,
            diagnose=True,
        )

    logger.info(f"Logger initialized with level={level} file={log_file or '-'}")
