import sys

from loguru import logger

from timely.settings import settings

# Logging Constants
LOG_FORMAT_CONSOLE = (
    "<green>{time:HH:mm:ss}</green> | "
    "<level>{level: <8}</level> | "
    "<level>{message}</level>"
)
LOG_FORMAT_FILE = "{time:YYYY-MM-DD HH:mm:ss} | {level: <8} | {name}:{line} | {message}"
LOG_ROTATION = "10 MB"
LOG_RETENTION = "10 days"
LOG_COMPRESSION = "zip"


def setup_logging(verbose: bool = False) -> None:
    """
    Configure the logging system for the application.

    Always logs to stderr. Also writes a rotating timely.log under
    settings.log_dir unless settings.log_to_file is off, in which case
    logging is console only.

    Args:
        verbose (bool): If True, logs at DEBUG level. Otherwise logs at INFO,
                       or DEBUG when settings.debug is set.
    """
    logger.remove()

    is_debug = verbose or settings.debug
    level = "DEBUG" if is_debug else "INFO"

    logger.add(sys.stderr, level=level, format=LOG_FORMAT_CONSOLE)

    if not settings.log_to_file:
        logger.debug("Logging initialized (console only).")
        return

    settings.log_dir.mkdir(parents=True, exist_ok=True)
    log_file_path = settings.log_dir / "timely.log"
    logger.add(
        log_file_path,
        level=level,
        format=LOG_FORMAT_FILE,
        rotation=LOG_ROTATION,
        retention=LOG_RETENTION,
        compression=LOG_COMPRESSION,
    )

    logger.debug(f"Logging initialized. Logs saved to: {log_file_path}")
