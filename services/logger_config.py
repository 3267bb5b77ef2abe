# services/logger_config.py
import logging
from logging.handlers import RotatingFileHandler
import os
from config import settings

def setup_logging(verbose: bool = False) -> logging.Logger:
    """
    Sets up logging for the command line tool.
    Diagnostics go to stderr so stdout stays clean for results;
    a rotating log file is added when LOG_FILE_PATH is configured.
    """
    logger = logging.getLogger(settings.LOGGER_NAME)

    # Avoid adding duplicate handlers if this function is called multiple times
    if logger.hasHandlers():
        logger.handlers.clear()

    logger.setLevel(logging.DEBUG)

    formatter = logging.Formatter(
        '%(asctime)s - %(name)s - %(levelname)s - [%(filename)s:%(lineno)d] - %(message)s'
    )

    # File Handler: Rotates logs to prevent large files.
    if settings.LOG_FILE_PATH:
        try:
            log_dir = os.path.dirname(settings.LOG_FILE_PATH)
            if log_dir and not os.path.exists(log_dir):
                os.makedirs(log_dir, exist_ok=True)

            file_handler = RotatingFileHandler(
                settings.LOG_FILE_PATH,
                maxBytes=5 * 1024 * 1024,  # 5MB
                backupCount=5
            )
            file_handler.setFormatter(formatter)
            file_handler.setLevel(logging.DEBUG)
            logger.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Could not set up file logger at {settings.LOG_FILE_PATH}: {e}")

    logger.propagate = True

    # Console Handler: verbose mode shows timings and skipped files.
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(logging.DEBUG if verbose else logging.WARNING)
    logger.addHandler(console_handler)

    logger.debug("Logging configured successfully.")
    return logger
