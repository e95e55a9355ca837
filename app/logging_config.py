import logging
from logging.handlers import RotatingFileHandler

from app.middlewares.trace_id_middleware import RequestContextLogFilter


def setup_logging():
    """
    Configures logging for the entire application.
    Logs messages to console and to a rotating log file.
    """
    logger = logging.getLogger()
    logger.setLevel(logging.DEBUG)

    # Prevent duplicate logs during development when using `uvicorn --reload`.
    # Each reload reinitializes the logger and adds new handlers unless cleared first.
    if logger.hasHandlers():
        logger.handlers.clear()

    # Injects trace_id and user_id
    log_filter = RequestContextLogFilter()

    formatter = logging.Formatter(
        fmt=(
            "[%(asctime)s] [%(levelname)s] [%(name)s] "
            "[thread=%(threadName)s, pid=%(process)d] "
            "[trace_id=%(trace_id)s, user_id=%(user_id)s] - %(message)s"
        ),
    )

    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.addFilter(log_filter)
    logger.addHandler(console_handler)

    # File handler with rotating log (max 5MB per file, keeping 3 backup files)
    file_handler = RotatingFileHandler(
        "app.log", maxBytes=5 * 1024 * 1024, backupCount=3
    )
    file_handler.setFormatter(formatter)
    file_handler.addFilter(log_filter)
    logger.addHandler(file_handler)

    error_handler = logging.FileHandler("error.log")
    error_handler.setLevel(logging.ERROR)
    error_handler.setFormatter(formatter)
    error_handler.addFilter(log_filter)
    logger.addHandler(error_handler)

    return logger
