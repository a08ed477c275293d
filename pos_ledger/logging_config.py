"""
Logging setup shared by the API and scripts.

Every module logs through ``logging.getLogger(__name__)``;
this module only decides where the records go.
"""

import logging
import sys

LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

# Libraries that are chatty at INFO
NOISY_LOGGERS = [
    "sqlalchemy.engine",
    "httpx",
    "httpcore",
    "uvicorn.access",
]


def setup_logging(level: str | int = logging.INFO) -> logging.Logger:
    """
    Configure the root logger with a single console handler.

    Existing root handlers are removed first, so calling this
    twice does not duplicate output.

    Returns:
        The configured root logger.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    root_logger = logging.getLogger()
    root_logger.setLevel(level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter(LOG_FORMAT, datefmt=LOG_DATE_FORMAT)
    )
    root_logger.addHandler(console_handler)

    for logger_name in NOISY_LOGGERS:
        logging.getLogger(logger_name).setLevel(logging.WARNING)

    return root_logger
