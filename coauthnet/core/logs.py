"""
logging setup for coauthnet.
"""

import logging
from typing import Optional


logger = logging.getLogger("coauthnet")


def setup_logging(
    level: int = logging.INFO,
    log_file: Optional[str] = None
):
    """
    setup coauthnet logging.
    call once at startup.
    """
    formatter = logging.Formatter(
        "%(asctime)s [%(name)s] %(levelname)s: %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    # console handler
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(formatter)
    console_handler.setLevel(level)

    # drop handlers from earlier calls
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()

    logger.setLevel(level)
    logger.addHandler(console_handler)

    # file handler if specified
    if log_file:
        file_handler = logging.FileHandler(log_file)
        file_handler.setFormatter(formatter)
        file_handler.setLevel(level)
        logger.addHandler(file_handler)

    return logger
