import logging
import sys
from pythonjsonlogger import jsonlogger

from src.infrastructure.config import settings

LOGGER_NAME = "frontendquiz"


def get_logger(name: str = LOGGER_NAME, log_level: str = settings.LOG_LEVEL):
    """
    Return the named JSON logger writing to stdout.

    Calling it again re-applies the level but never adds a second handler.
    """
    logger = logging.getLogger(name)
    logger.setLevel(log_level.upper())
    logger.propagate = False

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(jsonlogger.JsonFormatter(
            '%(asctime)s %(name)s %(levelname)s %(module)s %(funcName)s %(message)s'
        ))
        logger.addHandler(handler)

    return logger


# Shared by every module; level comes from LOG_LEVEL at import time
logger = get_logger()
