import logging
import os
import sys

LOG_FORMAT = "%(asctime)s - [%(levelname)8s] - %(name)s - %(message)s"

_handler = None


def _get_handler():
    global _handler
    if _handler is None:
        _handler = logging.StreamHandler(sys.stdout)
        _handler.setFormatter(logging.Formatter(LOG_FORMAT))
    return _handler


def get_logger(logger_name, log_level=None):
    logger = logging.getLogger(logger_name)
    logger.setLevel(log_level or os.environ.get("LOG_LEVEL", "INFO"))
    if _get_handler() not in logger.handlers:
        logger.addHandler(_get_handler())
    logger.propagate = False
    return logger
