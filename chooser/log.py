import logging

from .config import LOG_LEVEL

_LOGGERS = {}


def get_logger(name: str) -> logging.Logger:
    """
    Create or retrieve a named logger writing to the console.

    Admin tokens must never be passed to these loggers.
    """
    if name in _LOGGERS:
        return _LOGGERS[name]

    logger = logging.getLogger(name)
    logger.setLevel(LOG_LEVEL)

    console = logging.StreamHandler()
    console.setFormatter(
        logging.Formatter("%(asctime)s | %(levelname)s | %(name)s | %(message)s")
    )
    logger.addHandler(console)
    logger.propagate = False

    _LOGGERS[name] = logger
    return logger
