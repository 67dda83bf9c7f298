import logging

LOG_FORMAT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"

logger = logging.getLogger("househunter")


def configure_logging(level: str = "INFO") -> None:
    """
    Attach a single stream handler to the package logger.
    Safe to call more than once (app factory runs per test).
    """
    logger.setLevel(level.upper())
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        logger.addHandler(handler)
