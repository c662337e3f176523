"""Package-wide logger."""
import logging
from sys import stdout

FORMAT = "[%(levelname)s - %(funcName)4s() ] %(message)s"

logger = logging.getLogger("expression_evaluator")


def configure(level: str = "WARNING") -> None:
    """
    Attach a stdout handler to the package logger and set its level.

    Calling it again only updates the level.

    :param str level: Logging level name (DEBUG, INFO, WARNING, ERROR)
    """
    if not logger.handlers:
        handler = logging.StreamHandler(stdout)
        handler.setFormatter(logging.Formatter(FORMAT))
        logger.addHandler(handler)
    logger.setLevel(level.upper())
