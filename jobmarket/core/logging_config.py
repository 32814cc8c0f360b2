"""
Logging setup for the job marketplace backend.

All modules log through children of the `jobmarket` logger
(`jobmarket.lifecycle`, `jobmarket.contracts`, `jobmarket.db`, ...).
`configure_logging` is called once on application startup.
"""

import logging

from jobmarket.core.config import LOG_LEVEL

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def configure_logging(level: str = LOG_LEVEL) -> logging.Logger:
    """
    Attaches a stream handler to the `jobmarket` logger.

    Calling it more than once does not add duplicate handlers.

    Args:
        level (str): Log level name, e.g. "INFO" or "DEBUG".

    Returns:
        logging.Logger: The configured `jobmarket` logger.
    """

    root = logging.getLogger("jobmarket")
    root.setLevel(level)
    if not root.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
    return root
