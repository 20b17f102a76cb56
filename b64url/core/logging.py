# b64url/core/logging.py
import logging
from typing import Optional


def get_logger(name: str) -> logging.Logger:
    """
    Logger that propagates to the root logger.
    Falls back to WARNING when the application has not configured logging yet.
    """
    logger = logging.getLogger(name)
    logger.propagate = True

    if not logging.getLogger().handlers:
        logger.setLevel(logging.WARNING)

    return logger


def configure(level: int = logging.INFO, handler: Optional[logging.Handler] = None) -> logging.Logger:
    """Attach a handler to the package logger and open up child loggers to `level`."""
    package_logger = logging.getLogger("b64url")
    if handler is not None and not any(type(h) is type(handler) for h in package_logger.handlers):
        package_logger.addHandler(handler)
    package_logger.setLevel(level)

    # get_logger() may have pinned children at WARNING before configuration
    for name in list(logging.root.manager.loggerDict):
        if name.startswith("b64url."):
            logging.getLogger(name).setLevel(logging.NOTSET)

    return package_logger
