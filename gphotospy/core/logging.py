"""Logging utilities for gphotospy modules."""

import logging

PACKAGE_LOGGERS = (
    'gphotospy',
    'gphotospy.api',
    'gphotospy.client',
    'gphotospy.upload',
    'gphotospy.upload.file',
    'gphotospy.paging',
)


def get_logger(name: str) -> logging.Logger:
    """Get a logger that automatically inherits from root logger.

    Loggers work with basicConfig() without needing an explicit
    setup_logging() call. The logger will:
    - Propagate to root logger (default behavior)
    - Only set a default level if root logger has no handlers

    Args:
        name: Logger name (e.g. 'gphotospy.upload')

    Returns:
        Configured logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True

    # basicConfig() not called yet
    root_logger = logging.getLogger()
    if not root_logger.handlers:
        logger.setLevel(logging.WARNING)

    return logger


def set_package_level(level: int) -> None:
    """Apply one level to every gphotospy logger."""
    for name in PACKAGE_LOGGERS:
        logger = logging.getLogger(name)
        logger.setLevel(level)
        logger.propagate = True
