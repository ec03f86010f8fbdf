"""Logging utilities for maxupload modules.

Component loggers live under the ``maxupload`` namespace and are left at
NOTSET, so a level set on ``maxupload`` or ``maxupload.upload`` (by
``setup_logging`` or ``UploadConfig.log_level``) reaches all of them.
"""

import logging

PACKAGE_LOGGER = 'maxupload'


def get_logger(name: str) -> logging.Logger:
    """Get a component logger that inherits its level from the package.

    When the root logger is unconfigured (no basicConfig() yet) and nobody
    set a level on the package logger, the package logger defaults to
    WARNING. The component logger itself is never given a level.

    Args:
        name: Logger name, e.g. 'maxupload.upload.chunk'

    Returns:
        Logger instance
    """
    logger = logging.getLogger(name)
    logger.propagate = True

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    if not logging.getLogger().handlers and package_logger.level == logging.NOTSET:
        package_logger.setLevel(logging.WARNING)

    return logger


def set_level(level: int, name: str = PACKAGE_LOGGER) -> None:
    """Set the level of a maxupload logger subtree."""
    logging.getLogger(name).setLevel(level)
