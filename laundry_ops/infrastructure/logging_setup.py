"""
Logging Setup - Installs handlers on the package logger from LoggingConfig.
"""

import logging
import logging.handlers

from laundry_ops.application.config import LoggingConfig

PACKAGE_LOGGER = "laundry_ops"


def configure_logging(config: LoggingConfig | None = None) -> logging.Logger:
    """
    Configure the package logger.

    Installs a stream handler and, when ``config.file`` is set, a rotating
    file handler. Calling it again replaces the handlers it installed before.

    Args:
        config: Logging settings, read from the environment if omitted

    Returns:
        The configured package logger
    """
    config = config or LoggingConfig.from_env()
    formatter = logging.Formatter(config.format)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(config.level.upper())

    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()

    stream_handler = logging.StreamHandler()
    stream_handler.setFormatter(formatter)
    package_logger.addHandler(stream_handler)

    if config.file:
        file_handler = logging.handlers.RotatingFileHandler(
            config.file,
            maxBytes=config.max_bytes,
            backupCount=config.backup_count,
        )
        file_handler.setFormatter(formatter)
        package_logger.addHandler(file_handler)

    package_logger.debug(f"Logging configured at {config.level}")
    return package_logger
