"""
Unit tests for logging setup
"""

import logging
import logging.handlers

import pytest

from laundry_ops.application.config import LoggingConfig
from laundry_ops.infrastructure.logging_setup import PACKAGE_LOGGER, configure_logging


@pytest.fixture(autouse=True)
def restore_package_logger():
    package_logger = logging.getLogger(PACKAGE_LOGGER)
    saved_handlers = list(package_logger.handlers)
    saved_level = package_logger.level
    yield
    for handler in list(package_logger.handlers):
        package_logger.removeHandler(handler)
        handler.close()
    for handler in saved_handlers:
        package_logger.addHandler(handler)
    package_logger.setLevel(saved_level)


class TestConfigureLogging:
    def test_stream_handler_and_level(self):
        package_logger = configure_logging(LoggingConfig(level="warning"))

        assert package_logger.name == "laundry_ops"
        assert package_logger.level == logging.WARNING
        assert len(package_logger.handlers) == 1
        assert isinstance(package_logger.handlers[0], logging.StreamHandler)

    def test_rotating_file_handler(self, tmp_path):
        log_file = tmp_path / "orders.log"

        package_logger = configure_logging(
            LoggingConfig(level="INFO", file=str(log_file), max_bytes=1024, backup_count=2)
        )
        logging.getLogger("laundry_ops.application").info("order created")
        for handler in package_logger.handlers:
            handler.flush()

        file_handlers = [
            handler
            for handler in package_logger.handlers
            if isinstance(handler, logging.handlers.RotatingFileHandler)
        ]
        assert len(file_handlers) == 1
        assert file_handlers[0].maxBytes == 1024
        assert "order created" in log_file.read_text()

    def test_reconfiguring_replaces_handlers(self):
        configure_logging(LoggingConfig())
        package_logger = configure_logging(LoggingConfig())

        assert len(package_logger.handlers) == 1
