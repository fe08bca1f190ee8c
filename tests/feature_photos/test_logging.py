# SPDX-License-Identifier: MIT
"""Tests for logging setup."""

import logging

from loguru import logger

from feature_photos.utils.logging import setup_logging


class TestSetupLogging:
    """Test loguru sink configuration."""

    def test_writes_log_file(self, tmp_path):
        log_file = tmp_path / "logs" / "photos.log"
        setup_logging(level="debug", log_file=log_file)

        logger.info("resolved n123")
        content = log_file.read_text()
        logger.remove()

        assert "resolved n123" in content

    def test_quiets_http_client_loggers(self):
        setup_logging(level="DEBUG")
        logger.remove()

        assert logging.getLogger("httpx").level == logging.WARNING
