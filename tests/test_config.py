"""
Tests for configuration and logging setup
"""

import logging

import pytest

from sms_tracker.config import Config, config
from sms_tracker.logging_config import setup_logging


class TestConfig:

    def test_defaults(self):
        assert config.DEFAULT_CURRENCY == "AED"
        assert config.get_extraction_mode() in Config.EXTRACTION_MODES

    def test_extraction_mode_is_normalized(self):
        assert Config.get_extraction_mode(" GENERIC ") == "generic"

    def test_invalid_extraction_mode(self):
        with pytest.raises(ValueError):
            Config.get_extraction_mode("remote")

    def test_to_dict(self):
        settings = Config.to_dict()
        assert settings["app_name"] == Config.APP_NAME
        assert "extraction_mode" in settings


class TestLoggingSetup:

    def test_file_handler_in_log_dir(self, tmp_path, monkeypatch):
        monkeypatch.setattr(Config, "LOG_DIR", tmp_path)

        root = setup_logging(log_level="DEBUG", log_file="test.log", console_output=False)
        try:
            logging.getLogger("sms_tracker.test").info("hello")
            for handler in root.handlers:
                handler.flush()

            assert root.level == logging.DEBUG
            assert "hello" in (tmp_path / "test.log").read_text(encoding="utf-8")
        finally:
            for handler in list(root.handlers):
                handler.close()
            root.handlers.clear()
