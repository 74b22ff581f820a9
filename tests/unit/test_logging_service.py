"""Tests for logging configuration."""

import logging
from unittest.mock import patch

from montez.services.logging import get_log_level, setup_logging


class TestSetupLogging:
    """Test root logger configuration."""

    def setup_method(self):
        """Save original handlers before each test."""
        self.root_logger = logging.getLogger()
        self.original_handlers = self.root_logger.handlers.copy()
        self.original_level = self.root_logger.level

    def teardown_method(self):
        """Restore original handlers after each test."""
        for handler in self.root_logger.handlers[:]:
            handler.close()
            self.root_logger.removeHandler(handler)
        for handler in self.original_handlers:
            self.root_logger.addHandler(handler)
        self.root_logger.setLevel(self.original_level)

    def test_creates_log_directory(self, tmp_path):
        """Test log directory is created."""
        log_file = tmp_path / "nested" / "montez.log"

        setup_logging(str(log_file))

        assert log_file.parent.exists()

    def test_stdout_and_file_handlers(self, tmp_path):
        """Test stdout and file handlers are added."""
        setup_logging(str(tmp_path / "montez.log"))

        assert len(self.root_logger.handlers) == 2

    def test_stdout_only(self):
        """Test stdout handler only when no log file is given."""
        setup_logging(None)

        assert len(self.root_logger.handlers) == 1
        assert isinstance(self.root_logger.handlers[0], logging.StreamHandler)

    def test_level_from_environment(self, tmp_path):
        """Test level read from LOG_LEVEL."""
        with patch.dict("os.environ", {"LOG_LEVEL": "WARNING"}, clear=False):
            setup_logging(str(tmp_path / "montez.log"))

        assert self.root_logger.level == logging.WARNING
        for handler in self.root_logger.handlers:
            assert handler.level == logging.WARNING

    def test_writes_formatted_records(self, tmp_path):
        """Test records written with timestamp, logger name and level."""
        log_file = tmp_path / "montez.log"
        with patch.dict("os.environ", {"LOG_LEVEL": "INFO"}, clear=False):
            setup_logging(str(log_file))

        logging.getLogger("montez.services.balance_service").warning("Balance check")
        for handler in self.root_logger.handlers:
            handler.flush()

        contents = log_file.read_text()
        assert "montez.services.balance_service" in contents
        assert "WARNING" in contents
        assert "Balance check" in contents
        assert contents.startswith("[")

    def test_repeated_setup_does_not_duplicate_handlers(self, tmp_path):
        """Test existing handlers are replaced, not duplicated."""
        dummy_handler = logging.StreamHandler()
        self.root_logger.addHandler(dummy_handler)

        setup_logging(str(tmp_path / "montez.log"))
        setup_logging(str(tmp_path / "montez.log"))

        assert len(self.root_logger.handlers) == 2
        assert dummy_handler not in self.root_logger.handlers


class TestGetLogLevel:
    def test_default_is_info(self):
        """Test INFO when LOG_LEVEL is unset."""
        with patch.dict("os.environ", {}, clear=True):
            assert get_log_level() == logging.INFO

    def test_case_insensitive(self):
        """Test lowercase level names are accepted."""
        with patch.dict("os.environ", {"LOG_LEVEL": "debug"}):
            assert get_log_level() == logging.DEBUG

    def test_unknown_level_falls_back_to_info(self):
        """Test unknown level names fall back to INFO."""
        with patch.dict("os.environ", {"LOG_LEVEL": "VERBOSE"}):
            assert get_log_level() == logging.INFO
