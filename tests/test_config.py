"""Tests for configuration and logging setup."""

import logging
import os

import pytest

from src.config import DEFAULT_DATE_FORMATS, Settings, setup_logging


class TestSettings:
    """Test Pydantic Settings configuration."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("LOG_FILE", raising=False)
        s = Settings(_env_file=None)
        assert s.percentage_mode is False
        assert s.include_fees is False
        assert s.csv_delimiter == ","
        assert s.date_formats == DEFAULT_DATE_FORMATS
        assert s.output_path == "output/"
        assert s.log_file == "data/tradelens.log"
        assert s.log_level == "INFO"

    def test_env_overrides(self, monkeypatch):
        monkeypatch.setenv("INCLUDE_FEES", "true")
        monkeypatch.setenv("PERCENTAGE_MODE", "1")
        monkeypatch.setenv("CSV_DELIMITER", ";")
        s = Settings(_env_file=None)
        assert s.include_fees is True
        assert s.percentage_mode is True
        assert s.csv_delimiter == ";"

    def test_date_formats_from_env_json(self, monkeypatch):
        monkeypatch.setenv("DATE_FORMATS", '["%d.%m.%Y"]')
        s = Settings(_env_file=None)
        assert s.date_formats == ["%d.%m.%Y"]

    def test_date_formats_must_not_be_empty(self):
        with pytest.raises(Exception):
            Settings(date_formats=[], _env_file=None)

    def test_delimiter_must_be_single_char(self):
        with pytest.raises(Exception):
            Settings(csv_delimiter=";;", _env_file=None)
        with pytest.raises(Exception):
            Settings(csv_delimiter="", _env_file=None)

    def test_log_level_normalized_to_uppercase(self):
        s = Settings(log_level="debug", _env_file=None)
        assert s.log_level == "DEBUG"

    def test_log_level_rejects_invalid(self):
        with pytest.raises(Exception):
            Settings(log_level="TRACE", _env_file=None)


class TestSetupLogging:
    """Test logging configuration."""

    def test_setup_logging_creates_handlers(self):
        setup_logging("INFO", log_file=os.devnull)
        root = logging.getLogger()
        assert root.level == logging.INFO
        assert len(root.handlers) == 2

    def test_missing_log_dir_skips_file_handler(self, tmp_path):
        setup_logging("WARNING", log_file=str(tmp_path / "missing" / "app.log"))
        root = logging.getLogger()
        assert root.level == logging.WARNING
        assert len(root.handlers) == 1

    def test_reinit_does_not_duplicate(self):
        setup_logging("INFO", log_file=os.devnull)
        setup_logging("INFO", log_file=os.devnull)
        assert len(logging.getLogger().handlers) == 2
