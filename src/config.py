"""Application configuration loaded from environment variables and .env file."""

from __future__ import annotations

import logging
import sys

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# MT5 exports use dotted dates; the rest cover common spreadsheet re-saves.
DEFAULT_DATE_FORMATS = [
    "%Y.%m.%d %H:%M:%S",
    "%Y.%m.%d %H:%M",
    "%Y.%m.%d",
    "%Y-%m-%d %H:%M:%S",
    "%Y-%m-%d %H:%M",
    "%Y-%m-%d",
    "%m/%d/%Y %H:%M:%S",
    "%m/%d/%Y %H:%M",
    "%m/%d/%Y",
]


class Settings(BaseSettings):
    """tradelens configuration.

    Values are loaded from environment variables with fallback to .env file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Analysis
    percentage_mode: bool = False
    include_fees: bool = False  # net P&L = profit + commission + swap when True

    # Ingestion
    csv_delimiter: str = ","
    date_formats: list[str] = DEFAULT_DATE_FORMATS

    # Paths
    output_path: str = "output/"
    log_file: str = "data/tradelens.log"

    # Logging
    log_level: str = "INFO"

    @field_validator("csv_delimiter")
    @classmethod
    def validate_csv_delimiter(cls, v: str) -> str:
        if len(v) != 1:
            raise ValueError(f"csv_delimiter must be a single character, got '{v}'")
        return v

    @field_validator("date_formats")
    @classmethod
    def validate_date_formats(cls, v: list[str]) -> list[str]:
        if not v:
            raise ValueError("date_formats must contain at least one format")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        v = v.upper()
        valid_levels = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if v not in valid_levels:
            raise ValueError(f"log_level must be one of {valid_levels}, got '{v}'")
        return v


def setup_logging(level: str = "INFO", log_file: str | None = None) -> None:
    """Configure logging with console and file handlers.

    Args:
        level: Log level string (DEBUG, INFO, WARNING, ERROR, CRITICAL).
        log_file: Path of the debug log file. Defaults to ``settings.log_file``.
    """
    log_format = "%(asctime)s | %(levelname)-8s | %(name)s | %(message)s"
    date_format = "%Y-%m-%d %H:%M:%S"

    root_logger = logging.getLogger()
    root_logger.setLevel(getattr(logging, level))

    # Clear existing handlers to avoid duplicates on re-init
    root_logger.handlers.clear()

    # Console handler
    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, level))
    console_handler.setFormatter(logging.Formatter(log_format, date_format))
    root_logger.addHandler(console_handler)

    # File handler, skipped when the log directory is missing
    try:
        file_handler = logging.FileHandler(log_file or settings.log_file)
        file_handler.setLevel(logging.DEBUG)
        file_handler.setFormatter(logging.Formatter(log_format, date_format))
        root_logger.addHandler(file_handler)
    except OSError:
        pass


# Module-level singleton
settings = Settings()
