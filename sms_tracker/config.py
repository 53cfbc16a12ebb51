"""
Configuration settings for the SMS Expense Tracker.
Centralized configuration management for the application.
"""

import os
from pathlib import Path
from typing import Optional


class Config:
    """Application configuration class."""

    # Application Settings
    APP_NAME = "SMS Expense Tracker"
    VERSION = "1.0.0"

    # Extraction Settings
    DEFAULT_CURRENCY: str = os.getenv("DEFAULT_CURRENCY", "AED")
    EXTRACTION_MODE: str = os.getenv("EXTRACTION_MODE", "template")
    EXTRACTION_MODES: list[str] = ["template", "generic"]

    # Logging Settings
    LOG_DIR: Path = Path(os.getenv("LOG_DIR", "./logs"))
    LOG_FILE: str = os.getenv("LOG_FILE", "")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FORMAT: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    LOG_DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

    # API Settings
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8000"))

    @classmethod
    def ensure_directories(cls):
        """Ensure required directories exist."""
        cls.LOG_DIR.mkdir(parents=True, exist_ok=True)

    @classmethod
    def get_log_path(cls, filename: str) -> Path:
        """Get full path for log file."""
        cls.ensure_directories()
        return cls.LOG_DIR / filename

    @classmethod
    def get_extraction_mode(cls, mode: Optional[str] = None) -> str:
        """
        Resolve the extraction mode to use.

        Args:
            mode: Explicit mode name, or None to use EXTRACTION_MODE

        Returns:
            Lower-cased mode name

        Raises:
            ValueError: If the mode is not one of EXTRACTION_MODES
        """
        resolved = (mode or cls.EXTRACTION_MODE).strip().lower()
        if resolved not in cls.EXTRACTION_MODES:
            raise ValueError(
                f"Invalid extraction mode '{resolved}'. "
                f"Allowed modes: {', '.join(cls.EXTRACTION_MODES)}"
            )
        return resolved

    @classmethod
    def to_dict(cls) -> dict:
        """Convert configuration to dictionary."""
        return {
            "app_name": cls.APP_NAME,
            "version": cls.VERSION,
            "default_currency": cls.DEFAULT_CURRENCY,
            "extraction_mode": cls.EXTRACTION_MODE,
            "log_dir": str(cls.LOG_DIR),
            "log_file": cls.LOG_FILE,
            "log_level": cls.LOG_LEVEL,
            "api_host": cls.API_HOST,
            "api_port": cls.API_PORT,
        }


# Create a singleton instance
config = Config()
