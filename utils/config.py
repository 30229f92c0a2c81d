"""Configuration management using environment variables.

This module loads configuration from .env file and provides
typed access to configuration values with sensible defaults.

Author: Pat G Cappelaere, IBM Federal Consulting
Created: 2025-12-06
Version: 2.0.0
License: MIT
"""

import os
from pathlib import Path
from typing import Optional, List
from dotenv import load_dotenv

# Load .env file from project root
load_dotenv()

PROJECT_ROOT = Path(__file__).resolve().parent.parent

IMPROVED_RATING_POLICIES = ("leave", "auto_close")
CONFLICT_POLICIES = ("last_write_wins", "reject_stale")


class Config:
    """Configuration class for the assessment engine.

    Loads configuration from environment variables with fallback defaults.
    All values are loaded once at module import time.

    Example:
        >>> from utils.config import config
        >>> print(config.RECOMMENDATION_THRESHOLD)
        2
        >>> print(config.CONFLICT_POLICY)
        'last_write_wins'
    """

    # Directory Configuration
    DATA_DIR: Path = Path(os.getenv("DATA_DIR", "data"))
    CONFIG_DIR: Path = Path(os.getenv("CONFIG_DIR", str(PROJECT_ROOT / "config")))
    SCHEMAS_DIR: Path = Path(os.getenv("SCHEMAS_DIR", str(PROJECT_ROOT / "schemas")))

    # Scoring Configuration
    NEUTRAL_RATING: int = int(os.getenv("NEUTRAL_RATING", "3"))
    DEFAULT_WEIGHT: float = float(os.getenv("DEFAULT_WEIGHT", "3"))
    TOP_CONTRIBUTORS: int = int(os.getenv("TOP_CONTRIBUTORS", "3"))

    # Recommendation Configuration
    RECOMMENDATION_THRESHOLD: int = int(os.getenv("RECOMMENDATION_THRESHOLD", "2"))
    # What happens to an auto-generated entry once its rating improves
    RECOMMENDATION_IMPROVED_POLICY: str = os.getenv("RECOMMENDATION_IMPROVED_POLICY", "leave").lower()

    # Persistence Configuration
    CONFLICT_POLICY: str = os.getenv("CONFLICT_POLICY", "last_write_wins").lower()

    # API Configuration
    API_HOST: str = os.getenv("API_HOST", "0.0.0.0")
    API_PORT: int = int(os.getenv("API_PORT", "8200"))
    CORS_ORIGINS: List[str] = [
        origin.strip()
        for origin in os.getenv("CORS_ORIGINS", "http://localhost:5173,http://127.0.0.1:5173").split(",")
        if origin.strip()
    ]

    # Logging Configuration
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")
    LOG_FILE: Optional[str] = os.getenv("LOG_FILE", "logs/assessment_engine.log")
    LOG_FORMAT: str = os.getenv(
        "LOG_FORMAT",
        "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )

    @classmethod
    def get_config_file(cls, name: str) -> Path:
        """Get path to a YAML reference file in the config directory.

        Args:
            name: File stem (e.g., "modules", "industry_weights").

        Returns:
            Path to the YAML file.

        Example:
            >>> Config.get_config_file("modules")
            PosixPath('.../config/modules.yml')
        """
        return cls.CONFIG_DIR / f"{name}.yml"

    @classmethod
    def validate(cls) -> List[str]:
        """Validate configuration and return list of issues.

        Returns:
            List of validation error messages. Empty list if all valid.

        Example:
            >>> errors = Config.validate()
            >>> if errors:
            ...     print("Configuration errors:", errors)
        """
        errors = []

        # Check required directories exist
        if not cls.CONFIG_DIR.exists():
            errors.append(f"Config directory does not exist: {cls.CONFIG_DIR}")

        if not cls.SCHEMAS_DIR.exists():
            errors.append(f"Schemas directory does not exist: {cls.SCHEMAS_DIR}")

        # Validate numeric ranges
        if cls.NEUTRAL_RATING < 1 or cls.NEUTRAL_RATING > 5:
            errors.append(f"NEUTRAL_RATING must be 1-5, got {cls.NEUTRAL_RATING}")

        if cls.DEFAULT_WEIGHT <= 0:
            errors.append(f"DEFAULT_WEIGHT must be > 0, got {cls.DEFAULT_WEIGHT}")

        if cls.RECOMMENDATION_THRESHOLD < 1 or cls.RECOMMENDATION_THRESHOLD > 5:
            errors.append(
                f"RECOMMENDATION_THRESHOLD must be 1-5, got {cls.RECOMMENDATION_THRESHOLD}"
            )

        if cls.TOP_CONTRIBUTORS < 1:
            errors.append(f"TOP_CONTRIBUTORS must be >= 1, got {cls.TOP_CONTRIBUTORS}")

        # Validate policy switches
        if cls.RECOMMENDATION_IMPROVED_POLICY not in IMPROVED_RATING_POLICIES:
            errors.append(
                f"RECOMMENDATION_IMPROVED_POLICY must be one of {IMPROVED_RATING_POLICIES}, "
                f"got {cls.RECOMMENDATION_IMPROVED_POLICY}"
            )

        if cls.CONFLICT_POLICY not in CONFLICT_POLICIES:
            errors.append(
                f"CONFLICT_POLICY must be one of {CONFLICT_POLICIES}, got {cls.CONFLICT_POLICY}"
            )

        return errors


# Global config instance
config = Config()


# Validate configuration on import
_validation_errors = config.validate()
if _validation_errors:
    import warnings
    for error in _validation_errors:
        warnings.warn(f"Configuration warning: {error}")


# Made with Bob
