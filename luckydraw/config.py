"""Environment-based configuration."""

from __future__ import annotations

import os
from dataclasses import dataclass


def _int_from_env(key: str, default: int) -> int:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        return default


# Used when AWARDS_FILE is not set.
DEFAULT_AWARDS: dict[str, dict] = {
    "lucky": {"name": "Lucky Prize", "quota": 43, "rounds": [13, 15, 15]},
    "third": {"name": "Third Prize", "quota": 20, "rounds": [10, 10]},
    "second": {"name": "Second Prize", "quota": 9, "rounds": [9]},
    "first": {"name": "First Prize", "quota": 5, "rounds": [5]},
}


@dataclass(frozen=True)
class BaseConfig:
    """Base configuration shared by all environments."""

    APP_ENV: str = os.getenv("APP_ENV", "development")
    SECRET_KEY: str = os.getenv("SECRET_KEY", "dev-secret")
    LOG_LEVEL: str = os.getenv("LOG_LEVEL", "INFO")

    # JSON file mapping award id -> {name, quota, rounds}; empty means DEFAULT_AWARDS.
    AWARDS_FILE: str = os.getenv("AWARDS_FILE", "")

    # Pool used until a spreadsheet is imported.
    DEFAULT_POOL_START: int = _int_from_env("DEFAULT_POOL_START", 1)
    DEFAULT_POOL_END: int = _int_from_env("DEFAULT_POOL_END", 180)
    DEFAULT_POOL_WIDTH: int = _int_from_env("DEFAULT_POOL_WIDTH", 3)

    # Forces the LCG fallback in the randomness source when "0".
    USE_STRONG_RANDOM: bool = os.getenv("USE_STRONG_RANDOM", "1").strip() != "0"

    MAX_CONTENT_LENGTH: int = _int_from_env("MAX_UPLOAD_BYTES", 5 * 1024 * 1024)


@dataclass(frozen=True)
class DevelopmentConfig(BaseConfig):
    """Development configuration."""

    DEBUG: bool = True


@dataclass(frozen=True)
class ProductionConfig(BaseConfig):
    """Production configuration."""

    DEBUG: bool = False


@dataclass(frozen=True)
class TestingConfig(BaseConfig):
    """Test-suite configuration."""

    DEBUG: bool = False
    TESTING: bool = True
    AWARDS_FILE: str = ""


def get_config() -> type[BaseConfig]:
    """Resolve configuration class based on APP_ENV."""

    env = os.getenv("APP_ENV", "development").lower().strip()
    if env == "production":
        return ProductionConfig
    if env == "testing":
        return TestingConfig
    return DevelopmentConfig
