"""Application configuration helpers."""

from __future__ import annotations

import os
from datetime import timedelta
from typing import Type


def _env_flag(name: str, default: bool) -> bool:
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in {"1", "true", "yes", "on"}


class BaseConfig:
    """Base configuration shared across environments."""

    SECRET_KEY = os.getenv("FLASK_SECRET_KEY", "dev-secret-change-me")
    JWT_SECRET_KEY = os.getenv("JWT_SECRET_KEY", SECRET_KEY)
    JWT_ALGORITHM = "HS256"
    TOKEN_TTL = timedelta(days=int(os.getenv("TOKEN_TTL_DAYS", "7")))
    BCRYPT_ROUNDS = int(os.getenv("BCRYPT_ROUNDS", "12"))
    LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
    SEED_DEMO_DATA = _env_flag("SEED_DEMO_DATA", False)
    ALLOW_ADMIN_REGISTRATION = _env_flag("ALLOW_ADMIN_REGISTRATION", True)
    # The API authenticates with bearer tokens, not cookies.
    WTF_CSRF_ENABLED = False


class DevelopmentConfig(BaseConfig):
    """Configuration tweaks for local development."""

    DEBUG = True
    TESTING = False
    LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")
    SEED_DEMO_DATA = _env_flag("SEED_DEMO_DATA", True)


class TestingConfig(BaseConfig):
    """Fast, deterministic configuration for pytest."""

    DEBUG = False
    TESTING = True
    SECRET_KEY = "testing-secret"
    JWT_SECRET_KEY = "testing-jwt-secret"
    BCRYPT_ROUNDS = 4
    SEED_DEMO_DATA = False
    ALLOW_ADMIN_REGISTRATION = True


class ProductionConfig(BaseConfig):
    """Production hardened configuration."""

    DEBUG = False
    TESTING = False
    ALLOW_ADMIN_REGISTRATION = _env_flag("ALLOW_ADMIN_REGISTRATION", False)


def get_config() -> Type[BaseConfig]:
    """Return the configuration class based on FLASK_ENV."""

    env = os.getenv("FLASK_ENV", "development").lower()
    if env == "production":
        return ProductionConfig
    if env == "testing":
        return TestingConfig
    return DevelopmentConfig
