#!/usr/bin/env python3
"""
Centralized Configuration Module using Pydantic Settings

This module provides type-safe, environment-based configuration for the Redis
connector. Values provided by the host platform (connection and operation
properties) always win; these settings are the process-level defaults used
when a property is not supplied.

Architectural Decision: Pydantic Settings for type safety and validation
- Environment variable loading with .env support
- Type validation at startup (fail fast on misconfiguration)
- Easy testing with override mechanisms

Author: System Architect
Date: 2025-12-05
"""

from typing import Literal

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from redis_connector.core.config.constants import METADATA_RESOURCE_PACKAGE


class RedisSettings(BaseSettings):
    """
    Redis topology and pool configuration.

    STAGE-CONN.0: Store connection configuration

    REDIS_HOSTS uses the same semicolon-delimited format as the host
    platform's `hosts` connection property. The first node is the primary.
    """

    REDIS_HOSTS: str = Field(
        default="redis://localhost:6379",
        description="Semicolon-delimited node URLs, primary first",
    )
    REDIS_MAX_CONNECTIONS: int = Field(default=50, description="Maximum connections per node pool")
    REDIS_SOCKET_TIMEOUT: float = Field(default=5.0, description="Socket timeout in seconds")
    REDIS_SOCKET_CONNECT_TIMEOUT: float = Field(default=5.0, description="Connection timeout in seconds")
    REDIS_HEALTH_CHECK_INTERVAL: int = Field(default=30, description="Health check interval in seconds")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class ConnectorSettings(BaseSettings):
    """
    Operation defaults.

    STAGE-OP.0: Operation property defaults
    """

    KEY_PREFIX: str = Field(default="", description="Prefix applied to every logical key")
    THROW_ON_NOT_FOUND: bool = Field(
        default=False, description="Report missing keys on GET as application errors"
    )
    METADATA_RESOURCE_PACKAGE: str = Field(
        default=METADATA_RESOURCE_PACKAGE,
        description="Package holding the object type descriptor and schemas",
    )

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class LoggingSettings(BaseSettings):
    """
    Logging configuration for structured logging.

    STAGE-L: Logging configuration
    """

    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class ApplicationSettings(BaseSettings):
    """General application settings."""

    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    APP_NAME: str = Field(default="Redis Connector", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")

    model_config = SettingsConfigDict(env_prefix="", case_sensitive=True)


class Settings(BaseSettings):
    """
    Main settings class that aggregates all configuration sections.

    STAGE-0: Centralized configuration initialization

    Usage:
        from redis_connector.core.config import get_settings

        settings = get_settings()
        hosts = settings.redis.REDIS_HOSTS
        prefix = settings.connector.KEY_PREFIX
    """

    # Redis settings
    REDIS_HOSTS: str = Field(
        default="redis://localhost:6379",
        description="Semicolon-delimited node URLs, primary first",
    )
    REDIS_MAX_CONNECTIONS: int = Field(default=50, description="Maximum connections per node pool")
    REDIS_SOCKET_TIMEOUT: float = Field(default=5.0, description="Socket timeout in seconds")
    REDIS_SOCKET_CONNECT_TIMEOUT: float = Field(default=5.0, description="Connection timeout in seconds")
    REDIS_HEALTH_CHECK_INTERVAL: int = Field(default=30, description="Health check interval in seconds")

    # Connector settings
    KEY_PREFIX: str = Field(default="", description="Prefix applied to every logical key")
    THROW_ON_NOT_FOUND: bool = Field(
        default=False, description="Report missing keys on GET as application errors"
    )
    METADATA_RESOURCE_PACKAGE: str = Field(
        default=METADATA_RESOURCE_PACKAGE,
        description="Package holding the object type descriptor and schemas",
    )

    # Logging settings
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")
    LOG_FORMAT: Literal["json", "console"] = Field(default="json", description="Log output format")

    # Application settings
    ENVIRONMENT: Literal["development", "staging", "production"] = Field(
        default="development",
        description="Application environment"
    )
    APP_NAME: str = Field(default="Redis Connector", description="Application name")
    APP_VERSION: str = Field(default="1.0.0", description="Application version")

    @field_validator("LOG_LEVEL")
    @classmethod
    def validate_log_level(cls, v):
        """Validate log level."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"LOG_LEVEL must be one of {valid_levels}")
        return v.upper()

    # Nested configuration objects
    @property
    def redis(self) -> 'RedisSettings':
        """Get Redis settings."""
        return RedisSettings(
            REDIS_HOSTS=self.REDIS_HOSTS,
            REDIS_MAX_CONNECTIONS=self.REDIS_MAX_CONNECTIONS,
            REDIS_SOCKET_TIMEOUT=self.REDIS_SOCKET_TIMEOUT,
            REDIS_SOCKET_CONNECT_TIMEOUT=self.REDIS_SOCKET_CONNECT_TIMEOUT,
            REDIS_HEALTH_CHECK_INTERVAL=self.REDIS_HEALTH_CHECK_INTERVAL,
        )

    @property
    def connector(self) -> 'ConnectorSettings':
        """Get connector operation defaults."""
        return ConnectorSettings(
            KEY_PREFIX=self.KEY_PREFIX,
            THROW_ON_NOT_FOUND=self.THROW_ON_NOT_FOUND,
            METADATA_RESOURCE_PACKAGE=self.METADATA_RESOURCE_PACKAGE,
        )

    @property
    def logging(self) -> 'LoggingSettings':
        """Get logging settings."""
        return LoggingSettings(
            LOG_LEVEL=self.LOG_LEVEL,
            LOG_FORMAT=self.LOG_FORMAT,
        )

    @property
    def app(self) -> 'ApplicationSettings':
        """Get application settings."""
        return ApplicationSettings(
            ENVIRONMENT=self.ENVIRONMENT,
            APP_NAME=self.APP_NAME,
            APP_VERSION=self.APP_VERSION,
        )

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore"  # Ignore extra environment variables
    )


# Global settings instance
_settings: Settings | None = None


def get_settings() -> Settings:
    """
    Get the process settings instance.

    STAGE-0.3: Settings initialization

    Returns:
        Settings: Cached settings instance
    """
    global _settings

    if _settings is None:
        _settings = Settings()

    return _settings


def reload_settings() -> Settings:
    """
    Reload settings (useful for testing).

    Returns:
        Settings: New settings instance
    """
    global _settings
    _settings = Settings()
    return _settings
