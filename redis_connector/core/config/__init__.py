"""
Configuration Module

This module provides centralized, type-safe configuration management
for the Redis connector.

Components:
-----------
- **settings.py**: Pydantic-based configuration with environment variable loading
- **constants.py**: Response codes, property names, store sentinels and enums

Usage:
------
```python
from redis_connector.core.config import get_settings
from redis_connector.core.config.constants import ResponseCode, OperationType

settings = get_settings()
hosts = settings.redis.REDIS_HOSTS
```
"""

from .settings import (
    ApplicationSettings,
    ConnectorSettings,
    LoggingSettings,
    RedisSettings,
    Settings,
    get_settings,
    reload_settings,
)

__all__ = [
    "ApplicationSettings",
    "ConnectorSettings",
    "LoggingSettings",
    "RedisSettings",
    "Settings",
    "get_settings",
    "reload_settings",
]
