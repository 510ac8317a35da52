"""
Redis Connector

Exposes a Redis-compatible key-value store to a host orchestration platform
as String and HashSet object types with browse, get, upsert and delete.

Modules:
--------
- **connector.py**: RedisConnector service context (entry point)
- **browser.py**: Object type introspection and connection test
- **operations/**: CRUD handlers, router and host envelope models
- **metadata/**: Object type descriptor and schema resolution
- **infrastructure/cache/**: Shared client and per-context connections
- **core/**: Configuration, logging and exceptions
"""

from redis_connector.browser import RedisBrowser
from redis_connector.connector import RedisConnector

__all__ = ["RedisBrowser", "RedisConnector"]
__version__ = "1.0.0"
