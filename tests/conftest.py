"""
Pytest Configuration and Shared Test Fixtures

This module provides pytest configuration and reusable fixtures for all tests.
All fixtures defined here are automatically available to all test files.
"""

import os
import sys
from unittest.mock import MagicMock

import pytest

# Add project root to sys.path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))


# ============================================================================
# In-Memory Store
# ============================================================================


class InMemoryStore:
    """
    In-memory stand-in for a ReplicatedConnection.

    Implements the eleven store commands with Redis reply semantics and
    records every issued command in `commands` as (NAME, *args) tuples.

    Attributes:
        set_reply: Acknowledgement returned by SET/SETEX
        failures: Command name -> exception raised when that command is issued
    """

    def __init__(self):
        self.strings: dict[str, str] = {}
        self.hashes: dict[str, dict[str, str]] = {}
        self.expiry: dict[str, int] = {}
        self.commands: list[tuple] = []
        self.set_reply = "OK"
        self.failures: dict[str, Exception] = {}
        self.close_count = 0

    def _issue(self, *command):
        self.commands.append(command)
        error = self.failures.get(command[0])
        if error is not None:
            raise error

    def _exists(self, key):
        return key in self.strings or key in self.hashes

    def names(self) -> list[str]:
        """Issued command names, in order."""
        return [command[0] for command in self.commands]

    def get(self, key):
        self._issue("GET", key)
        return self.strings.get(key)

    def set(self, key, value):
        self._issue("SET", key, value)
        self.strings[key] = value
        self.expiry.pop(key, None)
        return self.set_reply

    def setex(self, key, ttl, value):
        self._issue("SETEX", key, ttl, value)
        self.strings[key] = value
        self.expiry[key] = ttl
        return self.set_reply

    def delete(self, *keys):
        self._issue("DEL", *keys)
        removed = 0
        for key in keys:
            if self.strings.pop(key, None) is not None or self.hashes.pop(key, None) is not None:
                removed += 1
            self.expiry.pop(key, None)
        return removed

    def hgetall(self, key):
        self._issue("HGETALL", key)
        return dict(self.hashes.get(key, {}))

    def hget(self, key, field):
        self._issue("HGET", key, field)
        return self.hashes.get(key, {}).get(field)

    def hset(self, key, mapping):
        self._issue("HSET", key, dict(mapping))
        current = self.hashes.setdefault(key, {})
        added = len([field for field in mapping if field not in current])
        current.update(mapping)
        return added

    def hdel(self, key, *fields):
        self._issue("HDEL", key, *fields)
        current = self.hashes.get(key, {})
        removed = len([field for field in fields if current.pop(field, None) is not None])
        if key in self.hashes and not current:
            del self.hashes[key]
        return removed

    def expire(self, key, ttl):
        self._issue("EXPIRE", key, ttl)
        if not self._exists(key):
            return False
        self.expiry[key] = ttl
        return True

    def ttl(self, key):
        self._issue("TTL", key)
        if not self._exists(key):
            return -2
        return self.expiry.get(key, -1)

    def ping(self):
        self._issue("PING")
        return "PONG"

    def close(self):
        self.close_count += 1


@pytest.fixture
def store():
    """Fresh in-memory store."""
    return InMemoryStore()


@pytest.fixture
def shared_client(store):
    """
    Mock SharedRedisClient whose connect() hands out the in-memory store.
    """
    from redis_connector.infrastructure.cache.redis_client import SharedRedisClient

    client = MagicMock(spec=SharedRedisClient)
    client.connect.return_value = store
    return client


# ============================================================================
# Configuration Fixtures
# ============================================================================


@pytest.fixture
def test_settings():
    """Settings with deterministic values, independent of the environment."""
    from redis_connector.core.config.settings import Settings

    return Settings(
        REDIS_HOSTS="localhost:6379",
        KEY_PREFIX="",
        THROW_ON_NOT_FOUND=False,
        LOG_LEVEL="DEBUG",
        LOG_FORMAT="console",
    )


# ============================================================================
# Operation Fixtures
# ============================================================================


@pytest.fixture
def make_scope(shared_client, test_settings):
    """
    Factory for OperationScope bound to the in-memory store.

    Usage:
        scope = make_scope("HashSet", keyPrefix="app:", throwOnNotFound="true")
    """
    from redis_connector.infrastructure.cache.connection import RedisConnection
    from redis_connector.operations.base import OperationScope
    from redis_connector.operations.models import OperationContext

    def _make(object_type_id="String", **operation_properties):
        context = OperationContext(object_type_id=object_type_id, operation_properties=operation_properties)
        connection = RedisConnection(lambda: shared_client, test_settings.REDIS_HOSTS)
        return OperationScope.from_context(connection, context, test_settings)

    return _make


@pytest.fixture
def response():
    """Empty per-item result collector."""
    from redis_connector.operations.models import OperationResponse

    return OperationResponse()


@pytest.fixture
def registry():
    """Metadata registry over the packaged resources."""
    from redis_connector.metadata.registry import MetadataRegistry

    return MetadataRegistry()
