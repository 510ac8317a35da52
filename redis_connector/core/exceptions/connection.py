"""
Store Connection Exceptions

All exceptions related to reaching and talking to the Redis store.

Author: System Architect
Date: 2025-12-08
"""

from redis_connector.core.exceptions.base import ConnectorBaseError


class StoreError(ConnectorBaseError):
    """Base exception for store-related errors."""
    pass


class StoreConnectionError(StoreError):
    """
    Raised when the store cannot be reached or fails the liveness check.

    Common causes:
    - A node in the hosts list is down
    - Network connectivity issues
    - PING answered with something other than PONG
    """
    pass


class StoreCommandError(StoreError):
    """Raised when a store command fails after the connection was established."""
    pass
