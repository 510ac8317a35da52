"""
Cache Module

Provides the shared Redis client and the per-context connection wrapper.
"""

from .connection import RedisConnection
from .redis_client import ReplicatedConnection, SharedRedisClient, parse_hosts

__all__ = [
    "RedisConnection",
    "ReplicatedConnection",
    "SharedRedisClient",
    "parse_hosts",
]
