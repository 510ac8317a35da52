"""
Per-Context Connection Wrapper

One RedisConnection is created for each execution context (one browse call
or one operation batch). It lazily obtains a ReplicatedConnection from the
connector's shared client on first use, reuses it for every command of the
context and closes it exactly once.

Usage:
    connection = RedisConnection(connector.get_shared_client, hosts="cache-1:6379")
    with connection.session() as conn:
        conn.acquire().get("user:1")
"""

import threading
from collections.abc import Callable, Iterator
from contextlib import contextmanager

from redis_connector.core.config.constants import Stage
from redis_connector.core.exceptions import ConnectorBaseError, StoreConnectionError
from redis_connector.core.logging.logger import get_logger
from redis_connector.infrastructure.cache.redis_client import (
    ReplicatedConnection,
    SharedRedisClient,
    parse_hosts,
)

logger = get_logger(__name__)


class RedisConnection:
    """
    Lazily-acquired, idempotently-closed connection handle holder.

    Args:
        client_provider: Returns the connector's SharedRedisClient, creating it on first call
        hosts: Semicolon-delimited node list, primary first
    """

    def __init__(self, client_provider: Callable[[], SharedRedisClient], hosts: str):
        self._client_provider = client_provider
        self._hosts = hosts
        self._handle: ReplicatedConnection | None = None
        self._lock = threading.Lock()
        self._closed = False
        self._failure: Exception | None = None

    def acquire(self) -> ReplicatedConnection:
        """
        Return the context's connection handle, creating it on first use.

        STAGE-CONN.1: Connection acquisition

        Raises:
            ConfigurationError: If the node list is malformed
            StoreConnectionError: If the primary is unreachable or the connection was closed

        A failed creation is not retried: later calls re-raise the same error.
        """
        with self._lock:
            if self._closed:
                raise StoreConnectionError("Connection has already been closed")
            if self._failure is not None:
                raise self._failure
            if self._handle is None:
                try:
                    nodes = parse_hosts(self._hosts)
                    self._handle = self._client_provider().connect(nodes)
                except ConnectorBaseError as e:
                    self._failure = e.with_context(hosts=self._hosts)
                    raise
                except Exception as e:
                    self._failure = e
                    raise
            return self._handle

    def close(self) -> None:
        """
        Close the handle once. Safe to call repeatedly or before acquire().

        STAGE-CONN.3: Connection release
        """
        with self._lock:
            self._closed = True
            handle, self._handle = self._handle, None

        if handle is None:
            return

        handle.close()
        logger.debug("Connection released", stage=Stage.CONNECTION_RELEASE.value)

    @contextmanager
    def session(self) -> Iterator["RedisConnection"]:
        """
        Scope this wrapper to a block and close it on every exit path.

        The handle itself is still created lazily by the first acquire().
        """
        try:
            yield self
        finally:
            self.close()

    @property
    def hosts(self) -> str:
        return self._hosts

    @property
    def closed(self) -> bool:
        return self._closed
