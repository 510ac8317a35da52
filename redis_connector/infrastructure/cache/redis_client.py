"""
Shared Redis Client and Replicated Connection Handles

Architecture:
    SharedRedisClient (one per connector instance)
        ├── per-node ConnectionPool (created lazily, shared by every context)
        └── connect(nodes) -> ReplicatedConnection

    ReplicatedConnection (one per execution context)
        ├── primary: first listed node, receives every write
        └── replicas: remaining nodes, used for reads when the primary fails

Topology follows the static multi-server convention of Django-style Redis
cache clients: the first node of the `hosts` list is the primary and the
rest are read replicas. Reads prefer the primary and fall back to a replica
on connection failure. No command is retried on the same node.

Author: System Architect
Date: 2025-12-09
"""

import threading
from collections.abc import Callable, Sequence

import redis
from redis.connection import ConnectionPool, parse_url
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from redis_connector.core.config.constants import (
    DEFAULT_REDIS_SCHEME,
    HOSTS_DELIMITER,
    PING_REPLY,
    STORE_OK,
    SUPPORTED_REDIS_SCHEMES,
    Stage,
)
from redis_connector.core.config.settings import Settings, get_settings
from redis_connector.core.exceptions import (
    ConfigurationError,
    StoreCommandError,
    StoreConnectionError,
)
from redis_connector.core.logging.logger import get_logger, log_command

logger = get_logger(__name__)

_UNREACHABLE = (RedisConnectionError, RedisTimeoutError, OSError)

# redis-py method names that differ from the wire command
_METHODS = {"DEL": "delete"}


def parse_hosts(hosts: str | None) -> list[str]:
    """
    Split a semicolon-delimited node list into normalized node URLs.

    Entries without a scheme are treated as `redis://host:port`. Blank
    entries are ignored.

    Raises:
        ConfigurationError: If the list is empty or an entry is not a valid URL

    >>> parse_hosts("cache-1:6379; cache-2:6380")
    ['redis://cache-1:6379', 'redis://cache-2:6380']
    """
    nodes = []
    for entry in (hosts or "").split(HOSTS_DELIMITER):
        entry = entry.strip()
        if not entry:
            continue
        url = entry if "://" in entry else f"{DEFAULT_REDIS_SCHEME}{entry}"
        scheme = url.split("://", 1)[0].lower()
        if scheme not in SUPPORTED_REDIS_SCHEMES:
            raise ConfigurationError(
                f"Invalid node address '{entry}': unsupported scheme '{scheme}'",
                details={"node": entry, "supported_schemes": list(SUPPORTED_REDIS_SCHEMES)},
            )
        try:
            parsed = parse_url(url)
        except ValueError as e:
            raise ConfigurationError.from_exception(
                e, message=f"Invalid node address '{entry}': {e}", node=entry
            )
        if not (parsed.get("host") or parsed.get("path")):
            raise ConfigurationError(
                f"Invalid node address '{entry}': missing host", details={"node": entry}
            )
        nodes.append(url)

    if not nodes:
        raise ConfigurationError("No store nodes configured", details={"hosts": hosts})
    return nodes


def _ack(reply) -> str:
    """Literal acknowledgement of SET/SETEX (redis-py maps OK to True)."""
    if reply is True:
        return STORE_OK
    return str(reply)


class ReplicatedConnection:
    """
    Connection handle addressing one primary and zero or more read replicas.

    Every node is checked for reachability on construction by checking a
    socket out of its pool; no command is sent for the check. An unreachable
    primary fails construction. Unreachable replicas are dropped with a
    warning and the connection proceeds with the nodes that answered.
    """

    def __init__(
        self,
        nodes: Sequence[str],
        pools: Sequence[ConnectionPool],
        client_factory: Callable[..., redis.Redis] = redis.Redis,
    ):
        if not nodes or len(nodes) != len(pools):
            raise ConfigurationError("A connection needs one pool per node", details={"nodes": list(nodes)})

        self._lock = threading.Lock()
        self._closed = False

        reachable = []
        for index, (node, pool) in enumerate(zip(nodes, pools)):
            try:
                self._verify_reachable(node, pool)
            except StoreConnectionError as e:
                if index == 0:
                    logger.error(
                        "Primary node unreachable", stage=Stage.CONNECTION_VERIFY.value, node=node, error=e.message
                    )
                    raise
                logger.warning(
                    "Read replica unreachable, skipped", stage=Stage.CONNECTION_VERIFY.value, node=node, error=e.message
                )
                continue
            reachable.append((node, pool))

        self._nodes = [node for node, _ in reachable]
        self._clients = [client_factory(connection_pool=pool) for _, pool in reachable]

    @property
    def nodes(self) -> list[str]:
        return list(self._nodes)

    @property
    def primary(self) -> redis.Redis:
        return self._clients[0]

    @property
    def replicas(self) -> list[redis.Redis]:
        return self._clients[1:]

    @staticmethod
    def _verify_reachable(node: str, pool: ConnectionPool) -> None:
        """
        Check one socket out of the node's pool and hand it back.

        STAGE-CONN.2: Reachability check
        """
        try:
            connection = pool.get_connection()
        except _UNREACHABLE as e:
            raise StoreConnectionError.from_exception(
                e, message=f"Store node {node} is unreachable: {e}", node=node
            )
        pool.release(connection)

    # -------------------------------------------------------------------------
    # Dispatch
    # -------------------------------------------------------------------------

    def _write(self, command: str, *args, **kwargs):
        method = getattr(self.primary, _METHODS.get(command, command.lower()))
        try:
            return method(*args, **kwargs)
        except _UNREACHABLE as e:
            raise StoreConnectionError.from_exception(e, command=command, node=self._nodes[0])
        except RedisError as e:
            raise StoreCommandError.from_exception(e, command=command, node=self._nodes[0])

    def _read(self, command: str, *args):
        """Primary first, then each replica in listed order on connection failure."""
        last_error: Exception | None = None
        for node, client in zip(self._nodes, self._clients):
            try:
                return getattr(client, _METHODS.get(command, command.lower()))(*args)
            except _UNREACHABLE as e:
                logger.warning(
                    "Read failed on node, trying next",
                    stage=Stage.STORE_COMMAND.value,
                    command=command,
                    node=node,
                    error=str(e),
                )
                last_error = e
            except RedisError as e:
                raise StoreCommandError.from_exception(e, command=command, node=node)
        raise StoreConnectionError.from_exception(
            last_error, message=f"No store node answered {command}: {last_error}", command=command
        )

    # -------------------------------------------------------------------------
    # String commands
    # -------------------------------------------------------------------------

    def get(self, key: str) -> str | None:
        result = self._read("GET", key)
        log_command(logger, "GET", (key,), result)
        return result

    def set(self, key: str, value: str) -> str:
        result = _ack(self._write("SET", key, value))
        log_command(logger, "SET", (key,), result)
        return result

    def setex(self, key: str, ttl: int, value: str) -> str:
        result = _ack(self._write("SETEX", key, ttl, value))
        log_command(logger, "SETEX", (key, ttl), result)
        return result

    def delete(self, *keys: str) -> int:
        result = self._write("DEL", *keys)
        log_command(logger, "DEL", keys, result)
        return result

    # -------------------------------------------------------------------------
    # Hash commands
    # -------------------------------------------------------------------------

    def hgetall(self, key: str) -> dict[str, str]:
        result = self._read("HGETALL", key)
        log_command(logger, "HGETALL", (key,), len(result))
        return result

    def hget(self, key: str, field: str) -> str | None:
        result = self._read("HGET", key, field)
        log_command(logger, "HGET", (key, field), result)
        return result

    def hset(self, key: str, mapping: dict[str, str]) -> int:
        result = self._write("HSET", key, mapping=mapping)
        log_command(logger, "HSET", (key,), result)
        return result

    def hdel(self, key: str, *fields: str) -> int:
        result = self._write("HDEL", key, *fields)
        log_command(logger, "HDEL", (key, *fields), result)
        return result

    # -------------------------------------------------------------------------
    # Key commands
    # -------------------------------------------------------------------------

    def expire(self, key: str, ttl: int) -> bool:
        result = self._write("EXPIRE", key, ttl)
        log_command(logger, "EXPIRE", (key, ttl), result)
        return result

    def ttl(self, key: str) -> int:
        result = self._read("TTL", key)
        log_command(logger, "TTL", (key,), result)
        return result

    def ping(self) -> str:
        """PING the primary and return the literal reply (redis-py maps PONG to True)."""
        reply = self._write("PING")
        result = PING_REPLY if reply is True else str(reply)
        log_command(logger, "PING", (), result)
        return result

    def close(self) -> None:
        """Release every node client once; the shared pools stay open."""
        with self._lock:
            if self._closed:
                return
            self._closed = True

        for client in self._clients:
            client.close()

    @property
    def closed(self) -> bool:
        return self._closed


class SharedRedisClient:
    """
    Process-wide producer of replicated connections.

    One instance per connector. Node pools are created lazily on first use
    and shared by every execution context until shutdown().

    Thread Safety:
    - Pool lookup and creation are guarded by a single lock
    - shutdown() is idempotent and takes the same lock
    """

    def __init__(
        self,
        settings: Settings | None = None,
        pool_factory: Callable[[str], ConnectionPool] | None = None,
        client_factory: Callable[..., redis.Redis] = redis.Redis,
    ):
        self._settings = settings or get_settings()
        self._pool_factory = pool_factory or self._create_pool
        self._client_factory = client_factory
        self._pools: dict[str, ConnectionPool] = {}
        self._lock = threading.Lock()
        self._closed = False
        self._creation_count = 0

        logger.info("Shared store client created", stage=Stage.SHARED_CLIENT_INIT.value)

    def _create_pool(self, url: str) -> ConnectionPool:
        """
        Build the connection pool for one node.

        STAGE-CONN.0: Pool creation

        lib_name/lib_version are disabled so that no CLIENT SETINFO is sent
        on connect.
        """
        redis_settings = self._settings.redis
        return ConnectionPool.from_url(
            url,
            max_connections=redis_settings.REDIS_MAX_CONNECTIONS,
            socket_timeout=redis_settings.REDIS_SOCKET_TIMEOUT,
            socket_connect_timeout=redis_settings.REDIS_SOCKET_CONNECT_TIMEOUT,
            health_check_interval=redis_settings.REDIS_HEALTH_CHECK_INTERVAL,
            decode_responses=True,
            encoding="utf-8",
            lib_name=None,
            lib_version=None,
        )

    def _pool_for(self, url: str) -> ConnectionPool:
        with self._lock:
            if self._closed:
                raise StoreConnectionError("Shared store client has been shut down")
            pool = self._pools.get(url)
            if pool is None:
                pool = self._pool_factory(url)
                self._pools[url] = pool
                logger.info("Node pool created", stage=Stage.SHARED_CLIENT_INIT.value, node=url)
        return pool

    def connect(self, nodes: Sequence[str]) -> ReplicatedConnection:
        """
        Create a replicated connection over the given nodes (primary first).

        STAGE-CONN.1: Connection handle creation

        Raises:
            StoreConnectionError: If the primary is unreachable or the client is shut down
        """
        if self._closed:
            raise StoreConnectionError("Shared store client has been shut down")

        pools = [self._pool_for(node) for node in nodes]
        connection = ReplicatedConnection(nodes, pools, client_factory=self._client_factory)

        with self._lock:
            self._creation_count += 1

        logger.info(
            "Replicated connection created",
            stage=Stage.CONNECTION_ACQUIRE.value,
            primary=nodes[0],
            replicas=len(nodes) - 1,
        )
        return connection

    def shutdown(self) -> None:
        """
        Disconnect every node pool exactly once.

        STAGE-CONN.4: Shared client teardown
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            pools = list(self._pools.values())
            self._pools.clear()

        for pool in pools:
            pool.disconnect()

        logger.info("Shared store client shut down", stage=Stage.SHARED_CLIENT_SHUTDOWN.value, pools=len(pools))

    @property
    def creation_count(self) -> int:
        """Number of replicated connections created so far."""
        return self._creation_count

    @property
    def closed(self) -> bool:
        return self._closed
