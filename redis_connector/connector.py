"""
Redis Connector

Service context of one connector instance. Owns the shared store client and
the metadata registry, and hands out browsers and operations bound to a
fresh per-context connection.

Architectural Decision: explicit ownership instead of process-wide singletons
- One SharedRedisClient per connector, created lazily under a single lock
- One MetadataRegistry per connector, loaded on first browse
- close() tears the shared client down exactly once

Usage:
    with RedisConnector() as connector:
        operation = connector.create_get_operation(context)
        operation.execute(GetRequest([ObjectIdData(object_id="user:1")]), response)

Author: System Architect
Date: 2025-12-11
"""

import threading
from collections.abc import Callable

from redis_connector.browser import RedisBrowser
from redis_connector.core.config.constants import OperationType, Stage
from redis_connector.core.config.settings import Settings, get_settings
from redis_connector.core.exceptions import ConfigurationError
from redis_connector.core.logging.logger import get_logger, log_stage
from redis_connector.infrastructure.cache.redis_client import SharedRedisClient
from redis_connector.metadata.registry import MetadataRegistry
from redis_connector.operations.models import BrowseContext, OperationContext
from redis_connector.operations.router import Handler, OperationRouter, create_connection

logger = get_logger(__name__)


class RedisConnector:
    """
    Entry point used by the host platform.

    Args:
        settings: Process-level defaults (hosts, pool sizing, key prefix)
        registry: Metadata registry, built from settings when omitted
        client_factory: Builds the shared client on first use
    """

    def __init__(
        self,
        settings: Settings | None = None,
        registry: MetadataRegistry | None = None,
        client_factory: Callable[[Settings], SharedRedisClient] = SharedRedisClient,
    ):
        self.settings = settings or get_settings()
        self.registry = registry or MetadataRegistry(self.settings.connector.METADATA_RESOURCE_PACKAGE)
        self._client_factory = client_factory
        self._client: SharedRedisClient | None = None
        self._lock = threading.Lock()
        self._closed = False
        self.router = OperationRouter(self.get_shared_client, self.settings)

        app = self.settings.app
        log_stage(
            logger,
            Stage.SHARED_CLIENT_INIT.value,
            "Connector created",
            app_name=app.APP_NAME,
            app_version=app.APP_VERSION,
            environment=app.ENVIRONMENT,
        )

    def get_shared_client(self) -> SharedRedisClient:
        """
        Return the shared client, creating it on first call.

        STAGE-CONN.0: Shared client initialization

        Raises:
            ConfigurationError: If the connector has been closed
        """
        with self._lock:
            if self._closed:
                raise ConfigurationError("Connector has been closed")
            if self._client is None:
                logger.info("Creating shared store client", stage=Stage.SHARED_CLIENT_INIT.value)
                self._client = self._client_factory(self.settings)
            return self._client

    def create_browser(self, context: BrowseContext) -> RedisBrowser:
        return RedisBrowser(
            context,
            self.registry,
            create_connection(self.get_shared_client, context, self.settings),
        )

    def create_get_operation(self, context: OperationContext) -> Handler:
        return self.router.create(OperationType.GET, context)

    def create_upsert_operation(self, context: OperationContext) -> Handler:
        return self.router.create(OperationType.UPSERT, context)

    def create_delete_operation(self, context: OperationContext) -> Handler:
        return self.router.create(OperationType.DELETE, context)

    def close(self) -> None:
        """
        Shut the shared client down exactly once.

        STAGE-CONN.4: Connector disposal
        """
        with self._lock:
            if self._closed:
                return
            self._closed = True
            client, self._client = self._client, None

        if client is not None:
            client.shutdown()
        logger.info("Connector closed", stage=Stage.SHARED_CLIENT_SHUTDOWN.value)

    @property
    def closed(self) -> bool:
        return self._closed

    def __enter__(self) -> "RedisConnector":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()
