"""
Operation Router

Maps (object type id, verb) to a handler through a closed table and binds
the handler to a freshly created per-context RedisConnection.

    (String,  GET)    -> GetStringOperation
    (HashSet, GET)    -> GetHashSetOperation
    (String,  UPSERT) -> UpsertStringOperation
    (HashSet, UPSERT) -> UpsertHashSetOperation
    (String,  DELETE) -> DeleteOperation
    (HashSet, DELETE) -> DeleteHashSetOperation

Unsupported combinations fail at construction, before any store command.
"""

from collections.abc import Callable

from redis_connector.core.config.constants import (
    OBJECT_TYPE_HASHSET,
    OBJECT_TYPE_STRING,
    PROPERTY_HOSTS,
    OperationType,
    Stage,
)
from redis_connector.core.config.settings import Settings, get_settings
from redis_connector.core.exceptions import ConfigurationError, UnsupportedObjectTypeError
from redis_connector.core.logging.logger import get_logger
from redis_connector.infrastructure.cache.connection import RedisConnection
from redis_connector.infrastructure.cache.redis_client import SharedRedisClient
from redis_connector.operations.base import OperationScope
from redis_connector.operations.delete import DeleteHashSetOperation, DeleteOperation
from redis_connector.operations.get import GetHashSetOperation, GetStringOperation
from redis_connector.operations.models import ConnectorContext
from redis_connector.operations.upsert import UpsertHashSetOperation, UpsertStringOperation

logger = get_logger(__name__)

Handler = (
    GetStringOperation
    | GetHashSetOperation
    | UpsertStringOperation
    | UpsertHashSetOperation
    | DeleteOperation
    | DeleteHashSetOperation
)

HANDLERS: dict[tuple[str, OperationType], type] = {
    (OBJECT_TYPE_STRING, OperationType.GET): GetStringOperation,
    (OBJECT_TYPE_HASHSET, OperationType.GET): GetHashSetOperation,
    (OBJECT_TYPE_STRING, OperationType.UPSERT): UpsertStringOperation,
    (OBJECT_TYPE_HASHSET, OperationType.UPSERT): UpsertHashSetOperation,
    (OBJECT_TYPE_STRING, OperationType.DELETE): DeleteOperation,
    (OBJECT_TYPE_HASHSET, OperationType.DELETE): DeleteHashSetOperation,
}

ROUTED_VERBS = (OperationType.GET, OperationType.UPSERT, OperationType.DELETE)


def create_connection(
    client_provider: Callable[[], SharedRedisClient],
    context: ConnectorContext,
    settings: Settings | None = None,
) -> RedisConnection:
    """Per-context connection wrapper; the `hosts` connection property wins over settings."""
    hosts = context.get_connection_properties().get_property(
        PROPERTY_HOSTS, (settings or get_settings()).redis.REDIS_HOSTS
    )
    return RedisConnection(client_provider, hosts)


class OperationRouter:
    """
    Handler selection for one connector instance.

    Args:
        client_provider: Returns the connector's shared client (created lazily)
        settings: Process-level defaults for hosts, key prefix and throwOnNotFound
    """

    def __init__(self, client_provider: Callable[[], SharedRedisClient], settings: Settings | None = None):
        self._client_provider = client_provider
        self._settings = settings or get_settings()

    def create(self, operation_type: OperationType | str, context: ConnectorContext) -> Handler:
        """
        Build the handler for the context's object type and the given verb.

        STAGE-ROUTE.1: Operation routing

        Raises:
            ConfigurationError: If the verb is not GET, UPSERT or DELETE
            UnsupportedObjectTypeError: If no handler exists for the object type
        """
        try:
            verb = OperationType(operation_type)
        except ValueError:
            verb = None
        if verb not in ROUTED_VERBS:
            raise ConfigurationError(
                f"Operation type {operation_type} is not supported",
                details={"operation_type": str(operation_type)},
            )

        handler_class = HANDLERS.get((context.object_type_id, verb))
        if handler_class is None:
            raise UnsupportedObjectTypeError(str(context.object_type_id), verb.value)

        connection = create_connection(self._client_provider, context, self._settings)
        handler = handler_class(OperationScope.from_context(connection, context, self._settings))

        logger.info(
            "Operation routed",
            stage=Stage.OPERATION_ROUTE.value,
            object_type_id=context.object_type_id,
            operation_type=verb.value,
            handler=handler_class.__name__,
        )
        return handler
