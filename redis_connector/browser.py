"""
Browse and Connection Test

Serves the host platform's introspection calls from the metadata registry
and checks store liveness with PING.
"""

from collections.abc import Iterable

from redis_connector.core.config.constants import PING_REPLY, ObjectDefinitionRole, Stage
from redis_connector.core.exceptions import ConfigurationError, StoreConnectionError
from redis_connector.core.logging.logger import clear_execution_id, get_logger, set_execution_id
from redis_connector.infrastructure.cache.connection import RedisConnection
from redis_connector.metadata.object_types import ObjectDefinitions, ObjectType
from redis_connector.metadata.registry import MetadataRegistry
from redis_connector.operations.models import BrowseContext

logger = get_logger(__name__)


class RedisBrowser:
    """
    Introspection for one browse context.

    Args:
        context: Host platform browse context (operation type, custom type, properties)
        registry: The connector's metadata registry
        connection: Per-context connection wrapper, used by test_connection()
    """

    def __init__(self, context: BrowseContext, registry: MetadataRegistry, connection: RedisConnection):
        self.context = context
        self.registry = registry
        self.connection = connection

    def get_object_types(self) -> tuple[ObjectType, ...]:
        """
        All declared object types (id, label, help text).

        STAGE-BROWSE.1: Object type listing
        """
        types = self.registry.list_types()
        logger.debug("Object types listed", stage=Stage.BROWSE.value, count=len(types))
        return types

    def get_object_definitions(
        self, object_type_id: str, roles: Iterable[ObjectDefinitionRole]
    ) -> ObjectDefinitions:
        """
        Definitions of the context's operation for the requested roles.

        Raises:
            ConfigurationError: If the browse context carries no operation type
            DefinitionNotFoundError: If the object type or a role has no definition
        """
        if self.context.operation_type is None:
            raise ConfigurationError(
                "Browse context has no operation type", details={"object_type_id": object_type_id}
            )

        definitions = self.registry.to_object_definitions(
            object_type_id,
            self.context.operation_type,
            self.context.custom_operation_type,
            roles,
        )
        logger.debug(
            "Object definitions resolved",
            stage=Stage.BROWSE.value,
            object_type_id=object_type_id,
            operation_type=self.context.operation_type.value,
            count=len(definitions),
        )
        return definitions

    def test_connection(self) -> None:
        """
        PING the store; anything but PONG fails the test.

        STAGE-BROWSE.2: Connection test

        The connection is closed on every path.

        Raises:
            StoreConnectionError: On a wrong reply or any failure reaching the store
        """
        set_execution_id(self.context.execution_id)
        try:
            with self.connection.session() as connection:
                try:
                    reply = connection.acquire().ping()
                except StoreConnectionError:
                    raise
                except Exception as e:
                    raise StoreConnectionError.from_exception(e)

                if reply != PING_REPLY:
                    raise StoreConnectionError(
                        f"Connection did not respond to PING with '{PING_REPLY}'",
                        details={"reply": reply},
                    )
            logger.info("Connection test passed", stage=Stage.CONNECTION_TEST.value)
        except StoreConnectionError as e:
            logger.error("Connection test failed", stage=Stage.CONNECTION_TEST.value, error=e.message)
            raise
        finally:
            clear_execution_id()
