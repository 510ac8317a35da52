"""
Shared Operation Helpers

Building blocks composed by every CRUD handler:

- OperationScope: the per-context connection plus resolved operation properties
- execution(): batch boundary (execution id, logging, guaranteed connection close)
- report_* / add_results: per-item result reporting
- ttl_metadata(): TTL reply to tracked payload metadata

Every handler reports exactly one result per input item. Per-item failures
are reported through the response and never abort sibling items.
"""

from collections.abc import Iterable, Iterator
from contextlib import contextmanager
from dataclasses import dataclass

from redis_connector.core.config.constants import (
    MESSAGE_KEY_REQUIRED,
    PROPERTY_KEY_PREFIX,
    PROPERTY_THROW_ON_NOT_FOUND,
    TRACKED_PROPERTY_TTL,
    TTL_KEY_MISSING,
    TTL_NO_EXPIRY,
    OperationStatus,
    ResponseCode,
    Stage,
)
from redis_connector.core.config.settings import Settings, get_settings
from redis_connector.core.logging.logger import (
    clear_execution_id,
    get_logger,
    set_execution_id,
)
from redis_connector.infrastructure.cache.connection import RedisConnection
from redis_connector.operations.models import (
    ObjectData,
    ObjectIdData,
    OperationContext,
    OperationResponse,
    PayloadMetadata,
)

logger = get_logger(__name__)


@dataclass(frozen=True)
class OperationScope:
    """
    Everything a handler needs for one execution context.

    Attributes:
        connection: Per-context connection wrapper (closed by execution())
        context: Host platform operation context
        key_prefix: Prefix applied to every key of the batch
        throw_on_not_found: Report missing GET keys as application errors
    """

    connection: RedisConnection
    context: OperationContext
    key_prefix: str = ""
    throw_on_not_found: bool = False

    @classmethod
    def from_context(
        cls,
        connection: RedisConnection,
        context: OperationContext,
        settings: Settings | None = None,
    ) -> "OperationScope":
        """Operation properties win over the process-level defaults."""
        defaults = (settings or get_settings()).connector
        properties = context.get_operation_properties()
        return cls(
            connection=connection,
            context=context,
            key_prefix=properties.get_property(PROPERTY_KEY_PREFIX, defaults.KEY_PREFIX) or "",
            throw_on_not_found=properties.get_boolean_property(
                PROPERTY_THROW_ON_NOT_FOUND, defaults.THROW_ON_NOT_FOUND
            ),
        )


@contextmanager
def execution(scope: OperationScope, handler: str, batch_size: int) -> Iterator[RedisConnection]:
    """
    Batch boundary of one handler run.

    STAGE-OP.1: Operation execution

    Binds the execution id to the log context and closes the connection on
    every exit path.
    """
    set_execution_id(scope.context.execution_id)
    logger.info(
        "Operation started",
        stage=Stage.OPERATION_EXECUTE.value,
        handler=handler,
        object_type_id=scope.context.object_type_id,
        items=batch_size,
    )
    try:
        with scope.connection.session() as connection:
            yield connection
    finally:
        logger.info("Operation finished", stage=Stage.OPERATION_RESULT.value, handler=handler)
        clear_execution_id()


# =============================================================================
# Result reporting
# =============================================================================


def add_results(
    items: Iterable[ObjectIdData | ObjectData],
    response: OperationResponse,
    status: OperationStatus,
    status_code: ResponseCode,
    status_message: str | None = None,
    error: BaseException | None = None,
) -> None:
    """Report the same outcome for every item of a group."""
    for item in items:
        if status == OperationStatus.FAILURE:
            response.add_error_result(item, status, status_code, status_message, error)
        else:
            response.add_empty_result(item, status, status_code, status_message)


def report_no_key(response: OperationResponse, item: ObjectIdData | ObjectData) -> None:
    response.add_result(
        item, OperationStatus.APPLICATION_ERROR, ResponseCode.NO_KEY, MESSAGE_KEY_REQUIRED, None
    )


def report_not_found(
    response: OperationResponse,
    item: ObjectIdData,
    throw_on_not_found: bool,
    message: str,
) -> None:
    """
    A missing key on GET is an empty success unless throwOnNotFound is set.

    Get requests are commonly used as existence tests, so "not found" is a
    valid negative answer rather than a failure.
    """
    if throw_on_not_found:
        response.add_result(item, OperationStatus.APPLICATION_ERROR, ResponseCode.NOT_FOUND, message, None)
    else:
        response.add_empty_result(item, OperationStatus.SUCCESS, ResponseCode.OK, None)


def report_failure(
    response: OperationResponse, item: ObjectIdData | ObjectData, error: Exception
) -> None:
    logger.error(
        "Item failed",
        stage=Stage.OPERATION_RESULT.value,
        error=str(error),
        error_type=type(error).__name__,
    )
    response.add_error_result(item, OperationStatus.FAILURE, ResponseCode.ERR, str(error), error)


def ttl_metadata(response: OperationResponse, ttl: int) -> PayloadMetadata | None:
    """
    Tracked `ttl` metadata for a TTL reply.

    -1 (no expiry) yields no metadata; -2 (expired in between) is reported as 0.
    """
    if ttl == TTL_NO_EXPIRY:
        return None
    metadata = response.create_metadata()
    metadata.set_tracked_property(TRACKED_PROPERTY_TTL, str(0 if ttl == TTL_KEY_MISSING else ttl))
    return metadata
