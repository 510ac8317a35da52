"""
Upsert Handlers

UpsertStringOperation:  SET, or SETEX when the item carries a ttl
UpsertHashSetOperation: one HSET with the whole map, then EXPIRE when ttl >= 0

Every item of the batch is processed, in order. Successful items echo their
input document back as the result payload.
"""

from redis_connector.core.config.constants import (
    OBJECT_TYPE_HASHSET,
    OBJECT_TYPE_STRING,
    STORE_OK,
    TTL_NO_EXPIRY,
    OperationStatus,
    ResponseCode,
)
from redis_connector.core.exceptions import BadInputError
from redis_connector.core.logging.logger import get_logger
from redis_connector.infrastructure.cache.connection import RedisConnection
from redis_connector.operations.base import (
    OperationScope,
    execution,
    report_failure,
    report_no_key,
)
from redis_connector.operations.hashset import parse_hash
from redis_connector.operations.keys import resolve_ttl, resolve_upsert_key
from redis_connector.operations.models import ObjectData, OperationResponse, UpdateRequest

logger = get_logger(__name__)


def _report_bad_input(response: OperationResponse, item: ObjectData, message: str) -> None:
    response.add_result(item, OperationStatus.APPLICATION_ERROR, ResponseCode.BAD_INPUT, message, None)


class UpsertStringOperation:
    """Store each input document as a UTF-8 string value."""

    object_type_id = OBJECT_TYPE_STRING

    def __init__(self, scope: OperationScope):
        self.scope = scope

    def execute(self, request: UpdateRequest, response: OperationResponse) -> None:
        with execution(self.scope, type(self).__name__, len(request)) as connection:
            for item in request:
                self._upsert(connection, item, response)

    def _upsert(self, connection: RedisConnection, item: ObjectData, response: OperationResponse) -> None:
        key = resolve_upsert_key(item, self.scope.key_prefix)
        if not key:
            report_no_key(response, item)
            return

        ttl = resolve_ttl(item)
        try:
            data = item.data.decode("utf-8")
        except UnicodeDecodeError as e:
            _report_bad_input(response, item, f"Input is not valid UTF-8: {e}")
            return

        try:
            store = connection.acquire()
            if ttl > TTL_NO_EXPIRY:
                ack = store.setex(key, ttl, data)
            else:
                ack = store.set(key, data)

            if ack != STORE_OK:
                response.add_result(item, OperationStatus.APPLICATION_ERROR, ResponseCode.ERR, ack, item.data)
                return

            response.add_result(item, OperationStatus.SUCCESS, ResponseCode.OK, None, item.data)
        except Exception as e:
            report_failure(response, item, e)


class UpsertHashSetOperation:
    """
    Store each HashSet document as a hash.

    Input shape: <HashSet><Item><ID>f</ID><Value>v</Value></Item>...</HashSet>
    """

    object_type_id = OBJECT_TYPE_HASHSET

    def __init__(self, scope: OperationScope):
        self.scope = scope

    def execute(self, request: UpdateRequest, response: OperationResponse) -> None:
        with execution(self.scope, type(self).__name__, len(request)) as connection:
            for item in request:
                self._upsert(connection, item, response)

    def _upsert(self, connection: RedisConnection, item: ObjectData, response: OperationResponse) -> None:
        key = resolve_upsert_key(item, self.scope.key_prefix)
        if not key:
            report_no_key(response, item)
            return

        ttl = resolve_ttl(item)
        try:
            values = parse_hash(item.data)
        except BadInputError as e:
            logger.warning("Rejected HashSet document", key=key, error=e.message)
            _report_bad_input(response, item, e.message)
            return

        try:
            store = connection.acquire()
            store.hset(key, values)
            if ttl >= 0:
                store.expire(key, ttl)
            response.add_result(item, OperationStatus.SUCCESS, ResponseCode.OK, None, item.data)
        except Exception as e:
            report_failure(response, item, e)
