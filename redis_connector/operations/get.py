"""
Get Handlers

GetStringOperation:  GET, then TTL when the value exists
GetHashSetOperation: HGETALL (or HGET with a `field` property), then TTL

Each requested id is processed independently and in order.
"""

from redis_connector.core.config.constants import (
    MESSAGE_HASH_FIELD_NOT_FOUND,
    MESSAGE_HASH_KEY_NOT_FOUND,
    MESSAGE_KEY_NOT_FOUND,
    OBJECT_TYPE_HASHSET,
    OBJECT_TYPE_STRING,
    ContentType,
    OperationStatus,
    ResponseCode,
)
from redis_connector.infrastructure.cache.connection import RedisConnection
from redis_connector.operations.base import (
    OperationScope,
    execution,
    report_failure,
    report_no_key,
    report_not_found,
    ttl_metadata,
)
from redis_connector.operations.hashset import serialize_hash
from redis_connector.operations.keys import resolve_field, resolve_object_id
from redis_connector.operations.models import GetRequest, ObjectIdData, OperationResponse


class GetStringOperation:
    """Fetch opaque string values."""

    object_type_id = OBJECT_TYPE_STRING

    def __init__(self, scope: OperationScope):
        self.scope = scope

    def execute(self, request: GetRequest, response: OperationResponse) -> None:
        with execution(self.scope, type(self).__name__, len(request)) as connection:
            for item in request:
                self._get(connection, item, response)

    def _get(self, connection: RedisConnection, item: ObjectIdData, response: OperationResponse) -> None:
        key = resolve_object_id(item, self.scope.key_prefix)
        if not key:
            report_no_key(response, item)
            return

        try:
            store = connection.acquire()
            value = store.get(key)
            if value is None:
                report_not_found(response, item, self.scope.throw_on_not_found, MESSAGE_KEY_NOT_FOUND)
                return

            metadata = ttl_metadata(response, store.ttl(key))
            response.add_result(
                item,
                OperationStatus.SUCCESS,
                ResponseCode.OK,
                None,
                value.encode("utf-8"),
                metadata=metadata,
                content_type=ContentType.BINARY,
            )
        except Exception as e:
            report_failure(response, item, e)


class GetHashSetOperation:
    """
    Fetch hash maps, optionally narrowed to one field.

    A found map is returned as a HashSet document with one Item per field.
    With a `field` property the result holds at most one Item.
    """

    object_type_id = OBJECT_TYPE_HASHSET

    def __init__(self, scope: OperationScope):
        self.scope = scope

    def execute(self, request: GetRequest, response: OperationResponse) -> None:
        with execution(self.scope, type(self).__name__, len(request)) as connection:
            for item in request:
                self._get(connection, item, response)

    def _get(self, connection: RedisConnection, item: ObjectIdData, response: OperationResponse) -> None:
        key = resolve_object_id(item, self.scope.key_prefix)
        if not key:
            report_no_key(response, item)
            return

        field = resolve_field(item)
        try:
            store = connection.acquire()
            if field is None:
                values = store.hgetall(key)
            else:
                value = store.hget(key, field)
                values = {} if value is None else {field: value}

            if not values:
                if field is None:
                    message = MESSAGE_HASH_KEY_NOT_FOUND.format(key=key)
                else:
                    message = MESSAGE_HASH_FIELD_NOT_FOUND.format(key=key, field=field)
                report_not_found(response, item, self.scope.throw_on_not_found, message)
                return

            metadata = ttl_metadata(response, store.ttl(key))
            response.add_result(
                item,
                OperationStatus.SUCCESS,
                ResponseCode.OK,
                None,
                serialize_hash(values),
                metadata=metadata,
                content_type=ContentType.XML,
            )
        except Exception as e:
            report_failure(response, item, e)
