"""
Delete Handlers

DeleteOperation:        one DEL over the deduplicated keys of the batch
DeleteHashSetOperation: one DEL for whole-key deletions plus one HDEL per key
                        for items carrying a `field` property

Keys are deduplicated in first-seen order. Every contributing item of a
command is reported with that command's outcome.
"""

from redis_connector.core.config.constants import OperationStatus, ResponseCode
from redis_connector.operations.base import (
    OperationScope,
    add_results,
    execution,
    report_no_key,
)
from redis_connector.operations.keys import resolve_field, resolve_object_id
from redis_connector.operations.models import DeleteRequest, ObjectIdData, OperationResponse


class DeleteOperation:
    """Delete whole keys (String, or HashSet without fields)."""

    def __init__(self, scope: OperationScope):
        self.scope = scope

    def execute(self, request: DeleteRequest, response: OperationResponse) -> None:
        with execution(self.scope, type(self).__name__, len(request)) as connection:
            keys: dict[str, None] = {}
            items: list[ObjectIdData] = []
            for item in request:
                key = resolve_object_id(item, self.scope.key_prefix)
                if not key:
                    report_no_key(response, item)
                    continue
                keys[key] = None
                items.append(item)

            if not items:
                return

            try:
                connection.acquire().delete(*keys)
                add_results(items, response, OperationStatus.SUCCESS, ResponseCode.OK)
            except Exception as e:
                add_results(items, response, OperationStatus.FAILURE, ResponseCode.ERR, str(e), e)


class DeleteHashSetOperation:
    """
    Delete whole hashes or individual hash fields.

    Field deletions are grouped per key and reported per group, so their
    results follow key order rather than input order.
    """

    def __init__(self, scope: OperationScope):
        self.scope = scope

    def execute(self, request: DeleteRequest, response: OperationResponse) -> None:
        with execution(self.scope, type(self).__name__, len(request)) as connection:
            whole_keys: dict[str, None] = {}
            whole_items: list[ObjectIdData] = []
            field_keys: dict[str, dict[str, None]] = {}
            field_items: dict[str, list[ObjectIdData]] = {}

            for item in request:
                key = resolve_object_id(item, self.scope.key_prefix)
                if not key:
                    report_no_key(response, item)
                    continue

                field = resolve_field(item)
                if field is None:
                    whole_keys[key] = None
                    whole_items.append(item)
                else:
                    field_keys.setdefault(key, {})[field] = None
                    field_items.setdefault(key, []).append(item)

            if not whole_items and not field_items:
                return

            pending = [whole_items, *field_items.values()] if whole_items else list(field_items.values())
            try:
                store = connection.acquire()
                if whole_items:
                    store.delete(*whole_keys)
                    add_results(pending.pop(0), response, OperationStatus.SUCCESS, ResponseCode.OK)

                for key, fields in field_keys.items():
                    store.hdel(key, *fields)
                    add_results(pending.pop(0), response, OperationStatus.SUCCESS, ResponseCode.OK)
            except Exception as e:
                for group in pending:
                    add_results(group, response, OperationStatus.FAILURE, ResponseCode.ERR, str(e), e)
