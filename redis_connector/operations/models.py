"""
Host Platform Envelope Models

Narrow stand-ins for the envelope types the host platform hands to the
connector: execution contexts, property lookups, batch requests and the
per-item response collector.

Only the surface the connector consumes is modelled here.
"""

import uuid
from collections.abc import Iterable, Iterator
from typing import Any

from pydantic import BaseModel, Field

from redis_connector.core.config.constants import (
    ContentType,
    OperationStatus,
    OperationType,
)


class PropertyMap:
    """
    Flat string-keyed property lookup.

    Mirrors the host platform's connection/operation property accessors.
    """

    def __init__(self, values: dict[str, Any] | None = None):
        self._values = dict(values or {})

    def get_property(self, name: str, default: str | None = None) -> str | None:
        value = self._values.get(name)
        if value is None:
            return default
        return str(value)

    def get_boolean_property(self, name: str, default: bool = False) -> bool:
        value = self._values.get(name)
        if value is None:
            return default
        if isinstance(value, bool):
            return value
        return str(value).strip().lower() == "true"

    def __contains__(self, name: str) -> bool:
        return self._values.get(name) is not None

    def as_dict(self) -> dict[str, Any]:
        return dict(self._values)


class ConnectorContext(BaseModel):
    """
    Execution context handed to the connector for one browse call or batch.

    Attributes:
        object_type_id: Logical object type (String, HashSet)
        operation_type: Verb of the operation being browsed or executed
        custom_operation_type: Custom subtype (EXECUTE operations only)
        connection_properties: Connection-level properties (hosts)
        operation_properties: Operation-level properties (keyPrefix, throwOnNotFound)
    """

    object_type_id: str | None = Field(default=None, description="Logical object type id")
    operation_type: OperationType | None = Field(default=None, description="Operation verb")
    custom_operation_type: str | None = Field(default=None, description="Custom operation subtype")
    connection_properties: dict[str, Any] = Field(default_factory=dict)
    operation_properties: dict[str, Any] = Field(default_factory=dict)
    execution_id: str = Field(
        default_factory=lambda: str(uuid.uuid4()),
        description="Execution context id for log correlation",
    )

    def get_connection_properties(self) -> PropertyMap:
        return PropertyMap(self.connection_properties)

    def get_operation_properties(self) -> PropertyMap:
        return PropertyMap(self.operation_properties)


class OperationContext(ConnectorContext):
    """Context of a Get/Upsert/Delete execution."""


class BrowseContext(ConnectorContext):
    """Context of a browse or connection test."""


class ObjectIdData(BaseModel):
    """One requested object id (Get/Delete) plus its dynamic document properties."""

    model_config = {"frozen": True}

    object_id: str | None = Field(default=None, description="Logical object id")
    dynamic_properties: dict[str, str] = Field(default_factory=dict)
    tracking_id: str = Field(default_factory=lambda: str(uuid.uuid4()))


class ObjectData(BaseModel):
    """One input document (Upsert) plus its dynamic document properties."""

    model_config = {"frozen": True}

    data: bytes = Field(default=b"", description="Raw document bytes")
    dynamic_properties: dict[str, str] = Field(default_factory=dict)
    tracking_id: str = Field(default_factory=lambda: str(uuid.uuid4()))


class _BatchRequest:
    """Ordered batch of items handed over by the host platform."""

    def __init__(self, items: Iterable[Any] | None = None):
        self._items = list(items or [])

    def __iter__(self) -> Iterator[Any]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)


class GetRequest(_BatchRequest):
    """Batch of ObjectIdData to fetch."""


class UpdateRequest(_BatchRequest):
    """Batch of ObjectData to upsert."""


class DeleteRequest(_BatchRequest):
    """Batch of ObjectIdData to delete."""


class PayloadMetadata(BaseModel):
    """Tracked properties attached to a result payload."""

    tracked_properties: dict[str, str] = Field(default_factory=dict)

    def set_tracked_property(self, name: str, value: str) -> None:
        self.tracked_properties[name] = value


class OperationResult(BaseModel):
    """One reported outcome for one input item."""

    model_config = {"arbitrary_types_allowed": True}

    item: ObjectIdData | ObjectData
    status: OperationStatus
    status_code: str
    status_message: str | None = None
    payload: bytes | None = None
    content_type: ContentType | None = None
    metadata: PayloadMetadata | None = None
    error: BaseException | None = None


class OperationResponse:
    """
    Per-item result collector.

    Each add_* call reports the outcome of exactly one input item,
    independently of the other items of the batch.
    """

    def __init__(self):
        self._results: list[OperationResult] = []

    @property
    def results(self) -> list[OperationResult]:
        return list(self._results)

    def create_metadata(self) -> PayloadMetadata:
        return PayloadMetadata()

    def add_result(
        self,
        item: ObjectIdData | ObjectData,
        status: OperationStatus,
        status_code: str,
        status_message: str | None,
        payload: bytes | None,
        metadata: PayloadMetadata | None = None,
        content_type: ContentType | None = None,
    ) -> None:
        self._results.append(
            OperationResult(
                item=item,
                status=status,
                status_code=getattr(status_code, "value", status_code),
                status_message=status_message,
                payload=payload,
                metadata=metadata,
                content_type=content_type,
            )
        )

    def add_empty_result(
        self,
        item: ObjectIdData | ObjectData,
        status: OperationStatus,
        status_code: str,
        status_message: str | None,
    ) -> None:
        self.add_result(item, status, status_code, status_message, None)

    def add_error_result(
        self,
        item: ObjectIdData | ObjectData,
        status: OperationStatus,
        status_code: str,
        status_message: str | None,
        error: BaseException | None,
    ) -> None:
        self._results.append(
            OperationResult(
                item=item,
                status=status,
                status_code=getattr(status_code, "value", status_code),
                status_message=status_message,
                error=error,
            )
        )

    def result_for(self, item: ObjectIdData | ObjectData) -> OperationResult:
        """Return the single result reported for an item."""
        matches = [r for r in self._results if r.item.tracking_id == item.tracking_id]
        if len(matches) != 1:
            raise LookupError(f"Expected one result for item, found {len(matches)}")
        return matches[0]

    def __len__(self) -> int:
        return len(self._results)
