"""
Metadata Exceptions

Errors raised while loading or resolving object type metadata.
"""

from redis_connector.core.exceptions.base import ConnectorBaseError


class MetadataError(ConnectorBaseError):
    """Base exception for metadata registry errors."""
    pass


class MetadataLoadError(MetadataError):
    """
    Raised when the object type descriptor cannot be loaded.

    Fatal at registry construction: browse cannot be served without it.
    """
    pass


class DefinitionNotFoundError(MetadataError):
    """Raised when no definition exists for an object type / verb / role combination."""

    def __init__(
        self,
        object_type_id: str,
        operation_type: str | None = None,
        role: str | None = None,
        custom_operation_type: str | None = None,
        message: str | None = None,
    ):
        super().__init__(
            message=message or (
                f"Could not find an object definition id:{object_type_id} "
                f"type:{operation_type} mode:{role}"
            ),
            details={
                "object_type_id": object_type_id,
                "operation_type": operation_type,
                "custom_operation_type": custom_operation_type,
                "role": role,
            },
        )
        self.object_type_id = object_type_id
        self.operation_type = operation_type
        self.custom_operation_type = custom_operation_type
        self.role = role
