"""
Operation Exceptions

Errors raised while constructing or executing CRUD operations.
"""

from redis_connector.core.exceptions.base import ConfigurationError, ConnectorBaseError


class OperationError(ConnectorBaseError):
    """Base exception for operation errors."""
    pass


class UnsupportedObjectTypeError(ConfigurationError):
    """
    Raised when an operation is requested for an object type with no handler.

    Raised at operation construction time, before any store command.
    """

    def __init__(self, object_type_id: str, operation_type: str):
        super().__init__(
            message=f"{operation_type.capitalize()} operation for {object_type_id} objects is not implemented",
            details={"object_type_id": object_type_id, "operation_type": operation_type},
        )
        self.object_type_id = object_type_id
        self.operation_type = operation_type


class BadInputError(OperationError):
    """
    Raised when a document cannot be converted into store input.

    Reported per item with the BAD_INPUT code, never aborts the batch.
    """
    pass
