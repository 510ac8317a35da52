"""
Base Exception Class

This module contains the base exception class that all connector exceptions
inherit from, plus ConfigurationError. Specialized exceptions live in their
themed modules.

Author: System Architect
Date: 2025-12-08
"""

from typing import Any


class ConnectorBaseError(Exception):
    """
    Base exception for all Redis connector errors.

    All custom exceptions inherit from this class to enable:
    - Consistent error handling at the batch boundary
    - Execution context correlation
    - Structured error logging

    Attributes:
        message: Error message
        execution_id: Execution context id for correlation (if available)
        details: Additional error details (dict)

    Example:
        raise StoreConnectionError(
            "Failed to reach node",
            execution_id="abc-123",
            details={"node": "redis://cache-1:6379"}
        )
    """

    def __init__(
        self, message: str, execution_id: str | None = None, details: dict[str, Any] | None = None
    ):
        self.message = message
        self.execution_id = execution_id
        self.details = (details or {}).copy()
        super().__init__(self.message)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert exception to dictionary for logging.

        Returns:
            Dict with error_type, message, execution_id, and details
        """
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "execution_id": self.execution_id,
            "details": self.details,
        }

    def with_context(self, **context) -> "ConnectorBaseError":
        """
        Add additional context to the error details.

        Args:
            **context: Key-value pairs to add to details

        Returns:
            Self (for method chaining)
        """
        self.details.update(context)
        return self

    def __repr__(self) -> str:
        details_str = f", details={self.details}" if self.details else ""
        execution_id_str = f", execution_id='{self.execution_id}'" if self.execution_id else ""
        return f"{self.__class__.__name__}(message='{self.message}'{execution_id_str}{details_str})"

    @classmethod
    def from_exception(
        cls,
        exc: Exception,
        message: str | None = None,
        execution_id: str | None = None,
        **details
    ) -> "ConnectorBaseError":
        """
        Create a connector error from another exception.

        Useful for wrapping redis-py or parser exceptions with additional context.

        Args:
            exc: Original exception to wrap
            message: Custom message (defaults to original exception message)
            execution_id: Execution context id for correlation
            **details: Additional context to include

        Returns:
            New instance with wrapped exception details

        Example:
            >>> try:
            ...     pool.get_connection()
            ... except redis.ConnectionError as e:
            ...     raise StoreConnectionError.from_exception(e, node="redis://cache-1:6379")
        """
        error_message = message or str(exc)
        error_details = {
            "original_error": exc.__class__.__name__,
            "original_message": str(exc),
            **details
        }
        return cls(error_message, execution_id=execution_id, details=error_details)


class ConfigurationError(ConnectorBaseError):
    """Raised when configuration is invalid or missing (malformed node list, unsupported type)."""
    pass
