"""
Unit Tests for Core Exceptions

Tests for exception handling.
"""

import pytest

from redis_connector.core.exceptions import (
    BadInputError,
    ConfigurationError,
    ConnectorBaseError,
    DefinitionNotFoundError,
    MetadataLoadError,
    StoreCommandError,
    StoreConnectionError,
    StoreError,
    UnsupportedObjectTypeError,
)


@pytest.mark.unit
class TestConnectorBaseError:
    """Test the base connector exception class."""

    def test_base_error_creation(self):
        """Test that ConnectorBaseError can be created."""
        error = ConnectorBaseError("Test message")
        assert str(error) == "Test message"

    def test_base_error_default_values(self):
        """Test default values for ConnectorBaseError."""
        error = ConnectorBaseError("Test")
        assert error.details == {}
        assert error.execution_id is None

    def test_details_are_copied(self):
        details = {"key": "value"}
        error = ConnectorBaseError("Test", details=details)
        error.with_context(extra=1)

        assert details == {"key": "value"}
        assert error.details == {"key": "value", "extra": 1}

    def test_to_dict(self):
        error = ConnectorBaseError("Boom", execution_id="exec-1", details={"node": "redis://a:1"})

        assert error.to_dict() == {
            "error_type": "ConnectorBaseError",
            "message": "Boom",
            "execution_id": "exec-1",
            "details": {"node": "redis://a:1"},
        }

    def test_repr_includes_context(self):
        error = ConnectorBaseError("Boom", execution_id="exec-1")
        assert repr(error) == "ConnectorBaseError(message='Boom', execution_id='exec-1')"

    def test_from_exception_wraps_original(self):
        original = ValueError("bad port")
        error = StoreConnectionError.from_exception(original, node="redis://a:x")

        assert isinstance(error, StoreConnectionError)
        assert error.message == "bad port"
        assert error.details == {
            "original_error": "ValueError",
            "original_message": "bad port",
            "node": "redis://a:x",
        }


@pytest.mark.unit
class TestExceptionHierarchy:
    """Test themed exception inheritance."""

    def test_store_errors(self):
        assert issubclass(StoreConnectionError, StoreError)
        assert issubclass(StoreCommandError, StoreError)
        assert issubclass(StoreError, ConnectorBaseError)

    def test_unsupported_object_type_is_configuration_error(self):
        assert issubclass(UnsupportedObjectTypeError, ConfigurationError)

    def test_metadata_and_input_errors(self):
        assert issubclass(MetadataLoadError, ConnectorBaseError)
        assert issubclass(BadInputError, ConnectorBaseError)


@pytest.mark.unit
class TestStructuredErrors:
    """Test errors that build their own message."""

    def test_definition_not_found_message(self):
        error = DefinitionNotFoundError("HashSet", operation_type="QUERY", role="input")

        assert error.message == "Could not find an object definition id:HashSet type:QUERY mode:input"
        assert error.object_type_id == "HashSet"
        assert error.operation_type == "QUERY"
        assert error.role == "input"
        assert error.details["custom_operation_type"] is None

    def test_unsupported_object_type_message(self):
        error = UnsupportedObjectTypeError("List", "GET")

        assert error.message == "Get operation for List objects is not implemented"
        assert error.details == {"object_type_id": "List", "operation_type": "GET"}
