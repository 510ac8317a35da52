"""
Unit Tests for RedisBrowser

Tests object type listing, definition lookup and the PING connection test.
"""

from unittest.mock import MagicMock

import pytest

from redis_connector.browser import RedisBrowser
from redis_connector.core.config.constants import ContentType, ObjectDefinitionRole, OperationType
from redis_connector.core.exceptions import ConfigurationError, StoreConnectionError
from redis_connector.core.logging.logger import get_execution_id
from redis_connector.infrastructure.cache.connection import RedisConnection
from redis_connector.operations.models import BrowseContext


@pytest.fixture
def make_browser(shared_client, registry):
    def _make(operation_type=OperationType.GET, **kwargs):
        context = BrowseContext(operation_type=operation_type, **kwargs)
        return RedisBrowser(context, registry, RedisConnection(lambda: shared_client, "localhost:6379"))

    return _make


@pytest.mark.unit
class TestBrowse:
    """Test metadata browsing."""

    def test_object_types(self, make_browser):
        assert [t.id for t in make_browser().get_object_types()] == ["String", "HashSet"]

    def test_definitions_for_context_operation(self, make_browser):
        browser = make_browser(OperationType.UPSERT)

        definitions = browser.get_object_definitions(
            "HashSet", [ObjectDefinitionRole.INPUT, ObjectDefinitionRole.OUTPUT]
        )

        assert [d.descriptor.content_type for d in definitions] == [ContentType.XML, ContentType.XML]

    def test_missing_operation_type(self, make_browser):
        browser = make_browser(operation_type=None)

        with pytest.raises(ConfigurationError, match="no operation type"):
            browser.get_object_definitions("String", [ObjectDefinitionRole.OUTPUT])

    def test_browse_does_not_connect(self, make_browser, shared_client):
        make_browser().get_object_types()
        shared_client.connect.assert_not_called()


@pytest.mark.unit
class TestConnectionTest:
    """Test the PING connection test."""

    def test_pong_passes(self, make_browser, store):
        make_browser().test_connection()

        assert store.commands == [("PING",)]
        assert store.close_count == 1
        assert get_execution_id() is None

    def test_wrong_reply_fails(self, make_browser, store):
        store.ping = MagicMock(return_value="HELLO")

        with pytest.raises(StoreConnectionError, match="did not respond to PING with 'PONG'"):
            make_browser().test_connection()

        assert store.close_count == 1

    def test_unreachable_store(self, make_browser, shared_client):
        shared_client.connect.side_effect = StoreConnectionError("Store node redis://localhost:6379 is unreachable")

        with pytest.raises(StoreConnectionError, match="unreachable"):
            make_browser().test_connection()

    def test_other_errors_are_wrapped(self, make_browser, store):
        store.failures["PING"] = RuntimeError("socket closed")

        with pytest.raises(StoreConnectionError, match="socket closed") as exc_info:
            make_browser().test_connection()

        assert exc_info.value.details["original_error"] == "RuntimeError"
        assert store.close_count == 1

    def test_connection_is_single_use(self, make_browser):
        browser = make_browser()
        browser.test_connection()

        with pytest.raises(StoreConnectionError, match="already been closed"):
            browser.test_connection()
