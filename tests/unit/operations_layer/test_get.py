"""
Unit Tests for Get Handlers

Tests GET/HGETALL/HGET flows, not-found handling and TTL metadata.
"""

import xml.etree.ElementTree as ET

import pytest

from redis_connector.core.config.constants import ContentType, OperationStatus
from redis_connector.core.exceptions import BadInputError, StoreConnectionError
from redis_connector.operations.get import GetHashSetOperation, GetStringOperation
from tests.test_fixtures import RequestFactory


def _items(payload: bytes) -> dict:
    return {i.findtext("ID"): i.findtext("Value") for i in ET.fromstring(payload).iter("Item")}


@pytest.mark.unit
class TestGetString:
    """Test suite for GetStringOperation."""

    def test_found_value_with_ttl(self, make_scope, store, response):
        store.strings["app:user:1"] = "alice"
        store.expiry["app:user:1"] = 120
        item = RequestFactory.id_item("user:1")

        GetStringOperation(make_scope(keyPrefix="app:")).execute(RequestFactory.get_request(item), response)

        result = response.result_for(item)
        assert result.status == OperationStatus.SUCCESS
        assert result.status_code == "OK"
        assert result.payload == b"alice"
        assert result.content_type == ContentType.BINARY
        assert result.metadata.tracked_properties == {"ttl": "120"}
        assert store.commands == [("GET", "app:user:1"), ("TTL", "app:user:1")]

    def test_no_expiry_has_no_metadata(self, make_scope, store, response):
        store.strings["k"] = "v"
        item = RequestFactory.id_item("k")

        GetStringOperation(make_scope()).execute(RequestFactory.get_request(item), response)

        assert response.result_for(item).metadata is None

    def test_missing_key_is_empty_success(self, make_scope, store, response):
        item = RequestFactory.id_item("absent")

        GetStringOperation(make_scope()).execute(RequestFactory.get_request(item), response)

        result = response.result_for(item)
        assert result.status == OperationStatus.SUCCESS
        assert result.payload is None
        assert store.names() == ["GET"]

    def test_missing_key_with_throw_on_not_found(self, make_scope, response):
        item = RequestFactory.id_item("absent")

        GetStringOperation(make_scope(throwOnNotFound="true")).execute(RequestFactory.get_request(item), response)

        result = response.result_for(item)
        assert result.status == OperationStatus.APPLICATION_ERROR
        assert result.status_code == "NOT_FOUND"
        assert result.status_message == "Key not found"

    def test_empty_id_reports_no_key(self, make_scope, store, shared_client, response):
        item = RequestFactory.id_item("")

        GetStringOperation(make_scope()).execute(RequestFactory.get_request(item), response)

        result = response.result_for(item)
        assert result.status_code == "NO_KEY"
        assert result.status_message == "Key is a required document property"
        assert store.commands == []
        shared_client.connect.assert_not_called()

    def test_one_result_per_item_in_order(self, make_scope, store, response):
        store.strings["a"] = "1"
        items = [RequestFactory.id_item("a"), RequestFactory.id_item(None), RequestFactory.id_item("b")]

        GetStringOperation(make_scope()).execute(RequestFactory.get_request(*items), response)

        assert len(response) == 3
        assert [r.item.tracking_id for r in response.results] == [i.tracking_id for i in items]
        assert [r.status_code for r in response.results] == ["OK", "NO_KEY", "OK"]

    def test_store_failure_is_reported_per_item(self, make_scope, store, response):
        store.failures["GET"] = StoreConnectionError("node down")
        items = [RequestFactory.id_item("a"), RequestFactory.id_item("b")]

        GetStringOperation(make_scope()).execute(RequestFactory.get_request(*items), response)

        assert [r.status for r in response.results] == [OperationStatus.FAILURE] * 2
        assert response.results[0].status_code == "ERR"
        assert response.results[0].status_message == "node down"
        assert isinstance(response.results[0].error, StoreConnectionError)

    def test_connection_closed_after_batch(self, make_scope, store, response):
        GetStringOperation(make_scope()).execute(
            RequestFactory.get_request(RequestFactory.id_item("a")), response
        )
        assert store.close_count == 1

    def test_unreachable_store_fails_items(self, make_scope, shared_client, response):
        shared_client.connect.side_effect = StoreConnectionError("Store node redis://localhost:6379 is unreachable")
        items = [RequestFactory.id_item("a"), RequestFactory.id_item("b")]

        GetStringOperation(make_scope()).execute(RequestFactory.get_request(*items), response)

        assert [r.status for r in response.results] == [OperationStatus.FAILURE] * 2
        assert shared_client.connect.call_count == 1


@pytest.mark.unit
class TestGetHashSet:
    """Test suite for GetHashSetOperation."""

    def test_whole_hash(self, make_scope, store, response):
        store.hashes["h"] = {"f1": "v1", "f2": "v2"}
        item = RequestFactory.id_item("h")

        GetHashSetOperation(make_scope("HashSet")).execute(RequestFactory.get_request(item), response)

        result = response.result_for(item)
        assert result.content_type == ContentType.XML
        assert _items(result.payload) == {"f1": "v1", "f2": "v2"}
        assert store.names() == ["HGETALL", "TTL"]

    def test_field_selector_returns_at_most_one_item(self, make_scope, store, response):
        store.hashes["h"] = {"f1": "v1", "f2": "v2"}
        item = RequestFactory.id_item("h", field="f2")

        GetHashSetOperation(make_scope("HashSet")).execute(RequestFactory.get_request(item), response)

        assert _items(response.result_for(item).payload) == {"f2": "v2"}
        assert store.commands[0] == ("HGET", "h", "f2")

    def test_missing_field_with_throw_on_not_found(self, make_scope, store, response):
        store.hashes["app:h"] = {"f1": "v1"}
        item = RequestFactory.id_item("h", field="nope")

        GetHashSetOperation(make_scope("HashSet", keyPrefix="app:", throwOnNotFound=True)).execute(
            RequestFactory.get_request(item), response
        )

        result = response.result_for(item)
        assert result.status_code == "NOT_FOUND"
        assert result.status_message == "Key app:h / field nope not found"

    def test_missing_hash_with_throw_on_not_found(self, make_scope, response):
        item = RequestFactory.id_item("h")

        GetHashSetOperation(make_scope("HashSet", throwOnNotFound="true")).execute(
            RequestFactory.get_request(item), response
        )

        assert response.result_for(item).status_message == "Key h not found"

    def test_missing_hash_is_empty_success(self, make_scope, store, response):
        item = RequestFactory.id_item("h")

        GetHashSetOperation(make_scope("HashSet")).execute(RequestFactory.get_request(item), response)

        assert response.result_for(item).status == OperationStatus.SUCCESS
        assert store.names() == ["HGETALL"]

    def test_value_not_representable_in_xml_is_item_error(self, make_scope, store, response):
        store.hashes["h"] = {"f": "bad\x01value"}
        item = RequestFactory.id_item("h")

        GetHashSetOperation(make_scope("HashSet")).execute(RequestFactory.get_request(item), response)

        result = response.result_for(item)
        assert result.status == OperationStatus.FAILURE
        assert result.status_code == "ERR"
        assert "not allowed in XML" in result.status_message
        assert isinstance(result.error, BadInputError)

    def test_expired_between_read_and_ttl(self, make_scope, store, response):
        store.hashes["h"] = {"f": "v"}
        original_ttl = store.ttl

        def ttl_after_expiry(key):
            store.hashes.pop(key, None)
            return original_ttl(key)

        store.ttl = ttl_after_expiry
        item = RequestFactory.id_item("h")

        GetHashSetOperation(make_scope("HashSet")).execute(RequestFactory.get_request(item), response)

        assert response.result_for(item).metadata.tracked_properties == {"ttl": "0"}
