"""
Unit Tests for Delete Handlers

Tests key deduplication, DEL/HDEL grouping and group-level failure reporting.
"""

import pytest

from redis_connector.core.config.constants import OperationStatus
from redis_connector.core.exceptions import StoreConnectionError
from redis_connector.operations.delete import DeleteHashSetOperation, DeleteOperation
from tests.test_fixtures import RequestFactory


@pytest.mark.unit
class TestDeleteOperation:
    """Test suite for whole-key deletion."""

    def test_single_del_over_deduplicated_keys(self, make_scope, store, response):
        items = [RequestFactory.id_item("A"), RequestFactory.id_item("A"), RequestFactory.id_item("B")]

        DeleteOperation(make_scope(keyPrefix="p:")).execute(RequestFactory.delete_request(*items), response)

        assert store.commands == [("DEL", "p:A", "p:B")]
        assert len(response) == 3
        assert all(r.status == OperationStatus.SUCCESS for r in response.results)

    def test_missing_ids_report_no_key(self, make_scope, store, response):
        empty = RequestFactory.id_item("")
        valid = RequestFactory.id_item("A")

        DeleteOperation(make_scope()).execute(RequestFactory.delete_request(empty, valid), response)

        assert response.result_for(empty).status_code == "NO_KEY"
        assert response.result_for(valid).status_code == "OK"

    def test_no_command_without_valid_keys(self, make_scope, store, shared_client, response):
        item = RequestFactory.id_item(None)

        DeleteOperation(make_scope()).execute(RequestFactory.delete_request(item), response)

        assert store.commands == []
        shared_client.connect.assert_not_called()
        assert len(response) == 1

    def test_failure_fails_every_contributing_item(self, make_scope, store, response):
        store.failures["DEL"] = StoreConnectionError("node down")
        items = [RequestFactory.id_item("A"), RequestFactory.id_item("B")]

        DeleteOperation(make_scope()).execute(RequestFactory.delete_request(*items), response)

        assert [r.status for r in response.results] == [OperationStatus.FAILURE] * 2
        assert response.results[0].status_message == "node down"


@pytest.mark.unit
class TestDeleteHashSetOperation:
    """Test suite for hash and hash field deletion."""

    def test_whole_keys_and_fields(self, make_scope, store, response):
        items = [
            RequestFactory.id_item("h1"),
            RequestFactory.id_item("h2", field="f1"),
            RequestFactory.id_item("h2", field="f2"),
            RequestFactory.id_item("h2", field="f1"),
            RequestFactory.id_item("h3", field="x"),
        ]

        DeleteHashSetOperation(make_scope("HashSet")).execute(RequestFactory.delete_request(*items), response)

        assert store.commands == [
            ("DEL", "h1"),
            ("HDEL", "h2", "f1", "f2"),
            ("HDEL", "h3", "x"),
        ]
        assert len(response) == 5
        assert all(r.status == OperationStatus.SUCCESS for r in response.results)

    def test_fields_only(self, make_scope, store, response):
        item = RequestFactory.id_item("h", field="f")

        DeleteHashSetOperation(make_scope("HashSet")).execute(RequestFactory.delete_request(item), response)

        assert store.commands == [("HDEL", "h", "f")]

    def test_failure_fails_only_unconfirmed_groups(self, make_scope, store, response):
        store.failures["HDEL"] = StoreConnectionError("node down")
        whole = RequestFactory.id_item("h1")
        first = RequestFactory.id_item("h2", field="f")
        second = RequestFactory.id_item("h3", field="g")

        DeleteHashSetOperation(make_scope("HashSet")).execute(
            RequestFactory.delete_request(whole, first, second), response
        )

        assert response.result_for(whole).status == OperationStatus.SUCCESS
        assert response.result_for(first).status == OperationStatus.FAILURE
        assert response.result_for(second).status == OperationStatus.FAILURE
        assert store.names() == ["DEL", "HDEL"]

    def test_missing_id(self, make_scope, store, response):
        item = RequestFactory.id_item(None, field="f")

        DeleteHashSetOperation(make_scope("HashSet")).execute(RequestFactory.delete_request(item), response)

        assert response.result_for(item).status_code == "NO_KEY"
        assert store.commands == []

    def test_duplicate_whole_keys_issue_one_del(self, make_scope, store, response):
        items = [RequestFactory.id_item("A"), RequestFactory.id_item("A"), RequestFactory.id_item("B")]

        DeleteHashSetOperation(make_scope("HashSet")).execute(RequestFactory.delete_request(*items), response)

        assert store.commands == [("DEL", "A", "B")]
        assert [r.status for r in response.results] == [OperationStatus.SUCCESS] * 3
