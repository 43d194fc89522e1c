"""Tests for the Supabase-backed document store, with a mocked client."""
from unittest.mock import MagicMock, patch

import pytest

from pantry_tracker.core.errors import StoreUnavailable
from pantry_tracker.services import supabase_service
from pantry_tracker.services.supabase_service import SupabaseDocumentStore


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def table(client):
    return client.table.return_value


@pytest.fixture
def store(client):
    return SupabaseDocumentStore(client=client, table="inventory")


class TestListDocuments:
    def test_rows_become_key_body_pairs(self, store, client, table):
        table.select.return_value.execute.return_value = MagicMock(data=[
            {"name": "eggs", "quantity": 3},
            {"name": "milk", "quantity": 1},
        ])

        assert store.list_documents() == [("eggs", {"quantity": 3}), ("milk", {"quantity": 1})]
        client.table.assert_called_with("inventory")

    def test_empty_table(self, store, table):
        table.select.return_value.execute.return_value = MagicMock(data=[])
        assert store.list_documents() == []

    def test_failure_raises_store_unavailable(self, store, table):
        table.select.return_value.execute.side_effect = ConnectionError("network down")

        with pytest.raises(StoreUnavailable) as exc_info:
            store.list_documents()

        assert exc_info.value.operation == "list"
        assert isinstance(exc_info.value.__cause__, ConnectionError)


class TestGetDocument:
    def test_found(self, store, table):
        query = table.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value = MagicMock(data=[{"name": "eggs", "quantity": 3}])

        assert store.get_document("eggs") == {"quantity": 3}
        table.select.return_value.eq.assert_called_with("name", "eggs")

    def test_missing_returns_none(self, store, table):
        query = table.select.return_value.eq.return_value.limit.return_value
        query.execute.return_value = MagicMock(data=[])

        assert store.get_document("caviar") is None

    def test_failure_raises_store_unavailable(self, store, table):
        query = table.select.return_value.eq.return_value.limit.return_value
        query.execute.side_effect = RuntimeError("401 Unauthorized")

        with pytest.raises(StoreUnavailable, match="401 Unauthorized"):
            store.get_document("eggs")


class TestWrites:
    def test_put_upserts_on_name(self, store, table):
        store.put_document("eggs", {"quantity": 4})

        table.upsert.assert_called_once_with({"quantity": 4, "name": "eggs"}, on_conflict="name")
        table.upsert.return_value.execute.assert_called_once()

    def test_put_failure(self, store, table):
        table.upsert.return_value.execute.side_effect = RuntimeError("boom")

        with pytest.raises(StoreUnavailable) as exc_info:
            store.put_document("eggs", {"quantity": 4})
        assert exc_info.value.operation == "put"

    def test_delete_filters_on_name(self, store, table):
        store.delete_document("eggs")

        table.delete.return_value.eq.assert_called_once_with("name", "eggs")
        table.delete.return_value.eq.return_value.execute.assert_called_once()

    def test_delete_failure(self, store, table):
        table.delete.return_value.eq.return_value.execute.side_effect = RuntimeError("boom")

        with pytest.raises(StoreUnavailable):
            store.delete_document("eggs")


class TestClientCreation:
    def test_client_created_lazily(self):
        with patch.object(supabase_service, "get_client") as mock_get_client:
            store = SupabaseDocumentStore()
            mock_get_client.assert_not_called()

            _ = store.client
            _ = store.client

        mock_get_client.assert_called_once()

    def test_client_creation_failure_is_store_unavailable(self):
        with patch.object(supabase_service, "get_client", side_effect=Exception("Invalid URL")):
            store = SupabaseDocumentStore()
            with pytest.raises(StoreUnavailable):
                store.ping()
