"""Tests for the store backends."""

import sys
import os
sys.path.insert(0, os.path.join(os.path.dirname(__file__), ".."))

from types import SimpleNamespace
from unittest.mock import MagicMock

import pytest

from data.auth import authenticate
from data.store import DataStore, InMemoryStore, NotFoundError, StoreError, SupabaseStore, create_store
from config.defaults import TABLE_BUILDINGS, TABLE_FLOORS, TABLE_VACANT_SPACES


class TestInMemoryStore:
    def setup_method(self):
        self.store = InMemoryStore(users={"admin@example.com": "secret"})
        self.store.insert(TABLE_FLOORS, [
            {"id": "F2", "building_id": "B1", "floor_no": 2},
            {"id": "F1", "building_id": "B1", "floor_no": 1},
            {"id": "F0", "building_id": "B1", "floor_no": None},
            {"id": "X1", "building_id": "B2", "floor_no": 1},
        ])

    def test_select_filters_and_orders(self):
        rows = self.store.select(TABLE_FLOORS, eq={"building_id": "B1"}, order="floor_no")
        assert [r["id"] for r in rows] == ["F0", "F1", "F2"]

        rows = self.store.select(TABLE_FLOORS, in_={"id": ["F1", "X1"]}, order="id", desc=True)
        assert [r["id"] for r in rows] == ["X1", "F1"]

    def test_select_columns(self):
        rows = self.store.select(TABLE_FLOORS, columns="id, floor_no", eq={"id": "F1"})
        assert rows == [{"id": "F1", "floor_no": 1}]

    def test_returned_rows_are_copies(self):
        self.store.select(TABLE_FLOORS, eq={"id": "F1"})[0]["floor_no"] = 99
        assert self.store.select_one(TABLE_FLOORS, eq={"id": "F1"})["floor_no"] == 1

    def test_insert_assigns_ids_except_for_vacant_spaces(self):
        row = self.store.insert(TABLE_BUILDINGS, {"name": "Tower"})[0]
        assert row["id"]
        vacancy = self.store.insert(TABLE_VACANT_SPACES, {"unit_id": "U1"})[0]
        assert "id" not in vacancy

    def test_duplicate_id(self):
        with pytest.raises(StoreError, match="floors_pkey"):
            self.store.insert(TABLE_FLOORS, {"id": "F1", "building_id": "B1"})

    def test_update_and_delete(self):
        updated = self.store.update(TABLE_FLOORS, {"floor_no": 5}, eq={"id": "F1"})
        assert updated[0]["floor_no"] == 5
        removed = self.store.delete(TABLE_FLOORS, eq={"building_id": "B1"})
        assert len(removed) == 3
        assert self.store.row_count(TABLE_FLOORS) == 1

    def test_select_one_not_found(self):
        with pytest.raises(NotFoundError):
            self.store.select_one(TABLE_FLOORS, eq={"id": "nope"})

    def test_unknown_table(self):
        with pytest.raises(StoreError):
            self.store.select("parking_lots")

    def test_authenticate(self):
        user = self.store.authenticate("admin@example.com", "secret")
        assert user.email == "admin@example.com"
        assert self.store.authenticate("admin@example.com", "wrong") is None


class TestSupabaseStore:
    def test_empty_in_list_skips_the_request(self):
        client = MagicMock()
        store = SupabaseStore(client)
        assert store.select(TABLE_FLOORS, in_={"id": []}) == []
        assert store.delete(TABLE_FLOORS, in_={"id": []}) == []
        client.table.assert_not_called()

    def test_query_is_built_from_filters(self):
        client = MagicMock()
        query = client.table.return_value.select.return_value
        query.eq.return_value = query
        query.in_.return_value = query
        query.order.return_value = query
        query.execute.return_value = SimpleNamespace(data=[{"id": "F1"}])

        rows = SupabaseStore(client).select(
            TABLE_FLOORS, eq={"building_id": "B1"}, in_={"id": ["F1"]}, order="floor_no",
        )

        assert rows == [{"id": "F1"}]
        client.table.assert_called_with(TABLE_FLOORS)
        query.eq.assert_called_with("building_id", "B1")
        query.in_.assert_called_with("id", ["F1"])
        query.order.assert_called_with("floor_no", desc=False)

    def test_failures_become_store_errors(self):
        client = MagicMock()
        client.table.return_value.insert.return_value.execute.side_effect = RuntimeError("connection reset")
        with pytest.raises(StoreError, match="connection reset"):
            SupabaseStore(client).insert(TABLE_FLOORS, [{"id": "F1"}])

    def test_sign_in_outage_is_a_store_error(self):
        client = MagicMock()
        client.auth.sign_in_with_password.side_effect = RuntimeError("timeout")
        store = SupabaseStore(client)
        with pytest.raises(StoreError, match="timeout"):
            store.authenticate("admin@example.com", "admin")
        assert authenticate(store, "admin@example.com", "admin") is None

    def test_unconfigured(self):
        settings = SimpleNamespace(supabase_url="", supabase_anon_key="", supabase_service_key="",
                                   request_timeout=10)
        with pytest.raises(StoreError):
            SupabaseStore.from_settings(settings)


def test_base_store_is_abstract():
    with pytest.raises(TypeError):
        DataStore()


def test_create_store():
    settings = SimpleNamespace(data_backend="memory", demo_users={"a@b.c": "x"})
    assert isinstance(create_store(settings), InMemoryStore)
    with pytest.raises(ValueError):
        create_store(SimpleNamespace(data_backend="mysql"))


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
