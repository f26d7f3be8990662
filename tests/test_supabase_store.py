# =============================================================================
# tests/test_supabase_store.py - Supabase Document Store Tests
# =============================================================================
# Tests for SupabaseDocumentStore query building and error mapping, with a
# mocked supabase client (no network).
#
# Run with: pytest tests/test_supabase_store.py -v
# =============================================================================

from unittest.mock import MagicMock
from uuid import uuid4

import pytest

from lib.document_store import DocumentStoreError
from lib.supabase_client import SupabaseClientError, SupabaseDocumentStore


def make_client(data=None, error=None):
    """
    Build a mock client whose query builder returns itself for every
    chained call and `data` from execute().
    """
    query = MagicMock()
    for method in ("select", "eq", "neq", "in_", "order", "limit", "single", "insert", "update", "delete"):
        getattr(query, method).return_value = query
    if error:
        query.execute.side_effect = error
    else:
        query.execute.return_value = MagicMock(data=data)

    client = MagicMock()
    client.table.return_value = query
    return client, query


class TestReads:
    """Tests for find / find_one / find_by_id / find_by_ids."""

    def test_find_applies_filters_and_exclusions(self):
        brand_id = str(uuid4())
        car_id = str(uuid4())
        client, query = make_client(data=[{"id": "x"}])
        store = SupabaseDocumentStore(client)

        docs = store.find("cars", {"brand": brand_id}, exclude={"id": car_id})

        assert docs == [{"id": "x"}]
        client.table.assert_called_with("cars")
        query.eq.assert_called_once_with("brand", brand_id)
        query.neq.assert_called_once_with("id", car_id)
        query.order.assert_called_once_with("created_at")

    def test_find_with_no_rows(self):
        client, _ = make_client(data=None)
        assert SupabaseDocumentStore(client).find("brands") == []

    def test_find_one_returns_first_row(self):
        client, query = make_client(data=[{"id": "1", "slug": "audi"}])

        doc = SupabaseDocumentStore(client).find_one("brands", {"slug": "audi"})

        assert doc == {"id": "1", "slug": "audi"}
        query.limit.assert_called_once_with(1)

    def test_find_one_without_match(self):
        client, _ = make_client(data=[])
        assert SupabaseDocumentStore(client).find_one("brands", {"slug": "nope"}) is None

    def test_find_by_id_with_malformed_id_skips_query(self):
        client, _ = make_client(data={"id": "1"})

        assert SupabaseDocumentStore(client).find_by_id("cars", "64b7f0c2e4b0") is None
        client.table.assert_not_called()

    def test_find_by_id_no_rows_is_none(self):
        client, _ = make_client(error=Exception("{'code': 'PGRST116', 'message': 'no rows'}"))
        assert SupabaseDocumentStore(client).find_by_id("cars", str(uuid4())) is None

    def test_find_by_id_other_failure_raises(self):
        client, _ = make_client(error=Exception("connection reset"))

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseDocumentStore(client).find_by_id("cars", str(uuid4()))

        assert exc_info.value.code == "FIND_BY_ID_FAILED"
        assert isinstance(exc_info.value, DocumentStoreError)

    def test_find_by_ids_filters_malformed_ids(self):
        good = str(uuid4())
        client, query = make_client(data=[{"id": good}])

        docs = SupabaseDocumentStore(client).find_by_ids("cars", [good, "bogus"])

        assert docs == [{"id": good}]
        query.in_.assert_called_once_with("id", [good])

    def test_find_by_ids_all_malformed(self):
        client, _ = make_client(data=[])

        assert SupabaseDocumentStore(client).find_by_ids("cars", ["bogus"]) == []
        client.table.assert_not_called()


class TestWrites:
    """Tests for insert / update / delete."""

    def test_insert_returns_created_row(self):
        client, query = make_client(data=[{"id": "new", "name": "Audi"}])

        doc = SupabaseDocumentStore(client).insert("brands", {"name": "Audi"})

        assert doc["id"] == "new"
        query.insert.assert_called_once_with({"name": "Audi"})

    def test_insert_without_data_raises(self):
        client, _ = make_client(data=[])

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseDocumentStore(client).insert("brands", {"name": "Audi"})

        assert exc_info.value.code == "INSERT_NO_DATA"

    def test_insert_failure_is_wrapped(self):
        client, _ = make_client(error=Exception("duplicate key"))

        with pytest.raises(SupabaseClientError) as exc_info:
            SupabaseDocumentStore(client).insert("brands", {"name": "Audi"})

        assert exc_info.value.code == "INSERT_FAILED"

    def test_update_missing_row_is_none(self):
        client, _ = make_client(data=[])
        assert SupabaseDocumentStore(client).update("cars", str(uuid4()), {"price": 1}) is None

    def test_update_malformed_id_is_none(self):
        client, _ = make_client(data=[{"id": "x"}])

        assert SupabaseDocumentStore(client).update("cars", "bogus", {"price": 1}) is None
        client.table.assert_not_called()

    def test_delete_returns_removed_row(self):
        doc_id = str(uuid4())
        client, query = make_client(data=[{"id": doc_id}])

        removed = SupabaseDocumentStore(client).delete("brands", doc_id)

        assert removed == {"id": doc_id}
        query.eq.assert_called_once_with("id", doc_id)
