# =============================================================================
# lib/supabase_client.py - Supabase Client Wrapper
# =============================================================================
# This module provides the Supabase-backed implementation of the document
# store. It implements the singleton pattern to reuse a single client
# connection across requests.
#
# Tables: brands, cars, users, orders. Every table has a uuid "id" primary
# key and a "created_at" default; list-valued columns (brands.cars,
# cars.product_pictures, orders.products) are jsonb.
#
# Usage:
#   from lib.supabase_client import SupabaseDocumentStore
#   store = SupabaseDocumentStore()
#   brand = store.find_one("brands", {"slug": "audi"})
# =============================================================================

from __future__ import annotations

import logging
from typing import Any

from supabase import create_client, Client

from app.config import settings
from lib.document_store import Document, DocumentStore, DocumentStoreError
from lib.utils import is_uuid, normalize_uuid

# Set up logging for this module
logger = logging.getLogger(__name__)

# PostgREST code for ".single()" matching no rows
NO_ROWS_CODE = "PGRST116"


class SupabaseClientError(DocumentStoreError):
    """
    Error during Supabase operations.

    Carries the table and operation so failures can be traced from the
    logs without the request body.
    """

    def __init__(
        self,
        message: str,
        code: str = "SUPABASE_ERROR",
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.code = code
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        return f"[{self.code}] {self.message}"


class SupabaseClient:
    """
    Singleton holder for the Supabase client.

    Uses the service_role key, which bypasses Row Level Security. This is
    appropriate for server-side operations.
    """

    _instance: Client | None = None

    @classmethod
    def get_client(cls) -> Client:
        """
        Get or create the singleton Supabase client.

        Raises:
            SupabaseClientError: If client creation fails
        """
        if cls._instance is None:
            try:
                cls._instance = create_client(
                    settings.SUPABASE_URL,
                    settings.SUPABASE_SERVICE_KEY
                )
                logger.info("Supabase client initialized successfully")
            except Exception as e:
                raise SupabaseClientError(
                    message=f"Failed to create Supabase client: {e}",
                    code="CLIENT_INIT_FAILED",
                )
        return cls._instance


class SupabaseDocumentStore(DocumentStore):
    """
    DocumentStore backed by Supabase (PostgREST) tables.

    Ids that are not valid UUIDs can never match a row, so lookups by such
    ids short-circuit to "not found" instead of surfacing a Postgres cast
    error.
    """

    def __init__(self, client: Client | None = None):
        self._client = client

    @property
    def client(self) -> Client:
        return self._client or SupabaseClient.get_client()

    # -------------------------------------------------------------------------
    # Reads
    # -------------------------------------------------------------------------

    def find(
        self,
        table: str,
        filters: dict[str, Any] | None = None,
        exclude: dict[str, Any] | None = None,
    ) -> list[Document]:
        try:
            query = self.client.table(table).select("*")
            for column, value in (filters or {}).items():
                query = query.eq(column, normalize_uuid(value))
            for column, value in (exclude or {}).items():
                query = query.neq(column, normalize_uuid(value))
            response = query.order("created_at").execute()

            docs = response.data or []
            logger.debug(f"Fetched {len(docs)} rows from {table}")
            return docs

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to query {table}: {e}",
                code="FIND_FAILED",
                details={"table": table, "filters": filters, "exclude": exclude},
            )

    def find_one(self, table: str, filters: dict[str, Any]) -> Document | None:
        try:
            query = self.client.table(table).select("*")
            for column, value in filters.items():
                query = query.eq(column, normalize_uuid(value))
            response = query.limit(1).execute()

            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to query {table}: {e}",
                code="FIND_ONE_FAILED",
                details={"table": table, "filters": filters},
            )

    def find_by_id(self, table: str, doc_id: str) -> Document | None:
        doc_id = normalize_uuid(doc_id)
        if not is_uuid(doc_id):
            return None

        try:
            response = (
                self.client.table(table)
                .select("*")
                .eq("id", doc_id)
                .single()
                .execute()
            )
            return response.data

        except Exception as e:
            if NO_ROWS_CODE in str(e):
                return None
            raise SupabaseClientError(
                message=f"Failed to fetch {table} row: {e}",
                code="FIND_BY_ID_FAILED",
                details={"table": table, "id": doc_id},
            )

    def find_by_ids(self, table: str, doc_ids: list[str]) -> list[Document]:
        ids = [normalize_uuid(i) for i in doc_ids if is_uuid(normalize_uuid(i))]
        if not ids:
            return []

        try:
            response = (
                self.client.table(table)
                .select("*")
                .in_("id", ids)
                .execute()
            )
            return response.data or []

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to fetch {table} rows: {e}",
                code="FIND_BY_IDS_FAILED",
                details={"table": table, "count": len(ids)},
            )

    # -------------------------------------------------------------------------
    # Writes
    # -------------------------------------------------------------------------

    def insert(self, table: str, data: Document) -> Document:
        try:
            response = (
                self.client.table(table)
                .insert(data)
                .execute()
            )

            if response.data:
                return response.data[0]
            raise SupabaseClientError(
                message="Insert returned no data",
                code="INSERT_NO_DATA",
                details={"table": table},
            )

        except SupabaseClientError:
            raise
        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to insert into {table}: {e}",
                code="INSERT_FAILED",
                details={"table": table},
            )

    def update(self, table: str, doc_id: str, data: Document) -> Document | None:
        doc_id = normalize_uuid(doc_id)
        if not is_uuid(doc_id):
            return None

        try:
            response = (
                self.client.table(table)
                .update(data)
                .eq("id", doc_id)
                .execute()
            )
            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to update {table} row: {e}",
                code="UPDATE_FAILED",
                details={"table": table, "id": doc_id},
            )

    def delete(self, table: str, doc_id: str) -> Document | None:
        doc_id = normalize_uuid(doc_id)
        if not is_uuid(doc_id):
            return None

        try:
            response = (
                self.client.table(table)
                .delete()
                .eq("id", doc_id)
                .execute()
            )
            rows = response.data or []
            return rows[0] if rows else None

        except Exception as e:
            raise SupabaseClientError(
                message=f"Failed to delete {table} row: {e}",
                code="DELETE_FAILED",
                details={"table": table, "id": doc_id},
            )

    def ping(self) -> None:
        self.client.table("brands").select("id").limit(1).execute()
