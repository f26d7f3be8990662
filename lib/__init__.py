# =============================================================================
# lib/ - Standalone Utility Modules
# =============================================================================
# This package contains reusable utilities:
# - document_store.py: Storage-agnostic document store interface
# - supabase_client.py: Supabase implementation of the document store
# - utils.py: Shared utilities (UUIDs, slugs, image URL rewriting)
#
# These modules are self-contained and can be tested in isolation.
# =============================================================================

from lib.document_store import Document, DocumentStore, DocumentStoreError
from lib.supabase_client import SupabaseClient, SupabaseClientError, SupabaseDocumentStore
from lib.utils import (
    extract_blob_id,
    is_uuid,
    make_slug,
    normalize_uuid,
    rewrite_image_url,
    to_public_url,
)

__all__ = [
    # Document store
    "Document",
    "DocumentStore",
    "DocumentStoreError",
    # Supabase
    "SupabaseClient",
    "SupabaseClientError",
    "SupabaseDocumentStore",
    # Utils
    "extract_blob_id",
    "is_uuid",
    "make_slug",
    "normalize_uuid",
    "rewrite_image_url",
    "to_public_url",
]
