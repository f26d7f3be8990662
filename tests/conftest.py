# =============================================================================
# tests/conftest.py - Pytest Configuration
# =============================================================================
# This module provides pytest fixtures and configuration for all tests.
#
# Key features:
# - Sets up mock environment variables before any imports
# - In-memory document store, blob store and payment gateway
# - A TestClient wired to those fakes through dependency_overrides
# =============================================================================

import copy
import os
import tempfile
import uuid
from collections import defaultdict
from datetime import datetime, timedelta, timezone
from decimal import Decimal

# =============================================================================
# Set up test environment BEFORE any imports
# =============================================================================
# This must happen before importing app.config which loads settings immediately

os.environ.setdefault("SUPABASE_URL", "https://test-project.supabase.co")
os.environ.setdefault("SUPABASE_SERVICE_KEY", "test-service-key")
os.environ.setdefault("JWT_SECRET", "test-jwt-secret")
os.environ.setdefault("STORAGE_ROOT", tempfile.mkdtemp(prefix="marketplace-storage-"))
os.environ.setdefault("ENVIRONMENT", "development")
os.environ.setdefault("DEBUG", "true")

import pytest
from fastapi.testclient import TestClient
from jose import jwt

from app.auth.models import ADMIN_ROLE, STANDARD_ROLE
from app.exceptions import PaymentGatewayError
from core.services.payment_service import PaymentGateway, SaleResult
from core.services.storage_service import BlobStore, ImageUpload
from lib.document_store import DocumentStore

JWT_SECRET = os.environ["JWT_SECRET"]

PNG_BYTES = b"\x89PNG\r\n\x1a\n" + b"\x00" * 32


# =============================================================================
# Fakes
# =============================================================================

class InMemoryDocumentStore(DocumentStore):
    """DocumentStore kept in dicts; ids are uuid4 strings like Supabase's."""

    def __init__(self):
        self.tables: dict[str, dict[str, dict]] = defaultdict(dict)

    @staticmethod
    def _matches(doc, filters):
        return all(doc.get(key) == value for key, value in filters.items())

    def find(self, table, filters=None, exclude=None):
        return [
            copy.deepcopy(doc)
            for doc in self.tables[table].values()
            if self._matches(doc, filters or {})
            and not any(doc.get(k) == v for k, v in (exclude or {}).items())
        ]

    def find_one(self, table, filters):
        found = self.find(table, filters)
        return found[0] if found else None

    def find_by_id(self, table, doc_id):
        doc = self.tables[table].get(str(doc_id))
        return copy.deepcopy(doc) if doc else None

    def find_by_ids(self, table, doc_ids):
        return [copy.deepcopy(self.tables[table][i]) for i in doc_ids if i in self.tables[table]]

    def insert(self, table, data):
        doc = copy.deepcopy(data)
        doc.setdefault("id", str(uuid.uuid4()))
        doc.setdefault("created_at", datetime.now(timezone.utc).isoformat())
        self.tables[table][doc["id"]] = doc
        return copy.deepcopy(doc)

    def update(self, table, doc_id, data):
        doc = self.tables[table].get(str(doc_id))
        if doc is None:
            return None
        doc.update(copy.deepcopy(data))
        return copy.deepcopy(doc)

    def delete(self, table, doc_id):
        return self.tables[table].pop(str(doc_id), None)

    def ping(self):
        return None


class RecordingBlobStore(BlobStore):
    """Keeps uploads in a list and hands back Drive-style share links."""

    def __init__(self):
        self.saved: list[tuple[str, str, ImageUpload]] = []

    def save(self, resource, filename, image):
        self.saved.append((resource, filename, image))
        return f"https://drive.google.com/file/d/{resource}{len(self.saved)}/view"

    def check(self):
        return None


class FakeGateway(PaymentGateway):
    """PaymentGateway that records sales and answers with a preset result."""

    def __init__(self):
        self.sales: list[tuple[Decimal, str]] = []
        self.decline_message: str | None = None
        self.unavailable = False

    def generate_client_token(self):
        if self.unavailable:
            raise PaymentGatewayError("Failed to generate client token", error="connection refused")
        return "fake-client-token"

    def sale(self, amount, nonce):
        self.sales.append((amount, nonce))
        if self.unavailable:
            raise PaymentGatewayError("Payment gateway unavailable", error="connection refused")
        if self.decline_message:
            return SaleResult(
                success=False,
                amount=str(amount),
                status="processor_declined",
                message=self.decline_message,
            )
        return SaleResult(
            success=True,
            amount=str(amount),
            transaction_id=f"txn-{len(self.sales)}",
            status="submitted_for_settlement",
        )


# =============================================================================
# Helpers
# =============================================================================

def make_token(user_id: str, role: int | None = None, expires_in: int = 3600, secret: str = JWT_SECRET) -> str:
    """Mint a bearer token the way the user service does."""
    claims = {
        "sub": user_id,
        "exp": datetime.now(timezone.utc) + timedelta(seconds=expires_in),
    }
    if role is not None:
        claims["role"] = role
    return jwt.encode(claims, secret, algorithm="HS256")


def png_upload(filename: str = "logo.png") -> ImageUpload:
    return ImageUpload(filename=filename, content=PNG_BYTES, content_type="image/png")


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def blob_store():
    return RecordingBlobStore()


@pytest.fixture
def gateway():
    return FakeGateway()


@pytest.fixture
def admin_user(store):
    return store.insert("users", {"name": "Admin", "role": ADMIN_ROLE})


@pytest.fixture
def standard_user(store):
    return store.insert("users", {"name": "Buyer", "role": STANDARD_ROLE})


@pytest.fixture
def admin_headers(admin_user):
    return {"Authorization": f"Bearer {make_token(admin_user['id'], ADMIN_ROLE)}"}


@pytest.fixture
def user_headers(standard_user):
    return {"Authorization": f"Bearer {make_token(standard_user['id'], STANDARD_ROLE)}"}


@pytest.fixture
def client(store, blob_store, gateway):
    """TestClient with the store, blob store and gateway replaced by fakes."""
    from app.dependencies import get_blob_store, get_document_store, get_payment_gateway
    from app.main import app

    app.dependency_overrides[get_document_store] = lambda: store
    app.dependency_overrides[get_blob_store] = lambda: blob_store
    app.dependency_overrides[get_payment_gateway] = lambda: gateway

    yield TestClient(app)

    app.dependency_overrides.clear()


@pytest.fixture
def audi(store):
    """A stored brand with no cars."""
    return store.insert("brands", {
        "name": "Audi",
        "slug": "audi",
        "brand_pictures": "https://drive.google.com/file/d/audiLogo/view",
        "cars": [],
    })


@pytest.fixture
def car_form(audi):
    """A complete multipart form for creating a car of the `audi` brand."""
    return {
        "name": "Audi A4",
        "description": "Compact executive saloon",
        "brand": audi["id"],
        "price": "41000",
        "fuelType": "Petrol",
        "transmission": "Automatic",
        "engineSize": "2.0L",
        "mileage": "15 km/l",
        "safetyRating": "5",
        "warranty": "3 years",
        "seater": "5",
        "size": "Medium",
        "fuelTank": "54L",
    }
