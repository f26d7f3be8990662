# =============================================================================
# tests/test_auth.py - Authentication & Authorization Tests
# =============================================================================
# Tests for bearer token verification and the admin gate on catalog writes.
#
# Run with: pytest tests/test_auth.py -v
# =============================================================================

from datetime import datetime, timedelta, timezone

import pytest
from jose import jwt

from app.auth import ADMIN_ROLE, decode_token
from app.exceptions import AuthenticationError
from tests.conftest import JWT_SECRET, PNG_BYTES, make_token

# Admin-gated endpoints and a request that would otherwise succeed
WRITE_REQUESTS = [
    ("post", "/api/brand", {"data": {"name": "BMW"}, "files": {"brandPictures": ("bmw.png", PNG_BYTES, "image/png")}}),
    ("put", "/api/brand/{brand_id}", {"json": {"name": "Audi Sport"}}),
    ("delete", "/api/brand/{brand_id}", {}),
]


# =============================================================================
# Token Decoding
# =============================================================================

class TestDecodeToken:
    """Tests for decode_token."""

    def test_valid_token(self):
        user = decode_token(make_token("user-1", role=ADMIN_ROLE))

        assert user.id == "user-1"
        assert user.role == ADMIN_ROLE

    def test_legacy_id_claim(self):
        """Tokens that carry the user id as `_id` are accepted."""
        token = jwt.encode(
            {"_id": "user-1", "exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            JWT_SECRET,
            algorithm="HS256",
        )

        assert decode_token(token).id == "user-1"

    def test_expired_token(self):
        with pytest.raises(AuthenticationError) as exc_info:
            decode_token(make_token("user-1", expires_in=-60))

        assert exc_info.value.status_code == 401
        assert exc_info.value.message == "Invalid or expired token"

    def test_wrong_secret(self):
        with pytest.raises(AuthenticationError):
            decode_token(make_token("user-1", secret="another-secret"))

    def test_garbage_token(self):
        with pytest.raises(AuthenticationError):
            decode_token("not.a.jwt")

    def test_missing_subject(self):
        token = jwt.encode(
            {"exp": datetime.now(timezone.utc) + timedelta(hours=1)},
            JWT_SECRET,
            algorithm="HS256",
        )

        with pytest.raises(AuthenticationError) as exc_info:
            decode_token(token)

        assert exc_info.value.message == "Invalid token: missing user ID"


# =============================================================================
# Verify Endpoint
# =============================================================================

class TestVerifyEndpoint:
    """Tests for GET /api/auth/verify."""

    def test_verify_valid_token(self, client, standard_user, user_headers):
        response = client.get("/api/auth/verify", headers=user_headers)

        assert response.status_code == 200
        assert response.json()["valid"] is True
        assert response.json()["user_id"] == standard_user["id"]

    def test_verify_without_token(self, client):
        response = client.get("/api/auth/verify")

        assert response.status_code == 401
        assert response.json() == {"success": False, "message": "No token provided"}
        assert response.headers["WWW-Authenticate"] == "Bearer"


# =============================================================================
# Admin Gate
# =============================================================================

class TestAdminGate:
    """Catalog writes require an admin; failures change nothing."""

    @pytest.mark.parametrize("method, path, kwargs", WRITE_REQUESTS)
    def test_no_token(self, client, store, audi, method, path, kwargs):
        response = getattr(client, method)(path.format(brand_id=audi["id"]), **kwargs)

        assert response.status_code == 401
        assert store.find("brands") == [audi]

    @pytest.mark.parametrize("method, path, kwargs", WRITE_REQUESTS)
    def test_invalid_token(self, client, store, audi, method, path, kwargs):
        headers = {"Authorization": "Bearer not-a-token"}

        response = getattr(client, method)(path.format(brand_id=audi["id"]), headers=headers, **kwargs)

        assert response.status_code == 401
        assert response.json()["message"] == "Invalid or expired token"
        assert store.find("brands") == [audi]

    @pytest.mark.parametrize("method, path, kwargs", WRITE_REQUESTS)
    def test_non_admin(self, client, store, audi, user_headers, method, path, kwargs):
        response = getattr(client, method)(path.format(brand_id=audi["id"]), headers=user_headers, **kwargs)

        assert response.status_code == 403
        assert response.json() == {"success": False, "message": "Unauthorized access, only admin can access"}
        assert store.find("brands") == [audi]

    def test_expired_admin_token(self, client, store, admin_user):
        headers = {"Authorization": f"Bearer {make_token(admin_user['id'], ADMIN_ROLE, expires_in=-60)}"}

        response = client.post("/api/brand", data={"name": "BMW"}, headers=headers)

        assert response.status_code == 401
        assert store.find("brands") == []

    def test_role_claim_not_trusted(self, client, store, standard_user, blob_store):
        """A token claiming admin for a stored non-admin is refused."""
        headers = {"Authorization": f"Bearer {make_token(standard_user['id'], ADMIN_ROLE)}"}

        response = client.post(
            "/api/brand",
            data={"name": "BMW"},
            files={"brandPictures": ("bmw.png", PNG_BYTES, "image/png")},
            headers=headers,
        )

        assert response.status_code == 403
        assert store.find("brands") == []
        assert blob_store.saved == []

    def test_unknown_user(self, client, store):
        headers = {"Authorization": f"Bearer {make_token('00000000-0000-0000-0000-000000000000', ADMIN_ROLE)}"}

        response = client.delete("/api/car/00000000-0000-0000-0000-000000000001", headers=headers)

        assert response.status_code == 403

    def test_car_create_requires_admin(self, client, store, car_form, user_headers):
        response = client.post("/api/car", data=car_form, headers=user_headers)

        assert response.status_code == 403
        assert store.find("cars") == []

    def test_reads_are_public(self, client, audi):
        assert client.get("/api/brand").status_code == 200
        assert client.get("/api/brand/audi").status_code == 200
        assert client.get("/api/car").status_code == 200
