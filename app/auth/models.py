# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data.
# =============================================================================

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# users.role values
ADMIN_ROLE = 1
STANDARD_ROLE = 0


class AuthUser(BaseModel):
    """
    Authenticated user extracted from a bearer token.

    This is the minimal user info available from the token itself,
    without querying the database. `role` is the claim as issued; admin
    checks use the stored user record instead.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    role: Optional[int] = None
    email: Optional[str] = None


class TokenPayload(BaseModel):
    """Claims read from a bearer token. `_id` is accepted as a legacy subject."""

    sub: Optional[str] = None
    legacy_id: Optional[str] = Field(default=None, alias="_id")
    role: Optional[int] = None
    email: Optional[str] = None
    exp: Optional[int] = None

    @property
    def subject(self) -> Optional[str]:
        return self.sub or self.legacy_id
