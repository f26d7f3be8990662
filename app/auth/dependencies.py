# =============================================================================
# app/auth/dependencies.py - FastAPI Auth Dependencies
# =============================================================================
# Provides dependency injection for authentication and authorization.
#
#   Unauthenticated --(valid bearer token)--> Authenticated --(admin user)--> Authorized
#
# - no token            -> 401
# - invalid / expired   -> 401
# - not an admin        -> 403 (admin-gated routes only)
#
# Usage:
#   from app.auth import get_current_user, require_admin, AuthUser
#
#   @router.delete("/{id}")
#   async def delete(id: str, user: AuthUser = Depends(require_admin)):
#       ...
# =============================================================================

import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError, ExpiredSignatureError
from pydantic import ValidationError

from app.config import settings
from app.auth.models import ADMIN_ROLE, AuthUser, TokenPayload
from app.dependencies import StoreDep
from app.exceptions import AdminRequiredError, AuthenticationError

logger = logging.getLogger(__name__)

# HTTP Bearer token extractor; missing tokens are reported as 401 below
security = HTTPBearer(auto_error=False)


def decode_token(token: str) -> AuthUser:
    """
    Verify a bearer token and extract the user it was issued to.

    Raises:
        AuthenticationError: If the token is invalid, expired or has no subject
    """
    try:
        payload = jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[settings.JWT_ALGORITHM],
        )
        claims = TokenPayload.model_validate(payload)

    except ExpiredSignatureError:
        logger.warning("JWT token has expired")
        raise AuthenticationError("Invalid or expired token")

    except (JWTError, ValidationError) as e:
        logger.warning(f"JWT validation failed: {e}")
        raise AuthenticationError("Invalid or expired token")

    if not claims.subject:
        logger.warning("JWT token missing subject claim")
        raise AuthenticationError("Invalid token: missing user ID")

    return AuthUser(id=str(claims.subject), role=claims.role, email=claims.email)


async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)
) -> AuthUser:
    """
    Extract and validate the user from the Authorization header.

    Raises:
        AuthenticationError: 401 if the token is missing, invalid or expired
    """
    if credentials is None:
        raise AuthenticationError("No token provided")

    user = decode_token(credentials.credentials)
    logger.debug(f"Authenticated user: {user.id}")
    return user


async def require_admin(
    store: StoreDep,
    user: AuthUser = Depends(get_current_user),
) -> AuthUser:
    """
    Require the authenticated user to be an admin.

    The stored user record is authoritative; the role claim in the token
    is not trusted for this check.

    Raises:
        AdminRequiredError: 403 if the user is unknown or not an admin
    """
    record = store.find_by_id("users", user.id)
    if not record or record.get("role") != ADMIN_ROLE:
        logger.warning(f"Admin access denied for user {user.id}")
        raise AdminRequiredError()
    return user
