# =============================================================================
# app/auth/__init__.py - Authentication Module
# =============================================================================
# Provides JWT-based authentication and admin authorization.
#
# Usage:
#   from app.auth import get_current_user, require_admin, AuthUser
#
#   @router.post("/")
#   async def create(user: AuthUser = Depends(require_admin)):
#       return {"user_id": user.id}
# =============================================================================

from app.auth.dependencies import decode_token, get_current_user, require_admin
from app.auth.models import ADMIN_ROLE, AuthUser

__all__ = [
    "decode_token",
    "get_current_user",
    "require_admin",
    "ADMIN_ROLE",
    "AuthUser",
]
