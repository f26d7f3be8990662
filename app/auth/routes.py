# =============================================================================
# app/auth/routes.py - Authentication Routes
# =============================================================================
# Tokens are issued elsewhere; this router only lets clients check the
# token they hold.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth.dependencies import get_current_user
from app.auth.models import AuthUser

router = APIRouter()


@router.get("/verify")
async def verify_token(
    user: AuthUser = Depends(get_current_user)
) -> dict:
    """
    Verify that the current token is valid.

    Returns:
        dict: Confirmation with user_id and role claim

    Raises:
        401: If token is missing, invalid or expired
    """
    return {
        "valid": True,
        "user_id": user.id,
        "role": user.role,
        "email": user.email,
    }
