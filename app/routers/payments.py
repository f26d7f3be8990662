# =============================================================================
# app/routers/payments.py - Braintree Endpoints
# =============================================================================
# Mounted under /api/car/braintree.
# =============================================================================

from fastapi import APIRouter, Depends

from app.auth import AuthUser, get_current_user
from app.dependencies import PaymentServiceDep
from core.models.order import PaymentRequest

router = APIRouter()


@router.get("/token")
async def client_token(service: PaymentServiceDep):
    """Get a Braintree client token for the drop-in payment UI."""
    return {
        "success": True,
        "clientToken": service.get_client_token(),
    }


@router.post("/payment")
async def pay(
    payload: PaymentRequest,
    service: PaymentServiceDep,
    user: AuthUser = Depends(get_current_user),
):
    """
    Charge the cart total to the given payment nonce.

    The order is recorded against the authenticated user.
    """
    order = service.pay(payload.nonce, payload.cart, buyer_id=user.id)

    return {
        "ok": True,
        "orderId": order["id"],
    }
