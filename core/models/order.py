# =============================================================================
# core/models/order.py - Payment & Order Schemas
# =============================================================================
# An Order is written only as a side effect of a payment attempt:
#   pending  -> inserted before the gateway is called
#   settled  -> gateway accepted the sale
#   failed   -> gateway declined or errored
# =============================================================================

from enum import Enum

from pydantic import ConfigDict, Field

from .catalog import ApiModel


class OrderStatus(str, Enum):
    PENDING = "pending"
    SETTLED = "settled"
    FAILED = "failed"


class CartItem(ApiModel):
    """
    One line of a cart.

    Clients send whole car documents; only `price` is required and any
    other keys are kept in the order snapshot.
    """

    model_config = ConfigDict(extra="allow")

    id: str | None = None
    name: str | None = None
    price: float = Field(..., ge=0)


class PaymentRequest(ApiModel):
    """Body for POST /api/car/braintree/payment."""

    nonce: str | None = Field(default=None, description="Payment method nonce from the Braintree client")
    cart: list[CartItem] = Field(default_factory=list)
