# =============================================================================
# core/services/payment_service.py - Braintree Payments
# =============================================================================
# Issues client tokens and charges carts through Braintree.
#
# Every charge is bracketed by an order record:
#   1. insert order as "pending"
#   2. submit the sale
#   3. mark the order "settled" or "failed" with the gateway result
# A charge that succeeds but can't be marked settled stays "pending" with
# the transaction id in the logs, so it can be reconciled.
# =============================================================================

import logging
from abc import ABC, abstractmethod
from dataclasses import asdict, dataclass
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

import braintree

from app.config import settings
from app.exceptions import MissingFieldError, PaymentGatewayError
from core.models.order import CartItem, OrderStatus
from lib.document_store import DocumentStore, DocumentStoreError

logger = logging.getLogger(__name__)

ORDERS = "orders"
CENTS = Decimal("0.01")


@dataclass(frozen=True)
class SaleResult:
    """The parts of a gateway sale response kept on the order."""
    success: bool
    amount: str
    transaction_id: str | None = None
    status: str | None = None
    message: str | None = None


def cart_total(cart: list[CartItem]) -> Decimal:
    """Sum item prices, rounded to cents."""
    total = sum((Decimal(str(item.price)) for item in cart), Decimal("0"))
    return total.quantize(CENTS, rounding=ROUND_HALF_UP)


class PaymentGateway(ABC):
    """Opaque payment processor."""

    @abstractmethod
    def generate_client_token(self) -> str:
        """Return a client token for the drop-in UI."""

    @abstractmethod
    def sale(self, amount: Decimal, nonce: str) -> SaleResult:
        """Submit a sale for settlement."""


class BraintreePaymentGateway(PaymentGateway):
    """PaymentGateway backed by the Braintree SDK."""

    def __init__(
        self,
        environment: str,
        merchant_id: str,
        public_key: str,
        private_key: str,
    ):
        env = braintree.Environment.Production if environment == "production" else braintree.Environment.Sandbox
        self.gateway = braintree.BraintreeGateway(
            braintree.Configuration(
                environment=env,
                merchant_id=merchant_id,
                public_key=public_key,
                private_key=private_key,
            )
        )

    @classmethod
    def from_settings(cls) -> "BraintreePaymentGateway":
        return cls(
            environment=settings.BRAINTREE_ENVIRONMENT,
            merchant_id=settings.BRAINTREE_MERCHANT_ID,
            public_key=settings.BRAINTREE_PUBLIC_KEY,
            private_key=settings.BRAINTREE_PRIVATE_KEY,
        )

    def generate_client_token(self) -> str:
        try:
            return self.gateway.client_token.generate()
        except Exception as e:
            logger.error(f"Braintree client token request failed: {e}")
            raise PaymentGatewayError("Failed to generate client token", error=str(e))

    def sale(self, amount: Decimal, nonce: str) -> SaleResult:
        try:
            result = self.gateway.transaction.sale({
                "amount": str(amount),
                "payment_method_nonce": nonce,
                "options": {"submit_for_settlement": True},
            })
        except Exception as e:
            logger.error(f"Braintree sale request failed: {e}")
            raise PaymentGatewayError("Payment gateway unavailable", error=str(e))

        transaction = getattr(result, "transaction", None)
        return SaleResult(
            success=bool(result.is_success),
            amount=str(amount),
            transaction_id=getattr(transaction, "id", None),
            status=getattr(transaction, "status", None),
            message=None if result.is_success else getattr(result, "message", None),
        )


class PaymentService:
    """Charges carts and records orders."""

    def __init__(self, store: DocumentStore, gateway: PaymentGateway):
        self.store = store
        self.gateway = gateway

    def get_client_token(self) -> str:
        return self.gateway.generate_client_token()

    def pay(self, nonce: str | None, cart: list[CartItem], buyer_id: str) -> dict[str, Any]:
        """
        Charge the cart total and record the order.

        Args:
            nonce: Payment method nonce from the client
            cart: Items being bought
            buyer_id: Authenticated user id

        Returns:
            The settled order dict

        Raises:
            MissingFieldError: If nonce or cart is missing
            PaymentGatewayError: If the sale is declined or the gateway fails
        """
        if not nonce:
            raise MissingFieldError("nonce")
        if not cart:
            raise MissingFieldError("cart", "cart is empty")

        amount = cart_total(cart)

        order = self.store.insert(ORDERS, {
            "products": [item.to_api() for item in cart],
            "buyer": buyer_id,
            "amount": str(amount),
            "status": OrderStatus.PENDING.value,
            "payment": None,
        })
        logger.info(f"Order {order['id']} pending: {amount} for buyer {buyer_id}")

        try:
            result = self.gateway.sale(amount, nonce)
        except PaymentGatewayError as e:
            self._finish(order["id"], OrderStatus.FAILED, {"success": False, "message": e.error or e.message})
            raise

        if not result.success:
            self._finish(order["id"], OrderStatus.FAILED, asdict(result))
            logger.warning(f"Order {order['id']} declined: {result.message}")
            raise PaymentGatewayError(result.message or "Payment declined", error=result.status)

        settled = self._finish(order["id"], OrderStatus.SETTLED, asdict(result))
        if settled is None:
            logger.error(
                f"Order {order['id']} charged as transaction {result.transaction_id} "
                f"but could not be marked settled"
            )
            settled = {**order, "status": OrderStatus.SETTLED.value, "payment": asdict(result)}

        logger.info(f"Order {order['id']} settled: transaction {result.transaction_id}")
        return settled

    def _finish(
        self,
        order_id: str,
        status: OrderStatus,
        payment: dict[str, Any],
    ) -> dict[str, Any] | None:
        try:
            return self.store.update(ORDERS, order_id, {"status": status.value, "payment": payment})
        except DocumentStoreError as e:
            logger.error(f"Failed to mark order {order_id} {status.value}: {e}")
            return None
