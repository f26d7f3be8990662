# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - catalog.py: Brand and Car request/response schemas
# - order.py: Cart, payment request and order status
#
# These models define the "contract" between API and clients.
# =============================================================================

from .catalog import (
    CAR_REQUIRED_FIELDS,
    ApiModel,
    BrandResponse,
    BrandSummary,
    BrandUpdate,
    CarResponse,
    CarUpdate,
)
from .order import (
    CartItem,
    OrderStatus,
    PaymentRequest,
)

__all__ = [
    # Catalog
    "CAR_REQUIRED_FIELDS",
    "ApiModel",
    "BrandResponse",
    "BrandSummary",
    "BrandUpdate",
    "CarResponse",
    "CarUpdate",
    # Orders
    "CartItem",
    "OrderStatus",
    "PaymentRequest",
]
