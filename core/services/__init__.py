# =============================================================================
# core/services/__init__.py - Service Layer Exports
# =============================================================================

from .brand_service import BrandService
from .car_service import CarService
from .payment_service import BraintreePaymentGateway, PaymentGateway, PaymentService, SaleResult
from .storage_service import BlobStore, DriveBlobStore, ImageUpload, LocalBlobStore, build_blob_store

__all__ = [
    "BrandService",
    "CarService",
    "PaymentService",
    "PaymentGateway",
    "BraintreePaymentGateway",
    "SaleResult",
    "BlobStore",
    "LocalBlobStore",
    "DriveBlobStore",
    "ImageUpload",
    "build_blob_store",
]
