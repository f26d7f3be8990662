# =============================================================================
# app/dependencies.py - Shared Dependencies
# =============================================================================
# FastAPI dependency injection for shared resources.
# These are injected into route handlers using Depends().
#
# Tests swap any of these out through app.dependency_overrides.
# =============================================================================

from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Request

from app.config import settings
from core.services.brand_service import BrandService
from core.services.car_service import CarService
from core.services.payment_service import BraintreePaymentGateway, PaymentGateway, PaymentService
from core.services.storage_service import BlobStore
from lib.document_store import DocumentStore
from lib.supabase_client import SupabaseDocumentStore


@lru_cache
def get_document_store() -> DocumentStore:
    """Get the shared Supabase-backed document store."""
    return SupabaseDocumentStore()


def get_blob_store(request: Request) -> BlobStore:
    """Get the blob store created during application startup."""
    return request.app.state.blob_store


@lru_cache
def get_payment_gateway() -> PaymentGateway:
    """Get the shared Braintree gateway."""
    return BraintreePaymentGateway.from_settings()


StoreDep = Annotated[DocumentStore, Depends(get_document_store)]
BlobStoreDep = Annotated[BlobStore, Depends(get_blob_store)]
GatewayDep = Annotated[PaymentGateway, Depends(get_payment_gateway)]


def get_brand_service(store: StoreDep, blob_store: BlobStoreDep) -> BrandService:
    return BrandService(store, blob_store, cdn_host=settings.CDN_HOST)


def get_car_service(store: StoreDep, blob_store: BlobStoreDep) -> CarService:
    return CarService(store, blob_store, cdn_host=settings.CDN_HOST)


def get_payment_service(store: StoreDep, gateway: GatewayDep) -> PaymentService:
    return PaymentService(store, gateway)


# Type aliases for dependency injection
BrandServiceDep = Annotated[BrandService, Depends(get_brand_service)]
CarServiceDep = Annotated[CarService, Depends(get_car_service)]
PaymentServiceDep = Annotated[PaymentService, Depends(get_payment_service)]
