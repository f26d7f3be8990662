# =============================================================================
# core/ - Business Logic Package
# =============================================================================
# This package contains the marketplace business logic:
# - models/: Pydantic schemas for the API contract (brands, cars, orders)
# - services/: Brand, car and payment services plus image blob storage
#
# Services take a DocumentStore and a BlobStore and know nothing about
# HTTP, which keeps them testable with in-memory fakes.
# =============================================================================
