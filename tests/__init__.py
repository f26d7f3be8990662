# =============================================================================
# tests/ - Test Suite
# =============================================================================
# This package contains all tests for the marketplace API:
# - test_utils.py: Slug and image URL helpers
# - test_document_store.py: Reference population
# - test_supabase_store.py: Supabase adapter query building
# - test_models.py: Pydantic model validation and camelCase output
# - test_storage.py: Upload validation and local blob storage
# - test_brands_api.py / test_cars_api.py: Catalog endpoints
# - test_auth.py: Bearer token and admin checks
# - test_payments.py: Braintree token and checkout
# =============================================================================
