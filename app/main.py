# =============================================================================
# app/main.py - FastAPI Application Entry Point
# =============================================================================
# This is the main entry point for the Wheeler Dealer marketplace API.
# Wires settings, logging, the blob store, error handlers, routers and the
# /storage static mount into one FastAPI app.
#
# Usage:
#   uvicorn app.main:app --reload
#   python -m app.main          (binds API_HOST:API_PORT from settings)
# =============================================================================

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from app.config import settings
from app.exceptions import (
    MarketplaceException,
    marketplace_exception_handler,
    validation_exception_handler,
)
from app.routers import health, brands, cars, payments
from app.auth import routes as auth_routes
from core.services.storage_service import LocalBlobStore, build_blob_store
from lib.document_store import DocumentStoreError

# Configure logging
logging.basicConfig(
    level=logging.DEBUG if settings.DEBUG else logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan handler.

    - Startup: build the blob store and create its directories
    - Shutdown: log only; clients are released with the process
    """
    logger.info(f"Starting marketplace API in {settings.ENVIRONMENT} mode")
    logger.info(f"CORS origins: {settings.cors_origins_list}")

    blob_store = build_blob_store()
    if isinstance(blob_store, LocalBlobStore):
        blob_store.ensure_directories()
    app.state.blob_store = blob_store
    logger.info(f"Blob storage backend: {settings.STORAGE_BACKEND}")

    yield

    logger.info("Shutting down marketplace API")


# Create FastAPI application
app = FastAPI(
    title="Wheeler Dealer API",
    description="""
## Vehicle Marketplace API

Brands, cars, image uploads and Braintree checkout.

- **Brands / Cars**: public reads, admin-only writes (`Authorization: Bearer <jwt>`)
- **Images**: uploaded as multipart files, served from `/storage` or a CDN
- **Checkout**: get a client token, then POST a nonce and the cart
""",
    version="1.0.0",
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
    openapi_tags=[
        {"name": "Brands", "description": "Car brands and their line-up"},
        {"name": "Cars", "description": "Car listings"},
        {"name": "Payments", "description": "Braintree client token and checkout"},
        {"name": "Auth", "description": "Bearer token verification"},
        {"name": "Health", "description": "API health and readiness checks"},
    ],
)


# =============================================================================
# Middleware
# =============================================================================

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["*"],
)


# =============================================================================
# Exception Handlers
# =============================================================================

app.add_exception_handler(MarketplaceException, marketplace_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)


@app.exception_handler(DocumentStoreError)
async def handle_store_error(request: Request, exc: DocumentStoreError):
    """Handle document store failures."""
    logger.error(f"Document store error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "Database error",
            "error": str(exc),
        }
    )


@app.exception_handler(Exception)
async def handle_general_exception(request: Request, exc: Exception):
    """Handle unexpected exceptions."""
    logger.exception(f"Unexpected error: {exc}")
    return JSONResponse(
        status_code=500,
        content={
            "success": False,
            "message": "An unexpected error occurred",
            "error": str(exc),
        }
    )


# =============================================================================
# Routers
# =============================================================================

app.include_router(
    auth_routes.router,
    prefix="/api/auth",
    tags=["Auth"]
)

app.include_router(
    health.router,
    prefix="/api",
    tags=["Health"]
)

app.include_router(
    brands.router,
    prefix="/api/brand",
    tags=["Brands"]
)

app.include_router(
    payments.router,
    prefix="/api/car/braintree",
    tags=["Payments"]
)

app.include_router(
    cars.router,
    prefix="/api/car",
    tags=["Cars"]
)


# =============================================================================
# Static Files
# =============================================================================
# Locally stored uploads: /storage/brands/<file>, /storage/cars/<file>

app.mount(
    "/storage",
    StaticFiles(directory=settings.STORAGE_ROOT, check_dir=False),
    name="storage",
)


# =============================================================================
# Root Endpoint
# =============================================================================

@app.get("/", tags=["Root"])
async def root():
    """
    Root endpoint - returns API info.
    """
    return {
        "name": "Wheeler Dealer API",
        "version": "1.0.0",
        "docs": "/docs",
        "health": "/api/health",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.main:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=not settings.is_production,
    )
