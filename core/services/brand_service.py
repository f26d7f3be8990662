# =============================================================================
# core/services/brand_service.py - Brand Business Logic
# =============================================================================
# Handles brand CRUD operations and business logic.
# Separates HTTP concerns from database/business logic.
# =============================================================================

import logging
from typing import Any

from app.exceptions import (
    BrandNotFoundError,
    DuplicateBrandError,
    InvalidFieldError,
    MissingFieldError,
)
from core.services.media import rewrite_brand_images
from core.services.storage_service import BlobStore, ImageUpload, validate_images
from lib.document_store import DocumentStore
from lib.utils import DEFAULT_CDN_HOST, make_slug

logger = logging.getLogger(__name__)

BRANDS = "brands"
CARS = "cars"


def require_slug(name: str) -> str:
    """Slug for a display name; names of punctuation alone have none."""
    slug = make_slug(name)
    if not slug:
        raise InvalidFieldError("name", "must contain letters or digits")
    return slug


class BrandService:
    """
    Service for brand management operations.

    Provides a clean interface between API routes and the document store.
    """

    def __init__(
        self,
        store: DocumentStore,
        blob_store: BlobStore,
        cdn_host: str = DEFAULT_CDN_HOST,
    ):
        self.store = store
        self.blob_store = blob_store
        self.cdn_host = cdn_host

    def create_brand(self, name: str | None, image: ImageUpload | None) -> dict[str, Any]:
        """
        Create a new brand with its picture.

        Args:
            name: Display name, must be unique
            image: The uploaded brand picture

        Returns:
            Created brand dict

        Raises:
            MissingFieldError: If name or image is missing
            InvalidFieldError: If name has nothing to build a slug from
            DuplicateBrandError: If a brand with this name exists
        """
        name = (name or "").strip()
        if not name:
            raise MissingFieldError("name", "Brand Name is Required")
        if image is None:
            raise MissingFieldError("brandPictures", "Brand Image is Required")

        validate_images([image])
        slug = require_slug(name)

        # Read-then-write: two concurrent creates with the same name can both pass
        if self.store.find_one(BRANDS, {"name": name}):
            logger.info(f"Rejected duplicate brand: {name}")
            raise DuplicateBrandError(name)

        reference = self.blob_store.save(BRANDS, f"{slug}{image.extension}", image)

        brand = self.store.insert(BRANDS, {
            "name": name,
            "slug": slug,
            "brand_pictures": reference,
            "cars": [],
        })
        logger.info(f"Created brand: {brand['id']} ({slug})")
        return brand

    def list_brands(self) -> list[dict[str, Any]]:
        """All brands with their cars populated and image URLs rewritten."""
        brands = self.store.populate(self.store.find(BRANDS), "cars", CARS)
        return [rewrite_brand_images(brand, self.cdn_host) for brand in brands]

    def get_brand_by_slug(self, slug: str) -> dict[str, Any]:
        """
        Get one brand by slug, cars populated.

        Raises:
            BrandNotFoundError: If no brand has this slug
        """
        brand = self.store.find_one(BRANDS, {"slug": slug})
        if not brand:
            raise BrandNotFoundError(slug)

        [brand] = self.store.populate([brand], "cars", CARS)
        return rewrite_brand_images(brand, self.cdn_host)

    def update_brand(self, brand_id: str, name: str | None) -> dict[str, Any]:
        """
        Rename a brand and re-derive its slug.

        Uniqueness is only enforced at creation.

        Raises:
            MissingFieldError: If name is blank
            InvalidFieldError: If name has nothing to build a slug from
            BrandNotFoundError: If the brand doesn't exist
        """
        name = (name or "").strip()
        if not name:
            raise MissingFieldError("name", "Brand Name is Required")

        brand = self.store.update(BRANDS, brand_id, {"name": name, "slug": require_slug(name)})
        if not brand:
            raise BrandNotFoundError(brand_id)

        logger.info(f"Updated brand: {brand_id}")
        return brand

    def delete_brand(self, brand_id: str) -> dict[str, Any] | None:
        """
        Delete a brand.

        Cars that reference it are left in place. Returns the removed
        brand, or None when nothing matched.
        """
        removed = self.store.delete(BRANDS, brand_id)
        if removed:
            logger.info(f"Deleted brand: {brand_id} ({len(removed.get('cars') or [])} cars keep the reference)")
        else:
            logger.info(f"Delete requested for unknown brand: {brand_id}")
        return removed
