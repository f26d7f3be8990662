# =============================================================================
# core/services/car_service.py - Car Business Logic
# =============================================================================
# Handles car CRUD operations, image attachment and the brand
# back-reference (brands.cars), which is maintained by hand alongside the
# primary car -> brand reference.
# =============================================================================

import logging
import math
import time
from typing import Any

from app.exceptions import CarNotFoundError, InvalidFieldError, MissingFieldError
from core.models.catalog import CAR_REQUIRED_FIELDS
from core.services.brand_service import require_slug
from core.services.media import rewrite_car_images
from core.services.storage_service import BlobStore, ImageUpload, validate_images
from lib.document_store import DocumentStore, DocumentStoreError
from lib.utils import DEFAULT_CDN_HOST, is_uuid

logger = logging.getLogger(__name__)

CARS = "cars"
BRANDS = "brands"


def _is_blank(value: Any) -> bool:
    return value is None or (isinstance(value, str) and not value.strip())


def _parse_price(value: Any) -> float:
    try:
        price = float(value)
    except (TypeError, ValueError):
        raise InvalidFieldError("price", "must be a number")
    if not math.isfinite(price):
        raise InvalidFieldError("price", "must be a number")
    if price < 0:
        raise InvalidFieldError("price", "must not be negative")
    return price


def _parse_seater(value: Any) -> int:
    try:
        seater = int(value)
    except (TypeError, ValueError):
        raise InvalidFieldError("seater", "must be a whole number")
    if seater < 1:
        raise InvalidFieldError("seater", "must be at least 1")
    return seater


class CarService:
    """
    Service for car management operations.

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

    def create_car(
        self,
        fields: dict[str, Any],
        images: list[ImageUpload] | None = None,
    ) -> dict[str, Any]:
        """
        Create a car, upload its pictures and link it to its brand.

        Nothing is uploaded or written until every field has been validated.

        Args:
            fields: Form values keyed by their wire names (fuelType, ...)
            images: Uploaded pictures, stored in order

        Returns:
            Created car dict

        Raises:
            MissingFieldError: Naming the first missing required field
            InvalidFieldError: If price, seater or name can't be used
        """
        images = images or []

        for wire_name, _ in CAR_REQUIRED_FIELDS:
            if _is_blank(fields.get(wire_name)):
                raise MissingFieldError(wire_name)

        doc = {column: fields[wire_name] for wire_name, column in CAR_REQUIRED_FIELDS}
        doc["price"] = _parse_price(doc["price"])
        doc["seater"] = _parse_seater(doc["seater"])
        doc["slug"] = require_slug(doc["name"])

        validate_images(images)

        # Position keeps same-named files from one request apart
        stamp = int(time.time() * 1000)
        pictures = []
        for position, image in enumerate(images):
            filename = f"{stamp}-{position}-{image.filename}"
            pictures.append(self.blob_store.save(CARS, filename, image))

        doc["product_pictures"] = pictures

        car = self.store.insert(CARS, doc)
        logger.info(f"Created car: {car['id']} ({doc['slug']}) with {len(pictures)} pictures")

        self._link_to_brand(str(car["brand"]), str(car["id"]))
        return car

    def _link_to_brand(self, brand_id: str, car_id: str) -> bool:
        """
        Append the car to its brand's car list.

        Best effort: an unknown brand or a store failure leaves the car in
        place without the back-reference.
        """
        try:
            brand = self.store.find_by_id(BRANDS, brand_id)
            if not brand:
                logger.warning(f"Car {car_id} references unknown brand {brand_id}; not linked")
                return False

            cars = list(brand.get("cars") or [])
            cars.append(car_id)
            self.store.update(BRANDS, brand_id, {"cars": cars})
            return True

        except DocumentStoreError as e:
            logger.warning(f"Failed to link car {car_id} to brand {brand_id}: {e}")
            return False

    def list_cars(self) -> list[dict[str, Any]]:
        """All cars with their brand populated and image URLs rewritten."""
        cars = self.store.populate(self.store.find(CARS), "brand", BRANDS)
        return [rewrite_car_images(car, self.cdn_host) for car in cars]

    def get_car_by_slug(self, slug: str) -> dict[str, Any]:
        """
        Get one car by slug, brand populated.

        Raises:
            CarNotFoundError: If no car has this slug
        """
        car = self.store.find_one(CARS, {"slug": slug})
        if not car:
            raise CarNotFoundError(slug)

        [car] = self.store.populate([car], "brand", BRANDS)
        return rewrite_car_images(car, self.cdn_host)

    def update_car(self, car_id: str, changes: dict[str, Any]) -> dict[str, Any]:
        """
        Apply a partial update to a car.

        Args:
            car_id: Car id
            changes: Document columns to overwrite (only provided fields)

        Returns:
            Updated car dict

        Raises:
            MissingFieldError: If a required field is set to blank or null
            InvalidFieldError: If price, seater or name can't be used
            CarNotFoundError: If the car doesn't exist
        """
        changes = dict(changes)
        for wire_name, column in CAR_REQUIRED_FIELDS:
            if column in changes and _is_blank(changes[column]):
                raise MissingFieldError(wire_name)

        if "price" in changes:
            changes["price"] = _parse_price(changes["price"])
        if "seater" in changes:
            changes["seater"] = _parse_seater(changes["seater"])
        if "name" in changes:
            changes["slug"] = require_slug(changes["name"])

        if changes:
            car = self.store.update(CARS, car_id, changes)
        else:
            car = self.store.find_by_id(CARS, car_id)

        if not car:
            raise CarNotFoundError(car_id)

        logger.info(f"Updated car: {car_id} ({', '.join(sorted(changes)) or 'no changes'})")
        return car

    def delete_car(self, car_id: str) -> dict[str, Any]:
        """
        Delete a car.

        Its pictures and the brand back-reference are left as they are.

        Raises:
            CarNotFoundError: If the car doesn't exist
        """
        if not self.store.find_by_id(CARS, car_id):
            raise CarNotFoundError(car_id)

        removed = self.store.delete(CARS, car_id)
        logger.info(f"Deleted car: {car_id}")
        return removed

    def list_related(self, car_id: str, brand_id: str) -> list[dict[str, Any]]:
        """
        Cars of the same brand, excluding the given car.

        Raises:
            InvalidFieldError: If either id is malformed
        """
        if not is_uuid(car_id):
            raise InvalidFieldError("cid", "not a valid id")
        if not is_uuid(brand_id):
            raise InvalidFieldError("bid", "not a valid id")

        cars = self.store.find(CARS, {"brand": brand_id}, exclude={"id": car_id})
        cars = self.store.populate(cars, "brand", BRANDS)
        return [rewrite_car_images(car, self.cdn_host) for car in cars]
