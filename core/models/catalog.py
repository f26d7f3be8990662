# =============================================================================
# core/models/catalog.py - Brand & Car Schemas
# =============================================================================
# These models define the API contract for the catalog:
# - BrandResponse / CarResponse: documents as returned to clients
# - BrandUpdate / CarUpdate: JSON bodies for PUT
# - CAR_REQUIRED_FIELDS: fields that must be present to create a car
#
# Documents are stored snake_case; clients see camelCase (fuelType,
# brandPictures, ...), produced by the alias generator on ApiModel.
# =============================================================================

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class ApiModel(BaseModel):
    """Base for models exchanged with clients in camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
        coerce_numbers_to_str=True,
    )

    def to_api(self) -> dict:
        """Serialize with client-facing (camelCase) keys."""
        return self.model_dump(by_alias=True, mode="json")


# Create-time required fields, in the order they are checked.
# (wire name, document column)
CAR_REQUIRED_FIELDS: tuple[tuple[str, str], ...] = (
    ("name", "name"),
    ("description", "description"),
    ("brand", "brand"),
    ("price", "price"),
    ("fuelType", "fuel_type"),
    ("transmission", "transmission"),
    ("engineSize", "engine_size"),
    ("mileage", "mileage"),
    ("safetyRating", "safety_rating"),
    ("warranty", "warranty"),
    ("seater", "seater"),
    ("size", "size"),
    ("fuelTank", "fuel_tank"),
)


# =============================================================================
# Responses
# =============================================================================

class BrandSummary(ApiModel):
    """A brand as nested inside a car (its own car list left as ids)."""

    id: str
    name: str
    slug: str
    brand_pictures: str | None = None
    cars: list[str] = Field(default_factory=list)
    created_at: datetime | None = None


class CarResponse(ApiModel):
    """
    A car as returned to clients.

    `brand` is the brand id, or the populated brand when the endpoint
    resolves references.
    """

    id: str
    name: str
    slug: str
    description: str | None = None
    brand: BrandSummary | str | None = None
    price: float
    fuel_type: str | None = None
    transmission: str | None = None
    engine_size: str | None = None
    mileage: str | None = None
    safety_rating: str | None = None
    warranty: str | None = None
    seater: int | None = None
    size: str | None = None
    fuel_tank: str | None = None
    product_pictures: list[str] = Field(default_factory=list)
    created_at: datetime | None = None


class BrandResponse(ApiModel):
    """
    A brand as returned to clients.

    `cars` holds car ids, or the populated cars on list / slug endpoints.
    """

    id: str
    name: str
    slug: str
    brand_pictures: str | None = None
    cars: list[CarResponse | str] = Field(default_factory=list)
    created_at: datetime | None = None


# =============================================================================
# Requests
# =============================================================================

class BrandUpdate(ApiModel):
    """Body for PUT /api/brand/{id}."""

    name: str | None = Field(default=None, examples=["Audi"])


class CarUpdate(ApiModel):
    """
    Body for PUT /api/car/{id}.

    Every field is optional; only the provided ones are written.
    """

    name: str | None = None
    description: str | None = None
    brand: str | None = None
    price: float | None = Field(default=None, ge=0, allow_inf_nan=False)
    fuel_type: str | None = None
    transmission: str | None = None
    engine_size: str | None = None
    mileage: str | None = None
    safety_rating: str | None = None
    warranty: str | None = None
    seater: int | None = Field(default=None, ge=1)
    size: str | None = None
    fuel_tank: str | None = None
