# =============================================================================
# app/routers/cars.py - Car Endpoints
# =============================================================================
# Reads are public; create / update / delete require an admin token.
# Braintree endpoints under /braintree live in payments.py.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Path, UploadFile

from app.auth import AuthUser, require_admin
from app.dependencies import CarServiceDep
from app.uploads import read_uploads
from core.models.catalog import CarResponse, CarUpdate

router = APIRouter()

OptionalForm = Annotated[str | None, Form()]


def _car_out(car: dict) -> dict:
    return CarResponse.model_validate(car).to_api()


@router.get("")
async def list_cars(service: CarServiceDep):
    """List all cars with their brand."""
    cars = service.list_cars()

    return {
        "success": True,
        "totalCar": len(cars),
        "message": "All cars",
        "cars": [_car_out(c) for c in cars],
    }


@router.get("/related/{cid}/{bid}")
async def related_cars(
    cid: Annotated[str, Path(description="Car to exclude")],
    bid: Annotated[str, Path(description="Brand id")],
    service: CarServiceDep,
):
    """Other cars from the same brand."""
    cars = service.list_related(cid, bid)

    return {
        "success": True,
        "message": "Related cars for this brand",
        "cars": [_car_out(c) for c in cars],
    }


@router.get("/{slug}")
async def get_car(
    slug: Annotated[str, Path(description="Car slug")],
    service: CarServiceDep,
):
    """Get one car, with its brand, by slug."""
    car = service.get_car_by_slug(slug)

    return {
        "success": True,
        "message": "Car by this slug",
        "car": _car_out(car),
    }


@router.post("", status_code=201)
async def create_car(
    service: CarServiceDep,
    name: OptionalForm = None,
    description: OptionalForm = None,
    brand: Annotated[str | None, Form(description="Brand id")] = None,
    price: OptionalForm = None,
    fuel_type: Annotated[str | None, Form(alias="fuelType")] = None,
    transmission: OptionalForm = None,
    engine_size: Annotated[str | None, Form(alias="engineSize")] = None,
    mileage: OptionalForm = None,
    safety_rating: Annotated[str | None, Form(alias="safetyRating")] = None,
    warranty: OptionalForm = None,
    seater: OptionalForm = None,
    size: OptionalForm = None,
    fuel_tank: Annotated[str | None, Form(alias="fuelTank")] = None,
    product_pictures: Annotated[
        list[UploadFile] | None,
        File(alias="productPictures", description="Car pictures, in display order"),
    ] = None,
    user: AuthUser = Depends(require_admin),
):
    """
    Create a car.

    Multipart form; every field is required and checked in order, so the
    response names the first one missing. Pictures are optional.
    """
    fields = {
        "name": name,
        "description": description,
        "brand": brand,
        "price": price,
        "fuelType": fuel_type,
        "transmission": transmission,
        "engineSize": engine_size,
        "mileage": mileage,
        "safetyRating": safety_rating,
        "warranty": warranty,
        "seater": seater,
        "size": size,
        "fuelTank": fuel_tank,
    }
    images = await read_uploads(product_pictures)
    car = service.create_car(fields, images)

    return {
        "success": True,
        "message": "Car created successfully",
        "car": _car_out(car),
    }


@router.put("/{car_id}")
async def update_car(
    car_id: Annotated[str, Path(description="Car id")],
    payload: CarUpdate,
    service: CarServiceDep,
    user: AuthUser = Depends(require_admin),
):
    """Update the provided fields of a car."""
    car = service.update_car(car_id, payload.model_dump(exclude_unset=True))

    return {
        "success": True,
        "message": "Car updated successfully",
        "car": _car_out(car),
    }


@router.delete("/{car_id}")
async def delete_car(
    car_id: Annotated[str, Path(description="Car id")],
    service: CarServiceDep,
    user: AuthUser = Depends(require_admin),
):
    """Delete a car. Its pictures are kept."""
    service.delete_car(car_id)

    return {
        "success": True,
        "message": "Car deleted successfully",
    }
