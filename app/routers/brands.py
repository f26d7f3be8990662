# =============================================================================
# app/routers/brands.py - Brand Endpoints
# =============================================================================
# Reads are public; create / update / delete require an admin token.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, Path, UploadFile

from app.auth import AuthUser, require_admin
from app.dependencies import BrandServiceDep
from app.uploads import read_upload
from core.models.catalog import BrandResponse, BrandUpdate

router = APIRouter()


def _brand_out(brand: dict) -> dict:
    return BrandResponse.model_validate(brand).to_api()


@router.get("")
async def list_brands(service: BrandServiceDep):
    """List all brands with their cars."""
    brands = service.list_brands()

    return {
        "success": True,
        "totalBrand": len(brands),
        "message": "All Brands",
        "brands": [_brand_out(b) for b in brands],
    }


@router.get("/{slug}")
async def get_brand(
    slug: Annotated[str, Path(description="Brand slug")],
    service: BrandServiceDep,
):
    """Get one brand, with its cars, by slug."""
    brand = service.get_brand_by_slug(slug)

    return {
        "success": True,
        "message": "Brand Found",
        "brand": _brand_out(brand),
    }


@router.post("", status_code=201)
async def create_brand(
    service: BrandServiceDep,
    name: Annotated[str | None, Form(description="Brand display name")] = None,
    brand_pictures: Annotated[
        UploadFile | None,
        File(alias="brandPictures", description="Brand logo / picture"),
    ] = None,
    user: AuthUser = Depends(require_admin),
):
    """
    Create a brand.

    Multipart form with `name` and a `brandPictures` file. A duplicate name
    answers 200 with success=false.
    """
    image = await read_upload(brand_pictures)
    brand = service.create_brand(name, image)

    return {
        "success": True,
        "message": "Brand Created Successfully",
        "brand": _brand_out(brand),
    }


@router.put("/{brand_id}")
async def update_brand(
    brand_id: Annotated[str, Path(description="Brand id")],
    payload: BrandUpdate,
    service: BrandServiceDep,
    user: AuthUser = Depends(require_admin),
):
    """Rename a brand; the slug follows the new name."""
    brand = service.update_brand(brand_id, payload.name)

    return {
        "success": True,
        "message": "Brand Updated Successfully",
        "brand": _brand_out(brand),
    }


@router.delete("/{brand_id}")
async def delete_brand(
    brand_id: Annotated[str, Path(description="Brand id")],
    service: BrandServiceDep,
    user: AuthUser = Depends(require_admin),
):
    """Delete a brand. Its cars are kept."""
    service.delete_brand(brand_id)

    return {
        "success": True,
        "message": "Brand Deleted Successfully",
    }
